# -*- coding: utf-8 -*-
"""
Glyph outline providers for FontPair.

Two interchangeable backends implement `GlyphOutlineProvider`:

- `fonttools`: draws outlines straight from the font tables with fontTools pens.
- `svg`: goes through an SVG path string (parsed with svgpathtools) and
  measures text with Pillow's FreeType binding.
"""

from typing import Dict, Type

from .base import FontHandle, GlyphOutlineProvider, PathCommand, PathKind, TextMetrics
from .fonttools_provider import FontToolsProvider
from .svg_provider import SvgPathProvider

_PROVIDERS: Dict[str, Type[GlyphOutlineProvider]] = {
    FontToolsProvider.name: FontToolsProvider,
    SvgPathProvider.name: SvgPathProvider,
}


def available_providers():
    """Names accepted by get_provider()."""
    return sorted(_PROVIDERS)


def get_provider(name: str = "fonttools") -> GlyphOutlineProvider:
    """
    Instantiate a provider backend by name.

    Raises:
        ValueError: If no backend is registered under that name.
    """
    try:
        provider_class = _PROVIDERS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown outline provider '{name}'. Available: {', '.join(available_providers())}"
        ) from None
    return provider_class()


__all__ = [
    "FontHandle",
    "FontToolsProvider",
    "GlyphOutlineProvider",
    "PathCommand",
    "PathKind",
    "SvgPathProvider",
    "TextMetrics",
    "available_providers",
    "get_provider",
]
