"""
FontPair Application Package.

Measures typographic properties of font files (x-height, cap-height, stroke
contrast, average character width) from their glyph outlines and scores how
well two or three fonts pair.
"""

__version__ = "0.1.0"

from .core import (
    FontMetrics,
    PairResult,
    TrioResult,
    analyze_fonts,
    compatibility_score,
    extract_font_metrics,
)
from .exceptions import FontLoadError, GlyphNotFoundError, InputValidationError

__all__ = [
    "FontLoadError",
    "FontMetrics",
    "GlyphNotFoundError",
    "InputValidationError",
    "PairResult",
    "TrioResult",
    "analyze_fonts",
    "compatibility_score",
    "extract_font_metrics",
]
