# -*- coding: utf-8 -*-
"""
src/fontpair/exceptions.py

Exception types shared by the analysis core, the outline providers and the
HTTP/CLI front ends.
"""


class FontPairError(Exception):
    """Base class for all FontPair errors."""


class FontLoadError(FontPairError):
    """The supplied bytes could not be parsed into a usable font."""


class OutlineError(FontPairError):
    """A single glyph outline could not be produced."""


class GlyphNotFoundError(OutlineError):
    """The font has no glyph mapped to the requested character."""

    def __init__(self, char: str):
        super().__init__(f"No glyph for character {char!r}")
        self.char = char


class InputValidationError(FontPairError):
    """The caller supplied an invalid set of fonts (client-side error)."""
