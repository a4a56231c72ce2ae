# -*- coding: utf-8 -*-
"""
src/fontpair/providers/svg_provider.py

Outline provider built around an SVG path intermediate.

Each glyph is drawn into an SVG `d` string and parsed back with svgpathtools,
so the analysis sees exactly what an SVG renderer of the glyph would see
(including the closing edge of every contour). Text metrics come from
FreeType through Pillow, which needs the font on disk: the handle writes a
plain sfnt scratch file on load and deletes it when closed.
"""

import io
import logging
from pathlib import Path
from typing import Dict, List

from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.pens.transformPen import TransformPen
from fontTools.ttLib import TTFont
from PIL import ImageFont
from svgpathtools import CubicBezier, Line, QuadraticBezier, parse_path

from ..exceptions import FontLoadError, OutlineError
from ..utils.scratch_files import remove_scratch_file, write_scratch_file
from .base import GlyphOutlineProvider, PathCommand, PathKind, TextMetrics
from .fonttools_provider import FontToolsHandle, open_ttfont

logger = logging.getLogger(__name__)

# Points closer than this are treated as the same pen position.
CONTINUITY_EPSILON = 1e-9


def _sfnt_bytes(data: bytes, font: TTFont) -> bytes:
    """Plain TrueType/OpenType bytes for FreeType; WOFF/WOFF2 are decoded."""
    if font.flavor is None:
        return data
    decoded = TTFont(io.BytesIO(data))
    decoded.flavor = None
    buf = io.BytesIO()
    decoded.save(buf)
    decoded.close()
    return buf.getvalue()


def _point(z: complex):
    return (z.real, z.imag)


class SvgFontHandle(FontToolsHandle):
    """TTFont handle that also owns a scratch sfnt file for Pillow."""

    def __init__(self, font: TTFont, sfnt_path: Path):
        super().__init__(font)
        self.sfnt_path = sfnt_path
        self._pil_fonts: Dict[int, ImageFont.FreeTypeFont] = {}

    def pil_font(self, font_size: float) -> ImageFont.FreeTypeFont:
        size = max(1, int(round(font_size)))
        if size not in self._pil_fonts:
            self._pil_fonts[size] = ImageFont.truetype(str(self.sfnt_path), size)
        return self._pil_fonts[size]

    def close(self):
        self._pil_fonts.clear()
        try:
            super().close()
        finally:
            remove_scratch_file(self.sfnt_path)


class SvgPathProvider(GlyphOutlineProvider):
    """Outlines via SVG path strings, metrics via Pillow/FreeType."""

    name = "svg"

    def load_font(self, data: bytes) -> SvgFontHandle:
        font = open_ttfont(data)
        sfnt_path = None
        handle = None
        try:
            try:
                sfnt = _sfnt_bytes(data, font)
            except Exception as e:
                raise FontLoadError(f"Could not decode web font: {e}") from e

            sfnt_path = write_scratch_file(sfnt, suffix=".otf" if "CFF " in font else ".ttf")
            handle = SvgFontHandle(font, sfnt_path)
            try:
                handle.pil_font(12)
            except OSError as e:
                raise FontLoadError(f"FreeType could not open font: {e}") from e
        except BaseException:
            # Release whatever was acquired before the failure.
            if handle is not None:
                handle.close()
            else:
                font.close()
                if sfnt_path is not None:
                    remove_scratch_file(sfnt_path)
            raise
        return handle

    def get_outline(self, handle: SvgFontHandle, char: str, font_size: float) -> List[PathCommand]:
        name = handle.glyph_name(char)
        scale = handle.scale(font_size)
        pen = SVGPathPen(handle.glyph_set)
        try:
            handle.glyph_set[name].draw(TransformPen(pen, (scale, 0, 0, scale, 0, 0)))
            d = pen.getCommands()
            path = parse_path(d) if d else []
        except Exception as e:
            raise OutlineError(f"Could not build SVG path for {char!r}: {e}") from e

        commands: List[PathCommand] = []
        current = None
        for segment in path:
            if current is None or abs(segment.start - current) > CONTINUITY_EPSILON:
                commands.append(PathCommand(PathKind.MOVE, (_point(segment.start),)))
            if isinstance(segment, Line):
                commands.append(PathCommand(PathKind.LINE, (_point(segment.end),)))
            elif isinstance(segment, CubicBezier):
                commands.append(PathCommand(
                    PathKind.CUBIC,
                    (_point(segment.control1), _point(segment.control2), _point(segment.end)),
                ))
            elif isinstance(segment, QuadraticBezier):
                commands.append(PathCommand(
                    PathKind.QUADRATIC, (_point(segment.control), _point(segment.end))
                ))
            else:
                raise OutlineError(f"Unsupported SVG segment {type(segment).__name__} in {char!r}")
            current = segment.end
        return commands

    def get_text_metrics(self, handle: SvgFontHandle, text: str, font_size: float) -> TextMetrics:
        """FreeType advances (kerned by the layout engine) and ink bounding box."""
        pil_font = handle.pil_font(font_size)
        left, top, right, bottom = pil_font.getbbox(text)
        return TextMetrics(width=float(pil_font.getlength(text)), height=float(bottom - top))
