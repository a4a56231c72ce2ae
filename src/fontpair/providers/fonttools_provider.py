# -*- coding: utf-8 -*-
"""
src/fontpair/providers/fonttools_provider.py

Outline provider that reads glyphs directly from the font tables with
fontTools. Works on TTF/OTF and, through fontTools' WOFF/WOFF2 readers, on
web fonts as well.
"""

import io
import logging
from typing import Dict, List, Optional, Tuple

from fontTools.pens.basePen import BasePen
from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.transformPen import TransformPen
from fontTools.ttLib import TTFont
from fontTools.ttLib.tables import otTables

from ..exceptions import FontLoadError, GlyphNotFoundError, OutlineError
from .base import FontHandle, GlyphOutlineProvider, PathCommand, PathKind, TextMetrics

logger = logging.getLogger(__name__)

GPOS_EXTENSION_LOOKUP = 9


def open_ttfont(data: bytes) -> TTFont:
    """
    Parses font bytes into a TTFont, forcing the tables every measurement needs.

    Raises:
        FontLoadError: If the data is empty or not a readable font.
    """
    if not data:
        raise FontLoadError("Font data is empty")
    try:
        font = TTFont(io.BytesIO(data))
        # TTFont decompiles lazily, so broken tables only surface on access.
        font["head"]
        font["hmtx"]
        font.getGlyphSet()
        cmap = font.getBestCmap()
    except Exception as e:
        raise FontLoadError(f"Could not load font: {e}") from e
    if not cmap:
        font.close()
        raise FontLoadError("Font has no usable Unicode character map")
    return font


class _CommandPen(BasePen):
    """
    Records single-segment drawing calls as PathCommand objects.

    A closed contour whose last point is not its start gets an explicit
    closing LINE, so the analyzer sees every edge of the outline.
    """

    def __init__(self, glyph_set):
        super().__init__(glyph_set)
        self.commands: List[PathCommand] = []
        self._contour_start = None

    def _moveTo(self, pt):
        self._contour_start = tuple(pt)
        self.commands.append(PathCommand(PathKind.MOVE, (self._contour_start,)))

    def _lineTo(self, pt):
        self.commands.append(PathCommand(PathKind.LINE, (tuple(pt),)))

    def _curveToOne(self, pt1, pt2, pt3):
        self.commands.append(PathCommand(PathKind.CUBIC, (tuple(pt1), tuple(pt2), tuple(pt3))))

    def _qCurveToOne(self, pt1, pt2):
        self.commands.append(PathCommand(PathKind.QUADRATIC, (tuple(pt1), tuple(pt2))))

    def _closePath(self):
        current = self._getCurrentPoint()
        if self._contour_start is not None and current is not None and tuple(current) != self._contour_start:
            self.commands.append(PathCommand(PathKind.LINE, (self._contour_start,)))
        self._contour_start = None

    def _endPath(self):
        self._contour_start = None


def _x_advance(value_record) -> float:
    if value_record is None:
        return 0
    return getattr(value_record, "XAdvance", 0) or 0


class PairKerning:
    """
    Horizontal pair kerning in design units.

    Read from the GPOS `kern` feature (pair adjustment lookups, glyph pairs
    and class pairs). Fonts without GPOS kerning fall back to format 0
    subtables of the legacy `kern` table. Contextual kerning is not applied.
    """

    def __init__(self, font: TTFont):
        self.pairs: Dict[Tuple[str, str], float] = {}
        self.class_subtables = []
        if "GPOS" in font:
            self._read_gpos(font["GPOS"].table)
        if not self.pairs and not self.class_subtables and "kern" in font:
            self._read_kern_table(font["kern"])

    def _read_gpos(self, table):
        if not table.FeatureList or not table.LookupList:
            return
        indices = sorted({
            index
            for record in table.FeatureList.FeatureRecord
            if record.FeatureTag == "kern"
            for index in record.Feature.LookupListIndex
        })
        for index in indices:
            lookup = table.LookupList.Lookup[index]
            for subtable in lookup.SubTable:
                if lookup.LookupType == GPOS_EXTENSION_LOOKUP:
                    subtable = subtable.ExtSubTable
                if not isinstance(subtable, otTables.PairPos):
                    continue
                if subtable.Format == 1:
                    for first, pair_set in zip(subtable.Coverage.glyphs, subtable.PairSet):
                        for record in pair_set.PairValueRecord:
                            # The first subtable that covers a pair wins.
                            self.pairs.setdefault((first, record.SecondGlyph), _x_advance(record.Value1))
                elif subtable.Format == 2:
                    self.class_subtables.append((
                        set(subtable.Coverage.glyphs),
                        subtable.ClassDef1.classDefs if subtable.ClassDef1 else {},
                        subtable.ClassDef2.classDefs if subtable.ClassDef2 else {},
                        subtable.Class1Record,
                    ))

    def _read_kern_table(self, table):
        for subtable in getattr(table, "kernTables", []):
            if getattr(subtable, "format", None) != 0 or not hasattr(subtable, "kernTable"):
                continue
            for pair, value in subtable.kernTable.items():
                self.pairs[pair] = self.pairs.get(pair, 0) + value

    def __bool__(self):
        return bool(self.pairs or self.class_subtables)

    def get(self, left: str, right: str) -> float:
        if (left, right) in self.pairs:
            return self.pairs[(left, right)]
        for coverage, class_def1, class_def2, class1_records in self.class_subtables:
            if left in coverage:
                record = class1_records[class_def1.get(left, 0)].Class2Record[class_def2.get(right, 0)]
                return _x_advance(record.Value1)
        return 0


class FontToolsHandle(FontHandle):
    """A TTFont plus the lookups every call needs."""

    def __init__(self, font: TTFont):
        self.font = font
        self.upm = int(font["head"].unitsPerEm)
        self.cmap: Dict[int, str] = dict(font.getBestCmap())
        self.glyph_set = font.getGlyphSet()
        self.fallback_glyph = font.getGlyphOrder()[0]  # .notdef by convention
        self._kerning: Optional[PairKerning] = None

    @property
    def kerning(self) -> PairKerning:
        if self._kerning is None:
            self._kerning = PairKerning(self.font)
        return self._kerning

    def glyph_name(self, char: str) -> str:
        name = self.cmap.get(ord(char))
        if not name or name not in self.glyph_set:
            raise GlyphNotFoundError(char)
        return name

    def scale(self, font_size: float) -> float:
        return font_size / self.upm

    def close(self):
        self.font.close()


class FontToolsProvider(GlyphOutlineProvider):
    """Draws glyph outlines with fontTools pens."""

    name = "fonttools"

    def load_font(self, data: bytes) -> FontToolsHandle:
        return FontToolsHandle(open_ttfont(data))

    def get_outline(self, handle: FontToolsHandle, char: str, font_size: float) -> List[PathCommand]:
        name = handle.glyph_name(char)
        scale = handle.scale(font_size)
        pen = _CommandPen(handle.glyph_set)
        try:
            handle.glyph_set[name].draw(TransformPen(pen, (scale, 0, 0, scale, 0, 0)))
        except Exception as e:
            raise OutlineError(f"Could not draw glyph '{name}' for {char!r}: {e}") from e
        return pen.commands

    def get_text_metrics(self, handle: FontToolsHandle, text: str, font_size: float) -> TextMetrics:
        """Advance widths plus pair kerning; height of the inked bounding box."""
        hmtx = handle.font["hmtx"]
        kerning = handle.kerning
        width = 0.0
        y_min: Optional[float] = None
        y_max: Optional[float] = None
        previous = None
        for char in text:
            name = handle.cmap.get(ord(char), handle.fallback_glyph)
            if name not in hmtx.metrics:
                name = handle.fallback_glyph
            advance, _ = hmtx[name]
            width += advance
            if previous is not None and kerning:
                width += kerning.get(previous, name)
            previous = name
            bounds = _glyph_bounds(handle, name)
            if bounds is None:
                continue
            _, lo, _, hi = bounds
            y_min = lo if y_min is None else min(y_min, lo)
            y_max = hi if y_max is None else max(y_max, hi)

        scale = handle.scale(font_size)
        height = (y_max - y_min) if y_min is not None else 0.0
        return TextMetrics(width=width * scale, height=height * scale)


def _glyph_bounds(handle: FontToolsHandle, glyph_name: str) -> Optional[Tuple[float, float, float, float]]:
    pen = BoundsPen(handle.glyph_set)
    try:
        handle.glyph_set[glyph_name].draw(pen)
    except Exception as e:
        logger.warning(f"Could not measure bounds of glyph '{glyph_name}': {e}")
        return None
    return pen.bounds
