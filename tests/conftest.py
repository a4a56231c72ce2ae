"""
Shared fixtures.

Fonts are generated in memory with fontTools' FontBuilder so the tests carry
no binary fixtures. Units per em is 1000, so at the nominal analysis size of
300 every design unit is 0.3 px:

- "x" is a box `x_height` units tall, "H" two thin stems `cap_height` tall;
- every lowercase letter advances `advance` units;
- the contrast glyphs (O B D G Q o e g p q) are `blocks` boxes of
  `block_width` x `block_height`, so each one measures
  block_height / block_width as its stroke contrast;
- with `curved=True` they are instead an elliptical ring drawn with
  quadratic curves (TrueType) or cubic curves (`cff=True`).
"""

import io
import os
import string
import tempfile

# Keep the configuration singleton away from the real home directory.
os.environ.setdefault("FONTPAIR_HOME", tempfile.mkdtemp(prefix="fontpair-test-"))

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.boundsPen import ControlBoundsPen
from fontTools.pens.t2CharStringPen import T2CharStringPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTFont, newTable
from fontTools.ttLib.tables._k_e_r_n import KernTable_format_0

CONTRAST_CHARS = set("OBDGQoegpq")
UPPERCASE = ["H", "O", "B", "D", "G", "Q"]

# Bezier handle length for a quarter ellipse drawn with one cubic.
KAPPA = 0.5523


def _draw_box(pen, x0, y0, x1, y1):
    pen.moveTo((x0, y0))
    pen.lineTo((x1, y0))
    pen.lineTo((x1, y1))
    pen.lineTo((x0, y1))
    pen.closePath()


def _draw_ellipse(pen, cx, cy, rx, ry, cubic, clockwise=False):
    """Four quarter arcs starting at the rightmost point."""
    sy = -1 if clockwise else 1
    corners = [(cx + rx, cy), (cx, cy + sy * ry), (cx - rx, cy), (cx, cy - sy * ry)]
    pen.moveTo(corners[0])
    for i, (x0, y0) in enumerate(corners):
        x1, y1 = corners[(i + 1) % 4]
        # The corner of the bounding box between two neighbouring extrema.
        if x0 == cx:
            corner = (x1, y0)
        else:
            corner = (x0, y1)
        if cubic:
            c1 = (x0 + (corner[0] - x0) * KAPPA, y0 + (corner[1] - y0) * KAPPA)
            c2 = (x1 + (corner[0] - x1) * KAPPA, y1 + (corner[1] - y1) * KAPPA)
            pen.curveTo(c1, c2, (x1, y1))
        else:
            pen.qCurveTo(corner, (x1, y1))
    pen.closePath()


def build_font(
    x_height=500,
    cap_height=700,
    advance=500,
    block_width=100,
    block_height=200,
    family="Test Sans",
    blocks=2,
    curved=False,
    cff=False,
    kerning=None,
    features=None,
):
    """
    Returns sfnt bytes for a synthetic font with the given proportions.

    `kerning` is a {(left, right): value} dict written as a legacy `kern`
    table; `features` is feature file text compiled into GSUB/GPOS.
    """
    lowercase = list(string.ascii_lowercase)
    glyph_order = [".notdef", "space"] + UPPERCASE + lowercase
    cmap = {ord(ch): ch for ch in UPPERCASE + lowercase}
    cmap[ord(" ")] = "space"

    def draw(pen, name):
        if name == ".notdef":
            _draw_box(pen, 50, 0, 450, 700)
        elif name == "space":
            pass
        elif name == "H":
            _draw_box(pen, 50, 0, 70, cap_height)
            _draw_box(pen, 400, 0, 420, cap_height)
        elif name in CONTRAST_CHARS and curved:
            _draw_ellipse(pen, 300, 350, 250, 350, cff)
            _draw_ellipse(pen, 300, 350, 170, 300, cff, clockwise=True)
        elif name in CONTRAST_CHARS:
            for i in range(blocks):
                x0 = 50 + 200 * i
                _draw_box(pen, x0, 0, x0 + block_width, block_height)
        else:
            _draw_box(pen, 50, 0, max(60, advance - 50), x_height)

    metrics = {}
    for name in glyph_order:
        bounds_pen = ControlBoundsPen(None)
        draw(bounds_pen, name)
        # hmtx lsb must match the outline's xMin or fontTools shifts the glyph.
        lsb = int(round(bounds_pen.bounds[0])) if bounds_pen.bounds else 0
        metrics[name] = (advance, lsb)

    fb = FontBuilder(1000, isTTF=not cff)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(cmap)
    if cff:
        charstrings = {}
        for name in glyph_order:
            pen = T2CharStringPen(advance, None)
            draw(pen, name)
            charstrings[name] = pen.getCharString()
        ps_name = family.replace(" ", "")
        fb.setupCFF(ps_name, {"FullName": family}, charstrings, {})
    else:
        glyphs = {}
        for name in glyph_order:
            pen = TTGlyphPen(None)
            draw(pen, name)
            glyphs[name] = pen.glyph()
        fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics(metrics)
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family, "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    if kerning:
        fb.font["kern"] = _kern_table(kerning)
    if features:
        fb.addOpenTypeFeatures(features)
    buf = io.BytesIO()
    fb.save(buf)
    return buf.getvalue()


def _kern_table(pairs):
    subtable = KernTable_format_0()
    subtable.version = 0
    subtable.format = 0
    subtable.coverage = 1
    subtable.kernTable = dict(pairs)
    table = newTable("kern")
    table.version = 0
    table.kernTables = [subtable]
    return table


def to_flavor(data, flavor):
    """Re-wraps TTF bytes as WOFF or WOFF2."""
    font = TTFont(io.BytesIO(data))
    font.flavor = flavor
    buf = io.BytesIO()
    font.save(buf)
    return buf.getvalue()


@pytest.fixture
def font_factory():
    return build_font


@pytest.fixture(scope="session")
def regular_font():
    # x-height 0.5, cap-height 0.7, contrast 2.0, width 0.5
    return build_font()


@pytest.fixture(scope="session")
def wide_font():
    # x-height 0.4, cap-height 0.65, contrast 3.0, width 0.6
    return build_font(x_height=400, cap_height=650, advance=600, block_height=300, family="Test Wide")


@pytest.fixture(scope="session")
def flat_font():
    # Contrast boxes are only 6 px tall at 300 px, so no vertical segment survives.
    return build_font(block_height=20, family="Test Flat")


@pytest.fixture(scope="session")
def woff_font(regular_font):
    return to_flavor(regular_font, "woff")


@pytest.fixture
def not_a_font():
    return b"This is definitely not an OpenType font." * 8


@pytest.fixture(scope="session")
def woff2_font(regular_font):
    pytest.importorskip("brotli")
    return to_flavor(regular_font, "woff2")


@pytest.fixture(scope="session")
def curved_font():
    return build_font(curved=True, family="Test Round")


@pytest.fixture(scope="session")
def cff_font():
    return build_font(curved=True, cff=True, family="Test Round CFF")
