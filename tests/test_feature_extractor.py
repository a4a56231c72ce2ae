import pytest

from fontpair.core.feature_extractor import FontMetrics, aggregate_contrast, extract_font_metrics, measure_font
from fontpair.exceptions import FontLoadError, GlyphNotFoundError, OutlineError
from fontpair.providers import FontToolsProvider
from fontpair.providers.base import FontHandle, GlyphOutlineProvider, PathCommand, PathKind, TextMetrics


def _box(x0, y0, x1, y1):
    return [
        PathCommand(PathKind.MOVE, ((x0, y0),)),
        PathCommand(PathKind.LINE, ((x1, y0),)),
        PathCommand(PathKind.LINE, ((x1, y1),)),
        PathCommand(PathKind.LINE, ((x0, y1),)),
        PathCommand(PathKind.LINE, ((x0, y0),)),
    ]


class FakeProvider(GlyphOutlineProvider):
    """Serves fixed outlines; characters not in `outlines` are missing."""

    name = "fake"

    def __init__(self, outlines=None, failing=()):
        self.outlines = outlines or {}
        self.failing = set(failing)
        self.closed = 0

    def load_font(self, data):
        if data == b"broken":
            raise FontLoadError("broken font")
        provider = self

        class Handle(FontHandle):
            def close(self):
                provider.closed += 1

        return Handle()

    def get_outline(self, handle, char, font_size):
        if char in self.failing:
            raise OutlineError(f"cannot draw {char}")
        if char not in self.outlines:
            raise GlyphNotFoundError(char)
        return self.outlines[char]

    def get_text_metrics(self, handle, text, font_size):
        if text == "x":
            return TextMetrics(width=150.0, height=150.0)
        if text == "H":
            return TextMetrics(width=210.0, height=210.0)
        return TextMetrics(width=150.0 * len(text), height=210.0)


def test_feature_vector_is_derived_from_fields():
    metrics = FontMetrics(x_height=0.5, cap_height=0.7, stroke_contrast=2.0, avg_char_width=0.45)
    assert metrics.feature_vector == (0.5, 0.7, 2.0, 0.45)


def test_feature_vector_maps_missing_contrast_to_zero():
    metrics = FontMetrics(x_height=0.5, cap_height=0.7, stroke_contrast=None, avg_char_width=0.45)
    assert len(metrics.feature_vector) == 4
    assert metrics.feature_vector[2] == 0.0


def test_to_dict_uses_json_names():
    metrics = FontMetrics(x_height=0.5, cap_height=0.7, stroke_contrast=None, avg_char_width=0.45)
    assert metrics.to_dict() == {
        "xHeight": 0.5,
        "capHeight": 0.7,
        "strokeContrast": None,
        "avgCharWidth": 0.45,
        "featureVector": [0.5, 0.7, 0.0, 0.45],
    }


def test_aggregate_contrast_empty():
    assert aggregate_contrast([]) is None


def test_aggregate_contrast_averages():
    assert aggregate_contrast([2.0, 1.0, 3.0]) == pytest.approx(2.0)


def test_aggregate_contrast_drops_outliers():
    # middle of the sorted list is 2.0, so 9.5 > 6.0 is dropped
    assert aggregate_contrast([1.0, 1.5, 2.0, 9.5]) == pytest.approx(1.5)


def test_aggregate_contrast_uses_upper_middle_for_even_counts():
    # sorted [1, 4]: middle is 4, so nothing is above 12
    assert aggregate_contrast([4.0, 1.0]) == pytest.approx(2.5)


def test_aggregate_contrast_falls_back_to_median_when_all_dropped():
    assert aggregate_contrast([2.0], outlier_factor=0.1) == 2.0


def test_measure_font_with_fake_provider():
    provider = FakeProvider(outlines={"O": _box(0, 0, 30, 60) + _box(100, 0, 130, 60)})
    metrics = extract_font_metrics(b"data", provider)
    assert metrics.x_height == pytest.approx(0.5)
    assert metrics.cap_height == pytest.approx(0.7)
    assert metrics.avg_char_width == pytest.approx(0.5)
    assert metrics.stroke_contrast == pytest.approx(2.0)
    assert provider.closed == 1


def test_failing_glyphs_are_skipped():
    outlines = {
        "O": _box(0, 0, 30, 60) + _box(100, 0, 130, 60),
        "B": _box(0, 0, 30, 90) + _box(100, 0, 130, 90),
    }
    provider = FakeProvider(outlines=outlines, failing={"H", "Q"})
    metrics = extract_font_metrics(b"data", provider)
    assert metrics.stroke_contrast == pytest.approx(2.5)


def test_no_measurable_glyph_gives_null_contrast():
    metrics = extract_font_metrics(b"data", FakeProvider())
    assert metrics.stroke_contrast is None
    assert metrics.feature_vector[2] == 0.0


def test_load_failure_propagates():
    provider = FakeProvider()
    with pytest.raises(FontLoadError):
        extract_font_metrics(b"broken", provider)
    assert provider.closed == 0


def test_handle_is_closed_when_measuring_fails():
    class ExplodingProvider(FakeProvider):
        def get_text_metrics(self, handle, text, font_size):
            raise RuntimeError("boom")

    provider = ExplodingProvider()
    with pytest.raises(RuntimeError):
        extract_font_metrics(b"data", provider)
    assert provider.closed == 1


def test_extract_real_font(regular_font):
    metrics = extract_font_metrics(regular_font)
    assert metrics.x_height == pytest.approx(0.5)
    assert metrics.cap_height == pytest.approx(0.7)
    assert metrics.avg_char_width == pytest.approx(0.5)
    assert metrics.stroke_contrast == pytest.approx(2.0)
    assert metrics.feature_vector == pytest.approx((0.5, 0.7, 2.0, 0.5))


def test_extract_wide_font(wide_font):
    metrics = extract_font_metrics(wide_font, FontToolsProvider())
    assert metrics.x_height == pytest.approx(0.4)
    assert metrics.cap_height == pytest.approx(0.65)
    assert metrics.avg_char_width == pytest.approx(0.6)
    assert metrics.stroke_contrast == pytest.approx(3.0)


def test_flat_font_has_no_contrast(flat_font):
    metrics = extract_font_metrics(flat_font)
    assert metrics.stroke_contrast is None


def test_values_are_non_negative(regular_font, flat_font):
    for data in (regular_font, flat_font):
        metrics = extract_font_metrics(data)
        assert metrics.x_height >= 0
        assert metrics.cap_height >= 0
        assert metrics.avg_char_width >= 0
        if metrics.stroke_contrast is not None:
            assert 1.0 <= metrics.stroke_contrast <= 10.0


def test_garbage_bytes_raise_font_load_error(not_a_font):
    with pytest.raises(FontLoadError):
        extract_font_metrics(not_a_font)
