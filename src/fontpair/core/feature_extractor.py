# -*- coding: utf-8 -*-
"""
src/fontpair/core/feature_extractor.py

Turns a font file into a `FontMetrics` record: x-height, cap-height, stroke
contrast and average character width, all normalized by the nominal
measurement size so fonts with different units-per-em compare directly.

The feature vector derived from a record is the "fingerprint" used by the
compatibility scorer for its distance term.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import (
    CAP_HEIGHT_CHAR,
    CONTRAST_PROBE_CHARS,
    DEFAULT_ANALYSIS_SETTINGS,
    WIDTH_SAMPLE_TEXT,
    X_HEIGHT_CHAR,
    AnalysisSettings,
)
from ..exceptions import OutlineError
from ..providers import FontToolsProvider
from ..providers.base import FontHandle, GlyphOutlineProvider
from .stroke_contrast import analyze_stroke_contrast

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontMetrics:
    """Measurements of one font. All values are ratios of the nominal size."""

    x_height: float
    cap_height: float
    stroke_contrast: Optional[float]  # None when no probe glyph could be measured
    avg_char_width: float

    @property
    def feature_vector(self) -> Tuple[float, float, float, float]:
        """[x_height, cap_height, stroke_contrast or 0, avg_char_width]"""
        contrast = self.stroke_contrast if self.stroke_contrast is not None else 0.0
        return (self.x_height, self.cap_height, contrast, self.avg_char_width)

    def to_dict(self) -> Dict[str, object]:
        return {
            "xHeight": self.x_height,
            "capHeight": self.cap_height,
            "strokeContrast": self.stroke_contrast,
            "avgCharWidth": self.avg_char_width,
            "featureVector": list(self.feature_vector),
        }


def aggregate_contrast(values: Sequence[float], outlier_factor: float = 3.0) -> Optional[float]:
    """
    Combines per-glyph contrast values into one font-level value.

    Values above outlier_factor x median are treated as glyphs that confused
    the sampler and dropped; the rest are averaged. The median is the middle
    element of the sorted list (upper middle for an even count).

    Returns:
        The averaged contrast, the median if every value was an outlier, or
        None when there are no values at all.
    """
    if not values:
        return None
    ordered = sorted(values)
    middle = ordered[len(ordered) // 2]
    kept = [v for v in ordered if v <= middle * outlier_factor]
    if not kept:
        return middle
    return sum(kept) / len(kept)


def measure_font(
    provider: GlyphOutlineProvider,
    handle: FontHandle,
    settings: AnalysisSettings = DEFAULT_ANALYSIS_SETTINGS,
) -> FontMetrics:
    """Measures an already loaded font. See extract_font_metrics()."""
    size = settings.font_size

    x_height = provider.get_text_metrics(handle, X_HEIGHT_CHAR, size).height / size
    cap_height = provider.get_text_metrics(handle, CAP_HEIGHT_CHAR, size).height / size
    sample = provider.get_text_metrics(handle, WIDTH_SAMPLE_TEXT, size)
    avg_char_width = sample.width / size / len(WIDTH_SAMPLE_TEXT)

    contrasts: List[float] = []
    for char in CONTRAST_PROBE_CHARS:
        try:
            outline = provider.get_outline(handle, char, size)
        except OutlineError as e:
            # A missing probe glyph only means fewer samples.
            logger.debug(f"Skipping contrast probe {char!r}: {e}")
            continue
        contrast = analyze_stroke_contrast(outline, settings)
        if contrast is not None:
            contrasts.append(contrast)

    stroke_contrast = aggregate_contrast(contrasts, settings.outlier_factor)
    logger.debug(
        f"Measured x-height={x_height:.4f} cap-height={cap_height:.4f} "
        f"contrast={stroke_contrast} ({len(contrasts)} probes) width={avg_char_width:.4f}"
    )
    return FontMetrics(
        x_height=x_height,
        cap_height=cap_height,
        stroke_contrast=stroke_contrast,
        avg_char_width=avg_char_width,
    )


def extract_font_metrics(
    data: bytes,
    provider: GlyphOutlineProvider = None,
    settings: AnalysisSettings = DEFAULT_ANALYSIS_SETTINGS,
) -> FontMetrics:
    """
    Computes the metrics record for one font file.

    Args:
        data (bytes): Raw font file contents (TTF, OTF, WOFF or WOFF2).
        provider (GlyphOutlineProvider, optional): Outline backend. Defaults
            to the fontTools backend.
        settings (AnalysisSettings): Nominal size and analysis constants.

    Returns:
        FontMetrics: The measured record.

    Raises:
        FontLoadError: If the font cannot be loaded. No partial record is
            produced.
    """
    if provider is None:
        provider = FontToolsProvider()
    with provider.load_font(data) as handle:
        return measure_font(provider, handle, settings)
