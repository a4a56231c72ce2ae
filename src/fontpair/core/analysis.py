# -*- coding: utf-8 -*-
"""
src/fontpair/core/analysis.py

End-to-end analysis of one request: two or three font files in, one
CompatibilityResult out.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from ..config import DEFAULT_ANALYSIS_SETTINGS, DEFAULT_SCORING_WEIGHTS, AnalysisSettings, ScoringWeights
from ..exceptions import InputValidationError
from ..providers import FontToolsProvider
from ..providers.base import GlyphOutlineProvider
from .compatibility import CompatibilityResult, score_fonts
from .feature_extractor import FontMetrics, extract_font_metrics

logger = logging.getLogger(__name__)


def _present_fonts(fonts: Sequence[Optional[bytes]]) -> List[bytes]:
    if len(fonts) < 2 or not fonts[0] or not fonts[1]:
        raise InputValidationError("Font A and Font B are required")
    if len(fonts) > 3:
        raise InputValidationError(f"At most three fonts can be compared, got {len(fonts)}")
    # An empty third slot means a two-font request.
    return [data for data in fonts if data]


def extract_all(
    fonts: Sequence[bytes],
    provider: GlyphOutlineProvider = None,
    settings: AnalysisSettings = DEFAULT_ANALYSIS_SETTINGS,
) -> List[FontMetrics]:
    """
    Extracts metrics for several fonts concurrently, preserving order.

    The first failure (e.g. FontLoadError) is re-raised once every extraction
    has finished, so no partial list is ever returned.
    """
    if provider is None:
        provider = FontToolsProvider()
    with ThreadPoolExecutor(max_workers=max(1, len(fonts))) as executor:
        futures = [executor.submit(extract_font_metrics, data, provider, settings) for data in fonts]
    return [future.result() for future in futures]


def analyze_fonts(
    fonts: Sequence[Optional[bytes]],
    provider: GlyphOutlineProvider = None,
    settings: AnalysisSettings = DEFAULT_ANALYSIS_SETTINGS,
    weights: ScoringWeights = DEFAULT_SCORING_WEIGHTS,
) -> CompatibilityResult:
    """
    Analyzes fonts A, B and optionally C.

    Args:
        fonts: Raw bytes of font A, font B and optionally font C. A None or
            empty third entry is the same as leaving it out.
        provider: Outline backend shared by all extractions.
        settings: Analysis constants.
        weights: Scoring constants.

    Returns:
        PairResult or TrioResult.

    Raises:
        InputValidationError: If A or B is missing, or more than three fonts
            are given.
        FontLoadError: If any font cannot be loaded.
    """
    present = _present_fonts(fonts)
    logger.info(f"Analyzing {len(present)} fonts")
    metrics = extract_all(present, provider, settings)
    result = score_fonts(metrics, weights)
    logger.info(f"Analysis complete, overall score {result.overall:.4f}")
    return result
