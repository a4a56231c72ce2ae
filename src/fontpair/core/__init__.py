# -*- coding: utf-8 -*-
"""
The Core Analysis Package for FontPair.

Pipeline, leaf to root:
- `geometry`: point, angle and Bezier helpers.
- `stroke_contrast`: thick/thin ratio of one glyph outline.
- `feature_extractor`: FontMetrics record for one font file.
- `compatibility`: pairwise scores and the three-font triangle method.
- `analysis`: runs the whole thing for a 2- or 3-font request.
"""

from .analysis import analyze_fonts, extract_all
from .compatibility import (
    CompatibilityResult,
    PairResult,
    PairwiseScores,
    TriangleMethod,
    TrioResult,
    compatibility_score,
    rate_score,
    score_fonts,
    triangle_method,
)
from .feature_extractor import FontMetrics, extract_font_metrics
from .stroke_contrast import analyze_stroke_contrast

__all__ = [
    "CompatibilityResult",
    "FontMetrics",
    "PairResult",
    "PairwiseScores",
    "TriangleMethod",
    "TrioResult",
    "analyze_fonts",
    "analyze_stroke_contrast",
    "compatibility_score",
    "extract_all",
    "extract_font_metrics",
    "rate_score",
    "score_fonts",
    "triangle_method",
]
