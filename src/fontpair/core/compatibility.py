# -*- coding: utf-8 -*-
"""
src/fontpair/core/compatibility.py

Combines FontMetrics records into compatibility scores.

Two fonts get a single weighted score. Three fonts get the three pairwise
scores, their mean, and the "triangle method": each font becomes a point in
a 3D (contrast, width, x-height) space and the triangle they span is
summarized by its area and perimeter. The triangle is descriptive only and
does not feed back into the scores.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple, Union

import numpy as np

from ..config import DEFAULT_SCORING_WEIGHTS, ScoringWeights
from ..exceptions import InputValidationError
from .feature_extractor import FontMetrics
from .geometry import euclidean_distance

logger = logging.getLogger(__name__)

Point3 = Tuple[float, float, float]

EXCELLENT_THRESHOLD = 0.8
GOOD_THRESHOLD = 0.6


def _ordered_ratio(a: float, b: float) -> Tuple[float, float]:
    return (a, b) if a >= b else (b, a)


def x_height_ratio(a: FontMetrics, b: FontMetrics) -> float:
    """
    1 - |larger / smaller - 1| of the two x-heights.

    1.0 for equal x-heights, decreasing with mismatch and going negative once
    one x-height is more than twice the other (not clamped).
    """
    larger, smaller = _ordered_ratio(a.x_height, b.x_height)
    if smaller == 0:
        return 1.0 if larger == 0 else 0.0
    return 1 - abs(larger / smaller - 1)


def stroke_contrast_score(a: FontMetrics, b: FontMetrics, neutral: float = 0.5) -> float:
    """min/max of the two contrasts, or `neutral` if either is unknown."""
    if a.stroke_contrast is None or b.stroke_contrast is None:
        return neutral
    larger, smaller = _ordered_ratio(a.stroke_contrast, b.stroke_contrast)
    if larger == 0:
        return 1.0
    return smaller / larger


def width_ratio(a: FontMetrics, b: FontMetrics) -> float:
    """min(a/b, b/a) of the average character widths."""
    larger, smaller = _ordered_ratio(a.avg_char_width, b.avg_char_width)
    if smaller == 0:
        return 1.0 if larger == 0 else 0.0
    return smaller / larger


def feature_distance_score(a: FontMetrics, b: FontMetrics, scale: float = 10.0) -> float:
    """1 - distance/scale between feature vectors, floored at 0."""
    return max(0.0, 1 - euclidean_distance(a.feature_vector, b.feature_vector) / scale)


def compatibility_score(
    a: FontMetrics,
    b: FontMetrics,
    weights: ScoringWeights = DEFAULT_SCORING_WEIGHTS,
) -> float:
    """
    Weighted compatibility of two fonts.

    score = 0.35 * x-height ratio + 0.25 * contrast score
          + 0.20 * width ratio + 0.20 * feature distance score

    (weights as configured). Identical metrics score exactly 1.0 with the
    default weights; the function is symmetric in its arguments.
    """
    return (
        weights.x_height * x_height_ratio(a, b)
        + weights.stroke_contrast * stroke_contrast_score(a, b, weights.neutral_contrast_score)
        + weights.width * width_ratio(a, b)
        + weights.feature_distance * feature_distance_score(a, b, weights.feature_distance_scale)
    )


def rate_score(score: float) -> str:
    """Human-readable rating used in reports."""
    if score >= EXCELLENT_THRESHOLD:
        return "Excellent Match"
    if score >= GOOD_THRESHOLD:
        return "Good Match"
    return "Poor Match"


# --- Triangle method ---

@dataclass(frozen=True)
class TriangleMethod:
    point_a: Point3
    point_b: Point3
    point_c: Point3
    area: float
    perimeter: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "points": {
                "A": list(self.point_a),
                "B": list(self.point_b),
                "C": list(self.point_c),
            },
            "area": self.area,
            "perimeter": self.perimeter,
        }


def font_point(metrics: FontMetrics, weights: ScoringWeights = DEFAULT_SCORING_WEIGHTS) -> Point3:
    """Projects a font onto (contrast / 10 or 0.1, avg_char_width, x_height)."""
    if metrics.stroke_contrast is not None:
        contrast = metrics.stroke_contrast / weights.contrast_point_scale
    else:
        contrast = weights.null_contrast_point
    return (float(contrast), float(metrics.avg_char_width), float(metrics.x_height))


def triangle_from_points(point_a: Point3, point_b: Point3, point_c: Point3) -> TriangleMethod:
    """Area (half the norm of AB x AC) and perimeter of a 3D triangle."""
    a, b, c = (np.asarray(p, dtype=float) for p in (point_a, point_b, point_c))
    area = 0.5 * np.linalg.norm(np.cross(b - a, c - a))
    perimeter = np.linalg.norm(b - a) + np.linalg.norm(c - b) + np.linalg.norm(a - c)
    return TriangleMethod(
        point_a=tuple(point_a),
        point_b=tuple(point_b),
        point_c=tuple(point_c),
        area=float(area),
        perimeter=float(perimeter),
    )


def triangle_method(
    a: FontMetrics,
    b: FontMetrics,
    c: FontMetrics,
    weights: ScoringWeights = DEFAULT_SCORING_WEIGHTS,
) -> TriangleMethod:
    return triangle_from_points(font_point(a, weights), font_point(b, weights), font_point(c, weights))


# --- Results ---

@dataclass(frozen=True)
class PairResult:
    """Outcome of a two-font analysis."""

    font_a: FontMetrics
    font_b: FontMetrics
    compatibility_score: float

    @property
    def overall(self) -> float:
        return self.compatibility_score

    def to_dict(self) -> Dict[str, object]:
        return {
            "fontA": self.font_a.to_dict(),
            "fontB": self.font_b.to_dict(),
            "compatibilityScore": self.compatibility_score,
        }


@dataclass(frozen=True)
class PairwiseScores:
    ab: float
    ac: float
    bc: float
    overall: float

    def to_dict(self) -> Dict[str, float]:
        return {"AB": self.ab, "AC": self.ac, "BC": self.bc, "overall": self.overall}


@dataclass(frozen=True)
class TrioResult:
    """Outcome of a three-font analysis."""

    font_a: FontMetrics
    font_b: FontMetrics
    font_c: FontMetrics
    scores: PairwiseScores
    triangle: TriangleMethod

    @property
    def overall(self) -> float:
        return self.scores.overall

    def to_dict(self) -> Dict[str, object]:
        return {
            "fontA": self.font_a.to_dict(),
            "fontB": self.font_b.to_dict(),
            "fontC": self.font_c.to_dict(),
            "compatibilityScores": self.scores.to_dict(),
            "triangleMethod": self.triangle.to_dict(),
        }


CompatibilityResult = Union[PairResult, TrioResult]


def score_fonts(
    metrics: Sequence[FontMetrics],
    weights: ScoringWeights = DEFAULT_SCORING_WEIGHTS,
) -> CompatibilityResult:
    """
    Scores two or three measured fonts.

    Args:
        metrics: Records for fonts A, B and optionally C, in that order.
        weights: Formula constants.

    Returns:
        A PairResult for two fonts, a TrioResult for three.

    Raises:
        InputValidationError: For any other number of records.
    """
    if len(metrics) == 2:
        a, b = metrics
        return PairResult(font_a=a, font_b=b, compatibility_score=compatibility_score(a, b, weights))

    if len(metrics) == 3:
        a, b, c = metrics
        ab = compatibility_score(a, b, weights)
        ac = compatibility_score(a, c, weights)
        bc = compatibility_score(b, c, weights)
        scores = PairwiseScores(ab=ab, ac=ac, bc=bc, overall=(ab + ac + bc) / 3)
        logger.debug(f"Pairwise scores AB={ab:.4f} AC={ac:.4f} BC={bc:.4f}")
        return TrioResult(
            font_a=a,
            font_b=b,
            font_c=c,
            scores=scores,
            triangle=triangle_method(a, b, c, weights),
        )

    raise InputValidationError(f"Expected 2 or 3 fonts, got {len(metrics)}")
