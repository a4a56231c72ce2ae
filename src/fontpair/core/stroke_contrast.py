# -*- coding: utf-8 -*-
"""
src/fontpair/core/stroke_contrast.py

Estimates the thick/thin stroke ratio of a single glyph from its outline.

The outline is flattened into short segments (curves are sampled), segments
that are too short (noise) or too long (chords across the glyph) are dropped,
and the rest are split into near-horizontal and near-vertical groups. The
ratio between the robust average lengths of the two groups approximates the
glyph's stroke contrast: close to 1.0 for monolinear designs, larger for
calligraphic ones.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from ..config import DEFAULT_ANALYSIS_SETTINGS, AnalysisSettings
from ..providers.base import PathCommand, PathKind
from .geometry import angle, distance, normalize_angle, sample_cubic_bezier, sample_quadratic_bezier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StrokeSegment:
    width: float  # segment length, > 0
    angle: float  # radians, raw direction


def collect_stroke_segments(
    commands: Iterable[PathCommand],
    settings: AnalysisSettings = DEFAULT_ANALYSIS_SETTINGS,
) -> List[StrokeSegment]:
    """
    Flattens outline commands into segments whose length lies within
    [min_segment_length, max_segment_length] of the nominal size.

    A line is one segment. Cubic and quadratic curves are sampled at
    `cubic_samples` / `quadratic_samples` points and every consecutive pair
    of samples is one segment. Drawing commands before the first MOVE have
    no start point and are ignored.
    """
    lo = settings.min_segment_length
    hi = settings.max_segment_length
    segments: List[StrokeSegment] = []
    last_point = None

    for command in commands:
        if command.kind is PathKind.MOVE:
            last_point = command.end
            continue
        if last_point is None:
            continue

        if command.kind is PathKind.LINE:
            points = [command.end]
        elif command.kind is PathKind.CUBIC:
            c1, c2 = command.controls
            points = sample_cubic_bezier(last_point, c1, c2, command.end, settings.cubic_samples)
        elif command.kind is PathKind.QUADRATIC:
            (c,) = command.controls
            points = sample_quadratic_bezier(last_point, c, command.end, settings.quadratic_samples)
        else:
            raise ValueError(f"Unknown path command kind: {command.kind!r}")

        previous = last_point
        for point in points:
            length = distance(previous, point)
            if lo <= length <= hi:
                segments.append(StrokeSegment(width=length, angle=angle(previous, point)))
            previous = point
        last_point = command.end

    return segments


def classify_segments(segments: Iterable[StrokeSegment], tolerance: float):
    """
    Splits segments into (horizontal, vertical) lists by normalized angle.

    Horizontal: within `tolerance` of 0 (or of pi, which is the same
    direction). Vertical: within `tolerance` of pi/2. Diagonals are dropped.
    """
    horizontal: List[StrokeSegment] = []
    vertical: List[StrokeSegment] = []
    for segment in segments:
        theta = normalize_angle(segment.angle)
        if theta < tolerance or theta > math.pi - tolerance:
            horizontal.append(segment)
        elif abs(theta - math.pi / 2) < tolerance:
            vertical.append(segment)
    return horizontal, vertical


def median(values: Sequence[float]) -> float:
    """Median of a sequence; 0.0 for an empty one."""
    if not values:
        return 0.0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def trimmed_mean(values: Sequence[float], trim_fraction: float = 0.2) -> float:
    """
    Mean after dropping floor(n * trim_fraction) values from each end.

    With two or fewer values there is nothing to trim and the median is used.
    """
    if len(values) <= 2:
        return median(values)
    ordered = sorted(values)
    trim = int(math.floor(len(ordered) * trim_fraction))
    kept = ordered[trim:len(ordered) - trim]
    return sum(kept) / len(kept)


def stroke_contrast_from_segments(
    segments: Iterable[StrokeSegment],
    settings: AnalysisSettings = DEFAULT_ANALYSIS_SETTINGS,
) -> Optional[float]:
    """
    Thick/thin ratio of already-collected segments, capped at contrast_cap.

    Returns:
        A value in [1.0, contrast_cap], or None when either orientation has
        fewer than `min_segments_per_orientation` segments.
    """
    horizontal, vertical = classify_segments(segments, settings.angle_tolerance)
    needed = settings.min_segments_per_orientation
    if len(horizontal) < needed or len(vertical) < needed:
        logger.debug(
            f"Too few oriented segments for contrast: {len(horizontal)} horizontal, {len(vertical)} vertical"
        )
        return None

    horizontal_width = trimmed_mean([s.width for s in horizontal], settings.trim_fraction)
    vertical_width = trimmed_mean([s.width for s in vertical], settings.trim_fraction)
    if horizontal_width <= 0 or vertical_width <= 0:
        return None

    thick = max(horizontal_width, vertical_width)
    thin = min(horizontal_width, vertical_width)
    return min(thick / thin, settings.contrast_cap)


def analyze_stroke_contrast(
    commands: Iterable[PathCommand],
    settings: AnalysisSettings = DEFAULT_ANALYSIS_SETTINGS,
) -> Optional[float]:
    """
    Computes the stroke contrast of one glyph outline.

    Args:
        commands: The glyph's outline, already scaled to settings.font_size.
        settings: Sampling counts, length window, angle tolerance and cap.

    Returns:
        The thick/thin ratio in [1.0, contrast_cap], or None if the outline
        does not provide enough horizontal and vertical segments.
    """
    return stroke_contrast_from_segments(collect_stroke_segments(commands, settings), settings)
