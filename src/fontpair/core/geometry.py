# -*- coding: utf-8 -*-
"""
src/fontpair/core/geometry.py

Small 2D/nD geometry helpers used while walking glyph outlines and comparing
feature vectors. Points are plain (x, y) tuples.
"""

import math
from typing import List, Sequence, Tuple

import numpy as np

Point = Tuple[float, float]


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two 2D points."""
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def angle(p1: Point, p2: Point) -> float:
    """Direction of the vector p1 -> p2 in radians, in (-pi, pi]."""
    return math.atan2(p2[1] - p1[1], p2[0] - p1[0])


def normalize_angle(theta: float) -> float:
    """
    Folds an angle into [0, pi).

    A line and its reverse normalize to the same value, so segment direction
    along the contour does not matter for orientation checks.
    """
    if theta < 0:
        theta += 2 * math.pi
    return theta % math.pi


def sample_cubic_bezier(p0: Point, c1: Point, c2: Point, p1: Point, n: int) -> List[Point]:
    """
    Samples a cubic Bezier curve at t = i/n for i = 1..n.

    The start point is not included; the last sample is the end point.
    """
    points = []
    for i in range(1, n + 1):
        t = i / n
        mt = 1 - t
        x = mt**3 * p0[0] + 3 * mt**2 * t * c1[0] + 3 * mt * t**2 * c2[0] + t**3 * p1[0]
        y = mt**3 * p0[1] + 3 * mt**2 * t * c1[1] + 3 * mt * t**2 * c2[1] + t**3 * p1[1]
        points.append((x, y))
    return points


def sample_quadratic_bezier(p0: Point, c: Point, p1: Point, n: int) -> List[Point]:
    """Samples a quadratic Bezier curve at t = i/n for i = 1..n."""
    points = []
    for i in range(1, n + 1):
        t = i / n
        mt = 1 - t
        x = mt**2 * p0[0] + 2 * mt * t * c[0] + t**2 * p1[0]
        y = mt**2 * p0[1] + 2 * mt * t * c[1] + t**2 * p1[1]
        points.append((x, y))
    return points


def euclidean_distance(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """
    Calculates the Euclidean distance between two feature vectors.

    Args:
        vec_a: The first vector.
        vec_b: The second vector.

    Returns:
        The distance, or +infinity if the vectors differ in length. A mismatch
        is reported through the value rather than an exception so that callers
        scoring with a clamped term degrade to the worst score.
    """
    if len(vec_a) != len(vec_b):
        return math.inf
    diff = np.asarray(vec_a, dtype=float) - np.asarray(vec_b, dtype=float)
    return float(np.linalg.norm(diff))
