"""
NURBS Curve Engine
- Evaluates weighted B-spline strokes on a uniform open knot vector
- Samples strokes into polylines for drawing
- Projects arbitrary points onto the nearest curve sample
"""

import logging
from typing import List, Tuple

import numpy as np

import config
from stroke_data import DegenerateWeights, InsufficientControlPoints, StrokeData

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


# ===============================
# Knots & Basis Functions
# ===============================

def uniform_knot_vector(n: int, degree: int) -> List[float]:
    """
    Clamped uniform knot vector for control points 0..n.

    Length is n + degree + 2: degree + 1 zeros, degree + 1 ones and evenly
    spaced interior knots.
    """
    m = n + degree + 1
    knots = [0.0] * (m + 1)
    for i in range(m - degree, m + 1):
        knots[i] = 1.0
    for i in range(degree + 1, m - degree):
        knots[i] = (i - degree) / (n - degree + 1)
    return knots


def bspline_basis(i: int, p: int, t: float, knots: List[float]) -> float:
    """Cox-de Boor recursion for basis function N(i, p) at t."""
    if p == 0:
        return 1.0 if knots[i] <= t < knots[i + 1] else 0.0

    left = 0.0
    if knots[i + p] != knots[i]:
        left = (t - knots[i]) / (knots[i + p] - knots[i]) * bspline_basis(i, p - 1, t, knots)

    right = 0.0
    if knots[i + p + 1] != knots[i + 1]:
        right = (knots[i + p + 1] - t) / (knots[i + p + 1] - knots[i + 1]) * bspline_basis(i + 1, p - 1, t, knots)

    return left + right


def _rational_point(stroke: StrokeData, t: float, knots: List[float]) -> Point:
    x = y = 0.0
    weight_sum = 0.0
    for i, cp in enumerate(stroke.control_points):
        w = bspline_basis(i, stroke.degree, t, knots) * cp.weight
        x += cp.position[0] * w
        y += cp.position[1] * w
        weight_sum += w

    if weight_sum <= 0:
        raise DegenerateWeights(t, weight_sum)
    return (x / weight_sum, y / weight_sum)


def _require_evaluable(stroke: StrokeData):
    if not stroke.is_evaluable:
        raise InsufficientControlPoints(len(stroke.control_points), stroke.degree)


# ===============================
# Evaluation & Sampling
# ===============================

def evaluate_nurbs(stroke: StrokeData, t: float) -> Point:
    """
    Evaluate the stroke at parameter t (clamped to [0, 1]).

    The endpoints are returned exactly as the first and last control point
    positions. If the weighted basis sum collapses, the last control point is
    returned instead of a NaN.
    """
    _require_evaluable(stroke)

    t = min(max(float(t), 0.0), 1.0)
    points = stroke.control_points
    if t == 0.0:
        return points[0].position
    if t == 1.0:
        return points[-1].position

    knots = uniform_knot_vector(len(points) - 1, stroke.degree)
    try:
        return _rational_point(stroke, t, knots)
    except DegenerateWeights as e:
        logger.warning("%s; falling back to last control point (stroke %s)", e, stroke.stroke_id)
        return points[-1].position


def generate_curve_points(stroke: StrokeData, resolution: int = config.CURVE_RESOLUTION) -> List[Point]:
    """Sample resolution + 1 points at t = i / resolution."""
    _require_evaluable(stroke)
    if resolution < 1:
        raise ValueError(f"Curve resolution must be >= 1, got {resolution}")

    return [evaluate_nurbs(stroke, i / resolution) for i in range(resolution + 1)]


# ===============================
# Nearest Point
# ===============================

def find_closest_point(
    stroke: StrokeData,
    point: Point,
    search_resolution: int = config.CURVE_RESOLUTION
) -> Tuple[Point, float, float]:
    """
    Find the closest sampled curve point to `point`.

    Scans search_resolution + 1 uniform parameter values; ties go to the
    lowest parameter.
    Returns (closest_point, distance, parameter).
    """
    samples = np.asarray(generate_curve_points(stroke, search_resolution), dtype=np.float64)
    target = np.asarray(point, dtype=np.float64)

    dists = np.sqrt(np.sum((samples - target) ** 2, axis=1))
    idx = int(np.argmin(dists))

    closest = (float(samples[idx, 0]), float(samples[idx, 1]))
    return closest, float(dists[idx]), idx / search_resolution


def is_within_tolerance(stroke: StrokeData, point: Point, radius: float = None,
                        search_resolution: int = config.CURVE_RESOLUTION) -> bool:
    """Check if a point lies within the wobble radius of the curve."""
    if radius is None:
        radius = stroke.tolerance_radius
    _, distance, _ = find_closest_point(stroke, point, search_resolution)
    return distance <= radius
