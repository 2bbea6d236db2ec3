"""
Stroke Data Model
- Control points and NURBS stroke definitions
- Number configurations (a digit made of ordered strokes)
- Curve error taxonomy
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Tuple

import config

Point = Tuple[float, float]


# ===============================
# Errors
# ===============================

class CurveError(ValueError):
    """Base class for curve evaluation and validation problems."""


class InsufficientControlPoints(CurveError):
    """Stroke has fewer control points than degree + 1."""

    def __init__(self, count: int, degree: int):
        super().__init__(
            f"NURBS of degree {degree} needs at least {degree + 1} control points, got {count}"
        )
        self.count = count
        self.degree = degree


class DegenerateWeights(CurveError):
    """Weighted basis sum is not positive at some parameter."""

    def __init__(self, t: float, weight_sum: float):
        super().__init__(f"Weight sum {weight_sum!r} at t={t!r} is not positive")
        self.t = t
        self.weight_sum = weight_sum


class InvalidCheckpointInterval(CurveError):
    """Checkpoint interval must lie strictly between 0 and 1."""

    def __init__(self, interval: float):
        super().__init__(f"Checkpoint interval {interval!r} is outside (0, 1)")
        self.interval = interval


# ===============================
# Control Points & Strokes
# ===============================

def _new_stroke_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class ControlPoint:
    """A single weighted control point of a NURBS curve."""

    position: Point
    weight: float = config.DEFAULT_WEIGHT

    def __post_init__(self):
        x, y = self.position
        object.__setattr__(self, "position", (float(x), float(y)))
        object.__setattr__(self, "weight", float(self.weight))


def _as_control_point(cp) -> ControlPoint:
    """Accept a ControlPoint, an (x, y) pair or an ((x, y), weight) pair."""
    if isinstance(cp, ControlPoint):
        return cp
    first, second = cp
    if isinstance(first, (tuple, list)):
        return ControlPoint(first, second)
    return ControlPoint((first, second))


@dataclass(frozen=True)
class StrokeData:
    """
    One traceable stroke: an ordered set of control points, a degree and the
    wobble radius the finger may stray from the curve.

    Strokes are immutable. Authoring edits return a new stroke with a fresh
    ``stroke_id`` so progress tracked against the old shape is never reused.
    """

    control_points: Tuple[ControlPoint, ...]
    degree: int = config.DEFAULT_DEGREE
    tolerance_radius: float = config.DEFAULT_TOLERANCE_RADIUS
    stroke_id: str = field(default_factory=_new_stroke_id)

    def __post_init__(self):
        points = tuple(_as_control_point(cp) for cp in self.control_points)
        object.__setattr__(self, "control_points", points)
        if self.degree < 1:
            raise ValueError(f"Stroke degree must be >= 1, got {self.degree}")
        if self.tolerance_radius <= 0:
            raise ValueError(f"Tolerance radius must be positive, got {self.tolerance_radius}")

    @classmethod
    def from_positions(cls, positions, degree: int = config.DEFAULT_DEGREE,
                       tolerance_radius: float = config.DEFAULT_TOLERANCE_RADIUS,
                       stroke_id: str = None) -> "StrokeData":
        """Build a stroke with unit weights from a list of (x, y) positions."""
        points = tuple(ControlPoint((x, y)) for x, y in positions)
        if stroke_id is None:
            return cls(points, degree, tolerance_radius)
        return cls(points, degree, tolerance_radius, stroke_id)

    @property
    def positions(self):
        return [cp.position for cp in self.control_points]

    @property
    def is_evaluable(self) -> bool:
        """True when there are enough control points for the degree."""
        return len(self.control_points) >= self.degree + 1

    # ----------------------------
    # Authoring edits
    # ----------------------------

    def with_control_points(self, control_points) -> "StrokeData":
        return replace(self, control_points=tuple(control_points), stroke_id=_new_stroke_id())

    def with_control_point(self, index: int, position: Point) -> "StrokeData":
        """Move one control point, keeping its weight."""
        if not 0 <= index < len(self.control_points):
            return self
        points = list(self.control_points)
        points[index] = ControlPoint(position, points[index].weight)
        return self.with_control_points(points)

    def add_control_point(self, position: Point, weight: float = config.DEFAULT_WEIGHT) -> "StrokeData":
        return self.with_control_points(self.control_points + (ControlPoint(position, weight),))

    def remove_control_point(self, index: int) -> "StrokeData":
        """Drop a control point unless that would leave too few for the degree."""
        if not 0 <= index < len(self.control_points):
            return self
        if len(self.control_points) <= self.degree + 1:
            return self
        points = [cp for i, cp in enumerate(self.control_points) if i != index]
        return self.with_control_points(points)


# ===============================
# Number Configuration
# ===============================

@dataclass(frozen=True)
class NumberConfiguration:
    """A digit or shape to trace, made of strokes traced in order."""

    name: str
    strokes: Tuple[StrokeData, ...] = ()
    score_value: int = config.DEFAULT_SCORE_VALUE

    def __post_init__(self):
        object.__setattr__(self, "strokes", tuple(self.strokes))

    @property
    def num_strokes(self) -> int:
        return len(self.strokes)

    def get_stroke(self, idx: int):
        if 0 <= idx < len(self.strokes):
            return self.strokes[idx]
        return None
