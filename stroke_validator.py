"""
Stroke Input Validator
- Tracks per-stroke tracing progress from a stream of pointer samples
- Gates progress behind ordered checkpoints along the curve
- Detects stroke completion
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import config
from nurbs import evaluate_nurbs, find_closest_point
from stroke_data import CurveError, InvalidCheckpointInterval, StrokeData

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


@dataclass
class StrokeInput:
    """One pointer sample in curve space."""

    position: Point
    is_pressed: bool
    delta_time: float = 0.0


@dataclass
class ValidationResult:
    is_valid: bool = False
    is_complete: bool = False
    raw_progress: float = 0.0
    visual_progress: float = 0.0
    closest_point: Point = (0.0, 0.0)
    distance_from_stroke: float = 0.0


@dataclass
class Checkpoint:
    parameter: float
    position: Point
    cleared: bool = False


@dataclass
class TrackingState:
    checkpoints: List[Checkpoint] = field(default_factory=list)
    is_tracking: bool = False
    is_complete: bool = False
    current_parameter: float = 0.0
    last_cleared_index: int = -1

    def reset(self):
        """Back to Idle with every checkpoint outstanding."""
        self.is_tracking = False
        self.is_complete = False
        self.current_parameter = 0.0
        self.last_cleared_index = -1
        for cp in self.checkpoints:
            cp.cleared = False

    @property
    def all_cleared(self) -> bool:
        return all(cp.cleared for cp in self.checkpoints)

    def next_uncleared(self) -> Optional[Checkpoint]:
        for cp in self.checkpoints:
            if not cp.cleared:
                return cp
        return None

    @property
    def visual_progress(self) -> float:
        """Progress capped at the first checkpoint not yet cleared."""
        nxt = self.next_uncleared()
        cap = nxt.parameter if nxt is not None else 1.0
        return min(self.current_parameter, cap)


# ===============================
# Checkpoints
# ===============================

def check_checkpoint_interval(interval: float) -> float:
    if not 0.0 < interval < 1.0:
        raise InvalidCheckpointInterval(interval)
    return interval


def generate_checkpoints(stroke: StrokeData, interval: float = config.CHECKPOINT_INTERVAL) -> List[Checkpoint]:
    """
    Place checkpoints at interval, 2*interval, ... below 1.0, plus one at the
    final checkpoint parameter when the last one falls short of it.
    Positions are evaluated once and frozen.
    """
    try:
        interval = check_checkpoint_interval(interval)
    except InvalidCheckpointInterval as e:
        logger.warning("%s; using %s", e, config.CHECKPOINT_INTERVAL)
        interval = config.CHECKPOINT_INTERVAL

    params = []
    k = 1
    t = round(interval, 10)
    while t < 1.0:
        params.append(t)
        k += 1
        t = round(interval * k, 10)

    final = config.FINAL_CHECKPOINT_PARAMETER
    if not params or params[-1] < final:
        params.append(final)

    return [Checkpoint(t, evaluate_nurbs(stroke, t)) for t in params]


def _within(a: Point, b: Point, radius: float) -> bool:
    return (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 <= radius * radius


# ===============================
# Progress Tracker
# ===============================

class ProgressTracker:
    """
    Validates pointer input against strokes, one TrackingState per stroke id.

    Each stroke moves Idle -> Tracking -> Complete. Tracking only starts near
    the beginning of the curve, falls back to Idle when the pointer is
    released or leaves the wobble radius, and completes once the parameter
    passes the completion threshold with every checkpoint cleared.
    """

    def __init__(self, search_resolution: int = config.SEARCH_RESOLUTION,
                 checkpoint_interval: float = config.CHECKPOINT_INTERVAL):
        if search_resolution < 1:
            raise ValueError(f"Search resolution must be >= 1, got {search_resolution}")
        self.search_resolution = search_resolution
        self.checkpoint_interval = checkpoint_interval
        self._states: Dict[str, TrackingState] = {}
        self._warned = set()
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._states)

    def get_state(self, stroke: StrokeData) -> Optional[TrackingState]:
        return self._states.get(stroke.stroke_id)

    def validate_input(self, stroke: StrokeData, stroke_input: StrokeInput) -> ValidationResult:
        return self.validate(stroke, stroke_input.position, stroke_input.is_pressed, stroke_input.delta_time)

    def validate(self, stroke: StrokeData, position: Point, is_pressed: bool,
                 delta_time: float = 0.0) -> ValidationResult:
        """Validate one input sample against a stroke and update its progress."""
        if stroke is None or len(stroke.control_points) < 2 or not stroke.is_evaluable:
            self._warn_unusable(stroke)
            return ValidationResult()

        with self._lock:
            try:
                return self._validate(stroke, (float(position[0]), float(position[1])), is_pressed)
            except CurveError as e:
                logger.warning("Stroke %s cannot be validated: %s", stroke.stroke_id, e)
                return ValidationResult()

    def _validate(self, stroke: StrokeData, position: Point, is_pressed: bool) -> ValidationResult:
        state = self._states.get(stroke.stroke_id)
        if state is None:
            state = TrackingState(generate_checkpoints(stroke, self.checkpoint_interval))
            self._states[stroke.stroke_id] = state

        closest, distance, parameter = find_closest_point(stroke, position, self.search_resolution)
        result = ValidationResult(closest_point=closest, distance_from_stroke=distance)

        if state.is_complete:
            result.is_valid = is_pressed and distance <= stroke.tolerance_radius
            result.is_complete = True
            result.raw_progress = state.current_parameter
            result.visual_progress = state.visual_progress
            return result

        within_radius = distance <= stroke.tolerance_radius

        if is_pressed and within_radius:
            if not state.is_tracking:
                if parameter < config.START_PARAMETER_THRESHOLD:
                    state.reset()
                    state.is_tracking = True
                    state.current_parameter = parameter
                    logger.debug("Stroke %s: tracking started at t=%.3f", stroke.stroke_id, parameter)
            else:
                self._clear_checkpoints(stroke, state, position, parameter)
                if parameter >= state.current_parameter - config.BACKWARD_TOLERANCE:
                    state.current_parameter = max(state.current_parameter, parameter)

            if (state.is_tracking
                    and state.current_parameter > config.COMPLETION_THRESHOLD
                    and state.all_cleared):
                state.is_complete = True
                logger.debug("Stroke %s complete", stroke.stroke_id)
        elif state.is_tracking:
            state.reset()
            logger.debug("Stroke %s: tracking lost (pressed=%s, distance=%.1f)",
                         stroke.stroke_id, is_pressed, distance)

        result.is_valid = state.is_tracking
        result.is_complete = state.is_complete
        result.raw_progress = state.current_parameter
        result.visual_progress = state.visual_progress
        return result

    def _clear_checkpoints(self, stroke: StrokeData, state: TrackingState, position: Point, parameter: float):
        for idx, cp in enumerate(state.checkpoints):
            if cp.cleared or not _within(position, cp.position, stroke.tolerance_radius):
                continue
            if idx <= state.last_cleared_index + 1 or parameter >= cp.parameter:
                cp.cleared = True
                state.last_cleared_index = max(state.last_cleared_index, idx)
                logger.debug("Stroke %s: checkpoint %d (t=%.2f) cleared", stroke.stroke_id, idx, cp.parameter)

    def _warn_unusable(self, stroke):
        key = getattr(stroke, "stroke_id", None)
        if key in self._warned:
            return
        self._warned.add(key)
        if stroke is None:
            logger.warning("No stroke to validate against")
        else:
            logger.warning("Stroke %s has %d control points for degree %d; not validating",
                           stroke.stroke_id, len(stroke.control_points), stroke.degree)

    # ----------------------------
    # Reset
    # ----------------------------

    def reset_progress(self, stroke: StrokeData):
        """Forget a stroke's progress; the next call starts a fresh Idle session."""
        with self._lock:
            self._states.pop(stroke.stroke_id, None)

    def clear_all_progress(self):
        with self._lock:
            self._states.clear()
