"""
Tracing Session
- Walks the user through the strokes of one number at a time
- Feeds per-tick pointer samples to the progress tracker
- Scores completed numbers and schedules the next one
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import config
from stroke_data import NumberConfiguration, StrokeData
from stroke_validator import ProgressTracker, ValidationResult
from trace_data import TraceCollection

logger = logging.getLogger(__name__)

NUMBER_LOADED = "number_loaded"
STROKE_STARTED = "stroke_started"
STROKE_COMPLETED = "stroke_completed"
NUMBER_COMPLETED = "number_completed"


@dataclass
class SessionUpdate:
    result: ValidationResult
    events: List[str] = field(default_factory=list)


class TracingSession:
    """
    Headless game loop for number tracing.

    Call update() once per frame with the pointer position in curve space.
    Completion pauses are counted down from the frame delta times.
    """

    def __init__(
        self,
        numbers: Sequence[NumberConfiguration],
        tracker: ProgressTracker = None,
        stroke_completion_delay: float = config.STROKE_COMPLETION_DELAY,
        number_completion_delay: float = config.NUMBER_COMPLETION_DELAY,
        shuffle: bool = False,
        rng: random.Random = None,
        fade_time: float = config.TRACE_FADE_TIME,
    ):
        self.numbers = [n for n in numbers if n is not None and n.num_strokes > 0]
        if not self.numbers:
            raise ValueError("No number configurations with strokes available")

        self.tracker = tracker if tracker is not None else ProgressTracker()
        self.trace = TraceCollection(fade_time)
        self.stroke_completion_delay = stroke_completion_delay
        self.number_completion_delay = number_completion_delay
        self.shuffle = shuffle
        self.rng = rng or random.Random()

        # Game state
        self.score = 0
        self.completed_numbers = 0
        self.feedback: List[str] = []
        self.clock = 0.0

        # Number / stroke state
        self.current_number: Optional[NumberConfiguration] = None
        self.stroke_index = 0
        self._number_index = 0
        self._stroke_active = False
        self._pending = None  # (kind, seconds left)
        self._was_tracking = False

        self.load_next_number()

    # ----------------------------
    # Number Management
    # ----------------------------

    @property
    def current_stroke(self) -> Optional[StrokeData]:
        if not self._stroke_active or self.current_number is None:
            return None
        return self.current_number.get_stroke(self.stroke_index)

    @property
    def is_waiting(self) -> bool:
        return self._pending is not None

    def load_next_number(self) -> NumberConfiguration:
        """Select the next number and start at its first stroke."""
        if self.shuffle:
            number = self.rng.choice(self.numbers)
        else:
            number = self.numbers[self._number_index % len(self.numbers)]
            self._number_index += 1

        self.tracker.clear_all_progress()
        self.trace.clear()
        self.current_number = number
        self.stroke_index = 0
        self._stroke_active = True
        self._pending = None
        self._was_tracking = False

        logger.info("Number %s loaded with %d strokes", number.name, number.num_strokes)
        return number

    def restart_number(self):
        """Clear progress and start the current number over."""
        self.tracker.clear_all_progress()
        self.trace.clear()
        self.stroke_index = 0
        self._stroke_active = True
        self._pending = None
        self._was_tracking = False

    # ----------------------------
    # Frame Update
    # ----------------------------

    def update(self, position, is_pressed: bool, delta_time: float) -> SessionUpdate:
        """Process one input sample."""
        delta_time = max(float(delta_time), 0.0)
        self.clock += delta_time
        self.trace.update_trace(self.clock)

        update = SessionUpdate(ValidationResult())

        if self._pending is not None:
            self._tick_pending(delta_time, update.events)
            self._was_tracking = False
            return update

        stroke = self.current_stroke
        if stroke is None:
            return update

        result = self.tracker.validate(stroke, position, is_pressed, delta_time)
        update.result = result

        if result.is_valid:
            if is_pressed:
                self.trace.add_point(position, self.clock)
            if result.is_complete:
                self._on_stroke_completed(update.events)
        elif self._was_tracking:
            # Released or wandered off: start the stroke over
            self.tracker.reset_progress(stroke)
            if is_pressed:
                self.trace.clear()

        self._was_tracking = result.is_valid
        return update

    def _tick_pending(self, delta_time: float, events: List[str]):
        kind, remaining = self._pending
        remaining -= delta_time
        if remaining > 0:
            self._pending = (kind, remaining)
            return

        self._pending = None
        if kind == NUMBER_COMPLETED:
            self.load_next_number()
            events.append(NUMBER_LOADED)
        else:
            self._stroke_active = True
            self.trace.clear()
            events.append(STROKE_STARTED)
            logger.info("Starting stroke %d of %d", self.stroke_index + 1, self.current_number.num_strokes)

    def _on_stroke_completed(self, events: List[str]):
        number = self.current_number
        self.feedback.append(f"Stroke {self.stroke_index + 1} completed!")
        events.append(STROKE_COMPLETED)
        logger.info("Stroke %d of number %s completed", self.stroke_index + 1, number.name)

        self._stroke_active = False
        self.stroke_index += 1

        if self.stroke_index >= number.num_strokes:
            self.score += number.score_value
            self.completed_numbers += 1
            self.feedback.append(f"Number {number.name} complete! +{number.score_value}")
            events.append(NUMBER_COMPLETED)
            logger.info("Number %s completed, score %d", number.name, self.score)
            self._pending = (NUMBER_COMPLETED, self.number_completion_delay)
        else:
            self._pending = (STROKE_COMPLETED, self.stroke_completion_delay)
