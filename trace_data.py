"""
Trace Data
- Recent valid finger positions for the active stroke
- Points fade out and expire after a fixed time
"""

from dataclasses import dataclass
from typing import List, Tuple

import config


@dataclass
class TracePoint:
    position: Tuple[float, float]
    timestamp: float
    alpha: float = 1.0


class TraceCollection:
    """Collection of trace points with fading."""

    def __init__(self, fade_time: float = config.TRACE_FADE_TIME):
        if fade_time <= 0:
            raise ValueError(f"Fade time must be positive, got {fade_time}")
        self.fade_time = fade_time
        self._points: List[TracePoint] = []

    def __len__(self):
        return len(self._points)

    @property
    def points(self) -> List[TracePoint]:
        return list(self._points)

    def add_point(self, position, timestamp: float):
        self._points.append(TracePoint((float(position[0]), float(position[1])), timestamp))

    def update_trace(self, current_time: float):
        """Update alpha values and drop points older than fade_time."""
        kept = []
        for point in self._points:
            age = current_time - point.timestamp
            if age > self.fade_time:
                continue
            point.alpha = 1.0 - max(age, 0.0) / self.fade_time
            kept.append(point)
        self._points = kept

    def clear(self):
        self._points = []
