"""
Preview Rendering Layer
- Draws a stroke, its wobble band and checkpoints onto a numpy canvas
- Progress fill capped at the visual progress
- Fading finger trace, progress bar and score
"""

import cv2
import numpy as np
from typing import List, Optional, Sequence, Tuple

import config
from nurbs import generate_curve_points
from stroke_data import StrokeData
from stroke_validator import Checkpoint, TrackingState
from trace_data import TracePoint

Color = Tuple[int, int, int]


class UIRenderer:
    """Main preview rendering class."""

    def __init__(self, width: int = config.WINDOW_WIDTH, height: int = config.WINDOW_HEIGHT,
                 scale: float = 1.0, offset: Tuple[float, float] = (0.0, 0.0)):
        self.width = width
        self.height = height
        self.scale = scale
        self.offset = offset

    def new_canvas(self) -> np.ndarray:
        canvas = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        canvas[:] = config.UI_COLORS["background"]
        return canvas

    def to_px(self, point) -> Tuple[int, int]:
        """Curve space -> canvas pixel."""
        return (
            int(round(self.offset[0] + point[0] * self.scale)),
            int(round(self.offset[1] + point[1] * self.scale)),
        )

    def _polyline(self, samples: Sequence) -> np.ndarray:
        return np.array([self.to_px(p) for p in samples], dtype=np.int32)

    def draw_tolerance_band(
        self,
        canvas: np.ndarray,
        samples: Sequence,
        radius: float,
        color: Color = config.UI_COLORS["tolerance"],
        alpha: float = 0.5
    ) -> np.ndarray:
        """Draw the wobble radius as a translucent band around the curve."""
        if len(samples) < 2:
            return canvas

        thickness = max(1, int(round(2 * radius * self.scale)))
        overlay = canvas.copy()
        cv2.polylines(overlay, [self._polyline(samples)], False, color, thickness, cv2.LINE_AA)
        cv2.addWeighted(overlay, alpha, canvas, 1 - alpha, 0, canvas)
        return canvas

    def draw_stroke_curve(
        self,
        canvas: np.ndarray,
        samples: Sequence,
        color: Color = config.UI_COLORS["stroke"],
        thickness: int = config.STROKE_THICKNESS
    ) -> np.ndarray:
        if len(samples) < 2:
            return canvas
        cv2.polylines(canvas, [self._polyline(samples)], False, color, thickness, cv2.LINE_AA)
        return canvas

    def draw_progress_fill(
        self,
        canvas: np.ndarray,
        samples: Sequence,
        progress: float,
        color: Color = config.UI_COLORS["progress"],
        thickness: int = config.STROKE_THICKNESS
    ) -> np.ndarray:
        """Overdraw the curve from its start up to `progress` (0-1)."""
        progress = max(0.0, min(1.0, progress))
        n = int(round(progress * (len(samples) - 1)))
        if n < 1:
            return canvas
        return self.draw_stroke_curve(canvas, samples[:n + 1], color, thickness)

    def draw_checkpoints(
        self,
        canvas: np.ndarray,
        checkpoints: List[Checkpoint],
        radius: int = config.CHECKPOINT_RADIUS
    ) -> np.ndarray:
        for cp in checkpoints:
            color = config.UI_COLORS["checkpoint_cleared"] if cp.cleared else config.UI_COLORS["checkpoint"]
            cv2.circle(canvas, self.to_px(cp.position), radius, color, -1)
        return canvas

    def draw_trace(
        self,
        canvas: np.ndarray,
        points: List[TracePoint],
        color: Color = config.UI_COLORS["trace"],
        radius: int = config.TRACE_DOT_RADIUS
    ) -> np.ndarray:
        """Draw trace dots, dimmed by their fade alpha."""
        for point in points:
            faded = tuple(int(c * point.alpha) for c in color)
            cv2.circle(canvas, self.to_px(point.position), radius, faded, -1)
        return canvas

    def draw_progress_bar(
        self,
        canvas: np.ndarray,
        progress: float,
        x: int,
        y: int,
        width: int = 200,
        height: int = 20
    ) -> np.ndarray:
        """Draw progress bar (0.0 to 1.0)."""
        progress = max(0.0, min(1.0, progress))

        # Background
        cv2.rectangle(canvas, (x, y), (x + width, y + height), (50, 50, 50), -1)

        # Progress
        filled_width = int(width * progress)
        cv2.rectangle(canvas, (x, y), (x + filled_width, y + height), config.UI_COLORS["progress"], -1)

        # Border
        cv2.rectangle(canvas, (x, y), (x + width, y + height), (100, 100, 100), 1)

        text = f"{int(progress * 100)}%"
        cv2.putText(canvas, text, (x + width // 2 - 15, y + 15),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, config.UI_COLORS["text_white"], 1)

        return canvas

    def draw_score_display(
        self,
        canvas: np.ndarray,
        score: int,
        x: int = None,
        y: int = None
    ) -> np.ndarray:
        h, w = canvas.shape[:2]
        if x is None:
            x = w - 160
        if y is None:
            y = 40

        cv2.putText(canvas, f"Score: {score}", (x, y),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.9, config.UI_COLORS["text_white"], 2)
        return canvas

    def render_stroke_preview(
        self,
        stroke: StrokeData,
        state: Optional[TrackingState] = None,
        visual_progress: float = 0.0,
        trace: Optional[List[TracePoint]] = None,
        score: Optional[int] = None,
        completed: bool = False
    ) -> np.ndarray:
        """Compose a full preview frame for one stroke."""
        canvas = self.new_canvas()
        samples = generate_curve_points(stroke, config.CURVE_RESOLUTION)

        if not completed:
            self.draw_tolerance_band(canvas, samples, stroke.tolerance_radius)
        self.draw_stroke_curve(canvas, samples)

        if completed:
            self.draw_progress_fill(canvas, samples, 1.0, config.UI_COLORS["completed"])
        else:
            self.draw_progress_fill(canvas, samples, visual_progress)

        if state is not None:
            self.draw_checkpoints(canvas, state.checkpoints)
        if trace:
            self.draw_trace(canvas, trace)

        self.draw_progress_bar(canvas, 1.0 if completed else visual_progress, 20, self.height - 40)
        if score is not None:
            self.draw_score_display(canvas, score)
        return canvas
