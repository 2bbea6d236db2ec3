"""
Number Database
- Loads number configurations (digits as NURBS strokes) from JSON
- Lookup by name or index, random selection
"""

import json
import logging
import os
import random
from typing import Dict, List, Optional

import config
from stroke_data import ControlPoint, NumberConfiguration, StrokeData

logger = logging.getLogger(__name__)


# ===============================
# Parsing
# ===============================

def parse_control_point(raw) -> ControlPoint:
    """Accept [x, y], [x, y, weight] or {"position": [x, y], "weight": w}."""
    if isinstance(raw, dict):
        if "position" not in raw:
            raise ValueError("Control point is missing 'position'")
        x, y = raw["position"]
        weight = raw.get("weight", config.DEFAULT_WEIGHT)
    elif isinstance(raw, (list, tuple)) and len(raw) in (2, 3):
        x, y = raw[0], raw[1]
        weight = raw[2] if len(raw) == 3 else config.DEFAULT_WEIGHT
    else:
        raise ValueError(f"Invalid control point: {raw!r}")

    weight = float(weight)
    if weight <= 0:
        raise ValueError(f"Control point weight must be positive, got {weight}")
    return ControlPoint((float(x), float(y)), weight)


def parse_stroke(data: Dict, stroke_id: str) -> StrokeData:
    raw_points = data.get("control_points")
    if not raw_points:
        raise ValueError(f"Stroke {stroke_id} has no control points")

    degree = int(data.get("degree", config.DEFAULT_DEGREE))
    points = tuple(parse_control_point(p) for p in raw_points)
    if len(points) < degree + 1:
        raise ValueError(
            f"Stroke {stroke_id}: degree {degree} needs {degree + 1} control points, got {len(points)}"
        )

    return StrokeData(
        control_points=points,
        degree=degree,
        tolerance_radius=float(data.get("tolerance_radius", config.DEFAULT_TOLERANCE_RADIUS)),
        stroke_id=stroke_id,
    )


def parse_number(data: Dict) -> NumberConfiguration:
    """Build a NumberConfiguration from its JSON dict."""
    name = str(data.get("name", "")).strip()
    if not name:
        raise ValueError("Number configuration has no name")

    strokes = data.get("strokes", [])
    if not strokes:
        raise ValueError(f"Number '{name}' has no strokes")

    return NumberConfiguration(
        name=name,
        strokes=tuple(parse_stroke(s, f"{name}/{i}") for i, s in enumerate(strokes)),
        score_value=int(data.get("score_value", config.DEFAULT_SCORE_VALUE)),
    )


# ===============================
# Database
# ===============================

class NumberDatabase:
    """Load and manage number configurations."""

    def __init__(self, json_path: str = config.NUMBER_DB_PATH):
        self.json_path = json_path
        self.numbers: List[NumberConfiguration] = []
        self.load_numbers()

    def __len__(self):
        return len(self.numbers)

    def load_numbers(self):
        """Load numbers from JSON."""
        if not os.path.exists(self.json_path):
            logger.warning("%s not found; number database is empty", self.json_path)
            return

        with open(self.json_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, dict) or "numbers" not in data:
            raise ValueError("Invalid JSON format. Missing 'numbers' key.")

        self.numbers = [parse_number(entry) for entry in data["numbers"]]
        logger.debug("Loaded %d numbers from %s", len(self.numbers), self.json_path)

    def names(self) -> List[str]:
        return [n.name for n in self.numbers]

    def get_number(self, name: str) -> Optional[NumberConfiguration]:
        for number in self.numbers:
            if number.name == name:
                return number
        return None

    def get_number_by_index(self, idx: int) -> Optional[NumberConfiguration]:
        if 0 <= idx < len(self.numbers):
            return self.numbers[idx]
        return None

    def get_random_number(self, rng: random.Random = None) -> NumberConfiguration:
        if not self.numbers:
            raise ValueError("Number database is empty")
        return (rng or random).choice(self.numbers)
