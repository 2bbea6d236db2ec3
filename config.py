"""
Configuration file for Number Tracer
Tune curve evaluation, tracing tolerance, and preview appearance
"""

import os

# ===============================
# CURVE DEFAULTS
# ===============================

# Default NURBS degree for a stroke (cubic)
DEFAULT_DEGREE = 3

# How far (curve-space units) the finger may wobble off the curve
DEFAULT_TOLERANCE_RADIUS = 20.0

# Default control point weight
DEFAULT_WEIGHT = 1.0

# Samples used when generating a polyline for drawing
CURVE_RESOLUTION = 100

# ===============================
# TRACE VALIDATION
# ===============================

# Samples scanned when projecting input onto the curve
SEARCH_RESOLUTION = 200

# Tracking may only start this close to the beginning of the curve
START_PARAMETER_THRESHOLD = 0.1

# Backward slip allowed without dropping the tick (parameter space)
BACKWARD_TOLERANCE = 0.05

# Parameter past which a fully checkpointed stroke counts as complete
COMPLETION_THRESHOLD = 0.95

# Spacing between checkpoints along the curve
CHECKPOINT_INTERVAL = 0.1

# Mandatory checkpoint near the end of the curve
FINAL_CHECKPOINT_PARAMETER = 0.95

# ===============================
# GAMEPLAY
# ===============================

# Seconds a traced point stays visible while fading
TRACE_FADE_TIME = 2.0

# Pause before the next stroke / number becomes active (seconds)
STROKE_COMPLETION_DELAY = 0.5
NUMBER_COMPLETION_DELAY = 2 * STROKE_COMPLETION_DELAY

# Points awarded for a number unless its configuration overrides it
DEFAULT_SCORE_VALUE = 1

# ===============================
# NUMBER DATABASE
# ===============================

NUMBER_DB_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "numbers.json")

# ===============================
# PREVIEW RENDERING
# ===============================

WINDOW_WIDTH = 600
WINDOW_HEIGHT = 600

# UI Color scheme (B, G, R in OpenCV)
UI_COLORS = {
    "background": (20, 20, 20),
    "stroke": (200, 200, 200),
    "progress": (0, 255, 0),
    "completed": (0, 128, 255),
    "tolerance": (80, 80, 80),
    "checkpoint": (150, 150, 150),
    "checkpoint_cleared": (0, 200, 100),
    "trace": (100, 255, 100),
    "text_white": (255, 255, 255),
}

STROKE_THICKNESS = 4
TRACE_DOT_RADIUS = 4
CHECKPOINT_RADIUS = 6

# ===============================
# DEBUG & DEVELOPMENT
# ===============================

# Log every validation tick at DEBUG level
DEBUG_MODE = False

# Ticks between progress lines printed by the simulator
PRINT_EVERY = 10


if __name__ == "__main__":
    print("Number Tracer Configuration")
    print("=" * 50)
    print(f"Degree: {DEFAULT_DEGREE}, Tolerance: {DEFAULT_TOLERANCE_RADIUS}")
    print(f"Search resolution: {SEARCH_RESOLUTION}")
    print(f"Checkpoint interval: {CHECKPOINT_INTERVAL}")
    print(f"Number DB: {NUMBER_DB_PATH}")
    print(f"Debug Mode: {DEBUG_MODE}")
