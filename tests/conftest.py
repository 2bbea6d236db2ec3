"""Shared pytest fixtures for the number tracer test suite.

Fixtures:
    line_stroke: Degree-1 stroke from (0, 0) to (100, 0) with a 10 unit radius
    numbers_json_path: Path to the bundled numbers.json

Markers:
    slow: Mark test as slow-running (skip with -m "not slow")
    integration: Mark test as integration test
"""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from stroke_data import StrokeData  # noqa: E402


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow-running (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


@pytest.fixture
def line_stroke():
    return StrokeData.from_positions([(0, 0), (100, 0)], degree=1, tolerance_radius=10.0,
                                     stroke_id="line")


@pytest.fixture
def numbers_json_path():
    return str(Path(__file__).parent.parent / "numbers.json")
