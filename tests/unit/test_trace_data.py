"""Unit tests for trace_data.py (fading trace points)."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from trace_data import TraceCollection


class TestTraceCollection(unittest.TestCase):
    """Tests for TraceCollection."""

    def setUp(self):
        self.trace = TraceCollection(fade_time=2.0)

    def test_add_point(self):
        self.trace.add_point((1, 2), 0.0)
        self.assertEqual(len(self.trace), 1)
        self.assertEqual(self.trace.points[0].position, (1.0, 2.0))
        self.assertEqual(self.trace.points[0].alpha, 1.0)

    def test_fade(self):
        """Alpha falls linearly with age."""
        self.trace.add_point((0, 0), 0.0)
        self.trace.update_trace(1.0)
        self.assertAlmostEqual(self.trace.points[0].alpha, 0.5)

    def test_expire(self):
        """Points older than fade_time are dropped."""
        self.trace.add_point((0, 0), 0.0)
        self.trace.add_point((1, 0), 1.5)
        self.trace.update_trace(2.5)
        self.assertEqual(len(self.trace), 1)
        self.assertEqual(self.trace.points[0].position, (1.0, 0.0))
        self.assertAlmostEqual(self.trace.points[0].alpha, 0.5)

    def test_clear(self):
        self.trace.add_point((0, 0), 0.0)
        self.trace.clear()
        self.assertEqual(len(self.trace), 0)

    def test_invalid_fade_time(self):
        with self.assertRaises(ValueError):
            TraceCollection(fade_time=0)


if __name__ == "__main__":
    unittest.main()
