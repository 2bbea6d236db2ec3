"""Integration tests for main_app.py.

Replays synthetic traces of the bundled numbers end to end and drives the
command line entry point.
"""

import sys
import unittest
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from main_app import main, run_simulation, synthesize_trace_inputs
from number_db import NumberDatabase
from stroke_data import NumberConfiguration, StrokeData
from tracing_session import NUMBER_COMPLETED, TracingSession

BUNDLED_DB = str(Path(__file__).parent.parent.parent / "numbers.json")


class TestSynthesizeInputs(unittest.TestCase):
    """Tests for synthesize_trace_inputs."""

    def setUp(self):
        self.stroke = StrokeData.from_positions([(0, 0), (100, 0)], degree=1)

    def test_walks_stroke_then_releases(self):
        inputs = synthesize_trace_inputs(self.stroke, steps=11)
        self.assertEqual(len(inputs), 12)
        self.assertEqual(inputs[0].position, (0.0, 0.0))
        self.assertEqual(inputs[-2].position, (100.0, 0.0))
        self.assertTrue(all(i.is_pressed for i in inputs[:-1]))
        self.assertFalse(inputs[-1].is_pressed)

    def test_jitter_is_seeded(self):
        a = synthesize_trace_inputs(self.stroke, 5, jitter=2.0, rng=np.random.default_rng(7))
        b = synthesize_trace_inputs(self.stroke, 5, jitter=2.0, rng=np.random.default_rng(7))
        self.assertEqual([i.position for i in a], [i.position for i in b])
        self.assertNotEqual(a[1].position, (25.0, 0.0))

    def test_too_few_steps(self):
        with self.assertRaises(ValueError):
            synthesize_trace_inputs(self.stroke, steps=1)


@pytest.mark.integration
class TestSimulation(unittest.TestCase):
    """Full numbers traced through a TracingSession."""

    @classmethod
    def setUpClass(cls):
        cls.db = NumberDatabase(BUNDLED_DB)

    def simulate(self, name):
        session = TracingSession([self.db.get_number(name)])
        return session, run_simulation(session, steps=150)

    def test_single_stroke_number(self):
        session, final = self.simulate("1")
        self.assertIsNotNone(final)
        self.assertIn(NUMBER_COMPLETED, final.events)
        self.assertTrue(final.result.is_complete)
        self.assertEqual(session.score, 1)

    def test_multi_stroke_number(self):
        session, final = self.simulate("2-multi")
        self.assertIsNotNone(final)
        self.assertEqual(session.score, 2)
        self.assertEqual(session.completed_numbers, 1)

    def test_every_bundled_number_completes(self):
        for name in self.db.names():
            with self.subTest(number=name):
                _, final = self.simulate(name)
                self.assertIsNotNone(final)


def test_synthesized_line_trace_completes(line_stroke):
    session = TracingSession([NumberConfiguration("line", (line_stroke,))])
    final = run_simulation(session, steps=60)
    assert final is not None
    assert final.result.is_complete


def test_cli_list(numbers_json_path, capsys):
    assert main(["--db", numbers_json_path, "--list"]) == 0
    out = capsys.readouterr().out
    assert "Numbers (5)" in out
    assert "2-multi: 2 stroke(s)" in out


def test_cli_missing_db(tmp_path, capsys):
    assert main(["--db", str(tmp_path / "none.json"), "--list"]) == 1
    assert "no numbers loaded" in capsys.readouterr().out


def test_cli_unknown_number(numbers_json_path, capsys):
    assert main(["--db", numbers_json_path, "--simulate", "--number", "9"]) == 1
    assert "not found" in capsys.readouterr().out


@pytest.mark.integration
def test_cli_simulate_with_preview(tmp_path, capsys):
    preview = tmp_path / "preview.png"
    code = main(["--db", BUNDLED_DB, "--simulate", "--number", "1", "--preview", str(preview)])
    assert code == 0
    assert preview.exists()
    assert "Number 1 completed! Score: 1" in capsys.readouterr().out
