"""
Number Tracer - Main Application

Replays finger traces through the curve tracing engine:
1. List the numbers in the database
2. Simulate tracing a number stroke by stroke (optionally with jitter)
3. Write a preview frame of the traced stroke

Live input capture and on-screen UI are provided by the host; this entry
point drives the engine headlessly.
"""

import argparse
import logging
import sys
from typing import List, Optional

import cv2
import numpy as np

import config
from nurbs import evaluate_nurbs
from number_db import NumberDatabase
from stroke_data import StrokeData
from stroke_validator import StrokeInput
from tracing_session import NUMBER_COMPLETED, SessionUpdate, TracingSession
from ui_renderer import UIRenderer

FRAME_TIME = 1.0 / 30


# ===============================
# Synthetic Input
# ===============================

def synthesize_trace_inputs(
    stroke: StrokeData,
    steps: int = 150,
    jitter: float = 0.0,
    rng: np.random.Generator = None,
    delta_time: float = FRAME_TIME
) -> List[StrokeInput]:
    """
    Pressed samples walking the stroke from start to end, then a release.
    `jitter` adds Gaussian noise (curve-space units) to each position.
    """
    if steps < 2:
        raise ValueError("Need at least 2 steps to trace a stroke")
    if rng is None:
        rng = np.random.default_rng()

    inputs = []
    for t in np.linspace(0.0, 1.0, steps):
        x, y = evaluate_nurbs(stroke, float(t))
        if jitter > 0:
            dx, dy = rng.normal(0.0, jitter, size=2)
            x, y = x + dx, y + dy
        inputs.append(StrokeInput((float(x), float(y)), True, delta_time))

    inputs.append(StrokeInput(inputs[-1].position, False, delta_time))
    return inputs


def run_simulation(
    session: TracingSession,
    steps: int = 150,
    jitter: float = 0.0,
    rng: np.random.Generator = None,
    print_every: int = 0,
    max_idle_ticks: int = 1000
) -> Optional[SessionUpdate]:
    """
    Trace every stroke of the session's current number.
    Returns the update that completed the number, or None if it never did.
    """
    number = session.current_number
    for stroke_idx in range(number.num_strokes):
        idle = 0
        while session.current_stroke is None:
            session.update((0.0, 0.0), False, FRAME_TIME)
            idle += 1
            if idle > max_idle_ticks:
                return None

        stroke = session.current_stroke
        for tick, sample in enumerate(synthesize_trace_inputs(stroke, steps, jitter, rng)):
            update = session.update(sample.position, sample.is_pressed, sample.delta_time)
            r = update.result
            if print_every and tick % print_every == 0:
                print(f"  stroke {stroke_idx + 1} tick {tick:4d}: valid={r.is_valid!s:5} "
                      f"raw={r.raw_progress:.3f} visual={r.visual_progress:.3f} "
                      f"dist={r.distance_from_stroke:.1f}")
            if NUMBER_COMPLETED in update.events:
                return update
            if update.events:
                break

        if session.stroke_index == stroke_idx:
            # Stroke never completed
            return None

    return None


# ===============================
# CLI
# ===============================

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Number Tracer engine tools")
    ap.add_argument("--db", default=config.NUMBER_DB_PATH, help="Path to numbers.json")
    ap.add_argument("--list", action="store_true", help="List numbers and their strokes")
    ap.add_argument("--number", help='Number to trace (e.g. "2")')
    ap.add_argument("--simulate", action="store_true", help="Replay a synthetic trace of the number")
    ap.add_argument("--steps", type=int, default=150, help="Input samples per stroke")
    ap.add_argument("--jitter", type=float, default=0.0, help="Gaussian jitter added to each sample")
    ap.add_argument("--seed", type=int, default=None, help="Random seed for jitter")
    ap.add_argument("--preview", help="Write a PNG preview of the last traced stroke")
    ap.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if (args.verbose or config.DEBUG_MODE) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    db = NumberDatabase(args.db)
    if len(db) == 0:
        print(f"Error: no numbers loaded from {args.db}")
        return 1

    if args.list:
        print(f"Numbers ({len(db)}):")
        for number in db.numbers:
            strokes = ", ".join(
                f"{len(s.control_points)} pts/deg {s.degree}/r {s.tolerance_radius:g}" for s in number.strokes
            )
            print(f"  {number.name}: {number.num_strokes} stroke(s) [{strokes}] score {number.score_value}")

    if not args.simulate:
        return 0

    number = db.get_number(args.number) if args.number else db.get_number_by_index(0)
    if number is None:
        print(f"Error: number '{args.number}' not found (have: {', '.join(db.names())})")
        return 1

    session = TracingSession([number])
    rng = np.random.default_rng(args.seed)
    print(f"Tracing {number.name} ({number.num_strokes} strokes), jitter={args.jitter}")
    final = run_simulation(session, args.steps, args.jitter, rng, print_every=config.PRINT_EVERY)

    if final is None:
        print(f"Number {number.name} NOT completed (score {session.score})")
    else:
        print(f"Number {number.name} completed! Score: {session.score}")

    if args.preview:
        stroke = number.strokes[-1]
        renderer = UIRenderer()
        state = session.tracker.get_state(stroke)
        progress = final.result.visual_progress if final else 0.0
        frame = renderer.render_stroke_preview(
            stroke,
            state=state,
            visual_progress=progress,
            trace=session.trace.points,
            score=session.score,
            completed=final is not None,
        )
        cv2.imwrite(args.preview, frame)
        print(f"Preview written -> {args.preview}")

    return 0 if final is not None else 2


if __name__ == "__main__":
    sys.exit(main())
