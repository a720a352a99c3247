"""Terminal CLI entrypoint for Breather."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Mapping, Sequence

from breather.core.constants import DEFAULT_FPS, DEFAULT_MAX_SCALE, DEFAULT_MIN_SCALE
from breather.core.scheduler import AsyncioFrameScheduler
from breather.core.state import ScaleBounds
from breather.exercise.library import (
    DEFAULT_CATALOG,
    UnknownExerciseError,
    format_exercise_summary,
    get_exercise,
    list_exercises,
)
from breather.exercise.model import Exercise
from breather.exercise.parser import ExerciseParseError, load_catalog
from breather.ui.console import ConsoleSink
from breather.ui.controller import BreathingController

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Breather guided breathing exercises")
    parser.add_argument("--list", action="store_true", help="List available exercises")
    parser.add_argument(
        "--exercise",
        default=None,
        help="Run the given exercise id in the terminal",
    )
    parser.add_argument(
        "--cycles",
        type=int,
        default=0,
        help="Stop after this many completed cycles (0 = run until Ctrl+C)",
    )
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch web UI (NiceGUI) with the pulsing circle",
    )
    parser.add_argument(
        "--web-host",
        default="127.0.0.1",
        help="Host bind for --ui-web",
    )
    parser.add_argument(
        "--web-port",
        type=int,
        default=8088,
        help="Port for --ui-web",
    )
    parser.add_argument(
        "--catalog",
        default=None,
        help="Load exercises from a .json or .csv catalog instead of the built-in set",
    )
    parser.add_argument(
        "--min-scale",
        type=float,
        default=DEFAULT_MIN_SCALE,
        help="Circle scale at the end of an exhale",
    )
    parser.add_argument(
        "--max-scale",
        type=float,
        default=DEFAULT_MAX_SCALE,
        help="Circle scale at the end of an inhale",
    )
    parser.add_argument(
        "--fps",
        type=float,
        default=DEFAULT_FPS,
        help="Animation frames per second",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging verbosity",
    )
    return parser


def run_list(catalog: Mapping[str, Exercise]) -> int:
    for exercise_id, exercise in list_exercises(catalog):
        print(f"{exercise_id:<16} {format_exercise_summary(exercise)}")
    return 0


async def run_terminal(
    catalog: Mapping[str, Exercise],
    exercise_id: str,
    cycles: int,
    bounds: ScaleBounds,
    frame_interval_sec: float,
) -> int:
    controller = BreathingController(
        catalog,
        ConsoleSink(bounds),
        AsyncioFrameScheduler(frame_interval_sec),
        bounds,
        default_exercise_id=exercise_id,
    )
    controller.start()
    try:
        while controller.is_active:
            if cycles > 0 and controller.cycle_count >= cycles:
                break
            await asyncio.sleep(0.1)
    finally:
        controller.stop()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    try:
        catalog = load_catalog(args.catalog) if args.catalog else DEFAULT_CATALOG
        bounds = ScaleBounds(args.min_scale, args.max_scale)
        if args.fps <= 0:
            raise ValueError("--fps must be > 0")
        if args.exercise is not None:
            get_exercise(args.exercise, catalog)
    except (ExerciseParseError, UnknownExerciseError, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    frame_interval_sec = 1.0 / args.fps

    if args.list:
        return run_list(catalog)
    if args.ui_web:
        from breather.ui.web_app import run_web_ui

        return run_web_ui(
            catalog=catalog,
            host=args.web_host,
            port=args.web_port,
            bounds=bounds,
            frame_interval_sec=frame_interval_sec,
            default_exercise_id=args.exercise,
        )

    if args.exercise is None:
        parser.print_help()
        return 1

    try:
        return asyncio.run(
            run_terminal(
                catalog,
                args.exercise,
                max(0, args.cycles),
                bounds,
                frame_interval_sec,
            )
        )
    except KeyboardInterrupt:
        print("\nExercise stopped")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
