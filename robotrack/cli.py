"""Command line entry point that runs the four-robot race on the terminal."""

from __future__ import annotations

import argparse
import sys

from robotrack.algorithms import default_algorithms
from robotrack.config import MAX_STEP, STEP_DELAY, level_config
from robotrack.simulation import Simulation


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="robotrack",
        description="Race four robots across a grid track to the opposite corners.",
    )
    parser.add_argument(
        "--level",
        type=int,
        choices=range(4),
        default=1,
        help="obstacle layout from 0 (none) to 3 (all); default 1",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=STEP_DELAY,
        help="seconds between two simulation steps",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=MAX_STEP,
        help="steps after which the simulation is stopped",
    )
    parser.add_argument(
        "--no-pause",
        action="store_true",
        help="do not wait for Enter at start and end",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the simulation; returns 1 once it has come to its end."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.delay < 0:
        parser.error("--delay must not be negative")
    if args.max_steps < 0:
        parser.error("--max-steps must not be negative")

    if args.no_pause:
        def pause() -> None:
            return None
    else:
        def pause() -> None:
            sys.stdin.readline()

    simulation = Simulation(
        level_config(args.level),
        output=sys.stdout,
        pause=pause,
        step_delay=args.delay,
        max_steps=args.max_steps,
    )
    outcome = simulation.run(default_algorithms())
    return 1 if outcome else 0


if __name__ == "__main__":
    sys.exit(main())