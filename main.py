"""Entry point for the Lorenz Attractor explorer.

Builds a SimulationEngine from the command line options and opens the
Qt window that animates it.
"""

import argparse
import logging
import sys

import numpy as np
from PyQt6.QtWidgets import QApplication

from app_window import AppWindow
from engine import DEFAULT_NUM_TRACES, SimulationEngine
from simulation import LorenzParams
from trace_buffer import DEFAULT_CAPACITY
from ui_common import MAX_STEPS_PER_FRAME, MAX_TRACES


def build_parser():
    parser = argparse.ArgumentParser(
        description="Animate Lorenz attractor trajectories in real time.",
    )
    parser.add_argument(
        "--traces",
        type=int,
        default=DEFAULT_NUM_TRACES,
        choices=range(1, MAX_TRACES + 1),
        metavar=f"1..{MAX_TRACES}",
        help=f"Number of trajectories (default: {DEFAULT_NUM_TRACES})",
    )
    parser.add_argument(
        "--steps-per-frame",
        type=int,
        default=1,
        choices=range(1, MAX_STEPS_PER_FRAME + 1),
        metavar=f"1..{MAX_STEPS_PER_FRAME}",
        help="Euler steps per rendered frame (default: 1)",
    )
    parser.add_argument(
        "--capacity",
        type=int,
        default=DEFAULT_CAPACITY,
        help=f"Points kept per trajectory (default: {DEFAULT_CAPACITY})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for start-point generation (default: random)",
    )
    parser.add_argument(
        "--paused",
        action="store_true",
        help="Start with the simulation paused",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser


def build_engine(args):
    """Create the engine described by parsed arguments."""
    return SimulationEngine(
        params=LorenzParams(steps_per_frame=args.steps_per_frame),
        num_traces=args.traces,
        capacity=args.capacity,
        rng=np.random.default_rng(args.seed),
        paused=args.paused,
    )


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        engine = build_engine(args)
    except ValueError as exc:
        parser.error(str(exc))

    app = QApplication(sys.argv[:1])
    window = AppWindow(engine)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
