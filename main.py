from __future__ import annotations

import argparse

from flip.app.controller import ControllerConfig, GameController
from flip.logger import setup_logging


def run_game(tick_sec: float) -> None:
    cfg = ControllerConfig(tick_sec=tick_sec)
    ctrl = GameController(config=cfg)
    ctrl.run()


def main():
    ap = argparse.ArgumentParser(description="Reversi against the computer (you are black).")
    ap.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    ap.add_argument(
        "--log-file",
        default=None,
        help="Write logs to this file instead of stderr",
    )
    ap.add_argument(
        "--tick",
        type=float,
        default=0.2,
        help="Input polling interval in seconds (default: 0.2)",
    )

    args = ap.parse_args()

    setup_logging(args.log_level, args.log_file)
    run_game(args.tick)


if __name__ == "__main__":
    main()
