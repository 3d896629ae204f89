"""Command-line entry point.

Run with: ``python -m termtris`` (or the installed ``termtris`` script).
Pass ``--help`` for the available flags.
"""

from __future__ import annotations

import argparse
from typing import List, Optional


FRONTENDS = ("curses", "pygame")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="termtris", description="Falling-block puzzle game.")
    parser.add_argument("--debug", action="store_true", help="Show the diagnostic log overlay.")
    parser.add_argument(
        "--fast",
        action="store_true",
        help="Advance levels ten times faster (for demos and testing).",
    )
    parser.add_argument(
        "--frontend",
        choices=FRONTENDS,
        default="curses",
        help="Draw in the terminal (default) or in a pygame window.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece sequence.")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    # Front-ends are imported lazily so the terminal version runs without a
    # display and the window version without a tty.
    if args.frontend == "pygame":
        from .run_pygame import main as run
    else:
        from .run_curses import main as run
    game = run(debug=args.debug, fast=args.fast, seed=args.seed)
    print(
        f"Level {game.stats.level}  Blocks {game.stats.blocks}  "
        f"Lines {game.stats.lines}  Score {game.stats.score}"
    )


if __name__ == "__main__":
    main()
