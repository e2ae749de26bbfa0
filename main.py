"""
main.py — Entry point.

Run with:
    python main.py [--cols N] [--rows N] [--mute] [--no-save]

Requires:
    pip install pygame
"""

import argparse
import logging

from gridsnake.config import COLS, ROWS, MIN_CELLS, MAX_CELLS
from gridsnake.frontend import PygameFrontend
from gridsnake.highscore import FileHighScoreStore, MemoryHighScoreStore


def _board_size(value: str) -> int:
    cells = int(value)
    return max(MIN_CELLS, min(MAX_CELLS, cells))


def main() -> None:
    parser = argparse.ArgumentParser(description="Single-player grid snake")
    parser.add_argument("--cols", type=_board_size, default=COLS,
                        help=f"board width in cells ({MIN_CELLS}-{MAX_CELLS})")
    parser.add_argument("--rows", type=_board_size, default=ROWS,
                        help=f"board height in cells ({MIN_CELLS}-{MAX_CELLS})")
    parser.add_argument("--mute", action="store_true", help="disable sound")
    parser.add_argument("--no-save", action="store_true",
                        help="keep the high score in memory only")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    store = MemoryHighScoreStore() if args.no_save else FileHighScoreStore()
    PygameFrontend(args.cols, args.rows, store, mute=args.mute).run()


if __name__ == "__main__":
    main()
