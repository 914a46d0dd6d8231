"""
Command-line entry point.

Usage:
    minesweeper start [rows cols bomb_percentage]
    minesweeper -h
"""
import argparse
import logging
import sys
from typing import List, Optional

from .board import (
    Board,
    BoardConfig,
    DEFAULT_BOMB_PERCENTAGE,
    DEFAULT_COLS,
    DEFAULT_ROWS,
    MAX_BOMB_PERCENTAGE,
    MAX_SIZE,
    MIN_BOMB_PERCENTAGE,
    MIN_SIZE,
)
from .game import Game
from .terminal import TerminalError, TerminalMode


logger = logging.getLogger(__name__)


EPILOG = f"""\
Parameters:
  rows              Number of rows ({MIN_SIZE}-{MAX_SIZE}, default: {DEFAULT_ROWS})
  cols              Number of columns ({MIN_SIZE}-{MAX_SIZE}, default: {DEFAULT_COLS})
  bomb_percentage   Percentage of bombs ({MIN_BOMB_PERCENTAGE}-{MAX_BOMB_PERCENTAGE}, default: {DEFAULT_BOMB_PERCENTAGE})

Controls:
  w/a/s/d    Move cursor
  space      Open cell
  f          Flag/unflag cell
  q          Quit

Examples:
  %(prog)s start
  %(prog)s start 15 20 20
"""


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="minesweeper",
        description="MineSweeper Game",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    start_parser = subparsers.add_parser(
        "start",
        help="Start a game (default settings, or rows cols bomb_percentage)",
    )
    start_parser.add_argument(
        "params",
        nargs="*",
        type=int,
        metavar="PARAM",
        help="rows cols bomb_percentage; give all three or none",
    )
    return parser


def parse_config(
    parser: argparse.ArgumentParser, params: List[int]
) -> BoardConfig:
    """Validate start parameters, exiting through the parser on error."""
    if not params:
        return BoardConfig()
    if len(params) != 3:
        parser.error(
            "Must provide all 3 parameters (rows, cols, bomb_percentage) "
            "or none"
        )

    rows, cols, bomb_percentage = params
    if not MIN_SIZE <= rows <= MAX_SIZE:
        parser.error(f"rows must be between {MIN_SIZE} and {MAX_SIZE}")
    if not MIN_SIZE <= cols <= MAX_SIZE:
        parser.error(f"cols must be between {MIN_SIZE} and {MAX_SIZE}")
    if not MIN_BOMB_PERCENTAGE <= bomb_percentage <= MAX_BOMB_PERCENTAGE:
        parser.error(
            "bomb_percentage must be between "
            f"{MIN_BOMB_PERCENTAGE} and {MAX_BOMB_PERCENTAGE}"
        )
    return BoardConfig(rows, cols, bomb_percentage)


def play(config: BoardConfig) -> int:
    """Run one game in the terminal and return the exit status."""
    game = Game(Board(config))
    try:
        with TerminalMode() as terminal:
            state = game.run(terminal.read_byte)
    except TerminalError as error:
        print(error, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    logger.debug("Exiting with state %s", state.name)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the appropriate command."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command != "start":
        parser.print_help()
        return 0

    config = parse_config(parser, args.params)
    return play(config)


if __name__ == "__main__":
    sys.exit(main())
