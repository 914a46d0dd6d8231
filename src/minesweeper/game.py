"""
Interactive game loop.

Reads one key at a time, applies it to the board and redraws the
board in place using ANSI cursor movement.
"""
import logging
import sys
from enum import Enum, auto
from typing import Callable, Dict, Optional, TextIO, Tuple

from .board import Board, CELL_WIDTH


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()
    QUIT = auto()

    @property
    def is_over(self) -> bool:
        """Every state except PLAYING ends the loop."""
        return self is not GameState.PLAYING


QUIT_KEY = b"q"
FLAG_KEY = b"f"
OPEN_KEY = b" "

MOVE_KEYS: Dict[bytes, Tuple[int, int]] = {
    b"w": (-1, 0),
    b"a": (0, -1),
    b"s": (1, 0),
    b"d": (0, 1),
}

WIN_MESSAGE = "You win!"
LOSE_MESSAGE = "Game Over"


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    Drives a single game on a board.

    Bombs are placed on the first open so the first move is always safe.
    """

    def __init__(self, board: Board, output: Optional[TextIO] = None) -> None:
        self.board = board
        self.output = output or sys.stdout
        self.state = GameState.PLAYING
        self.first_step = True

    def start(self) -> None:
        """Print the initial board."""
        self._write(self.board.render(game_over=False))

    def run(self, read_key: Callable[[], bytes]) -> GameState:
        """
        Play until the game is won, lost or quit.

        Args:
            read_key: Blocking callable returning one byte, b"" at end
                of input.

        Returns:
            The final game state.
        """
        self.start()
        while not self.state.is_over:
            key = read_key()
            if not key:
                logger.info("End of input, quitting")
                self.state = GameState.QUIT
                break
            self.handle_key(key)
        return self.state

    def handle_key(self, key: bytes) -> GameState:
        """Apply a single keystroke and redraw."""
        if self.state.is_over:
            return self.state

        if key == QUIT_KEY:
            self.state = GameState.QUIT
            return self.state

        if key in MOVE_KEYS:
            self.board.move_cursor(*MOVE_KEYS[key])
        elif key == FLAG_KEY:
            self._flag()
        elif key == OPEN_KEY:
            self._open()

        if self.state.is_over:
            self._finish()
        else:
            self.redraw()
        return self.state

    def _flag(self) -> None:
        self.board.flag_cell()
        # an empty board before the first open is not a win
        if not self.first_step and self.board.check_win():
            self.state = GameState.WON

    def _open(self) -> None:
        if self.first_step:
            self.first_step = False
            # boards can arrive with bombs already placed
            if not self.board.is_randomized:
                self.board.randomize()
        if self.board.open_cell():
            self.state = GameState.LOST

    # ========================================================================
    # Output
    # ========================================================================

    def redraw(self, game_over: bool = False) -> None:
        """Move the terminal cursor back over the board and reprint it."""
        self._write(
            f"\033[{self.board.rows}A"
            f"\033[{CELL_WIDTH * self.board.cols}D"
            + self.board.render(game_over=game_over)
        )

    def _finish(self) -> None:
        won = self.state == GameState.WON
        logger.info("Game finished: %s", self.state.name)
        self.redraw(game_over=not won)
        self._write((WIN_MESSAGE if won else LOSE_MESSAGE) + "\n")

    def _write(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()
