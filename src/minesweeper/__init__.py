"""
Terminal Minesweeper.

Provides the board model, the raw-mode terminal guard and the
keyboard-driven game loop.
"""
from .cell import Cell, CellContent, CellStatus
from .board import Board, BoardConfig
from .game import Game, GameState
from .terminal import TerminalError, TerminalMode

__all__ = [
    "Cell",
    "CellContent",
    "CellStatus",
    "Board",
    "BoardConfig",
    "Game",
    "GameState",
    "TerminalError",
    "TerminalMode",
]
