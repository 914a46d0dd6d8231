"""
Pytest configuration and shared fixtures.
"""
import io
import os

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, CellContent, Game


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 10x10 board with 10% bombs."""
    return Board(seed=1234)


@pytest.fixture
def empty_board() -> Board:
    """Create a 5x5 board with no bombs for flood fill testing."""
    return Board(BoardConfig(5, 5, 0), seed=0)


@pytest.fixture
def corner_bomb_board() -> Board:
    """Create a 5x5 board with a single bomb at (4, 4)."""
    board = Board(BoardConfig(5, 5, 4), seed=0)
    board.place_bombs([(4, 4)])
    return board


@pytest.fixture
def dense_board() -> Board:
    """Create a board where the safe zone limits bomb placement."""
    return Board(BoardConfig(5, 5, 100), seed=7)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def closed_cell() -> Cell:
    """Create a closed empty cell."""
    return Cell()


@pytest.fixture
def bomb_cell() -> Cell:
    """Create a cell containing a bomb."""
    return Cell(content=CellContent.BOMB)


@pytest.fixture
def opened_cell() -> Cell:
    """Create an opened empty cell."""
    cell = Cell()
    cell.open()
    return cell


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def output() -> io.StringIO:
    """Capture game output."""
    return io.StringIO()


@pytest.fixture
def corner_bomb_game(corner_bomb_board: Board, output: io.StringIO) -> Game:
    """Game on the single corner bomb board."""
    return Game(corner_bomb_board, output=output)


# ============================================================================
# Terminal Fixtures
# ============================================================================

@pytest.fixture
def pty_pair():
    """Open a pseudo-terminal; yields (master_fd, slave_stream)."""
    master, slave = os.openpty()
    stream = os.fdopen(slave, "r")
    try:
        yield master, stream
    finally:
        stream.close()
        os.close(master)
