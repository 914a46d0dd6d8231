"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their content
(empty/bomb) and status (closed/opened/flagged).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellContent(Enum):
    """What a cell holds. Fixed once bombs are placed."""

    EMPTY = auto()
    BOMB = auto()


class CellStatus(Enum):
    """Possible visual states of a cell."""

    CLOSED = auto()
    OPENED = auto()
    FLAGGED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        content: Whether the cell is empty or holds a bomb.
        status: Current visual status (closed, opened, or flagged).
    """

    content: CellContent = CellContent.EMPTY
    status: CellStatus = CellStatus.CLOSED

    def open(self) -> bool:
        """
        Open this cell.

        Returns:
            True if the cell was opened, False if it was already
            opened or is flagged.
        """
        if self.status != CellStatus.CLOSED:
            return False
        self.status = CellStatus.OPENED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is opened.
        """
        if self.status == CellStatus.OPENED:
            return False
        if self.status == CellStatus.CLOSED:
            self.status = CellStatus.FLAGGED
        else:
            self.status = CellStatus.CLOSED
        return True

    @property
    def is_bomb(self) -> bool:
        """Check if cell holds a bomb."""
        return self.content == CellContent.BOMB

    @property
    def is_closed(self) -> bool:
        """Check if cell is closed."""
        return self.status == CellStatus.CLOSED

    @property
    def is_opened(self) -> bool:
        """Check if cell is opened."""
        return self.status == CellStatus.OPENED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.status == CellStatus.FLAGGED

    def to_observation(self) -> int:
        """
        Convert cell to a numeric code for board snapshots.

        Returns:
            -1: Closed cell
            -2: Flagged cell
            9: Opened bomb
            0: Opened empty cell (the board adds the neighbour count)
        """
        if self.status == CellStatus.CLOSED:
            return -1
        if self.status == CellStatus.FLAGGED:
            return -2
        if self.is_bomb:
            return 9
        return 0
