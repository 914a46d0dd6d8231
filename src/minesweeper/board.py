"""
Board module for Minesweeper game.

Implements the game board with bomb placement, cell opening,
flagging, cursor movement and text rendering.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellContent, CellStatus


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

DEFAULT_ROWS = 10
DEFAULT_COLS = 10
DEFAULT_BOMB_PERCENTAGE = 10

MIN_SIZE = 5
MAX_SIZE = 50
MIN_BOMB_PERCENTAGE = 1
MAX_BOMB_PERCENTAGE = 90

CELL_WIDTH = 3
SAFE_RADIUS = 1


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        bomb_percentage: Share of cells holding bombs, clamped to [0, 100].
    """

    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    bomb_percentage: int = DEFAULT_BOMB_PERCENTAGE

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Reject empty boards and clamp the bomb percentage."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        self.bomb_percentage = min(max(self.bomb_percentage, 0), 100)

    @property
    def bomb_count(self) -> int:
        """Number of bombs the percentage asks for."""
        return self.rows * self.cols * self.bomb_percentage // 100


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Manages the grid of cells, the cursor, bomb placement and
    the opening/flagging rules. Bombs are placed lazily by
    randomize() so the cells around the cursor stay safe.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    seed: Optional[int] = None
    rng: Optional[np.random.Generator] = field(default=None, repr=False)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _cursor_row: int = 0
    _cursor_col: int = 0
    _bombs_placed: int = 0
    _randomized: bool = False

    def __post_init__(self) -> None:
        """Initialize the grid and random generator after creation."""
        if self.rng is None:
            self.rng = np.random.default_rng(self.seed)
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.cols)]
            for _ in range(self.config.rows)
        ]

    def randomize(self) -> None:
        """
        Place bombs at random, keeping the 3x3 block around the cursor clear.

        Raises:
            RuntimeError: If bombs were already placed.
        """
        if self._randomized:
            raise RuntimeError("Bombs have already been placed")

        eligible = self._get_eligible_positions()
        count = self.config.bomb_count
        if count > len(eligible):
            logger.info(
                "Clamping bomb count from %d to %d eligible cells",
                count, len(eligible),
            )
            count = len(eligible)

        chosen = self.rng.choice(len(eligible), size=count, replace=False)
        self.place_bombs(eligible[index] for index in chosen)
        logger.debug("Placed %d bombs", self._bombs_placed)

    def _get_eligible_positions(self) -> List[Tuple[int, int]]:
        """Get all positions outside the safe zone around the cursor."""
        positions = []
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                if not self._in_safe_zone(row, col):
                    positions.append((row, col))
        return positions

    def _in_safe_zone(self, row: int, col: int) -> bool:
        """Check Chebyshev distance from the cursor."""
        return (
            abs(row - self._cursor_row) <= SAFE_RADIUS
            and abs(col - self._cursor_col) <= SAFE_RADIUS
        )

    def place_bombs(self, positions: Iterable[Tuple[int, int]]) -> None:
        """
        Put bombs at the given positions and mark the board as randomized.

        Args:
            positions: (row, col) pairs; duplicates count once.
        """
        for row, col in positions:
            cell = self.cell(row, col)
            if not cell.is_bomb:
                cell.content = CellContent.BOMB
                self._bombs_placed += 1
        self._randomized = True

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(
        self, row: int, col: int
    ) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.in_bounds(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    def count_neighbors(self, row: int, col: int) -> int:
        """Count bombs adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_bomb:
                count += 1
        return count

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def open_cell(self) -> bool:
        """
        Open the cell under the cursor.

        Empty cells with no adjacent bombs open their neighbours too,
        spreading until numbered cells are reached.

        Returns:
            True if the cell was a bomb, False otherwise (including
            when the cell was not closed).
        """
        cell = self.cell(self._cursor_row, self._cursor_col)
        if not cell.is_closed:
            return False
        if cell.is_bomb:
            cell.open()
            return True
        self._flood_open(self._cursor_row, self._cursor_col)
        return False

    def _flood_open(self, row: int, col: int) -> None:
        """Open a region of empty cells using an explicit stack."""
        stack = [(row, col)]
        while stack:
            current_row, current_col = stack.pop()
            cell = self._grid[current_row][current_col]
            # opened doubles as the visited marker
            if not cell.is_closed or cell.is_bomb:
                continue
            cell.open()
            if self.count_neighbors(current_row, current_col) != 0:
                continue
            for neighbor_row, neighbor_col in self._get_neighbors(
                current_row, current_col
            ):
                neighbor = self._grid[neighbor_row][neighbor_col]
                if neighbor.is_closed and not neighbor.is_bomb:
                    stack.append((neighbor_row, neighbor_col))

    def flag_cell(self) -> bool:
        """
        Toggle flag on the cell under the cursor.

        Returns:
            True if flag was toggled, False if the cell is opened.
        """
        return self.cell(self._cursor_row, self._cursor_col).toggle_flag()

    def move_cursor(self, d_row: int, d_col: int) -> None:
        """Move the cursor by a step, stopping at the board edges."""
        self._cursor_row = min(
            max(self._cursor_row + d_row, 0), self.config.rows - 1
        )
        self._cursor_col = min(
            max(self._cursor_col + d_col, 0), self.config.cols - 1
        )

    def check_win(self) -> bool:
        """
        Check whether every bomb is flagged.

        Flags on empty cells do not block a win.
        """
        flagged_bombs = 0
        for row in self._grid:
            for cell in row:
                if cell.is_bomb:
                    if not cell.is_flagged:
                        return False
                    flagged_bombs += 1
        return flagged_bombs == self._bombs_placed

    # ========================================================================
    # Rendering
    # ========================================================================

    def render(self, game_over: bool = False) -> str:
        """
        Render the board as text, one line per row.

        Args:
            game_over: Show every bomb as '@'.

        Returns:
            Rows of 3-character cells; the cursor cell is bracketed.
        """
        lines = []
        for row in range(self.config.rows):
            row_str = ""
            for col in range(self.config.cols):
                symbol = self._cell_symbol(row, col, game_over)
                if self.is_cursor_cell(row, col):
                    row_str += f"[{symbol}]"
                else:
                    row_str += f" {symbol} "
            lines.append(row_str + "\n")
        return "".join(lines)

    def _cell_symbol(self, row: int, col: int, game_over: bool) -> str:
        """Pick the character shown for a single cell."""
        cell = self._grid[row][col]
        if game_over and cell.is_bomb:
            return "@"
        if cell.is_opened:
            if cell.is_bomb:
                return "."
            neighbors = self.count_neighbors(row, col)
            return str(neighbors) if neighbors > 0 else " "
        if cell.is_flagged:
            return "?"
        return "."

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def cursor(self) -> Tuple[int, int]:
        """Current (row, col) of the cursor."""
        return self._cursor_row, self._cursor_col

    @property
    def bombs_placed(self) -> int:
        """Number of bombs actually on the grid."""
        return self._bombs_placed

    @property
    def is_randomized(self) -> bool:
        """Check if bombs have been placed."""
        return self._randomized

    def is_cursor_cell(self, row: int, col: int) -> bool:
        return row == self._cursor_row and col == self._cursor_col

    def cell(self, row: int, col: int) -> Cell:
        """
        Get cell at position.

        Raises:
            IndexError: If the position is outside the board.
        """
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is outside the board")
        return self._grid[row][col]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D numpy array where:
                -1 = closed
                -2 = flagged
                0-8 = opened with adjacent count
                9 = opened bomb
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                cell = self._grid[row][col]
                value = cell.to_observation()
                if cell.status == CellStatus.OPENED and not cell.is_bomb:
                    value = self.count_neighbors(row, col)
                obs[row, col] = value
        return obs
