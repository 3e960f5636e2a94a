"""
Cell module for Cleansweeper.

Represents individual cells on the game board with their state
(hidden/flagged/opened/exploded) and content (mine or safe).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    FLAGGED = auto()
    OPENED = auto()
    EXPLODED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Cleansweeper grid.

    A flag is itself a move: flagging a mine marks it for good, flagging
    a safe cell blows it up. Opening works the other way around.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells, flagged or not.
        state: Current visual state.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def open(self) -> bool:
        """
        Open this cell.

        Returns:
            True if the cell changed state, False if it was not hidden.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.EXPLODED if self.is_mine else CellState.OPENED
        return True

    def flag(self) -> bool:
        """
        Flag this cell.

        Returns:
            True if the cell changed state, False if it was not hidden.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.FLAGGED if self.is_mine else CellState.EXPLODED
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_opened(self) -> bool:
        """Check if cell is opened."""
        return self.state == CellState.OPENED

    @property
    def is_exploded(self) -> bool:
        """Check if cell blew up."""
        return self.state == CellState.EXPLODED
