"""
Board module for Cleansweeper.

Implements the game board with random mine placement, flag/open moves,
automatic chording, optional toroidal wraparound and easy-mode undo.
"""
import logging
from dataclasses import dataclass, field, InitVar
from enum import Enum, auto
from typing import List, Tuple, Optional, Iterator

import numpy as np

from .cell import Cell, CellState

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

MAX_GENERATION_ATTEMPTS = 100

Position = Tuple[int, int]


class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class BoardGenerationError(RuntimeError):
    """Raised when no mine layout with a zero cell can be generated."""


@dataclass
class BoardConfig:
    """
    Configuration for a Cleansweeper board.

    Attributes:
        height: Number of rows.
        width: Number of columns.
        fraction: Probability that any given cell holds a mine.
        easy: Allow moves to be undone.
        torus: Wrap the board edges around.
    """

    height: int = 16
    width: int = 16
    fraction: float = 0.25
    easy: bool = False
    torus: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if not 0.0 <= self.fraction <= 1.0:
            raise ValueError("Mine fraction must be between 0 and 1")

    @property
    def num_cells(self) -> int:
        """Total number of cells on the board."""
        return self.height * self.width


# ============================================================================
# Topology
# ============================================================================

def neighbor_positions(
    row: int, col: int, height: int, width: int, torus: bool = False
) -> List[Position]:
    """
    Get the distinct positions surrounding a cell.

    Args:
        row: Row index of center cell.
        col: Column index of center cell.
        height: Number of rows on the board.
        width: Number of columns on the board.
        torus: Wrap around the edges instead of clipping at them.

    Returns:
        List of (row, col) tuples, never including the center itself.
    """
    neighbors: List[Position] = []
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            new_row = row + delta_row
            new_col = col + delta_col
            if torus:
                new_row %= height
                new_col %= width
            elif not (0 <= new_row < height and 0 <= new_col < width):
                continue
            position = (new_row, new_col)
            # Boards narrower than 3 wrap onto the same cells
            if position == (row, col) or position in neighbors:
                continue
            neighbors.append(position)
    return neighbors


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Cleansweeper game board.

    Manages the grid of cells, mine placement, flag/open moves with
    automatic chording, win/lose conditions and the easy-mode undo history.
    A fresh board starts with a random zero cell already opened.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    seed: Optional[int] = None
    auto_start: InitVar[bool] = True
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _game_state: GameState = GameState.PLAYING
    _history: List[Tuple[List[List[CellState]], GameState]] = field(
        default_factory=list, repr=False
    )
    _rng: np.random.Generator = field(init=False, repr=False)

    def __post_init__(self, auto_start: bool) -> None:
        """Seed the generator and deal the first game."""
        self._rng = np.random.default_rng(self.seed)
        self._init_grid()
        if auto_start:
            self.start()

    @classmethod
    def from_mines(
        cls, mines: np.ndarray, easy: bool = False, torus: bool = False
    ) -> "Board":
        """
        Build a board from a fixed mine layout.

        Nothing is opened; the caller makes the first move.

        Args:
            mines: 2D boolean array, True where a mine sits.
            easy: Allow moves to be undone.
            torus: Wrap the board edges around.
        """
        layout = np.asarray(mines, dtype=bool)
        if layout.ndim != 2:
            raise ValueError("Mine layout must be two-dimensional")
        height, width = layout.shape
        fraction = float(layout.mean()) if layout.size else 0.0
        config = BoardConfig(
            height=height, width=width, fraction=fraction, easy=easy, torus=torus
        )
        board = cls(config, auto_start=False)
        board._load_layout(layout)
        return board

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]

    def _load_layout(self, layout: np.ndarray) -> None:
        """Lay out mines, compute counts and clear game progress."""
        self._grid = [
            [Cell(is_mine=bool(layout[row, col])) for col in range(self.config.width)]
            for row in range(self.config.height)
        ]
        self._calculate_adjacent_mines()
        self._game_state = GameState.PLAYING
        self._history.clear()

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for row, col, cell in self._iter_cells():
            cell.adjacent_mines = sum(
                1 for r, c in self._get_neighbors(row, col)
                if self._grid[r][c].is_mine
            )

    def _get_zero_positions(self) -> List[Position]:
        """Get safe cells that have no mine neighbors."""
        return [
            (row, col) for row, col, cell in self._iter_cells()
            if not cell.is_mine and cell.adjacent_mines == 0
        ]

    def start(self) -> None:
        """
        Deal a new game.

        Each cell holds a mine independently with probability
        ``config.fraction``. A random zero cell is then opened, so play
        never begins with a guess.

        Raises:
            BoardGenerationError: If no layout with a zero cell turns up
                within ``MAX_GENERATION_ATTEMPTS`` tries.
        """
        shape = (self.config.height, self.config.width)
        for attempt in range(1, MAX_GENERATION_ATTEMPTS + 1):
            self._load_layout(self._rng.random(shape) < self.config.fraction)
            zero_positions = self._get_zero_positions()
            if zero_positions:
                break
            logger.debug("Layout attempt %d has no zero cell, retrying", attempt)
        else:
            raise BoardGenerationError(
                f"No layout with a zero cell after {MAX_GENERATION_ATTEMPTS} "
                f"attempts (fraction={self.config.fraction})"
            )

        row, col = zero_positions[self._rng.integers(len(zero_positions))]
        self._grid[row][col].open()
        self._flood(row, col)
        self._check_win_condition()
        logger.debug(
            "Dealt %dx%d board with %d mines, opened (%d, %d)",
            self.config.height, self.config.width, self.num_mines, row, col,
        )

    def reset(
        self, config: Optional[BoardConfig] = None, seed: Optional[int] = None
    ) -> None:
        """
        Restart with a new game.

        Args:
            config: Optional new board configuration.
            seed: Optional seed to restart the random generator with.

        Raises:
            BoardGenerationError: If the new game cannot be dealt. The
                current game is kept unchanged.
        """
        previous = (
            self.config, self.seed, self._rng,
            self._grid, self._game_state, list(self._history),
        )
        if config is not None:
            self.config = config
        if seed is not None:
            self.seed = seed
            self._rng = np.random.default_rng(seed)
        try:
            self.start()
        except BoardGenerationError:
            (
                self.config, self.seed, self._rng,
                self._grid, self._game_state, history,
            ) = previous
            self._history[:] = history
            raise
        logger.info(
            "Restarted %dx%d board (fraction=%.2f, easy=%s, torus=%s)",
            self.config.height, self.config.width, self.config.fraction,
            self.config.easy, self.config.torus,
        )

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, row: int, col: int) -> List[Position]:
        """Get neighboring positions under the board's topology."""
        return neighbor_positions(
            row, col, self.config.height, self.config.width, self.config.torus
        )

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.height and 0 <= col < self.config.width

    def _iter_cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Iterate over (row, col, cell) in row-major order."""
        for row, cells in enumerate(self._grid):
            for col, cell in enumerate(cells):
                yield row, col, cell

    def remaining_mines(self, row: int, col: int) -> int:
        """Count neighboring mines that have not been flagged."""
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            neighbor = self._grid[neighbor_row][neighbor_col]
            if neighbor.is_mine and not neighbor.is_flagged:
                count += 1
        return count

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def open(self, row: int, col: int) -> bool:
        """
        Open a cell at the given position.

        Opening a mine loses the game. Opening a safe cell floods
        outward through cells with no unflagged mines around them.

        Args:
            row: Row index to open.
            col: Column index to open.

        Returns:
            True if the board changed, False otherwise.
        """
        if not self._can_act(row, col):
            return False

        self._save_snapshot()
        cell = self._grid[row][col]
        cell.open()
        self._resolve_move(row, col, cell)
        return True

    def flag(self, row: int, col: int) -> bool:
        """
        Flag a cell at the given position.

        Flagging a safe cell loses the game. Flagging a mine chords every
        opened neighbor whose remaining count drops to zero.

        Args:
            row: Row index to flag.
            col: Column index to flag.

        Returns:
            True if the board changed, False otherwise.
        """
        if not self._can_act(row, col):
            return False

        self._save_snapshot()
        cell = self._grid[row][col]
        cell.flag()
        self._resolve_move(row, col, cell)
        return True

    def _can_act(self, row: int, col: int) -> bool:
        """Check if a cell can be flagged or opened."""
        if self._game_state != GameState.PLAYING:
            return False
        if not self._is_valid_position(row, col):
            return False
        return self._grid[row][col].is_hidden

    def _resolve_move(self, row: int, col: int, cell: Cell) -> None:
        """Apply the consequences of a cell leaving the hidden state."""
        if cell.is_exploded:
            self._game_state = GameState.LOST
            logger.info("Game lost at (%d, %d)", row, col)
            return

        self._flood(row, col)
        self._check_win_condition()

    def _flood(self, row: int, col: int) -> None:
        """
        Open hidden neighbors of every zero-remaining opened cell.

        Starts from the cell itself if it is opened, or from its opened
        neighbors if it was just flagged.
        """
        if self._grid[row][col].is_opened:
            to_flood = [(row, col)]
        else:
            to_flood = [
                (r, c) for r, c in self._get_neighbors(row, col)
                if self._grid[r][c].is_opened
            ]

        while to_flood:
            center_row, center_col = to_flood.pop()
            if self.remaining_mines(center_row, center_col) != 0:
                continue
            for neighbor_row, neighbor_col in self._get_neighbors(
                center_row, center_col
            ):
                neighbor = self._grid[neighbor_row][neighbor_col]
                # Every mine around a zero-remaining cell is flagged
                if neighbor.is_hidden:
                    neighbor.open()
                    to_flood.append((neighbor_row, neighbor_col))

    def _check_win_condition(self) -> None:
        """Win once every cell is opened or flagged."""
        if self._game_state != GameState.PLAYING:
            return
        if all(cell.is_opened or cell.is_flagged for _, _, cell in self._iter_cells()):
            self._game_state = GameState.WON
            logger.info("Game won")

    # ========================================================================
    # Undo (easy mode)
    # ========================================================================

    def _save_snapshot(self) -> None:
        """Remember the cell states before a move, in easy mode only."""
        if not self.config.easy:
            return
        states = [[cell.state for cell in cells] for cells in self._grid]
        self._history.append((states, self._game_state))

    @property
    def can_undo(self) -> bool:
        """Check if there is a move to take back."""
        return self.config.easy and bool(self._history)

    def undo(self) -> bool:
        """
        Take back the last move, including one that lost the game.

        Returns:
            True if a move was undone, False if not in easy mode or
            there is nothing to undo.
        """
        if not self.can_undo:
            return False
        states, game_state = self._history.pop()
        for row, col, cell in self._iter_cells():
            cell.state = states[row][col]
        self._game_state = game_state
        logger.info("Move undone, %d left in history", len(self._history))
        return True

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    @property
    def num_mines(self) -> int:
        """Total mines on the board."""
        return sum(1 for _, _, cell in self._iter_cells() if cell.is_mine)

    @property
    def flags_placed(self) -> int:
        """Number of flagged cells."""
        return sum(1 for _, _, cell in self._iter_cells() if cell.is_flagged)

    @property
    def cells_opened(self) -> int:
        """Number of opened cells."""
        return sum(1 for _, _, cell in self._iter_cells() if cell.is_opened)

    @property
    def mines_remaining(self) -> int:
        """Mines not yet flagged."""
        return self.num_mines - self.flags_placed

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = opened, with count of unflagged neighboring mines
                9 = exploded
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for row, col, cell in self._iter_cells():
            if cell.is_hidden:
                obs[row, col] = -1
            elif cell.is_flagged:
                obs[row, col] = -2
            elif cell.is_exploded:
                obs[row, col] = 9
            else:
                obs[row, col] = self.remaining_mines(row, col)
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells that can still be flagged or opened.

        Returns:
            List of (row, col) positions of hidden cells.
        """
        return [
            (row, col) for row, col, cell in self._iter_cells() if cell.is_hidden
        ]
