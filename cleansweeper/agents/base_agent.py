"""
Base agent interface for Cleansweeper players.

Defines the abstract interface that all agents must implement.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

import numpy as np

from ..game.board import neighbor_positions


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for Cleansweeper agents.

    All agents must implement the select_action method to choose which
    cell to open or flag based on the current observation. Actions follow
    CleansweeperEnv: index k < cells opens cell k, cells + k flags it.
    """

    def __init__(
        self, board_height: int, board_width: int, torus: bool = False
    ) -> None:
        """
        Initialize the agent.

        Args:
            board_height: Number of rows in the board.
            board_width: Number of columns in the board.
            torus: Whether the board edges wrap around.
        """
        self.board_height = board_height
        self.board_width = board_width
        self.torus = torus
        self.total_cells = board_height * board_width

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Action index.
        """
        pass

    def action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        index = action % self.total_cells
        return index // self.board_width, index % self.board_width

    def open_action(self, row: int, col: int) -> int:
        """Action index that opens (row, col)."""
        return row * self.board_width + col

    def flag_action(self, row: int, col: int) -> int:
        """Action index that flags (row, col)."""
        return self.total_cells + row * self.board_width + col

    def is_flag_action(self, action: int) -> bool:
        """Check whether an action flags rather than opens."""
        return action >= self.total_cells

    def neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """Neighboring positions under the board's topology."""
        return neighbor_positions(
            row, col, self.board_height, self.board_width, self.torus
        )

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """
        Get valid actions mask from observation.

        Args:
            observation: 2D array of cell states.

        Returns:
            Boolean mask where True = valid action.
        """
        # Hidden cells (value -1) can be opened or flagged
        hidden = observation.flatten() == -1
        return np.concatenate([hidden, hidden])

    def reset(self) -> None:
        """Reset agent state for new episode."""
        pass
