"""
Gymnasium environment wrapper for Cleansweeper.

Provides a standard RL interface so automated players can drive a board.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig


# ============================================================================
# Cleansweeper Environment
# ============================================================================

class CleansweeperEnv(gym.Env):
    """
    Gymnasium environment for Cleansweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = opened cell with count of unflagged neighboring mines
        - 9 = exploded cell

    Actions:
        Discrete action space of size 2 * width * height.
        Action i < cells opens cell i, action i >= cells flags
        cell i - cells, where cell k is at (k // width, k % width).

    Rewards:
        - +1 for a move that keeps the game going
        - +10 for winning the game
        - -10 for losing the game
        - -0.1 for invalid action (cell not hidden)
    """

    metadata = {"render_modes": ["human", "ansi", "rgb_array"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the Cleansweeper environment.

        Args:
            config: Board configuration (default: 16x16, quarter mines).
            render_mode: How to render the environment.
            seed: Seed for the board's mine placement.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.board = Board(self.config, seed=seed)
        self.render_mode = render_mode
        self._num_cells = self.config.num_cells

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )

        # Open every cell, then flag every cell
        self.action_space = spaces.Discrete(2 * self._num_cells)

        self._steps = 0
        self._renderer = None
        self._window = None

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.board.reset(seed=seed)
        self._steps = 0

        if self.render_mode == "human":
            self.render()

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to open, or cells + index to flag.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        flag, row, col = self.action_to_move(action)
        self._steps += 1

        reward = self._calculate_reward(flag, row, col)

        observation = self.board.get_observation()
        terminated = not self.board.is_playing
        truncated = False
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return observation, reward, terminated, truncated, info

    def action_to_move(self, action: int) -> Tuple[bool, int, int]:
        """Convert flat action index to (is_flag, row, col)."""
        flag = action >= self._num_cells
        index = action - self._num_cells if flag else action
        return flag, index // self.config.width, index % self.config.width

    def move_to_action(self, flag: bool, row: int, col: int) -> int:
        """Convert (is_flag, row, col) to flat action index."""
        index = row * self.config.width + col
        return index + self._num_cells if flag else index

    def _calculate_reward(self, flag: bool, row: int, col: int) -> float:
        """
        Perform the move and score it.

        Args:
            flag: Flag the cell rather than open it.
            row: Row index.
            col: Column index.

        Returns:
            Reward value.
        """
        move = self.board.flag if flag else self.board.open
        if not move(row, col):
            return -0.1

        if self.board.is_won:
            return 10.0
        if self.board.is_lost:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "opened": self.board.cells_opened,
            "flagged": self.board.flags_placed,
            "total_safe": self._num_cells - self.board.num_mines,
            "game_state": self.board.game_state.name,
            "valid_actions": len(self.board.get_valid_actions()),
        }

    def render(self) -> Optional[Any]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_ansi(self.board)
        if self.render_mode == "rgb_array":
            return self._render_frame()
        if self.render_mode == "human":
            self._render_frame()
        return None

    def _render_frame(self) -> Optional[np.ndarray]:
        """Draw the board with pygame, to the window or an RGB array."""
        import pygame

        from ..ui.renderer import BoardRenderer, WINDOW_SIZE

        if self._renderer is None:
            pygame.init()
            self._renderer = BoardRenderer(self.board)

        if self.render_mode == "human":
            if self._window is None:
                self._window = pygame.display.set_mode(WINDOW_SIZE)
                pygame.display.set_caption("Cleansweeper")
            pygame.event.pump()
            self._renderer.draw(self._window)
            pygame.display.flip()
            return None

        surface = pygame.Surface(WINDOW_SIZE)
        self._renderer.draw(surface)
        arr = pygame.surfarray.array3d(surface)
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def close(self) -> None:
        """Release the pygame window, if one was opened."""
        if self._renderer is not None:
            import pygame

            pygame.quit()
            self._renderer = None
            self._window = None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        hidden = np.zeros(self._num_cells, dtype=bool)
        for row, col in self.board.get_valid_actions():
            hidden[row * self.config.width + col] = True
        return np.concatenate([hidden, hidden])


# ============================================================================
# Text Rendering
# ============================================================================

def render_ansi(board: Board) -> str:
    """Render board as ASCII string."""
    lines = []
    obs = board.get_observation()

    for row in range(board.config.height):
        row_str = ""
        for col in range(board.config.width):
            val = obs[row, col]
            if val == -1:
                row_str += "."
            elif val == -2:
                row_str += "F"
            elif val == 9:
                row_str += "*"
            elif val == 0:
                row_str += " "
            else:
                row_str += str(val)
            row_str += " "
        lines.append(row_str)

    return "\n".join(lines)
