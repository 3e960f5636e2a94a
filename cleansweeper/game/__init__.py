"""
Cleansweeper game module.

Provides core game logic including board management and cell state.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    BoardGenerationError,
    GameState,
    MAX_GENERATION_ATTEMPTS,
    neighbor_positions,
)
from .environment import CleansweeperEnv, render_ansi

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "BoardGenerationError",
    "GameState",
    "MAX_GENERATION_ATTEMPTS",
    "neighbor_positions",
    "CleansweeperEnv",
    "render_ansi",
]
