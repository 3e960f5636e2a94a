"""
Pytest configuration and shared fixtures.
"""
import os
import sys
from pathlib import Path

import numpy as np
import pytest

# Headless pygame for renderer and window tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

# Add repository root to path so main.py and the package import uninstalled
sys.path.insert(0, str(Path(__file__).parent.parent))

from cleansweeper.game import Board, BoardConfig, Cell


# ============================================================================
# Layouts
# ============================================================================

# Opening (1, 0) leaves (0, 2), (1, 2), (2, 2) hidden. Flagging (0, 2)
# drops the count at (0, 1) to zero, which chords (1, 2) open.
CHORD_LAYOUT = np.array([
    [False, False, True],
    [False, False, False],
    [False, False, True],
])

SINGLE_MINE_LAYOUT = np.array([
    [True, False, False],
    [False, False, False],
    [False, False, False],
])


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def chord_board() -> Board:
    """3x3 board with mines at (0, 2) and (2, 2), nothing opened."""
    return Board.from_mines(CHORD_LAYOUT)


@pytest.fixture
def easy_chord_board() -> Board:
    """Chord board with undo enabled."""
    return Board.from_mines(CHORD_LAYOUT, easy=True)


@pytest.fixture
def single_mine_board() -> Board:
    """3x3 board with one mine in the top-left corner."""
    return Board.from_mines(SINGLE_MINE_LAYOUT)


@pytest.fixture
def seeded_board() -> Board:
    """Randomly dealt 10x10 board with a fixed seed."""
    return Board(BoardConfig(10, 10, 0.2), seed=1234)


@pytest.fixture
def empty_board() -> Board:
    """Board with no mines, won on the deal."""
    return Board(BoardConfig(5, 5, 0.0), seed=0)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden safe cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def default_config() -> BoardConfig:
    """Default 16x16 configuration."""
    return BoardConfig()


@pytest.fixture
def small_config() -> BoardConfig:
    """Small configuration for fast environment and evaluation runs."""
    return BoardConfig(6, 6, 0.1)
