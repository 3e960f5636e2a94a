"""
Cleansweeper - a Minesweeper variant where flags are moves.

Flag a mine to clear around it, open a safe cell to flood outward,
and get either one wrong to lose.
"""

__version__ = "0.1.0"
