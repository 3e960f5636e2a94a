"""
Cleansweeper desktop interface built on pygame.
"""
from .renderer import BoardRenderer, WINDOW_SIZE
from .app import CleansweeperApp, STATUS_TEXT

__all__ = [
    "BoardRenderer",
    "WINDOW_SIZE",
    "CleansweeperApp",
    "STATUS_TEXT",
]
