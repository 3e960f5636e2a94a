"""
pygame renderer for a Cleansweeper board.

Draws the grid into any surface and maps screen points back to cells.
"""
from typing import Dict, Optional, Tuple

import pygame

from ..game.board import Board


# ============================================================================
# Constants
# ============================================================================

WINDOW_SIZE = (800, 800)
NUM_FONT_SIZE = 36
SHRINK_CELL_SIZE = 40.0
SPACING = 5
MAX_ASPECT = 1.15

COLOR_BACKGROUND = (23, 23, 23)
COLOR_HIDDEN = (128, 128, 128)
COLOR_FLAGGED = (255, 0, 255)
COLOR_OPENED = (255, 255, 255)
COLOR_EXPLODED = (255, 0, 0)
COLOR_TEXT = (255, 255, 255)

NUMBER_COLORS = {
    1: (0, 0, 255),  # blue
    2: (0, 128, 0),  # green
    3: (128, 0, 0),  # maroon
    4: (0, 0, 0),  # black
    5: (128, 0, 128),  # purple
    6: (0, 255, 255),  # aqua
    7: (128, 128, 0),  # olive
    8: (0, 255, 0),  # lime
}


# ============================================================================
# Board Renderer
# ============================================================================

class BoardRenderer:
    """
    Draws a board as a grid of filled cells.

    Hidden cells are grey, flags fuchsia, opened cells white and
    exploded cells red. Opened cells show their count of unflagged
    neighboring mines, if any.
    """

    def __init__(self, board: Board) -> None:
        self.board = board
        self.grid_rect = pygame.Rect(0, 0, 0, 0)
        self._fonts: Dict[int, pygame.font.Font] = {}

    def layout(self, area: pygame.Rect) -> pygame.Rect:
        """
        Fit the grid into an area without stretching it too far.

        Args:
            area: Space available for the grid.

        Returns:
            Rect the grid will occupy, anchored at the area's top-left.
        """
        ideal_ratio = self.board.config.height / self.board.config.width
        height_cap = area.width * ideal_ratio * MAX_ASPECT
        width_cap = (area.height / ideal_ratio) * MAX_ASPECT
        self.grid_rect = pygame.Rect(
            area.left,
            area.top,
            round(min(area.width, width_cap)),
            round(min(area.height, height_cap)),
        )
        return self.grid_rect

    @property
    def cell_size(self) -> Tuple[float, float]:
        """(width, height) of one cell in pixels."""
        return (
            self.grid_rect.width / self.board.config.width,
            self.grid_rect.height / self.board.config.height,
        )

    def cell_at(self, point: Tuple[int, int]) -> Optional[Tuple[int, int]]:
        """Map a screen point to a (row, col) position, or None if off-grid."""
        cell_width, cell_height = self.cell_size
        x = point[0] - self.grid_rect.left
        y = point[1] - self.grid_rect.top
        if x < 0 or y < 0 or cell_width == 0 or cell_height == 0:
            return None
        row = int(y // cell_height)
        col = int(x // cell_width)
        if row >= self.board.config.height or col >= self.board.config.width:
            return None
        return row, col

    def draw(self, surface: pygame.Surface, area: Optional[pygame.Rect] = None) -> None:
        """Draw the board onto a surface."""
        self.layout(area or surface.get_rect())
        cell_width, cell_height = self.cell_size
        font = self._number_font(min(cell_width, cell_height))

        for row in range(self.board.config.height):
            for col in range(self.board.config.width):
                cell = self.board.get_cell(row, col)
                left = self.grid_rect.left + cell_width * col
                top = self.grid_rect.top + cell_height * row
                # One pixel of background shows between cells
                rect = pygame.Rect(
                    int(left) + 1, int(top) + 1,
                    max(int(cell_width) - 2, 1), max(int(cell_height) - 2, 1),
                )

                if cell.is_flagged:
                    color = COLOR_FLAGGED
                elif cell.is_opened:
                    color = COLOR_OPENED
                elif cell.is_exploded:
                    color = COLOR_EXPLODED
                else:
                    color = COLOR_HIDDEN
                pygame.draw.rect(surface, color, rect)

                if cell.is_opened:
                    count = self.board.remaining_mines(row, col)
                    if count > 0:
                        text = font.render(str(count), True, NUMBER_COLORS[count])
                        center = (int(left + cell_width / 2), int(top + cell_height / 2))
                        surface.blit(text, text.get_rect(center=center))

    def _number_font(self, cell_extent: float) -> pygame.font.Font:
        """Monospace font, scaled down on small cells."""
        scale = min(cell_extent / SHRINK_CELL_SIZE, 1.0)
        size = max(int(NUM_FONT_SIZE * scale), 1)
        if size not in self._fonts:
            if not pygame.font.get_init():
                pygame.font.init()
            self._fonts[size] = pygame.font.SysFont("monospace", size)
        return self._fonts[size]
