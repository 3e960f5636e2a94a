"""
Desktop window for playing Cleansweeper with the mouse.

Left click flags, right click opens. The bottom row holds a restart
button and the game status.
"""
import logging
from typing import Optional, Tuple

import pygame

from ..game.board import Board, BoardConfig, BoardGenerationError, GameState
from .renderer import (
    BoardRenderer,
    COLOR_BACKGROUND,
    COLOR_HIDDEN,
    COLOR_TEXT,
    NUM_FONT_SIZE,
    SPACING,
    WINDOW_SIZE,
)

logger = logging.getLogger(__name__)

BOTTOM_ROW_HEIGHT = 50
FPS = 30

STATUS_TEXT = {
    GameState.PLAYING: "Good luck!",
    GameState.WON: "You win!",
    GameState.LOST: "Try again?",
}


class CleansweeperApp:
    """Event loop tying a board, its renderer and a pygame window together."""

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        seed: Optional[int] = None,
        window_size: Tuple[int, int] = WINDOW_SIZE,
        board: Optional[Board] = None,
    ) -> None:
        if board is None:
            board = Board(config or BoardConfig(), seed=seed)
        self.board = board
        self.renderer = BoardRenderer(self.board)
        self.window_size = window_size
        self.running = False
        self._font: Optional[pygame.font.Font] = None
        self._layout()

    def _layout(self) -> None:
        """Split the window into the grid area and the bottom row."""
        width, height = self.window_size
        grid_height = height - BOTTOM_ROW_HEIGHT - 2 * SPACING
        self.grid_area = pygame.Rect(0, 0, width, grid_height)
        self.renderer.layout(self.grid_area)

        half = (width - SPACING) // 2
        top = grid_height + SPACING
        self.restart_rect = pygame.Rect(0, top, half, BOTTOM_ROW_HEIGHT)
        self.status_rect = pygame.Rect(half + SPACING, top, half, BOTTOM_ROW_HEIGHT)

    @property
    def status_text(self) -> str:
        """Message shown beside the restart button."""
        text = STATUS_TEXT[self.board.game_state]
        if self.board.is_lost and self.board.can_undo:
            text += " (U to undo)"
        return text

    # ========================================================================
    # Input
    # ========================================================================

    def handle_event(self, event: pygame.event.Event) -> None:
        """Apply one pygame event to the game."""
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.key == pygame.K_r:
                self.restart()
            elif event.key in (pygame.K_u, pygame.K_BACKSPACE):
                self.board.undo()
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if self.restart_rect.collidepoint(event.pos):
                self.restart()
                return
            self.click(event.pos, event.button)

    def click(self, point: Tuple[int, int], button: int) -> bool:
        """
        Flag (left button) or open (right button) the cell under a point.

        Returns:
            True if the board changed.
        """
        position = self.renderer.cell_at(point)
        if position is None:
            return False
        if button == pygame.BUTTON_LEFT:
            return self.board.flag(*position)
        if button == pygame.BUTTON_RIGHT:
            return self.board.open(*position)
        return False

    def restart(self) -> bool:
        """
        Deal a new game with the same configuration.

        Returns:
            True if a new game was dealt, False if the current one is kept.
        """
        try:
            self.board.reset()
        except BoardGenerationError as error:
            logger.warning("Could not restart: %s", error)
            return False
        return True

    # ========================================================================
    # Drawing
    # ========================================================================

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the grid and bottom row."""
        surface.fill(COLOR_BACKGROUND)
        self.renderer.draw(surface, self.grid_area)

        if self._font is None:
            self._font = pygame.font.SysFont("monospace", NUM_FONT_SIZE)

        pygame.draw.rect(surface, COLOR_HIDDEN, self.restart_rect)
        for text, rect in (
            ("Restart", self.restart_rect),
            (self.status_text, self.status_rect),
        ):
            label = self._font.render(text, True, COLOR_TEXT)
            surface.blit(label, label.get_rect(center=rect.center))

    def run(self) -> None:
        """Open the window and play until it is closed."""
        pygame.init()
        screen = pygame.display.set_mode(self.window_size)
        pygame.display.set_caption("Cleansweeper")
        clock = pygame.time.Clock()
        logger.info(
            "Window open: %dx%d board, fraction=%.2f",
            self.board.config.height, self.board.config.width,
            self.board.config.fraction,
        )

        self.running = True
        try:
            while self.running:
                for event in pygame.event.get():
                    self.handle_event(event)
                self.draw(screen)
                pygame.display.flip()
                clock.tick(FPS)
        finally:
            pygame.quit()
