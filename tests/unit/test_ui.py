"""
Unit tests for the pygame renderer and window loop.

Runs headless through SDL's dummy video driver (set in conftest).
"""
from typing import Iterator, Tuple

import numpy as np
import pygame
import pytest
from cleansweeper.game import Board
from cleansweeper.ui import BoardRenderer, CleansweeperApp
from cleansweeper.ui.renderer import (
    COLOR_EXPLODED,
    COLOR_FLAGGED,
    COLOR_HIDDEN,
    COLOR_OPENED,
)


@pytest.fixture(autouse=True)
def pygame_session() -> Iterator[None]:
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def app(chord_board: Board) -> CleansweeperApp:
    return CleansweeperApp(board=chord_board)


@pytest.fixture
def easy_app(easy_chord_board: Board) -> CleansweeperApp:
    return CleansweeperApp(board=easy_chord_board)


def cell_center(renderer: BoardRenderer, row: int, col: int) -> Tuple[int, int]:
    """Screen point in the middle of a cell."""
    width, height = renderer.cell_size
    return (
        int(renderer.grid_rect.left + width * (col + 0.5)),
        int(renderer.grid_rect.top + height * (row + 0.5)),
    )


def cell_corner(renderer: BoardRenderer, row: int, col: int) -> Tuple[int, int]:
    """Screen point just inside a cell's top-left corner, clear of text."""
    width, height = renderer.cell_size
    return (
        int(renderer.grid_rect.left + width * col) + 3,
        int(renderer.grid_rect.top + height * row) + 3,
    )


def mouse_down(point: Tuple[int, int], button: int) -> pygame.event.Event:
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=point, button=button)


# ============================================================================
# Renderer Tests
# ============================================================================

class TestBoardRendererLayout:
    """Test grid placement and hit testing."""

    def test_wide_board_keeps_aspect(self) -> None:
        board = Board.from_mines(np.zeros((2, 8), dtype=bool))
        renderer = BoardRenderer(board)
        rect = renderer.layout(pygame.Rect(0, 0, 800, 740))
        assert rect.width == 800
        assert rect.height == 230

    def test_square_board_fills_area(self, chord_board: Board) -> None:
        renderer = BoardRenderer(chord_board)
        rect = renderer.layout(pygame.Rect(0, 0, 800, 740))
        assert rect.size == (800, 740)

    def test_cell_at(self) -> None:
        board = Board.from_mines(np.zeros((2, 8), dtype=bool))
        renderer = BoardRenderer(board)
        renderer.layout(pygame.Rect(0, 0, 800, 740))
        assert renderer.cell_at((0, 0)) == (0, 0)
        assert renderer.cell_at((799, 229)) == (1, 7)
        assert renderer.cell_at((150, 120)) == (1, 1)

    @pytest.mark.parametrize("point", [(-1, 5), (5, -1), (10, 300), (800, 10)])
    def test_cell_at_off_grid(self, point: Tuple[int, int]) -> None:
        board = Board.from_mines(np.zeros((2, 8), dtype=bool))
        renderer = BoardRenderer(board)
        renderer.layout(pygame.Rect(0, 0, 800, 740))
        assert renderer.cell_at(point) is None

    def test_cell_at_before_layout(self, chord_board: Board) -> None:
        assert BoardRenderer(chord_board).cell_at((10, 10)) is None


class TestBoardRendererDraw:
    """Test cell colors on a drawn surface."""

    def pixel(self, surface: pygame.Surface, point: Tuple[int, int]) -> tuple:
        return tuple(surface.get_at(point))[:3]

    def test_cell_colors(self, chord_board: Board) -> None:
        chord_board.open(1, 0)
        chord_board.flag(0, 2)
        renderer = BoardRenderer(chord_board)
        surface = pygame.Surface((300, 300))
        renderer.draw(surface)

        assert self.pixel(surface, cell_corner(renderer, 1, 0)) == COLOR_OPENED
        assert self.pixel(surface, cell_corner(renderer, 0, 2)) == COLOR_FLAGGED
        assert self.pixel(surface, cell_corner(renderer, 2, 2)) == COLOR_HIDDEN

    def test_exploded_color(self, chord_board: Board) -> None:
        chord_board.open(2, 2)
        renderer = BoardRenderer(chord_board)
        surface = pygame.Surface((300, 300))
        renderer.draw(surface)
        assert self.pixel(surface, cell_corner(renderer, 2, 2)) == COLOR_EXPLODED

    def test_tiny_cells_still_draw(self) -> None:
        board = Board.from_mines(np.zeros((50, 50), dtype=bool))
        board.open(0, 0)
        BoardRenderer(board).draw(pygame.Surface((60, 60)))


# ============================================================================
# App Tests
# ============================================================================

class TestAppInput:
    """Test mouse and keyboard handling."""

    def test_right_click_opens(self, app: CleansweeperApp) -> None:
        app.handle_event(mouse_down(cell_center(app.renderer, 1, 0), pygame.BUTTON_RIGHT))
        assert app.board.cells_opened == 6

    def test_left_click_flags(self, app: CleansweeperApp) -> None:
        app.handle_event(mouse_down(cell_center(app.renderer, 0, 2), pygame.BUTTON_LEFT))
        assert app.board.get_cell(0, 2).is_flagged is True

    def test_left_click_on_safe_cell_loses(self, app: CleansweeperApp) -> None:
        assert app.click(cell_center(app.renderer, 1, 1), pygame.BUTTON_LEFT) is True
        assert app.board.is_lost is True

    def test_middle_click_does_nothing(self, app: CleansweeperApp) -> None:
        assert app.click(cell_center(app.renderer, 1, 1), pygame.BUTTON_MIDDLE) is False

    def test_click_off_grid_does_nothing(self, app: CleansweeperApp) -> None:
        assert app.click(app.status_rect.center, pygame.BUTTON_RIGHT) is False

    def test_restart_button(self, app: CleansweeperApp) -> None:
        app.click(cell_center(app.renderer, 0, 2), pygame.BUTTON_RIGHT)
        assert app.board.is_lost
        app.handle_event(mouse_down(app.restart_rect.center, pygame.BUTTON_LEFT))
        assert not app.board.is_lost
        assert app.board.cells_opened >= 1

    def test_restart_key(self, app: CleansweeperApp) -> None:
        app.click(cell_center(app.renderer, 0, 2), pygame.BUTTON_RIGHT)
        app.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_r))
        assert not app.board.is_lost

    def test_restart_that_cannot_deal_keeps_game(self, caplog) -> None:
        board = Board.from_mines(np.ones((3, 3), dtype=bool))
        app = CleansweeperApp(board=board)
        app.click(cell_center(app.renderer, 0, 0), pygame.BUTTON_LEFT)

        app.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_r))

        assert app.restart() is False
        assert app.board.get_cell(0, 0).is_flagged is True
        assert app.board.is_playing is True
        assert "Could not restart" in caplog.text

    def test_restart_returns_true_on_new_deal(self, app: CleansweeperApp) -> None:
        assert app.restart() is True

    @pytest.mark.parametrize("key", [pygame.K_u, pygame.K_BACKSPACE])
    def test_undo_keys(self, easy_app: CleansweeperApp, key: int) -> None:
        easy_app.click(cell_center(easy_app.renderer, 0, 2), pygame.BUTTON_RIGHT)
        easy_app.handle_event(pygame.event.Event(pygame.KEYDOWN, key=key))
        assert easy_app.board.is_playing is True

    def test_quit_stops_loop(self, app: CleansweeperApp) -> None:
        app.running = True
        app.handle_event(pygame.event.Event(pygame.QUIT))
        assert app.running is False

    def test_escape_stops_loop(self, app: CleansweeperApp) -> None:
        app.running = True
        app.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
        assert app.running is False


class TestAppStatus:
    """Test the status label."""

    def test_playing(self, app: CleansweeperApp) -> None:
        assert app.status_text == "Good luck!"

    def test_lost(self, app: CleansweeperApp) -> None:
        app.board.open(0, 2)
        assert app.status_text == "Try again?"

    def test_lost_in_easy_mode_offers_undo(self, easy_app: CleansweeperApp) -> None:
        easy_app.board.open(0, 2)
        assert easy_app.status_text == "Try again? (U to undo)"

    def test_won(self, app: CleansweeperApp) -> None:
        app.board.open(1, 0)
        app.board.flag(0, 2)
        app.board.flag(2, 2)
        assert app.status_text == "You win!"

    def test_draw_full_window(self, app: CleansweeperApp) -> None:
        surface = pygame.Surface(app.window_size)
        app.draw(surface)
        assert tuple(surface.get_at(app.restart_rect.topleft))[:3] == COLOR_HIDDEN
