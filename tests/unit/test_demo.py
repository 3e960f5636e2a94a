"""
Unit tests for the terminal demo.
"""
import pytest

import demo


@pytest.fixture
def quiet_demo(monkeypatch: pytest.MonkeyPatch) -> None:
    """Skip the pauses and screen clearing."""
    monkeypatch.setattr(demo.time, "sleep", lambda seconds: None)
    monkeypatch.setattr(demo, "clear_screen", lambda: None)


class TestDemo:
    """Test the watch-the-agent loop."""

    @pytest.mark.parametrize("games", [0, -1])
    def test_rejects_non_positive_games(self, games: int) -> None:
        with pytest.raises(ValueError, match="at least 1"):
            demo.demo(games=games)

    def test_plays_and_reports_final_score(self, quiet_demo, capsys) -> None:
        demo.demo(delay=0.0, games=2, size=5, fraction=0.1)
        output = capsys.readouterr().out
        assert "=== Game 2/2" in output
        assert "=== Final:" in output
        assert "/2 wins" in output
