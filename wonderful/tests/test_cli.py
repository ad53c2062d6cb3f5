"""
Tests for the command-line interface.
"""

import pytest

from ..cli import main


class TestSimulate:
    """Tests for the simulate command."""

    def test_simulate_prints_result(self, capsys):
        assert main(["simulate", "--players", "2", "--seed", "4"]) == 0

        out = capsys.readouterr().out
        assert "Game over after" in out
        assert "Bot 1:" in out and "Bot 2:" in out
        assert "Winner:" in out

    def test_simulate_is_reproducible(self, capsys):
        main(["simulate", "--players", "3", "--seed", "9"])
        first = capsys.readouterr().out
        main(["simulate", "--players", "3", "--seed", "9"])
        assert capsys.readouterr().out == first

    def test_invalid_player_count(self, capsys):
        with pytest.raises(SystemExit):
            main(["simulate", "--players", "7"])
        assert "Error:" in capsys.readouterr().out

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])


class TestSimulateBuilders:
    """Tests for simulating with the heuristic bot."""

    def test_builder_bots(self, capsys):
        assert main(["simulate", "--players", "4", "--seed", "2", "--bots", "builder"]) == 0
        assert "Winner:" in capsys.readouterr().out
