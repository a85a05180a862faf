"""
Tests for the command-line entry point and settings.
"""

import pytest

from ..bakery.decks import DATA_DIR
from ..bakery.persistence import save_state
from ..cli import main
from ..config import DEFAULT_SEED, BakerySettings
from ..engine_core.state import GamePhase


class TestSettings:
    """Tests for BakerySettings.from_env."""

    def test_defaults(self, monkeypatch):
        for name in ("MAGIC_BAKERY_DATA_DIR", "MAGIC_BAKERY_SEED", "MAGIC_BAKERY_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = BakerySettings.from_env()

        assert settings.data_dir == DATA_DIR
        assert settings.seed == DEFAULT_SEED
        assert settings.log_level == "WARNING"

    def test_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("MAGIC_BAKERY_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("MAGIC_BAKERY_SEED", "123")
        monkeypatch.setenv("MAGIC_BAKERY_LOG_LEVEL", "debug")

        settings = BakerySettings.from_env()

        assert settings.data_dir == tmp_path
        assert settings.seed == 123
        assert settings.log_level == "DEBUG"

    def test_bad_seed(self, monkeypatch):
        monkeypatch.setenv("MAGIC_BAKERY_SEED", "lucky")
        with pytest.raises(ValueError):
            BakerySettings.from_env()


class TestCommands:
    """Tests for the CLI commands."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "magic-bakery" in capsys.readouterr().out

    def test_show_decks(self, capsys):
        assert main(["show-decks"]) == 0

        out = capsys.readouterr().out
        assert "Ingredients (54 cards):" in out
        assert "Sponge x4: Flour, Eggs, Sugar" in out
        assert "Customers (22 orders):" in out

    def test_show_decks_missing_dir(self, tmp_path, capsys):
        assert main(["show-decks", "--data-dir", str(tmp_path)]) == 1
        assert "RESOURCE_NOT_FOUND" in capsys.readouterr().out

    def test_data_dir_from_environment(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv("MAGIC_BAKERY_DATA_DIR", str(tmp_path))
        assert main(["show-decks"]) == 1
        assert "RESOURCE_NOT_FOUND" in capsys.readouterr().out

    def test_play_missing_save(self, tmp_path, capsys):
        assert main(["play", "--load", str(tmp_path / "missing.json")]) == 1
        assert "RESOURCE_NOT_FOUND" in capsys.readouterr().out

    def test_play_finished_save(self, scripted_game, tmp_path, capsys):
        scripted_game.phase = GamePhase.GAME_OVER
        path = save_state(scripted_game, tmp_path / "done.json")

        assert main(["play", "--load", str(path)]) == 0
        assert "The bakery is closed" in capsys.readouterr().out
