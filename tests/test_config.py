"""Tests for fintrack.config."""

import stat
import tomllib
from pathlib import Path

import pytest

from fintrack.config import (
    DEFAULT_CONFIG,
    create_default_config,
    get_config_path,
    load_config,
    set_config_value,
)


class TestGetConfigPath:
    """Tests for get_config_path."""

    def test_uses_xdg_config_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should place the config under XDG_CONFIG_HOME."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_path() == tmp_path / "fintrack" / "config.toml"

    def test_falls_back_to_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should fall back to ~/.config."""
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))

        assert get_config_path() == tmp_path / ".config" / "fintrack" / "config.toml"


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Should return defaults when the file does not exist."""
        assert load_config(tmp_path / "config.toml") == DEFAULT_CONFIG

    def test_merges_with_defaults(self, tmp_path: Path) -> None:
        """Should override defaults with file values."""
        path = tmp_path / "config.toml"
        path.write_text('currency_symbol = "€"\n', encoding="utf-8")

        config = load_config(path)

        assert config["currency_symbol"] == "€"
        assert config["default_sort"] == DEFAULT_CONFIG["default_sort"]

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Should raise for malformed TOML."""
        path = tmp_path / "config.toml"
        path.write_text("not = [valid", encoding="utf-8")

        with pytest.raises(tomllib.TOMLDecodeError):
            load_config(path)


class TestSaveConfig:
    """Tests for create_default_config and set_config_value."""

    def test_create_default_config(self, tmp_path: Path) -> None:
        """Should write defaults with owner-only permissions."""
        path = tmp_path / "fintrack" / "config.toml"

        create_default_config(path)

        assert load_config(path) == DEFAULT_CONFIG
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_set_config_value_keeps_other_keys(self, tmp_path: Path) -> None:
        """Should change one key and leave the rest."""
        path = tmp_path / "config.toml"
        create_default_config(path)

        set_config_value("default_sort", "amount-desc", path)

        config = load_config(path)
        assert config["default_sort"] == "amount-desc"
        assert config["currency_symbol"] == "$"

    def test_set_config_value_creates_file(self, tmp_path: Path) -> None:
        """Should create the file if it does not exist."""
        path = tmp_path / "config.toml"

        set_config_value("db_path", "/tmp/other.db", path)

        assert load_config(path)["db_path"] == "/tmp/other.db"
