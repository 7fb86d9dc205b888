"""Tests for purse.config."""

from pathlib import Path

import pytest

from purse.config import (
    DEFAULT_CONFIG,
    create_default_config,
    get_config_path,
    get_currency_symbol,
    get_data_path,
    load_config,
    load_settings,
    save_config,
)
from purse.errors import ConfigError


class TestConfigPaths:
    """Tests for XDG path resolution."""

    def test_config_path_uses_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should respect XDG_CONFIG_HOME."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_path() == tmp_path / "purse" / "config.toml"

    def test_default_json_data_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should default to ledger.json under XDG_DATA_HOME."""
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        assert get_data_path(load_settings(tmp_path / "missing.toml")) == tmp_path / "purse" / "ledger.json"


class TestLoadSettings:
    """Tests for load_settings."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """Should return the defaults when no config exists."""
        assert load_settings(tmp_path / "config.toml") == DEFAULT_CONFIG

    def test_merges_over_defaults(self, tmp_path: Path) -> None:
        """Should override only the keys present in the file."""
        path = tmp_path / "config.toml"
        save_config({"storage": {"backend": "sqlite"}}, path)

        settings = load_settings(path)

        assert settings["storage"] == {"backend": "sqlite", "path": ""}
        assert get_currency_symbol(settings) == "£"

    def test_unknown_backend_rejected(self, tmp_path: Path) -> None:
        """Should raise ConfigError for an unknown backend."""
        path = tmp_path / "config.toml"
        save_config({"storage": {"backend": "postgres"}}, path)

        with pytest.raises(ConfigError):
            load_settings(path)

    def test_invalid_toml_rejected(self, tmp_path: Path) -> None:
        """Should raise ConfigError for invalid TOML."""
        path = tmp_path / "config.toml"
        path.write_text("storage = [unclosed", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_settings(path)

    def test_defaults_not_mutated(self, tmp_path: Path) -> None:
        """Should never modify DEFAULT_CONFIG."""
        path = tmp_path / "config.toml"
        save_config({"display": {"currency_symbol": "$"}}, path)

        assert get_currency_symbol(load_settings(path)) == "$"
        assert DEFAULT_CONFIG["display"]["currency_symbol"] == "£"


class TestCreateDefaultConfig:
    """Tests for create_default_config."""

    def test_writes_defaults_with_secure_permissions(self, tmp_path: Path) -> None:
        """Should write the default config readable only by the owner."""
        path = tmp_path / "purse" / "config.toml"

        create_default_config(path)

        assert load_config(path) == DEFAULT_CONFIG
        assert path.stat().st_mode & 0o777 == 0o600

    def test_load_config_missing_raises(self, tmp_path: Path) -> None:
        """Should raise FileNotFoundError when the file is absent."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")
