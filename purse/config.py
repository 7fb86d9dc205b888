"""Configuration file management for purse."""

import copy
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from purse.errors import ConfigError

STORAGE_BACKENDS = ("json", "sqlite")

DEFAULT_CONFIG: dict[str, Any] = {
    "storage": {
        "backend": "json",
        "path": "",
    },
    "display": {
        "currency_symbol": "£",
    },
}


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "purse" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(copy.deepcopy(DEFAULT_CONFIG), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def load_settings(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration merged over the defaults.

    A missing config file is not an error; defaults are used.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Complete settings dictionary.

    Raises:
        ConfigError: If the file is invalid or names an unknown backend.
    """
    settings = copy.deepcopy(DEFAULT_CONFIG)

    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return settings

    for section, values in config.items():
        if isinstance(values, dict) and isinstance(settings.get(section), dict):
            settings[section].update(values)
        else:
            settings[section] = values

    backend = settings["storage"].get("backend")
    if backend not in STORAGE_BACKENDS:
        raise ConfigError(f"Unknown storage backend {backend!r} (expected one of: {', '.join(STORAGE_BACKENDS)})")

    return settings


def get_data_path(settings: dict[str, Any]) -> Path:
    """Resolve the ledger file path for the configured backend.

    Args:
        settings: Settings from load_settings.

    Returns:
        Configured path, or ledger.json / ledger.db under the XDG data dir.
    """
    storage = settings["storage"]
    configured = storage.get("path")
    if configured:
        return Path(configured).expanduser()

    filename = "ledger.db" if storage["backend"] == "sqlite" else "ledger.json"
    return get_xdg_data_home() / "purse" / filename


def get_currency_symbol(settings: dict[str, Any]) -> str:
    """Get the currency symbol used for display."""
    return str(settings.get("display", {}).get("currency_symbol", "£"))
