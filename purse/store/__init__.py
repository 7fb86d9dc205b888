"""Store layer - owns the ledger and its persistence.

This module re-exports the public store API for easy importing.
"""

from pathlib import Path
from typing import Any

from purse.config import load_settings
from purse.store.ledger import LedgerStore
from purse.store.persistence import (
    JsonFilePersistence,
    LedgerPersistence,
    LedgerState,
    MemoryPersistence,
    SqlitePersistence,
    build_persistence,
)


def open_ledger(config_path: Path | None = None, settings: dict[str, Any] | None = None) -> LedgerStore:
    """Open the configured ledger, loading its saved state.

    Args:
        config_path: Path to config file. If None, uses default location.
        settings: Already loaded settings. If given, the config file is not read.

    Raises:
        ConfigError: If the config file is invalid.
    """
    if settings is None:
        settings = load_settings(config_path)
    return LedgerStore.open(build_persistence(settings))


__all__ = [
    # Ledger
    "LedgerStore",
    "open_ledger",
    # Persistence
    "JsonFilePersistence",
    "LedgerPersistence",
    "LedgerState",
    "MemoryPersistence",
    "SqlitePersistence",
    "build_persistence",
]
