"""Persistence backends for ledger state.

Every backend stores the same state document:

    {"transactions": [record, ...], "starting_balance": "123.45"}

Records are written in ledger order (most recently added first). Backends do
no validation of their own; they raise PersistenceError when the underlying
storage cannot be read or written and leave shape checks to the ledger store.
"""

import copy
import json
import os
import sqlite3
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from purse.config import get_data_path
from purse.errors import PersistenceError
from purse.logging_setup import get_logger

logger = get_logger(__name__)

LedgerState = dict[str, Any]


class LedgerPersistence(ABC):
    """Interface the ledger store uses to load and save its state."""

    @abstractmethod
    def load_ledger_state(self) -> LedgerState | None:
        """Read the persisted state.

        Returns:
            The state document, or None if nothing has been saved yet.

        Raises:
            PersistenceError: If stored state exists but cannot be read.
        """

    @abstractmethod
    def save_ledger_state(self, state: LedgerState) -> None:
        """Persist the given state, replacing whatever was stored.

        Raises:
            PersistenceError: If the state cannot be written.
        """

    def describe(self) -> str:
        """Short human-readable location of the stored state."""
        return type(self).__name__


class MemoryPersistence(LedgerPersistence):
    """Keeps state in memory. Used by tests and throwaway sessions."""

    def __init__(self, state: LedgerState | None = None) -> None:
        self._state = copy.deepcopy(state)
        self.save_count = 0

    def load_ledger_state(self) -> LedgerState | None:
        return copy.deepcopy(self._state)

    def save_ledger_state(self, state: LedgerState) -> None:
        self._state = copy.deepcopy(state)
        self.save_count += 1

    def describe(self) -> str:
        return "memory"


class JsonFilePersistence(LedgerPersistence):
    """Stores state as a single JSON document on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load_ledger_state(self) -> LedgerState | None:
        if not self.path.exists():
            return None

        try:
            with open(self.path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
            raise PersistenceError(f"Could not read ledger from {self.path}: {e}") from e

    def save_ledger_state(self, state: LedgerState) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".ledger-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(state, f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Could not write ledger to {self.path}: {e}") from e

        logger.debug("Saved %d transactions to %s", len(state.get("transactions", [])), self.path)

    def describe(self) -> str:
        return str(self.path)


class SqlitePersistence(LedgerPersistence):
    """Stores state in a SQLite database."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_database(self) -> None:
        """Create the schema if it does not exist yet.

        Raises:
            PersistenceError: If the database cannot be created.
        """
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = self._connect()
        except (OSError, sqlite3.Error) as e:
            raise PersistenceError(f"Could not open ledger database {self.db_path}: {e}") from e

        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """
            )
            cursor.execute(
                """
                CREATE TABLE IF NOT EXISTS transactions (
                    id TEXT PRIMARY KEY,
                    position INTEGER NOT NULL,
                    kind TEXT NOT NULL,
                    date TEXT NOT NULL,
                    amount TEXT NOT NULL,
                    description TEXT NOT NULL,
                    category TEXT NOT NULL
                )
            """
            )
            cursor.execute("CREATE INDEX IF NOT EXISTS idx_txn_date ON transactions(date)")
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise PersistenceError(f"Could not initialize ledger database {self.db_path}: {e}") from e
        finally:
            conn.close()

    def load_ledger_state(self) -> LedgerState | None:
        if not self.db_path.exists():
            return None

        conn = None
        try:
            conn = self._connect()
            cursor = conn.cursor()

            cursor.execute("SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'transactions'")
            if cursor.fetchone() is None:
                return None

            cursor.execute(
                "SELECT id, kind, date, amount, description, category FROM transactions ORDER BY position ASC"
            )
            transactions = [dict(row) for row in cursor.fetchall()]

            cursor.execute("SELECT value FROM settings WHERE key = 'starting_balance'")
            row = cursor.fetchone()
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not read ledger database {self.db_path}: {e}") from e
        finally:
            if conn is not None:
                conn.close()

        state: LedgerState = {"transactions": transactions}
        if row is not None:
            state["starting_balance"] = row["value"]
        return state

    def save_ledger_state(self, state: LedgerState) -> None:
        self.init_database()

        records = state.get("transactions", [])
        rows = [
            (
                record["id"],
                position,
                record["kind"],
                record["date"],
                str(record["amount"]),
                record["description"],
                record["category"],
            )
            for position, record in enumerate(records)
        ]

        conn = self._connect()
        try:
            with conn:
                conn.execute("DELETE FROM transactions")
                conn.executemany(
                    "INSERT INTO transactions (id, position, kind, date, amount, description, category)"
                    " VALUES (?, ?, ?, ?, ?, ?, ?)",
                    rows,
                )
                conn.execute(
                    "INSERT OR REPLACE INTO settings (key, value) VALUES ('starting_balance', ?)",
                    (str(state.get("starting_balance", "0")),),
                )
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not write ledger database {self.db_path}: {e}") from e
        finally:
            conn.close()

        logger.debug("Saved %d transactions to %s", len(rows), self.db_path)

    def describe(self) -> str:
        return str(self.db_path)


def build_persistence(settings: dict[str, Any]) -> LedgerPersistence:
    """Create the persistence backend named in the settings.

    Args:
        settings: Settings from config.load_settings.

    Returns:
        JsonFilePersistence or SqlitePersistence for the configured path.
    """
    path = get_data_path(settings)
    if settings["storage"]["backend"] == "sqlite":
        return SqlitePersistence(path)
    return JsonFilePersistence(path)
