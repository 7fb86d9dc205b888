"""Shared console helpers for commands."""

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any

import pandas as pd
from rich.console import Console

from purse.config import get_currency_symbol, load_settings
from purse.domain.models import Money
from purse.domain.transactions import Transaction, TransactionKind
from purse.errors import PurseError
from purse.store import LedgerStore, open_ledger

console = Console()

SHORT_ID_LENGTH = 8


def format_money(amount: Money, symbol: str = "£", include_sign: bool = False) -> str:
    """Format money amount for display.

    Args:
        amount: Amount as Decimal.
        symbol: Currency symbol.
        include_sign: Whether to include + for positive amounts.

    Returns:
        Formatted string (e.g., "-£123.45" or "+£123.45").
    """
    formatted = f"{symbol}{abs(amount):,.2f}"
    if amount < 0:
        return f"-{formatted}"
    if include_sign:
        return f"+{formatted}"
    return formatted


def format_transaction_amount(txn: Transaction, symbol: str = "£") -> str:
    """Format a transaction amount with colour and sign for tables."""
    amount = format_money(txn.signed_amount, symbol, include_sign=True)
    if txn.kind is TransactionKind.EXPENSE:
        return f"[red]{amount}[/red]"
    return f"[green]{amount}[/green]"


def short_id(txn: Transaction) -> str:
    return txn.id[:SHORT_ID_LENGTH]


def normalize_date(raw: str | None) -> str:
    """Normalize a user-entered date to YYYY-MM-DD.

    Args:
        raw: Date in ISO form, or day-first forms like DD/MM/YYYY. If empty,
            today's date is used.

    Returns:
        Date as YYYY-MM-DD.

    Raises:
        ValueError: If the date cannot be parsed.
    """
    if not raw or not raw.strip():
        return date.today().isoformat()

    raw = raw.strip()
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date().isoformat()
    except ValueError:
        pass

    try:
        return pd.to_datetime(raw, dayfirst=True).strftime("%Y-%m-%d")
    except OverflowError as e:
        raise ValueError(str(e)) from e


def open_session() -> tuple[LedgerStore, str]:
    """Load settings once, then open the ledger and pick the currency symbol.

    Raises:
        ConfigError: If the config file is invalid.
    """
    settings = load_settings()
    return open_ledger(settings=settings), get_currency_symbol(settings)


def fail(message: str) -> None:
    """Print an error and exit with status 1."""
    console.print(f"[red]{message}[/red]", style="bold")
    sys.exit(1)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Turn purse errors into a red message and exit status 1."""
    try:
        yield
    except PurseError as e:
        fail(f"Error: {e}")


def describe_transaction(txn: Transaction, symbol: str = "£") -> dict[str, Any]:
    """Rows of detail shown after adding or before deleting a transaction."""
    return {
        "ID": txn.id,
        "Date": txn.date,
        "Kind": txn.kind.label,
        "Description": txn.description,
        "Category": txn.category,
        "Amount": format_money(txn.amount, symbol),
    }
