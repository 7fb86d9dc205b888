"""Ledger mutation commands (add, delete, set-balance)."""

import sys

import typer

from purse.commands.display import (
    console,
    describe_transaction,
    fail,
    format_money,
    handle_errors,
    normalize_date,
    open_session,
)
from purse.domain.transactions import TransactionKind
from purse.errors import ValidationError


def add_command(
    amount: str,
    kind: TransactionKind,
    date: str | None = None,
    description: str | None = None,
    category: str | None = None,
) -> None:
    """Add an income or expense transaction.

    Args:
        amount: Amount as entered (must be a non-negative number).
        kind: Income or expense.
        date: Transaction date (YYYY-MM-DD, DD/MM/YYYY, ...). Defaults to today.
        description: Optional description.
        category: Optional category.
    """
    try:
        normalized_date = normalize_date(date)
    except ValueError as e:
        console.print(f"[red]Invalid date format: {e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)

    with handle_errors():
        store, symbol = open_session()

        try:
            txn = store.add_transaction(kind, normalized_date, amount, description, category)
        except ValidationError as e:
            fail(f"Transaction not added: {e}")
            return

    console.print(f"[green]✓[/green] {txn.kind.label} added:")
    for label, value in describe_transaction(txn, symbol).items():
        console.print(f"  {label}: {value}")


def delete_command(txn_id: str, yes: bool = False) -> None:
    """Delete a transaction by id or unique id prefix.

    Args:
        txn_id: Full id or prefix as shown by 'purse month'.
        yes: Skip the confirmation prompt.
    """
    with handle_errors():
        store, symbol = open_session()

    matches = store.find_transactions(txn_id)
    if not matches:
        fail(f"Transaction {txn_id} not found")
        return
    if len(matches) > 1:
        fail(f"Id prefix {txn_id} matches {len(matches)} transactions, use more characters")
        return

    txn = matches[0]
    for label, value in describe_transaction(txn, symbol).items():
        console.print(f"  {label}: {value}")

    if not yes and not typer.confirm("Delete this transaction?", default=False):
        console.print("[dim]Nothing deleted[/dim]")
        return

    store.delete_transaction(txn.id)
    console.print(f"[green]✓[/green] Deleted transaction {txn.id}")


def set_balance_command(value: str) -> None:
    """Set the starting balance.

    Args:
        value: New starting balance. Unparseable values are stored as 0.
    """
    with handle_errors():
        store, symbol = open_session()

    stored = store.set_starting_balance(value)
    console.print(f"[green]✓[/green] Starting balance set to {format_money(stored, symbol)}")
