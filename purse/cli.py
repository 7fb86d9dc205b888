"""CLI entry point for purse."""

import warnings

import typer

from purse.commands.admin import backup_command, init_command
from purse.commands.report import balance_command, month_command, report_command
from purse.commands.transactions import add_command, delete_command, set_balance_command
from purse.domain.transactions import TransactionKind
from purse.errors import PersistenceWarning
from purse.logging_setup import configure_logging

app = typer.Typer(
    name="purse",
    help="purse - A personal income and expense ledger",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """purse - A personal income and expense ledger."""
    configure_logging("DEBUG" if verbose else None)
    # Persistence problems are already reported through logging
    warnings.simplefilter("ignore", PersistenceWarning)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config and ledger"),
) -> None:
    """Initialize purse configuration and an empty ledger."""
    init_command(force)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: ~/.purse/backups)"),
) -> None:
    """Backup your ledger and configuration files."""
    backup_command(output_dir)


@app.command()
def add(
    amount: str = typer.Argument(..., help="Amount (a non-negative number)"),
    income: bool = typer.Option(False, "--income/--expense", help="Record income instead of an expense"),
    date: str = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD or DD/MM/YYYY, default: today)"),
    description: str = typer.Option(None, "--description", "-m", help="Description"),
    category: str = typer.Option(None, "--category", "-c", help="Category"),
) -> None:
    """Add an income or expense transaction."""
    kind = TransactionKind.INCOME if income else TransactionKind.EXPENSE
    add_command(amount, kind, date, description, category)


@app.command()
def delete(
    txn_id: str = typer.Argument(..., help="Transaction id or id prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete a transaction."""
    delete_command(txn_id, yes)


@app.command(name="set-balance")
def set_balance(
    value: str = typer.Argument(..., help="Starting balance (may be negative)"),
) -> None:
    """Set your starting balance."""
    set_balance_command(value)


@app.command()
def balance() -> None:
    """Show your current balance."""
    balance_command()


@app.command()
def month(
    month: str = typer.Option(None, "--month", help="Month to show (YYYY-MM, default: current)"),
    offset: int = typer.Option(0, "--offset", help="Months to move from --month (e.g. -1 for previous)"),
) -> None:
    """Show a month's transactions and totals."""
    month_command(month, offset)


@app.command(name="report")
def report(
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all time"),
    histogram: bool = typer.Option(True, help="Show histogram bars"),
) -> None:
    """Show your income and spending by category."""
    report_command(month, all, histogram)


if __name__ == "__main__":
    app()
