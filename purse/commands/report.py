"""Balance, month and report commands for viewing ledger data."""

from rich.table import Table

from purse.commands.display import (
    console,
    fail,
    format_money,
    format_transaction_amount,
    handle_errors,
    open_session,
    short_id,
)
from purse.dates import current_month, month_range, shift_month
from purse.domain.aggregation import (
    CategoryTotal,
    calculate_histogram_bar_length,
    compute_balance,
    compute_category_breakdown,
    compute_monthly_view,
)
from purse.domain.models import Money, Month


def resolve_month(month: str | None, offset: int = 0) -> Month:
    """Pick the month to show.

    Args:
        month: Month in YYYY-MM format. If None, uses the current month.
        offset: Months to move from there (negative for earlier).

    Returns:
        The resolved month.

    Raises:
        ValueError: If the month is not valid YYYY-MM.
    """
    base = Month(month) if month else current_month()
    return shift_month(base, offset)


def balance_command() -> None:
    """Show starting balance, totals and current balance."""
    with handle_errors():
        store, symbol = open_session()

    snapshot = store.snapshot()
    balance = compute_balance(snapshot)

    table = Table(title="Balance", show_header=False)
    table.add_column("", style="cyan")
    table.add_column("", justify="right")
    table.add_row("Starting balance", format_money(snapshot.starting_balance, symbol))
    table.add_row("Total income", f"[green]{format_money(balance.total_income, symbol)}[/green]")
    table.add_row("Total expense", f"[red]{format_money(balance.total_expense, symbol)}[/red]")

    current = format_money(balance.current_balance, symbol)
    style = "red" if balance.current_balance < 0 else "green"
    table.add_row("[bold]Current balance[/bold]", f"[bold {style}]{current}[/bold {style}]")

    console.print(table)


def month_command(month: str | None = None, offset: int = 0) -> None:
    """Show a month's transactions, newest first, with money added and spent."""
    try:
        target = resolve_month(month, offset)
        _, _, label = month_range(target)
    except ValueError:
        fail(f"Invalid month: {month} (expected YYYY-MM)")
        return

    with handle_errors():
        store, symbol = open_session()

    view = compute_monthly_view(store.snapshot(), target)

    if not view.transactions:
        console.print(f"[yellow]No transactions in {label}[/yellow]")
    else:
        table = Table(title=f"{label} ({len(view.transactions)} transactions)")
        table.add_column("ID", style="dim")
        table.add_column("Date", style="cyan")
        table.add_column("Description", style="white")
        table.add_column("Category", style="magenta")
        table.add_column("Amount", justify="right")

        for txn in view.transactions:
            table.add_row(short_id(txn), txn.date, txn.description, txn.category, format_transaction_amount(txn, symbol))

        console.print(table)

    console.print(f"\n[bold]Added:[/bold] [green]{format_money(view.added, symbol)}[/green]")
    console.print(f"[bold]Spent:[/bold] [red]{format_money(view.spent, symbol)}[/red]")
    console.print(f"[bold]Net:[/bold] {format_money(view.net, symbol, include_sign=True)}")
    console.print(f"[dim]Previous: {shift_month(target, -1)}  Next: {shift_month(target, 1)}[/dim]")


def render_category_lines(
    totals: list[CategoryTotal], histogram: bool, symbol: str, colour: str, bar_width: int = 30
) -> None:
    """Render one line per category, with an optional histogram bar."""
    max_amount = max((t.amount for t in totals), default=Money(0))

    for total in totals:
        amount_display = format_money(total.amount, symbol)
        if histogram:
            bar_length = calculate_histogram_bar_length(total.amount, max_amount, bar_width)
            bar = "█" * bar_length
            console.print(f"  {total.category:20} {amount_display:>12} [{colour}]{bar}[/{colour}]")
        else:
            console.print(f"  {total.category}: {amount_display}")


def report_command(month: str | None = None, all: bool = False, histogram: bool = True) -> None:
    """Show income and spending by category."""
    target: Month | None = None
    period = "All Time"
    if not all:
        try:
            target = resolve_month(month)
            _, _, period = month_range(target)
        except ValueError:
            fail(f"Invalid month: {month} (expected YYYY-MM)")
            return

    with handle_errors():
        store, symbol = open_session()

    breakdown = compute_category_breakdown(store.snapshot(), target)

    if not breakdown.income and not breakdown.expenses:
        console.print(f"[yellow]No transactions for {period}[/yellow]")
        return

    console.print(f"\n[bold]Report: {period}[/bold]")

    if breakdown.expenses:
        console.print("\n[bold red]Expenses[/bold red]")
        render_category_lines(breakdown.expenses, histogram, symbol, "red")
        console.print(f"  [bold]Total: {format_money(breakdown.total_expenses, symbol)}[/bold]")

    if breakdown.income:
        console.print("\n[bold green]Income[/bold green]")
        render_category_lines(breakdown.income, histogram, symbol, "green")
        console.print(f"  [bold]Total: {format_money(breakdown.total_income, symbol)}[/bold]")

    net = Money(breakdown.total_income - breakdown.total_expenses)
    console.print(f"\n[bold]Net:[/bold] {format_money(net, symbol, include_sign=True)}")
