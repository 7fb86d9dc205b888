"""Pure functions for balance and monthly aggregation.

This module contains the functional core for reporting operations:
- No I/O operations (no files, no console)
- No side effects, no cached state
- Every call returns fresh objects built from the snapshot
- Easy to test

All monetary amounts are Decimals (Money type).
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from purse.dates import format_month, month_range, parse_month
from purse.domain.models import CategoryName, Money, Month
from purse.domain.transactions import LedgerSnapshot, Transaction, TransactionKind


@dataclass(frozen=True)
class Balance:
    """Immutable ledger-wide totals."""

    total_income: Money
    total_expense: Money
    current_balance: Money


@dataclass(frozen=True)
class MonthlyView:
    """Immutable month-scoped view of the ledger."""

    month: Month
    transactions: tuple[Transaction, ...]
    added: Money
    spent: Money

    @property
    def net(self) -> Money:
        return Money(self.added - self.spent)


@dataclass(frozen=True)
class CategoryTotal:
    """Immutable total for a single category."""

    category: CategoryName
    amount: Money


@dataclass(frozen=True)
class CategoryBreakdown:
    """Immutable per-category totals split by direction."""

    income: list[CategoryTotal]
    expenses: list[CategoryTotal]

    @property
    def total_income(self) -> Money:
        return Money(sum((c.amount for c in self.income), Decimal(0)))

    @property
    def total_expenses(self) -> Money:
        return Money(sum((c.amount for c in self.expenses), Decimal(0)))


def sum_amounts(transactions: Iterable[Transaction], kind: TransactionKind) -> Money:
    """Sum the amounts of all transactions of one kind.

    Args:
        transactions: Transactions to scan.
        kind: Kind to include.

    Returns:
        Total as Money (zero for no matches).
    """
    return Money(sum((txn.amount for txn in transactions if txn.kind is kind), Decimal(0)))


def compute_balance(snapshot: LedgerSnapshot) -> Balance:
    """Compute total income, total expense and current balance.

    current_balance = starting_balance + total_income - total_expense

    Args:
        snapshot: Ledger snapshot.

    Returns:
        Balance with all three figures.
    """
    total_income = sum_amounts(snapshot.transactions, TransactionKind.INCOME)
    total_expense = sum_amounts(snapshot.transactions, TransactionKind.EXPENSE)
    current = Money(snapshot.starting_balance + total_income - total_expense)

    return Balance(
        total_income=total_income,
        total_expense=total_expense,
        current_balance=current,
    )


def filter_month(transactions: Iterable[Transaction], month: Month) -> list[Transaction]:
    """Keep transactions dated within a month, first and last day included.

    Dates are YYYY-MM-DD strings, so string comparison is calendar comparison.

    Args:
        transactions: Transactions to filter.
        month: Month in YYYY-MM format.

    Returns:
        Matching transactions in their original order.
    """
    first_day, last_day, _ = month_range(month)
    return [txn for txn in transactions if first_day <= txn.date <= last_day]


def sort_newest_first(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Sort by date descending.

    The sort is stable, so transactions sharing a date keep their ledger
    order (most recently added first).
    """
    return sorted(transactions, key=lambda txn: txn.date, reverse=True)


def compute_monthly_view(snapshot: LedgerSnapshot, month: Month) -> MonthlyView:
    """Build the filtered, sorted transaction list and totals for a month.

    Args:
        snapshot: Ledger snapshot.
        month: Month in YYYY-MM format.

    Returns:
        MonthlyView for the month in canonical YYYY-MM form, with
        transactions newest first, money added and spent.
    """
    canonical = format_month(*parse_month(month))
    in_month = filter_month(snapshot.transactions, canonical)

    return MonthlyView(
        month=canonical,
        transactions=tuple(sort_newest_first(in_month)),
        added=sum_amounts(in_month, TransactionKind.INCOME),
        spent=sum_amounts(in_month, TransactionKind.EXPENSE),
    )


def _category_totals(transactions: Iterable[Transaction], kind: TransactionKind) -> list[CategoryTotal]:
    totals: dict[CategoryName, Decimal] = {}
    for txn in transactions:
        if txn.kind is kind:
            totals[txn.category] = totals.get(txn.category, Decimal(0)) + txn.amount

    ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return [CategoryTotal(category=cat, amount=Money(amt)) for cat, amt in ordered]


def compute_category_breakdown(snapshot: LedgerSnapshot, month: Month | None = None) -> CategoryBreakdown:
    """Total income and expenses per category.

    Args:
        snapshot: Ledger snapshot.
        month: Optional month to restrict to. If None, covers all time.

    Returns:
        CategoryBreakdown with each side sorted by amount descending, then name.
    """
    transactions: Iterable[Transaction] = snapshot.transactions
    if month is not None:
        transactions = filter_month(transactions, month)
    transactions = list(transactions)

    return CategoryBreakdown(
        income=_category_totals(transactions, TransactionKind.INCOME),
        expenses=_category_totals(transactions, TransactionKind.EXPENSE),
    )


def calculate_histogram_bar_length(
    amount: Money,
    max_amount: Money,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
