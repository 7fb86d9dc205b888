"""Pure functions and types for ledger transactions.

This module contains the functional core for transaction handling:
- No I/O operations (no files, no console)
- No side effects beyond id generation
- Pure data transformations
- Easy to test

All monetary amounts are Decimals (Money type).
"""

import uuid
from dataclasses import dataclass, field
from datetime import date as dt_date
from datetime import datetime
from decimal import Decimal, InvalidOperation, getcontext
from enum import Enum
from typing import Any, TypedDict

from purse.domain.models import CategoryName, Description, Money
from purse.errors import ValidationError

DEFAULT_CATEGORY = CategoryName("Uncategorized")


class TransactionKind(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class TransactionRecord(TypedDict):
    """Persisted shape of a single transaction."""

    id: str
    kind: str
    date: str
    amount: str
    description: str
    category: str


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction data."""

    id: str
    kind: TransactionKind
    date: str
    amount: Money
    description: Description
    category: CategoryName = DEFAULT_CATEGORY

    @property
    def signed_amount(self) -> Money:
        """Amount with income positive and expense negative."""
        if self.kind is TransactionKind.EXPENSE:
            return Money(-self.amount)
        return self.amount


@dataclass(frozen=True)
class LedgerSnapshot:
    """Immutable view of the ledger at a point in time.

    Transactions are in ledger order: most recently added first.
    """

    starting_balance: Money = Money(Decimal(0))
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)


def _to_decimal(value: Any) -> Decimal | None:
    """Convert a raw value to a finite Decimal, or None if it cannot be."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        value = str(value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not number.is_finite():
        return None
    # Sums of values this large would overflow the decimal context
    if number and number.adjusted() > getcontext().Emax // 2:
        return None
    return number


def parse_amount(value: Any) -> Money:
    """Parse a transaction amount.

    Args:
        value: Decimal, int, float or numeric string.

    Returns:
        Non-negative Money.

    Raises:
        ValidationError: If the amount is missing, unparseable or negative.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Amount is required")

    number = _to_decimal(value)
    if number is None:
        raise ValidationError(f"Amount is not a number: {value!r}")
    if number < 0:
        raise ValidationError(f"Amount must not be negative: {value!r}")

    return Money(number)


def parse_balance(value: Any) -> Money:
    """Parse a starting balance, falling back to zero.

    Any sign is allowed. Unparseable input never raises.

    Args:
        value: Decimal, int, float or numeric string.

    Returns:
        Parsed Money, or zero if the value cannot be parsed.
    """
    number = _to_decimal(value)
    if number is None:
        return Money(Decimal(0))
    return Money(number)


def is_valid_balance(value: Any) -> bool:
    """Check whether parse_balance would use the value rather than zero."""
    return _to_decimal(value) is not None


def parse_date(value: Any) -> str:
    """Parse a calendar date.

    Args:
        value: datetime.date or a YYYY-MM-DD string.

    Returns:
        Date as a YYYY-MM-DD string.

    Raises:
        ValidationError: If the date is missing or not a valid calendar date.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, dt_date):
        return value.isoformat()
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Date is required")

    raw = value.strip()
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date().isoformat()
    except ValueError as e:
        raise ValidationError(f"Date must be YYYY-MM-DD: {raw!r}") from e


def parse_kind(value: Any) -> TransactionKind:
    """Parse a transaction kind from the enum or its string value.

    Raises:
        ValidationError: If the value is not a known kind.
    """
    if isinstance(value, TransactionKind):
        return value
    if isinstance(value, str):
        try:
            return TransactionKind(value.strip().lower())
        except ValueError:
            pass
    raise ValidationError(f"Kind must be 'income' or 'expense': {value!r}")


def default_description(kind: TransactionKind) -> Description:
    """Description used when none is given ("Income" or "Expense")."""
    return Description(kind.label)


def _clean_label(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def new_transaction_id() -> str:
    """Generate a fresh opaque transaction id."""
    return uuid.uuid4().hex


def new_transaction(
    kind: Any,
    date: Any,
    amount: Any,
    description: str | None = None,
    category: str | None = None,
    txn_id: str | None = None,
) -> Transaction:
    """Validate raw input and build a Transaction with defaults applied.

    Args:
        kind: TransactionKind or "income"/"expense".
        date: Transaction date (YYYY-MM-DD or datetime.date).
        amount: Non-negative amount.
        description: Optional label, defaults to the kind name.
        category: Optional label, defaults to "Uncategorized".
        txn_id: Explicit id. If None, a fresh one is generated.

    Returns:
        New immutable Transaction.

    Raises:
        ValidationError: If kind, date or amount is invalid.
    """
    parsed_kind = parse_kind(kind)
    parsed_date = parse_date(date)
    parsed_amount = parse_amount(amount)

    return Transaction(
        id=txn_id or new_transaction_id(),
        kind=parsed_kind,
        date=parsed_date,
        amount=parsed_amount,
        description=Description(_clean_label(description) or default_description(parsed_kind)),
        category=CategoryName(_clean_label(category) or DEFAULT_CATEGORY),
    )


def transaction_to_record(txn: Transaction) -> TransactionRecord:
    """Convert a transaction to its persisted record shape."""
    return TransactionRecord(
        id=txn.id,
        kind=txn.kind.value,
        date=txn.date,
        amount=str(txn.amount),
        description=str(txn.description),
        category=str(txn.category),
    )


def transaction_from_record(record: Any) -> Transaction:
    """Rebuild a transaction from a persisted record.

    Missing description/category get their defaults, matching new entries.

    Raises:
        ValidationError: If the record is not a mapping or a field is invalid.
    """
    if not isinstance(record, dict):
        raise ValidationError(f"Transaction record must be a mapping, got {type(record).__name__}")

    txn_id = record.get("id")
    if not isinstance(txn_id, str) or not txn_id:
        raise ValidationError(f"Transaction record has no id: {record!r}")

    description = record.get("description")
    category = record.get("category")

    return new_transaction(
        kind=record.get("kind"),
        date=record.get("date"),
        amount=record.get("amount"),
        description=description if isinstance(description, str) else None,
        category=category if isinstance(category, str) else None,
        txn_id=txn_id,
    )
