"""Tests for purse.domain.transactions pure functions."""

from datetime import date
from decimal import Decimal

import pytest

from purse.domain.transactions import (
    Transaction,
    TransactionKind,
    new_transaction,
    parse_amount,
    parse_balance,
    parse_date,
    parse_kind,
    transaction_from_record,
    transaction_to_record,
)
from purse.errors import ValidationError


class TestParseAmount:
    """Tests for parse_amount."""

    def test_parses_decimal_string(self) -> None:
        """Should parse a decimal string exactly."""
        assert parse_amount("12.34") == Decimal("12.34")

    def test_strips_whitespace(self) -> None:
        """Should ignore surrounding whitespace."""
        assert parse_amount("  5 ") == Decimal("5")

    def test_accepts_int_and_float(self) -> None:
        """Should accept numbers, converting floats through their repr."""
        assert parse_amount(7) == Decimal(7)
        assert parse_amount(0.1) == Decimal("0.1")

    def test_zero_is_allowed(self) -> None:
        """Should accept zero."""
        assert parse_amount("0") == Decimal(0)

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_amount_rejected(self, value: object) -> None:
        """Should reject a missing amount."""
        with pytest.raises(ValidationError, match="required"):
            parse_amount(value)

    @pytest.mark.parametrize("value", ["abc", "1,000", "NaN", "Infinity", True])
    def test_unparseable_amount_rejected(self, value: object) -> None:
        """Should reject values that aren't finite numbers."""
        with pytest.raises(ValidationError):
            parse_amount(value)

    def test_negative_amount_rejected(self) -> None:
        """Should reject negative amounts; direction comes from the kind."""
        with pytest.raises(ValidationError, match="negative"):
            parse_amount("-5")

    @pytest.mark.parametrize("value", ["1e1000000", "9e999999999", Decimal("1E+600000")])
    def test_out_of_range_amount_rejected(self, value: object) -> None:
        """Should reject amounts too large to total without overflow."""
        with pytest.raises(ValidationError):
            parse_amount(value)

    def test_large_realistic_amount_allowed(self) -> None:
        """Should still accept very large but summable amounts."""
        assert parse_amount("1e100") == Decimal("1e100")


class TestParseBalance:
    """Tests for parse_balance."""

    def test_parses_negative_balance(self) -> None:
        """Should allow negative balances (debt)."""
        assert parse_balance("-250.50") == Decimal("-250.50")

    @pytest.mark.parametrize("value", ["abc", "", None, "nan", [1], "1e1000000", "-9e999999999"])
    def test_unparseable_becomes_zero(self, value: object) -> None:
        """Should fall back to zero instead of raising."""
        assert parse_balance(value) == Decimal(0)


class TestParseDate:
    """Tests for parse_date."""

    def test_accepts_iso_string(self) -> None:
        """Should accept YYYY-MM-DD."""
        assert parse_date("2024-02-29") == "2024-02-29"

    def test_accepts_date_object(self) -> None:
        """Should accept datetime.date."""
        assert parse_date(date(2024, 1, 5)) == "2024-01-05"

    @pytest.mark.parametrize("value", [None, "", "2023-02-29", "15/01/2024", "yesterday"])
    def test_rejects_missing_or_invalid(self, value: object) -> None:
        """Should reject missing dates and non-calendar dates."""
        with pytest.raises(ValidationError):
            parse_date(value)


class TestParseKind:
    """Tests for parse_kind."""

    def test_accepts_enum_and_strings(self) -> None:
        """Should accept the enum or its case-insensitive value."""
        assert parse_kind(TransactionKind.INCOME) is TransactionKind.INCOME
        assert parse_kind("Expense") is TransactionKind.EXPENSE

    def test_rejects_unknown_kind(self) -> None:
        """Should reject anything else."""
        with pytest.raises(ValidationError):
            parse_kind("transfer")


class TestNewTransaction:
    """Tests for new_transaction."""

    def test_applies_defaults(self) -> None:
        """Should default description to the kind and category to Uncategorized."""
        txn = new_transaction("income", "2024-01-10", "500")

        assert txn.description == "Income"
        assert txn.category == "Uncategorized"
        assert txn.amount == Decimal("500")

    def test_blank_labels_get_defaults(self) -> None:
        """Should treat blank description/category as absent."""
        txn = new_transaction("expense", "2024-01-10", "5", description="  ", category="")

        assert txn.description == "Expense"
        assert txn.category == "Uncategorized"

    def test_generates_unique_ids(self) -> None:
        """Should generate a different id each time."""
        ids = {new_transaction("expense", "2024-01-10", "1").id for _ in range(50)}
        assert len(ids) == 50

    def test_signed_amount(self) -> None:
        """Should negate expenses only."""
        assert new_transaction("expense", "2024-01-10", "3").signed_amount == Decimal("-3")
        assert new_transaction("income", "2024-01-10", "3").signed_amount == Decimal("3")

    def test_is_immutable(self) -> None:
        """Should not allow attribute assignment."""
        txn = new_transaction("expense", "2024-01-10", "3")
        with pytest.raises(AttributeError):
            txn.amount = Decimal("4")  # type: ignore[misc]


class TestRecords:
    """Tests for transaction_to_record and transaction_from_record."""

    def test_record_shape(self) -> None:
        """Should write amounts as decimal strings and kinds as values."""
        txn = Transaction(
            id="abc",
            kind=TransactionKind.EXPENSE,
            date="2024-01-15",
            amount=Decimal("200.10"),
            description="Rent",
            category="Home",
        )

        assert transaction_to_record(txn) == {
            "id": "abc",
            "kind": "expense",
            "date": "2024-01-15",
            "amount": "200.10",
            "description": "Rent",
            "category": "Home",
        }

    def test_accepts_numeric_amounts(self) -> None:
        """Should accept amounts stored as JSON numbers."""
        txn = transaction_from_record(
            {"id": "x1", "kind": "income", "date": "2024-01-10", "amount": 500, "description": "Pay", "category": "Job"}
        )

        assert txn.id == "x1"
        assert txn.amount == Decimal(500)

    def test_missing_labels_defaulted(self) -> None:
        """Should default missing description and category."""
        txn = transaction_from_record({"id": "x1", "kind": "expense", "date": "2024-01-10", "amount": "1"})

        assert txn.description == "Expense"
        assert txn.category == "Uncategorized"

    @pytest.mark.parametrize(
        "record",
        [
            "not a dict",
            {"kind": "expense", "date": "2024-01-10", "amount": "1"},
            {"id": "x", "kind": "gift", "date": "2024-01-10", "amount": "1"},
            {"id": "x", "kind": "expense", "date": "bad", "amount": "1"},
            {"id": "x", "kind": "expense", "date": "2024-01-10", "amount": "-1"},
        ],
    )
    def test_malformed_records_rejected(self, record: object) -> None:
        """Should raise ValidationError for malformed records."""
        with pytest.raises(ValidationError):
            transaction_from_record(record)
