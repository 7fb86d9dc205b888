"""Tests for purse.dates pure functions."""

from datetime import date

import pytest

from purse.dates import current_month, month_range, parse_month, shift_month
from purse.domain.models import Month


class TestMonthRange:
    """Tests for month_range."""

    def test_january_range(self) -> None:
        """Should calculate inclusive range for January."""
        first, last, label = month_range(Month("2025-01"))

        assert first == "2025-01-01"
        assert last == "2025-01-31"
        assert label == "January 2025"

    def test_december_stays_in_year(self) -> None:
        """Should end December on the 31st of the same year."""
        first, last, label = month_range(Month("2025-12"))

        assert first == "2025-12-01"
        assert last == "2025-12-31"
        assert label == "December 2025"

    def test_february_non_leap_year(self) -> None:
        """Should handle February in non-leap year."""
        _, last, _ = month_range(Month("2025-02"))

        assert last == "2025-02-28"

    def test_february_leap_year(self) -> None:
        """Should handle February in leap year."""
        first, last, label = month_range(Month("2024-02"))

        assert first == "2024-02-01"
        assert last == "2024-02-29"
        assert label == "February 2024"

    def test_thirty_day_month(self) -> None:
        """Should handle 30-day months."""
        _, last, _ = month_range(Month("2025-04"))

        assert last == "2025-04-30"

    def test_invalid_month_format_raises_valueerror(self) -> None:
        """Should raise ValueError for invalid month format."""
        with pytest.raises(ValueError):
            month_range(Month("invalid"))

    def test_invalid_month_number_raises_valueerror(self) -> None:
        """Should raise ValueError for invalid month number."""
        with pytest.raises(ValueError):
            month_range(Month("2025-13"))


class TestShiftMonth:
    """Tests for shift_month."""

    def test_previous_month_crosses_year(self) -> None:
        """Should roll January back to December of the previous year."""
        assert shift_month(Month("2024-01"), -1) == "2023-12"

    def test_next_month_crosses_year(self) -> None:
        """Should roll December forward to January of the next year."""
        assert shift_month(Month("2024-12"), 1) == "2025-01"

    def test_zero_offset(self) -> None:
        """Should return the same month for offset 0."""
        assert shift_month(Month("2024-06"), 0) == "2024-06"

    def test_large_offsets(self) -> None:
        """Should handle offsets spanning several years."""
        assert shift_month(Month("2024-03"), 25) == "2026-04"
        assert shift_month(Month("2024-03"), -27) == "2021-12"

    def test_round_trip(self) -> None:
        """Should return to the start after moving out and back."""
        start = Month("2023-11")
        assert shift_month(shift_month(start, -14), 14) == start


class TestParseMonth:
    """Tests for parse_month and current_month."""

    def test_parses_year_and_month(self) -> None:
        """Should split YYYY-MM into integers."""
        assert parse_month(Month("2024-02")) == (2024, 2)

    def test_rejects_garbage(self) -> None:
        """Should raise ValueError for non-month strings."""
        with pytest.raises(ValueError):
            parse_month(Month("2024/02"))

    def test_current_month_from_date(self) -> None:
        """Should format the given date's month."""
        assert current_month(date(2024, 2, 29)) == "2024-02"
