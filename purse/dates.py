"""Date utilities for purse.

Pure functions for month ranges and month navigation.
"""

import calendar
from datetime import date, datetime

from purse.domain.models import Month


def parse_month(month: Month) -> tuple[int, int]:
    """Split a month into year and month number.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (year, month_number).

    Raises:
        ValueError: If the month is not a valid YYYY-MM value.
    """
    dt = datetime.strptime(month, "%Y-%m")
    return dt.year, dt.month


def format_month(year: int, month_number: int) -> Month:
    """Format year and month number as YYYY-MM."""
    return Month(f"{year:04d}-{month_number:02d}")


def shift_month(month: Month, offset: int) -> Month:
    """Move a month forwards or backwards, rolling over year boundaries.

    Args:
        month: Month in YYYY-MM format.
        offset: Number of months to move (negative moves back).

    Returns:
        The month that many months away.
    """
    year, month_number = parse_month(month)
    year_delta, month_index = divmod(month_number - 1 + offset, 12)
    return format_month(year + year_delta, month_index + 1)


def month_range(month: Month) -> tuple[str, str, str]:
    """Calculate the inclusive date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (first_day, last_day, label) where:
        - first_day: First day of month (YYYY-MM-DD)
        - last_day: Last day of month (YYYY-MM-DD), inclusive
        - label: Human-readable month (e.g., "January 2025")
    """
    year, month_number = parse_month(month)
    days_in_month = calendar.monthrange(year, month_number)[1]
    first_day = date(year, month_number, 1)
    last_day = date(year, month_number, days_in_month)
    label = first_day.strftime("%B %Y")
    return first_day.isoformat(), last_day.isoformat(), label


def current_month(today: date | None = None) -> Month:
    """Get the month containing today (or the given date)."""
    if today is None:
        today = date.today()
    return format_month(today.year, today.month)
