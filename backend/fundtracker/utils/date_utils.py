# backend/fundtracker/utils/date_utils.py
"""
Date utility functions for the Fund Tracker.

Shared by the trading calendar (weekday fallback, seeding) and the ledger
(month boundaries for storage queries).

Usage:
    from fundtracker.utils.date_utils import weekdays_in_month, month_bounds

    days = weekdays_in_month(2025, 11)
"""

import calendar
from datetime import date, timedelta


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """
    Get the first and last day of a month.

    Raises:
        ValueError: If month is not 1-12

    Example:
        >>> month_bounds(2024, 2)
        (date(2024, 2, 1), date(2024, 2, 29))
    """
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def get_business_days(start_date: date, end_date: date) -> list[date]:
    """
    Get list of business days (weekdays) in a date range.

    Business days are Monday through Friday (weekday() < 5).
    Market holidays are not considered here; the stored trading
    calendar covers those.

    Args:
        start_date: First date in range (inclusive)
        end_date: Last date in range (inclusive)

    Returns:
        List of dates that are weekdays, sorted chronologically
    """
    days = []
    current = start_date

    while current <= end_date:
        if is_business_day(current):
            days.append(current)
        current += timedelta(days=1)

    return days


def weekdays_in_month(year: int, month: int) -> list[date]:
    """Every Monday-Friday date of the given month, ascending."""
    first, last = month_bounds(year, month)
    return get_business_days(first, last)


def is_business_day(d: date) -> bool:
    """True if Monday-Friday, False if Saturday-Sunday."""
    return d.weekday() < 5  # Monday = 0, Friday = 4
