# backend/fundtracker/services/periods.py
"""
Tracking period helpers.

A period is a (year, month) pair. The fund settings row names one of them as
the current period: the month that participant profile values describe.
When no settings row exists, the current period is today's month.
"""

from datetime import date

from fundtracker.services.exceptions import InvalidPeriodError
from fundtracker.services.protocols import FundStorage

MIN_YEAR = 1900
MAX_YEAR = 9999


def validate_period(year: int, month: int) -> None:
    """
    Ensure (year, month) names a real calendar month.

    Raises:
        InvalidPeriodError: If month is outside 1-12 or year is out of range
    """
    if not 1 <= month <= 12 or not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidPeriodError(year, month)


def current_period(storage: FundStorage, today: date | None = None) -> tuple[int, int]:
    """The designated current (year, month)."""
    fund_settings = storage.get_fund_settings()
    if fund_settings is not None:
        return fund_settings.current_year, fund_settings.current_month

    today = today or date.today()
    return today.year, today.month


def is_current_period(storage: FundStorage, year: int, month: int) -> bool:
    return current_period(storage) == (year, month)
