# tests/utils/test_date_utils.py
"""Tests for date helpers used by the calendar and ledger."""

from datetime import date

import pytest

from fundtracker.utils.date_utils import (
    get_business_days,
    is_business_day,
    month_bounds,
    weekdays_in_month,
)


class TestMonthBounds:

    @pytest.mark.parametrize(
        "year,month,last",
        [
            (2024, 2, date(2024, 2, 29)),
            (2025, 2, date(2025, 2, 28)),
            (2025, 11, date(2025, 11, 30)),
            (2025, 12, date(2025, 12, 31)),
        ],
    )
    def test_first_and_last_day(self, year, month, last):
        assert month_bounds(year, month) == (date(year, month, 1), last)

    def test_invalid_month(self):
        with pytest.raises(ValueError):
            month_bounds(2025, 13)


class TestBusinessDays:

    def test_weekend_is_not_business_day(self):
        assert is_business_day(date(2025, 11, 7)) is True  # Friday
        assert is_business_day(date(2025, 11, 8)) is False
        assert is_business_day(date(2025, 11, 9)) is False

    def test_range_is_inclusive(self):
        days = get_business_days(date(2025, 11, 7), date(2025, 11, 10))

        assert days == [date(2025, 11, 7), date(2025, 11, 10)]

    def test_empty_when_reversed(self):
        assert get_business_days(date(2025, 11, 10), date(2025, 11, 7)) == []

    def test_weekdays_in_month(self):
        november = weekdays_in_month(2025, 11)

        assert len(november) == 20
        assert november[0] == date(2025, 11, 3)
        assert november[-1] == date(2025, 11, 28)
