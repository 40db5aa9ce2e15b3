# backend/fundtracker/services/trading_calendar.py
"""
Trading calendar service.

The stored calendar is the authoritative list of dates on which returns are
compounded. Months with no stored dates fall back to every weekday, so a
ledger can always be produced.

Usage:
    service = TradingCalendarService()
    days = service.trading_days_for(storage, 2025, 11)
    service.seed_defaults(storage)
"""

import logging
from collections.abc import Collection
from dataclasses import dataclass
from datetime import date

from fundtracker.services.constants import (
    CALENDAR_STATUS_SAMPLE_SIZE,
    DEFAULT_CALENDAR_HALF_DAYS,
    DEFAULT_CALENDAR_HOLIDAYS,
    DEFAULT_CALENDAR_MONTHS,
    DEFAULT_CALENDAR_YEAR,
)
from fundtracker.services.exceptions import TradingDayNotFoundError, ValidationError
from fundtracker.services.periods import validate_period
from fundtracker.services.protocols import FundStorage
from fundtracker.services.valuation.types import TradingDay
from fundtracker.utils.date_utils import is_business_day, month_bounds, weekdays_in_month

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarStatus:
    """How many trading days are stored, with the earliest few as a sample."""

    total_days: int
    sample: list[TradingDay]

    @property
    def is_initialized(self) -> bool:
        return self.total_days > 0


class TradingCalendarService:
    """Reads and maintains the trading calendar."""

    def trading_days_for(self, storage: FundStorage, year: int, month: int) -> list[TradingDay]:
        """
        Trading days of a month, ascending.

        Falls back to every Monday-Friday date (none flagged half-day) when the
        calendar holds nothing for the month. Never fails for a valid period.

        Raises:
            InvalidPeriodError: If (year, month) is not a real month
        """
        validate_period(year, month)
        start, end = month_bounds(year, month)

        stored = storage.list_trading_days(start, end)
        if stored:
            return [TradingDay(date=day.date, is_half_day=day.is_half_day) for day in stored]

        logger.debug(f"No calendar entries for {year}-{month:02d}, using weekdays")
        return [TradingDay(date=day) for day in weekdays_in_month(year, month)]

    def seed_month(
            self,
            storage: FundStorage,
            year: int,
            month: int,
            holidays: Collection[date] = (),
            half_days: Collection[date] = (),
            commit: bool = True,
    ) -> int:
        """
        Store every weekday of a month except holidays.

        Dates already on the calendar are left untouched.

        Args:
            holidays: Weekdays on which the market is closed
            half_days: Weekdays flagged as early closes

        Returns:
            Number of dates inserted

        Raises:
            InvalidPeriodError: If (year, month) is not a real month
            ValidationError: If a date is listed both as holiday and half day
        """
        validate_period(year, month)

        clash = set(holidays) & set(half_days)
        if clash:
            listed = ", ".join(sorted(day.isoformat() for day in clash))
            raise ValidationError(f"Dates cannot be both holiday and half day: {listed}", field="half_days")

        inserted = 0
        for day in weekdays_in_month(year, month):
            if day in holidays:
                continue
            if storage.get_trading_day(day) is not None:
                continue
            storage.upsert_trading_day(day, is_half_day=day in half_days)
            inserted += 1

        if commit:
            storage.commit()

        logger.info(f"Seeded {inserted} trading days for {year}-{month:02d}")
        return inserted

    def seed_defaults(self, storage: FundStorage) -> int:
        """
        Store the built-in NYSE calendar for October-December 2025.

        Returns:
            Number of dates inserted across the three months
        """
        inserted = 0
        try:
            for month in DEFAULT_CALENDAR_MONTHS:
                inserted += self.seed_month(
                    storage,
                    DEFAULT_CALENDAR_YEAR,
                    month,
                    holidays=DEFAULT_CALENDAR_HOLIDAYS,
                    half_days=DEFAULT_CALENDAR_HALF_DAYS,
                    commit=False,
                )
            storage.commit()
        except Exception:
            storage.rollback()
            raise

        return inserted

    def set_day(self, storage: FundStorage, day: date, is_half_day: bool = False) -> TradingDay:
        """
        Add a date to the calendar, or change its half-day flag.

        Raises:
            ValidationError: If the date is a weekend
        """
        if not is_business_day(day):
            raise ValidationError(f"{day.isoformat()} is a weekend", field="date")

        stored = storage.upsert_trading_day(day, is_half_day)
        storage.commit()
        logger.info(f"Trading day {day.isoformat()} set (half_day={is_half_day})")
        return TradingDay(date=stored.date, is_half_day=stored.is_half_day)

    def remove_day(self, storage: FundStorage, day: date) -> None:
        """
        Take a date off the calendar.

        Raises:
            TradingDayNotFoundError: If the date is not stored
        """
        stored = storage.get_trading_day(day)
        if stored is None:
            raise TradingDayNotFoundError(day)

        storage.delete_trading_day(stored)
        storage.commit()
        logger.info(f"Trading day {day.isoformat()} removed")

    def calendar_status(self, storage: FundStorage) -> CalendarStatus:
        """Count of stored days plus the earliest CALENDAR_STATUS_SAMPLE_SIZE of them."""
        total = storage.count_trading_days()
        sample: list[TradingDay] = []
        if total:
            stored = storage.list_trading_days(date.min, date.max)[:CALENDAR_STATUS_SAMPLE_SIZE]
            sample = [TradingDay(date=day.date, is_half_day=day.is_half_day) for day in stored]

        return CalendarStatus(total_days=total, sample=sample)
