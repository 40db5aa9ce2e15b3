# tests/services/test_trading_calendar.py
"""
Tests for TradingCalendarService.

Tests:
- Weekday fallback for months with no stored dates
- Seeding a month (holidays, half days, idempotence)
- Default Q4 2025 calendar
- Adding, flagging and removing single dates
- Calendar status
"""

from datetime import date

import pytest

from fundtracker.services.exceptions import InvalidPeriodError, TradingDayNotFoundError, ValidationError
from fundtracker.services.trading_calendar import TradingCalendarService

THANKSGIVING = date(2025, 11, 27)
BLACK_FRIDAY = date(2025, 11, 28)


@pytest.fixture
def service() -> TradingCalendarService:
    return TradingCalendarService()


class TestTradingDaysFor:

    def test_falls_back_to_weekdays(self, storage, service):
        days = service.trading_days_for(storage, 2025, 11)

        assert len(days) == 20
        assert days[0].date == date(2025, 11, 3)
        assert all(day.date.weekday() < 5 for day in days)
        assert not any(day.is_half_day for day in days)

    def test_uses_stored_dates_when_present(self, storage, service):
        storage.upsert_trading_day(date(2025, 11, 3), is_half_day=False)
        storage.upsert_trading_day(date(2025, 11, 4), is_half_day=True)
        storage.commit()

        days = service.trading_days_for(storage, 2025, 11)

        assert [(day.date.day, day.is_half_day) for day in days] == [(3, False), (4, True)]

    def test_other_month_still_falls_back(self, storage, service):
        storage.upsert_trading_day(date(2025, 11, 3), is_half_day=False)
        storage.commit()

        assert len(service.trading_days_for(storage, 2025, 12)) == 23

    def test_invalid_period(self, storage, service):
        with pytest.raises(InvalidPeriodError):
            service.trading_days_for(storage, 2025, 0)


class TestSeedMonth:

    def test_skips_holidays_and_flags_half_days(self, storage, service):
        inserted = service.seed_month(
            storage, 2025, 11, holidays={THANKSGIVING}, half_days={BLACK_FRIDAY},
        )

        days = {day.date: day for day in service.trading_days_for(storage, 2025, 11)}
        assert inserted == 19
        assert THANKSGIVING not in days
        assert days[BLACK_FRIDAY].is_half_day is True

    def test_reseeding_inserts_nothing(self, storage, service):
        service.seed_month(storage, 2025, 11)

        assert service.seed_month(storage, 2025, 11) == 0
        assert storage.count_trading_days() == 20

    def test_holiday_and_half_day_clash_rejected(self, storage, service):
        with pytest.raises(ValidationError):
            service.seed_month(storage, 2025, 11, holidays={THANKSGIVING}, half_days={THANKSGIVING})

        assert storage.count_trading_days() == 0


class TestSeedDefaults:

    def test_seeds_fourth_quarter_2025(self, storage, service):
        # October 23 + November 19 + December 22
        assert service.seed_defaults(storage) == 64

        december = {day.date: day for day in service.trading_days_for(storage, 2025, 12)}
        assert date(2025, 12, 25) not in december
        assert december[date(2025, 12, 24)].is_half_day is True

    def test_second_run_is_a_no_op(self, storage, service):
        service.seed_defaults(storage)

        assert service.seed_defaults(storage) == 0
        assert storage.count_trading_days() == 64


class TestSingleDays:

    def test_set_day_adds_and_updates(self, storage, service):
        service.set_day(storage, date(2025, 11, 3))
        updated = service.set_day(storage, date(2025, 11, 3), is_half_day=True)

        assert updated.is_half_day is True
        assert storage.count_trading_days() == 1

    def test_weekend_rejected(self, storage, service):
        with pytest.raises(ValidationError):
            service.set_day(storage, date(2025, 11, 8))

    def test_remove_day(self, storage, service):
        service.seed_month(storage, 2025, 11)

        service.remove_day(storage, THANKSGIVING)

        assert storage.get_trading_day(THANKSGIVING) is None
        assert storage.count_trading_days() == 19

    def test_remove_missing_day(self, storage, service):
        with pytest.raises(TradingDayNotFoundError):
            service.remove_day(storage, THANKSGIVING)


class TestCalendarStatus:

    def test_empty_calendar(self, storage, service):
        status = service.calendar_status(storage)

        assert status.total_days == 0
        assert status.is_initialized is False
        assert status.sample == []

    def test_seeded_calendar(self, storage, service):
        service.seed_defaults(storage)

        status = service.calendar_status(storage)

        assert status.is_initialized is True
        assert status.total_days == 64
        assert len(status.sample) == 10
        assert status.sample[0].date == date(2025, 10, 1)
