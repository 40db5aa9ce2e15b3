# tests/services/test_returns_service.py
"""
Tests for ReturnsService.

Tests:
- Fund returns: one per date, non-negative totals, update and delete
- Participant daily returns: replace on same date, -100% floor
- Entries on non-trading dates are accepted
"""

from datetime import date
from decimal import Decimal

import pytest

from fundtracker.services.exceptions import (
    DailyReturnNotFoundError,
    DuplicateReturnError,
    FundReturnNotFoundError,
    InvalidPeriodError,
    ParticipantNotFoundError,
    ValidationError,
)
from fundtracker.services.returns_service import ReturnsService


@pytest.fixture
def service() -> ReturnsService:
    return ReturnsService()


class TestFundReturns:

    def test_add_and_list_by_month(self, storage, service):
        service.add_fund_return(storage, date(2025, 11, 4), Decimal("250"), Decimal("10000"))
        service.add_fund_return(storage, date(2025, 11, 3), Decimal("-100"), Decimal("10000"))
        service.add_fund_return(storage, date(2025, 12, 1), Decimal("50"), Decimal("10000"))

        november = service.list_fund_returns(storage, 2025, 11)

        assert [r.date for r in november] == [date(2025, 11, 3), date(2025, 11, 4)]

    def test_one_entry_per_date(self, storage, service):
        service.add_fund_return(storage, date(2025, 11, 3), Decimal("100"), Decimal("10000"))

        with pytest.raises(DuplicateReturnError):
            service.add_fund_return(storage, date(2025, 11, 3), Decimal("200"), Decimal("10000"))

    def test_negative_total_rejected(self, storage, service):
        with pytest.raises(ValidationError):
            service.add_fund_return(storage, date(2025, 11, 3), Decimal("100"), Decimal("-1"))

    def test_weekend_entry_accepted(self, storage, service):
        fund_return = service.add_fund_return(storage, date(2025, 11, 8), Decimal("10"), Decimal("10000"))

        assert fund_return.id is not None

    def test_partial_update(self, storage, service):
        fund_return = service.add_fund_return(storage, date(2025, 11, 3), Decimal("100"), Decimal("10000"))

        updated = service.update_fund_return(storage, fund_return.id, dollar_change=Decimal("150"))

        assert updated.dollar_change == Decimal("150")
        assert updated.total_fund_value == Decimal("10000")

    def test_update_negative_total_rejected(self, storage, service):
        fund_return = service.add_fund_return(storage, date(2025, 11, 3), Decimal("100"), Decimal("10000"))

        with pytest.raises(ValidationError):
            service.update_fund_return(storage, fund_return.id, total_fund_value=Decimal("-5"))

    def test_delete(self, storage, service):
        fund_return = service.add_fund_return(storage, date(2025, 11, 3), Decimal("100"), Decimal("10000"))

        service.delete_fund_return(storage, fund_return.id)

        assert service.list_fund_returns(storage, 2025, 11) == []

    def test_missing_entry(self, storage, service):
        with pytest.raises(FundReturnNotFoundError):
            service.update_fund_return(storage, 999, dollar_change=Decimal("1"))
        with pytest.raises(FundReturnNotFoundError):
            service.delete_fund_return(storage, 999)

    def test_invalid_period(self, storage, service):
        with pytest.raises(InvalidPeriodError):
            service.list_fund_returns(storage, 2025, 13)


class TestDailyReturns:

    def test_same_date_replaces(self, storage, service, alice):
        service.add_daily_return(storage, alice.id, date(2025, 11, 3), Decimal("1.5"))
        service.add_daily_return(storage, alice.id, date(2025, 11, 3), Decimal("-0.5"))

        [entry] = service.list_daily_returns(storage, alice.id, 2025, 11)
        assert entry.percentage == Decimal("-0.5")

    def test_floor_of_minus_hundred(self, storage, service, alice):
        service.add_daily_return(storage, alice.id, date(2025, 11, 3), Decimal("-100"))

        with pytest.raises(ValidationError):
            service.add_daily_return(storage, alice.id, date(2025, 11, 4), Decimal("-100.01"))

    def test_unknown_participant(self, storage, service):
        with pytest.raises(ParticipantNotFoundError):
            service.add_daily_return(storage, 999, date(2025, 11, 3), Decimal("1"))
        with pytest.raises(ParticipantNotFoundError):
            service.list_daily_returns(storage, 999, 2025, 11)

    def test_update_and_delete(self, storage, service, alice):
        entry = service.add_daily_return(storage, alice.id, date(2025, 11, 3), Decimal("1"))

        assert service.update_daily_return(storage, entry.id, Decimal("2")).percentage == Decimal("2")

        service.delete_daily_return(storage, entry.id)
        assert service.list_daily_returns(storage, alice.id, 2025, 11) == []

    def test_missing_entry(self, storage, service):
        with pytest.raises(DailyReturnNotFoundError):
            service.update_daily_return(storage, 999, Decimal("1"))
        with pytest.raises(DailyReturnNotFoundError):
            service.delete_daily_return(storage, 999)
