# tests/services/test_ledger_service.py
"""
Integration tests for LedgerService against a real (SQLite) storage.

Tests:
- Participant ledgers from fund returns and participant daily returns
- Period basis rules (override, profile, derived, none)
- Fund summary totals and over-allocation flag
- Weekday fallback when the calendar is empty
"""

from datetime import date
from decimal import Decimal

import pytest

from fundtracker.services.exceptions import InvalidPeriodError, ParticipantNotFoundError
from fundtracker.services.returns_service import ReturnsService
from fundtracker.services.valuation import LedgerService
from tests.conftest import create_participant, seed_trading_days, set_current_period

NOV_3 = date(2025, 11, 3)
NOV_4 = date(2025, 11, 4)
NOV_5 = date(2025, 11, 5)


@pytest.fixture
def service() -> LedgerService:
    return LedgerService(allocation_method="compounded")


@pytest.fixture
def returns() -> ReturnsService:
    return ReturnsService()


@pytest.fixture
def calendar(storage):
    seed_trading_days(storage, NOV_3, NOV_4, NOV_5)


# =============================================================================
# TEST: PARTICIPANT LEDGER
# =============================================================================


class TestParticipantLedger:

    def test_fund_return_applies_to_every_participant(
            self, storage, service, returns, november, calendar, alice, bob
    ):
        returns.add_fund_return(storage, NOV_3, Decimal("200"), Decimal("10000"))

        alice_ledger = service.participant_ledger(storage, alice.id, 2025, 11)
        bob_ledger = service.participant_ledger(storage, bob.id, 2025, 11)

        assert alice_ledger.summary.current_value == Decimal("6120")
        assert bob_ledger.summary.current_value == Decimal("4080")
        assert alice_ledger.summary.month_return == Decimal("2")
        assert alice_ledger.rows[0].source == "fund"

    def test_daily_return_takes_precedence_over_fund_return(
            self, storage, service, returns, november, calendar, alice, bob
    ):
        returns.add_fund_return(storage, NOV_3, Decimal("200"), Decimal("10000"))
        daily = returns.add_daily_return(storage, alice.id, NOV_3, Decimal("5"))

        alice_ledger = service.participant_ledger(storage, alice.id, 2025, 11)
        bob_ledger = service.participant_ledger(storage, bob.id, 2025, 11)

        first_row = alice_ledger.rows[0]
        assert first_row.source == "participant"
        assert first_row.source_id == daily.id
        assert alice_ledger.summary.current_value == Decimal("6300")
        assert bob_ledger.summary.current_value == Decimal("4080")

    def test_one_row_per_trading_day(self, storage, service, november, calendar, alice):
        ledger = service.participant_ledger(storage, alice.id, 2025, 11)

        assert [row.date for row in ledger.rows] == [NOV_3, NOV_4, NOV_5]
        assert ledger.summary.current_value == ledger.summary.beginning_value

    def test_add_then_delete_restores_ledger(
            self, storage, service, returns, november, calendar, alice
    ):
        returns.add_fund_return(storage, NOV_3, Decimal("150"), Decimal("10000"))
        before = service.participant_ledger(storage, alice.id, 2025, 11)

        added = returns.add_fund_return(storage, NOV_4, Decimal("-300"), Decimal("10000"))
        changed = service.participant_ledger(storage, alice.id, 2025, 11)
        returns.delete_fund_return(storage, added.id)
        after = service.participant_ledger(storage, alice.id, 2025, 11)

        assert changed.summary.current_value != before.summary.current_value
        assert after.summary == before.summary
        assert after.rows == before.rows

    def test_weekend_entry_is_listed_but_not_compounded(
            self, storage, service, returns, november, calendar, alice
    ):
        saturday = date(2025, 11, 8)
        returns.add_daily_return(storage, alice.id, saturday, Decimal("10"))

        ledger = service.participant_ledger(storage, alice.id, 2025, 11)

        weekend_row = ledger.rows[-1]
        assert weekend_row.date == saturday
        assert weekend_row.is_trading_day is False
        assert weekend_row.value == Decimal("6600")
        assert ledger.summary.current_value == Decimal("6000")
        assert ledger.summary.non_trading_entries == 1

    def test_unknown_participant(self, storage, service, november):
        with pytest.raises(ParticipantNotFoundError):
            service.participant_ledger(storage, 999, 2025, 11)

    def test_invalid_period(self, storage, service, alice):
        with pytest.raises(InvalidPeriodError):
            service.participant_ledger(storage, alice.id, 2025, 13)

    def test_proportional_slice_allocation(self, storage, returns, november, calendar, alice):
        returns.add_fund_return(storage, NOV_3, Decimal("500"), Decimal("10000"))
        service = LedgerService(allocation_method="proportional_slice")

        ledger = service.participant_ledger(storage, alice.id, 2025, 11)

        # 60% of the fund's 500
        assert ledger.rows[0].dollar_change == Decimal("300")
        assert ledger.summary.current_value == Decimal("6300")


# =============================================================================
# TEST: PERIOD BASIS
# =============================================================================


class TestPeriodBasis:

    def test_current_period_uses_profile(self, storage, service, november, alice):
        ledger = service.participant_ledger(storage, alice.id, 2025, 11)

        assert ledger.basis.source == "profile"
        assert ledger.basis.beginning_value == Decimal("6000")
        assert ledger.basis.ownership_percentage == Decimal("60")

    def test_override_month_is_independent(self, storage, service, november, alice):
        """A March override changes March only; February still starts from zero."""
        storage.set_monthly_value(alice.id, 2025, 3, Decimal("1000"), Decimal("10"))
        storage.commit()

        march = service.participant_ledger(storage, alice.id, 2025, 3)
        february = service.participant_ledger(storage, alice.id, 2025, 2)

        assert march.basis.source == "monthly_value"
        assert march.summary.beginning_value == Decimal("1000")
        assert february.basis.source == "none"
        assert february.summary.beginning_value == Decimal("0")

    def test_other_months_without_override_start_at_zero(self, storage, service, november, alice):
        ledger = service.participant_ledger(storage, alice.id, 2025, 10)

        assert ledger.basis.source == "none"
        assert ledger.summary.current_value == Decimal("0")

    def test_beginning_value_derived_from_ownership(self, storage, service, november):
        carol = create_participant(storage, "carol", ownership_percentage=Decimal("25"))

        ledger = service.participant_ledger(storage, carol.id, 2025, 11)

        assert ledger.basis.source == "derived"
        assert ledger.basis.beginning_value == Decimal("2500")

    def test_no_fund_total_means_zero_beginning(self, storage, service):
        set_current_period(storage, 2025, 11)
        carol = create_participant(storage, "carol", ownership_percentage=Decimal("25"))

        ledger = service.participant_ledger(storage, carol.id, 2025, 11)

        assert ledger.basis.source == "profile"
        assert ledger.basis.beginning_value == Decimal("0")


# =============================================================================
# TEST: FUND SUMMARY
# =============================================================================


class TestFundSummary:

    def test_totals(self, storage, service, returns, november, calendar, admin, alice, bob):
        returns.add_fund_return(storage, NOV_3, Decimal("200"), Decimal("10000"))
        returns.add_fund_return(storage, NOV_4, Decimal("102"), Decimal("10200"))

        summary = service.fund_summary(storage, 2025, 11)

        assert [ledger.username for ledger in summary.participants] == ["alice", "bob"]
        assert summary.total_beginning_value == Decimal("10000")
        assert summary.total_current_value == Decimal("10302")
        assert summary.total_change == Decimal("302")
        assert summary.fund_month_return == Decimal("3.02")
        assert summary.ownership_total == Decimal("100")
        assert summary.is_over_allocated is False
        assert summary.warnings == []
        assert summary.trading_days == 3

    def test_over_allocation_is_flagged_not_rejected(self, storage, service, november):
        create_participant(storage, "carol", beginning_value=Decimal("7000"), ownership_percentage=Decimal("70"))
        create_participant(storage, "dave", beginning_value=Decimal("4000"), ownership_percentage=Decimal("40"))

        summary = service.fund_summary(storage, 2025, 11)

        assert summary.ownership_total == Decimal("110")
        assert summary.is_over_allocated is True
        assert len(summary.warnings) == 1

    def test_fund_return_off_calendar_excluded_from_fund_return(
            self, storage, service, returns, november, calendar, alice
    ):
        returns.add_fund_return(storage, date(2025, 11, 8), Decimal("500"), Decimal("10000"))

        summary = service.fund_summary(storage, 2025, 11)

        assert summary.fund_month_return == Decimal("0")
        assert summary.total_current_value == Decimal("6000")

    def test_weekday_fallback_without_calendar(self, storage, service, november, alice):
        summary = service.fund_summary(storage, 2025, 11)

        # November 2025 has 20 weekdays
        assert summary.trading_days == 20
        assert len(summary.participants[0].rows) == 20
