# backend/fundtracker/services/valuation/service.py
"""
Ledger Service - entry point for participant and fund month views.

- participant_ledger(): One participant's month, day by day
- fund_summary(): Every participant's month plus fund totals

Design Principles:
- Dependency Injection: calendar service and allocation method via constructor
- No HTTP Knowledge: Raises domain exceptions, not HTTPException
- Composable: Basis resolution, calendar and engine are separate pieces

Data Flow:
    Storage -> FundReturn / DailyReturn rows -> merged raw entries
    Storage -> MonthlyValue / profile -> PeriodBasis
    TradingCalendarService -> TradingDay list
    All above -> LedgerCalculator -> MonthLedger

Usage:
    from fundtracker.services.valuation import LedgerService

    service = LedgerService()
    ledger = service.participant_ledger(storage, participant_id=2, year=2025, month=11)
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from fundtracker.config import settings
from fundtracker.services.constants import OWNERSHIP_LIMIT, OWNERSHIP_TOLERANCE
from fundtracker.services.exceptions import ParticipantNotFoundError
from fundtracker.services.periods import validate_period
from fundtracker.services.protocols import FundStorage
from fundtracker.services.trading_calendar import TradingCalendarService
from fundtracker.services.valuation.basis import resolve_period_basis
from fundtracker.services.valuation.engine import (
    AllocationMethod,
    LedgerCalculator,
    compound_percentages,
    derive_fund_percentage,
    percent_change,
)
from fundtracker.services.valuation.types import (
    FundDollarReturn,
    FundSummary,
    ParticipantLedger,
    PercentageReturn,
    RawReturn,
    TradingDay,
    ZERO,
)
from fundtracker.utils.date_utils import month_bounds

if TYPE_CHECKING:
    from fundtracker.models import FundReturn, Participant

logger = logging.getLogger(__name__)


class LedgerService:
    """
    Builds month ledgers for participants and the fund.

    Attributes:
        calendar: Source of trading days
        calculator: Engine configured with the allocation method
    """

    def __init__(
            self,
            calendar_service: TradingCalendarService | None = None,
            allocation_method: AllocationMethod | None = None,
    ) -> None:
        self.calendar = calendar_service or TradingCalendarService()
        self.calculator = LedgerCalculator(allocation_method or settings.allocation_method)

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def participant_ledger(
            self,
            storage: FundStorage,
            participant_id: int,
            year: int,
            month: int,
    ) -> ParticipantLedger:
        """
        One participant's month.

        Raises:
            InvalidPeriodError: If (year, month) is not a real month
            ParticipantNotFoundError: If the participant doesn't exist
        """
        validate_period(year, month)

        participant = storage.get_participant(participant_id)
        if participant is None:
            raise ParticipantNotFoundError(participant_id)

        start, end = month_bounds(year, month)
        trading_days = self.calendar.trading_days_for(storage, year, month)
        fund_returns = storage.list_fund_returns(start, end)

        return self._build_ledger(storage, participant, year, month, trading_days, fund_returns)

    def fund_summary(self, storage: FundStorage, year: int, month: int) -> FundSummary:
        """
        Every non-admin participant's month, with fund totals.

        Raises:
            InvalidPeriodError: If (year, month) is not a real month
        """
        validate_period(year, month)

        start, end = month_bounds(year, month)
        trading_days = self.calendar.trading_days_for(storage, year, month)
        fund_returns = storage.list_fund_returns(start, end)

        ledgers = [
            self._build_ledger(storage, participant, year, month, trading_days, fund_returns)
            for participant in storage.list_participants()
        ]

        total_beginning = sum((ledger.summary.beginning_value for ledger in ledgers), ZERO)
        total_current = sum((ledger.summary.current_value for ledger in ledgers), ZERO)
        ownership_total = sum((ledger.basis.ownership_percentage for ledger in ledgers), ZERO)
        is_over_allocated = ownership_total > OWNERSHIP_LIMIT + OWNERSHIP_TOLERANCE

        trading_dates = {day.date for day in trading_days}
        fund_month_return = compound_percentages(
            derive_fund_percentage(entry.dollar_change, entry.total_fund_value)
            for entry in fund_returns
            if entry.date in trading_dates
        )

        warnings: list[str] = []
        if is_over_allocated:
            warnings.append(f"Ownership for {year}-{month:02d} totals {ownership_total:.4f}%")
            logger.warning(f"Fund over-allocated for {year}-{month:02d}: {ownership_total}%")

        return FundSummary(
            year=year,
            month=month,
            participants=ledgers,
            total_beginning_value=total_beginning,
            total_current_value=total_current,
            total_change=total_current - total_beginning,
            total_percent_change=percent_change(total_beginning, total_current),
            fund_month_return=fund_month_return,
            ownership_total=ownership_total,
            is_over_allocated=is_over_allocated,
            trading_days=len(trading_days),
            warnings=warnings,
        )

    # =========================================================================
    # PRIVATE HELPERS
    # =========================================================================

    def _build_ledger(
            self,
            storage: FundStorage,
            participant: Participant,
            year: int,
            month: int,
            trading_days: list[TradingDay],
            fund_returns: list[FundReturn],
    ) -> ParticipantLedger:
        basis = resolve_period_basis(storage, participant, year, month)
        raw_returns = self._merge_returns(storage, participant.id, year, month, fund_returns)

        ledger = self.calculator.calculate(
            beginning_value=basis.beginning_value,
            ownership_percentage=basis.ownership_percentage,
            raw_returns=raw_returns,
            trading_days=trading_days,
        )

        return ParticipantLedger(
            participant_id=participant.id,
            username=participant.username,
            full_name=participant.full_name,
            year=year,
            month=month,
            basis=basis,
            rows=ledger.rows,
            summary=ledger.summary,
        )

    def _merge_returns(
            self,
            storage: FundStorage,
            participant_id: int,
            year: int,
            month: int,
            fund_returns: list[FundReturn],
    ) -> list[RawReturn]:
        """
        Fund entries for the month, replaced by the participant's own entry
        wherever both exist on the same date.
        """
        start, end = month_bounds(year, month)

        merged: dict[date, RawReturn] = {
            entry.date: FundDollarReturn(
                date=entry.date,
                dollar_change=entry.dollar_change,
                total_fund_value=entry.total_fund_value,
                source_id=entry.id,
            )
            for entry in fund_returns
        }
        for entry in storage.list_daily_returns(participant_id, start, end):
            merged[entry.date] = PercentageReturn(
                date=entry.date,
                percentage=entry.percentage,
                source_id=entry.id,
            )

        return [merged[day] for day in sorted(merged)]
