# backend/fundtracker/services/valuation/engine.py
"""
Allocation and valuation engine.

Turns a participant's beginning value and a month of return entries into a
day-by-day ledger. Pure computation: no database, no HTTP, no clock.

Building blocks:
- derive_fund_percentage: Fund dollar change -> percentage of the fund
- compound_percentages: Chain percentage returns into one
- calculate_account_value: Apply percentage returns to a balance
- resolve_returns: Reduce raw entries to ResolvedReturn, rejecting duplicate dates
- LedgerCalculator: Walk the month and produce rows + summary

Compounding rule:
    Only entries dated on a trading day move the running balance and the
    cumulative return. Entries on other dates are still listed, showing what
    they would have done in isolation.

Allocation methods (for fund-level dollar entries):
    compounded          participant dollar = running x fund% / 100
    proportional_slice  participant dollar = fund dollar x ownership% / 100

Usage:
    calculator = LedgerCalculator()
    ledger = calculator.calculate(
        beginning_value=Decimal("1000"),
        ownership_percentage=Decimal("25"),
        raw_returns=[PercentageReturn(date(2025, 11, 3), Decimal("10"))],
        trading_days=[TradingDay(date(2025, 11, 3))],
    )
    ledger.summary.current_value  # Decimal("1100")
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal
from typing import Literal

from fundtracker.services.exceptions import ValidationError
from fundtracker.services.valuation.types import (
    AccountSummary,
    AccountValue,
    FundDollarReturn,
    LedgerRow,
    MonthLedger,
    PercentageReturn,
    RawReturn,
    ResolvedReturn,
    TradingDay,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")

AllocationMethod = Literal["compounded", "proportional_slice"]


# =============================================================================
# BUILDING BLOCKS
# =============================================================================

def derive_fund_percentage(dollar_change: Decimal, total_fund_value: Decimal) -> Decimal:
    """
    Percentage change of the fund implied by a dollar change.

    Returns 0 when the fund total is 0 (nothing to measure against).
    """
    if total_fund_value == ZERO:
        return ZERO
    return dollar_change / total_fund_value * HUNDRED


def compound_percentages(percentages: Iterable[Decimal]) -> Decimal:
    """
    Chain percentage returns: (prod(1 + r/100) - 1) x 100.

    An empty sequence compounds to 0.
    """
    growth = ONE
    for percentage in percentages:
        growth *= ONE + percentage / HUNDRED
    return (growth - ONE) * HUNDRED


def percent_change(beginning_value: Decimal, current_value: Decimal) -> Decimal:
    """(current - beginning) / beginning x 100, or 0 when beginning is 0."""
    if beginning_value == ZERO:
        return ZERO
    return (current_value - beginning_value) / beginning_value * HUNDRED


def calculate_account_value(beginning_value: Decimal, percentages: Iterable[Decimal]) -> AccountValue:
    """
    Apply percentage returns to a balance, one after the other.

    Args:
        beginning_value: Starting balance
        percentages: Returns in application order

    Returns:
        AccountValue with current value, dollar change and percent change
    """
    current_value = beginning_value
    for percentage in percentages:
        current_value += current_value * percentage / HUNDRED

    return AccountValue(
        current_value=current_value,
        change=current_value - beginning_value,
        percent_change=percent_change(beginning_value, current_value),
    )


def resolve_returns(raw_returns: Iterable[RawReturn]) -> list[ResolvedReturn]:
    """
    Reduce raw entries to percentage form, sorted by date.

    Raises:
        ValidationError: If two entries share a date
    """
    resolved: dict[date, ResolvedReturn] = {}

    for entry in raw_returns:
        if entry.date in resolved:
            raise ValidationError(
                f"More than one return entry for {entry.date.isoformat()}",
                field="date",
            )

        if isinstance(entry, FundDollarReturn):
            resolved[entry.date] = ResolvedReturn(
                date=entry.date,
                percentage=derive_fund_percentage(entry.dollar_change, entry.total_fund_value),
                source="fund",
                source_id=entry.source_id,
                dollar_change=entry.dollar_change,
                total_fund_value=entry.total_fund_value,
            )
        elif isinstance(entry, PercentageReturn):
            resolved[entry.date] = ResolvedReturn(
                date=entry.date,
                percentage=entry.percentage,
                source="participant",
                source_id=entry.source_id,
            )
        else:
            raise ValidationError(f"Unsupported return entry: {type(entry).__name__}")

    return [resolved[day] for day in sorted(resolved)]


# =============================================================================
# LEDGER CALCULATOR
# =============================================================================

class LedgerCalculator:
    """
    Produces a participant's month ledger from resolved returns.

    Stateless apart from the allocation method, so one instance can serve
    every participant of a request.
    """

    def __init__(self, allocation_method: AllocationMethod = "compounded") -> None:
        if allocation_method not in ("compounded", "proportional_slice"):
            raise ValidationError(
                f"Unknown allocation method: {allocation_method}",
                field="allocation_method",
            )
        self.allocation_method = allocation_method

    def calculate(
            self,
            beginning_value: Decimal,
            ownership_percentage: Decimal,
            raw_returns: Iterable[RawReturn],
            trading_days: Sequence[TradingDay],
    ) -> MonthLedger:
        """
        Walk the month in date order.

        Args:
            beginning_value: Participant's value at the start of the month
            ownership_percentage: Participant's share of the fund (proportional_slice only)
            raw_returns: Participant and/or fund entries, at most one per date
            trading_days: The month's trading calendar

        Returns:
            MonthLedger with one row per trading day or entry date

        Raises:
            ValidationError: If two entries share a date
        """
        entries = {entry.date: entry for entry in resolve_returns(raw_returns)}
        calendar = {day.date: day for day in trading_days}

        running = beginning_value
        cumulative = ZERO
        compounded_entries = 0
        non_trading_entries = 0
        rows: list[LedgerRow] = []

        for day in sorted(set(calendar) | set(entries)):
            trading_day = calendar.get(day)
            entry = entries.get(day)
            is_half_day = trading_day.is_half_day if trading_day else False

            if entry is None:
                rows.append(LedgerRow(date=day, is_trading_day=True, is_half_day=is_half_day))
                continue

            percentage, dollar_change = self._allocate(entry, running, ownership_percentage)

            if trading_day is None:
                # Shown for reference only: running value and cumulative stay put
                non_trading_entries += 1
                rows.append(LedgerRow(
                    date=day,
                    is_trading_day=False,
                    percentage=percentage,
                    dollar_change=dollar_change,
                    value=running + dollar_change,
                    cumulative_return=percentage,
                    source=entry.source,
                    source_id=entry.source_id,
                ))
                continue

            compounded_entries += 1
            running += dollar_change
            cumulative = ((ONE + cumulative / HUNDRED) * (ONE + percentage / HUNDRED) - ONE) * HUNDRED
            rows.append(LedgerRow(
                date=day,
                is_trading_day=True,
                is_half_day=is_half_day,
                percentage=percentage,
                dollar_change=dollar_change,
                value=running,
                cumulative_return=cumulative,
                source=entry.source,
                source_id=entry.source_id,
            ))

        if non_trading_entries:
            logger.debug(f"{non_trading_entries} return entries fall outside the trading calendar")

        summary = AccountSummary(
            beginning_value=beginning_value,
            current_value=running,
            change=running - beginning_value,
            percent_change=percent_change(beginning_value, running),
            month_return=cumulative,
            compounded_entries=compounded_entries,
            non_trading_entries=non_trading_entries,
        )
        return MonthLedger(rows=rows, summary=summary)

    def _allocate(
            self,
            entry: ResolvedReturn,
            running: Decimal,
            ownership_percentage: Decimal,
    ) -> tuple[Decimal, Decimal]:
        """
        The participant's (percentage, dollar change) for one entry.

        Participant-level entries, and every entry under the compounded method,
        apply the percentage to the running balance.
        """
        if (
            self.allocation_method == "proportional_slice"
            and entry.source == "fund"
            and entry.dollar_change is not None
        ):
            dollar_change = entry.dollar_change * ownership_percentage / HUNDRED
            if running == ZERO:
                return entry.percentage, dollar_change
            return dollar_change / running * HUNDRED, dollar_change

        return entry.percentage, running * entry.percentage / HUNDRED
