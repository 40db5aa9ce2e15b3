# backend/fundtracker/services/valuation/types.py
"""
Internal data types for the valuation engine and ledger service.

These dataclasses are used internally by the engine and services.
They are NOT Pydantic schemas; those live in fundtracker/schemas/ledger.py
for API serialization.

Design Principles:
- Immutable value objects (frozen=True)
- Decimal for ALL money and percentage values (never float)
- date (not datetime) for ledger dates
- Optional fields use None, not sentinel values

Type Hierarchy:
    TradingDay          - One calendar date valid for compounding
    PercentageReturn    - Raw entry: a percentage change
    FundDollarReturn    - Raw entry: a fund-level dollar change
    LedgerRow           - One displayed day of a participant's month
    AccountSummary      - Month totals for one participant
    MonthLedger         - Rows + summary (engine output)
    PeriodBasis         - Beginning value / ownership a month starts with
    ParticipantLedger   - MonthLedger plus participant identity and basis
    FundSummary         - All participants of a month, with fund totals
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Literal, Union

ZERO = Decimal("0")

ReturnSource = Literal["participant", "fund"]
BasisSource = Literal["monthly_value", "profile", "derived", "none"]


# =============================================================================
# ENGINE INPUTS
# =============================================================================

@dataclass(frozen=True)
class TradingDay:
    """A date on which return entries are compounded."""

    date: date
    is_half_day: bool = False


@dataclass(frozen=True)
class PercentageReturn:
    """
    A percentage change recorded directly (participant-level entry).

    Attributes:
        date: Day the change applies to
        percentage: Change in percent (1.5 means +1.5%)
        source_id: Id of the stored DailyReturn, if any
    """

    date: date
    percentage: Decimal
    source_id: int | None = None


@dataclass(frozen=True)
class FundDollarReturn:
    """
    A fund-level dollar change measured against the fund's total value.

    Attributes:
        date: Day the change applies to
        dollar_change: Fund-wide gain or loss in dollars
        total_fund_value: Fund value the change is measured against
        source_id: Id of the stored FundReturn, if any
    """

    date: date
    dollar_change: Decimal
    total_fund_value: Decimal
    source_id: int | None = None


RawReturn = Union[PercentageReturn, FundDollarReturn]


@dataclass(frozen=True)
class ResolvedReturn:
    """
    A raw entry reduced to a percentage, remembering where it came from.

    For fund entries the original dollar figures are kept so the
    proportional-slice allocation can use them.
    """

    date: date
    percentage: Decimal
    source: ReturnSource
    source_id: int | None = None
    dollar_change: Decimal | None = None
    total_fund_value: Decimal | None = None


# =============================================================================
# ENGINE OUTPUTS
# =============================================================================

@dataclass(frozen=True)
class LedgerRow:
    """
    One displayed day of a participant's month.

    Trading days without an entry carry None for every return field.
    Non-trading entries (is_trading_day=False) show their isolated effect
    and did not move the running value.

    Attributes:
        date: Calendar date of the row
        is_trading_day: Date is on the trading calendar
        is_half_day: Trading calendar flags the date as an early close
        percentage: Day's percentage change
        dollar_change: Participant's dollar change for the day
        value: Account value after the day
        cumulative_return: Compounded month-to-date return in percent
        source: "participant" or "fund" entry
        source_id: Id of the stored entry
    """

    date: date
    is_trading_day: bool
    is_half_day: bool = False
    percentage: Decimal | None = None
    dollar_change: Decimal | None = None
    value: Decimal | None = None
    cumulative_return: Decimal | None = None
    source: ReturnSource | None = None
    source_id: int | None = None

    @property
    def has_return(self) -> bool:
        return self.percentage is not None


@dataclass(frozen=True)
class AccountValue:
    """Result of applying a sequence of percentage returns to a balance."""

    current_value: Decimal
    change: Decimal
    percent_change: Decimal


@dataclass(frozen=True)
class AccountSummary:
    """
    Month totals for one participant.

    Attributes:
        beginning_value: Value the month started with
        current_value: Value after all compounded entries
        change: current_value - beginning_value
        percent_change: change / beginning_value x 100 (0 when beginning is 0)
        month_return: Compounded return of trading-day entries in percent
        compounded_entries: Entries that moved the balance
        non_trading_entries: Entries shown but excluded from compounding
    """

    beginning_value: Decimal
    current_value: Decimal
    change: Decimal
    percent_change: Decimal
    month_return: Decimal
    compounded_entries: int = 0
    non_trading_entries: int = 0


@dataclass(frozen=True)
class MonthLedger:
    """Engine output: per-day rows in date order and the month summary."""

    rows: list[LedgerRow]
    summary: AccountSummary


# =============================================================================
# SERVICE-LEVEL RESULTS
# =============================================================================

@dataclass(frozen=True)
class PeriodBasis:
    """
    The (beginning value, ownership) pair a participant starts a month with.

    Attributes:
        source: "monthly_value" (stored override), "profile" (current period
            profile values), "derived" (ownership share of the fund total),
            or "none" (nothing recorded, zero basis)
    """

    year: int
    month: int
    beginning_value: Decimal
    ownership_percentage: Decimal
    source: BasisSource


@dataclass(frozen=True)
class ParticipantLedger:
    """A participant's month: identity, basis, rows and summary."""

    participant_id: int
    username: str
    full_name: str
    year: int
    month: int
    basis: PeriodBasis
    rows: list[LedgerRow]
    summary: AccountSummary


@dataclass(frozen=True)
class FundSummary:
    """
    Fund-wide view of one month.

    Attributes:
        participants: Ledger of every non-admin participant
        total_beginning_value: Sum of participants' beginning values
        total_current_value: Sum of participants' current values
        total_change: total_current_value - total_beginning_value
        total_percent_change: total_change / total_beginning_value x 100
        fund_month_return: Compounded fund-level return on trading days
        ownership_total: Sum of participants' ownership for the month
        is_over_allocated: ownership_total exceeds 100% (beyond tolerance)
        trading_days: Number of trading days in the month
    """

    year: int
    month: int
    participants: list[ParticipantLedger]
    total_beginning_value: Decimal
    total_current_value: Decimal
    total_change: Decimal
    total_percent_change: Decimal
    fund_month_return: Decimal
    ownership_total: Decimal
    is_over_allocated: bool
    trading_days: int = 0
    warnings: list[str] = field(default_factory=list)
