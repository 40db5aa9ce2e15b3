# backend/fundtracker/schemas/ledger.py
"""
Pydantic schemas for ledger responses.

Built straight from the valuation dataclasses (from_attributes=True).
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class LedgerRowResponse(BaseModel):
    """
    One day of a participant's month.

    Trading days without an entry have null return fields. Rows with
    is_trading_day false were not compounded.
    """

    model_config = ConfigDict(from_attributes=True)

    date: dt.date
    is_trading_day: bool
    is_half_day: bool
    has_return: bool
    percentage: Decimal | None = None
    dollar_change: Decimal | None = None
    value: Decimal | None = None
    cumulative_return: Decimal | None = None
    source: str | None = None
    source_id: int | None = None


class AccountSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    beginning_value: Decimal
    current_value: Decimal
    change: Decimal
    percent_change: Decimal
    month_return: Decimal
    compounded_entries: int
    non_trading_entries: int


class PeriodBasisResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    year: int
    month: int
    beginning_value: Decimal
    ownership_percentage: Decimal
    source: str


class ParticipantLedgerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    participant_id: int
    username: str
    full_name: str
    year: int
    month: int
    basis: PeriodBasisResponse
    rows: list[LedgerRowResponse]
    summary: AccountSummaryResponse


class FundSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    year: int
    month: int
    participants: list[ParticipantLedgerResponse]
    total_beginning_value: Decimal
    total_current_value: Decimal
    total_change: Decimal
    total_percent_change: Decimal
    fund_month_return: Decimal
    ownership_total: Decimal
    is_over_allocated: bool
    trading_days: int
    warnings: list[str]
