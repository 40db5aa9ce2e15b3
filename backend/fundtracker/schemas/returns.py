# backend/fundtracker/schemas/returns.py
"""
Pydantic schemas for daily return entries.

Two kinds of entry:
- FundReturn: the fund's dollar change for a date, measured against the
  fund total; its percentage is derived
- DailyReturn: a participant's own percentage for a date (takes precedence
  over the fund entry for that participant)
"""

import datetime as dt
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from fundtracker.schemas.validators import validate_iso_date
from fundtracker.services.valuation.engine import derive_fund_percentage


# =============================================================================
# FUND RETURNS
# =============================================================================

class FundReturnCreate(BaseModel):
    """Record the fund's dollar change for one date."""

    date: dt.date = Field(..., examples=["2025-11-03"])
    dollar_change: Decimal = Field(..., max_digits=18, decimal_places=8, examples=["1250.00"])
    total_fund_value: Decimal = Field(
        ...,
        ge=0,
        max_digits=18,
        decimal_places=8,
        description="Fund value the change is measured against",
        examples=["125000.00"],
    )

    @field_validator('date', mode='before')
    @classmethod
    def require_iso_date(cls, v):
        return validate_iso_date(v)


class FundReturnUpdate(BaseModel):
    dollar_change: Decimal | None = Field(default=None, max_digits=18, decimal_places=8)
    total_fund_value: Decimal | None = Field(default=None, ge=0, max_digits=18, decimal_places=8)


class FundReturnResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: dt.date
    dollar_change: Decimal
    total_fund_value: Decimal
    created_at: datetime

    @computed_field
    @property
    def percentage(self) -> Decimal:
        """Fund percentage change implied by the dollar change."""
        return derive_fund_percentage(self.dollar_change, self.total_fund_value)


# =============================================================================
# PARTICIPANT DAILY RETURNS
# =============================================================================

class DailyReturnCreate(BaseModel):
    """Record (or replace) a participant's percentage return for one date."""

    participant_id: int = Field(..., gt=0)
    date: dt.date = Field(..., examples=["2025-11-03"])
    percentage: Decimal = Field(..., ge=-100, decimal_places=8, examples=["1.25"])

    @field_validator('date', mode='before')
    @classmethod
    def require_iso_date(cls, v):
        return validate_iso_date(v)


class DailyReturnUpdate(BaseModel):
    percentage: Decimal = Field(..., ge=-100, decimal_places=8)


class DailyReturnResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    participant_id: int
    date: dt.date
    percentage: Decimal
    created_at: datetime
