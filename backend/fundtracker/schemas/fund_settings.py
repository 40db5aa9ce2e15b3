# backend/fundtracker/schemas/fund_settings.py
"""Pydantic schemas for fund-wide settings."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class FundSettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_fund_value: Decimal | None
    current_year: int
    current_month: int
    updated_at: datetime | None = None
    is_default: bool = Field(
        default=False,
        description="True when nothing is stored yet and defaults are shown",
    )


class FundSettingsUpdate(BaseModel):
    """Any subset of the settings; omitted fields keep their value."""

    total_fund_value: Decimal | None = Field(default=None, ge=0, max_digits=18, decimal_places=8)
    current_year: int | None = Field(default=None, ge=1900, le=9999)
    current_month: int | None = Field(default=None, ge=1, le=12)
