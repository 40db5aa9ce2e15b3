# backend/fundtracker/schemas/monthly_values.py
"""Pydantic schemas for per-month beginning value / ownership overrides."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class MonthlyValueSet(BaseModel):
    """Body of PUT /participants/{id}/monthly-values/{year}/{month}."""

    beginning_value: Decimal = Field(..., ge=0, max_digits=18, decimal_places=8, examples=["500"])
    ownership_percentage: Decimal = Field(..., ge=0, le=100, decimal_places=8, examples=["5"])


class MonthlyValueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    participant_id: int
    year: int
    month: int
    beginning_value: Decimal
    ownership_percentage: Decimal
    updated_at: datetime
