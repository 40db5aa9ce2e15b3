# backend/fundtracker/schemas/calendar.py
"""Pydantic schemas for the trading calendar."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from fundtracker.schemas.validators import validate_iso_date


class TradingDayResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: dt.date
    is_half_day: bool


class CalendarMonthResponse(BaseModel):
    """Trading days of one month (weekdays when nothing is stored)."""

    year: int
    month: int
    days: list[TradingDayResponse]


class CalendarStatusResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_days: int
    is_initialized: bool
    sample: list[TradingDayResponse]


class CalendarSeedRequest(BaseModel):
    """Store every weekday of a month except the listed holidays."""

    year: int = Field(..., ge=1900, le=9999, examples=[2026])
    month: int = Field(..., ge=1, le=12, examples=[1])
    holidays: list[dt.date] = Field(default_factory=list, examples=[["2026-01-01", "2026-01-19"]])
    half_days: list[dt.date] = Field(default_factory=list)

    @field_validator('holidays', 'half_days', mode='before')
    @classmethod
    def require_iso_dates(cls, v):
        if not isinstance(v, list):
            raise ValueError("Expected a list of dates")
        return [validate_iso_date(item) for item in v]

    @model_validator(mode='after')
    def dates_within_month(self) -> "CalendarSeedRequest":
        for day in [*self.holidays, *self.half_days]:
            if (day.year, day.month) != (self.year, self.month):
                raise ValueError(f"{day.isoformat()} is not in {self.year}-{self.month:02d}")
        return self


class CalendarSeedResponse(BaseModel):
    inserted: int = Field(..., description="Number of dates added to the calendar")


class TradingDaySet(BaseModel):
    """Body of PUT /calendar/days/{date}."""

    is_half_day: bool = False
