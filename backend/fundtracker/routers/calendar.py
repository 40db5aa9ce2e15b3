# backend/fundtracker/routers/calendar.py
"""
Trading calendar endpoints.

Reads are open to any authenticated participant; changes are admin only.

Provides:
- GET /calendar/ - Trading days of a month (weekdays when none are stored)
- GET /calendar/status - Whether the calendar has been seeded
- POST /calendar/seed - Seed one month, skipping holidays
- POST /calendar/seed-defaults - Seed the built-in Oct-Dec 2025 NYSE calendar
- PUT /calendar/days/{day} - Add a date or change its half-day flag
- DELETE /calendar/days/{day} - Remove a date
"""

import datetime as dt
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from fundtracker.dependencies import (
    get_calendar_service,
    get_current_participant,
    get_period,
    get_storage,
    require_admin,
)
from fundtracker.middleware.rate_limit import limiter, RATE_LIMIT_WRITE
from fundtracker.schemas.calendar import (
    CalendarMonthResponse,
    CalendarSeedRequest,
    CalendarSeedResponse,
    CalendarStatusResponse,
    TradingDayResponse,
    TradingDaySet,
)
from fundtracker.services.protocols import FundStorage
from fundtracker.services.trading_calendar import CalendarStatus, TradingCalendarService
from fundtracker.services.valuation.types import TradingDay

router = APIRouter(prefix="/calendar", tags=["Calendar"])


# =============================================================================
# READS
# =============================================================================

@router.get(
    "/",
    response_model=CalendarMonthResponse,
    summary="Trading days of a month",
    dependencies=[Depends(get_current_participant)],
)
def get_month(
    period: Annotated[tuple[int, int], Depends(get_period)],
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[TradingCalendarService, Depends(get_calendar_service)],
) -> CalendarMonthResponse:
    year, month = period
    days = service.trading_days_for(storage, year, month)
    return CalendarMonthResponse(
        year=year,
        month=month,
        days=[TradingDayResponse.model_validate(day) for day in days],
    )


@router.get(
    "/status",
    response_model=CalendarStatusResponse,
    summary="Calendar initialization status",
    dependencies=[Depends(get_current_participant)],
)
def get_status(
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[TradingCalendarService, Depends(get_calendar_service)],
) -> CalendarStatus:
    return service.calendar_status(storage)


# =============================================================================
# ADMIN
# =============================================================================

@router.post(
    "/seed",
    response_model=CalendarSeedResponse,
    summary="Seed one month",
    description="Stores every weekday of the month except the listed holidays. Existing dates are kept.",
    dependencies=[Depends(require_admin)],
)
@limiter.limit(RATE_LIMIT_WRITE)
def seed_month(
    request: Request,
    data: CalendarSeedRequest,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[TradingCalendarService, Depends(get_calendar_service)],
) -> CalendarSeedResponse:
    inserted = service.seed_month(
        storage,
        data.year,
        data.month,
        holidays=set(data.holidays),
        half_days=set(data.half_days),
    )
    return CalendarSeedResponse(inserted=inserted)


@router.post(
    "/seed-defaults",
    response_model=CalendarSeedResponse,
    summary="Seed the default calendar",
    dependencies=[Depends(require_admin)],
)
@limiter.limit(RATE_LIMIT_WRITE)
def seed_defaults(
    request: Request,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[TradingCalendarService, Depends(get_calendar_service)],
) -> CalendarSeedResponse:
    return CalendarSeedResponse(inserted=service.seed_defaults(storage))


@router.put(
    "/days/{day}",
    response_model=TradingDayResponse,
    summary="Add or update a trading day",
    dependencies=[Depends(require_admin)],
)
@limiter.limit(RATE_LIMIT_WRITE)
def set_day(
    request: Request,
    day: dt.date,
    data: TradingDaySet,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[TradingCalendarService, Depends(get_calendar_service)],
) -> TradingDay:
    return service.set_day(storage, day, is_half_day=data.is_half_day)


@router.delete(
    "/days/{day}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a trading day",
    dependencies=[Depends(require_admin)],
)
@limiter.limit(RATE_LIMIT_WRITE)
def remove_day(
    request: Request,
    day: dt.date,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[TradingCalendarService, Depends(get_calendar_service)],
) -> None:
    service.remove_day(storage, day)
