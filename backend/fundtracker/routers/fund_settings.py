# backend/fundtracker/routers/fund_settings.py
"""
Fund settings endpoints (admin only).

Fund settings hold the total fund value and the current period. Before they
are first saved, GET returns defaults (no total, today's month) flagged with
is_default=true.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from fundtracker.dependencies import get_fund_settings_service, get_storage, require_admin
from fundtracker.middleware.rate_limit import limiter, RATE_LIMIT_WRITE
from fundtracker.schemas.fund_settings import FundSettingsResponse, FundSettingsUpdate
from fundtracker.services.fund_settings_service import FundSettingsService, FundSettingsView
from fundtracker.services.protocols import FundStorage

router = APIRouter(
    prefix="/fund-settings",
    tags=["Fund Settings"],
    dependencies=[Depends(require_admin)],
)


@router.get(
    "/",
    response_model=FundSettingsResponse,
    summary="Get fund settings",
)
def get_fund_settings(
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[FundSettingsService, Depends(get_fund_settings_service)],
) -> FundSettingsView:
    return service.get_settings(storage)


@router.patch(
    "/",
    response_model=FundSettingsResponse,
    summary="Update fund settings",
    description="Only provided fields are updated.",
)
@limiter.limit(RATE_LIMIT_WRITE)
def update_fund_settings(
    request: Request,
    data: FundSettingsUpdate,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[FundSettingsService, Depends(get_fund_settings_service)],
) -> FundSettingsView:
    return service.update_settings(
        storage,
        total_fund_value=data.total_fund_value,
        current_year=data.current_year,
        current_month=data.current_month,
    )
