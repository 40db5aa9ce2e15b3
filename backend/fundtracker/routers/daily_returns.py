# backend/fundtracker/routers/daily_returns.py
"""
Participant daily return endpoints (admin only).

A daily return is a percentage recorded for one participant on one date. It
takes precedence over the fund return for that participant and date.
Posting a second return for the same (participant, date) replaces the first.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from fundtracker.dependencies import get_period, get_returns_service, get_storage, require_admin
from fundtracker.middleware.rate_limit import limiter, RATE_LIMIT_WRITE
from fundtracker.models import DailyReturn
from fundtracker.schemas.returns import DailyReturnCreate, DailyReturnResponse, DailyReturnUpdate
from fundtracker.services.protocols import FundStorage
from fundtracker.services.returns_service import ReturnsService

router = APIRouter(
    prefix="/daily-returns",
    tags=["Daily Returns"],
    dependencies=[Depends(require_admin)],
)


@router.get(
    "/",
    response_model=list[DailyReturnResponse],
    summary="List a participant's daily returns for a month",
)
def list_daily_returns(
    period: Annotated[tuple[int, int], Depends(get_period)],
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[ReturnsService, Depends(get_returns_service)],
    participant_id: int = Query(..., gt=0),
) -> list[DailyReturn]:
    year, month = period
    return service.list_daily_returns(storage, participant_id, year, month)


@router.post(
    "/",
    response_model=DailyReturnResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a participant daily return",
)
@limiter.limit(RATE_LIMIT_WRITE)
def create_daily_return(
    request: Request,
    data: DailyReturnCreate,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[ReturnsService, Depends(get_returns_service)],
) -> DailyReturn:
    return service.add_daily_return(
        storage,
        participant_id=data.participant_id,
        day=data.date,
        percentage=data.percentage,
    )


@router.patch(
    "/{return_id}",
    response_model=DailyReturnResponse,
    summary="Update a participant daily return",
)
@limiter.limit(RATE_LIMIT_WRITE)
def update_daily_return(
    request: Request,
    return_id: int,
    data: DailyReturnUpdate,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[ReturnsService, Depends(get_returns_service)],
) -> DailyReturn:
    return service.update_daily_return(storage, return_id, data.percentage)


@router.delete(
    "/{return_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a participant daily return",
)
@limiter.limit(RATE_LIMIT_WRITE)
def delete_daily_return(
    request: Request,
    return_id: int,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[ReturnsService, Depends(get_returns_service)],
) -> None:
    service.delete_daily_return(storage, return_id)
