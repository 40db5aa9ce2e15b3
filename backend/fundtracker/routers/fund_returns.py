# backend/fundtracker/routers/fund_returns.py
"""
Fund return endpoints (admin only).

A fund return records the fund's dollar change for a date, measured against
the fund's total value. Every participant receives the derived percentage
unless they have their own daily return for that date.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from fundtracker.dependencies import get_period, get_returns_service, get_storage, require_admin
from fundtracker.middleware.rate_limit import limiter, RATE_LIMIT_WRITE
from fundtracker.models import FundReturn
from fundtracker.schemas.returns import FundReturnCreate, FundReturnResponse, FundReturnUpdate
from fundtracker.services.protocols import FundStorage
from fundtracker.services.returns_service import ReturnsService

router = APIRouter(
    prefix="/fund-returns",
    tags=["Fund Returns"],
    dependencies=[Depends(require_admin)],
)


@router.get(
    "/",
    response_model=list[FundReturnResponse],
    summary="List fund returns for a month",
    description="Defaults to the current period when year or month is omitted.",
)
def list_fund_returns(
    period: Annotated[tuple[int, int], Depends(get_period)],
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[ReturnsService, Depends(get_returns_service)],
) -> list[FundReturn]:
    year, month = period
    return service.list_fund_returns(storage, year, month)


@router.post(
    "/",
    response_model=FundReturnResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a fund return",
)
@limiter.limit(RATE_LIMIT_WRITE)
def create_fund_return(
    request: Request,
    data: FundReturnCreate,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[ReturnsService, Depends(get_returns_service)],
) -> FundReturn:
    return service.add_fund_return(
        storage,
        day=data.date,
        dollar_change=data.dollar_change,
        total_fund_value=data.total_fund_value,
    )


@router.patch(
    "/{return_id}",
    response_model=FundReturnResponse,
    summary="Update a fund return",
)
@limiter.limit(RATE_LIMIT_WRITE)
def update_fund_return(
    request: Request,
    return_id: int,
    data: FundReturnUpdate,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[ReturnsService, Depends(get_returns_service)],
) -> FundReturn:
    return service.update_fund_return(
        storage,
        return_id,
        dollar_change=data.dollar_change,
        total_fund_value=data.total_fund_value,
    )


@router.delete(
    "/{return_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a fund return",
)
@limiter.limit(RATE_LIMIT_WRITE)
def delete_fund_return(
    request: Request,
    return_id: int,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[ReturnsService, Depends(get_returns_service)],
) -> None:
    service.delete_fund_return(storage, return_id)
