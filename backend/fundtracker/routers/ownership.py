# backend/fundtracker/routers/ownership.py
"""
Ownership endpoints (admin only).

Provides:
- POST /ownership/rebalance - Recompute ownership from beginning values
- GET /ownership/{year}/{month} - Ownership split of a month
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request

from fundtracker.dependencies import get_ownership_service, get_storage, require_admin
from fundtracker.middleware.rate_limit import limiter, RATE_LIMIT_REBALANCE
from fundtracker.schemas.ownership import AllocationResponse, RebalanceRequest, RebalanceResponse
from fundtracker.services.exceptions import RebalanceError
from fundtracker.services.ownership import OwnershipService, PeriodAllocation, RebalanceResult
from fundtracker.services.protocols import FundStorage

router = APIRouter(
    prefix="/ownership",
    tags=["Ownership"],
    dependencies=[Depends(require_admin)],
)


@router.post(
    "/rebalance",
    response_model=RebalanceResponse,
    summary="Rebalance ownership for a month",
    description=(
        "Sets each participant's ownership to their share of the month's total "
        "beginning value. With atomic=false each participant is committed "
        "separately and a failure leaves earlier participants updated."
    ),
)
@limiter.limit(RATE_LIMIT_REBALANCE)
def rebalance(
    request: Request,
    data: RebalanceRequest,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[OwnershipService, Depends(get_ownership_service)],
) -> RebalanceResult:
    result = service.rebalance(
        storage,
        data.year,
        data.month,
        participant_id=data.participant_id,
        new_beginning_value=data.new_beginning_value,
        atomic=data.atomic,
    )

    if not result.success:
        raise RebalanceError(
            f"Could not rebalance {data.year}-{data.month:02d}: {result.error}",
            failed_participant_id=result.failed_participant_id,
            rolled_back=not result.updates,
        )

    return result


@router.get(
    "/{year}/{month}",
    response_model=AllocationResponse,
    summary="Ownership split of a month",
)
def get_allocation(
    year: Annotated[int, Path(ge=1900, le=9999)],
    month: Annotated[int, Path(ge=1, le=12)],
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[OwnershipService, Depends(get_ownership_service)],
) -> PeriodAllocation:
    return service.allocation(storage, year, month)
