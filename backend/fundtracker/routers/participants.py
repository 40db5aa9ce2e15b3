# backend/fundtracker/routers/participants.py
"""
Participant management endpoints (admin only).

Provides CRUD for participants and their per-month overrides:
- GET/POST /participants/
- GET/PATCH/DELETE /participants/{id}
- GET /participants/{id}/monthly-values
- GET/PUT/DELETE /participants/{id}/monthly-values/{year}/{month}

Changing a participant's beginning value rebalances the current period's
ownership for everybody unless rebalance=false is sent.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request, status

from fundtracker.dependencies import get_participant_service, get_storage, require_admin
from fundtracker.middleware.rate_limit import limiter, RATE_LIMIT_WRITE
from fundtracker.models import MonthlyValue, Participant
from fundtracker.schemas.monthly_values import MonthlyValueResponse, MonthlyValueSet
from fundtracker.schemas.ownership import RebalanceResponse
from fundtracker.schemas.participants import (
    ParticipantCreate,
    ParticipantDeleteResponse,
    ParticipantResponse,
    ParticipantUpdate,
    ParticipantUpdateResponse,
)
from fundtracker.services.participants import ParticipantService
from fundtracker.services.protocols import FundStorage

# =============================================================================
# ROUTER SETUP
# =============================================================================

router = APIRouter(
    prefix="/participants",
    tags=["Participants"],
    dependencies=[Depends(require_admin)],
)

Year = Annotated[int, Path(ge=1900, le=9999)]
Month = Annotated[int, Path(ge=1, le=12)]


# =============================================================================
# PARTICIPANTS
# =============================================================================

@router.get(
    "/",
    response_model=list[ParticipantResponse],
    summary="List participants",
)
def list_participants(
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[ParticipantService, Depends(get_participant_service)],
    include_admins: bool = Query(default=False, description="Include admin accounts"),
) -> list[Participant]:
    return service.list_participants(storage, include_admins=include_admins)


@router.post(
    "/",
    response_model=ParticipantResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a participant",
    description=(
        "Ownership is checked against the current period; the request is "
        "rejected if the period would exceed 100%."
    ),
)
@limiter.limit(RATE_LIMIT_WRITE)
def create_participant(
    request: Request,
    data: ParticipantCreate,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[ParticipantService, Depends(get_participant_service)],
) -> Participant:
    return service.create_participant(
        storage,
        username=data.username,
        password=data.password,
        first_name=data.first_name,
        last_name=data.last_name,
        beginning_value=data.beginning_value,
        ownership_percentage=data.ownership_percentage,
        is_admin=data.is_admin,
    )


@router.get(
    "/{participant_id}",
    response_model=ParticipantResponse,
    summary="Get a participant",
)
def get_participant(
    participant_id: int,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[ParticipantService, Depends(get_participant_service)],
) -> Participant:
    return service.get_participant(storage, participant_id)


@router.patch(
    "/{participant_id}",
    response_model=ParticipantUpdateResponse,
    summary="Update a participant",
    description=(
        "Only provided fields are updated. A new beginning value rebalances "
        "the current period's ownership across all participants."
    ),
)
@limiter.limit(RATE_LIMIT_WRITE)
def update_participant(
    request: Request,
    participant_id: int,
    data: ParticipantUpdate,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[ParticipantService, Depends(get_participant_service)],
) -> ParticipantUpdateResponse:
    participant, result = service.update_participant(
        storage,
        participant_id,
        first_name=data.first_name,
        last_name=data.last_name,
        password=data.password,
        beginning_value=data.beginning_value,
        ownership_percentage=data.ownership_percentage,
        rebalance=data.rebalance,
    )

    return ParticipantUpdateResponse(
        participant=ParticipantResponse.model_validate(participant),
        rebalance=RebalanceResponse.model_validate(result) if result else None,
    )


@router.delete(
    "/{participant_id}",
    response_model=ParticipantDeleteResponse,
    summary="Delete a participant",
    description="Removes the participant with their monthly values and daily returns.",
)
@limiter.limit(RATE_LIMIT_WRITE)
def delete_participant(
    request: Request,
    participant_id: int,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[ParticipantService, Depends(get_participant_service)],
    rebalance: bool = Query(default=True, description="Rebalance remaining ownership"),
) -> ParticipantDeleteResponse:
    result = service.delete_participant(storage, participant_id, rebalance=rebalance)

    return ParticipantDeleteResponse(
        deleted_id=participant_id,
        rebalance=RebalanceResponse.model_validate(result) if result else None,
    )


# =============================================================================
# MONTHLY VALUES
# =============================================================================

@router.get(
    "/{participant_id}/monthly-values",
    response_model=list[MonthlyValueResponse],
    summary="List a participant's monthly values",
)
def list_monthly_values(
    participant_id: int,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[ParticipantService, Depends(get_participant_service)],
) -> list[MonthlyValue]:
    return service.list_monthly_values(storage, participant_id)


@router.get(
    "/{participant_id}/monthly-values/{year}/{month}",
    response_model=MonthlyValueResponse,
    summary="Get one monthly value",
)
def get_monthly_value(
    participant_id: int,
    year: Year,
    month: Month,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[ParticipantService, Depends(get_participant_service)],
) -> MonthlyValue:
    return service.get_monthly_value(storage, participant_id, year, month)


@router.put(
    "/{participant_id}/monthly-values/{year}/{month}",
    response_model=MonthlyValueResponse,
    summary="Set a monthly value",
    description="Creates or replaces the override. Other months are not touched.",
)
@limiter.limit(RATE_LIMIT_WRITE)
def set_monthly_value(
    request: Request,
    participant_id: int,
    year: Year,
    month: Month,
    data: MonthlyValueSet,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[ParticipantService, Depends(get_participant_service)],
) -> MonthlyValue:
    return service.set_monthly_value(
        storage,
        participant_id,
        year,
        month,
        beginning_value=data.beginning_value,
        ownership_percentage=data.ownership_percentage,
    )


@router.delete(
    "/{participant_id}/monthly-values/{year}/{month}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a monthly value",
)
@limiter.limit(RATE_LIMIT_WRITE)
def delete_monthly_value(
    request: Request,
    participant_id: int,
    year: Year,
    month: Month,
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[ParticipantService, Depends(get_participant_service)],
) -> None:
    service.delete_monthly_value(storage, participant_id, year, month)
