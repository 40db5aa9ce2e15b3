# backend/fundtracker/routers/ledger.py
"""
Ledger endpoints.

A ledger lists every trading day and every recorded return of a month with
the participant's running value and cumulative return.

Provides:
- GET /ledger/me - The authenticated participant's month
- GET /ledger/participants/{id} - Any participant's month (admin only)
- GET /ledger/fund - Every participant's month with fund totals (admin only)

All endpoints default to the current period when year or month is omitted.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from fundtracker.dependencies import (
    get_current_participant,
    get_ledger_service,
    get_period,
    get_storage,
    require_admin,
)
from fundtracker.middleware.rate_limit import limiter, RATE_LIMIT_LEDGER
from fundtracker.models import Participant
from fundtracker.schemas.ledger import FundSummaryResponse, ParticipantLedgerResponse
from fundtracker.services.protocols import FundStorage
from fundtracker.services.valuation import FundSummary, LedgerService, ParticipantLedger

router = APIRouter(prefix="/ledger", tags=["Ledger"])


@router.get(
    "/me",
    response_model=ParticipantLedgerResponse,
    summary="My month ledger",
)
@limiter.limit(RATE_LIMIT_LEDGER)
def my_ledger(
    request: Request,
    participant: Annotated[Participant, Depends(get_current_participant)],
    period: Annotated[tuple[int, int], Depends(get_period)],
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[LedgerService, Depends(get_ledger_service)],
) -> ParticipantLedger:
    year, month = period
    return service.participant_ledger(storage, participant.id, year, month)


@router.get(
    "/participants/{participant_id}",
    response_model=ParticipantLedgerResponse,
    summary="A participant's month ledger",
    dependencies=[Depends(require_admin)],
)
@limiter.limit(RATE_LIMIT_LEDGER)
def participant_ledger(
    request: Request,
    participant_id: int,
    period: Annotated[tuple[int, int], Depends(get_period)],
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[LedgerService, Depends(get_ledger_service)],
) -> ParticipantLedger:
    year, month = period
    return service.participant_ledger(storage, participant_id, year, month)


@router.get(
    "/fund",
    response_model=FundSummaryResponse,
    summary="Fund month summary",
    description=(
        "Every participant's ledger with fund totals. Over-allocated months "
        "are still returned, flagged with is_over_allocated and a warning."
    ),
    dependencies=[Depends(require_admin)],
)
@limiter.limit(RATE_LIMIT_LEDGER)
def fund_summary(
    request: Request,
    period: Annotated[tuple[int, int], Depends(get_period)],
    storage: Annotated[FundStorage, Depends(get_storage)],
    service: Annotated[LedgerService, Depends(get_ledger_service)],
) -> FundSummary:
    year, month = period
    return service.fund_summary(storage, year, month)
