# backend/fundtracker/dependencies.py
"""
Dependency injection module for FastAPI services.

Provides singleton service instances shared across all requests, a
per-request FundStorage bound to the request's database session, and the
authentication dependencies.

Services are lazily initialized on first use to avoid import-time side effects.

Usage in routers:
    from fundtracker.dependencies import get_storage, get_ledger_service, require_admin

    @router.get("/fund")
    def fund_summary(
        storage: FundStorage = Depends(get_storage),
        service: LedgerService = Depends(get_ledger_service),
        admin: Participant = Depends(require_admin),
    ):
        ...
"""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from fundtracker.database import get_db
from fundtracker.models import Participant
from fundtracker.services.auth import AuthService
from fundtracker.services.exceptions import (
    TokenExpiredError,
    InvalidCredentialsError,
    PermissionDeniedError,
)
from fundtracker.services.fund_settings_service import FundSettingsService
from fundtracker.services.ownership import OwnershipService
from fundtracker.services.participants import ParticipantService
from fundtracker.services.periods import current_period
from fundtracker.services.protocols import FundStorage
from fundtracker.services.returns_service import ReturnsService
from fundtracker.services.storage import SqlAlchemyFundStorage
from fundtracker.services.trading_calendar import TradingCalendarService
from fundtracker.services.valuation.service import LedgerService
from fundtracker.utils.context import set_request_context

logger = logging.getLogger(__name__)

# HTTP Bearer scheme for JWT authentication
_bearer_scheme = HTTPBearer(auto_error=False)


# =============================================================================
# STORAGE
# =============================================================================

def get_storage(db: Annotated[Session, Depends(get_db)]) -> FundStorage:
    """FundStorage bound to this request's session."""
    return SqlAlchemyFundStorage(db)


# =============================================================================
# PERIOD DEPENDENCIES
# =============================================================================

def get_period(
    storage: Annotated[FundStorage, Depends(get_storage)],
    year: Annotated[int | None, Query(ge=1900, le=9999)] = None,
    month: Annotated[int | None, Query(ge=1, le=12)] = None,
) -> tuple[int, int]:
    """
    (year, month) from the query string.

    Omitted parts are taken from the fund's current period.
    """
    if year is not None and month is not None:
        return year, month

    current_year, current_month = current_period(storage)
    return (
        year if year is not None else current_year,
        month if month is not None else current_month,
    )


# =============================================================================
# SINGLETON SERVICE INSTANCES
# =============================================================================
# Order matters: define dependencies before dependents
# 1. get_calendar_service, get_ownership_service (no deps)
# 2. get_ledger_service (depends on calendar)
# 3. get_participant_service (depends on ownership)


@lru_cache(maxsize=1)
def get_calendar_service() -> TradingCalendarService:
    logger.debug("Initializing singleton TradingCalendarService")
    return TradingCalendarService()


@lru_cache(maxsize=1)
def get_ownership_service() -> OwnershipService:
    logger.debug("Initializing singleton OwnershipService")
    return OwnershipService()


@lru_cache(maxsize=1)
def get_ledger_service() -> LedgerService:
    """
    Get the singleton LedgerService instance.

    The allocation method is read from settings once, at first use.
    """
    logger.debug("Initializing singleton LedgerService")
    return LedgerService(calendar_service=get_calendar_service())


@lru_cache(maxsize=1)
def get_participant_service() -> ParticipantService:
    logger.debug("Initializing singleton ParticipantService")
    return ParticipantService(ownership_service=get_ownership_service())


@lru_cache(maxsize=1)
def get_returns_service() -> ReturnsService:
    logger.debug("Initializing singleton ReturnsService")
    return ReturnsService()


@lru_cache(maxsize=1)
def get_fund_settings_service() -> FundSettingsService:
    logger.debug("Initializing singleton FundSettingsService")
    return FundSettingsService()


@lru_cache(maxsize=1)
def get_auth_service() -> AuthService:
    logger.debug("Initializing singleton AuthService")
    return AuthService()


# =============================================================================
# AUTHENTICATION DEPENDENCIES
# =============================================================================


def get_current_participant(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)],
    storage: Annotated[FundStorage, Depends(get_storage)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> Participant:
    """
    Dependency that extracts and validates the current participant from the JWT.

    Raises:
        HTTPException 401: If no token provided, token invalid/expired,
            or the participant no longer exists
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        participant = auth_service.participant_from_token(storage, credentials.credentials)
    except TokenExpiredError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    set_request_context("participant_id", participant.id)
    return participant


def require_admin(
    participant: Annotated[Participant, Depends(get_current_participant)],
) -> Participant:
    """
    Dependency for admin-only endpoints.

    Raises:
        PermissionDeniedError: If the participant is not an admin (403)
    """
    if not participant.is_admin:
        logger.warning(f"Participant {participant.id} attempted an admin action")
        raise PermissionDeniedError("this endpoint")
    return participant


# =============================================================================
# CACHE MANAGEMENT
# =============================================================================

def clear_service_caches() -> None:
    """
    Clear all service singletons.

    Useful for testing (e.g. after changing the allocation method).
    """
    get_calendar_service.cache_clear()
    get_ownership_service.cache_clear()
    get_ledger_service.cache_clear()
    get_participant_service.cache_clear()
    get_returns_service.cache_clear()
    get_fund_settings_service.cache_clear()
    get_auth_service.cache_clear()
    logger.info("Cleared all service singleton caches")
