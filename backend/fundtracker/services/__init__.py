# backend/fundtracker/services/__init__.py
"""
Service layer for business logic.

This package encapsulates business logic separate from the API (router)
layer. Services:
- Have NO knowledge of HTTP (no HTTPException, no status codes)
- Raise domain-specific exceptions
- Receive a FundStorage per call (not via Depends)
- Are easily testable via dependency injection

Usage:
    from fundtracker.services import LedgerService, OwnershipService
    from fundtracker.services import SqlAlchemyFundStorage
    from fundtracker.services import ParticipantNotFoundError

Architecture:
    services/
    ├── __init__.py                # This file - main exports
    ├── exceptions.py              # Domain exceptions
    ├── constants.py               # Business constants and limits
    ├── protocols.py               # FundStorage interface
    ├── storage.py                 # SQLAlchemy FundStorage
    ├── periods.py                 # Current period helpers
    ├── trading_calendar.py        # Trading calendar service
    ├── ownership.py               # Allocation checks and rebalancing
    ├── participants.py            # Participants and monthly values
    ├── returns_service.py         # Fund and participant daily returns
    ├── fund_settings_service.py   # Fund-wide settings
    ├── auth/                      # Passwords, JWT, login
    └── valuation/                 # Allocation engine and ledgers
        ├── types.py               # Value objects
        ├── engine.py              # Compounding and allocation
        ├── basis.py               # Period basis resolution
        └── service.py             # LedgerService
"""

# Valuation is imported before the calendar service it depends on
from fundtracker.services.valuation import LedgerService
from fundtracker.services.trading_calendar import TradingCalendarService, CalendarStatus
from fundtracker.services.ownership import (
    OwnershipService,
    RebalanceResult,
    OwnershipUpdate,
    PeriodAllocation,
    ParticipantShare,
)
from fundtracker.services.participants import ParticipantService
from fundtracker.services.returns_service import ReturnsService
from fundtracker.services.fund_settings_service import FundSettingsService, FundSettingsView
from fundtracker.services.storage import SqlAlchemyFundStorage
from fundtracker.services.protocols import FundStorage
from fundtracker.services.exceptions import (
    ServiceError,
    ValidationError,
    OwnershipAllocationError,
    InvalidPeriodError,
    NotFoundError,
    ParticipantNotFoundError,
    FundReturnNotFoundError,
    DailyReturnNotFoundError,
    MonthlyValueNotFoundError,
    TradingDayNotFoundError,
    ConflictError,
    UsernameExistsError,
    DuplicateReturnError,
    StorageError,
    RebalanceError,
    AuthenticationError,
    InvalidCredentialsError,
    TokenExpiredError,
    AuthorizationError,
    PermissionDeniedError,
)

__all__ = [
    # Services
    "LedgerService",
    "TradingCalendarService",
    "CalendarStatus",
    "OwnershipService",
    "RebalanceResult",
    "OwnershipUpdate",
    "PeriodAllocation",
    "ParticipantShare",
    "ParticipantService",
    "ReturnsService",
    "FundSettingsService",
    "FundSettingsView",
    # Storage
    "FundStorage",
    "SqlAlchemyFundStorage",
    # Exceptions
    "ServiceError",
    "ValidationError",
    "OwnershipAllocationError",
    "InvalidPeriodError",
    "NotFoundError",
    "ParticipantNotFoundError",
    "FundReturnNotFoundError",
    "DailyReturnNotFoundError",
    "MonthlyValueNotFoundError",
    "TradingDayNotFoundError",
    "ConflictError",
    "UsernameExistsError",
    "DuplicateReturnError",
    "StorageError",
    "RebalanceError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "TokenExpiredError",
    "AuthorizationError",
    "PermissionDeniedError",
]
