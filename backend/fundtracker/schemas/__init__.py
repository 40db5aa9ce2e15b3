# backend/fundtracker/schemas/__init__.py
"""
Pydantic schemas for API request/response validation.

This package contains all Pydantic schemas organized by domain:
- auth: Login and tokens
- participants: Participant CRUD
- monthly_values: Per-month overrides
- returns: Fund and participant daily returns
- calendar: Trading calendar
- ledger: Participant and fund month views
- ownership: Allocation and rebalancing
- fund_settings: Fund-wide settings
- errors: Error response formats
- validators: Reusable field validators
"""

from fundtracker.schemas.errors import ErrorDetail, ValidationErrorDetail
from fundtracker.schemas.ownership import (
    AllocationResponse,
    OwnershipUpdateResponse,
    ParticipantAllocation,
    RebalanceRequest,
    RebalanceResponse,
)
from fundtracker.schemas.participants import (
    ParticipantCreate,
    ParticipantDeleteResponse,
    ParticipantResponse,
    ParticipantUpdate,
    ParticipantUpdateResponse,
)
from fundtracker.schemas.auth import LoginRequest, TokenResponse
from fundtracker.schemas.monthly_values import MonthlyValueResponse, MonthlyValueSet
from fundtracker.schemas.returns import (
    DailyReturnCreate,
    DailyReturnResponse,
    DailyReturnUpdate,
    FundReturnCreate,
    FundReturnResponse,
    FundReturnUpdate,
)
from fundtracker.schemas.calendar import (
    CalendarMonthResponse,
    CalendarSeedRequest,
    CalendarSeedResponse,
    CalendarStatusResponse,
    TradingDayResponse,
    TradingDaySet,
)
from fundtracker.schemas.ledger import (
    AccountSummaryResponse,
    FundSummaryResponse,
    LedgerRowResponse,
    ParticipantLedgerResponse,
    PeriodBasisResponse,
)
from fundtracker.schemas.fund_settings import FundSettingsResponse, FundSettingsUpdate

__all__ = [
    # Errors
    "ErrorDetail",
    "ValidationErrorDetail",
    # Auth
    "LoginRequest",
    "TokenResponse",
    # Participants
    "ParticipantCreate",
    "ParticipantUpdate",
    "ParticipantResponse",
    "ParticipantUpdateResponse",
    "ParticipantDeleteResponse",
    # Monthly values
    "MonthlyValueSet",
    "MonthlyValueResponse",
    # Returns
    "FundReturnCreate",
    "FundReturnUpdate",
    "FundReturnResponse",
    "DailyReturnCreate",
    "DailyReturnUpdate",
    "DailyReturnResponse",
    # Calendar
    "TradingDayResponse",
    "CalendarMonthResponse",
    "CalendarStatusResponse",
    "CalendarSeedRequest",
    "CalendarSeedResponse",
    "TradingDaySet",
    # Ledger
    "LedgerRowResponse",
    "AccountSummaryResponse",
    "PeriodBasisResponse",
    "ParticipantLedgerResponse",
    "FundSummaryResponse",
    # Ownership
    "RebalanceRequest",
    "RebalanceResponse",
    "OwnershipUpdateResponse",
    "ParticipantAllocation",
    "AllocationResponse",
    # Fund settings
    "FundSettingsResponse",
    "FundSettingsUpdate",
]
