# backend/fundtracker/schemas/participants.py
"""
Pydantic schemas for participants.

These schemas define:
- What data clients must send (Create)
- What data clients can update (Update)
- What data the API returns (Response)

Validation layers:
- Field constraints: type, length, range
- Field validators: normalization (lowercase usernames, trimmed names)
- Service: uniqueness and ownership limits
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fundtracker.schemas.ownership import RebalanceResponse
from fundtracker.schemas.validators import normalize_name, validate_username


# =============================================================================
# CREATE SCHEMA
# =============================================================================

class ParticipantCreate(BaseModel):
    """Schema for creating a participant (admin only)."""

    username: str = Field(..., min_length=3, max_length=50, examples=["jdoe"])
    password: str = Field(..., min_length=8, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100, examples=["Jane"])
    last_name: str = Field(..., min_length=1, max_length=100, examples=["Doe"])

    beginning_value: Decimal | None = Field(
        default=None,
        ge=0,
        max_digits=18,
        decimal_places=8,
        description="Account value at the start of the current period. "
                    "Leave empty to derive it from ownership and the fund total.",
        examples=["25000.00"],
    )
    ownership_percentage: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        le=100,
        decimal_places=8,
        description="Share of the fund in percent for the current period",
        examples=["25"],
    )
    is_admin: bool = Field(default=False)

    @field_validator('username')
    @classmethod
    def validate_and_normalize_username(cls, v: str) -> str:
        return validate_username(v)

    @field_validator('first_name', 'last_name')
    @classmethod
    def normalize_names(cls, v: str) -> str:
        normalized = normalize_name(v)
        if not normalized:
            raise ValueError("Name cannot be blank")
        return normalized


# =============================================================================
# UPDATE SCHEMA
# =============================================================================

class ParticipantUpdate(BaseModel):
    """
    Schema for updating a participant.

    All fields optional; the username cannot be changed. Changing
    beginning_value rebalances the current period unless rebalance is false,
    in which case ownership_percentage is taken as given (and validated).
    """

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    password: str | None = Field(default=None, min_length=8, max_length=128)
    beginning_value: Decimal | None = Field(default=None, ge=0, max_digits=18, decimal_places=8)
    ownership_percentage: Decimal | None = Field(default=None, ge=0, le=100, decimal_places=8)
    rebalance: bool = Field(
        default=True,
        description="Recompute everyone's ownership when beginning_value changes",
    )

    @field_validator('first_name', 'last_name')
    @classmethod
    def normalize_names(cls, v: str | None) -> str | None:
        if v is None:
            return v
        normalized = normalize_name(v)
        if not normalized:
            raise ValueError("Name cannot be blank")
        return normalized


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class ParticipantResponse(BaseModel):
    """Participant as returned by the API (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    first_name: str
    last_name: str
    full_name: str
    beginning_value: Decimal | None
    ownership_percentage: Decimal
    is_admin: bool
    created_at: datetime
    updated_at: datetime


class ParticipantUpdateResponse(BaseModel):
    """Updated participant plus the rebalance it triggered, if any."""

    participant: ParticipantResponse
    rebalance: RebalanceResponse | None = None


class ParticipantDeleteResponse(BaseModel):
    """Deletion outcome and the rebalance of the remaining participants, if any."""

    deleted_id: int
    rebalance: RebalanceResponse | None = None
