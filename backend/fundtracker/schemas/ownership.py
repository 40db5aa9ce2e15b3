# backend/fundtracker/schemas/ownership.py
"""Pydantic schemas for ownership allocation and rebalancing."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class RebalanceRequest(BaseModel):
    """
    Recompute ownership for one month.

    With participant_id and new_beginning_value, that participant's
    beginning value is changed first. Without them, ownership is recomputed
    from the stored beginning values.
    """

    year: int = Field(..., ge=1900, le=9999)
    month: int = Field(..., ge=1, le=12)
    participant_id: int | None = Field(default=None, gt=0)
    new_beginning_value: Decimal | None = Field(default=None, ge=0, max_digits=18, decimal_places=8)
    atomic: bool = Field(
        default=True,
        description="Write all participants in one transaction (false: commit one by one)",
    )


class OwnershipUpdateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    participant_id: int
    beginning_value: Decimal
    old_ownership: Decimal
    new_ownership: Decimal


class RebalanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    year: int
    month: int
    total_beginning_value: Decimal
    updates: list[OwnershipUpdateResponse]
    failed_participant_id: int | None = None
    error: str | None = None


class ParticipantAllocation(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    participant_id: int
    username: str
    beginning_value: Decimal
    ownership_percentage: Decimal
    source: str = Field(..., description="monthly_value, profile, derived or none")


class AllocationResponse(BaseModel):
    """Ownership split of one month."""

    model_config = ConfigDict(from_attributes=True)

    year: int
    month: int
    ownership_total: Decimal
    is_over_allocated: bool
    participants: list[ParticipantAllocation]
