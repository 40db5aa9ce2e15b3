# backend/fundtracker/services/ownership.py
"""
Ownership Service - validates and rebalances ownership percentages.

This service handles:
- Ownership totals per period
- Rejecting writes that would push a period above 100%
- Rebalancing every participant's ownership after a beginning value changes

Rebalance rule:
    ownership_i = beginning_i / sum(beginning) x 100   (0 when the sum is 0)

The result is written as a MonthlyValue for the period and, for the current
period, onto the participant profiles as well.

Transaction modes:
- atomic=True (default): one transaction; a failure rolls back every participant
- atomic=False (legacy): one commit per participant; a failure leaves earlier
  participants updated. The result names the participant that failed.

Usage:
    from fundtracker.services.ownership import OwnershipService

    service = OwnershipService()
    result = service.rebalance(storage, 2025, 11, participant_id=2,
                               new_beginning_value=Decimal("5000"))
    if not result.success:
        ...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from fundtracker.services.constants import (
    HUNDRED,
    OWNERSHIP_LIMIT,
    OWNERSHIP_TOLERANCE,
    PERCENTAGE_PRECISION,
    ZERO,
)
from fundtracker.services.exceptions import (
    OwnershipAllocationError,
    ParticipantNotFoundError,
    StorageError,
    ValidationError,
)
from fundtracker.services.periods import is_current_period, validate_period
from fundtracker.services.protocols import FundStorage
from fundtracker.services.valuation.basis import resolve_period_basis

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT TYPES
# =============================================================================

@dataclass(frozen=True)
class OwnershipUpdate:
    """New ownership written for one participant."""

    participant_id: int
    beginning_value: Decimal
    old_ownership: Decimal
    new_ownership: Decimal


@dataclass
class RebalanceResult:
    """
    Outcome of a rebalance.

    Attributes:
        success: Every planned write went through
        total_beginning_value: Sum of beginning values the split is based on
        updates: Writes that are persisted (all of them on success; in legacy
            mode, the ones committed before a failure; none after an atomic
            rollback)
        failed_participant_id: Participant whose write failed
        error: Failure message
    """

    success: bool
    year: int
    month: int
    total_beginning_value: Decimal
    updates: list[OwnershipUpdate] = field(default_factory=list)
    failed_participant_id: int | None = None
    error: str | None = None


@dataclass(frozen=True)
class ParticipantShare:
    """One participant's basis within a period allocation."""

    participant_id: int
    username: str
    beginning_value: Decimal
    ownership_percentage: Decimal
    source: str


@dataclass(frozen=True)
class PeriodAllocation:
    """Every participant's share of one period."""

    year: int
    month: int
    ownership_total: Decimal
    is_over_allocated: bool
    participants: list[ParticipantShare]


def _split(beginning_value: Decimal, total: Decimal) -> Decimal:
    if total == ZERO:
        return ZERO
    return (beginning_value / total * HUNDRED).quantize(PERCENTAGE_PRECISION)


class OwnershipService:
    """Ownership validation and rebalancing for one period at a time."""

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def ownership_total(self, storage: FundStorage, year: int, month: int) -> Decimal:
        """Sum of every non-admin participant's ownership for the period."""
        validate_period(year, month)
        return sum(
            (
                resolve_period_basis(storage, participant, year, month).ownership_percentage
                for participant in storage.list_participants()
            ),
            ZERO,
        )

    def allocation(self, storage: FundStorage, year: int, month: int) -> PeriodAllocation:
        """Resolved basis of every non-admin participant for the period, with the total."""
        validate_period(year, month)

        shares = []
        for participant in storage.list_participants():
            basis = resolve_period_basis(storage, participant, year, month)
            shares.append(ParticipantShare(
                participant_id=participant.id,
                username=participant.username,
                beginning_value=basis.beginning_value,
                ownership_percentage=basis.ownership_percentage,
                source=basis.source,
            ))

        total = sum((share.ownership_percentage for share in shares), ZERO)
        return PeriodAllocation(
            year=year,
            month=month,
            ownership_total=total,
            is_over_allocated=total > OWNERSHIP_LIMIT + OWNERSHIP_TOLERANCE,
            participants=shares,
        )

    def validate_allocation(
            self,
            storage: FundStorage,
            year: int,
            month: int,
            participant_id: int | None,
            ownership_percentage: Decimal,
    ) -> Decimal:
        """
        Check that giving a participant this ownership keeps the period at or below 100%.

        Args:
            participant_id: Participant being changed, None for one not yet created

        Returns:
            The ownership total the write would produce

        Raises:
            ValidationError: If the percentage is outside 0-100
            OwnershipAllocationError: If the total would exceed 100%
        """
        validate_period(year, month)

        if ownership_percentage < ZERO or ownership_percentage > OWNERSHIP_LIMIT:
            raise ValidationError(
                f"Ownership must be between 0 and {OWNERSHIP_LIMIT}, got {ownership_percentage}",
                field="ownership_percentage",
            )

        others = sum(
            (
                resolve_period_basis(storage, participant, year, month).ownership_percentage
                for participant in storage.list_participants()
                if participant.id != participant_id
            ),
            ZERO,
        )
        total = others + ownership_percentage

        if total > OWNERSHIP_LIMIT + OWNERSHIP_TOLERANCE:
            logger.warning(
                f"Rejected ownership {ownership_percentage}% for participant {participant_id} "
                f"in {year}-{month:02d}: total would be {total}%"
            )
            raise OwnershipAllocationError(year, month, total, OWNERSHIP_LIMIT)

        return total

    # =========================================================================
    # REBALANCE
    # =========================================================================

    def rebalance(
            self,
            storage: FundStorage,
            year: int,
            month: int,
            participant_id: int | None = None,
            new_beginning_value: Decimal | None = None,
            atomic: bool = True,
    ) -> RebalanceResult:
        """
        Recompute every participant's ownership from beginning values.

        Participants without a stake are left out of the split. Any
        ownership they still hold is zeroed.

        Args:
            participant_id: Participant whose beginning value changed (None to
                recompute from stored values, e.g. after a deletion)
            new_beginning_value: The changed participant's new beginning value
            atomic: One transaction (True) or one commit per participant (False)

        Returns:
            RebalanceResult; storage failures are reported here, not raised

        Raises:
            InvalidPeriodError: If (year, month) is not a real month
            ParticipantNotFoundError: If participant_id is not a non-admin participant
            ValidationError: If new_beginning_value is negative
        """
        validate_period(year, month)

        if new_beginning_value is not None and new_beginning_value < ZERO:
            raise ValidationError("Beginning value cannot be negative", field="beginning_value")

        participants = storage.list_participants()
        if participant_id is not None and all(p.id != participant_id for p in participants):
            raise ParticipantNotFoundError(participant_id)

        plan: list[tuple] = []
        for participant in participants:
            basis = resolve_period_basis(storage, participant, year, month)
            beginning = basis.beginning_value
            if participant.id == participant_id and new_beginning_value is not None:
                beginning = new_beginning_value

            edited = participant.id == participant_id
            # No stake: skip unless stale ownership has to be zeroed
            if (
                    beginning == ZERO
                    and basis.source != "monthly_value"
                    and basis.ownership_percentage == ZERO
                    and not edited
            ):
                continue
            plan.append((participant, beginning, basis.ownership_percentage, edited))

        total = sum((beginning for _, beginning, _, _ in plan), ZERO)
        write_profile = is_current_period(storage, year, month)

        result = RebalanceResult(success=True, year=year, month=month, total_beginning_value=total)
        staged: list[OwnershipUpdate] = []

        for participant, beginning, old_ownership, edited in plan:
            update = OwnershipUpdate(
                participant_id=participant.id,
                beginning_value=beginning,
                old_ownership=old_ownership,
                new_ownership=_split(beginning, total),
            )
            try:
                self._write(storage, participant, year, month, update, edited, write_profile)
                if not atomic:
                    storage.commit()
            except StorageError as e:
                storage.rollback()
                result.success = False
                result.failed_participant_id = participant.id
                result.error = e.message
                # Legacy mode keeps what was already committed
                result.updates = [] if atomic else staged
                logger.error(
                    f"Rebalance of {year}-{month:02d} failed at participant {participant.id} "
                    f"({'rolled back' if atomic else f'{len(staged)} already committed'}): {e.message}"
                )
                return result
            staged.append(update)

        if atomic:
            try:
                storage.commit()
            except StorageError as e:
                storage.rollback()
                result.success = False
                result.error = e.message
                logger.error(f"Rebalance of {year}-{month:02d} failed on commit: {e.message}")
                return result

        result.updates = staged
        logger.info(
            f"Rebalanced {year}-{month:02d} across {len(staged)} participants "
            f"(total beginning value {total})"
        )
        return result

    def _write(
            self,
            storage: FundStorage,
            participant,
            year: int,
            month: int,
            update: OwnershipUpdate,
            edited: bool,
            write_profile: bool,
    ) -> None:
        storage.set_monthly_value(
            participant.id,
            year,
            month,
            beginning_value=update.beginning_value,
            ownership_percentage=update.new_ownership,
        )
        if write_profile:
            fields = {"ownership_percentage": update.new_ownership}
            if edited:
                fields["beginning_value"] = update.beginning_value
            storage.update_participant(participant, **fields)
