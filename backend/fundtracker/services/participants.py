# backend/fundtracker/services/participants.py
"""
Participant Service - participant accounts and their monthly values.

This service handles:
- Creating, listing, updating and deleting participants
- Per-month beginning value / ownership overrides (MonthlyValue)
- Keeping ownership consistent: explicit ownership writes are validated
  against the 100% limit, beginning value edits trigger a rebalance

Design Principles:
- No HTTP Knowledge: Raises domain exceptions, not HTTPException
- Storage injected per call (FundStorage), commits on success
- Passwords are hashed here and never leave the service in plaintext

Usage:
    from fundtracker.services.participants import ParticipantService

    service = ParticipantService()
    participant = service.create_participant(
        storage, username="jdoe", password="s3cret-pass",
        first_name="Jane", last_name="Doe", ownership_percentage=Decimal("25"),
    )
"""

from __future__ import annotations

import logging
from decimal import Decimal

from fundtracker.models import MonthlyValue, Participant
from fundtracker.services.auth.password import PasswordService
from fundtracker.services.constants import ZERO
from fundtracker.services.exceptions import (
    MonthlyValueNotFoundError,
    ParticipantNotFoundError,
    RebalanceError,
    UsernameExistsError,
    ValidationError,
)
from fundtracker.services.ownership import OwnershipService, RebalanceResult
from fundtracker.services.periods import current_period, validate_period
from fundtracker.services.protocols import FundStorage

logger = logging.getLogger(__name__)


class ParticipantService:
    """
    Participant accounts and monthly overrides.

    Attributes:
        ownership: Used for allocation checks and rebalancing
    """

    def __init__(self, ownership_service: OwnershipService | None = None) -> None:
        self.ownership = ownership_service or OwnershipService()

    # =========================================================================
    # PARTICIPANTS
    # =========================================================================

    def list_participants(self, storage: FundStorage, include_admins: bool = False) -> list[Participant]:
        return storage.list_participants(include_admins=include_admins)

    def get_participant(self, storage: FundStorage, participant_id: int) -> Participant:
        """
        Raises:
            ParticipantNotFoundError: If the participant doesn't exist
        """
        participant = storage.get_participant(participant_id)
        if participant is None:
            raise ParticipantNotFoundError(participant_id)
        return participant

    def create_participant(
            self,
            storage: FundStorage,
            username: str,
            password: str,
            first_name: str,
            last_name: str,
            beginning_value: Decimal | None = None,
            ownership_percentage: Decimal = ZERO,
            is_admin: bool = False,
    ) -> Participant:
        """
        Create a participant.

        Ownership is checked against the current period before anything is
        written. Admin accounts never hold ownership.

        Raises:
            UsernameExistsError: If the username is taken
            ValidationError: If an admin is given ownership or a beginning value
            OwnershipAllocationError: If the current period would exceed 100%
        """
        username = username.strip()
        if storage.get_participant_by_username(username) is not None:
            raise UsernameExistsError(username)

        if is_admin and (ownership_percentage != ZERO or beginning_value is not None):
            raise ValidationError("Admin accounts cannot hold ownership", field="ownership_percentage")

        if not is_admin and ownership_percentage != ZERO:
            year, month = current_period(storage)
            self.ownership.validate_allocation(storage, year, month, None, ownership_percentage)

        participant = storage.create_participant(
            username=username,
            hashed_password=PasswordService.hash_password(password),
            first_name=first_name,
            last_name=last_name,
            beginning_value=beginning_value,
            ownership_percentage=ownership_percentage,
            is_admin=is_admin,
        )
        storage.commit()

        logger.info(f"Participant created: {participant.username} (id={participant.id})")
        return participant

    def update_participant(
            self,
            storage: FundStorage,
            participant_id: int,
            first_name: str | None = None,
            last_name: str | None = None,
            password: str | None = None,
            beginning_value: Decimal | None = None,
            ownership_percentage: Decimal | None = None,
            rebalance: bool = True,
    ) -> tuple[Participant, RebalanceResult | None]:
        """
        Update a participant's profile.

        A new beginning value rebalances every participant's ownership for the
        current period (ownership_percentage is then recomputed, not taken
        from the arguments). With rebalance=False, or when only the ownership
        changes, the explicit ownership is validated against the 100% limit.

        Returns:
            (participant, rebalance result or None when no rebalance ran)

        Raises:
            ParticipantNotFoundError: If the participant doesn't exist
            ValidationError: If an admin is given ownership
            OwnershipAllocationError: If an explicit ownership would exceed 100%
            RebalanceError: If the rebalance could not be written
        """
        participant = self.get_participant(storage, participant_id)

        if participant.is_admin and (beginning_value is not None or ownership_percentage is not None):
            raise ValidationError("Admin accounts cannot hold ownership", field="ownership_percentage")

        fields: dict = {}
        if first_name is not None:
            fields["first_name"] = first_name
        if last_name is not None:
            fields["last_name"] = last_name
        if password is not None:
            fields["hashed_password"] = PasswordService.hash_password(password)

        run_rebalance = rebalance and beginning_value is not None
        if not run_rebalance:
            if beginning_value is not None:
                fields["beginning_value"] = beginning_value
            if ownership_percentage is not None:
                year, month = current_period(storage)
                self.ownership.validate_allocation(storage, year, month, participant.id, ownership_percentage)
                fields["ownership_percentage"] = ownership_percentage

        if fields:
            storage.update_participant(participant, **fields)

        if not run_rebalance:
            self._sync_current_override(storage, participant, beginning_value, ownership_percentage)
            storage.commit()
            logger.info(f"Participant {participant.id} updated: {sorted(fields)}")
            return participant, None

        # Profile edits above are staged and commit together with the rebalance
        year, month = current_period(storage)
        result = self.ownership.rebalance(
            storage,
            year,
            month,
            participant_id=participant.id,
            new_beginning_value=beginning_value,
        )
        if not result.success:
            raise RebalanceError(
                f"Could not rebalance {year}-{month:02d}: {result.error}",
                failed_participant_id=result.failed_participant_id,
                rolled_back=True,
            )

        logger.info(f"Participant {participant.id} updated with rebalance of {year}-{month:02d}")
        return participant, result

    def _sync_current_override(
            self,
            storage: FundStorage,
            participant: Participant,
            beginning_value: Decimal | None,
            ownership_percentage: Decimal | None,
    ) -> None:
        """Carry a profile edit into the participant's current-period override, if one exists."""
        if beginning_value is None and ownership_percentage is None:
            return

        year, month = current_period(storage)
        override = storage.get_monthly_value(participant.id, year, month)
        if override is None:
            return

        storage.set_monthly_value(
            participant.id,
            year,
            month,
            beginning_value=override.beginning_value if beginning_value is None else beginning_value,
            ownership_percentage=(
                override.ownership_percentage if ownership_percentage is None else ownership_percentage
            ),
        )

    def delete_participant(
            self,
            storage: FundStorage,
            participant_id: int,
            rebalance: bool = True,
    ) -> RebalanceResult | None:
        """
        Delete a participant with their monthly values and daily returns.

        With rebalance=True the remaining participants' ownership for the
        current period is recomputed afterwards.

        Returns:
            The rebalance result, or None when no rebalance ran

        Raises:
            ParticipantNotFoundError: If the participant doesn't exist
            ValidationError: If the participant is an admin
        """
        participant = self.get_participant(storage, participant_id)
        if participant.is_admin:
            raise ValidationError("Admin accounts cannot be deleted", field="participant_id")

        storage.delete_participant(participant)
        storage.commit()
        logger.info(f"Participant {participant_id} deleted")

        if not rebalance:
            return None

        year, month = current_period(storage)
        result = self.ownership.rebalance(storage, year, month)
        if not result.success:
            logger.warning(f"Rebalance after deleting participant {participant_id} failed: {result.error}")
        return result

    # =========================================================================
    # MONTHLY VALUES
    # =========================================================================

    def list_monthly_values(self, storage: FundStorage, participant_id: int) -> list[MonthlyValue]:
        self.get_participant(storage, participant_id)
        return storage.list_monthly_values(participant_id=participant_id)

    def get_monthly_value(self, storage: FundStorage, participant_id: int, year: int, month: int) -> MonthlyValue:
        """
        Raises:
            ParticipantNotFoundError: If the participant doesn't exist
            MonthlyValueNotFoundError: If no override exists for the period
        """
        validate_period(year, month)
        self.get_participant(storage, participant_id)

        monthly_value = storage.get_monthly_value(participant_id, year, month)
        if monthly_value is None:
            raise MonthlyValueNotFoundError(participant_id, year, month)
        return monthly_value

    def set_monthly_value(
            self,
            storage: FundStorage,
            participant_id: int,
            year: int,
            month: int,
            beginning_value: Decimal,
            ownership_percentage: Decimal,
    ) -> MonthlyValue:
        """
        Create or replace a participant's override for one month.

        Raises:
            ParticipantNotFoundError: If the participant doesn't exist
            ValidationError: If the participant is an admin
            OwnershipAllocationError: If the month would exceed 100%
        """
        validate_period(year, month)
        participant = self.get_participant(storage, participant_id)
        if participant.is_admin:
            raise ValidationError("Admin accounts cannot hold ownership", field="ownership_percentage")

        self.ownership.validate_allocation(storage, year, month, participant_id, ownership_percentage)

        monthly_value = storage.set_monthly_value(
            participant_id,
            year,
            month,
            beginning_value=beginning_value,
            ownership_percentage=ownership_percentage,
        )
        storage.commit()

        logger.info(f"Monthly value set for participant {participant_id} in {year}-{month:02d}")
        return monthly_value

    def delete_monthly_value(self, storage: FundStorage, participant_id: int, year: int, month: int) -> None:
        """
        Raises:
            ParticipantNotFoundError: If the participant doesn't exist
            MonthlyValueNotFoundError: If no override exists for the period
        """
        monthly_value = self.get_monthly_value(storage, participant_id, year, month)
        storage.delete_monthly_value(monthly_value)
        storage.commit()
        logger.info(f"Monthly value deleted for participant {participant_id} in {year}-{month:02d}")
