# tests/services/test_participants.py
"""
Tests for ParticipantService.

Tests:
- Creating participants (hashing, duplicate usernames, ownership limit)
- Updating (profile fields, explicit ownership, rebalance on beginning value)
- Deleting (cascade, rebalance of the remaining participants)
- Monthly value overrides
"""

from datetime import date
from decimal import Decimal

import pytest

from fundtracker.services.auth.password import PasswordService
from fundtracker.services.exceptions import (
    MonthlyValueNotFoundError,
    OwnershipAllocationError,
    ParticipantNotFoundError,
    RebalanceError,
    StorageError,
    UsernameExistsError,
    ValidationError,
)
from fundtracker.services.ownership import OwnershipService
from fundtracker.services.participants import ParticipantService
from fundtracker.services.storage import SqlAlchemyFundStorage
from fundtracker.services.valuation.basis import resolve_period_basis


@pytest.fixture
def service() -> ParticipantService:
    return ParticipantService()


# =============================================================================
# TEST: CREATE
# =============================================================================


class TestCreateParticipant:

    def test_creates_with_hashed_password(self, storage, service, november):
        participant = service.create_participant(
            storage,
            username="carol",
            password="s3cret-pass",
            first_name="Carol",
            last_name="Diaz",
            ownership_percentage=Decimal("25"),
        )

        assert participant.id is not None
        assert participant.full_name == "Carol Diaz"
        assert participant.hashed_password != "s3cret-pass"
        assert PasswordService.verify_password("s3cret-pass", participant.hashed_password)

    def test_duplicate_username(self, storage, service, november, alice):
        with pytest.raises(UsernameExistsError):
            service.create_participant(storage, "alice", "s3cret-pass", "Other", "Alice")

    def test_ownership_over_limit_rejected(self, storage, service, november, alice, bob):
        with pytest.raises(OwnershipAllocationError):
            service.create_participant(
                storage, "carol", "s3cret-pass", "Carol", "Diaz", ownership_percentage=Decimal("1"),
            )

        assert storage.get_participant_by_username("carol") is None

    def test_admin_cannot_hold_ownership(self, storage, service, november):
        with pytest.raises(ValidationError):
            service.create_participant(
                storage, "boss", "s3cret-pass", "Big", "Boss",
                ownership_percentage=Decimal("5"), is_admin=True,
            )

    def test_list_excludes_admins_by_default(self, storage, service, admin, alice):
        assert [p.username for p in service.list_participants(storage)] == ["alice"]
        assert len(service.list_participants(storage, include_admins=True)) == 2


# =============================================================================
# TEST: UPDATE
# =============================================================================


class TestUpdateParticipant:

    def test_profile_fields(self, storage, service, november, alice):
        participant, result = service.update_participant(storage, alice.id, first_name="Alicia")

        assert participant.first_name == "Alicia"
        assert result is None

    def test_password_is_rehashed(self, storage, service, november, alice):
        participant, _ = service.update_participant(storage, alice.id, password="brand-new-pass")

        assert PasswordService.verify_password("brand-new-pass", participant.hashed_password)

    def test_explicit_ownership_validated(self, storage, service, november, alice, bob):
        with pytest.raises(OwnershipAllocationError):
            service.update_participant(storage, alice.id, ownership_percentage=Decimal("61"))

        participant, _ = service.update_participant(storage, alice.id, ownership_percentage=Decimal("55"))
        assert participant.ownership_percentage == Decimal("55")

    def test_beginning_value_triggers_rebalance(self, storage, service, november, alice, bob):
        participant, result = service.update_participant(storage, alice.id, beginning_value=Decimal("16000"))

        assert result is not None and result.success
        assert participant.beginning_value == Decimal("16000")
        assert participant.ownership_percentage == Decimal("80")
        assert storage.get_participant(bob.id).ownership_percentage == Decimal("20")

    def test_beginning_value_without_rebalance(self, storage, service, november, alice, bob):
        participant, result = service.update_participant(
            storage, alice.id, beginning_value=Decimal("16000"), rebalance=False,
        )

        assert result is None
        assert participant.beginning_value == Decimal("16000")
        assert participant.ownership_percentage == Decimal("60")

    def test_edit_without_rebalance_reaches_existing_override(self, storage, service, november, alice, bob):
        service.update_participant(storage, alice.id, beginning_value=Decimal("8000"))
        assert storage.get_monthly_value(bob.id, 2025, 11) is not None

        service.update_participant(storage, bob.id, beginning_value=Decimal("9999"), rebalance=False)

        basis = resolve_period_basis(storage, storage.get_participant(bob.id), 2025, 11)
        assert basis.source == "monthly_value"
        assert basis.beginning_value == Decimal("9999")
        assert basis.ownership_percentage == Decimal("33.33333333")

    def test_ownership_edit_reaches_existing_override(self, storage, service, november, alice, bob):
        service.update_participant(storage, alice.id, beginning_value=Decimal("8000"))

        service.update_participant(storage, bob.id, ownership_percentage=Decimal("30"))

        override = storage.get_monthly_value(bob.id, 2025, 11)
        assert override.beginning_value == Decimal("4000")
        assert override.ownership_percentage == Decimal("30")
        assert OwnershipService().ownership_total(storage, 2025, 11) == Decimal("96.66666667")

    def test_edit_without_override_leaves_monthly_values_alone(self, storage, service, november, alice, bob):
        service.update_participant(storage, bob.id, beginning_value=Decimal("9999"), rebalance=False)

        assert storage.get_monthly_value(bob.id, 2025, 11) is None

    def test_failed_rebalance_raises_and_rolls_back(self, db, november, alice, bob):
        class FailingStorage(SqlAlchemyFundStorage):
            def set_monthly_value(self, participant_id, *args, **kwargs):
                raise StorageError("set_monthly_value", "OperationalError")

        storage = FailingStorage(db)

        with pytest.raises(RebalanceError) as exc_info:
            ParticipantService().update_participant(
                storage, alice.id, first_name="Alicia", beginning_value=Decimal("16000"),
            )

        assert exc_info.value.rolled_back is True
        refreshed = storage.get_participant(alice.id)
        assert refreshed.first_name == "Test"
        assert refreshed.beginning_value == Decimal("6000")

    def test_unknown_participant(self, storage, service, november):
        with pytest.raises(ParticipantNotFoundError):
            service.update_participant(storage, 999, first_name="Nobody")


# =============================================================================
# TEST: DELETE
# =============================================================================


class TestDeleteParticipant:

    def test_delete_rebalances_remaining(self, storage, service, november, alice, bob):
        result = service.delete_participant(storage, bob.id)

        assert storage.get_participant(bob.id) is None
        assert result is not None and result.success
        assert storage.get_participant(alice.id).ownership_percentage == Decimal("100")

    def test_delete_without_rebalance(self, storage, service, november, alice, bob):
        assert service.delete_participant(storage, bob.id, rebalance=False) is None
        assert storage.get_participant(alice.id).ownership_percentage == Decimal("60")

    def test_owned_records_are_removed(self, storage, service, november, alice, bob):
        storage.set_monthly_value(bob.id, 2025, 3, Decimal("100"), Decimal("10"))
        storage.add_daily_return(bob.id, date(2025, 11, 3), Decimal("1"))
        storage.commit()

        service.delete_participant(storage, bob.id, rebalance=False)

        assert storage.list_monthly_values(participant_id=bob.id) == []
        assert storage.list_daily_returns(bob.id, date(2025, 11, 1), date(2025, 11, 30)) == []

    def test_admin_cannot_be_deleted(self, storage, service, november, admin, alice):
        with pytest.raises(ValidationError):
            service.delete_participant(storage, admin.id)

        assert storage.get_participant(admin.id) is not None

    def test_unknown_participant(self, storage, service):
        with pytest.raises(ParticipantNotFoundError):
            service.delete_participant(storage, 999)


# =============================================================================
# TEST: MONTHLY VALUES
# =============================================================================


class TestMonthlyValues:

    def test_set_and_replace(self, storage, service, november, alice):
        service.set_monthly_value(storage, alice.id, 2025, 3, Decimal("1000"), Decimal("10"))
        service.set_monthly_value(storage, alice.id, 2025, 3, Decimal("1500"), Decimal("15"))

        [stored] = service.list_monthly_values(storage, alice.id)
        assert stored.beginning_value == Decimal("1500")
        assert stored.ownership_percentage == Decimal("15")

    def test_month_over_limit_rejected(self, storage, service, november, alice, bob):
        service.set_monthly_value(storage, alice.id, 2025, 3, Decimal("1000"), Decimal("70"))

        with pytest.raises(OwnershipAllocationError):
            service.set_monthly_value(storage, bob.id, 2025, 3, Decimal("1000"), Decimal("40"))

    def test_admin_rejected(self, storage, service, november, admin):
        with pytest.raises(ValidationError):
            service.set_monthly_value(storage, admin.id, 2025, 3, Decimal("1000"), Decimal("10"))

    def test_get_missing(self, storage, service, november, alice):
        with pytest.raises(MonthlyValueNotFoundError):
            service.get_monthly_value(storage, alice.id, 2025, 3)

    def test_delete(self, storage, service, november, alice):
        service.set_monthly_value(storage, alice.id, 2025, 3, Decimal("1000"), Decimal("10"))

        service.delete_monthly_value(storage, alice.id, 2025, 3)

        assert service.list_monthly_values(storage, alice.id) == []
