# tests/services/auth/test_auth_service.py
"""
Tests for AuthService.

Tests:
- Login success and failure
- Resolving tokens to participants
- Creating the admin account
"""

import pytest

from fundtracker.services.auth.jwt_handler import JWTHandler
from fundtracker.services.auth.service import AuthService
from fundtracker.services.exceptions import (
    InvalidCredentialsError,
    UsernameExistsError,
    ValidationError,
)
from tests.conftest import TEST_PASSWORD


@pytest.fixture
def service() -> AuthService:
    return AuthService()


class TestLogin:
    """Tests for username/password login."""

    def test_success_returns_token(self, storage, service, alice):
        result = service.login(storage, "alice", TEST_PASSWORD)

        assert result.participant.id == alice.id
        assert result.token_type == "bearer"
        assert result.expires_in > 0
        payload = JWTHandler.validate_access_token(result.access_token)
        assert payload["sub"] == str(alice.id)
        assert payload["admin"] is False

    def test_username_is_trimmed(self, storage, service, alice):
        assert service.login(storage, "  alice ", TEST_PASSWORD).participant.id == alice.id

    def test_wrong_password(self, storage, service, alice):
        with pytest.raises(InvalidCredentialsError):
            service.login(storage, "alice", "wrong-password")

    def test_unknown_username_same_error(self, storage, service, alice):
        """Unknown usernames should fail with the same message as bad passwords."""
        with pytest.raises(InvalidCredentialsError) as unknown:
            service.login(storage, "nobody", TEST_PASSWORD)
        with pytest.raises(InvalidCredentialsError) as wrong:
            service.login(storage, "alice", "wrong-password")

        assert str(unknown.value) == str(wrong.value)


class TestParticipantFromToken:

    def test_resolves_participant(self, storage, service, alice):
        token = JWTHandler.create_access_token(participant_id=alice.id, username="alice")

        assert service.participant_from_token(storage, token).id == alice.id

    def test_deleted_participant(self, storage, service, alice):
        token = JWTHandler.create_access_token(participant_id=alice.id, username="alice")
        storage.delete_participant(alice)
        storage.commit()

        with pytest.raises(InvalidCredentialsError):
            service.participant_from_token(storage, token)


class TestCreateAdmin:

    def test_creates_admin(self, storage, service):
        admin = service.create_admin(storage, "root", "long-enough-pass")

        assert admin.is_admin is True
        assert service.login(storage, "root", "long-enough-pass").participant.id == admin.id

    def test_short_password(self, storage, service):
        with pytest.raises(ValidationError):
            service.create_admin(storage, "root", "short")

    def test_taken_username(self, storage, service, alice):
        with pytest.raises(UsernameExistsError):
            service.create_admin(storage, "alice", "long-enough-pass")
