# tests/services/auth/test_jwt_handler.py
"""
Tests for JWT token handling.

Tests:
- Access token creation with correct claims
- Token validation (valid, expired, tampered)
- Token type and subject checks
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from fundtracker.config import settings
from fundtracker.services.auth.jwt_handler import JWTHandler
from fundtracker.services.exceptions import InvalidCredentialsError, TokenExpiredError


def _encode(payload: dict) -> str:
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


# =============================================================================
# TEST: ACCESS TOKEN CREATION
# =============================================================================


class TestCreateAccessToken:
    """Tests for access token creation."""

    def test_token_is_valid_jwt(self):
        """Created token should have header, payload and signature."""
        token = JWTHandler.create_access_token(participant_id=1, username="alice")

        assert len(token.split(".")) == 3

    def test_token_contains_claims(self):
        token = JWTHandler.create_access_token(participant_id=42, username="alice", is_admin=True)

        payload = JWTHandler.validate_access_token(token)

        assert payload["sub"] == "42"
        assert payload["username"] == "alice"
        assert payload["admin"] is True
        assert payload["type"] == "access"
        assert JWTHandler.participant_id_from(payload) == 42

    def test_custom_expiry(self):
        """Token lifetime should follow expires_delta."""
        token = JWTHandler.create_access_token(
            participant_id=1, username="alice", expires_delta=timedelta(hours=2),
        )

        payload = JWTHandler.validate_access_token(token)
        diff = datetime.fromtimestamp(payload["exp"], tz=timezone.utc) - datetime.fromtimestamp(
            payload["iat"], tz=timezone.utc
        )
        assert timedelta(hours=1, minutes=59) < diff < timedelta(hours=2, minutes=1)


# =============================================================================
# TEST: ACCESS TOKEN VALIDATION
# =============================================================================


class TestValidateAccessToken:
    """Tests for rejecting bad tokens."""

    def test_expired_token(self):
        token = JWTHandler.create_access_token(
            participant_id=1, username="alice", expires_delta=timedelta(seconds=-1),
        )

        with pytest.raises(TokenExpiredError):
            JWTHandler.validate_access_token(token)

    def test_tampered_token(self):
        token = JWTHandler.create_access_token(participant_id=1, username="alice")

        with pytest.raises(InvalidCredentialsError):
            JWTHandler.validate_access_token(token[:-4] + "abcd")

    def test_garbage_token(self):
        with pytest.raises(InvalidCredentialsError):
            JWTHandler.validate_access_token("not-a-token")

    def test_wrong_secret(self):
        """Tokens signed with another key should be rejected."""
        token = jwt.encode(
            {"sub": "1", "type": "access", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            "some-other-secret-key-that-is-long-enough",
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(InvalidCredentialsError):
            JWTHandler.validate_access_token(token)

    def test_wrong_token_type(self):
        token = _encode({"sub": "1", "type": "refresh", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)})

        with pytest.raises(InvalidCredentialsError, match="type"):
            JWTHandler.validate_access_token(token)

    def test_non_numeric_subject(self):
        token = _encode({"sub": "alice", "type": "access", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)})

        with pytest.raises(InvalidCredentialsError, match="subject"):
            JWTHandler.validate_access_token(token)
