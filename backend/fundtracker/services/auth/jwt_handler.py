# backend/fundtracker/services/auth/jwt_handler.py
"""
JWT access tokens (python-jose, HS256 by default).

Tokens are stateless: nothing is stored server-side, and a token stays valid
until it expires. The admin flag travels in the token but authorization
always re-reads the participant from the database.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from fundtracker.config import settings
from fundtracker.services.exceptions import TokenExpiredError, InvalidCredentialsError

ACCESS_TOKEN_TYPE = "access"


class JWTHandler:
    """
    Creates and validates access tokens.

    Claims:
    - sub: Participant ID (string)
    - username: Participant's login name
    - admin: Admin flag at issue time
    - exp / iat: Expiry and issue timestamps
    - type: "access"
    """

    @staticmethod
    def create_access_token(
        participant_id: int,
        username: str,
        is_admin: bool = False,
        expires_delta: timedelta | None = None,
    ) -> str:
        """
        Create a signed access token.

        Args:
            participant_id: The participant's database ID
            username: The participant's login name
            is_admin: Whether the participant is an admin
            expires_delta: Custom lifetime (defaults to JWT_ACCESS_TOKEN_EXPIRE_MINUTES)

        Returns:
            Encoded JWT string
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.jwt_access_token_expire_minutes)

        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(participant_id),
            "username": username,
            "admin": is_admin,
            "exp": now + expires_delta,
            "iat": now,
            "type": ACCESS_TOKEN_TYPE,
        }

        return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

    @staticmethod
    def validate_access_token(token: str) -> dict[str, Any]:
        """
        Validate an access token and return its payload.

        Raises:
            TokenExpiredError: If the token has expired
            InvalidCredentialsError: If the token is invalid, malformed or not an access token
        """
        try:
            payload = jwt.decode(
                token,
                settings.jwt_secret_key,
                algorithms=[settings.jwt_algorithm],
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Access token has expired")
        except JWTError as e:
            raise InvalidCredentialsError(f"Invalid token: {str(e)}")

        if payload.get("type") != ACCESS_TOKEN_TYPE:
            raise InvalidCredentialsError("Invalid token type")

        if not str(payload.get("sub", "")).isdigit():
            raise InvalidCredentialsError("Invalid token subject")

        return payload

    @staticmethod
    def participant_id_from(payload: dict[str, Any]) -> int:
        """Participant ID carried by a validated payload."""
        return int(payload["sub"])
