# backend/fundtracker/services/auth/service.py
"""
Core authentication service.

Handles:
- Login (username/password) -> access token
- Resolving a token back to a participant
- Creating the bootstrap admin account
"""

import logging
from dataclasses import dataclass

from fundtracker.config import settings
from fundtracker.models import Participant
from fundtracker.services.auth.jwt_handler import JWTHandler
from fundtracker.services.auth.password import PasswordService
from fundtracker.services.exceptions import (
    InvalidCredentialsError,
    UsernameExistsError,
    ValidationError,
)
from fundtracker.services.protocols import FundStorage

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    """Access token issued at login, with the participant it belongs to."""

    access_token: str
    participant: Participant
    token_type: str = "bearer"
    expires_in: int = settings.jwt_access_token_expire_minutes * 60


class AuthService:
    """Authentication for participants and admins."""

    def login(self, storage: FundStorage, username: str, password: str) -> LoginResult:
        """
        Authenticate with username and password.

        Raises:
            InvalidCredentialsError: Unknown username or wrong password (same
                message either way)
        """
        participant = storage.get_participant_by_username(username.strip())
        hashed = participant.hashed_password if participant else None

        if not PasswordService.verify_password(password, hashed):
            logger.warning(f"Failed login attempt for username '{username}'")
            raise InvalidCredentialsError()

        if PasswordService.needs_rehash(participant.hashed_password):
            storage.update_participant(participant, hashed_password=PasswordService.hash_password(password))
            storage.commit()

        token = JWTHandler.create_access_token(
            participant_id=participant.id,
            username=participant.username,
            is_admin=participant.is_admin,
        )
        logger.info(f"Participant {participant.id} logged in")
        return LoginResult(access_token=token, participant=participant)

    def participant_from_token(self, storage: FundStorage, token: str) -> Participant:
        """
        Resolve an access token to the participant it was issued for.

        Raises:
            TokenExpiredError: If the token has expired
            InvalidCredentialsError: If the token is invalid or the participant is gone
        """
        payload = JWTHandler.validate_access_token(token)
        participant = storage.get_participant(JWTHandler.participant_id_from(payload))
        if participant is None:
            raise InvalidCredentialsError("Account no longer exists")
        return participant

    def create_admin(
        self,
        storage: FundStorage,
        username: str,
        password: str,
        first_name: str = "Fund",
        last_name: str = "Admin",
    ) -> Participant:
        """
        Create an admin account.

        Raises:
            ValidationError: If the password is too short
            UsernameExistsError: If the username is taken
        """
        if len(password) < 8:
            raise ValidationError("Admin password must be at least 8 characters", field="password")

        if storage.get_participant_by_username(username) is not None:
            raise UsernameExistsError(username)

        admin = storage.create_participant(
            username=username,
            hashed_password=PasswordService.hash_password(password),
            first_name=first_name,
            last_name=last_name,
            is_admin=True,
        )
        storage.commit()
        logger.info(f"Admin account '{username}' created")
        return admin
