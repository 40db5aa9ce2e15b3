# backend/fundtracker/routers/auth.py
"""
Authentication endpoints.

Provides:
- POST /auth/login - Login with username/password
- GET /auth/me - Get the current participant's profile

Access tokens are short-lived JWTs returned in the response body. There are
no refresh tokens: clients log in again when the token expires.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from fundtracker.dependencies import get_auth_service, get_current_participant, get_storage
from fundtracker.middleware.rate_limit import limiter, RATE_LIMIT_AUTH_LOGIN
from fundtracker.models import Participant
from fundtracker.schemas.auth import LoginRequest, TokenResponse
from fundtracker.schemas.participants import ParticipantResponse
from fundtracker.services.auth import AuthService
from fundtracker.services.protocols import FundStorage

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with username and password",
    description="Authenticate and receive a bearer access token with the participant profile.",
)
@limiter.limit(RATE_LIMIT_AUTH_LOGIN)
def login(
    data: LoginRequest,
    request: Request,
    storage: Annotated[FundStorage, Depends(get_storage)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """Login with username and password."""
    result = auth_service.login(storage, data.username, data.password)

    return TokenResponse(
        access_token=result.access_token,
        token_type=result.token_type,
        expires_in=result.expires_in,
        participant=ParticipantResponse.model_validate(result.participant),
    )


@router.get(
    "/me",
    response_model=ParticipantResponse,
    summary="Current participant",
)
def get_me(
    participant: Annotated[Participant, Depends(get_current_participant)],
) -> Participant:
    return participant
