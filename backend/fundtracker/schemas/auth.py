# backend/fundtracker/schemas/auth.py
"""
Authentication request/response schemas.

Defines Pydantic models for:
- Login
- Token responses
"""

from pydantic import BaseModel, Field

from fundtracker.schemas.participants import ParticipantResponse


class LoginRequest(BaseModel):
    """Request body for login."""

    username: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Participant's username",
        examples=["jdoe"],
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Participant's password",
    )


class TokenResponse(BaseModel):
    """Access token issued at login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer")
    expires_in: int = Field(..., description="Seconds until the token expires")
    participant: ParticipantResponse
