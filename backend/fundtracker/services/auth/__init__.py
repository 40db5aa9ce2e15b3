# backend/fundtracker/services/auth/__init__.py
"""
Authentication services for the Fund Tracker.

This module provides:
- Password hashing and verification (bcrypt)
- JWT access token creation and validation
- Login and token resolution (AuthService)

Usage:
    from fundtracker.services.auth import AuthService, PasswordService, JWTHandler

    hashed = PasswordService.hash_password("s3cret-pass")
    token = JWTHandler.create_access_token(participant_id=1, username="admin", is_admin=True)
    payload = JWTHandler.validate_access_token(token)
"""

from fundtracker.services.auth.password import PasswordService
from fundtracker.services.auth.jwt_handler import JWTHandler
from fundtracker.services.auth.service import AuthService, LoginResult

__all__ = [
    "PasswordService",
    "JWTHandler",
    "AuthService",
    "LoginResult",
]
