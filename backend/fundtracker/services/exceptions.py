# backend/fundtracker/services/exceptions.py
"""
Service layer exceptions.

These exceptions represent domain-specific errors and contain NO HTTP knowledge.
The global handlers in main.py map them to HTTP responses.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    │   ├── OwnershipAllocationError
    │   └── InvalidPeriodError
    ├── NotFoundError
    │   ├── ParticipantNotFoundError
    │   ├── FundReturnNotFoundError
    │   ├── DailyReturnNotFoundError
    │   ├── MonthlyValueNotFoundError
    │   └── TradingDayNotFoundError
    ├── ConflictError
    │   ├── UsernameExistsError
    │   └── DuplicateReturnError
    ├── StorageError
    ├── RebalanceError
    ├── AuthenticationError
    │   ├── InvalidCredentialsError
    │   └── TokenExpiredError
    └── AuthorizationError
        └── PermissionDeniedError
"""

from datetime import date
from decimal import Decimal


class ServiceError(Exception):
    """
    Base exception for all service layer errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ServiceError):
    """
    Raised when input validation fails.

    This is for programmatic validation errors (invalid parameters, business
    rule violations), NOT for request payload validation which is handled
    by Pydantic.

    Attributes:
        field: The field that failed validation (optional)
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class OwnershipAllocationError(ValidationError):
    """
    Raised when a write would push a period's ownership total above 100%.

    Attributes:
        year, month: The period being allocated
        total: The ownership total the write would produce
        limit: The maximum allowed total
    """

    def __init__(self, year: int, month: int, total: Decimal, limit: Decimal = Decimal("100")) -> None:
        self.year = year
        self.month = month
        self.total = total
        self.limit = limit
        super().__init__(
            f"Ownership for {year}-{month:02d} would total {total:.4f}%, "
            f"which exceeds {limit}%",
            field="ownership_percentage",
        )


class InvalidPeriodError(ValidationError):
    """Raised when a (year, month) pair is not a real calendar month."""

    def __init__(self, year: int, month: int) -> None:
        self.year = year
        self.month = month
        super().__init__(f"Invalid period: {year}-{month}", field="month")


# =============================================================================
# NOT FOUND ERRORS
# =============================================================================


class NotFoundError(ServiceError):
    """
    Base exception for resource not found errors.

    Attributes:
        resource_type: Type of resource (e.g., "Participant", "FundReturn")
        resource_id: Identifier of the resource
    """

    def __init__(
            self,
            message: str,
            resource_type: str | None = None,
            resource_id: int | str | None = None,
    ) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(message)


class ParticipantNotFoundError(NotFoundError):
    """Raised when a participant cannot be found."""

    def __init__(self, participant_id: int) -> None:
        self.participant_id = participant_id
        super().__init__(
            f"Participant {participant_id} not found",
            resource_type="Participant",
            resource_id=participant_id,
        )


class FundReturnNotFoundError(NotFoundError):
    """Raised when a fund return entry cannot be found."""

    def __init__(self, return_id: int) -> None:
        super().__init__(
            f"Fund return {return_id} not found",
            resource_type="FundReturn",
            resource_id=return_id,
        )


class DailyReturnNotFoundError(NotFoundError):
    """Raised when a participant daily return entry cannot be found."""

    def __init__(self, return_id: int) -> None:
        super().__init__(
            f"Daily return {return_id} not found",
            resource_type="DailyReturn",
            resource_id=return_id,
        )


class MonthlyValueNotFoundError(NotFoundError):
    """Raised when no monthly override exists for (participant, year, month)."""

    def __init__(self, participant_id: int, year: int, month: int) -> None:
        super().__init__(
            f"No monthly value for participant {participant_id} in {year}-{month:02d}",
            resource_type="MonthlyValue",
            resource_id=f"{participant_id}:{year}-{month:02d}",
        )


class TradingDayNotFoundError(NotFoundError):
    """Raised when a date is not on the trading calendar."""

    def __init__(self, day: date) -> None:
        super().__init__(
            f"{day.isoformat()} is not on the trading calendar",
            resource_type="TradingDay",
            resource_id=day.isoformat(),
        )


# =============================================================================
# CONFLICT ERRORS
# =============================================================================


class ConflictError(ServiceError):
    """Raised when a write collides with an existing record."""
    pass


class UsernameExistsError(ConflictError):
    """Raised when creating a participant with a username already in use."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"Username '{username}' already exists")


class DuplicateReturnError(ConflictError):
    """Raised when a fund return already exists for a date."""

    def __init__(self, day: date) -> None:
        self.date = day
        super().__init__(f"A fund return already exists for {day.isoformat()}")


# =============================================================================
# STORAGE / BATCH ERRORS
# =============================================================================


class StorageError(ServiceError):
    """
    Raised when the underlying persistence call fails.

    Attributes:
        operation: Name of the storage operation that failed
    """

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Storage operation '{operation}' failed: {reason}")


class RebalanceError(ServiceError):
    """
    Raised when an ownership rebalance could not be completed.

    Attributes:
        failed_participant_id: Participant whose update failed
        rolled_back: True if no participant was changed
    """

    def __init__(self, message: str, failed_participant_id: int | None, rolled_back: bool) -> None:
        self.failed_participant_id = failed_participant_id
        self.rolled_back = rolled_back
        super().__init__(message)


# =============================================================================
# AUTHENTICATION / AUTHORIZATION
# =============================================================================


class AuthenticationError(ServiceError):
    """Base exception for authentication failures."""
    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when username/password or token is invalid."""

    def __init__(self, message: str = "Invalid username or password") -> None:
        super().__init__(message)


class TokenExpiredError(AuthenticationError):
    """Raised when an access token has expired."""

    def __init__(self, message: str = "Token has expired") -> None:
        super().__init__(message)


class AuthorizationError(ServiceError):
    """Base exception for authorization failures."""
    pass


class PermissionDeniedError(AuthorizationError):
    """
    Raised when an authenticated participant is not allowed to do something.

    Attributes:
        action: What was attempted
    """

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"Permission denied: {action} requires an admin account")


__all__ = [
    "ServiceError",
    "ValidationError",
    "OwnershipAllocationError",
    "InvalidPeriodError",
    "NotFoundError",
    "ParticipantNotFoundError",
    "FundReturnNotFoundError",
    "DailyReturnNotFoundError",
    "MonthlyValueNotFoundError",
    "TradingDayNotFoundError",
    "ConflictError",
    "UsernameExistsError",
    "DuplicateReturnError",
    "StorageError",
    "RebalanceError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "TokenExpiredError",
    "AuthorizationError",
    "PermissionDeniedError",
]
