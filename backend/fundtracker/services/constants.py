# backend/fundtracker/services/constants.py
"""
Centralized constants for the Fund Tracker services.

Single source of truth for the business constants used across the
application, with the meaning and units of each value.

Usage:
    from fundtracker.services.constants import (
        OWNERSHIP_LIMIT,
        OWNERSHIP_TOLERANCE,
        RATE_LIMIT_WRITE,
    )
"""

from datetime import date
from decimal import Decimal


# =============================================================================
# UTILITY CONSTANTS
# =============================================================================

# Type-safe zero for Decimal comparisons
ZERO: Decimal = Decimal("0")

HUNDRED: Decimal = Decimal("100")


# =============================================================================
# OWNERSHIP ALLOCATION
# =============================================================================

# Participants' ownership in one period may add up to at most 100%
OWNERSHIP_LIMIT: Decimal = HUNDRED

# Slack allowed when comparing an ownership total to the limit.
# Rebalanced percentages are rounded to PERCENTAGE_PRECISION, so the sum of
# several of them can land a hair above 100.
OWNERSHIP_TOLERANCE: Decimal = Decimal("0.000001")


# =============================================================================
# DECIMAL PRECISION CONSTANTS
# =============================================================================

# Stored percentages and derived dollar amounts: 8 decimal places,
# matching the Numeric(*, 8) columns
PERCENTAGE_PRECISION: Decimal = Decimal("0.00000001")


# =============================================================================
# DEFAULT TRADING CALENDAR (NYSE, 2025 Q4)
# =============================================================================

DEFAULT_CALENDAR_YEAR: int = 2025
DEFAULT_CALENDAR_MONTHS: tuple[int, ...] = (10, 11, 12)

# Thanksgiving, Christmas
DEFAULT_CALENDAR_HOLIDAYS: frozenset[date] = frozenset({
    date(2025, 11, 27),
    date(2025, 12, 25),
})

# Early closes: day after Thanksgiving, Christmas Eve
DEFAULT_CALENDAR_HALF_DAYS: frozenset[date] = frozenset({
    date(2025, 11, 28),
    date(2025, 12, 24),
})

# Number of dates returned by the calendar status sample
CALENDAR_STATUS_SAMPLE_SIZE: int = 10


# =============================================================================
# RATE LIMITING CONSTANTS
# =============================================================================
# Format follows slowapi/limits syntax: "100/minute", "10/hour", etc.

# Read endpoints (GET requests)
RATE_LIMIT_DEFAULT: str = "100/minute"

# Write endpoints (POST, PUT, PATCH, DELETE)
RATE_LIMIT_WRITE: str = "30/minute"

# Rebalancing rewrites every participant of a period
RATE_LIMIT_REBALANCE: str = "10/minute"

# Health check endpoints, polled by monitoring
RATE_LIMIT_HEALTH: str = "300/minute"

# Ledger endpoints recompute a month per participant
RATE_LIMIT_LEDGER: str = "60/minute"

# Login: allows retries but slows brute force
RATE_LIMIT_AUTH_LOGIN: str = "10/minute"

