# backend/fundtracker/schemas/validators.py
"""
Reusable validation functions for Pydantic schemas.

This module provides:
- Username validation and normalization
- Strict ISO 8601 date parsing (YYYY-MM-DD only)
- Person name normalization

These validators ensure consistent input handling across all schemas.
"""

import re
from datetime import date
from typing import Any

# =============================================================================
# CONSTANTS
# =============================================================================

# Username: 3-50 chars, starts with a letter, then letters, digits, . _ -
USERNAME_PATTERN = re.compile(r'^[a-z][a-z0-9._-]{2,49}$')

ISO_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


# =============================================================================
# USERNAME VALIDATION
# =============================================================================

def validate_username(value: str) -> str:
    """
    Validate and normalize a username.

    Returns:
        Normalized username (lowercase, trimmed)

    Raises:
        ValueError: If the username format is invalid
    """
    if not value:
        raise ValueError("Username cannot be empty")

    normalized = value.strip().lower()

    if not USERNAME_PATTERN.match(normalized):
        raise ValueError(
            f"Invalid username: '{normalized}'. Usernames are 3-50 characters, "
            "start with a letter and contain only letters, digits, '.', '_' or '-'"
        )

    return normalized


def normalize_name(value: str) -> str:
    """Trim surrounding whitespace and collapse inner runs of spaces."""
    return " ".join(value.split())


# =============================================================================
# DATE VALIDATION
# =============================================================================

def validate_iso_date(value: Any) -> Any:
    """
    Accept only zero-padded YYYY-MM-DD strings (or date objects).

    Run as a mode="before" validator so Pydantic's lenient parsing
    (timestamps, datetimes) never applies to ledger dates.

    Raises:
        ValueError: If a string is not in YYYY-MM-DD form
    """
    if isinstance(value, date):
        return value
    if isinstance(value, str) and ISO_DATE_PATTERN.match(value.strip()):
        return value.strip()
    raise ValueError("Dates must be formatted as YYYY-MM-DD")
