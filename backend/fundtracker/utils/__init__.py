# backend/fundtracker/utils/__init__.py
"""
Utility modules for the Fund Tracker backend.

This package contains cross-cutting utilities used throughout the application:
- logging: Logging configuration and setup with correlation ID support
- context: Request context management for correlation IDs
- date_utils: Calendar helpers (weekdays of a month, period arithmetic)

Usage:
    from fundtracker.utils import setup_logging, get_logger
    from fundtracker.utils import get_correlation_id, set_correlation_id
    from fundtracker.utils.date_utils import weekdays_in_month
"""

from fundtracker.utils.context import (
    get_correlation_id,
    set_correlation_id,
    clear_correlation_id,
    get_request_context,
    set_request_context,
    clear_request_context,
)
from fundtracker.utils.logging import setup_logging, get_logger

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    # Context
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    "get_request_context",
    "set_request_context",
    "clear_request_context",
]
