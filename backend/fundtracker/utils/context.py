# backend/fundtracker/utils/context.py
"""
Request-scoped context for the Fund Tracker backend.

Holds the correlation ID of the request being served and a small dictionary
of extra request metadata (e.g. the authenticated participant id), so log
records emitted from services can be tied back to one HTTP call.

Backed by contextvars, which follow the request through threadpool
dispatch and async/await boundaries.

Usage:
    from fundtracker.utils.context import get_correlation_id, set_correlation_id

    set_correlation_id("abc-123")      # middleware
    get_correlation_id()               # anywhere else -> "abc-123"
"""

from contextvars import ContextVar
from typing import Any

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_request_context_var: ContextVar[dict[str, Any] | None] = ContextVar("request_context", default=None)


# =============================================================================
# CORRELATION ID
# =============================================================================

def get_correlation_id() -> str | None:
    """Return the correlation ID of the current request, or None outside a request."""
    return _correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    """
    Bind a correlation ID to the current request.

    Args:
        correlation_id: Identifier taken from the request headers or generated
    """
    _correlation_id_var.set(correlation_id)


def clear_correlation_id() -> None:
    """Unbind the correlation ID once the response has been produced."""
    _correlation_id_var.set(None)


# =============================================================================
# EXTRA REQUEST METADATA
# =============================================================================

def get_request_context() -> dict[str, Any]:
    """
    Return a copy of the metadata recorded for the current request.

    Returns:
        Dictionary of context values (empty when nothing was recorded)
    """
    return dict(_request_context_var.get() or {})


def set_request_context(key: str, value: Any) -> None:
    """
    Record one metadata value for the current request.

    Args:
        key: Context key (e.g. "participant_id")
        value: Context value
    """
    ctx = get_request_context()
    ctx[key] = value
    _request_context_var.set(ctx)


def clear_request_context() -> None:
    """Drop all metadata recorded for the current request."""
    _request_context_var.set(None)
