# backend/fundtracker/middleware/__init__.py
"""
Middleware components for the Fund Tracker backend.

This package contains ASGI middleware for:
- Correlation ID tracking for request tracing
- Rate limiting for API protection

Usage:
    from fundtracker.middleware import CorrelationIdMiddleware, limiter

    app.add_middleware(CorrelationIdMiddleware)
    app.state.limiter = limiter
"""

from fundtracker.middleware.correlation import CorrelationIdMiddleware
from fundtracker.middleware.rate_limit import (
    limiter,
    rate_limit_exceeded_handler,
    SlowAPIMiddleware,
    RATE_LIMIT_DEFAULT,
    RATE_LIMIT_WRITE,
    RATE_LIMIT_REBALANCE,
    RATE_LIMIT_HEALTH,
    RATE_LIMIT_LEDGER,
    RATE_LIMIT_AUTH_LOGIN,
)

__all__ = [
    "CorrelationIdMiddleware",
    "limiter",
    "rate_limit_exceeded_handler",
    "SlowAPIMiddleware",
    "RATE_LIMIT_DEFAULT",
    "RATE_LIMIT_WRITE",
    "RATE_LIMIT_REBALANCE",
    "RATE_LIMIT_HEALTH",
    "RATE_LIMIT_LEDGER",
    "RATE_LIMIT_AUTH_LOGIN",
]
