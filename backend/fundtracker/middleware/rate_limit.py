# backend/fundtracker/middleware/rate_limit.py
"""
Rate limiting for API protection, using slowapi.

Limits are defined in fundtracker/services/constants.py per endpoint type
(read, write, rebalance, ledger, login). Clients are keyed by IP address.
Storage is in-memory, which suits the single-instance deployment.

Rate limiting is switched off with RATE_LIMIT_ENABLED=false and is always
off in the test environment.

Usage:
    from fundtracker.middleware.rate_limit import limiter, RATE_LIMIT_WRITE

    @router.post("/fund-returns")
    @limiter.limit(RATE_LIMIT_WRITE)
    def add_fund_return(request: Request, ...):
        ...
"""

import logging

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from fundtracker.config import settings
from fundtracker.services.constants import (
    RATE_LIMIT_DEFAULT,
    RATE_LIMIT_WRITE,
    RATE_LIMIT_REBALANCE,
    RATE_LIMIT_HEALTH,
    RATE_LIMIT_LEDGER,
    RATE_LIMIT_AUTH_LOGIN,
)

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60


def _is_trusted_proxy(request: Request) -> bool:
    """True if X-Forwarded-For style headers on this request can be believed."""
    if settings.trust_proxy_headers:
        return True

    return get_remote_address(request) in settings.trusted_proxy_ips


def _get_client_ip(request: Request) -> str:
    """
    Extract client IP address from request.

    Forwarded headers are only honoured when the immediate peer is a trusted
    proxy, so clients cannot pick their own rate-limit bucket.
    """
    if _is_trusted_proxy(request):
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            # First entry is the original client
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

    return get_remote_address(request)


# =============================================================================
# LIMITER INSTANCE
# =============================================================================

limiter = Limiter(
    key_func=_get_client_ip,
    default_limits=[RATE_LIMIT_DEFAULT],
    enabled=settings.rate_limit_enabled,
)


# =============================================================================
# RATE LIMIT EXCEEDED HANDLER
# =============================================================================

async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """
    Return 429 in the same {error, message, details} shape as other API errors,
    with a Retry-After header.
    """
    limit_info = str(exc.detail) if exc.detail else "Rate limit exceeded"

    logger.warning(f"Rate limit exceeded for {_get_client_ip(request)}: {limit_info}")

    return JSONResponse(
        status_code=429,
        content={
            "error": "RateLimitError",
            "message": f"Too many requests. {limit_info}",
            "details": {"retry_after": DEFAULT_RETRY_AFTER_SECONDS},
        },
        headers={"Retry-After": str(DEFAULT_RETRY_AFTER_SECONDS)},
    )


__all__ = [
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
