# backend/fundtracker/middleware/correlation.py
"""
Correlation ID middleware for request tracing.

For every request the middleware:
1. Takes the ID from X-Correlation-ID, then X-Request-ID, or generates a UUID
2. Binds it to the request context so every log line carries it
3. Echoes it back in the X-Correlation-ID response header

Client Usage:
    curl -H "X-Correlation-ID: my-trace-123" http://localhost:8000/health
    # X-Correlation-ID: my-trace-123
"""

import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from fundtracker.utils.context import (
    set_correlation_id,
    clear_correlation_id,
    clear_request_context,
)

CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

# Incoming IDs longer than this are replaced with a fresh UUID
MAX_CORRELATION_ID_LENGTH = 128


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Bind a correlation ID to each request and return it in the response headers."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
    ) -> Response:
        correlation_id = self._get_correlation_id(request)
        set_correlation_id(correlation_id)

        try:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = correlation_id
            return response
        finally:
            clear_correlation_id()
            clear_request_context()

    def _get_correlation_id(self, request: Request) -> str:
        """
        Extract correlation ID from request headers or generate a new one.

        Checks headers in order:
        1. X-Correlation-ID
        2. X-Request-ID
        3. Generate new UUID
        """
        for header in (CORRELATION_ID_HEADER, REQUEST_ID_HEADER):
            value = request.headers.get(header)
            if value and len(value) <= MAX_CORRELATION_ID_LENGTH:
                return value

        return str(uuid.uuid4())
