# backend/fundtracker/main.py
"""
FastAPI application entry point.

This file:
- Configures application-wide logging
- Creates the FastAPI application
- Registers global exception handlers
- Registers all routers
- Defines global endpoints (health checks)
"""

import logging

from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fundtracker.config import settings
from fundtracker.database import get_db
from fundtracker.middleware import (
    CorrelationIdMiddleware,
    limiter,
    rate_limit_exceeded_handler,
    SlowAPIMiddleware,
    RATE_LIMIT_HEALTH,
)
from fundtracker.routers import (
    auth_router,
    participants_router,
    fund_returns_router,
    daily_returns_router,
    calendar_router,
    ledger_router,
    ownership_router,
    fund_settings_router,
)
from fundtracker.schemas.errors import ErrorDetail, ValidationErrorDetail
from fundtracker.services.exceptions import (
    ServiceError,
    ValidationError,
    OwnershipAllocationError,
    NotFoundError,
    ConflictError,
    StorageError,
    RebalanceError,
    AuthenticationError,
    AuthorizationError,
    PermissionDeniedError,
)
from fundtracker.services.storage import SqlAlchemyFundStorage
from fundtracker.services.trading_calendar import TradingCalendarService
from fundtracker.utils import setup_logging

logger = logging.getLogger(__name__)

# =============================================================================
# LOGGING SETUP (must be before app creation)
# =============================================================================

setup_logging()

# =============================================================================
# APPLICATION SETUP
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Multi-participant fund tracking: returns, ownership and monthly ledgers",
    version="0.1.0",
)


# =============================================================================
# CORS MIDDLEWARE
# =============================================================================
# Origins are configured via CORS_ORIGINS environment variable

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)


# =============================================================================
# MIDDLEWARE (order matters: last added = first executed)
# =============================================================================

# Attach limiter to app state (required by slowapi)
app.state.limiter = limiter

app.add_middleware(SlowAPIMiddleware)

# Correlation IDs are extracted/generated here and echoed in response headers
app.add_middleware(CorrelationIdMiddleware)


# =============================================================================
# GLOBAL EXCEPTION HANDLERS
# =============================================================================
# Service-layer exceptions carry no HTTP knowledge. These handlers map them
# to consistent ErrorDetail responses. Starlette picks the handler of the
# most specific class in the exception's MRO.
# =============================================================================

app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


@app.exception_handler(OwnershipAllocationError)
async def ownership_allocation_handler(
    request: Request, exc: OwnershipAllocationError
) -> JSONResponse:
    """Handle over-allocated ownership writes (400)."""
    logger.warning(f"Ownership over-allocation rejected: {exc}")
    return JSONResponse(
        status_code=400,
        content=ErrorDetail(
            error="OwnershipAllocationError",
            message=str(exc),
            details={
                "year": exc.year,
                "month": exc.month,
                "total": str(exc.total),
                "limit": str(exc.limit),
            },
        ).model_dump(),
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handle service-level validation errors (400)."""
    logger.warning(f"Validation error: {exc}")
    return JSONResponse(
        status_code=400,
        content=ErrorDetail(
            error=exc.__class__.__name__,
            message=str(exc),
            details={"field": exc.field} if exc.field else None,
        ).model_dump(),
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Handle missing resources (404)."""
    logger.info(f"Not found: {exc}")
    return JSONResponse(
        status_code=404,
        content=ErrorDetail(
            error=exc.__class__.__name__,
            message=str(exc),
            details={
                "resource_type": exc.resource_type,
                "resource_id": exc.resource_id,
            },
        ).model_dump(),
    )


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    """Handle duplicate usernames and duplicate fund returns (409)."""
    logger.warning(f"Conflict: {exc}")
    return JSONResponse(
        status_code=409,
        content=ErrorDetail(
            error=exc.__class__.__name__,
            message=str(exc),
            details=None,
        ).model_dump(),
    )


@app.exception_handler(RebalanceError)
async def rebalance_error_handler(request: Request, exc: RebalanceError) -> JSONResponse:
    """Handle failed ownership rebalances (500)."""
    logger.error(f"Rebalance failed: {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorDetail(
            error="RebalanceError",
            message=str(exc),
            details={
                "failed_participant_id": exc.failed_participant_id,
                "rolled_back": exc.rolled_back,
            },
        ).model_dump(),
    )


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    """Handle persistence failures (500)."""
    logger.error(f"Storage error in {exc.operation}: {exc.reason}")
    return JSONResponse(
        status_code=500,
        content=ErrorDetail(
            error="StorageError",
            message="A database operation failed",
            details={"operation": exc.operation},
        ).model_dump(),
    )


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(
    request: Request, exc: AuthenticationError
) -> JSONResponse:
    """Handle authentication errors (401)."""
    logger.warning(f"Authentication error: {exc}")
    return JSONResponse(
        status_code=401,
        content=ErrorDetail(
            error=exc.__class__.__name__,
            message=str(exc),
            details=None,
        ).model_dump(),
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(PermissionDeniedError)
async def permission_denied_handler(
    request: Request, exc: PermissionDeniedError
) -> JSONResponse:
    """Handle permission denied errors (403)."""
    return JSONResponse(
        status_code=403,
        content=ErrorDetail(
            error="PermissionDeniedError",
            message=str(exc),
            details={"action": exc.action},
        ).model_dump(),
    )


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(
    request: Request, exc: AuthorizationError
) -> JSONResponse:
    """Handle generic authorization errors (403)."""
    return JSONResponse(
        status_code=403,
        content=ErrorDetail(
            error="AuthorizationError",
            message=str(exc),
            details=None,
        ).model_dump(),
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Catch-all for service errors without a dedicated handler (500)."""
    logger.error(f"Unhandled service error: {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorDetail(
            error="ServiceError",
            message=str(exc),
            details=None,
        ).model_dump(),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Handle all HTTPExceptions with consistent error format.

    Converts FastAPI's default {"detail": "..."} format to our standard
    ErrorDetail format for API consistency.
    """
    error_types = {
        400: "BadRequestError",
        401: "UnauthorizedError",
        403: "ForbiddenError",
        404: "NotFoundError",
        405: "MethodNotAllowedError",
        409: "ConflictError",
        422: "ValidationError",
        429: "RateLimitError",
        500: "InternalServerError",
        503: "ServiceUnavailableError",
    }
    error_type = error_types.get(exc.status_code, "HTTPError")

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorDetail(
            error=error_type,
            message=str(exc.detail) if exc.detail else "An error occurred",
            details=None,
        ).model_dump(),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors with consistent format.

    Converts the default 422 validation error to our ValidationErrorDetail format.
    """
    errors = []
    for error in exc.errors():
        errors.append({
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        })

    return JSONResponse(
        status_code=422,
        content=ValidationErrorDetail(
            error="ValidationError",
            message="Request validation failed",
            details=errors,
        ).model_dump(),
    )


# =============================================================================
# ROUTER REGISTRATION
# =============================================================================

app.include_router(auth_router)  # /auth/*
app.include_router(participants_router)  # /participants/* (+ monthly values)
app.include_router(fund_returns_router)  # /fund-returns/*
app.include_router(daily_returns_router)  # /daily-returns/*
app.include_router(calendar_router)  # /calendar/*
app.include_router(ledger_router)  # /ledger/*
app.include_router(ownership_router)  # /ownership/*
app.include_router(fund_settings_router)  # /fund-settings/


# =============================================================================
# GLOBAL ENDPOINTS
# =============================================================================

@app.get("/", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def root(request: Request):
    """
    API root - returns basic application info.
    """
    return {
        "message": f"Welcome to {settings.app_name}!",
        "docs": "/docs",
        "redoc": "/redoc",
    }


@app.get("/health", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def health_check(request: Request, db: Session = Depends(get_db)):
    """
    Comprehensive health check endpoint.

    Returns HTTP 503 if the database is unhealthy.
    Returns HTTP 200 with degraded status if the trading calendar is empty
    (ledgers still work, falling back to weekdays).

    **Response Status Codes:**
    - 200: All systems healthy, or non-critical systems degraded
    - 503: Database unhealthy - do not route traffic here
    """
    checks = {}
    critical_healthy = True
    overall_status = "healthy"

    # Check 1: Database (CRITICAL)
    try:
        db.execute(text("SELECT 1"))
        checks["database"] = {
            "status": "healthy",
            "critical": True,
        }
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        checks["database"] = {
            "status": "unhealthy",
            "critical": True,
            "error": str(e),
        }
        critical_healthy = False
        overall_status = "unhealthy"

    # Check 2: Trading calendar seeded - NON-CRITICAL
    if critical_healthy:
        try:
            calendar = TradingCalendarService().calendar_status(SqlAlchemyFundStorage(db))
            checks["trading_calendar"] = {
                "status": "healthy" if calendar.is_initialized else "degraded",
                "critical": False,
                "total_days": calendar.total_days,
            }
            if not calendar.is_initialized:
                overall_status = "degraded"
        except StorageError as e:
            logger.warning(f"Trading calendar health check failed: {e}")
            checks["trading_calendar"] = {
                "status": "unknown",
                "critical": False,
                "error": str(e),
            }

    response_data = {
        "status": overall_status,
        "checks": checks,
    }

    if not critical_healthy:
        return JSONResponse(
            status_code=503,
            content=response_data,
        )

    return response_data


@app.get("/health/live", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def liveness_check(request: Request):
    """
    Liveness probe endpoint.

    Returns HTTP 200 if the application is running. Does NOT check
    dependencies - use /health/ready for that.
    """
    return {"status": "alive"}


@app.get("/health/ready", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def readiness_check(request: Request, db: Session = Depends(get_db)):
    """
    Readiness probe endpoint.

    Returns HTTP 200 if the database is reachable, HTTP 503 otherwise.
    """
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ready"}
    except SQLAlchemyError as e:
        logger.error(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "error": "Database unavailable",
            },
        )
