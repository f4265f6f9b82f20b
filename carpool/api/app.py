"""
FastAPI application factory.

* Registers routes for rides and admin.
* Maps ``RideServiceError`` categories to HTTP status codes.
* Disposes of the database engine on shutdown.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from carpool.api.middleware import limiter
from carpool.api.routes import admin, rides
from carpool.api.schemas import ErrorResponse
from carpool.config import settings
from carpool.domain.enums import FailureCategory
from carpool.domain.errors import RideServiceError
from carpool.infrastructure.database import engine

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

STATUS_BY_CATEGORY: dict[FailureCategory, int] = {
    FailureCategory.NOT_FOUND: 404,
    FailureCategory.VALIDATION_ERROR: 422,
    FailureCategory.FORBIDDEN: 403,
    FailureCategory.STATE_CONFLICT: 409,
    FailureCategory.CONTENTION: 409,
    FailureCategory.STORE_UNAVAILABLE: 503,
}


async def ride_service_error_handler(
    request: Request, exc: RideServiceError
) -> JSONResponse:
    status_code = STATUS_BY_CATEGORY.get(exc.category, 500)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=str(exc), code=exc.code).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release pooled connections on shutdown."""
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Carpool Ride Lifecycle API",
        description=(
            "Manages shared rides between a driver and passengers: seat "
            "booking against a fixed seat pool, the WAITING -> EN_ROUTE -> "
            "FINISHED | CRASHED lifecycle, and per-participant feedback.  "
            "Concurrent writes are resolved with optimistic versioning."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Domain errors
    app.add_exception_handler(RideServiceError, ride_service_error_handler)

    # Routers
    app.include_router(rides.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
