# app/main.py

"""Posts API - CRUD endpoints for blog posts on FastAPI and SQLModel."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.status import HTTP_200_OK, HTTP_503_SERVICE_UNAVAILABLE

from app.configs import settings
from app.db import check_db
from app.errors import (
    DatabaseError,
    database_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.managers import limiter, rate_limit_exceeded_handler
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.monitoring import configure_logging
from app.routes import posts_router
from app.schemas import HealthCheckResponse, ServicesStatus
from app.utils.helpers import today_str

configure_logging()

app = FastAPI(
    title=settings.APP_NAME,
    description="Blog posts API: create, list, read, update and delete posts",
    version="1.0.0",
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.include_router(posts_router)

errors = [
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (DatabaseError, database_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (Exception, unhandled_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "ok",
                        "timestamp": "2026-01-01 10:00:00",
                        "services": {"database": "healthy"},
                    },
                },
            },
        },
        503: {"description": "Database unreachable"},
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> ORJSONResponse:
    """
    Health check endpoint.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    ORJSONResponse
        Version, status and database connectivity. 503 when the database is down.
    """
    db_ok = await check_db()
    health = HealthCheckResponse(
        version=app.version,
        status="ok" if db_ok else "degraded",
        timestamp=today_str(),
        services=ServicesStatus(database="healthy" if db_ok else "unhealthy"),
    )
    return ORJSONResponse(
        content=health.model_dump(),
        status_code=HTTP_200_OK if db_ok else HTTP_503_SERVICE_UNAVAILABLE,
    )


if __name__ == "__main__":
    from uvicorn import run

    run(app, host="127.0.0.1", port=8000, log_level="info")
