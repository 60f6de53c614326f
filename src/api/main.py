"""
FastAPI Application Setup

Main entry point for the geo matching API.

Responsibility:
    - FastAPI app initialization
    - Router registration (geo-matching)
    - CORS middleware configuration
    - Global exception handlers
    - Request logging middleware
    - Health check endpoint
    - Redis pool cleanup on shutdown

Architecture Notes:
    - Part of API Layer (Presentation)
    - Entry point for HTTP server (uvicorn)
    - Centralizes cross-cutting concerns (logging, CORS, error handling)
    - No business logic - pure HTTP orchestration

Contains:
    - create_app() factory function
    - Global exception handlers
    - Request logging middleware
    - Health check endpoint: GET /health
"""

import logging
import time
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.api.routers import geo_matching
from src.api.schemas.common import ErrorResponse
from src.application.exceptions import UpstreamStoreError
from src.domain.shared.exceptions import DomainException, InvalidCoordinateError
from src.infrastructure.persistence.redis import close_connections
from src.infrastructure.persistence.redis import health_check as redis_health_check
from src.infrastructure.persistence.store_factory import REDIS_BACKEND, store_backend

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


# ============================================================================
# RESPONSE MODELS
# ============================================================================


class HealthCheckResponse(BaseModel):
    """
    Health check response model.

    Attributes:
        status: Health status (always "ok" if endpoint responds)
        version: API version
        timestamp: Unix timestamp of health check
        store_backend: Configured zone/service store backend
        store_healthy: Redis answers PING (always True for the memory backend)
    """

    status: str = "ok"
    version: str = API_VERSION
    timestamp: float
    store_backend: str
    store_healthy: bool = True


# ============================================================================
# MIDDLEWARE
# ============================================================================


async def request_logging_middleware(request: Request, call_next):
    """
    Log method, path, status code and duration of every request.

    Logging Format:
        INFO: "Incoming request: POST /api/geo-matching/match"
        INFO: "Request completed: POST /api/geo-matching/match - 200 - 0.012s"
    """
    logger.info(f"Incoming request: {request.method} {request.url.path}")
    start_time = time.time()

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"Request completed: {request.method} {request.url.path} - "
        f"{response.status_code} - {duration:.3f}s"
    )
    return response


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


async def invalid_coordinate_handler(request: Request, exc: InvalidCoordinateError):
    """
    InvalidCoordinateError -> 422 Unprocessable Entity.

    Examples:
        >>> # POST /api/geo-matching/match {"latitude": 95, "longitude": 0}
        >>> # Returns: 422 {"code": "INVALID_COORDINATE",
        >>> #               "message": "InvalidCoordinateError: A valid latitude is required",
        >>> #               "details": {"field": "latitude", ...}}
    """
    error_response = ErrorResponse(
        code="INVALID_COORDINATE",
        message=str(exc),
        details={"field": exc.field, "exception_type": exc.__class__.__name__},
    )

    logger.warning(
        f"Invalid coordinate ({exc.field}): {exc.message} - "
        f"Request: {request.method} {request.url.path}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response.model_dump(),
    )


async def domain_exception_handler(request: Request, exc: DomainException):
    """Any other DomainException -> 400 Bad Request."""
    error_response = ErrorResponse(
        code=exc.__class__.__name__.replace("Error", "").upper(),
        message=str(exc),
        details={"exception_type": exc.__class__.__name__},
    )

    logger.warning(
        f"Domain exception: {exc.__class__.__name__} - {str(exc)} - "
        f"Request: {request.method} {request.url.path}"
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response.model_dump(),
    )


async def upstream_store_exception_handler(request: Request, exc: UpstreamStoreError):
    """
    UpstreamStoreError -> 502 Bad Gateway.

    The request is aborted as a whole; no partial matches are returned.
    """
    error_response = ErrorResponse(
        code="UPSTREAM_STORE_ERROR",
        message=exc.message,
        details={
            "store": exc.store,
            "error": str(exc.original_error) if exc.original_error else None,
        },
    )

    logger.error(
        f"Store failure ({exc.store}): {exc.message} - "
        f"Request: {request.method} {request.url.path}"
    )

    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=error_response.model_dump(),
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """
    Unexpected exceptions -> 500 Internal Server Error.

    Logs the full stack trace.
    """
    error_response = ErrorResponse(
        code="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        details={"error": str(exc), "type": exc.__class__.__name__},
    )

    logger.error(
        f"Unexpected error: {exc.__class__.__name__} - {str(exc)} - "
        f"Request: {request.method} {request.url.path}",
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(),
    )


# ============================================================================
# LIFESPAN
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release the shared Redis pool on shutdown."""
    yield
    await close_connections()


# ============================================================================
# APP FACTORY
# ============================================================================


def create_app() -> FastAPI:
    """
    FastAPI application factory.

    Configuration:
        - CORS: Allow all origins (development mode)
        - Routers: /api/geo-matching
        - Health: GET /health

    Usage:
        >>> app = create_app()
        >>> # uvicorn src.api.main:app --reload
    """
    app = FastAPI(
        title="Geo Matching API",
        version=API_VERSION,
        description=(
            "Matches coordinates against operational service zones and returns "
            "the ranked zones with the services offered in them."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Production: restrict to specific origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(request_logging_middleware)

    app.add_exception_handler(InvalidCoordinateError, invalid_coordinate_handler)
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(UpstreamStoreError, upstream_store_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(geo_matching.router, prefix="/api")

    @app.get(
        "/health",
        response_model=HealthCheckResponse,
        status_code=status.HTTP_200_OK,
        summary="Health check endpoint",
        description="Simple health check for monitoring and load balancers",
        tags=["health"],
    )
    async def health_check() -> HealthCheckResponse:
        """
        Examples:
            >>> curl http://localhost:8000/health
            {"status": "ok", "version": "0.1.0", "timestamp": 1704976800.123,
             "store_backend": "memory", "store_healthy": true}
        """
        backend = store_backend()
        store_healthy = await redis_health_check() if backend == REDIS_BACKEND else True
        return HealthCheckResponse(
            status="ok",
            version=API_VERSION,
            timestamp=time.time(),
            store_backend=backend,
            store_healthy=store_healthy,
        )

    logger.info("FastAPI application created successfully")
    logger.info("Registered routers: /api/geo-matching")

    return app


# Usage: uvicorn src.api.main:app --reload
app = create_app()
