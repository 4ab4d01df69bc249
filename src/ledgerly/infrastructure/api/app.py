"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
exception handlers and lifecycle handlers.
"""

import time
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ledgerly.core.config import get_settings
from ledgerly.core.exceptions import AuthenticationError, LedgerlyError, PersistenceError
from ledgerly.core.logging import (
    LoggingContext,
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)
from ledgerly.domain.services import PermissionSnapshotCache
from ledgerly.infrastructure.persistence.database import (
    close_database,
    get_db_manager,
    init_database,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging, initializes the database (tables, system roles,
    bootstrap admin) on startup and closes it on shutdown.
    """
    settings = get_settings()
    configure_logging(settings)

    logger.info(
        "Starting Ledgerly",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    try:
        await init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down Ledgerly")
    await close_database()
    logger.info("Database connection closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Small-business accounting dashboard with role-based page access",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    # Per-role permission snapshots shared by all requests
    app.state.snapshot_cache = PermissionSnapshotCache(
        ttl_seconds=settings.permission_cache_ttl_seconds
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register health check endpoints."""

    @app.get("/health", tags=["health"])
    async def health_check():
        """Basic health check. Does not touch the database."""
        return {
            "status": "healthy",
            "service": "Ledgerly",
            "version": get_settings().app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check():
        """Readiness check, including database connectivity."""
        db_healthy = await get_db_manager().check_connection()

        if db_healthy:
            return {
                "status": "ready",
                "service": "Ledgerly",
                "version": get_settings().app_version,
                "database": "connected",
            }
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "service": "Ledgerly",
                "database": "disconnected",
            },
        )

    @app.get("/live", tags=["health"])
    async def liveness_check():
        return {
            "status": "alive",
            "service": "Ledgerly",
            "version": get_settings().app_version,
        }


def register_routes(app: FastAPI) -> None:
    """Register API routes under the configured prefix."""
    from ledgerly.infrastructure.api.routes import (
        admin_roles_router,
        admin_router,
        admin_users_router,
        auth_router,
        customers_router,
        dashboard_router,
        expenses_router,
        invoices_router,
        permissions_router,
        products_router,
        transactions_router,
        vendors_router,
    )

    prefix = get_settings().api_prefix

    app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["auth"])
    app.include_router(permissions_router, prefix=f"{prefix}/permissions", tags=["permissions"])

    # Admin console
    app.include_router(admin_router, prefix=f"{prefix}/admin", tags=["admin"])
    app.include_router(admin_roles_router, prefix=f"{prefix}/admin/roles", tags=["admin"])
    app.include_router(admin_users_router, prefix=f"{prefix}/admin/users", tags=["admin"])

    # Accounting pages
    app.include_router(dashboard_router, prefix=f"{prefix}/dashboard", tags=["dashboard"])
    app.include_router(customers_router, prefix=f"{prefix}/customers", tags=["customers"])
    app.include_router(vendors_router, prefix=f"{prefix}/vendors", tags=["vendors"])
    app.include_router(products_router, prefix=f"{prefix}/products", tags=["products"])
    app.include_router(expenses_router, prefix=f"{prefix}/expenses", tags=["expenses"])
    app.include_router(
        transactions_router, prefix=f"{prefix}/transactions", tags=["transactions"]
    )
    app.include_router(invoices_router, prefix=f"{prefix}/invoices", tags=["invoices"])

    @app.get(prefix, tags=["root"])
    async def api_root():
        """API root endpoint."""
        settings = get_settings()
        return {
            "name": settings.app_name,
            "version": settings.app_version,
        }


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Every LedgerlyError becomes `{"error": ..., "detail": ...}` with the
    error's status code. Request validation failures are reported as 400.
    """

    @app.exception_handler(LedgerlyError)
    async def ledgerly_error_handler(request: Request, exc: LedgerlyError):
        detail = exc.message
        if isinstance(exc, PersistenceError):
            logger.error(
                "Persistence failure",
                path=str(request.url.path),
                method=request.method,
                error=exc.message,
                cause=str(exc.__cause__) if exc.__cause__ else None,
            )
            if exc.__cause__ is not None and get_settings().debug:
                detail = f"{exc.message}: {exc.__cause__}"

        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.error, "detail": detail},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"] if part != "body"),
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        logger.info("Request validation failed", path=str(request.url.path), errors=len(errors))
        return JSONResponse(
            status_code=400,
            content={
                "error": "Validation error",
                "detail": errors[0]["message"] if errors else "Invalid request",
                "field_errors": errors,
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc) if get_settings().debug else "An unexpected error occurred",
            },
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware."""

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Bind a correlation ID for the request and log its outcome and duration."""
        correlation_id = request.headers.get("X-Correlation-ID") or f"cid_{uuid.uuid4().hex[:12]}"
        bind_correlation_id(correlation_id)
        started = time.perf_counter()

        try:
            with LoggingContext(method=request.method, path=request.url.path):
                response = await call_next(request)
                logger.info(
                    "Request handled",
                    status_code=response.status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 1),
                )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


# Create the application instance
app = create_app()
