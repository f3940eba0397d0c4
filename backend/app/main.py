"""
FastAPI application entry point.

Uses structured logging from core.logging module and validates the token
secrets before serving requests.
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.db import db
from core.logging import RequestLoggingMiddleware, api_logger, configure_logging
from core.security import SecurityConfigError, validate_security_config

from .config import get_settings
from .error_handlers import register_exception_handlers
from .middleware.request_id import RequestIDMiddleware
from .middleware.request_size import RequestSizeLimitMiddleware
from .routers import admin as admin_router
from .routers import auth as auth_router
from .routers import user as user_router

# Configure structured logging
settings = get_settings()
log_level = "DEBUG" if settings.debug else "INFO"
configure_logging(level=log_level)
logger = api_logger


def _is_production() -> bool:
    return os.getenv("ENV", "development").lower() in ("production", "prod")


def validate_security_on_startup() -> None:
    """
    Validate security configuration before starting the app.

    Failures are fatal unless DEBUG=true and ENV is not production.
    """
    try:
        result = validate_security_config(
            access_secret=settings.jwt_access_secret,
            refresh_secret=settings.jwt_refresh_secret,
            database_url=settings.database_url,
        )
        for warning in result.warnings:
            logger.warning("security_warning", message=warning)

        _, config_warnings = settings.validate_production_config()
        for warning in config_warnings:
            logger.warning("config_warning", message=warning)

        logger.info("security_validation_passed")
    except SecurityConfigError as e:
        for error in e.errors:
            logger.error("security_config_error", error=error)

        if settings.debug and not _is_production():
            logger.warning(
                "security_validation_skipped",
                message="Security validation bypassed (DEBUG=true and ENV!=production)",
            )
            return
        raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Validate configuration and prepare the database."""
    logger.info("app_startup", app_name=settings.app_name)

    validate_security_on_startup()

    db.initialize(settings.database_url)
    db.create_all_tables()

    health = db.health_check()
    if not health["healthy"]:
        logger.error("database_health_check_failed", error=health["error"])
        raise RuntimeError("Database unreachable. Check DATABASE_URL configuration.")
    logger.info("database_initialized", latency_ms=health["latency_ms"])

    yield

    logger.info("app_shutdown")


def create_app() -> FastAPI:
    # API is accessible at /api/v1/*
    api_prefix = f"{settings.api_prefix}/v1"

    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

    app.add_middleware(RequestSizeLimitMiddleware, max_size_mb=settings.max_request_size_mb)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
            "X-Request-ID",
        ],
        expose_headers=["X-Request-ID"],
    )

    # Request logging runs inside RequestIDMiddleware so request_id is bound
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    @app.get("/", tags=["health"])
    def root():
        """Health marker."""
        return {"success": True, "message": "API is running"}

    @app.get("/health", tags=["health"])
    def health_check():
        """
        Liveness probe.

        Returns minimal information to avoid exposing infrastructure details.
        """
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    def readiness_check():
        """
        Readiness probe: 200 when the database answers, 503 otherwise.
        """
        health = db.health_check()
        if not health["healthy"]:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "checks": {"database": False}},
            )
        return {"status": "ready", "checks": {"database": True}}

    app.include_router(auth_router.router, prefix=api_prefix)
    app.include_router(admin_router.router, prefix=api_prefix)
    app.include_router(user_router.router, prefix=api_prefix)

    return app


app = create_app()


def run() -> None:
    """Run the API with uvicorn (``domain-registry-api`` console script)."""
    import uvicorn

    uvicorn.run(
        "backend.app.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=settings.debug,
    )
