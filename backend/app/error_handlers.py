"""
Custom exception handlers for FastAPI.

Every error leaves the API as ``{"success": false, "message": ...}``.

Security:
- Request IDs are logged server-side for tracing but NOT exposed in bodies
- Generic error messages for 500 errors to prevent information disclosure
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.exceptions import AppError, InternalError
from core.logging import get_logger
import structlog

logger = get_logger("backend.errors")


def _get_request_id() -> str:
    """
    Get the current request ID from context.

    Used for server-side logging only - NOT exposed to clients.
    """
    try:
        ctx = structlog.contextvars.get_contextvars()
        return ctx.get("request_id", "-")
    except Exception:
        return "-"


def _response_payload(message: str) -> dict:
    return {
        "success": False,
        "message": message,
    }


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        log_method = logger.error if exc.status_code >= 500 else logger.info
        log_method(
            "app_error",
            error_type=type(exc).__name__,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
            request_id=_get_request_id(),
        )
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload(exc.message),
            headers=headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(
            "http_exception",
            detail=exc.detail,
            status_code=exc.status_code,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Malformed JSON or wrongly typed parameters are client errors (400)
        logger.warning(
            "request_validation_error",
            errors=exc.errors(),
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=400,
            content=_response_payload("invalid request"),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        # Log full details server-side; the client only sees a generic message
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=500,
            content=_response_payload(InternalError().message),
        )
