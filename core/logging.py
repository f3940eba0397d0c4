"""
Structured logging for the Domain Registry API and CLI.

Events are snake_case names with keyword fields:

    logger = get_logger("domains")
    logger.info("domain_added", user_id=str(user_id), domain="example.com")

Development renders coloured console lines; every other environment emits
one JSON object per line. Request and user ids bound through bind_context()
are merged into every event of the current request.
"""

import logging
import os
import sys
import time
from collections.abc import MutableMapping
from functools import lru_cache
from typing import Any

import structlog
from structlog.types import Processor

APP_NAME = "domain_registry"

# Keys whose values never reach a log line
SENSITIVE_KEYS = frozenset(
    {
        "password",
        "password_hash",
        "passwordhash",
        "access_token",
        "refresh_token",
        "token",
        "authorization",
        "secret",
    }
)
REDACTED = "[redacted]"


def _is_development() -> bool:
    from .config import get_settings

    return get_settings().debug or os.getenv("ENV", "development") == "development"


def _add_app_name(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    event_dict["app"] = APP_NAME
    return event_dict


def _redact_sensitive(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Mask credentials passed as event fields."""
    for key in event_dict:
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = REDACTED
    return event_dict


def get_processors(development: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        _add_app_name,
        _redact_sensitive,
    ]

    if development:
        processors.append(
            structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback)
        )
    else:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return processors


@lru_cache(maxsize=4)
def configure_logging(level: str = "INFO") -> None:
    """Configure structlog on top of the stdlib root logger. Safe to call repeatedly."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=get_processors(_is_development()),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)  # type: ignore[no-any-return]


# =============================================================================
# Context Management
# =============================================================================


def bind_context(**kwargs: Any) -> None:
    """Attach fields to every later event in the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


class LogContext:
    """
    Bind fields for the duration of a ``with`` block.

        with LogContext(command="create-admin"):
            logger.info("admin_created")  # carries command="create-admin"
    """

    def __init__(self, **kwargs: Any):
        self.fields = kwargs

    def __enter__(self) -> "LogContext":
        bind_context(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        unbind_context(*self.fields)
        return False


# =============================================================================
# FastAPI Integration
# =============================================================================


class RequestLoggingMiddleware:
    """
    ASGI middleware that logs one ``request_complete`` event per request.

    Runs inside RequestIDMiddleware, which binds request_id beforehand.
    The level follows the response: info below 400, warning for client
    errors, error for server errors.
    """

    def __init__(self, app):
        self.app = app
        self.logger = _LazyLogger("http")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started = time.perf_counter()
        response_status = 500

        async def capture_status(message):
            nonlocal response_status
            if message["type"] == "http.response.start":
                response_status = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, capture_status)
        finally:
            if response_status >= 500:
                log = self.logger.error
            elif response_status >= 400:
                log = self.logger.warning
            else:
                log = self.logger.info
            log(
                "request_complete",
                method=scope.get("method", ""),
                path=scope.get("path", ""),
                status_code=response_status,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            clear_context()


# =============================================================================
# Lazy-loaded Module Loggers
# =============================================================================


class _LazyLogger:
    """Resolves the structlog logger on first use, after configuration."""

    def __init__(self, name: str):
        self._name = name
        self._logger: structlog.stdlib.BoundLogger | None = None

    def __getattr__(self, name: str) -> Any:
        if self._logger is None:
            self._logger = get_logger(self._name)
        return getattr(self._logger, name)


api_logger = _LazyLogger("api")
cli_logger = _LazyLogger("cli")
db_logger = _LazyLogger("database")


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
    "RequestLoggingMiddleware",
    "api_logger",
    "cli_logger",
    "db_logger",
]
