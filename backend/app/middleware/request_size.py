"""
Middleware that rejects oversized request bodies.
"""

from typing import Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose Content-Length exceeds the configured limit."""

    def __init__(self, app, max_size_mb: int = 1):
        super().__init__(app)
        self.max_size = max_size_mb * 1024 * 1024
        self.max_size_mb = max_size_mb

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        content_length = request.headers.get("content-length")
        if content_length:
            try:
                if int(content_length) > self.max_size:
                    return JSONResponse(
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        content={
                            "success": False,
                            "message": f"request body exceeds {self.max_size_mb}MB",
                        },
                    )
            except ValueError:
                pass

        return await call_next(request)
