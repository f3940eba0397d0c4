"""
Middleware that tags every request with an ID.

A well-formed ``X-Request-ID`` from the client is kept, anything else is
replaced with a fresh UUID. The ID is bound to the logging context and
echoed back in the response headers.
"""

import re
import uuid

from core.logging import bind_context, clear_context

MAX_REQUEST_ID_LENGTH = 128
REQUEST_ID_PATTERN = re.compile(rf"^[A-Za-z0-9._:-]{{1,{MAX_REQUEST_ID_LENGTH}}}$")
REQUEST_ID_HEADER = b"x-request-id"


def _incoming_request_id(scope) -> str | None:
    for name, value in scope.get("headers", []):
        if name.lower() == REQUEST_ID_HEADER:
            candidate = value.decode("latin-1")
            return candidate if REQUEST_ID_PATTERN.match(candidate) else None
    return None


class RequestIDMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = _incoming_request_id(scope) or str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id

        clear_context()
        bind_context(request_id=request_id)

        async def send_with_header(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", []).append(
                    (REQUEST_ID_HEADER, request_id.encode("latin-1"))
                )
            await send(message)

        await self.app(scope, receive, send_with_header)
