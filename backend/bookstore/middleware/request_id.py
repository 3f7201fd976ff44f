"""
Bookstore API — Request ID Middleware
=======================================

What:  Assigns a correlation ID to each request and returns it in the
       X-Request-ID response header.
How:   Reuses a client-supplied X-Request-ID or generates a short UUID, and
       stores it in a ContextVar so loggers and exception handlers can read it.
When:  Outermost application middleware (runs before access logging).
"""

import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Longer client values are cut so they cannot flood log lines
MAX_REQUEST_ID_LENGTH = 64

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(header_value: Optional[str]) -> str:
    """Client ID trimmed to MAX_REQUEST_ID_LENGTH, or a fresh 8-char ID."""
    supplied = (header_value or "").strip()[:MAX_REQUEST_ID_LENGTH]
    return supplied or uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an ID, exposes it to the handlers through
    request_id_var and request.state, and echoes it on the response.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request.state.request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        # Not reset afterwards: the catch-all 500 handler runs outside this
        # middleware and still reads it
        request_id_var.set(request.state.request_id)

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        return response
