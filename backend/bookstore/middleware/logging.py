"""
Bookstore API — Request Logging Middleware
============================================

What:  One access log line per HTTP request.
How:   Times the request, then logs method, route, status, duration, request
       ID and client IP on the `bookstore.access` logger.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

The route is the matched template (`/restapi/books/{book_id}`), so every
book id shares one log key; the concrete path goes in the `path` extra.
Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from bookstore.middleware.request_id import request_id_var

logger = logging.getLogger("bookstore.access")


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def route_template(request: Request) -> str:
    """Path template of the matched route, or the raw path when none matched."""
    # The router records the matched route on the shared ASGI scope
    route = request.scope.get("route")
    return getattr(route, "path_format", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access logging; health checks are skipped, load balancers poll them."""

    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        route = route_template(request)
        rid = request_id_var.get("")
        client_ip = request.client.host if request.client else "unknown"
        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            route,
            response.status_code,
            elapsed_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": route,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
