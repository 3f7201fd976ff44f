"""
Bookstore API — Health Check Route
====================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Asks the configured BookStore to ping its backend.

Status levels:
    - healthy:   store reachable (HTTP 200)
    - unhealthy: store unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Request, Response

from bookstore import __version__
from bookstore.schemas.book import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Module-level: set once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """
    Check that the book store can be reached.

    SQL backend: SELECT 1 on a fresh session. Memory backend: always up.
    """
    backend = "unknown"
    reachable = False
    try:
        async with request.app.state.store_provider() as store:
            backend = store.name
            reachable = await store.ping()
    except Exception as e:
        # Opening the session itself can fail when the database is down
        logger.warning("Health check: store unavailable: %s", str(e))

    if not reachable:
        response.status_code = 503

    return HealthResponse(
        status="healthy" if reachable else "unhealthy",
        version=__version__,
        store=f"{backend}:{'connected' if reachable else 'disconnected'}",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
