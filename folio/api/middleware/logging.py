"""
Request logging middleware.

Every request gets a short id that is bound into structlog's context
variables, so events logged while serving it (search fan-out, analytics
writes scheduled from it, error handlers) carry the same ``request_id``.
"""

import time
import uuid
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from folio.config import get_logger

logger = get_logger(__name__)

# Polled by load balancers; logged at debug only
_QUIET_PATHS = frozenset({"/health", "/api/health"})


def _level_for(status_code: int, quiet: bool) -> str:
    if status_code >= 500:
        return "error"
    if status_code >= 400:
        return "warning"
    return "debug" if quiet else "info"


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs request start, completion and failure with timing.

    Client addresses are never logged; the rate limiter only sees a salted
    hash of them.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        path = request.url.path
        start = time.perf_counter()

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            quiet = path in _QUIET_PATHS
            (logger.debug if quiet else logger.info)(
                "request_started", method=request.method, path=path
            )

            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "request_failed",
                    method=request.method,
                    path=path,
                    error=str(e),
                    duration_ms=round((time.perf_counter() - start) * 1000, 2),
                )
                raise

            duration_ms = (time.perf_counter() - start) * 1000
            log = getattr(logger, _level_for(response.status_code, quiet))
            log(
                "request_completed",
                method=request.method,
                path=path,
                status=response.status_code,
                duration_ms=round(duration_ms, 2),
            )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        return response
