"""
Per-request correlation id, access log line and timing header.
"""

import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import structlog

from venuebook.core.logging import get_logger

logger = get_logger(__name__)

STREAM_MEDIA_TYPE = "text/event-stream"
QUIET_PATHS = frozenset({"/health", "/metrics"})
_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def _request_id(request: Request) -> str:
    """Reuse a well-formed X-Request-ID from the caller, else mint one."""
    supplied = request.headers.get("X-Request-ID", "")
    return supplied if _REQUEST_ID.match(supplied) else uuid.uuid4().hex[:12]


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Binds request_id/method/path into the structlog context, then logs one
    line per request at a level that follows the status class. Probe
    endpoints log at debug.

    For SSE responses the duration is time to first byte; the stream itself
    logs when its live query opens and closes.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = _request_id(request)
        path = request.url.path
        started = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, method=request.method, path=path)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception("request_failed", error=str(e), duration_ms=_elapsed_ms(started))
            raise

        duration_ms = _elapsed_ms(started)
        if path in QUIET_PATHS:
            log = logger.debug
        elif response.status_code >= 500:
            log = logger.error
        elif response.status_code >= 400:
            log = logger.warning
        else:
            log = logger.info

        log(
            "request_completed",
            status_code=response.status_code,
            duration_ms=duration_ms,
            streaming=response.headers.get("content-type", "").startswith(STREAM_MEDIA_TYPE),
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms}ms"
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
