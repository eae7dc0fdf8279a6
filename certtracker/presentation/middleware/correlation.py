"""
Request tracing.

Callers may pass X-Request-ID (or X-Correlation-ID); otherwise one is
generated. The id tags every log line and SQL statement of the request
and is returned in the X-Request-ID response header.
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ...infrastructure.logging import Timer, request_context

logger = structlog.get_logger()

REQUEST_ID_HEADERS = ("X-Request-ID", "X-Correlation-ID")

# Probes are polled constantly; log them at debug only.
QUIET_PATHS = frozenset({"/health", "/health/ready"})


def incoming_request_id(request: Request) -> str | None:
    for header in REQUEST_ID_HEADERS:
        value = request.headers.get(header)
        if value:
            return value[:128]
    return None


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        log = logger.debug if path in QUIET_PATHS else logger.info

        with request_context(incoming_request_id(request), method=request.method, path=path) as cid:
            with Timer() as t:
                response = await call_next(request)
            log("Request handled", status_code=response.status_code, duration_ms=t.duration_ms)

        response.headers["X-Request-ID"] = cid
        return response
