"""Request ID middleware — unique ID per request, plus an access log line.

Learn: Every request gets a UUID, either from the incoming
X-Request-ID header (for distributed tracing) or auto-generated.
The ID is bound to structlog's contextvars so it appears in all
log entries for that request (auth denials, server faults), and is
returned in the response header. When the response is ready, one
`request.completed` event records method, path, status and duration.
Exceptions nothing else handled are rendered here as a generic 500,
so they get the same header and log line.
The Authorization header is never logged.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from blogapi.errors import unhandled_error_handler

logger = structlog.get_logger()


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Generate and propagate a unique request ID."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception as exc:
            response = await unhandled_error_handler(request, exc)
        response.headers["X-Request-ID"] = request_id

        logger.info(
            "request.completed",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response
