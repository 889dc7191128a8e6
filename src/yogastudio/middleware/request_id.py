"""Request ID middleware: per-request tracing and access log.

Every request gets an ID, either from the incoming X-Request-ID header or
freshly generated. It is bound to structlog's contextvars so every log
entry for the request carries it, and echoed in the response header.

Once the handler has run, one ``request.completed`` line is logged with
the status, the duration and the id of the user the auth filter resolved
(None for anonymous requests). The filter leaves its result on
``request.state.auth``, which is shared with this middleware through the
ASGI scope.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()


def _principal_id(request: Request):
    auth = getattr(request.state, "auth", None)
    return auth.user_id if auth is not None else None


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID and log its outcome."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        response: Response = await call_next(request)
        logger.info(
            "request.completed",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            user_id=_principal_id(request),
        )

        response.headers["X-Request-ID"] = request_id
        return response
