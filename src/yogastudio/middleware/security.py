"""Security headers middleware.

Adds standard protective headers to every response:
- X-Content-Type-Options: no MIME sniffing
- X-Frame-Options: no framing (clickjacking)
- Referrer-Policy: limit referrer leakage
- Cache-Control: responses may carry tokens or personal data
- Strict-Transport-Security: only on HTTPS connections
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cache-Control"] = "no-store"
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        return response
