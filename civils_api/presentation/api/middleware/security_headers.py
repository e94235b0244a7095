"""Default security headers added to every response."""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from civils_api.infrastructure.constants import SecurityDefaults


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add browser security headers to all responses.

    - X-Content-Type-Options: Prevent MIME sniffing
    - X-Frame-Options: Prevent clickjacking
    - X-XSS-Protection: Disable the legacy XSS auditor
    - Cache-Control / Pragma / Expires: No caching unless the handler opted in
    - Strict-Transport-Security: HTTPS requests only
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Add security headers to response."""
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"

        # The auditor itself is exploitable; "0" turns it off in old browsers
        response.headers["X-XSS-Protection"] = "0"

        if "Cache-Control" not in response.headers:
            response.headers["Cache-Control"] = "no-cache, no-store, max-age=0, must-revalidate"
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"

        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = (
                f"max-age={SecurityDefaults.HSTS_MAX_AGE}; includeSubDomains"
            )

        return response
