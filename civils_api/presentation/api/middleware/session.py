"""Stateless session enforcement.

The API never creates or consults server-side sessions. This middleware makes
that hold even if a handler or library tries: session cookies are removed
from the inbound ``Cookie`` header and any ``Set-Cookie`` for a session
cookie is stripped from the response.
"""

from collections.abc import Awaitable, Callable, Iterable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from civils_api.infrastructure.logging.config import get_logger


logger = get_logger(__name__)


def cookie_name(set_cookie_value: str) -> str:
    """Extract the cookie name from a ``Set-Cookie`` header value."""
    return set_cookie_value.split(";", 1)[0].split("=", 1)[0].strip()


class StatelessSessionMiddleware(BaseHTTPMiddleware):
    """Keep session cookies out of requests and responses.

    Non-session cookies pass untouched. Names compare case-insensitively.
    """

    def __init__(self, app: ASGIApp, cookie_names: Iterable[str]) -> None:
        super().__init__(app)
        self.cookie_names = frozenset(name.lower() for name in cookie_names)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Strip inbound session cookies, then outbound session Set-Cookie headers."""
        self._strip_request_cookies(request)

        response = await call_next(request)

        kept: list[tuple[bytes, bytes]] = []
        for key, value in response.raw_headers:
            if key.lower() == b"set-cookie":
                name = cookie_name(value.decode("latin-1"))
                if name.lower() in self.cookie_names:
                    logger.warning("session_cookie_suppressed", name=name, path=request.url.path)
                    continue
            kept.append((key, value))
        response.raw_headers = kept

        return response

    def _strip_request_cookies(self, request: Request) -> None:
        headers: list[tuple[bytes, bytes]] = []
        for key, value in request.scope["headers"]:
            if key == b"cookie":
                pairs = [
                    pair.strip()
                    for pair in value.decode("latin-1").split(";")
                    if pair.strip()
                    and pair.split("=", 1)[0].strip().lower() not in self.cookie_names
                ]
                if not pairs:
                    continue
                value = "; ".join(pairs).encode("latin-1")
            headers.append((key, value))
        request.scope["headers"] = headers
