"""HTTP request/response logging middleware."""

import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from civils_api.infrastructure.logging.config import get_logger


logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log every completed request with its status and duration.

    Cross-origin requests also log the ``Origin`` they came from, which makes
    CORS rejections traceable from the server side.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Process request, measure duration, and log details.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/handler in the chain

        Returns:
            HTTP response from downstream handlers
        """
        start_time = time.perf_counter()

        response = await call_next(request)

        duration = time.perf_counter() - start_time

        logger.info(
            "request_completed",
            method=request.method,
            url=str(request.url),
            origin=request.headers.get("Origin"),
            status_code=response.status_code,
            duration=f"{duration:.3f}s",
        )

        return response
