"""Request context middleware with OpenTelemetry trace_id support.

The trace_id is taken from, in order:
1. The active OpenTelemetry span (traceparent header when instrumented)
2. CF-Ray (Cloudflare trace, for CDN deployments)
3. A generated UUIDv7

It is bound to the structlog context, stored on ``request.state`` and
returned in the ``X-Trace-ID`` response header.
"""

from collections.abc import Awaitable, Callable

import structlog
from fastapi import Request, Response
from opentelemetry import trace
from starlette.middleware.base import BaseHTTPMiddleware
from uuid_extension import uuid7


TRACE_ID_HEADER = "X-Trace-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind trace_id and client IP to every request."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Extract/generate trace_id and bind it to the request context."""
        span = trace.get_current_span()
        trace_id = self._extract_trace_id(request, span.get_span_context())
        client_ip = self._extract_client_ip(request)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            trace_id=trace_id,
            client_ip=client_ip,
            method=request.method,
            path=request.url.path,
        )

        request.state.trace_id = trace_id
        request.state.client_ip = client_ip

        if span.is_recording():
            span.set_attribute("trace_id", trace_id)
            span.set_attribute("http.client_ip", client_ip)

        response = await call_next(request)

        response.headers[TRACE_ID_HEADER] = trace_id

        return response

    def _extract_trace_id(self, request: Request, span_context: trace.SpanContext) -> str:
        if span_context.is_valid:
            return format(span_context.trace_id, "032x")

        if cf_ray := request.headers.get("CF-Ray"):
            return cf_ray

        return str(uuid7())

    def _extract_client_ip(self, request: Request) -> str:
        """Extract client IP address.

        Priority:
        1. CF-Connecting-IP (Cloudflare real client IP)
        2. X-Forwarded-For (leftmost entry)
        3. X-Real-IP (nginx/other reverse proxy)
        4. request.client.host (direct connection)
        """
        if cf_connecting_ip := request.headers.get("CF-Connecting-IP"):
            return cf_connecting_ip

        if x_forwarded_for := request.headers.get("X-Forwarded-For"):
            return x_forwarded_for.split(",")[0].strip()

        if x_real_ip := request.headers.get("X-Real-IP"):
            return x_real_ip

        if request.client and request.client.host:
            return request.client.host

        return "unknown"
