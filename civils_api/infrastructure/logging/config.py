"""Structured logging with OpenTelemetry trace context and security event tagging."""

import logging
import sys
from typing import Any, cast

import structlog
from opentelemetry import trace

from civils_api.infrastructure.config import Settings
from civils_api.utils.sanitizer import sanitize_dict


# Events describing the security posture or a security decision
SECURITY_EVENTS = frozenset(
    {
        "security_policy_configured",
        "authorization_permit_all",
        "request_rejected",
        "session_cookie_suppressed",
    }
)


def tag_security_events(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Mark security events with ``category="security"`` for log routing."""
    if event_dict.get("event") in SECURITY_EVENTS:
        event_dict["category"] = "security"
    return event_dict


def sanitize_sensitive_data(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Redact credentials, cookies and tokens from log events.

    Args:
        logger: Logger instance (unused)
        method_name: Method name (unused)
        event_dict: Event dictionary to sanitize

    Returns:
        Sanitized event dictionary
    """
    return sanitize_dict(event_dict, recursive=True)


def add_trace_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Add OpenTelemetry trace context to log events.

    Only trace_id, span_id and trace_flags are added, and only when a valid
    span is active.
    """
    span = trace.get_current_span()
    if span and span.get_span_context().is_valid:
        span_context = span.get_span_context()
        event_dict["trace_id"] = format(span_context.trace_id, "032x")
        event_dict["span_id"] = format(span_context.span_id, "016x")
        event_dict["trace_flags"] = format(span_context.trace_flags, "02x")
    return event_dict


def configure_logging(settings: Settings) -> None:
    """Configure structured logging with trace context."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    # LoggingMiddleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        add_trace_context,
        tag_security_events,
        sanitize_sensitive_data,
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.is_development:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=cast("Any", processors),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
