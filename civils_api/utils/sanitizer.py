"""Sanitization utilities for structured logs.

Used by the structlog processor pipeline to keep credentials, cookies and
other secrets out of log output. Header-shaped keys matter here: the security
middleware logs request metadata, and ``Authorization`` / ``Cookie`` values
must never reach a log sink.
"""

from typing import Any


REDACTED = "***REDACTED***"

# Sensitive field patterns that should be redacted
SENSITIVE_PATTERNS = {
    # Authentication & Authorization
    "password",
    "passwd",
    "secret",
    "api_key",
    "apikey",
    "token",
    "jwt",
    "bearer",
    "authorization",
    # Session state
    "cookie",
    "set-cookie",
    "session_id",
    "sessionid",
    "jsessionid",
}


def is_sensitive_key(key: str, patterns: set[str] | None = None) -> bool:
    """Check if a key matches any sensitive pattern.

    Args:
        key: The key to check (case-insensitive, normalized)
        patterns: Optional custom patterns (defaults to SENSITIVE_PATTERNS)

    Returns:
        True if key matches any sensitive pattern, False otherwise

    Example:
        >>> is_sensitive_key("Authorization")
        True
        >>> is_sensitive_key("set-cookie")
        True
        >>> is_sensitive_key("origin")
        False
    """
    if patterns is None:
        patterns = SENSITIVE_PATTERNS

    # Normalize key: lowercase, replace separators with underscores
    normalized_key = key.lower().replace("-", "_").replace(".", "_").replace(" ", "_")

    return any(pattern.replace(".", "_").replace("-", "_") in normalized_key for pattern in patterns)


def sanitize_dict(
    data: dict[str, Any],
    patterns: set[str] | None = None,
    recursive: bool = True,
) -> dict[str, Any]:
    """Return a copy of ``data`` with sensitive values redacted.

    Args:
        data: Dictionary to sanitize
        patterns: Optional custom patterns (defaults to SENSITIVE_PATTERNS)
        recursive: Whether to recursively sanitize nested dicts/lists

    Returns:
        New dictionary with sensitive values redacted

    Example:
        >>> sanitize_dict({"authorization": "Bearer abc", "origin": "http://localhost:3000"})
        {'authorization': '***REDACTED***', 'origin': 'http://localhost:3000'}
    """
    sanitized: dict[str, Any] = {}

    for key, value in data.items():
        if is_sensitive_key(key, patterns):
            sanitized[key] = REDACTED
        elif recursive and isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, patterns, recursive)
        elif recursive and isinstance(value, list):
            sanitized[key] = [
                sanitize_dict(item, patterns, recursive) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            sanitized[key] = value

    return sanitized
