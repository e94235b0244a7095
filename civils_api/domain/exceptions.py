"""Domain-specific exceptions for security policy errors.

This module defines the exception hierarchy for domain errors, providing
consistent error handling across the application layer.
"""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain-related errors.

    Provides a consistent interface for domain exceptions with error codes
    and optional contextual details.

    Attributes:
        code: Machine-readable error code
        message: Human-readable error message
        details: Optional additional error context (dict or list)
    """

    code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | list[Any] | None = None) -> None:
        """Initialize domain exception.

        Args:
            message: Human-readable error description
            details: Optional additional context about the error
        """
        self.message = message
        self.details = details
        super().__init__(self.message)


class SecurityMisconfigurationError(DomainException):
    """Raised at startup when the configured security policy is invalid.

    Typical cause: credentials allowed together with a wildcard origin,
    a combination browsers reject.
    """

    code = "SECURITY_MISCONFIGURATION"


class AuthenticationRequiredError(DomainException):
    """Raised when a request needs credentials the caller did not supply."""

    code = "AUTHENTICATION_REQUIRED"


class AccessDeniedError(DomainException):
    """Raised when the authorization rule rejects a request."""

    code = "ACCESS_DENIED"
