"""Security and CORS policy provider.

Builds the immutable policies from ``Settings`` once at startup and exposes
``resolve_policy(request)`` for the CORS middleware to consult per request.
"""

from typing import Protocol

from pydantic import ValidationError as PydanticValidationError
from starlette.requests import HTTPConnection

from civils_api.domain.exceptions import SecurityMisconfigurationError
from civils_api.domain.security_policy import (
    CorsPolicy,
    SecurityPolicy,
    SessionCreationPolicy,
)
from civils_api.infrastructure.config import Settings


class CorsPolicySource(Protocol):
    """Anything that can pick the CORS policy for a request."""

    def resolve_policy(self, request: HTTPConnection) -> CorsPolicy: ...


class StaticCorsPolicySource:
    """Policy source returning the same policy for every request.

    Example:
        >>> policy = CorsPolicy(allowed_origins=("http://localhost:3000",))
        >>> StaticCorsPolicySource(policy).policy is policy
        True
    """

    def __init__(self, policy: CorsPolicy) -> None:
        self._policy = policy

    @property
    def policy(self) -> CorsPolicy:
        return self._policy

    def resolve_policy(self, request: HTTPConnection) -> CorsPolicy:
        """Return the constant policy; the request is ignored."""
        return self._policy


def build_cors_policy(settings: Settings) -> CorsPolicy:
    """Build the CORS policy from settings.

    Args:
        settings: Application settings

    Returns:
        Immutable CORS policy

    Raises:
        SecurityMisconfigurationError: If the configured values violate the
            policy invariants (e.g. credentials with a wildcard origin)
    """
    try:
        return CorsPolicy(
            allowed_origins=tuple(settings.cors_origins),
            allowed_methods=tuple(settings.cors_allow_methods),
            allowed_headers=tuple(settings.cors_allow_headers),
            exposed_headers=tuple(settings.cors_expose_headers),
            allow_credentials=settings.cors_allow_credentials,
            max_age_seconds=settings.cors_max_age,
        )
    except PydanticValidationError as e:
        raise SecurityMisconfigurationError(
            "Invalid CORS configuration",
            details=[{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()],
        ) from e


def build_security_policy(settings: Settings, cors: CorsPolicy | None = None) -> SecurityPolicy:
    """Build the complete security policy from settings.

    Args:
        settings: Application settings
        cors: Pre-built CORS policy (built from settings when omitted)

    Returns:
        Immutable security policy
    """
    if cors is None:
        cors = build_cors_policy(settings)

    return SecurityPolicy(
        authorization=settings.security_authorization,
        session_creation=SessionCreationPolicy.STATELESS,
        session_cookie_names=tuple(settings.session_cookie_names),
        public_paths=tuple(settings.security_public_paths),
        cors=cors,
    )
