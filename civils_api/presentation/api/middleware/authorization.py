"""Authorization middleware applying the configured access rule.

Rules:
- permit_all: every request passes, whatever credentials it carries
- deny_all: every non-public request is rejected with 403
- authenticated: a bearer token is required, otherwise 401

There is no form login and no HTTP Basic: a ``Basic`` Authorization header
never counts as authentication. Token verification happens downstream.
"""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from civils_api.domain.exceptions import (
    AccessDeniedError,
    AuthenticationRequiredError,
    DomainException,
)
from civils_api.domain.security_policy import AccessRule, SecurityPolicy
from civils_api.infrastructure.logging.config import get_logger
from civils_api.presentation.api.middleware.error_handling import domain_error_response


logger = get_logger(__name__)


def extract_bearer_token(request: Request) -> str | None:
    """Return the bearer token from the Authorization header, if any."""
    header = request.headers.get("Authorization")
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class AuthorizationMiddleware(BaseHTTPMiddleware):
    """Enforce the security policy's access rule on each request."""

    def __init__(self, app: ASGIApp, policy: SecurityPolicy) -> None:
        super().__init__(app)
        self.policy = policy

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Reject the request if the access rule forbids it, else pass it on."""
        error = self.check_access(request)
        if error is not None:
            logger.info(
                "request_rejected",
                code=error.code,
                rule=str(self.policy.authorization),
                method=request.method,
                path=request.url.path,
            )
            return domain_error_response(error)

        return await call_next(request)

    def check_access(self, request: Request) -> DomainException | None:
        """Evaluate the access rule.

        Returns:
            The error to report, or None when access is granted
        """
        rule = self.policy.authorization
        if rule is AccessRule.PERMIT_ALL or self.policy.is_public_path(request.url.path):
            return None

        if rule is AccessRule.DENY_ALL:
            return AccessDeniedError(
                "Access to this resource is denied",
                details={"path": request.url.path},
            )

        if extract_bearer_token(request) is None:
            return AuthenticationRequiredError(
                "A bearer token is required to access this resource"
            )
        return None
