"""Common API dependencies resolved from the application's container."""

from fastapi import Request

from civils_api.container import Container
from civils_api.domain.security_policy import SecurityPolicy


def get_container(request: Request) -> Container:
    """Return the DI container the running application was built with."""
    return request.app.state.container


def get_security_policy(request: Request) -> SecurityPolicy:
    """Return the security policy the middleware chain was built from."""
    return get_container(request).security_policy()
