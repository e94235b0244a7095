"""Security middleware chain.

The chain is an ordered list of Starlette ``Middleware`` entries built from
the security policy at startup:

1. CORS: answers preflights and decorates cross-origin responses
2. Stateless session: no session cookie read or issued
3. Authorization: applies the access rule

The first entry is outermost, so preflight requests are answered before the
access rule is evaluated.
"""

from fastapi import FastAPI
from starlette.middleware import Middleware

from civils_api.domain.security_policy import AccessRule, SecurityPolicy
from civils_api.infrastructure.logging.config import get_logger
from civils_api.infrastructure.security.policy_source import CorsPolicySource
from civils_api.presentation.api.middleware.authorization import AuthorizationMiddleware
from civils_api.presentation.api.middleware.cors import CorsPolicyMiddleware
from civils_api.presentation.api.middleware.session import StatelessSessionMiddleware


logger = get_logger(__name__)


def build_security_chain(policy: SecurityPolicy, source: CorsPolicySource) -> list[Middleware]:
    """Compose the security middleware in execution order.

    Args:
        policy: Active security policy
        source: CORS policy source consulted per request

    Returns:
        Middleware entries, outermost first
    """
    return [
        Middleware(CorsPolicyMiddleware, source=source),
        Middleware(StatelessSessionMiddleware, cookie_names=policy.session_cookie_names),
        Middleware(AuthorizationMiddleware, policy=policy),
    ]


def install_security_chain(app: FastAPI, chain: list[Middleware]) -> None:
    """Install the chain so that its first entry runs first.

    ``add_middleware`` wraps the existing stack, so entries are added in
    reverse order.
    """
    for middleware in reversed(chain):
        app.add_middleware(middleware.cls, *middleware.args, **middleware.kwargs)


def log_security_posture(policy: SecurityPolicy) -> None:
    """Log the active security posture once at startup."""
    logger.info(
        "security_policy_configured",
        authorization=str(policy.authorization),
        session_creation=str(policy.session_creation),
        csrf_enabled=policy.csrf_enabled,
        form_login_enabled=policy.form_login_enabled,
        http_basic_enabled=policy.http_basic_enabled,
        cors_origins=list(policy.cors.allowed_origins),
        cors_allow_credentials=policy.cors.allow_credentials,
        cors_max_age=policy.cors.max_age_seconds,
    )
    if policy.authorization is AccessRule.PERMIT_ALL:
        logger.warning("authorization_permit_all", detail="every request is allowed")
