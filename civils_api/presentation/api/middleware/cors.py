"""CORS (Cross-Origin Resource Sharing) middleware.

Consults a ``CorsPolicySource`` on every HTTP request and hands the request
to Starlette's ``CORSMiddleware`` configured for the resolved policy. Starlette
owns the header logic: preflight answers, origin echoing, ``Vary: Origin``.
"""

from starlette.middleware.cors import CORSMiddleware
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Receive, Scope, Send

from civils_api.domain.security_policy import CorsPolicy
from civils_api.infrastructure.security.policy_source import CorsPolicySource


class CorsPolicyMiddleware:
    """Apply the CORS policy resolved for each request.

    One ``CORSMiddleware`` delegate is kept per distinct policy; policies are
    frozen and hashable, so they key the cache directly.
    """

    def __init__(self, app: ASGIApp, source: CorsPolicySource) -> None:
        self.app = app
        self.source = source
        self._delegates: dict[CorsPolicy, CORSMiddleware] = {}

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        policy = self.source.resolve_policy(HTTPConnection(scope))
        await self._delegate_for(policy)(scope, receive, send)

    def _delegate_for(self, policy: CorsPolicy) -> CORSMiddleware:
        delegate = self._delegates.get(policy)
        if delegate is None:
            delegate = CORSMiddleware(
                self.app,
                allow_origins=list(policy.allowed_origins),
                allow_methods=list(policy.allowed_methods),
                allow_headers=list(policy.allowed_headers),
                allow_credentials=policy.allow_credentials,
                expose_headers=list(policy.exposed_headers),
                max_age=policy.max_age_seconds,
            )
            self._delegates[policy] = delegate
        return delegate
