"""Dependency injection container configuration."""

from dependency_injector import containers, providers

from civils_api.infrastructure.config import get_settings
from civils_api.infrastructure.security.policy_source import (
    StaticCorsPolicySource,
    build_cors_policy,
    build_security_policy,
)


class Container(containers.DeclarativeContainer):
    """Application dependency injection container.

    Policies are singletons: built once from settings at startup and shared
    by the middleware chain and the endpoints.
    """

    # Configuration
    config = providers.Singleton(get_settings)

    # Security policies
    cors_policy = providers.Singleton(build_cors_policy, settings=config)
    security_policy = providers.Singleton(build_security_policy, settings=config, cors=cors_policy)
    cors_policy_source = providers.Singleton(StaticCorsPolicySource, policy=cors_policy)
