"""FastAPI application factory and configuration."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from dependency_injector import providers
from fastapi import FastAPI

from civils_api.container import Container
from civils_api.infrastructure.config import Settings, get_settings
from civils_api.infrastructure.logging.config import configure_logging, get_logger
from civils_api.presentation.api.middleware.error_handling import (
    UnhandledErrorMiddleware,
    setup_exception_handlers,
)
from civils_api.presentation.api.middleware.logging import LoggingMiddleware
from civils_api.presentation.api.middleware.request_context import RequestContextMiddleware
from civils_api.presentation.api.middleware.security_headers import SecurityHeadersMiddleware
from civils_api.presentation.api.security_chain import (
    build_security_chain,
    install_security_chain,
    log_security_posture,
)
from civils_api.presentation.api.v1 import api_router


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan events."""
    logger.info("application_startup", app_name=app.title, version=app.version)

    yield

    logger.info("application_shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to run with (environment settings when omitted)

    Returns:
        Configured FastAPI application instance

    Raises:
        SecurityMisconfigurationError: If the security policy is invalid
    """
    container = Container()
    if settings is None:
        settings = get_settings()
    else:
        container.config.override(providers.Object(settings))

    configure_logging(settings)

    # Policies are built once here; a bad policy stops startup
    security_policy = container.security_policy()
    cors_policy_source = container.cors_policy_source()

    tags_metadata = [
        {
            "name": "health",
            "description": "Health check and monitoring endpoints.",
        },
        {
            "name": "security",
            "description": """
Security posture of the API.

### Posture
- **Stateless**: no server-side session, no session cookie
- **No form login / HTTP Basic**: authentication, if any, uses bearer tokens
- **CSRF protection disabled**: no cookie session to protect
- **CORS**: explicit origin allow-list with credentials
            """,
        },
    ]

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Backend API with a stateless, CORS-aware security chain.",
        openapi_tags=tags_metadata,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.container = container
    app.dependency_overrides[get_settings] = lambda: settings

    setup_exception_handlers(app)

    # Unexpected errors render innermost so CORS still decorates the 500.
    # Ambient middleware wraps the security chain so rejected requests are
    # still traced, logged and carry security headers.
    app.add_middleware(UnhandledErrorMiddleware)
    install_security_chain(app, build_security_chain(security_policy, cors_policy_source))
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(LoggingMiddleware)

    app.include_router(api_router, prefix=settings.api_v1_prefix)

    log_security_posture(security_policy)

    return app
