"""Global test configuration and fixtures.

Fixture Scoping Strategy:
- session: test settings (immutable)
- function: app instance and clients (fresh middleware state per test)
"""

from collections.abc import AsyncGenerator, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from civils_api.infrastructure.config import Settings
from tests.factories import build_app


# ============================================================================
# Session-Scoped Fixtures (Immutable Resources)
# ============================================================================


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings with the default security posture.

    Returns:
        Settings instance configured for testing
    """
    return Settings(
        app_env="testing",
        app_name="civils-api-test",
        debug=True,
        log_level="DEBUG",
    )


# ============================================================================
# Function-Scoped Fixtures
# ============================================================================


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """Create FastAPI application (function-scoped).

    Args:
        test_settings: Test configuration (session-scoped)

    Returns:
        FastAPI application instance with sample routes
    """
    return build_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient]:
    """Create test client for synchronous API testing (function-scoped).

    Args:
        app: FastAPI application

    Yields:
        TestClient: Synchronous test client
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async test client (function-scoped).

    Args:
        app: FastAPI application

    Yields:
        AsyncClient: Async HTTP client
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
