"""Integration tests for the health and security introspection endpoints."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from httpx import AsyncClient

from civils_api.infrastructure.config import Settings
from tests.factories import build_app


class TestRootEndpoint:
    """Test root API endpoint."""

    def test_returns_navigation_links(self, client: TestClient) -> None:
        """Test root endpoint returns welcome message and links.

        Arrange: Client is ready
        Act: GET /api/v1/
        Assert: 200 with message, docs and health links
        """
        # Act
        response = client.get("/api/v1/")

        # Assert
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Welcome to civils-api-test"
        assert data["docs"] == "/docs"
        assert data["health"] == "/api/v1/health"


class TestHealthEndpoint:
    """Test health check endpoint."""

    def test_reports_healthy(self, client: TestClient) -> None:
        """Test health check reports status, version and environment."""
        # Act
        response = client.get("/api/v1/health")

        # Assert
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "status": "healthy",
            "version": "0.1.0",
            "environment": "testing",
        }

    async def test_reports_healthy_async(self, async_client: AsyncClient) -> None:
        """Test health check through the async client."""
        # Act
        response = await async_client.get("/api/v1/health")

        # Assert
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "healthy"


class TestSecurityPolicyEndpoint:
    """Test the security posture endpoint."""

    def test_reports_default_posture(self, client: TestClient) -> None:
        """Test the endpoint returns the active policy.

        Arrange: Client with default settings
        Act: GET /api/v1/security/policy
        Assert: permit_all, stateless, disabled mechanisms, CORS values
        """
        # Act
        response = client.get("/api/v1/security/policy")

        # Assert
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["authorization"] == "permit_all"
        assert data["session_creation"] == "stateless"
        assert data["csrf_enabled"] is False
        assert data["form_login_enabled"] is False
        assert data["http_basic_enabled"] is False
        assert data["cors"] == {
            "allowed_origins": ["http://localhost:3000", "http://localhost:5173"],
            "allowed_methods": ["*"],
            "allowed_headers": ["*"],
            "exposed_headers": ["Authorization"],
            "allow_credentials": True,
            "max_age_seconds": 3600,
        }

    def test_reflects_the_app_it_is_served_by(self, client: TestClient) -> None:
        """Test each app reports its own policy, not the last one built.

        Arrange: Default client plus a second app with other origins
        Act: Query both
        Assert: Each reports its own origins
        """
        # Arrange
        other_settings = Settings(app_env="testing", cors_origins=["https://app.example.com"])
        other_client = TestClient(build_app(other_settings))

        # Act
        default_origins = client.get("/api/v1/security/policy").json()["cors"]["allowed_origins"]
        other_origins = other_client.get("/api/v1/security/policy").json()["cors"][
            "allowed_origins"
        ]

        # Assert
        assert default_origins == ["http://localhost:3000", "http://localhost:5173"]
        assert other_origins == ["https://app.example.com"]

    @pytest.mark.parametrize("rule", ["deny_all", "authenticated"])
    def test_is_subject_to_the_access_rule(self, rule: str) -> None:
        """Test the endpoint is not public."""
        # Arrange
        client = TestClient(build_app(Settings(app_env="testing", security_authorization=rule)))

        # Act
        response = client.get("/api/v1/security/policy")

        # Assert
        assert response.status_code in (401, 403)
