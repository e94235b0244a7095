"""Integration tests for the stateless session policy.

Test Organization:
- TestSessionCookiesNeverIssued: Set-Cookie suppression on responses
- TestSessionCookiesNeverConsulted: Inbound session cookie removal
- TestCookieNameParsing: Set-Cookie name extraction
"""

import pytest
from fastapi import FastAPI, Response
from fastapi.testclient import TestClient
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from civils_api.presentation.api.middleware.session import (
    StatelessSessionMiddleware,
    cookie_name,
)


def set_cookie_headers(response) -> list[str]:
    """Return every Set-Cookie header value."""
    return response.headers.get_list("set-cookie")


# ============================================================================
# Response Tests
# ============================================================================


class TestSessionCookiesNeverIssued:
    """Test session cookies are stripped from responses."""

    def test_strips_session_cookies_keeps_others(self, client: TestClient) -> None:
        """Test only session cookies are removed.

        Arrange: Handler setting session, JSESSIONID and theme cookies
        Act: GET the handler
        Assert: Only the theme cookie survives
        """
        # Act
        response = client.get("/sample/session")

        # Assert
        cookies = set_cookie_headers(response)
        assert response.status_code == 200
        assert len(cookies) == 1
        assert cookies[0].startswith("theme=dark")

    @pytest.mark.parametrize(
        "path", ["/api/v1/", "/api/v1/health", "/api/v1/security/policy", "/sample", "/missing"]
    )
    def test_no_session_cookie_on_any_response(self, client: TestClient, path: str) -> None:
        """Test ordinary responses never carry a session cookie."""
        # Act
        response = client.get(path, headers={"Origin": "http://localhost:3000"})

        # Assert
        assert not any(
            cookie_name(value).lower() in {"session", "sessionid", "jsessionid"}
            for value in set_cookie_headers(response)
        )

    def test_matches_cookie_names_case_insensitively(self) -> None:
        """Test a differently-cased session cookie name is still stripped."""
        # Arrange
        app = FastAPI()
        app.add_middleware(StatelessSessionMiddleware, cookie_names=("JSESSIONID",))

        @app.get("/test")
        async def test_endpoint(response: Response) -> dict[str, str]:
            response.set_cookie("jsessionid", "abc")
            return {"message": "test"}

        # Act
        response = TestClient(app).get("/test")

        # Assert
        assert set_cookie_headers(response) == []


# ============================================================================
# Request Tests
# ============================================================================


class TestSessionCookiesNeverConsulted:
    """Test inbound session cookies never reach handlers."""

    def test_handler_sees_only_non_session_cookies(self, client: TestClient) -> None:
        """Test session cookies are removed from the Cookie header.

        Arrange: Request with session and theme cookies
        Act: GET the cookie echo handler
        Assert: Handler sees the theme cookie only
        """
        # Act
        response = client.get(
            "/sample/cookies", headers={"Cookie": "session=abc; theme=dark; JSESSIONID=xyz"}
        )

        # Assert
        assert response.json() == {"cookies": {"theme": "dark"}}

    def test_cookie_header_dropped_when_only_session_cookies(self, client: TestClient) -> None:
        """Test a Cookie header holding only session cookies disappears."""
        # Act
        response = client.get("/sample/cookies", headers={"Cookie": "sessionid=abc"})

        # Assert
        assert response.json() == {"cookies": {}}

    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture], max_examples=25)
    @given(value=st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789", min_size=1, max_size=30))
    def test_session_value_never_visible(self, client: TestClient, value: str) -> None:
        """Property: whatever the session cookie holds, handlers never see it."""
        response = client.get("/sample/cookies", headers={"Cookie": f"session={value}"})

        assert "session" not in response.json()["cookies"]


# ============================================================================
# Parsing Tests
# ============================================================================


class TestCookieNameParsing:
    """Test cookie name extraction from Set-Cookie values."""

    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("session=abc; Path=/; HttpOnly", "session"),
            ("JSESSIONID=1", "JSESSIONID"),
            ("theme=dark", "theme"),
            (" spaced = value ; Secure", "spaced"),
        ],
    )
    def test_extracts_name(self, header: str, expected: str) -> None:
        """Test the name is the token before the first '='."""
        assert cookie_name(header) == expected

