"""Tests for domain exceptions and their HTTP mapping.

Test Organization:
- TestDomainException: Base exception behavior
- TestExceptionCodes: Exception code verification
- TestHttpMapping: Status codes and response bodies
"""

import json

import pytest
from fastapi import status
from hypothesis import given
from hypothesis import strategies as st

from civils_api.domain.exceptions import (
    AccessDeniedError,
    AuthenticationRequiredError,
    DomainException,
    SecurityMisconfigurationError,
)
from civils_api.presentation.api.middleware.error_handling import (
    domain_error_response,
    status_code_for,
)


class TestDomainException:
    """Test base DomainException behavior."""

    def test_creates_exception_with_message_only(self) -> None:
        """Test creating exception with message only.

        Arrange: Message string
        Act: Create DomainException with message
        Assert: Exception has correct message and no details
        """
        # Arrange
        message = "Something went wrong"

        # Act
        exception = DomainException(message)

        # Assert
        assert exception.message == message
        assert str(exception) == message
        assert exception.details is None

    def test_keeps_details(self) -> None:
        """Test details are stored unchanged."""
        details = {"path": "/api/v1/security/policy"}

        exception = AccessDeniedError("denied", details=details)

        assert exception.details == details

    @given(message=st.text())
    def test_subclasses_are_domain_exceptions(self, message: str) -> None:
        """Property: every security error can be caught as DomainException."""
        for exc_type in (
            AccessDeniedError,
            AuthenticationRequiredError,
            SecurityMisconfigurationError,
        ):
            with pytest.raises(DomainException):
                raise exc_type(message)


class TestExceptionCodes:
    """Test machine-readable codes."""

    @pytest.mark.parametrize(
        ("exc_type", "code"),
        [
            (DomainException, "DOMAIN_ERROR"),
            (SecurityMisconfigurationError, "SECURITY_MISCONFIGURATION"),
            (AuthenticationRequiredError, "AUTHENTICATION_REQUIRED"),
            (AccessDeniedError, "ACCESS_DENIED"),
        ],
    )
    def test_code(self, exc_type: type[DomainException], code: str) -> None:
        """Test each exception carries its code."""
        assert exc_type("x").code == code


class TestHttpMapping:
    """Test mapping to HTTP responses."""

    @pytest.mark.parametrize(
        ("exc", "expected"),
        [
            (AuthenticationRequiredError("x"), status.HTTP_401_UNAUTHORIZED),
            (AccessDeniedError("x"), status.HTTP_403_FORBIDDEN),
            (SecurityMisconfigurationError("x"), status.HTTP_500_INTERNAL_SERVER_ERROR),
            (DomainException("x"), status.HTTP_400_BAD_REQUEST),
        ],
    )
    def test_status_codes(self, exc: DomainException, expected: int) -> None:
        """Test each exception maps to its status code."""
        assert status_code_for(exc) == expected

    def test_authentication_error_challenges_with_bearer(self) -> None:
        """Test 401 responses offer a Bearer challenge, never Basic.

        Arrange: AuthenticationRequiredError
        Act: Render response
        Assert: 401, WWW-Authenticate: Bearer, ErrorResponse body
        """
        # Arrange
        exc = AuthenticationRequiredError("token required")

        # Act
        response = domain_error_response(exc)

        # Assert
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert json.loads(response.body) == {
            "error": {"code": "AUTHENTICATION_REQUIRED", "message": "token required", "details": None}
        }

    def test_access_denied_has_no_challenge(self) -> None:
        """Test 403 responses carry no WWW-Authenticate header."""
        response = domain_error_response(AccessDeniedError("denied"))

        assert response.status_code == 403
        assert "WWW-Authenticate" not in response.headers
