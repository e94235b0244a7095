"""Global exception handling for the FastAPI application.

Converts exceptions into consistent JSON responses following the
ErrorResponse schema, with the matching HTTP status codes.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from civils_api.domain.exceptions import (
    AccessDeniedError,
    AuthenticationRequiredError,
    DomainException,
    SecurityMisconfigurationError,
)
from civils_api.infrastructure.logging.config import get_logger
from civils_api.presentation.schemas.error import ErrorDetail, ErrorResponse


logger = get_logger(__name__)

# Type alias for cleaner function signatures
ExceptionHandler = Callable[[Request, Any], Awaitable[JSONResponse]]


def status_code_for(exc: DomainException) -> int:
    """Map a domain exception to its HTTP status code.

    - AuthenticationRequiredError → 401 Unauthorized
    - AccessDeniedError → 403 Forbidden
    - SecurityMisconfigurationError → 500 Internal Server Error
    - Generic DomainException → 400 Bad Request
    """
    if isinstance(exc, AuthenticationRequiredError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, AccessDeniedError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, SecurityMisconfigurationError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


def domain_error_response(exc: DomainException) -> JSONResponse:
    """Render a domain exception as an ErrorResponse JSON body.

    Authentication failures carry a ``WWW-Authenticate: Bearer`` challenge;
    Basic is never offered since HTTP Basic login is disabled.
    """
    status_code = status_code_for(exc)
    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    error_response = ErrorResponse(
        error=ErrorDetail(
            code=exc.code,
            message=exc.message,
            details=exc.details,
        )
    )

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(),
        headers=headers,
    )


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Handle domain-layer exceptions raised by endpoints.

    Args:
        request: Incoming HTTP request
        exc: Domain exception instance

    Returns:
        JSON response with error details
    """
    logger.warning(
        "domain_exception",
        exception_type=type(exc).__name__,
        code=exc.code,
        message=exc.message,
        path=request.url.path,
    )
    return domain_error_response(exc)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors from request parsing.

    Args:
        request: Incoming HTTP request
        exc: Request validation error with detailed error information

    Returns:
        JSON response with validation error details (422 status)
    """
    logger.warning(
        "validation_error",
        errors=exc.errors(),
        path=request.url.path,
    )

    error_response = ErrorResponse(
        error=ErrorDetail(
            code="VALIDATION_ERROR",
            message="Request validation failed",
            details=exc.errors(),
        )
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content=error_response.model_dump(),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions as last resort.

    Logs full exception details while returning a safe generic message.

    Args:
        request: Incoming HTTP request
        exc: Unhandled exception

    Returns:
        JSON response with generic error message (500 status)
    """
    logger.exception(
        "unhandled_exception",
        exception_type=type(exc).__name__,
        error=str(exc),
        path=request.url.path,
    )

    error_response = ErrorResponse(
        error=ErrorDetail(
            code="INTERNAL_SERVER_ERROR",
            message="An unexpected error occurred",
            details=None,
        )
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(),
    )


class UnhandledErrorMiddleware:
    """Render unexpected exceptions as 500 JSON inside the middleware stack.

    Starlette runs the ``Exception`` handler in its outermost
    ``ServerErrorMiddleware``, past the CORS middleware, so the 500 would
    reach browsers without ``Access-Control-Allow-Origin``. Installed
    innermost, this renders it where CORS, security headers and the trace id
    still apply. Exceptions after the response has started are re-raised.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            if response_started:
                raise
            response = await generic_exception_handler(Request(scope), exc)
            await response(scope, receive, send)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    domain_handler: ExceptionHandler = domain_exception_handler
    app.add_exception_handler(DomainException, domain_handler)

    validation_handler: ExceptionHandler = validation_exception_handler
    app.add_exception_handler(RequestValidationError, validation_handler)

    # Catch-all
    generic_handler: ExceptionHandler = generic_exception_handler
    app.add_exception_handler(Exception, generic_handler)
