"""Error response schemas."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Error detail schema."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Any | None = Field(None, description="Additional error details")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": "AUTHENTICATION_REQUIRED",
                    "message": "A bearer token is required to access this resource",
                    "details": None,
                },
                {
                    "code": "ACCESS_DENIED",
                    "message": "Access to this resource is denied",
                    "details": {"path": "/api/v1/security/policy"},
                },
            ]
        }
    }


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: ErrorDetail = Field(..., description="Error information")
