"""API schemas."""

from civils_api.presentation.schemas.error import ErrorDetail, ErrorResponse
from civils_api.presentation.schemas.security import (
    CorsPolicyResponse,
    SecurityPolicyResponse,
)


__all__ = [
    "CorsPolicyResponse",
    "ErrorDetail",
    "ErrorResponse",
    "SecurityPolicyResponse",
]
