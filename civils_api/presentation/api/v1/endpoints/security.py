"""Security posture introspection endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from civils_api.domain.security_policy import SecurityPolicy
from civils_api.presentation.api.dependencies import get_security_policy
from civils_api.presentation.schemas.security import SecurityPolicyResponse


router = APIRouter(prefix="/security", tags=["security"])


@router.get(
    "/policy",
    response_model=SecurityPolicyResponse,
    status_code=status.HTTP_200_OK,
    summary="Active Security Policy",
    description="""
Read-only view of the security posture the API runs with:

- authorization rule and public paths
- session handling mode (always stateless)
- disabled login/CSRF mechanisms
- CORS policy (origins, methods, headers, credentials, max age)

Front-end developers can use it to check why a cross-origin call is rejected.
    """,
)
async def read_security_policy(
    policy: Annotated[SecurityPolicy, Depends(get_security_policy)],
) -> SecurityPolicyResponse:
    """Return the active security policy."""
    return SecurityPolicyResponse.from_policy(policy)
