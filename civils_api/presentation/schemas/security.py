"""Security posture response schemas."""

from pydantic import BaseModel, Field

from civils_api.domain.security_policy import (
    AccessRule,
    CorsPolicy,
    SecurityPolicy,
    SessionCreationPolicy,
)


class CorsPolicyResponse(BaseModel):
    """Active CORS policy."""

    allowed_origins: list[str]
    allowed_methods: list[str]
    allowed_headers: list[str]
    exposed_headers: list[str]
    allow_credentials: bool
    max_age_seconds: int

    @classmethod
    def from_policy(cls, policy: CorsPolicy) -> "CorsPolicyResponse":
        return cls(
            allowed_origins=list(policy.allowed_origins),
            allowed_methods=list(policy.allowed_methods),
            allowed_headers=list(policy.allowed_headers),
            exposed_headers=list(policy.exposed_headers),
            allow_credentials=policy.allow_credentials,
            max_age_seconds=policy.max_age_seconds,
        )


class SecurityPolicyResponse(BaseModel):
    """Active security posture of the API."""

    authorization: AccessRule = Field(..., description="Rule applied to non-public paths")
    session_creation: SessionCreationPolicy = Field(..., description="Session handling mode")
    public_paths: list[str] = Field(..., description="Paths exempt from authorization")
    csrf_enabled: bool
    form_login_enabled: bool
    http_basic_enabled: bool
    cors: CorsPolicyResponse

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "authorization": "permit_all",
                    "session_creation": "stateless",
                    "public_paths": ["/api/v1/health"],
                    "csrf_enabled": False,
                    "form_login_enabled": False,
                    "http_basic_enabled": False,
                    "cors": {
                        "allowed_origins": ["http://localhost:3000", "http://localhost:5173"],
                        "allowed_methods": ["*"],
                        "allowed_headers": ["*"],
                        "exposed_headers": ["Authorization"],
                        "allow_credentials": True,
                        "max_age_seconds": 3600,
                    },
                }
            ]
        }
    }

    @classmethod
    def from_policy(cls, policy: SecurityPolicy) -> "SecurityPolicyResponse":
        """Build the response from the active policy."""
        return cls(
            authorization=policy.authorization,
            session_creation=policy.session_creation,
            public_paths=list(policy.public_paths),
            csrf_enabled=policy.csrf_enabled,
            form_login_enabled=policy.form_login_enabled,
            http_basic_enabled=policy.http_basic_enabled,
            cors=CorsPolicyResponse.from_policy(policy.cors),
        )
