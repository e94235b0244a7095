"""Security and CORS policy models.

The policies are immutable pydantic models built once at startup and read on
every request. Being frozen, they are hashable and safe to share across
concurrent request handlers without locking.
"""

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


WILDCARD = "*"


class AccessRule(StrEnum):
    """Authorization rule applied to every non-public request."""

    PERMIT_ALL = "permit_all"
    DENY_ALL = "deny_all"
    AUTHENTICATED = "authenticated"


class SessionCreationPolicy(StrEnum):
    """Server-side session handling mode."""

    STATELESS = "stateless"


def _normalize_tokens(values: tuple[str, ...] | list[str]) -> tuple[str, ...]:
    """Strip blanks and drop duplicates, keeping first-seen order."""
    seen: dict[str, None] = {}
    for value in values:
        token = value.strip()
        if token:
            seen.setdefault(token, None)
    return tuple(seen)


class CorsPolicy(BaseModel):
    """Cross-origin resource sharing policy.

    Attributes:
        allowed_origins: Exact origins allowed to read responses (``*`` for any)
        allowed_methods: HTTP methods allowed cross-origin (``*`` for any)
        allowed_headers: Request headers allowed cross-origin (``*`` for any)
        exposed_headers: Response headers visible to client scripts
        allow_credentials: Whether cookies/auth headers are permitted cross-origin
        max_age_seconds: Browser preflight cache duration

    Example:
        >>> policy = CorsPolicy(allowed_origins=("http://localhost:3000/",))
        >>> policy.allowed_origins
        ('http://localhost:3000',)
    """

    model_config = ConfigDict(frozen=True)

    allowed_origins: tuple[str, ...] = ()
    allowed_methods: tuple[str, ...] = ("GET", "HEAD", "POST")
    allowed_headers: tuple[str, ...] = ()
    exposed_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age_seconds: int = Field(default=1800, ge=0)

    @field_validator("allowed_origins", mode="after")
    @classmethod
    def normalize_origins(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Drop trailing slashes so origins compare exactly with the Origin header."""
        return _normalize_tokens(
            [origin if origin.strip() == WILDCARD else origin.strip().rstrip("/") for origin in v]
        )

    @field_validator("allowed_methods", mode="after")
    @classmethod
    def normalize_methods(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Upper-case method tokens (HTTP methods are case-sensitive upper-case)."""
        return _normalize_tokens([method.upper() for method in v])

    @field_validator("allowed_headers", "exposed_headers", mode="after")
    @classmethod
    def normalize_headers(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Strip and de-duplicate header names."""
        return _normalize_tokens(v)

    @model_validator(mode="after")
    def check_credentials_with_wildcard_origin(self) -> "CorsPolicy":
        """Reject credentials combined with a wildcard origin.

        Browsers refuse ``Access-Control-Allow-Origin: *`` on credentialed
        requests, so this pairing must fail loudly at startup.
        """
        if self.allow_credentials and WILDCARD in self.allowed_origins:
            raise ValueError(
                "allow_credentials cannot be combined with a wildcard origin; "
                "list the allowed origins explicitly"
            )
        return self

    @property
    def allows_any_origin(self) -> bool:
        """Check if every origin is allowed."""
        return WILDCARD in self.allowed_origins

    @property
    def allows_any_method(self) -> bool:
        """Check if every HTTP method is allowed."""
        return WILDCARD in self.allowed_methods

    @property
    def allows_any_header(self) -> bool:
        """Check if every request header is allowed."""
        return WILDCARD in self.allowed_headers

    def allows_origin(self, origin: str) -> bool:
        """Check whether ``origin`` may read responses.

        Matching is exact after trailing slash removal; no subdomain wildcards.
        """
        if self.allows_any_origin:
            return True
        return origin.strip().rstrip("/") in self.allowed_origins


class SecurityPolicy(BaseModel):
    """Complete security posture of the HTTP pipeline.

    Form login, HTTP Basic and CSRF protection are pinned to ``False`` and
    cannot be switched on.
    """

    model_config = ConfigDict(frozen=True)

    authorization: AccessRule = AccessRule.PERMIT_ALL
    session_creation: SessionCreationPolicy = SessionCreationPolicy.STATELESS
    session_cookie_names: tuple[str, ...] = ()
    public_paths: tuple[str, ...] = ()
    csrf_enabled: Literal[False] = False
    form_login_enabled: Literal[False] = False
    http_basic_enabled: Literal[False] = False
    cors: CorsPolicy = Field(default_factory=CorsPolicy)

    @field_validator("session_cookie_names", "public_paths", mode="after")
    @classmethod
    def normalize_names(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Strip and de-duplicate entries."""
        return _normalize_tokens(v)

    def is_public_path(self, path: str) -> bool:
        """Check whether ``path`` is exempt from the authorization rule."""
        return any(
            path == prefix or path.startswith(prefix.rstrip("/") + "/")
            for prefix in self.public_paths
        )
