"""Application configuration with environment variable support."""

from functools import lru_cache
from urllib.parse import urlsplit
from typing import Annotated, Any, cast

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from civils_api.domain.security_policy import WILDCARD, AccessRule
from civils_api.infrastructure.constants import (
    CorsDefaults,
    SecurityDefaults,
    SessionDefaults,
)


# List settings accept comma-separated strings from the environment
CommaSeparatedList = Annotated[list[str], NoDecode]


def _is_secure_origin(origin: str) -> bool:
    """HTTPS origin, or plain HTTP to a loopback host with no userinfo."""
    parts = urlsplit(origin)
    if parts.scheme == "https":
        return True
    return (
        parts.scheme == "http"
        and not parts.username
        and parts.hostname in CorsDefaults.LOOPBACK_HOSTS
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="civils-api", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    app_env: str = Field(default="development", alias="APP_ENV")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")
    workers: int = Field(default=1, alias="WORKERS")
    reload: bool = Field(default=False, alias="RELOAD")

    # CORS
    cors_origins: CommaSeparatedList = Field(
        default=list(CorsDefaults.DEVELOPMENT_ORIGINS), alias="CORS_ORIGINS"
    )
    cors_allow_credentials: bool = Field(
        default=CorsDefaults.ALLOW_CREDENTIALS, alias="CORS_ALLOW_CREDENTIALS"
    )
    cors_allow_methods: CommaSeparatedList = Field(
        default=list(CorsDefaults.ALLOWED_METHODS), alias="CORS_ALLOW_METHODS"
    )
    cors_allow_headers: CommaSeparatedList = Field(
        default=list(CorsDefaults.ALLOWED_HEADERS), alias="CORS_ALLOW_HEADERS"
    )
    cors_expose_headers: CommaSeparatedList = Field(
        default=list(CorsDefaults.EXPOSED_HEADERS), alias="CORS_EXPOSE_HEADERS"
    )
    cors_max_age: int = Field(
        default=CorsDefaults.MAX_AGE_SECONDS,
        alias="CORS_MAX_AGE",
        description="Preflight cache duration in seconds",
    )

    # Security
    security_authorization: AccessRule = Field(
        default=AccessRule(SecurityDefaults.AUTHORIZATION),
        alias="SECURITY_AUTHORIZATION",
        description="Authorization rule: permit_all, deny_all or authenticated",
    )
    security_public_paths: CommaSeparatedList = Field(
        default=list(SecurityDefaults.PUBLIC_PATHS),
        alias="SECURITY_PUBLIC_PATHS",
        description="Path prefixes exempt from the authorization rule",
    )
    session_cookie_names: CommaSeparatedList = Field(
        default=list(SessionDefaults.COOKIE_NAMES),
        alias="SESSION_COOKIE_NAMES",
        description="Cookie names suppressed by the stateless session policy",
    )

    # API
    api_v1_prefix: str = Field(default="/api/v1", alias="API_V1_PREFIX")
    docs_url: str = Field(default="/docs", alias="DOCS_URL")
    redoc_url: str = Field(default="/redoc", alias="REDOC_URL")
    openapi_url: str = Field(default="/openapi.json", alias="OPENAPI_URL")

    @field_validator(
        "cors_origins",
        "cors_allow_methods",
        "cors_allow_headers",
        "cors_expose_headers",
        "security_public_paths",
        "session_cookie_names",
        mode="before",
    )
    @classmethod
    def parse_comma_separated(cls, v: Any) -> list[str]:
        """Parse list settings from a comma-separated string or list."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return cast("list[str]", v)

    @field_validator("security_authorization", mode="before")
    @classmethod
    def parse_access_rule(cls, v: Any) -> Any:
        """Accept access rule names in any case (PERMIT_ALL, permit-all)."""
        if isinstance(v, str):
            return v.strip().lower().replace("-", "_")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins_https(cls, v: list[str], info: Any) -> list[str]:
        """Validate CORS origins use HTTPS in production."""
        app_env = info.data.get("app_env", "development")
        if app_env.lower() == "production":
            for origin in v:
                if origin == WILDCARD:
                    continue
                if not _is_secure_origin(origin):
                    raise ValueError(
                        f"Production CORS origins must use HTTPS: {origin}. "
                        f"Only localhost is allowed with http:// for testing."
                    )
        return v

    @field_validator("cors_max_age")
    @classmethod
    def validate_cors_max_age(cls, v: int) -> int:
        """Validate preflight max age is not negative."""
        if v < 0:
            raise ValueError("CORS_MAX_AGE must be zero or a positive number of seconds")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
