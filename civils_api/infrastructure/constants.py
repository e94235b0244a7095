"""Application-wide constants and defaults."""

from civils_api.domain.security_policy import WILDCARD


class CorsDefaults:
    """Default CORS policy values for local development."""

    # Front-end dev servers (CRA-style and Vite)
    # TODO: move per-environment origins into deployment config once staging exists
    DEVELOPMENT_ORIGINS = ("http://localhost:3000", "http://localhost:5173")
    ALLOWED_METHODS = (WILDCARD,)
    ALLOWED_HEADERS = (WILDCARD,)
    EXPOSED_HEADERS = ("Authorization",)
    ALLOW_CREDENTIALS = True
    MAX_AGE_SECONDS = 3600  # Preflight cache duration (1 hour)

    # Hosts allowed over plain http:// in production
    LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})


class SessionDefaults:
    """Cookie names recognised as server-side session cookies."""

    COOKIE_NAMES = ("session", "sessionid", "JSESSIONID")


class SecurityDefaults:
    """Default authorization posture."""

    AUTHORIZATION = "permit_all"
    PUBLIC_PATHS = ("/api/v1/health",)

    HSTS_MAX_AGE = 31536000  # 1 year
