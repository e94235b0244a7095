"""civils-api: HTTP backend shell with a stateless, CORS-aware security chain."""

__version__ = "0.1.0"
