"""Main entry point for the FastAPI application."""

import uvicorn

from civils_api.infrastructure.config import get_settings


def main() -> None:
    """Run the application with uvicorn.

    The app is built through its factory inside each worker, so the security
    policy is validated at worker startup.
    """
    settings = get_settings()

    uvicorn.run(
        "civils_api.presentation.api:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        workers=settings.workers,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
