"""Main entry point for running the server."""

import uvicorn

from insight_search.config.settings import get_settings


def main():
    """Start the ASGI server (FastAPI + Socket.IO)."""
    settings = get_settings()

    uvicorn.run(
        "insight_search.api.app:create_asgi_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
