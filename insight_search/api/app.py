"""FastAPI application initialization and configuration."""

from contextlib import asynccontextmanager
from typing import Optional

import socketio
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from insight_search import __version__
from insight_search.api.rate_limit import RateLimitMiddleware
from insight_search.api.routes import chat_router, health_router, pages_router, search_router
from insight_search.api.services import AppServices, build_services
from insight_search.api.socketio_server import sio
from insight_search.config.logging_config import configure_logging
from insight_search.config.settings import Settings, get_settings
from insight_search.streaming.activity import SocketIOActivitySink

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI app.

    Builds the shared services unless they were injected.
    """
    logger.info("Starting up Insight Search...")

    settings: Settings = app.state.settings
    if getattr(app.state, "services", None) is None:
        app.state.services = build_services(settings, SocketIOActivitySink(sio))

    logger.info(
        "Insight Search started successfully",
        llm_mode=settings.llm_mode,
        web_provider=settings.web_search_provider,
        image_provider=settings.image_search_provider,
    )

    yield

    logger.info("Insight Search shutdown complete")


def create_app(settings: Optional[Settings] = None, services: Optional[AppServices] = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.debug, settings.log_level, settings.json_logs)

    app = FastAPI(
        title="Insight Search",
        description="Query triage, web and image search, and LLM synthesis",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )

    app.include_router(pages_router)
    app.include_router(health_router)
    app.include_router(search_router)
    app.include_router(chat_router)

    logger.info("FastAPI app created")

    return app


def create_asgi_app(app: Optional[FastAPI] = None) -> socketio.ASGIApp:
    """Mount the Socket.IO server around the FastAPI app."""
    return socketio.ASGIApp(sio, other_asgi_app=app or create_app())
