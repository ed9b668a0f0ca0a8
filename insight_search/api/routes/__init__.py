"""API routes."""

from insight_search.api.routes.chat import router as chat_router
from insight_search.api.routes.health import router as health_router
from insight_search.api.routes.pages import router as pages_router
from insight_search.api.routes.search import router as search_router

__all__ = [
    "health_router",
    "pages_router",
    "search_router",
    "chat_router",
]
