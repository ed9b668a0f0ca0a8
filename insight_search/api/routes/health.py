"""Health check endpoint."""

from fastapi import APIRouter, Request

from insight_search import __version__
from insight_search.api.models.health import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Check API health status."""
    settings = request.app.state.settings
    return HealthResponse(
        status="healthy",
        version=__version__,
        llm_mode=settings.llm_mode,
        web_provider=settings.web_search_provider,
        image_provider=settings.image_search_provider,
    )
