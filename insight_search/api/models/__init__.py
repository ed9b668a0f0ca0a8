"""API request and response models."""

from insight_search.api.models.analyze import AnalyzeResponse, SerpResults, TextBlock
from insight_search.api.models.chat import ChatResponse
from insight_search.api.models.health import HealthResponse

__all__ = [
    # Analyze
    "AnalyzeResponse",
    "SerpResults",
    "TextBlock",
    # Chat
    "ChatResponse",
    # Health
    "HealthResponse",
]
