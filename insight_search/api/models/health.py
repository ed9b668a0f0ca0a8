"""Health check models."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy", description="Service health status")
    version: str = Field(default="1.0.0", description="API version")
    llm_mode: str = Field(default="live", description="live or mock")
    web_provider: str = Field(..., description="Configured web search provider")
    image_provider: str = Field(..., description="Configured image search provider")
