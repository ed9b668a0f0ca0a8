"""Guide ("analyze") endpoint models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class TextBlock(BaseModel):
    """One block of the structured answer."""

    type: Literal["text"] = "text"
    text: str


class SerpResults(BaseModel):
    """Raw-ish search results shown next to the guide."""

    organic_results: list[dict[str, Any]] = Field(default_factory=list)
    image_results: list[dict[str, Any]] = Field(default_factory=list)


class AnalyzeResponse(BaseModel):
    """Guide answer."""

    model_config = ConfigDict(populate_by_name=True)

    query: str
    structured_answer: list[TextBlock] = Field(..., alias="structuredAnswer")
    serp_results: SerpResults = Field(default_factory=SerpResults, alias="serpResults")
    is_conversational: bool = Field(default=False, alias="isConversational")
    has_web_results: bool = Field(default=False, alias="hasWebResults")
