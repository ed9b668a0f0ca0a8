"""Data models passed between pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from insight_search.search.models import ImageResult, WebResult

ComplexityLevel = Literal["simple", "medium", "deep"]


class ComplexityAssessment(BaseModel):
    """Heuristic verbosity bucket for a query."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0)
    level: ComplexityLevel
    triggers: tuple[str, ...] = Field(default=(), description="Matched categories in table order")


class ClassificationDecision(BaseModel):
    """Best-effort routing flags for a query."""

    model_config = ConfigDict(populate_by_name=True)

    is_conversational: bool = Field(default=False, alias="isConversational")
    needs_deep_analysis: bool = Field(default=False, alias="needsDeepAnalysis")


class AnalysisPayload(BaseModel):
    """Structured analysis extracted from a model reply.

    Only ``summary`` and ``keyPoints`` are required; anything else the model
    returned is kept as-is.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    summary: str
    key_points: list[str] = Field(..., alias="keyPoints")
    analysis: dict[str, Any] | None = None
    context: dict[str, Any] | None = None
    recommendations: list[Any] | None = None
    tasks: list[Any] | None = None

    def as_dict(self) -> dict[str, Any]:
        """Dump with original (camelCase) keys, dropping absent optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class SynthesisOutcome:
    """Tagged synthesis result: ``ok``, ``degraded`` or ``error``."""

    status: Literal["ok", "degraded", "error"]
    payload: AnalysisPayload | None = None
    raw_text: str = ""
    reason: str | None = None
    max_tokens: int | None = None

    @classmethod
    def ok(cls, payload: AnalysisPayload, raw_text: str = "", max_tokens: int | None = None) -> "SynthesisOutcome":
        return cls("ok", payload=payload, raw_text=raw_text, max_tokens=max_tokens)

    @classmethod
    def degraded(cls, raw_text: str, reason: str, max_tokens: int | None = None) -> "SynthesisOutcome":
        return cls("degraded", raw_text=raw_text, reason=reason, max_tokens=max_tokens)

    @classmethod
    def error(cls, reason: str, max_tokens: int | None = None) -> "SynthesisOutcome":
        return cls("error", reason=reason, max_tokens=max_tokens)


class ResultItem(BaseModel):
    """A displayed web result with the image shown next to it."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    url: str = ""
    snippet: str = ""
    images: list[ImageResult] = Field(default_factory=list)

    @classmethod
    def pair(cls, web: WebResult, image: ImageResult | None) -> "ResultItem":
        return cls(title=web.title, url=web.url, snippet=web.snippet, images=[image] if image else [])


class RenderableResult(BaseModel):
    """Final per-request artifact handed to the HTML or JSON renderer."""

    model_config = ConfigDict(populate_by_name=True)

    query: str
    complexity: ComplexityAssessment | None = None
    classification: ClassificationDecision = Field(default_factory=ClassificationDecision)
    analysis: dict[str, Any] | None = None
    search_results: list[ResultItem] = Field(default_factory=list, alias="searchResults")
    images: list[ImageResult] = Field(default_factory=list)
    response: str | None = Field(default=None, description="Free-form reply for conversational queries")
    degraded: bool = False
    error: str | None = None

    def to_json(self) -> dict[str, Any]:
        """Serialize with camelCase keys for JSON clients."""
        data = self.model_dump(mode="json", by_alias=True, exclude={"classification"})
        data["isConversational"] = self.classification.is_conversational
        data["needsDeepAnalysis"] = self.classification.needs_deep_analysis
        return data


@dataclass
class GuideResult:
    """Output of the sectioned-guide variant of the pipeline."""

    query: str
    text: str
    web_results: list[WebResult] = field(default_factory=list)
    image_results: list[ImageResult] = field(default_factory=list)
    is_conversational: bool = False

    @property
    def has_web_results(self) -> bool:
        return bool(self.web_results or self.image_results)
