"""Merge pipeline outputs into a RenderableResult."""

from __future__ import annotations

from typing import Any

from insight_search.pipeline.models import (
    ClassificationDecision,
    ComplexityAssessment,
    RenderableResult,
    ResultItem,
    SynthesisOutcome,
)
from insight_search.search.models import SearchResultSet

DISPLAY_WEB_RESULTS = 6
DISPLAY_IMAGE_RESULTS = 6


def build_analysis(level: str, outcome: SynthesisOutcome) -> dict[str, Any]:
    """Shape the analysis block for the given complexity level.

    ``context`` appears for medium and deep only, with ``misconceptions``
    always a list. ``recommendations`` appears for deep only. ``tasks``
    appears whenever the model produced them.
    """
    if outcome.payload is None:
        return {"summary": outcome.raw_text or (outcome.reason or ""), "keyPoints": []}

    data = outcome.payload.as_dict()
    analysis: dict[str, Any] = {
        "summary": data["summary"],
        "keyPoints": data["keyPoints"],
        "analysis": data.get("analysis") or {},
    }

    if level != "simple":
        context = dict(data.get("context") or {})
        context["misconceptions"] = context.get("misconceptions") or []
        analysis["context"] = context

    if level == "deep":
        analysis["recommendations"] = data.get("recommendations") or []

    if data.get("tasks"):
        analysis["tasks"] = data["tasks"]

    return analysis


def assemble_result(
    query: str,
    complexity: ComplexityAssessment,
    search_results: SearchResultSet,
    outcome: SynthesisOutcome,
    classification: ClassificationDecision | None = None,
    *,
    web_limit: int = DISPLAY_WEB_RESULTS,
    image_limit: int = DISPLAY_IMAGE_RESULTS,
    error: str | None = None,
) -> RenderableResult:
    """
    Combine query, complexity, search results and synthesis into one result.

    Pure: the same inputs always give an equal result.
    """
    shown = search_results.top(web_limit, image_limit)
    images = shown.image_results
    items = [
        ResultItem.pair(web, images[index] if index < len(images) else None)
        for index, web in enumerate(shown.web_results)
    ]

    if outcome.status == "error" and error is None:
        error = outcome.reason

    return RenderableResult(
        query=query,
        complexity=complexity,
        classification=classification or ClassificationDecision(),
        analysis=build_analysis(complexity.level, outcome),
        search_results=items,
        images=list(images),
        degraded=outcome.status != "ok",
        error=error,
    )
