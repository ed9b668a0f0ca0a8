"""Query pipeline: validate, classify, search, synthesize, assemble."""

from __future__ import annotations

from typing import Optional

import structlog
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage

from insight_search.chat.formatting import format_ai_response
from insight_search.errors import RenderFailure, SearchFailure
from insight_search.llm.factory import first_text
from insight_search.pipeline.assembler import assemble_result
from insight_search.pipeline.classifier import QueryClassifier
from insight_search.pipeline.complexity import score_complexity
from insight_search.pipeline.models import (
    ClassificationDecision,
    ComplexityAssessment,
    GuideResult,
    RenderableResult,
    ResultItem,
    SynthesisOutcome,
)
from insight_search.pipeline.prompts import build_guide_prompt
from insight_search.pipeline.synthesizer import Synthesizer
from insight_search.pipeline.validation import validate_query
from insight_search.search.gateway import SearchGateway
from insight_search.search.models import SearchResultSet
from insight_search.streaming.activity import ActivitySink, NullActivitySink

logger = structlog.get_logger(__name__)

GUIDE_WEB_RESULTS = 10
GUIDE_IMAGE_RESULTS = 12
FAILURE_DISPLAY_RESULTS = 3


class QueryPipeline:
    """Run one query through the triage and synthesis pipeline."""

    def __init__(
        self,
        classifier: QueryClassifier,
        gateway: SearchGateway,
        synthesizer: Synthesizer,
        conversation_llm: BaseChatModel,
        activity_sink: Optional[ActivitySink] = None,
    ):
        self.classifier = classifier
        self.gateway = gateway
        self.synthesizer = synthesizer
        self.conversation_llm = conversation_llm
        self.activity_sink = activity_sink or NullActivitySink()

    async def run(self, raw_query: object) -> RenderableResult:
        """
        Answer a query with a structured, complexity-shaped analysis.

        Raises:
            ValidationError: If the query is rejected. No external call is made.
        """
        query = validate_query(raw_query)
        self.activity_sink.emit({"type": "query", "status": "received", "query": query})

        classification = ClassificationDecision()
        complexity: ComplexityAssessment | None = None
        search_results = SearchResultSet()

        try:
            classification = await self.classifier.classify(query)
            self.activity_sink.emit(
                {
                    "type": "classification",
                    "status": "success",
                    "isConversational": classification.is_conversational,
                    "needsDeepAnalysis": classification.needs_deep_analysis,
                }
            )

            if classification.is_conversational:
                reply = await self._converse(query)
                return RenderableResult(
                    query=query,
                    classification=classification,
                    analysis={"summary": reply, "keyPoints": []},
                    response=reply,
                )

            complexity = score_complexity(query)
            self.activity_sink.emit(
                {
                    "type": "complexity",
                    "status": "success",
                    "level": complexity.level,
                    "score": complexity.score,
                    "triggers": list(complexity.triggers),
                }
            )
            logger.info("Query complexity analysis", query=query, level=complexity.level, triggers=complexity.triggers)

            search_results = await self._search(query)

            if search_results.web_results:
                self.activity_sink.emit({"type": "llm", "status": "started", "level": complexity.level})
                outcome = await self.synthesizer.synthesize(
                    query,
                    complexity,
                    search_results.web_results,
                    deep_analysis=classification.needs_deep_analysis,
                )
                self.activity_sink.emit(
                    {"type": "llm", "status": outcome.status, "maxTokens": outcome.max_tokens, "reason": outcome.reason}
                )
            else:
                outcome = SynthesisOutcome.degraded(
                    f'No web results were found for "{query}". Try rephrasing or broadening the search.',
                    reason="no_results",
                )

            try:
                return assemble_result(query, complexity, search_results, outcome, classification)
            except Exception as e:
                raise RenderFailure(f"Failed to display results: {e}") from e

        except Exception as e:
            logger.error("Pipeline failed, returning degraded result", query=query, error=str(e), exc_info=True)
            self.activity_sink.emit({"type": "pipeline", "status": "error", "error": str(e)})
            return self._failure_result(query, complexity, classification, search_results, str(e))

    async def guide(self, raw_query: object) -> GuideResult:
        """
        Write a sectioned learning guide for the query.

        Raises:
            ValidationError: If the query is rejected
        """
        query = validate_query(raw_query)
        self.activity_sink.emit({"type": "query", "status": "received", "query": query, "variant": "guide"})

        if await self.classifier.is_conversational(query):
            reply = await self._converse(query)
            return GuideResult(query=query, text=reply, is_conversational=True)

        search_results = (await self._search(query)).top(GUIDE_WEB_RESULTS, GUIDE_IMAGE_RESULTS)
        prompt = build_guide_prompt(query, search_results.web_results, search_results.image_results)

        self.activity_sink.emit({"type": "llm", "status": "started", "variant": "guide"})
        response = await self.conversation_llm.ainvoke([HumanMessage(content=prompt)])
        text = format_ai_response(first_text(response) or "No response")
        self.activity_sink.emit({"type": "llm", "status": "success", "variant": "guide"})

        return GuideResult(
            query=query,
            text=text,
            web_results=search_results.web_results,
            image_results=search_results.image_results,
        )

    async def _converse(self, query: str) -> str:
        self.activity_sink.emit({"type": "llm", "status": "started", "variant": "conversational"})
        response = await self.conversation_llm.ainvoke([HumanMessage(content=query)])
        reply = first_text(response).strip() or "I'm sorry, I couldn't generate a response."
        self.activity_sink.emit({"type": "llm", "status": "success", "variant": "conversational"})
        return reply

    async def _search(self, query: str) -> SearchResultSet:
        """Search web and images; a failed search degrades to no results."""
        self.activity_sink.emit({"type": "search", "status": "started", "query": query})
        try:
            results = await self.gateway.search_all(query)
        except SearchFailure as e:
            logger.error("Search failed, continuing without results", query=query, kind=e.kind, error=str(e))
            self.activity_sink.emit({"type": "search", "status": "error", "query": query, "error": str(e)})
            return SearchResultSet()

        self.activity_sink.emit(
            {
                "type": "search",
                "status": "success",
                "query": query,
                "webResults": len(results.web_results),
                "imageResults": len(results.image_results),
            }
        )
        return results

    def _failure_result(
        self,
        query: str,
        complexity: ComplexityAssessment | None,
        classification: ClassificationDecision,
        search_results: SearchResultSet,
        error: str,
    ) -> RenderableResult:
        shown = search_results.top(FAILURE_DISPLAY_RESULTS, FAILURE_DISPLAY_RESULTS)
        return RenderableResult(
            query=query,
            complexity=complexity,
            classification=classification,
            search_results=[ResultItem.pair(web, None) for web in shown.web_results],
            images=shown.image_results,
            degraded=True,
            error=error,
        )
