"""LLM synthesis of search snippets into a structured analysis."""

from __future__ import annotations

import json
import re
from typing import Callable, Sequence

import structlog
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage
from pydantic import ValidationError as PydanticValidationError

from insight_search.errors import SynthesisParseError
from insight_search.llm.factory import first_text
from insight_search.pipeline.models import AnalysisPayload, ComplexityAssessment, ComplexityLevel, SynthesisOutcome
from insight_search.pipeline.prompts import SNIPPET_COUNTS, build_synthesis_prompt
from insight_search.search.models import WebResult

logger = structlog.get_logger(__name__)

TOKEN_BUDGETS: dict[ComplexityLevel, int] = {"simple": 600, "medium": 1000, "deep": 1500}
SYNTHESIS_TEMPERATURE = 0.7

_FENCED_JSON = re.compile(r"```json\s*\n(.*?)\n?\s*```", re.S)
_BARE_OBJECT = re.compile(r"\{.*\}", re.S)


def parse_analysis(raw_text: str) -> AnalysisPayload:
    """
    Extract and validate the JSON analysis in a model reply.

    A fenced ```json block wins; otherwise the greedy span from the first
    ``{`` to the last ``}`` is used.

    Raises:
        SynthesisParseError: ``no_json_found``, ``malformed_json`` or
            ``missing_required_fields``
    """
    match = _FENCED_JSON.search(raw_text)
    if match:
        candidate = match.group(1)
    else:
        match = _BARE_OBJECT.search(raw_text)
        if not match:
            raise SynthesisParseError("no_json_found", "No JSON object found in model response")
        candidate = match.group(0)

    try:
        data = json.loads(candidate.strip())
    except json.JSONDecodeError as e:
        raise SynthesisParseError("malformed_json", f"Model returned malformed JSON: {e}") from e

    if not isinstance(data, dict):
        raise SynthesisParseError("malformed_json", "Model JSON is not an object")

    missing = [key for key in ("summary", "keyPoints") if key not in data]
    if missing:
        raise SynthesisParseError("missing_required_fields", f"Missing required fields: {', '.join(missing)}")

    try:
        return AnalysisPayload.model_validate(data)
    except PydanticValidationError as e:
        raise SynthesisParseError("missing_required_fields", f"Invalid required fields: {e}") from e


class Synthesizer:
    """Prompt the model with a complexity-specific schema and parse its reply.

    One model is held per complexity level so each carries its own output
    budget.
    """

    def __init__(self, model_for_budget: Callable[[int], BaseChatModel]):
        self._model_for_budget = model_for_budget
        self._models: dict[int, BaseChatModel] = {}

    def model_for(self, level: ComplexityLevel) -> BaseChatModel:
        budget = TOKEN_BUDGETS[level]
        if budget not in self._models:
            self._models[budget] = self._model_for_budget(budget)
        return self._models[budget]

    async def synthesize(
        self,
        query: str,
        complexity: ComplexityAssessment,
        web_results: Sequence[WebResult],
        deep_analysis: bool = False,
    ) -> SynthesisOutcome:
        """
        Produce a tagged synthesis outcome. Never raises for parse or model errors.

        Args:
            query: Validated query
            complexity: Complexity assessment selecting schema and budget
            web_results: Normalized web results; the top 3 or 5 are embedded
            deep_analysis: Ask for a ``tasks`` list as well

        Returns:
            SynthesisOutcome tagged ok, degraded or error
        """
        level = complexity.level
        budget = TOKEN_BUDGETS[level]
        top = list(web_results[: SNIPPET_COUNTS[level]])
        prompt = build_synthesis_prompt(query, level, top, include_tasks=deep_analysis)

        logger.info("Synthesizing analysis", level=level, max_tokens=budget, snippets=len(top), tasks=deep_analysis)

        try:
            response = await self.model_for(level).ainvoke([HumanMessage(content=prompt)])
        except Exception as e:
            logger.error("Synthesis model call failed", error=str(e), level=level)
            return SynthesisOutcome.error(str(e), max_tokens=budget)

        raw_text = first_text(response)
        try:
            payload = parse_analysis(raw_text)
        except SynthesisParseError as e:
            logger.warning("Synthesis parse failed, keeping raw text", kind=e.kind, error=str(e))
            return SynthesisOutcome.degraded(raw_text, reason=e.kind, max_tokens=budget)

        return SynthesisOutcome.ok(payload, raw_text=raw_text, max_tokens=budget)
