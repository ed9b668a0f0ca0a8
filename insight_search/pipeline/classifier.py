"""Query classifier: conversational vs. search, simple vs. deep analysis.

Each decision is a :class:`BinaryDecision`. The model-backed decision is
wrapped in a :class:`FallbackDecision` so a failed LLM call never fails the
request.
"""

from __future__ import annotations

import asyncio
import re
from typing import Protocol, Sequence

import structlog
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage

from insight_search.errors import ClassificationFailure
from insight_search.llm.factory import first_text
from insight_search.pipeline.models import ClassificationDecision
from insight_search.pipeline.prompts import CONVERSATIONAL_PROMPT, DEEP_ANALYSIS_PROMPT

logger = structlog.get_logger(__name__)


class BinaryDecision(Protocol):
    """A yes/no decision about a query."""

    async def decide(self, query: str) -> bool: ...


class LLMDecision:
    """Ask the model to answer with exactly one of two tokens.

    Returns True only when the normalized reply equals ``positive``. Any other
    output is the negative branch. Transport failures raise
    :class:`ClassificationFailure`.
    """

    def __init__(self, llm: BaseChatModel, prompt_template: str, positive: str, name: str = "decision"):
        self.llm = llm
        self.prompt_template = prompt_template
        self.positive = positive
        self.name = name

    async def decide(self, query: str) -> bool:
        prompt = self.prompt_template.format(query=query)
        try:
            response = await self.llm.ainvoke([HumanMessage(content=prompt)])
        except Exception as e:
            raise ClassificationFailure(f"{self.name} model call failed: {e}") from e

        answer = first_text(response).strip().strip(".\"'").lower()
        logger.debug("Classifier answer", decision=self.name, answer=answer[:50])
        return answer == self.positive


class HeuristicDecision:
    """Deterministic regex matcher.

    ``positive`` patterns make the decision True. ``negative`` patterns make it
    False only when no positive pattern matched. Otherwise ``default``.
    """

    def __init__(
        self,
        positive: Sequence[re.Pattern[str]],
        negative: Sequence[re.Pattern[str]] = (),
        default: bool = False,
    ):
        self.positive = tuple(positive)
        self.negative = tuple(negative)
        self.default = default

    async def decide(self, query: str) -> bool:
        if any(pattern.search(query) for pattern in self.positive):
            return True
        if any(pattern.search(query) for pattern in self.negative):
            return False
        return self.default


class ConstantDecision:
    """Always returns the same answer."""

    def __init__(self, value: bool):
        self.value = value

    async def decide(self, query: str) -> bool:
        return self.value


class FallbackDecision:
    """Use ``primary``; on any failure log and use ``fallback`` instead."""

    def __init__(self, primary: BinaryDecision, fallback: BinaryDecision, name: str = "decision"):
        self.primary = primary
        self.fallback = fallback
        self.name = name

    async def decide(self, query: str) -> bool:
        try:
            return await self.primary.decide(query)
        except Exception as e:
            logger.warning("Classifier falling back to heuristic", decision=self.name, error=str(e))
            return await self.fallback.decide(query)


# Information-seeking patterns: any match means a search is worthwhile.
INFORMATION_PATTERNS = (
    re.compile(r"\bhow (to|do|does|can|much|many)\b", re.I),
    re.compile(r"\b(what|why|where|when|who|which)\b", re.I),
    re.compile(r"\b(latest|news|current|today|recent|trending|update)\b", re.I),
    re.compile(r"\b(price|cost|weather|forecast|score|schedule)\b", re.I),
    re.compile(r"\bnear me\b", re.I),
    re.compile(r"\b(in|at|near) [A-Z][a-z]+", re.U),
    re.compile(r"\b(images?|photos?|pictures?)\b", re.I),
    re.compile(r"\?"),
)

SMALL_TALK_PATTERNS = (
    re.compile(
        r"^\s*(hi|hello|hey|yo|howdy|greetings|good (morning|afternoon|evening|night)|"
        r"thanks|thank you|bye|goodbye|see you|ok|okay|cool|nice|great)\b",
        re.I,
    ),
    re.compile(r"\bhow are you\b", re.I),
    re.compile(r"\b(who are you|what's up|whats up)\b", re.I),
)


def search_heuristic() -> HeuristicDecision:
    """True means "search". Small talk without an information pattern means conversational."""
    return HeuristicDecision(positive=INFORMATION_PATTERNS, negative=SMALL_TALK_PATTERNS, default=True)


class _NotDecision:
    def __init__(self, inner: BinaryDecision):
        self.inner = inner

    async def decide(self, query: str) -> bool:
        return not await self.inner.decide(query)


class QueryClassifier:
    """Runs both routing decisions for a query."""

    def __init__(self, conversational: BinaryDecision, deep_analysis: BinaryDecision):
        self.conversational = conversational
        self.deep_analysis = deep_analysis

    @classmethod
    def from_llm(cls, llm: BaseChatModel) -> "QueryClassifier":
        """Wire the model-backed decisions with their fallbacks."""
        conversational = FallbackDecision(
            LLMDecision(llm, CONVERSATIONAL_PROMPT, positive="conversational", name="conversational"),
            _NotDecision(search_heuristic()),
            name="conversational",
        )
        deep_analysis = FallbackDecision(
            LLMDecision(llm, DEEP_ANALYSIS_PROMPT, positive="analyze", name="deep_analysis"),
            ConstantDecision(False),
            name="deep_analysis",
        )
        return cls(conversational, deep_analysis)

    async def is_conversational(self, query: str) -> bool:
        return await self.conversational.decide(query)

    async def needs_deep_analysis(self, query: str) -> bool:
        return await self.deep_analysis.decide(query)

    async def classify(self, query: str) -> ClassificationDecision:
        """Run both decisions concurrently."""
        is_conversational, needs_deep_analysis = await asyncio.gather(
            self.is_conversational(query),
            self.needs_deep_analysis(query),
        )
        decision = ClassificationDecision(
            is_conversational=is_conversational,
            needs_deep_analysis=needs_deep_analysis,
        )
        logger.info(
            "Query classified",
            query=query[:100],
            conversational=decision.is_conversational,
            deep_analysis=decision.needs_deep_analysis,
        )
        return decision
