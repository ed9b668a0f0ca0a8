"""Tests for the query classifier."""

import asyncio
import time

import pytest

from insight_search.errors import ClassificationFailure
from insight_search.pipeline.classifier import (
    ConstantDecision,
    FallbackDecision,
    HeuristicDecision,
    LLMDecision,
    QueryClassifier,
    search_heuristic,
)
from insight_search.pipeline.prompts import CONVERSATIONAL_PROMPT, DEEP_ANALYSIS_PROMPT
from tests.mocks import MockChatModel


class SlowDecision:
    def __init__(self, value: bool, delay: float):
        self.value = value
        self.delay = delay

    async def decide(self, query: str) -> bool:
        await asyncio.sleep(self.delay)
        return self.value


@pytest.mark.parametrize(
    ("reply", "expected"),
    [("conversational", True), ("  Conversational.\n", True), ("search", False), ("I think conversational", False)],
)
async def test_llm_decision_matches_positive_token_only(reply, expected):
    decision = LLMDecision(MockChatModel([reply]), CONVERSATIONAL_PROMPT, positive="conversational")

    assert await decision.decide("hello") is expected


async def test_llm_decision_prompt_quotes_query():
    llm = MockChatModel(["simple"])
    decision = LLMDecision(llm, DEEP_ANALYSIS_PROMPT, positive="analyze")

    await decision.decide("plan a trip to Japan")

    assert llm.prompts[0].startswith('Analyze this query: "plan a trip to Japan"')
    assert '"analyze" or "simple"' in llm.prompts[0]


async def test_llm_decision_reads_first_content_block():
    llm = MockChatModel([[{"type": "text", "text": "analyze"}, {"type": "text", "text": "simple"}]])
    decision = LLMDecision(llm, DEEP_ANALYSIS_PROMPT, positive="analyze")

    assert await decision.decide("x") is True


async def test_llm_decision_raises_on_transport_failure():
    decision = LLMDecision(MockChatModel(error=ConnectionError("down")), CONVERSATIONAL_PROMPT, "conversational")

    with pytest.raises(ClassificationFailure, match="down"):
        await decision.decide("hello")


async def test_fallback_uses_primary_when_it_works():
    decision = FallbackDecision(ConstantDecision(True), ConstantDecision(False))

    assert await decision.decide("q") is True


async def test_fallback_uses_fallback_on_failure():
    failing = LLMDecision(MockChatModel(error=TimeoutError("slow")), CONVERSATIONAL_PROMPT, "conversational")
    decision = FallbackDecision(failing, ConstantDecision(True))

    assert await decision.decide("q") is True


@pytest.mark.parametrize(
    ("query", "searches"),
    [
        ("how to bake bread", True),
        ("latest news on elections", True),
        ("weather near me", True),
        ("restaurants in Paris", True),
        ("show me photos of owls", True),
        ("hi there", False),
        ("thank you so much", False),
        ("hello, how are you", False),
        ("hmm", True),
    ],
)
async def test_search_heuristic(query, searches):
    assert await search_heuristic().decide(query) is searches


async def test_heuristic_default():
    assert await HeuristicDecision(positive=(), default=False).decide("anything") is False


async def test_is_conversational_falls_back_to_heuristic():
    classifier = QueryClassifier.from_llm(MockChatModel(error=ConnectionError("down")))

    assert await classifier.is_conversational("hi there") is True
    assert await classifier.is_conversational("latest AI news") is False
    assert await classifier.is_conversational("zebra") is False


async def test_unexpected_reply_means_search():
    classifier = QueryClassifier.from_llm(MockChatModel(["banana"]))

    assert await classifier.is_conversational("hi there") is False


async def test_needs_deep_analysis_fails_closed():
    classifier = QueryClassifier.from_llm(MockChatModel(error=ConnectionError("down")))

    assert await classifier.needs_deep_analysis("compare every cloud provider in depth") is False


async def test_needs_deep_analysis_positive():
    classifier = QueryClassifier.from_llm(MockChatModel(["analyze"]))

    assert await classifier.needs_deep_analysis("plan my startup launch") is True


async def test_classify_runs_decisions_concurrently():
    classifier = QueryClassifier(SlowDecision(False, 0.2), SlowDecision(True, 0.2))

    start = time.perf_counter()
    decision = await classifier.classify("q")
    elapsed = time.perf_counter() - start

    assert decision.is_conversational is False
    assert decision.needs_deep_analysis is True
    assert elapsed < 0.35
