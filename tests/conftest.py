"""Shared fixtures."""

import pytest

from insight_search.config.settings import Settings
from insight_search.pipeline.classifier import QueryClassifier
from insight_search.pipeline.orchestrator import QueryPipeline
from insight_search.pipeline.synthesizer import Synthesizer
from insight_search.search.gateway import SearchGateway
from insight_search.streaming.activity import RecordingActivitySink
from tests.mocks import MockChatModel, MockModelFactory, MockSearchProvider

DEEP_JSON = """```json
{
  "summary": "AI research is moving fast.",
  "keyPoints": ["Agents", "Multimodal models"],
  "analysis": {"depth": "good", "accuracy": "high"},
  "context": {"background": "Ten years of deep learning.", "relatedConcepts": ["LLMs"]},
  "recommendations": ["Read the survey papers."]
}
```"""


def classifier_reply(prompt: str) -> str:
    """Answer classifier prompts the way a well-behaved model would."""
    if '"conversational" or "search"' in prompt:
        return "conversational" if '"hi there"' in prompt else "search"
    if '"analyze" or "simple"' in prompt:
        return "simple"
    if '"search" or "static"' in prompt:
        return "search"
    return "unexpected"


def no_backoff(attempt: int) -> float:
    return 0.0


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        llm_mode="mock",
        web_search_provider="mock",
        image_search_provider="mock",
    )


@pytest.fixture
def provider() -> MockSearchProvider:
    return MockSearchProvider()


@pytest.fixture
def gateway(provider: MockSearchProvider) -> SearchGateway:
    return SearchGateway(provider, provider, timeout=2, retries=3, backoff=no_backoff, fanout_timeout=2)


@pytest.fixture
def classifier_llm() -> MockChatModel:
    return MockChatModel(classifier_reply)


@pytest.fixture
def conversation_llm() -> MockChatModel:
    return MockChatModel(["Hello! How can I help you today?"])


@pytest.fixture
def synthesis_models() -> MockModelFactory:
    return MockModelFactory([DEEP_JSON])


@pytest.fixture
def activity_sink() -> RecordingActivitySink:
    return RecordingActivitySink()


@pytest.fixture
def pipeline(
    classifier_llm: MockChatModel,
    gateway: SearchGateway,
    synthesis_models: MockModelFactory,
    conversation_llm: MockChatModel,
    activity_sink: RecordingActivitySink,
) -> QueryPipeline:
    return QueryPipeline(
        classifier=QueryClassifier.from_llm(classifier_llm),
        gateway=gateway,
        synthesizer=Synthesizer(synthesis_models),
        conversation_llm=conversation_llm,
        activity_sink=activity_sink,
    )
