"""End-to-end tests for the query pipeline with mocked collaborators."""

import pytest

from insight_search.errors import FatalProviderError, ValidationError
from insight_search.pipeline.classifier import ConstantDecision, QueryClassifier
from insight_search.pipeline.models import SynthesisOutcome
from insight_search.pipeline.orchestrator import QueryPipeline
from insight_search.pipeline.synthesizer import Synthesizer
from insight_search.search.gateway import SearchGateway
from insight_search.streaming.activity import RecordingActivitySink
from tests.conftest import no_backoff
from tests.mocks import MockChatModel, MockModelFactory, MockSearchProvider


class ExplodingSynthesizer:
    """Returns an outcome the assembler cannot shape."""

    async def synthesize(self, query, complexity, web_results, deep_analysis=False):
        return SynthesisOutcome("ok", payload=object())


async def test_deep_query_end_to_end(pipeline, synthesis_models, provider, activity_sink):
    result = await pipeline.run("latest AI research trends")

    assert result.error is None
    assert result.degraded is False
    assert result.complexity.level == "deep"
    assert result.complexity.triggers == ("academic", "current")
    assert list(synthesis_models.created) == [1500]
    assert result.analysis["summary"] == "AI research is moving fast."
    assert result.analysis["recommendations"] == ["Read the survey papers."]
    assert result.analysis["context"]["misconceptions"] == []
    assert len(result.search_results) == 5
    assert len(result.images) == 6
    assert result.search_results[0].images[0].url == "https://img.example.com/1.jpg"
    assert sorted(provider.calls) == [("images", "latest AI research trends"), ("web", "latest AI research trends")]

    types = [activity["type"] for activity in activity_sink.activities]
    assert types[0] == "query"
    assert {"classification", "complexity", "search", "llm"} <= set(types)


async def test_conversational_query_skips_search(pipeline, provider, synthesis_models, conversation_llm):
    result = await pipeline.run("hi there")

    assert result.classification.is_conversational is True
    assert result.response == "Hello! How can I help you today?"
    assert result.analysis == {"summary": "Hello! How can I help you today?", "keyPoints": []}
    assert result.complexity is None
    assert provider.calls == []
    assert synthesis_models.created == {}
    assert conversation_llm.prompts == ["hi there"]


@pytest.mark.parametrize("raw", ["", "   ", "x" * 301, 42, None])
async def test_invalid_query_makes_no_calls(pipeline, provider, classifier_llm, raw):
    with pytest.raises(ValidationError):
        await pipeline.run(raw)

    assert provider.calls == []
    assert classifier_llm.call_count == 0


async def test_query_is_trimmed(pipeline, provider):
    result = await pipeline.run("  latest AI research trends  ")

    assert result.query == "latest AI research trends"
    assert ("web", "latest AI research trends") in provider.calls


async def test_search_failure_degrades(classifier_llm, conversation_llm, activity_sink):
    provider = MockSearchProvider(failures=[FatalProviderError("Invalid API key", status=401)] * 2)
    models = MockModelFactory(["unused"])
    pipeline = QueryPipeline(
        classifier=QueryClassifier.from_llm(classifier_llm),
        gateway=SearchGateway(provider, provider, backoff=no_backoff),
        synthesizer=Synthesizer(models),
        conversation_llm=conversation_llm,
        activity_sink=activity_sink,
    )

    result = await pipeline.run("python tutorial")

    assert result.degraded is True
    assert result.search_results == []
    assert "No web results were found" in result.analysis["summary"]
    assert models.created == {}
    assert any(a["type"] == "search" and a["status"] == "error" for a in activity_sink.activities)


async def test_unparseable_synthesis_keeps_results(classifier_llm, gateway, conversation_llm):
    pipeline = QueryPipeline(
        classifier=QueryClassifier.from_llm(classifier_llm),
        gateway=gateway,
        synthesizer=Synthesizer(MockModelFactory(["Just some prose."])),
        conversation_llm=conversation_llm,
    )

    result = await pipeline.run("python tutorial")

    assert result.degraded is True
    assert result.error is None
    assert result.analysis == {"summary": "Just some prose.", "keyPoints": []}
    assert len(result.search_results) == 5


async def test_render_failure_returns_partial_results(classifier_llm, gateway, conversation_llm, activity_sink):
    pipeline = QueryPipeline(
        classifier=QueryClassifier.from_llm(classifier_llm),
        gateway=gateway,
        synthesizer=ExplodingSynthesizer(),
        conversation_llm=conversation_llm,
        activity_sink=activity_sink,
    )

    result = await pipeline.run("python tutorial")

    assert result.degraded is True
    assert result.error.startswith("Failed to display results")
    assert len(result.search_results) == 3
    assert len(result.images) == 3
    assert activity_sink.activities[-1]["type"] == "pipeline"


async def test_deep_analysis_requests_tasks(gateway, conversation_llm):
    models = MockModelFactory(['{"summary": "s", "keyPoints": [], "tasks": [{"title": "t"}]}'])
    pipeline = QueryPipeline(
        classifier=QueryClassifier(ConstantDecision(False), ConstantDecision(True)),
        gateway=gateway,
        synthesizer=Synthesizer(models),
        conversation_llm=conversation_llm,
    )

    result = await pipeline.run("python tutorial")

    assert result.classification.needs_deep_analysis is True
    assert result.complexity.level == "simple"
    assert '"tasks"' in models.created[600].prompts[0]
    assert result.analysis["tasks"] == [{"title": "t"}]
    assert result.to_json()["needsDeepAnalysis"] is True


async def test_classifier_failure_falls_back(gateway, conversation_llm, synthesis_models):
    pipeline = QueryPipeline(
        classifier=QueryClassifier.from_llm(MockChatModel(error=TimeoutError("classifier down"))),
        gateway=gateway,
        synthesizer=Synthesizer(synthesis_models),
        conversation_llm=conversation_llm,
    )

    result = await pipeline.run("latest AI research trends")

    assert result.classification.is_conversational is False
    assert result.classification.needs_deep_analysis is False
    assert result.degraded is False


async def test_guide(pipeline, provider, conversation_llm):
    conversation_llm.responses = ["## Key Resources\n- The official docs\n\n## Next Steps\n- Build something"]

    guide = await pipeline.guide("learn python programming")

    assert guide.is_conversational is False
    assert guide.has_web_results is True
    assert len(guide.web_results) == 5
    assert len(guide.image_results) == 8
    assert guide.text.startswith("## Key Resources")
    prompt = conversation_llm.prompts[0]
    assert '"learn python programming"' in prompt
    assert "## Key Resources" in prompt and "https://example.com/1" in prompt


async def test_guide_conversational(pipeline, provider):
    guide = await pipeline.guide("hi there")

    assert guide.is_conversational is True
    assert guide.text == "Hello! How can I help you today?"
    assert guide.has_web_results is False
    assert provider.calls == []


async def test_guide_formats_plain_reply(pipeline, conversation_llm):
    conversation_llm.responses = ["Start here:\n1. Install Python\n2. Read the tutorial"]

    guide = await pipeline.guide("learn python programming")

    assert guide.text == "## Start here:\n1. Install Python\n2. Read the tutorial"


async def test_null_sink_by_default(classifier_llm, gateway, conversation_llm, synthesis_models):
    pipeline = QueryPipeline(
        classifier=QueryClassifier.from_llm(classifier_llm),
        gateway=gateway,
        synthesizer=Synthesizer(synthesis_models),
        conversation_llm=conversation_llm,
    )

    result = await pipeline.run("latest AI research trends")

    assert result.degraded is False
    assert not isinstance(pipeline.activity_sink, RecordingActivitySink)
