"""Construction of the per-process services used by the routes."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from insight_search.chat.assistant import ChatAssistant, chat_search_decision
from insight_search.config.settings import Settings
from insight_search.llm.factory import create_chat_model
from insight_search.pipeline.classifier import QueryClassifier
from insight_search.pipeline.orchestrator import QueryPipeline
from insight_search.pipeline.synthesizer import SYNTHESIS_TEMPERATURE, Synthesizer
from insight_search.search.factory import create_search_providers
from insight_search.search.gateway import SearchGateway
from insight_search.search.scraper import WebScraper
from insight_search.search.wikipedia import WikipediaClient
from insight_search.streaming.activity import ActivitySink

logger = structlog.get_logger(__name__)

CLASSIFIER_MAX_TOKENS = 50


@dataclass
class AppServices:
    """Services shared by all requests. Holds no per-request state."""

    pipeline: QueryPipeline
    assistant: ChatAssistant


def build_services(settings: Settings, activity_sink: ActivitySink) -> AppServices:
    """Create models, providers, pipeline and assistant from settings."""
    classifier_llm = create_chat_model(
        settings.chat_model, settings, max_tokens=CLASSIFIER_MAX_TOKENS, temperature=0.0
    )
    conversation_llm = create_chat_model(
        settings.chat_model, settings, max_tokens=settings.chat_model_max_tokens, temperature=0.7
    )
    assistant_llm = create_chat_model(
        settings.chat_model, settings, max_tokens=settings.assistant_model_max_tokens, temperature=0.7
    )

    web_provider, image_provider = create_search_providers(settings)
    gateway = SearchGateway.from_settings(settings, web_provider, image_provider)

    synthesizer = Synthesizer(
        lambda budget: create_chat_model(
            settings.chat_model, settings, max_tokens=budget, temperature=SYNTHESIS_TEMPERATURE
        )
    )

    pipeline = QueryPipeline(
        classifier=QueryClassifier.from_llm(classifier_llm),
        gateway=gateway,
        synthesizer=synthesizer,
        conversation_llm=conversation_llm,
        activity_sink=activity_sink,
    )
    assistant = ChatAssistant(
        llm=assistant_llm,
        gateway=gateway,
        scraper=WebScraper(
            timeout=settings.scraper_timeout,
            max_chars=settings.scraper_max_chars,
            proxy=settings.https_proxy,
        ),
        wikipedia=WikipediaClient(timeout=settings.scraper_timeout, proxy=settings.https_proxy),
        search_decision=chat_search_decision(classifier_llm),
        broadcast_sink=activity_sink,
    )

    logger.info(
        "Services initialized",
        model=settings.chat_model,
        llm_mode=settings.llm_mode,
        web_provider=web_provider.name,
        image_provider=image_provider.name,
    )
    return AppServices(pipeline=pipeline, assistant=assistant)
