"""LLM factory for classifier, synthesis and chat models."""

from __future__ import annotations

from typing import Any

import structlog
from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from insight_search.config.settings import Settings
from insight_search.llm.mock import MockChatModel

logger = structlog.get_logger(__name__)


def create_chat_model(
    model_str: str,
    settings: Settings,
    max_tokens: int,
    temperature: float = 0.7,
) -> BaseChatModel:
    """Create a chat model from provider:model string."""
    if settings.llm_mode == "mock" or model_str.startswith("mock"):
        logger.info("using_mock_llm", max_tokens=max_tokens)
        return MockChatModel(max_tokens=max_tokens, temperature=temperature)

    if ":" in model_str:
        provider, model_name = model_str.split(":", 1)
    else:
        provider = "anthropic"
        model_name = model_str

    if provider in {"anthropic", "claude"}:
        if not settings.anthropic_api_key:
            raise ValueError("Anthropic API key not configured")

        logger.debug("creating_anthropic_model", model=model_name, max_tokens=max_tokens)
        return ChatAnthropic(
            model=model_name,
            api_key=settings.anthropic_api_key.strip(),
            max_tokens=max_tokens,
            temperature=temperature,
        )

    if provider == "openai":
        if not settings.openai_api_key:
            raise ValueError("OpenAI API key not configured")

        llm_kwargs: dict[str, Any] = {
            "model": model_name,
            "api_key": settings.openai_api_key,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if settings.openai_base_url:
            llm_kwargs["base_url"] = settings.openai_base_url

        logger.debug("creating_openai_model", model=model_name, max_tokens=max_tokens)
        return ChatOpenAI(**llm_kwargs)

    raise ValueError(f"Unsupported LLM provider: {provider}")


def first_text(message: Any) -> str:
    """Return the first text block of a model reply.

    Anthropic replies may carry a list of content blocks; OpenAI and the mock
    model return a plain string.
    """
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        for block in content:
            if isinstance(block, str):
                return block
            if isinstance(block, dict) and block.get("type", "text") == "text":
                return str(block.get("text", ""))
    return ""
