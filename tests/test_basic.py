"""Basic tests for core functionality."""

import pytest


def test_imports():
    """Test that all main modules can be imported."""
    from insight_search.config.settings import Settings, get_settings

    assert get_settings() is not None
    assert Settings is not None

    from insight_search.api.app import create_app, create_asgi_app
    from insight_search.chat.assistant import ChatAssistant
    from insight_search.pipeline.orchestrator import QueryPipeline
    from insight_search.search.gateway import SearchGateway

    assert create_app is not None
    assert create_asgi_app is not None
    assert ChatAssistant is not None
    assert QueryPipeline is not None
    assert SearchGateway is not None


def test_settings_defaults():
    """Test settings defaults."""
    from insight_search.config.settings import Settings

    settings = Settings(_env_file=None)

    assert settings.api_host == "0.0.0.0"
    assert settings.api_port == 8080
    assert settings.search_timeout == 10.0
    assert settings.search_retries == 3
    assert settings.search_fanout_timeout == 45.0
    assert settings.rate_limit_requests == 100
    assert settings.rate_limit_window_seconds == 900


def test_settings_rejects_unknown_model():
    """Model identifiers outside the allow-list are rejected at load."""
    from pydantic import ValidationError

    from insight_search.config.settings import Settings

    with pytest.raises(ValidationError, match="Invalid model"):
        Settings(_env_file=None, chat_model="anthropic:claude-unknown")


def test_create_chat_model_mock_mode(settings):
    """Mock mode never needs API keys."""
    from insight_search.llm.factory import create_chat_model
    from insight_search.llm.mock import MockChatModel

    model = create_chat_model(settings.chat_model, settings, max_tokens=600, temperature=0.7)

    assert isinstance(model, MockChatModel)
    assert model.max_tokens == 600


def test_create_chat_model_requires_key():
    from insight_search.config.settings import Settings
    from insight_search.llm.factory import create_chat_model

    settings = Settings(_env_file=None, llm_mode="live", anthropic_api_key=None)

    with pytest.raises(ValueError, match="Anthropic API key"):
        create_chat_model(settings.chat_model, settings, max_tokens=50)


def test_first_text_uses_first_text_block():
    from insight_search.llm.factory import first_text
    from tests.mocks import MockMessage

    message = MockMessage([{"type": "text", "text": "first"}, {"type": "text", "text": "second"}])

    assert first_text(message) == "first"
    assert first_text(MockMessage("plain")) == "plain"


def test_search_provider_factory_mock_fallback(settings):
    """Missing provider keys fall back to the mock provider in mock mode."""
    from insight_search.search.factory import create_search_provider
    from insight_search.search.mock_provider import MockSearchProvider

    provider = create_search_provider("serper", settings)

    assert isinstance(provider, MockSearchProvider)


def test_search_provider_factory_requires_key_in_live_mode():
    from insight_search.config.settings import Settings
    from insight_search.search.factory import create_search_provider

    settings = Settings(_env_file=None, llm_mode="live", pexels_api_key=None)

    with pytest.raises(ValueError, match="PEXELS_API_KEY"):
        create_search_provider("pexels", settings)


def test_web_and_image_providers_selected_independently():
    from insight_search.config.settings import Settings
    from insight_search.search.factory import create_search_providers

    settings = Settings(
        _env_file=None,
        llm_mode="live",
        web_search_provider="serper",
        image_search_provider="pexels",
        serper_api_key="k",
        pexels_api_key="k",
    )
    web, images = create_search_providers(settings)

    assert web.name == "serper"
    assert images.name == "pexels"
    assert "web" not in images.supports


@pytest.mark.parametrize("json_logs", [False, True])
def test_configure_logging(json_logs, capsys):
    import structlog

    from insight_search.config.logging_config import configure_logging

    configure_logging(debug_mode=False, log_level="info", json_logs=json_logs)
    structlog.get_logger("tests").info("configured", mode="json" if json_logs else "console")

    assert "configured" in capsys.readouterr().out


def test_configure_logging_unknown_level_defaults_to_info():
    import logging

    from insight_search.config.logging_config import configure_logging

    configure_logging(log_level="not-a-level")

    assert logging.getLogger("aiohttp").level == logging.WARNING
