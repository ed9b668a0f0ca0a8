"""Search provider factory."""

import structlog

from insight_search.config.settings import Settings
from insight_search.search.base import SearchProvider
from insight_search.search.mock_provider import MockSearchProvider
from insight_search.search.pexels_provider import PexelsImageProvider
from insight_search.search.rapidapi_provider import RapidAPISearchProvider
from insight_search.search.serpapi_provider import SerpAPISearchProvider
from insight_search.search.serper_provider import SerperSearchProvider

logger = structlog.get_logger(__name__)

_KEY_FIELDS = {
    "serper": "serper_api_key",
    "rapidapi": "rapidapi_key",
    "serpapi": "serpapi_api_key",
    "pexels": "pexels_api_key",
}

_PROVIDERS = {
    "serper": SerperSearchProvider,
    "rapidapi": RapidAPISearchProvider,
    "serpapi": SerpAPISearchProvider,
    "pexels": PexelsImageProvider,
}


def create_search_provider(name: str, settings: Settings) -> SearchProvider:
    """
    Create a search provider by name.

    Args:
        name: Provider name (serper, rapidapi, serpapi, pexels, mock)
        settings: Application settings

    Returns:
        Configured SearchProvider instance

    Raises:
        ValueError: If the provider is unknown or its API key is missing
    """
    if name == "mock":
        logger.info("Creating MockSearchProvider")
        return MockSearchProvider(timeout=settings.search_timeout)

    if name not in _PROVIDERS:
        raise ValueError(
            f"Unknown search provider: {name}. Supported providers: {', '.join([*_PROVIDERS, 'mock'])}"
        )

    api_key = getattr(settings, _KEY_FIELDS[name])
    if not api_key:
        if settings.llm_mode == "mock":
            logger.info("Search key missing; falling back to MockSearchProvider in mock mode", provider=name)
            return MockSearchProvider(timeout=settings.search_timeout)
        raise ValueError(f"{_KEY_FIELDS[name].upper()} is required when using the {name} search provider")

    logger.info("Creating search provider", provider=name, proxy=bool(settings.https_proxy))
    return _PROVIDERS[name](api_key=api_key, timeout=settings.search_timeout, proxy=settings.https_proxy)


def create_search_providers(settings: Settings) -> tuple[SearchProvider, SearchProvider]:
    """Create the (web, image) provider pair from configuration."""
    web = create_search_provider(settings.web_search_provider, settings)
    images = create_search_provider(settings.image_search_provider, settings)
    if "web" not in web.supports:
        raise ValueError(f"{web.name} cannot serve web search")
    if "images" not in images.supports:
        raise ValueError(f"{images.name} cannot serve image search")
    return web, images
