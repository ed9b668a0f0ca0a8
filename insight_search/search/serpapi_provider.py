"""SerpAPI search provider implementation."""

from typing import Any

import structlog

from insight_search.search.base import SearchProvider

logger = structlog.get_logger(__name__)

SERPAPI_URL = "https://serpapi.com/search.json"


class SerpAPISearchProvider(SearchProvider):
    """SerpAPI Google engine. Payloads use ``organic_results`` and ``images_results``."""

    name = "serpapi"
    supports = frozenset({"web", "images"})

    def __init__(
        self,
        api_key: str,
        timeout: float = 30.0,
        proxy: str | None = None,
        google_domain: str = "google.co.in",
        country: str = "in",
        language: str = "en",
        safe: str = "active",
    ):
        super().__init__(timeout=timeout, proxy=proxy)
        self.api_key = api_key
        self.base_params = {
            "engine": "google",
            "google_domain": google_domain,
            "gl": country,
            "hl": language,
            "safe": safe,
        }
        logger.info("SerpAPISearchProvider initialized")

    def _params(self, query: str, max_results: int, **extra: Any) -> dict[str, Any]:
        return {**self.base_params, "q": query, "num": max_results, "api_key": self.api_key, **extra}

    async def search_web(self, query: str, max_results: int = 10) -> Any:
        data = await self._request_json("GET", SERPAPI_URL, params=self._params(query, max_results))
        logger.info(
            "SerpAPI web search completed", query=query, results_count=len(data.get("organic_results", []))
        )
        return data

    async def search_images(self, query: str, max_results: int = 10) -> Any:
        data = await self._request_json("GET", SERPAPI_URL, params=self._params(query, max_results, tbm="isch"))
        logger.info(
            "SerpAPI image search completed", query=query, results_count=len(data.get("images_results", []))
        )
        return data
