"""Serper (google.serper.dev) search provider implementation."""

from typing import Any

import structlog

from insight_search.search.base import SearchProvider

logger = structlog.get_logger(__name__)

SERPER_BASE_URL = "https://google.serper.dev"


class SerperSearchProvider(SearchProvider):
    """Serper Google search API. Web payloads use ``organic``, images ``images``."""

    name = "serper"
    supports = frozenset({"web", "images"})

    def __init__(
        self,
        api_key: str,
        timeout: float = 30.0,
        proxy: str | None = None,
        country: str = "in",
        language: str = "en",
    ):
        """
        Initialize Serper provider.

        Args:
            api_key: Serper API key
            timeout: Request timeout in seconds
            proxy: Optional proxy URL
        """
        super().__init__(timeout=timeout, proxy=proxy)
        self.api_key = api_key
        self.country = country
        self.language = language
        logger.info("SerperSearchProvider initialized")

    def _headers(self) -> dict[str, str]:
        return {"X-API-KEY": self.api_key, "Content-Type": "application/json"}

    def _body(self, query: str, max_results: int) -> dict[str, Any]:
        return {"q": query, "num": max_results, "gl": self.country, "hl": self.language}

    async def search_web(self, query: str, max_results: int = 10) -> Any:
        data = await self._request_json(
            "POST", f"{SERPER_BASE_URL}/search", headers=self._headers(), json=self._body(query, max_results)
        )
        logger.info("Serper web search completed", query=query, results_count=len(data.get("organic", [])))
        return data

    async def search_images(self, query: str, max_results: int = 10) -> Any:
        data = await self._request_json(
            "POST", f"{SERPER_BASE_URL}/images", headers=self._headers(), json=self._body(query, max_results)
        )
        logger.info("Serper image search completed", query=query, results_count=len(data.get("images", [])))
        return data
