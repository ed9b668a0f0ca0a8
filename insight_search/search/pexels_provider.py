"""Pexels image search provider implementation."""

from typing import Any

import structlog

from insight_search.search.base import SearchProvider

logger = structlog.get_logger(__name__)

PEXELS_SEARCH_URL = "https://api.pexels.com/v1/search"


class PexelsImageProvider(SearchProvider):
    """Pexels stock photo search. Payloads use ``photos`` with a ``src`` size map."""

    name = "pexels"
    supports = frozenset({"images"})

    def __init__(self, api_key: str, timeout: float = 30.0, proxy: str | None = None):
        super().__init__(timeout=timeout, proxy=proxy)
        self.api_key = api_key
        logger.info("PexelsImageProvider initialized")

    async def search_images(self, query: str, max_results: int = 10) -> Any:
        data = await self._request_json(
            "GET",
            PEXELS_SEARCH_URL,
            headers={"Authorization": self.api_key},
            params={"query": query, "per_page": min(max_results, 80)},
        )
        logger.info("Pexels image search completed", query=query, results_count=len(data.get("photos", [])))
        return data
