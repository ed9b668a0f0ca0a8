"""Base search provider interface."""

from __future__ import annotations

from abc import ABC
from typing import Any

import aiohttp
import structlog

from insight_search.errors import FatalProviderError
from insight_search.search.models import SearchKind

logger = structlog.get_logger(__name__)


class SearchProvider(ABC):
    """Abstract base class for search providers.

    Providers return the raw provider payload; the gateway normalizes it.
    Subclasses override the method for each kind listed in ``supports``.
    """

    name: str = "base"
    supports: frozenset[SearchKind] = frozenset()

    def __init__(self, timeout: float = 10.0, proxy: str | None = None):
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.proxy = proxy

    async def search_web(self, query: str, max_results: int = 10) -> Any:
        """
        Search the web for a query.

        Args:
            query: Search query string
            max_results: Maximum number of results to request

        Returns:
            Raw provider payload
        """
        raise FatalProviderError(f"{self.name} does not support web search")

    async def search_images(self, query: str, max_results: int = 10) -> Any:
        """
        Search for images matching a query.

        Args:
            query: Search query string
            max_results: Maximum number of results to request

        Returns:
            Raw provider payload
        """
        raise FatalProviderError(f"{self.name} does not support image search")

    async def _request_json(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Issue one HTTP call and decode JSON.

        Connection-level failures propagate as aiohttp/OS errors so the retry
        policy can recognise them; HTTP error statuses become FatalProviderError.
        """
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.request(
                method,
                url,
                headers=headers,
                params=params,
                json=json,
                proxy=self.proxy,
            ) as response:
                if response.status >= 400:
                    body = await response.text()
                    logger.warning(
                        "Search provider returned error status",
                        provider=self.name,
                        status=response.status,
                        error=body[:500],
                    )
                    raise FatalProviderError(
                        f"{self.name} returned status {response.status}: {body[:200]}",
                        status=response.status,
                    )
                return await response.json(content_type=None)
