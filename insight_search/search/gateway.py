"""Search gateway: retrying, normalized access to web and image providers."""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import structlog

from insight_search.config.settings import Settings
from insight_search.errors import InvalidParameterError, SearchFailure
from insight_search.search.base import SearchProvider
from insight_search.search.models import ImageResult, SearchKind, SearchResultSet, WebResult
from insight_search.search.normalize import normalize_image_results, normalize_web_results
from insight_search.search.retry import exponential_backoff, with_retry, with_timeout

logger = structlog.get_logger(__name__)


class SearchGateway:
    """Issue web and image searches against the configured providers.

    Every provider call is raced against ``timeout`` and retried up to
    ``retries`` times on transient network errors. Any other error ends the
    call immediately. Failures surface as :class:`SearchFailure` carrying the
    original message.
    """

    def __init__(
        self,
        web_provider: SearchProvider,
        image_provider: SearchProvider,
        timeout: float = 10.0,
        retries: int = 3,
        backoff: Callable[[int], float] | None = None,
        fanout_timeout: float = 45.0,
        max_results: int = 10,
    ):
        self.web_provider = web_provider
        self.image_provider = image_provider
        self.timeout = timeout
        self.retries = retries
        self.backoff = backoff or exponential_backoff(3.0, 30.0)
        self.fanout_timeout = fanout_timeout
        self.max_results = max_results

    @classmethod
    def from_settings(
        cls, settings: Settings, web_provider: SearchProvider, image_provider: SearchProvider
    ) -> "SearchGateway":
        return cls(
            web_provider,
            image_provider,
            timeout=settings.search_timeout,
            retries=settings.search_retries,
            backoff=exponential_backoff(settings.search_backoff_base, settings.search_backoff_max),
            fanout_timeout=settings.search_fanout_timeout,
            max_results=settings.search_max_results,
        )

    async def search(self, query: str | None, kind: SearchKind) -> list[WebResult] | list[ImageResult]:
        """
        Run one search of the given kind.

        Args:
            query: Search query
            kind: "web" or "images"

        Returns:
            Normalized results, possibly empty

        Raises:
            InvalidParameterError: If the query is missing or blank
            SearchFailure: If the provider call failed for good
        """
        if not query or not str(query).strip():
            raise InvalidParameterError("Query parameter is required")
        if kind not in ("web", "images"):
            raise InvalidParameterError(f"Unknown search kind: {kind}")

        query = str(query).strip()
        provider = self.web_provider if kind == "web" else self.image_provider
        label = f"{provider.name} {kind} search"
        attempts = 0

        async def attempt() -> Any:
            nonlocal attempts
            attempts += 1
            if kind == "web":
                call = provider.search_web(query, self.max_results)
            else:
                call = provider.search_images(query, self.max_results)
            return await with_timeout(call, self.timeout, label=label)

        try:
            payload = await with_retry(attempt, retries=self.retries, backoff=self.backoff, label=label)
        except Exception as e:
            logger.error("Search failed", provider=provider.name, kind=kind, attempts=attempts, error=str(e))
            raise SearchFailure(kind, str(e), attempts=attempts) from e

        if kind == "web":
            results = normalize_web_results(payload)
        else:
            results = normalize_image_results(payload)

        logger.info("Search completed", provider=provider.name, kind=kind, results_count=len(results))
        return results

    async def search_all(self, query: str | None) -> SearchResultSet:
        """
        Run web and image searches concurrently under the shared fan-out timeout.

        The first failure propagates. On timeout both calls are abandoned.
        """
        if not query or not str(query).strip():
            raise InvalidParameterError("Query parameter is required")

        try:
            web_results, image_results = await asyncio.wait_for(
                asyncio.gather(self.search(query, "web"), self.search(query, "images")),
                timeout=self.fanout_timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error("Search fan-out timed out", timeout=self.fanout_timeout)
            raise SearchFailure("all", f"Search timed out after {self.fanout_timeout:g}s") from e

        return SearchResultSet(web_results=web_results, image_results=image_results)
