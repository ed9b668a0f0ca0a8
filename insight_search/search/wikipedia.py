"""Wikipedia summary lookup."""

from __future__ import annotations

from urllib.parse import quote

import aiohttp
import structlog
from pydantic import BaseModel, Field

logger = structlog.get_logger(__name__)

WIKIPEDIA_SEARCH_URL = "https://en.wikipedia.org/w/api.php"
WIKIPEDIA_SUMMARY_URL = "https://en.wikipedia.org/api/rest_v1/page/summary/{title}"


class WikipediaSummary(BaseModel):
    """Lead summary of the best-matching Wikipedia article."""

    title: str
    extract: str = ""
    url: str = ""
    thumbnail: str | None = Field(default=None, description="Article lead image, if any")


class WikipediaClient:
    """Look up the top Wikipedia article for a query and fetch its summary."""

    def __init__(self, timeout: float = 10.0, proxy: str | None = None):
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.proxy = proxy
        self.headers = {"User-Agent": "InsightSearch/1.0 (+https://github.com)"}

    async def lookup(self, query: str) -> WikipediaSummary | None:
        """
        Find the best-matching article and return its summary.

        Args:
            query: Free-text query

        Returns:
            WikipediaSummary, or None if no article matched
        """
        async with aiohttp.ClientSession(timeout=self.timeout, headers=self.headers) as session:
            async with session.get(
                WIKIPEDIA_SEARCH_URL,
                params={"action": "query", "list": "search", "srsearch": query, "srlimit": 1, "format": "json"},
                proxy=self.proxy,
            ) as response:
                response.raise_for_status()
                data = await response.json(content_type=None)

            hits = data.get("query", {}).get("search", [])
            if not hits:
                logger.info("Wikipedia lookup found nothing", query=query)
                return None

            title = hits[0]["title"]
            async with session.get(
                WIKIPEDIA_SUMMARY_URL.format(title=quote(title.replace(" ", "_"), safe="")),
                proxy=self.proxy,
            ) as response:
                response.raise_for_status()
                summary = await response.json(content_type=None)

        thumbnail = (summary.get("thumbnail") or {}).get("source")
        page_url = ((summary.get("content_urls") or {}).get("desktop") or {}).get("page", "")
        logger.info("Wikipedia lookup completed", query=query, title=title)
        return WikipediaSummary(
            title=summary.get("title", title),
            extract=summary.get("extract", ""),
            url=page_url,
            thumbnail=thumbnail,
        )
