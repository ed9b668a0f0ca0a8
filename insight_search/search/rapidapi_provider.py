"""RapidAPI Google web search provider implementation."""

from typing import Any

import structlog

from insight_search.search.base import SearchProvider

logger = structlog.get_logger(__name__)

RAPIDAPI_HOST = "google-api31.p.rapidapi.com"
_IMAGE_HINTS = ("image", "photo", "picture")


class RapidAPISearchProvider(SearchProvider):
    """Google web search through RapidAPI. Payloads use ``result`` with ``href``/``body``.

    The endpoint has no image search; image results are picked out of a web
    search for ``"<query> images"`` by looking for image-like titles,
    snippets or URLs. These carry no thumbnails.
    """

    name = "rapidapi"
    supports = frozenset({"web", "images"})

    def __init__(self, api_key: str, timeout: float = 30.0, proxy: str | None = None, region: str = "wt-wt"):
        super().__init__(timeout=timeout, proxy=proxy)
        self.api_key = api_key
        self.region = region
        logger.info("RapidAPISearchProvider initialized")

    async def _websearch(self, text: str, max_results: int) -> dict[str, Any]:
        return await self._request_json(
            "POST",
            f"https://{RAPIDAPI_HOST}/websearch",
            headers={
                "Content-Type": "application/json",
                "x-rapidapi-host": RAPIDAPI_HOST,
                "x-rapidapi-key": self.api_key,
            },
            json={
                "text": text,
                "safesearch": "off",
                "timelimit": "",
                "region": self.region,
                "max_results": max_results,
            },
        )

    async def search_web(self, query: str, max_results: int = 10) -> Any:
        data = await self._websearch(query, max_results)
        logger.info("RapidAPI web search completed", query=query, results_count=len(data.get("result", [])))
        return data

    async def search_images(self, query: str, max_results: int = 10) -> Any:
        data = await self._websearch(f"{query} images", max(max_results, 20))
        image_results = [
            {"title": item.get("title", ""), "link": item.get("href", ""), "thumbnail": ""}
            for item in data.get("result", [])
            if _looks_like_image(item)
        ]
        logger.info("RapidAPI image extraction completed", query=query, results_count=len(image_results))
        return {"image_results": image_results[:max_results]}


def _looks_like_image(item: dict[str, Any]) -> bool:
    title = str(item.get("title") or "").lower()
    body = str(item.get("body") or "").lower()
    href = str(item.get("href") or "").lower()
    return (
        any(hint in title or hint in body for hint in _IMAGE_HINTS)
        or "images" in href
        or "photos" in href
    )
