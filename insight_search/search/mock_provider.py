"""Mock search provider for offline runs."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote_plus

from insight_search.search.base import SearchProvider


class MockSearchProvider(SearchProvider):
    """Return deterministic Serper-shaped payloads."""

    name = "mock"
    supports = frozenset({"web", "images"})

    async def search_web(self, query: str, max_results: int = 10) -> Any:
        safe_query = quote_plus(query.strip() or "query")
        return {
            "organic": [
                {
                    "title": f"Mock Result {idx + 1} for {query}",
                    "link": f"https://example.com/{safe_query}/{idx + 1}",
                    "snippet": f"Mock snippet {idx + 1} about {query}.",
                }
                for idx in range(max_results)
            ]
        }

    async def search_images(self, query: str, max_results: int = 10) -> Any:
        safe_query = quote_plus(query.strip() or "query")
        return {
            "images": [
                {
                    "title": f"Mock Image {idx + 1} for {query}",
                    "imageUrl": f"https://images.example.com/{safe_query}/{idx + 1}.jpg",
                    "thumbnailUrl": f"https://images.example.com/{safe_query}/{idx + 1}_thumb.jpg",
                }
                for idx in range(max_results)
            ]
        }
