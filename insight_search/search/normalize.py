"""Map provider-specific payloads onto WebResult / ImageResult.

Providers disagree on field names: Serper returns ``organic`` and ``images``,
SerpAPI ``organic_results`` and ``images_results``, the RapidAPI Google
endpoint ``result`` with ``href``/``body``, Pexels ``photos``. Missing fields
default to empty strings and missing collections to empty lists.
"""

from __future__ import annotations

from typing import Any, Iterable

from insight_search.search.models import ImageResult, WebResult

WEB_COLLECTION_KEYS = ("organic", "organic_results", "result", "results")
IMAGE_COLLECTION_KEYS = ("image_results", "images_results", "images", "photos", "result")


def _first(item: dict[str, Any], *keys: str) -> str:
    for key in keys:
        value = item.get(key)
        if isinstance(value, str) and value:
            return value
    return ""


def _collection(payload: Any, keys: Iterable[str]) -> list[dict[str, Any]]:
    if isinstance(payload, list):
        return [item for item in payload if isinstance(item, dict)]
    if not isinstance(payload, dict):
        return []
    for key in keys:
        value = payload.get(key)
        if isinstance(value, list):
            return [item for item in value if isinstance(item, dict)]
    return []


def normalize_web_results(payload: Any) -> list[WebResult]:
    """Normalize any supported web search payload."""
    results: list[WebResult] = []
    for item in _collection(payload, WEB_COLLECTION_KEYS):
        url = _first(item, "link", "url", "href")
        if not url:
            continue
        results.append(
            WebResult(
                title=_first(item, "title", "name"),
                url=url,
                snippet=_first(item, "snippet", "body", "description", "content"),
            )
        )
    return results


def _pexels_src(item: dict[str, Any]) -> tuple[str, str]:
    src = item.get("src")
    if not isinstance(src, dict):
        return "", ""
    full = _first(src, "large", "original", "medium")
    thumb = _first(src, "medium", "small", "tiny")
    return full, thumb


def normalize_image_results(payload: Any) -> list[ImageResult]:
    """Normalize any supported image search payload."""
    results: list[ImageResult] = []
    for item in _collection(payload, IMAGE_COLLECTION_KEYS):
        full, thumb = _pexels_src(item)
        url = full or _first(item, "imageUrl", "original", "image", "src", "link", "url", "href")
        if not url:
            continue
        results.append(
            ImageResult(
                title=_first(item, "title", "alt", "photographer"),
                url=url,
                thumbnail_url=thumb or _first(item, "thumbnailUrl", "thumbnail", "imageUrl"),
            )
        )
    return results
