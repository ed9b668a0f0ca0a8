"""Search providers, gateway and page fetching."""

from insight_search.search.gateway import SearchGateway
from insight_search.search.models import ImageResult, ScrapedContent, SearchResultSet, WebResult

__all__ = ["SearchGateway", "SearchResultSet", "WebResult", "ImageResult", "ScrapedContent"]
