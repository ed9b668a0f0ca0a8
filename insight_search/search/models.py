"""Search result models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SearchKind = Literal["web", "images"]


class WebResult(BaseModel):
    """Single web search hit."""

    title: str = Field(default="", description="Page title")
    url: str = Field(default="", description="Page URL")
    snippet: str = Field(default="", description="Page snippet/description")


class ImageResult(BaseModel):
    """Single image search hit."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(default="", description="Image title")
    url: str = Field(default="", description="Full-size image or source page URL")
    thumbnail_url: str = Field(default="", alias="thumbnailUrl", description="Thumbnail URL")


class SearchResultSet(BaseModel):
    """Web and image results for one query."""

    model_config = ConfigDict(populate_by_name=True)

    web_results: list[WebResult] = Field(default_factory=list, alias="webResults")
    image_results: list[ImageResult] = Field(default_factory=list, alias="imageResults")

    def top(self, web: int, images: int) -> "SearchResultSet":
        """Return a copy truncated to the given display counts."""
        return SearchResultSet(
            web_results=self.web_results[:web],
            image_results=self.image_results[:images],
        )


class ScrapedContent(BaseModel):
    """Fetched web page content."""

    url: str = Field(..., description="Page URL")
    title: str = Field(default="", description="Page title")
    content: str = Field(default="", description="Cleaned text content")
    thumbnail: str | None = Field(default=None, description="og:image / twitter:image if present")
