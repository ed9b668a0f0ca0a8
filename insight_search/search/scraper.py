"""Web page fetching and text extraction."""

import re

import aiohttp
import structlog
from bs4 import BeautifulSoup

from insight_search.search.models import ScrapedContent

logger = structlog.get_logger(__name__)


class WebScraper:
    """Fetch a page and reduce it to title, preview image and plain text."""

    def __init__(
        self,
        timeout: int = 10,
        max_chars: int = 8000,
        user_agent: str | None = None,
        proxy: str | None = None,
    ):
        """
        Initialize web scraper.

        Args:
            timeout: Request timeout in seconds
            max_chars: Maximum characters of page text kept
            user_agent: Custom user agent string
            proxy: Optional HTTP(S) proxy URL
        """
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.max_chars = max_chars
        self.user_agent = user_agent or (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
        )
        self.headers = {"User-Agent": self.user_agent}
        self.proxy = proxy

    async def scrape(self, url: str) -> ScrapedContent:
        """
        Fetch a URL and extract its content.

        Args:
            url: URL to scrape

        Returns:
            ScrapedContent with extracted data
        """
        try:
            async with aiohttp.ClientSession(timeout=self.timeout, headers=self.headers) as session:
                async with session.get(url, proxy=self.proxy) as response:
                    response.raise_for_status()
                    html = await response.text()
        except aiohttp.ClientError as e:
            logger.error("Web scraping failed - connection error", error=str(e), url=url)
            raise

        return self.parse_html(html, url)

    def parse_html(self, html: str, url: str) -> ScrapedContent:
        """Parse HTML and extract content."""
        soup = BeautifulSoup(html, "html.parser")

        title = self._extract_title(soup)
        thumbnail = self._extract_thumbnail(soup)

        for element in soup(["script", "style", "nav", "header", "footer", "aside", "noscript"]):
            element.decompose()

        text_content = self._clean_text(soup.get_text(separator=" ", strip=True))[: self.max_chars]

        logger.info(
            "Web scraping completed",
            url=url,
            content_length=len(text_content),
            has_thumbnail=thumbnail is not None,
        )

        return ScrapedContent(url=url, title=title, content=text_content, thumbnail=thumbnail)

    def _extract_title(self, soup: BeautifulSoup) -> str:
        if soup.title and soup.title.string:
            return soup.title.string.strip()

        og_title = soup.find("meta", property="og:title")
        if og_title and og_title.get("content"):
            return og_title["content"].strip()

        h1 = soup.find("h1")
        if h1:
            return h1.get_text(strip=True)

        return "No title"

    def _extract_thumbnail(self, soup: BeautifulSoup) -> str | None:
        og_image = soup.find("meta", property="og:image")
        if og_image and og_image.get("content"):
            return og_image["content"].strip()

        twitter_image = soup.find("meta", attrs={"name": "twitter:image"})
        if twitter_image and twitter_image.get("content"):
            return twitter_image["content"].strip()

        return None

    def _clean_text(self, text: str) -> str:
        return re.sub(r"\s+", " ", text).strip()
