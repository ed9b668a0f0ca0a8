"""Tests for provider request shapes and page parsing, without network access."""

import pytest

from insight_search.errors import FatalProviderError
from insight_search.search.normalize import normalize_image_results
from insight_search.search.pexels_provider import PEXELS_SEARCH_URL, PexelsImageProvider
from insight_search.search.rapidapi_provider import RapidAPISearchProvider
from insight_search.search.scraper import WebScraper
from insight_search.search.serpapi_provider import SERPAPI_URL, SerpAPISearchProvider
from insight_search.search.serper_provider import SerperSearchProvider


class RequestRecorder:
    """Replaces ``_request_json`` and returns a canned payload."""

    def __init__(self, payload):
        self.payload = payload
        self.calls = []

    async def __call__(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        return self.payload


async def test_serper_web_request(monkeypatch):
    provider = SerperSearchProvider(api_key="serper-key")
    recorder = RequestRecorder({"organic": []})
    monkeypatch.setattr(provider, "_request_json", recorder)

    await provider.search_web("python", max_results=7)

    method, url, kwargs = recorder.calls[0]
    assert method == "POST"
    assert url.endswith("/search")
    assert kwargs["headers"]["X-API-KEY"] == "serper-key"
    assert kwargs["json"]["q"] == "python"
    assert kwargs["json"]["num"] == 7


async def test_serper_image_request(monkeypatch):
    provider = SerperSearchProvider(api_key="serper-key")
    recorder = RequestRecorder({"images": []})
    monkeypatch.setattr(provider, "_request_json", recorder)

    await provider.search_images("owls")

    assert recorder.calls[0][1].endswith("/images")


async def test_serpapi_image_search_uses_isch(monkeypatch):
    provider = SerpAPISearchProvider(api_key="serpapi-key")
    recorder = RequestRecorder({"images_results": []})
    monkeypatch.setattr(provider, "_request_json", recorder)

    await provider.search_images("owls", max_results=5)

    method, url, kwargs = recorder.calls[0]
    assert (method, url) == ("GET", SERPAPI_URL)
    assert kwargs["params"]["tbm"] == "isch"
    assert kwargs["params"]["api_key"] == "serpapi-key"
    assert kwargs["params"]["engine"] == "google"


async def test_rapidapi_images_are_picked_from_web_results(monkeypatch):
    provider = RapidAPISearchProvider(api_key="rapid-key")
    recorder = RequestRecorder(
        {
            "result": [
                {"title": "Owl photos", "href": "https://a.example/owls", "body": "Great shots"},
                {"title": "Owl facts", "href": "https://b.example/facts", "body": "Biology"},
                {"title": "Gallery", "href": "https://c.example/images/owl", "body": ""},
            ]
        }
    )
    monkeypatch.setattr(provider, "_request_json", recorder)

    payload = await provider.search_images("owls", max_results=10)

    _, _, kwargs = recorder.calls[0]
    assert kwargs["json"]["text"] == "owls images"
    assert kwargs["json"]["max_results"] == 20
    assert kwargs["headers"]["x-rapidapi-key"] == "rapid-key"
    urls = [image.url for image in normalize_image_results(payload)]
    assert urls == ["https://a.example/owls", "https://c.example/images/owl"]


async def test_pexels_request(monkeypatch):
    provider = PexelsImageProvider(api_key="pexels-key")
    recorder = RequestRecorder({"photos": []})
    monkeypatch.setattr(provider, "_request_json", recorder)

    await provider.search_images("mountains", max_results=200)

    method, url, kwargs = recorder.calls[0]
    assert (method, url) == ("GET", PEXELS_SEARCH_URL)
    assert kwargs["headers"] == {"Authorization": "pexels-key"}
    assert kwargs["params"]["per_page"] == 80


async def test_pexels_has_no_web_search():
    with pytest.raises(FatalProviderError):
        await PexelsImageProvider(api_key="pexels-key").search_web("mountains")


PAGE = """<html><head>
<title> Python Releases </title>
<meta property="og:image" content="https://example.com/og.png">
<style>body { color: red; }</style>
</head><body>
<nav>Home | About</nav>
<h1>Python 3.13</h1>
<p>Python   3.13 was released
in October.</p>
<script>console.log("tracking")</script>
<footer>Copyright</footer>
</body></html>"""


def test_parse_html_extracts_title_thumbnail_and_text():
    page = WebScraper().parse_html(PAGE, "https://example.com/python")

    assert page.title == "Python Releases"
    assert page.thumbnail == "https://example.com/og.png"
    assert page.content == "Python Releases Python 3.13 Python 3.13 was released in October."
    assert "tracking" not in page.content
    assert "Home" not in page.content


def test_parse_html_falls_back_to_h1_and_twitter_image():
    html = '<html><head><meta name="twitter:image" content="https://t.example/card.png"></head><body><h1>Heading</h1></body></html>'

    page = WebScraper().parse_html(html, "https://t.example")

    assert page.title == "Heading"
    assert page.thumbnail == "https://t.example/card.png"


def test_parse_html_truncates_text():
    html = "<html><body><p>" + "word " * 100 + "</p></body></html>"

    page = WebScraper(max_chars=20).parse_html(html, "https://long.example")

    assert len(page.content) == 20
    assert page.thumbnail is None
