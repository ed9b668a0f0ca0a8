"""Mock objects for testing."""

from tests.mocks.mock_llm import MockChatModel, MockMessage, MockModelFactory
from tests.mocks.mock_scraper import MockScraper, MockWikipedia
from tests.mocks.mock_search import MockSearchProvider, serper_image_payload, serper_web_payload

__all__ = [
    "MockChatModel",
    "MockMessage",
    "MockModelFactory",
    "MockSearchProvider",
    "MockScraper",
    "MockWikipedia",
    "serper_web_payload",
    "serper_image_payload",
]
