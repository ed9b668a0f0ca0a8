"""Tests for provider payload normalization."""

from insight_search.search.normalize import normalize_image_results, normalize_web_results
from tests.mocks import serper_image_payload, serper_web_payload


def test_serper_organic():
    results = normalize_web_results(serper_web_payload(3))

    assert [r.url for r in results] == ["https://example.com/1", "https://example.com/2", "https://example.com/3"]
    assert results[0].title == "Result 1"
    assert results[0].snippet == "Snippet 1 about the topic."


def test_serpapi_organic_results():
    payload = {"organic_results": [{"title": "Python", "link": "https://python.org", "snippet": "Official site"}]}

    results = normalize_web_results(payload)

    assert len(results) == 1
    assert results[0].url == "https://python.org"


def test_rapidapi_result_uses_href_and_body():
    payload = {"result": [{"title": "Docs", "href": "https://docs.python.org", "body": "Documentation"}]}

    results = normalize_web_results(payload)

    assert results[0].url == "https://docs.python.org"
    assert results[0].snippet == "Documentation"


def test_web_items_without_url_are_dropped():
    payload = {"organic": [{"title": "No link"}, {"title": "Linked", "link": "https://a.example"}, "junk"]}

    results = normalize_web_results(payload)

    assert [r.title for r in results] == ["Linked"]


def test_missing_fields_default_to_empty_strings():
    results = normalize_web_results({"organic": [{"link": "https://a.example"}]})

    assert results[0].title == ""
    assert results[0].snippet == ""


def test_missing_collections_give_empty_lists():
    assert normalize_web_results({}) == []
    assert normalize_web_results(None) == []
    assert normalize_image_results({"organic": []}) == []
    assert normalize_image_results("not a payload") == []


def test_serper_images():
    results = normalize_image_results(serper_image_payload(2))

    assert results[0].url == "https://img.example.com/1.jpg"
    assert results[0].thumbnail_url == "https://img.example.com/1_t.jpg"
    assert results[0].title == "Image 1"


def test_image_results_key():
    payload = {"image_results": [{"title": "Cat", "original": "https://img/cat.jpg", "thumbnail": "https://img/cat_t.jpg"}]}

    results = normalize_image_results(payload)

    assert results[0].url == "https://img/cat.jpg"
    assert results[0].thumbnail_url == "https://img/cat_t.jpg"


def test_serpapi_images_results_key():
    payload = {"images_results": [{"title": "Dog", "original": "https://img/dog.jpg", "thumbnail": "https://img/dog_t.jpg"}]}

    results = normalize_image_results(payload)

    assert results[0].url == "https://img/dog.jpg"


def test_pexels_photos_use_src():
    payload = {
        "photos": [
            {
                "alt": "Mountain lake",
                "url": "https://www.pexels.com/photo/1",
                "src": {"large": "https://images.pexels.com/1-large.jpg", "medium": "https://images.pexels.com/1-medium.jpg"},
            }
        ]
    }

    results = normalize_image_results(payload)

    assert results[0].url == "https://images.pexels.com/1-large.jpg"
    assert results[0].thumbnail_url == "https://images.pexels.com/1-medium.jpg"
    assert results[0].title == "Mountain lake"


def test_thumbnail_falls_back_to_image_url():
    results = normalize_image_results({"images": [{"imageUrl": "https://img/full.jpg"}]})

    assert results[0].thumbnail_url == "https://img/full.jpg"


def test_bare_list_payload():
    results = normalize_web_results([{"url": "https://a.example", "title": "A"}])

    assert results[0].url == "https://a.example"
