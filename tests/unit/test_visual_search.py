from __future__ import annotations

import asyncio
import base64
import json
from urllib.parse import parse_qs

import httpx
import pytest

from stylefinder.services.visual_search import (
    SerpApiVisualSearch,
    VisualSearchError,
    candidate_from_result,
)

LENS_PAYLOAD = {
    "visual_matches": [
        {
            "position": 1,
            "title": "Women Rayon Straight Kurti",
            "link": "https://www.myntra.com/kurtis/123",
            "source": "Myntra",
            "price": {"value": "₹1,299", "extracted_value": 1299.0, "currency": "₹"},
            "thumbnail": "https://img.example/1.jpg",
            "rating": 4.3,
            "reviews": 812,
        },
        {
            "title": "Printed Kurti",
            "link": "https://www.ajio.com/p/456",
            "source": "AJIO",
        },
        "not-a-row",
    ],
    "shopping_results": [
        {"title": "Cotton Kurti", "link": "https://www.amazon.in/dp/B0", "source": "Amazon.in", "price": "₹499"},
    ],
}


def _searcher(handler) -> SerpApiVisualSearch:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SerpApiVisualSearch(api_key="k", base_url="https://serp.test/search.json", client=client)


def test_url_search_sends_fixed_locale_and_parses_rows():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=LENS_PAYLOAD)

    results = asyncio.run(_searcher(handler).search("https://cdn.example/look.jpg"))

    assert len(seen) == 1
    request = seen[0]
    assert request.method == "GET"
    assert request.url.params["engine"] == "google_lens"
    assert request.url.params["url"] == "https://cdn.example/look.jpg"
    assert request.url.params["gl"] == "in"
    assert request.url.params["hl"] == "en"
    assert "q" not in request.url.params

    assert [r.title for r in results] == ["Women Rayon Straight Kurti", "Printed Kurti", "Cotton Kurti"]
    first = results[0]
    assert first.price == "₹1,299"
    assert first.source == "Myntra"
    assert first.rating == 4.3
    assert first.review_count == 812
    assert results[1].price == ""
    assert results[1].thumbnail == ""
    assert results[2].price == "₹499"


def test_inline_bytes_are_posted_as_data_uri_with_query():
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        seen.append({k: v[0] for k, v in parse_qs(request.content.decode()).items()})
        return httpx.Response(200, json={"visual_matches": []})

    results = asyncio.run(_searcher(handler).search(b"\xff\xd8jpeg-bytes", query="kurti India"))

    assert results == []
    form = seen[0]
    assert form["url"] == "data:image/jpeg;base64," + base64.b64encode(b"\xff\xd8jpeg-bytes").decode()
    assert form["type"] == "products"
    assert form["q"] == "kurti India"
    assert form["gl"] == "in"


def test_error_payload_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=json.dumps({"error": "Invalid API key."}))

    with pytest.raises(VisualSearchError):
        asyncio.run(_searcher(handler).search("https://cdn.example/look.jpg"))


def test_http_failure_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable")

    with pytest.raises(VisualSearchError):
        asyncio.run(_searcher(handler).search("https://cdn.example/look.jpg"))


def test_candidate_from_result_coerces_loose_fields():
    row = {"title": " Sneakers ", "product_link": "https://www.bata.in/x", "price": 1999, "rating": "4.1", "reviews": "1,204"}
    candidate = candidate_from_result(row)
    assert candidate is not None
    assert candidate.title == "Sneakers"
    assert candidate.link == "https://www.bata.in/x"
    assert candidate.price == "1999"
    assert candidate.rating == 4.1
    assert candidate.review_count == 1204
    assert candidate.source == ""


def test_candidate_without_title_or_link_is_skipped():
    assert candidate_from_result({"price": "₹10"}) is None
