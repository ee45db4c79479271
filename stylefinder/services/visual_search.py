from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from garment_vision.utils import jpeg_data_uri
from stylefinder.core.config import settings

logger = logging.getLogger(__name__)

_RESULT_KEYS = ("visual_matches", "shopping_results", "products")


class VisualSearchError(RuntimeError):
    pass


@dataclass(slots=True)
class Candidate:
    title: str
    price: str
    source: str
    link: str
    thumbnail: str
    rating: float | None = None
    review_count: int | None = None


class SerpApiVisualSearch:
    """Reverse-image search through SerpAPI's Google Lens engine.

    ``image`` is either a public URL or raw encoded bytes; bytes are sent
    inline as a base64 data URI because garment crops have no public URL.
    Passing ``query`` turns the call into a products search refined by text.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://serpapi.com/search.json",
        country: str = "in",
        language: str = "en",
        client: httpx.AsyncClient | None = None,
        timeout: float = 20.0,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.country = country
        self.language = language
        self._client = client
        self._timeout = timeout

    async def search(self, image: str | bytes, query: str | None = None) -> list[Candidate]:
        params: dict[str, Any] = {
            "engine": "google_lens",
            "api_key": self.api_key,
            "gl": self.country,
            "hl": self.language,
        }
        if query:
            params["type"] = "products"
            params["q"] = query

        if isinstance(image, bytes):
            params["url"] = jpeg_data_uri(image)
            # Inline payloads are too large for a query string.
            payload = await self._request("POST", data=params)
        else:
            params["url"] = image
            payload = await self._request("GET", params=params)

        rows: list[dict[str, Any]] = []
        for key in _RESULT_KEYS:
            values = payload.get(key)
            if isinstance(values, list):
                rows.extend(v for v in values if isinstance(v, dict))

        out: list[Candidate] = []
        for row in rows:
            candidate = candidate_from_result(row)
            if candidate is not None:
                out.append(candidate)
        logger.info("visual_search_results mode=%s query=%s count=%d",
                    "inline" if isinstance(image, bytes) else "url", query, len(out))
        return out

    async def _request(self, method: str, **kwargs: Any) -> dict[str, Any]:
        try:
            if self._client is not None:
                response = await self._client.request(method, self.base_url, **kwargs)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.request(method, self.base_url, **kwargs)
            response.raise_for_status()
            payload = response.json()
        except Exception as exc:
            raise VisualSearchError(f"SerpAPI request failed: {type(exc).__name__}: {exc}") from exc

        if not isinstance(payload, dict):
            raise VisualSearchError("Invalid SerpAPI response payload")
        if payload.get("error"):
            raise VisualSearchError(f"SerpAPI error: {payload.get('error')}")
        return payload


def candidate_from_result(row: dict[str, Any]) -> Candidate | None:
    link = row.get("link") or row.get("product_link") or row.get("url")
    title = row.get("title")
    if not link and not title:
        return None

    return Candidate(
        title=_text(title),
        price=_price_text(row.get("price")),
        source=_text(row.get("source") or row.get("seller") or row.get("merchant_name")),
        link=_text(link),
        thumbnail=_text(row.get("thumbnail") or row.get("image")),
        rating=_as_float(row.get("rating")),
        review_count=_as_int(row.get("reviews")),
    )


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _price_text(value: Any) -> str:
    # Lens returns {"value": "₹1,299", "extracted_value": 1299.0, "currency": "₹"};
    # shopping rows return a plain string.
    if isinstance(value, dict):
        if value.get("value"):
            return _text(value["value"])
        extracted = value.get("extracted_value")
        if isinstance(extracted, (int, float)):
            return f"{value.get('currency') or ''}{extracted:g}"
        return ""
    if isinstance(value, (int, float)):
        return f"{value:g}"
    return _text(value)


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value))
    except (TypeError, ValueError):
        return None


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        digits = value.replace(",", "").strip()
        if digits.isdigit():
            return int(digits)
    return None


def build_visual_searcher() -> SerpApiVisualSearch:
    return SerpApiVisualSearch(
        api_key=settings.serpapi_api_key,
        base_url=settings.serpapi_base_url,
        country=settings.web_search_country,
        language=settings.web_search_language,
        timeout=settings.http_timeout_sec,
    )
