from __future__ import annotations

import pytest

from stylefinder.services.marketplace import MarketplaceFilter


@pytest.mark.parametrize(
    "url",
    [
        "https://www.myntra.com/kurtas/libas/123/buy",
        "https://myntra.com/x",
        "https://m.ajio.com/p/456",
        "https://www.amazon.in/dp/B0ABC",
        "www.flipkart.com/some-item",
    ],
)
def test_allow_listed_links(url):
    assert MarketplaceFilter().is_allowed_link(url)


@pytest.mark.parametrize(
    "url",
    [
        "https://www.amazon.com/dp/B0ABC",
        "https://notmyntra.com/x",
        "https://myntra.com.evil.example/x",
        "https://www.etsy.com/listing/1",
        "",
    ],
)
def test_rejected_links(url):
    assert not MarketplaceFilter().is_allowed_link(url)


def test_merchant_names_match_as_whole_words():
    market = MarketplaceFilter()
    assert market.is_allowed_source("Myntra")
    assert market.is_allowed_source("AJIO.com")
    assert market.is_allowed_source("Amazon.in - Seller")
    assert not market.is_allowed_source("Amazon.com")
    assert not market.is_allowed_source("Etsy")
    assert not market.is_allowed_source("")


@pytest.mark.parametrize(
    "source",
    [
        "Acrobata Sports",
        "Titan Outdoor USA",
        "Urban Lifestyle Boutique",
        "Bibaaz Etsy",
        "Snitches Vintage",
    ],
)
def test_merchant_names_inside_other_words_are_rejected(source):
    market = MarketplaceFilter()
    assert not market.is_allowed_source(source)
    assert not market.is_allowed(source, "https://www.myntra.com/x")


@pytest.mark.parametrize("source", ["Bata India", "Titan Company", "Lifestyle Stores", "BIBA", "Max Fashion"])
def test_full_brand_names_are_allowed(source):
    assert MarketplaceFilter().is_allowed_source(source)


def test_is_allowed_prefers_source_and_falls_back_to_link():
    market = MarketplaceFilter()
    assert market.is_allowed("Myntra", "https://tracking.example/redirect")
    assert not market.is_allowed("Etsy", "https://www.myntra.com/x")
    assert market.is_allowed("", "https://www.myntra.com/x")
    assert not market.is_allowed("", "https://www.etsy.com/x")


def test_custom_allow_list():
    market = MarketplaceFilter(domains=["shop.example"], merchants=["Example Shop"])
    assert market.is_allowed_link("https://eu.shop.example/item")
    assert market.is_allowed_source("example shop official")
    assert not market.is_allowed_link("https://www.myntra.com/x")
