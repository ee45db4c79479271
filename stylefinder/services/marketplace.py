from __future__ import annotations

import re
from collections.abc import Iterable
from urllib.parse import urlparse

# Regional (India) marketplaces whose listings are trusted.
DEFAULT_MARKETPLACE_DOMAINS: tuple[str, ...] = (
    "myntra.com",
    "ajio.com",
    "amazon.in",
    "flipkart.com",
    "nykaafashion.com",
    "nykaa.com",
    "tatacliq.com",
    "meesho.com",
    "jiomart.com",
    "snitch.co.in",
    "thesouledstore.com",
    "bewakoof.com",
    "libas.in",
    "biba.in",
    "fabindia.com",
    "westside.com",
    "shoppersstop.com",
    "lifestylestores.com",
    "maxfashion.in",
    "pantaloons.com",
    "bata.in",
    "caratlane.com",
    "tanishq.co.in",
    "fastrack.in",
    "titan.co.in",
    "lenskart.com",
)

DEFAULT_MARKETPLACE_MERCHANTS: tuple[str, ...] = (
    "myntra",
    "ajio",
    "amazon.in",
    "flipkart",
    "nykaa",
    "tata cliq",
    "tatacliq",
    "meesho",
    "jiomart",
    "snitch",
    "the souled store",
    "bewakoof",
    "libas",
    "biba",
    "fabindia",
    "westside",
    "shoppers stop",
    "lifestyle stores",
    "max fashion",
    "pantaloons",
    "bata india",
    "bata.in",
    "caratlane",
    "tanishq",
    "fastrack",
    "titan company",
    "titan.co.in",
    "lenskart",
)


def _host(url: str) -> str:
    raw = (url or "").strip()
    if not raw:
        return ""
    if "://" not in raw:
        raw = f"https://{raw}"
    host = (urlparse(raw).hostname or "").lower().rstrip(".")
    if host.startswith("www."):
        host = host[4:]
    return host


class MarketplaceFilter:
    def __init__(
        self,
        domains: Iterable[str] = DEFAULT_MARKETPLACE_DOMAINS,
        merchants: Iterable[str] = DEFAULT_MARKETPLACE_MERCHANTS,
    ) -> None:
        self.domains = tuple(d.strip().lower() for d in domains if d.strip())
        self.merchants = tuple(m.strip().lower() for m in merchants if m.strip())
        # Whole-word match so short names never hit inside unrelated merchants.
        self._merchant_patterns = tuple(re.compile(rf"\b{re.escape(m)}\b") for m in self.merchants)

    def is_allowed_link(self, url: str) -> bool:
        host = _host(url)
        if not host:
            return False
        return any(host == d or host.endswith("." + d) for d in self.domains)

    def is_allowed_source(self, source: str) -> bool:
        name = (source or "").strip().lower()
        if not name:
            return False
        return any(p.search(name) for p in self._merchant_patterns)

    def is_allowed(self, source: str, link: str) -> bool:
        """Merchant-name check when the row names a merchant, link check otherwise."""
        if (source or "").strip():
            return self.is_allowed_source(source)
        return self.is_allowed_link(link)
