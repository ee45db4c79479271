from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from stylefinder.schemas.product import Slot

logger = logging.getLogger(__name__)

# Class names emitted by the hosted clothing detector, checked before the
# generic keywords below.
_DETECTOR_CLASSES: tuple[tuple[str, Slot], ...] = (
    ("upper body clothes", Slot.UPPER),
    ("upper-clothes", Slot.UPPER),
    ("lower body clothes", Slot.LOWER),
    ("lower-clothes", Slot.LOWER),
    ("shoes", Slot.FOOTWEAR),
    ("footwear", Slot.FOOTWEAR),
    ("jewelleries", Slot.ACCESSORIES),
    ("jewelries", Slot.ACCESSORIES),
    ("bags", Slot.ACCESSORIES),
    ("watches", Slot.ACCESSORIES),
    ("sunglasses", Slot.ACCESSORIES),
    ("hats", Slot.ACCESSORIES),
    ("belts", Slot.ACCESSORIES),
)

_LABEL_KEYWORDS: dict[Slot, tuple[str, ...]] = {
    Slot.UPPER: (
        "shirt", "top", "blouse", "jacket", "coat", "sweater",
        "hoodie", "dress", "kurti", "kurta", "saree",
    ),
    Slot.LOWER: ("pant", "trouser", "jeans", "short", "skirt", "legging", "salwar", "dhoti"),
    Slot.FOOTWEAR: ("shoe", "sneaker", "boot", "sandal", "heel", "slipper"),
    Slot.ACCESSORIES: (
        "bag", "purse", "hat", "cap", "sunglasses", "watch",
        "scarf", "belt", "jewel",
    ),
}

INCLUDE_WEIGHT = 10
EXCLUDE_WEIGHT = 50


@dataclass(frozen=True, slots=True)
class SlotKeywords:
    include: tuple[str, ...]
    exclude: tuple[str, ...]


DEFAULT_TITLE_TAXONOMY: dict[Slot, SlotKeywords] = {
    Slot.UPPER: SlotKeywords(
        include=(
            "shirt", "top", "blouse", "kurti", "kurta", "tunic", "jacket", "blazer",
            "coat", "sweater", "sweatshirt", "hoodie", "cardigan", "shrug", "camisole",
            "polo", "dress", "gown", "saree",
        ),
        exclude=(
            "pant", "trouser", "jeans", "skirt", "legging", "palazzo", "salwar",
            "shorts", "shoe", "sneaker", "sandal", "heel", "bag", "watch",
        ),
    ),
    Slot.LOWER: SlotKeywords(
        include=(
            "pant", "trouser", "jeans", "skirt", "shorts", "legging", "jegging",
            "palazzo", "salwar", "dhoti", "chino", "jogger", "culotte", "capri",
        ),
        exclude=(
            "shirt", "blouse", "kurti", "kurta", "dress", "saree", "shoe",
            "sneaker", "sandal", "bag", "watch",
        ),
    ),
    Slot.FOOTWEAR: SlotKeywords(
        include=(
            "shoe", "sneaker", "sandal", "heel", "boot", "loafer", "slipper",
            "flip flop", "jutti", "mojari", "kolhapuri", "flats", "wedge", "mule",
        ),
        exclude=("shirt", "kurti", "kurta", "dress", "pant", "jeans", "skirt", "bag", "watch", "sock"),
    ),
    Slot.ACCESSORIES: SlotKeywords(
        include=(
            "bag", "handbag", "clutch", "purse", "wallet", "tote", "watch",
            "sunglasses", "earring", "necklace", "bracelet", "bangle", "jewellery",
            "jewelry", "pendant", "belt", "scarf", "stole", "dupatta", "hat",
        ),
        exclude=(
            "shirt", "kurti", "kurta", "blouse", "dress", "gown", "saree", "coat", "blazer",
            "jacket", "pant", "trouser", "jeans", "skirt", "shoe", "sneaker", "sandal",
            "heel", "loafer", "boot",
        ),
    ),
}


def _keyword_patterns(keywords: tuple[str, ...]) -> tuple[re.Pattern[str], ...]:
    # Whole words with an optional plural, so "hat" never matches "that".
    return tuple(re.compile(rf"\b{re.escape(k)}(?:s|es)?\b") for k in keywords)


class GarmentClassifier:
    def classify(self, text: str) -> Slot | None:
        raise NotImplementedError


class DetectorLabelClassifier(GarmentClassifier):
    """Maps a detector class label to a slot by substring."""

    def classify(self, text: str) -> Slot | None:
        label = (text or "").strip().lower()
        if not label:
            return None

        for needle, slot in _DETECTOR_CLASSES:
            if needle in label:
                return slot

        for slot, keywords in _LABEL_KEYWORDS.items():
            if any(k in label for k in keywords):
                return slot

        logger.info("detector_label_unmapped label=%s", text)
        return None


class TitleClassifier(GarmentClassifier):
    """Scores a free-text product title against per-slot keyword lists.

    Each include hit adds 10, each exclude hit subtracts 50. The slot with the
    strictly highest positive score wins; ties and non-positive maxima return
    None so that titles naming garments from two slots are dropped.
    """

    def __init__(self, taxonomy: dict[Slot, SlotKeywords] | None = None) -> None:
        self.taxonomy = taxonomy or DEFAULT_TITLE_TAXONOMY
        self._patterns = {
            slot: (_keyword_patterns(keywords.include), _keyword_patterns(keywords.exclude))
            for slot, keywords in self.taxonomy.items()
        }

    def scores(self, text: str) -> dict[Slot, int]:
        title = (text or "").lower()
        out: dict[Slot, int] = {}
        for slot, (include, exclude) in self._patterns.items():
            score = 0
            score += INCLUDE_WEIGHT * sum(1 for p in include if p.search(title))
            score -= EXCLUDE_WEIGHT * sum(1 for p in exclude if p.search(title))
            out[slot] = score
        return out

    def classify(self, text: str) -> Slot | None:
        scores = self.scores(text)
        if not scores:
            return None
        best = max(scores.values())
        if best <= 0:
            return None
        winners = [slot for slot, score in scores.items() if score == best]
        if len(winners) != 1:
            return None
        return winners[0]
