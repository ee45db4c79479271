from __future__ import annotations

import pytest

from stylefinder.schemas.product import Slot
from stylefinder.services.garment_classifier import (
    DetectorLabelClassifier,
    SlotKeywords,
    TitleClassifier,
)


@pytest.mark.parametrize(
    "label,expected",
    [
        ("upper body clothes", Slot.UPPER),
        ("Lower Body Clothes", Slot.LOWER),
        ("shoes", Slot.FOOTWEAR),
        ("jewelleries", Slot.ACCESSORIES),
        ("bags", Slot.ACCESSORIES),
        ("watches", Slot.ACCESSORIES),
        ("kurti", Slot.UPPER),
        ("leggings", Slot.LOWER),
        ("sandal", Slot.FOOTWEAR),
    ],
)
def test_detector_labels_map_to_slots(label, expected):
    assert DetectorLabelClassifier().classify(label) == expected


def test_unknown_detector_label_is_dropped():
    classifier = DetectorLabelClassifier()
    assert classifier.classify("person") is None
    assert classifier.classify("") is None


@pytest.mark.parametrize(
    "title,expected",
    [
        ("Women Rayon Straight Kurti", Slot.UPPER),
        ("Men Slim Fit Stretchable Jeans", Slot.LOWER),
        ("Women Block Heels Sandals", Slot.FOOTWEAR),
        ("Gold-Plated Jhumka Earrings", Slot.ACCESSORIES),
    ],
)
def test_titles_classify_by_include_keywords(title, expected):
    assert TitleClassifier().classify(title) == expected


def test_exclude_keyword_outweighs_include_for_same_slot():
    classifier = TitleClassifier()
    scores = classifier.scores("red pant shirt combo")
    assert scores[Slot.UPPER] <= 0
    assert scores[Slot.LOWER] <= 0
    assert classifier.classify("red pant shirt combo") is None


def test_title_with_no_keywords_is_unclassifiable():
    assert TitleClassifier().classify("Gift card worth 500") is None


def test_tied_top_scores_are_unclassifiable():
    taxonomy = {
        Slot.UPPER: SlotKeywords(include=("tee",), exclude=()),
        Slot.LOWER: SlotKeywords(include=("tee",), exclude=()),
    }
    assert TitleClassifier(taxonomy).classify("basic tee") is None


def test_scores_use_fixed_weights():
    taxonomy = {Slot.UPPER: SlotKeywords(include=("shirt", "linen"), exclude=("set",))}
    classifier = TitleClassifier(taxonomy)
    assert classifier.scores("linen shirt")[Slot.UPPER] == 20
    assert classifier.scores("linen shirt set")[Slot.UPPER] == -30


@pytest.mark.parametrize(
    "title,expected",
    [
        ("Women Anarkali Kurta with Dupatta", Slot.UPPER),
        ("Belted Trench Coat", Slot.UPPER),
        ("Men Loafers That Go With Everything", Slot.FOOTWEAR),
        ("Women Sling Bags", Slot.ACCESSORIES),
        ("Floral Wrap Dresses", Slot.UPPER),
    ],
)
def test_keywords_match_whole_words_only(title, expected):
    assert TitleClassifier().classify(title) == expected


def test_outfit_accessory_does_not_tie_with_garment():
    scores = TitleClassifier().scores("Women Anarkali Kurta with Dupatta")
    assert scores[Slot.UPPER] == 10
    assert scores[Slot.ACCESSORIES] < 0
