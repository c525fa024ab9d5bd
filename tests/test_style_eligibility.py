"""Presentation eligibility, garment flags and prompt overrides."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import List

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.activity_scoring import activity_profile
from logic.style_eligibility import (
    detect_presentation,
    filter_eligible_items,
    gate_pool,
    has_feminine_override,
    infer_garment_flags,
    is_item_eligible_for_profile,
    normalize_gender_to_presentation,
)
from models.wardrobe_item import CanonicalWardrobeItem, adapt_wardrobe_item


def _item(item_id: str, main_category: str, subcategory: str = "", name: str = "") -> CanonicalWardrobeItem:
    return CanonicalWardrobeItem(id=item_id, name=name or item_id, main_category=main_category, subcategory=subcategory)


def _neutral_items(count: int) -> List[CanonicalWardrobeItem]:
    return [_item(f"tee{i}", "Tops", "T-Shirt") for i in range(count)]


def test_dress_shirt_is_eligible_for_masculine_profile() -> None:
    shirt = adapt_wardrobe_item(
        {"id": "ds1", "name": "White Dress Shirt", "main_category": "Tops", "subcategory": "Dress Shirt"}
    )

    assert is_item_eligible_for_profile(shirt, "masculine")
    assert not infer_garment_flags(shirt).is_feminine_only


def test_feminine_only_items_are_blocked_for_masculine() -> None:
    blocked = [
        _item("d", "Dresses", "Midi"),
        _item("k", "Skirts", "Pleated"),
        _item("b", "Tops", "Silk Blouse"),
        _item("p", "Shoes", "Pumps"),
        _item("h", "Shoes", "Block Heel Sandal"),
        _item("e", "Jewelry", "Earrings"),
        _item("hb", "Bags", "Handbag"),
        _item("g", "Formalwear", "Evening Gown"),
        _item("sd", "Tops", "Shirt Dress"),
    ]

    for item in blocked:
        assert not is_item_eligible_for_profile(item, "masculine"), item.id


def test_name_keywords_respect_false_positive_guards() -> None:
    sneaker = _item("s", "Shoes", "Sneaker", name="Runner with heel tab")
    steak_tee = _item("t", "Tops", "T-Shirt", name="Skirt Steak BBQ Tee")

    assert is_item_eligible_for_profile(sneaker, "masculine")
    assert is_item_eligible_for_profile(steak_tee, "masculine")


def test_non_masculine_profiles_accept_everything() -> None:
    items = [_item("d", "Dresses", "Wrap Dress"), _item("t", "Tops", "Tee")]

    assert filter_eligible_items(items, "feminine") == items
    assert filter_eligible_items(items, "mixed") == items
    assert [item.id for item in filter_eligible_items(items, "masculine")] == ["t"]


def test_feminine_override_keywords() -> None:
    assert has_feminine_override("Please pack a DRESS for the gala")
    assert has_feminine_override("add my heels")
    assert has_feminine_override("women's cut blazer")
    assert has_feminine_override("pronouns: she/her")
    assert not has_feminine_override("pack shirts and shorts")
    assert not has_feminine_override("")
    assert not has_feminine_override(None)


def test_gender_normalization() -> None:
    assert normalize_gender_to_presentation("male") == "masculine"
    assert normalize_gender_to_presentation(" MALE ") == "masculine"
    assert normalize_gender_to_presentation("Female") == "feminine"
    assert normalize_gender_to_presentation("fe_male") == "feminine"
    for raw in (None, "", "other", "non-binary", "non_binary", "Non Binary", "rather_not_say"):
        assert normalize_gender_to_presentation(raw) == "mixed"


def test_detect_presentation_ignores_small_minorities() -> None:
    wardrobe = _neutral_items(30) + [_item("d", "Dresses", "Sundress")]

    assert detect_presentation(wardrobe) == "masculine"
    assert detect_presentation([]) == "mixed"


def test_detect_presentation_dominance() -> None:
    dresses = [_item(f"d{i}", "Dresses", "Wrap Dress") for i in range(6)]
    blazers = [_item(f"b{i}", "Outerwear", "Blazer") for i in range(6)]

    assert detect_presentation(dresses + _neutral_items(4)) == "feminine"
    assert detect_presentation(dresses + blazers) == "mixed"
    assert detect_presentation(blazers + dresses[:2] + _neutral_items(4)) == "masculine"


def test_gate_pool_rules() -> None:
    shorts = _item("sh", "Bottoms", "Shorts")
    sneakers = _item("sn", "Shoes", "Sneaker")
    heels = _item("hl", "Shoes", "Heels")
    hawaiian = _item("hw", "Tops", "Hawaiian Shirt")
    trousers = _item("tr", "Bottoms", "Trousers")

    cold_casual = gate_pool([shorts, trousers], "cold", activity_profile("Casual"))
    assert [item.id for item in cold_casual] == ["tr"]

    formal = gate_pool([sneakers, hawaiian, trousers], "mild", activity_profile("Business"))
    assert [item.id for item in formal] == ["tr"]

    masculine = gate_pool([heels, trousers], "mild", activity_profile("Casual"), "masculine")
    assert [item.id for item in masculine] == ["tr"]
