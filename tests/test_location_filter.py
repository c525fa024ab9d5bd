"""Closet location filtering with the sparse-closet fallback."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.location_filter import filter_wardrobe_by_location


def _record(item_id: str, location_id: str = "home", care_status: str = "available") -> Dict[str, str]:
    return {"id": item_id, "name": f"Item {item_id}", "location_id": location_id, "care_status": care_status}


def test_returns_items_at_location_and_excludes_cleaner() -> None:
    wardrobe = [
        _record("1"),
        _record("2", care_status="at_cleaner"),
        _record("3", location_id="office"),
        _record("4"),
        _record("5"),
        _record("6"),
        _record("7"),
    ]

    result = filter_wardrobe_by_location(wardrobe, "home")

    assert [record["id"] for record in result] == ["1", "4", "5", "6", "7"]


def test_sparse_location_falls_back_to_available_wardrobe() -> None:
    wardrobe = [
        _record("h1"),
        _record("h2", care_status="at_cleaner"),
        _record("o1", location_id="office"),
        _record("o2", location_id="office"),
        _record("o3", location_id="cabin"),
        _record("o4", location_id="cabin"),
        _record("o5", location_id="office"),
    ]

    result = filter_wardrobe_by_location(wardrobe, "home", 5)

    assert len(result) == 6
    assert [record["id"] for record in result] == ["h1", "o1", "o2", "o3", "o4", "o5"]


def test_fallback_of_only_cleaner_items_is_empty() -> None:
    wardrobe = [_record("1", care_status="at_cleaner"), _record("2", location_id="office", care_status="at_cleaner")]

    assert filter_wardrobe_by_location(wardrobe, "home") == []


def test_custom_minimum() -> None:
    wardrobe = [_record("1"), _record("2"), _record("3", location_id="office")]

    result = filter_wardrobe_by_location(wardrobe, "home", 2)

    assert [record["id"] for record in result] == ["1", "2"]


def test_camel_case_fields_and_default_location() -> None:
    wardrobe = [
        {"id": "1", "locationId": "home", "careStatus": "available"},
        {"id": "2", "locationId": "home", "careStatus": "at_cleaner"},
        {"id": "3", "locationId": "office", "careStatus": "available"},
        {"id": "4"},
    ]

    assert [record["id"] for record in filter_wardrobe_by_location(wardrobe, "home", 2)] == ["1", "4"]
    assert [record["id"] for record in filter_wardrobe_by_location(wardrobe, "office")] == ["1", "3", "4"]
