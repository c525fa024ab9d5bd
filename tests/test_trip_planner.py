"""Planner service: staleness gating, presentation resolution and configuration."""
from __future__ import annotations

import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from services.trip_planner import TripPlanner, default_weather_provider, resolve_presentation
from models.wardrobe_item import CanonicalWardrobeItem
from tools.weather_provider import EstimatedWeatherProvider, ForecastApiWeatherProvider
from trip_app.config import CapsuleEngineConfig


def _planner() -> TripPlanner:
    return TripPlanner(config=CapsuleEngineConfig(), weather_provider=EstimatedWeatherProvider())


def _wardrobe() -> List[Dict[str, Any]]:
    return [
        {"id": "tee", "name": "White Tee", "mainCategory": "Tops", "subcategory": "T-Shirt"},
        {"id": "oxford", "name": "Oxford Shirt", "mainCategory": "Tops", "subcategory": "Oxford Shirt"},
        {"id": "jeans", "name": "Jeans", "mainCategory": "Bottoms", "subcategory": "Jeans"},
        {"id": "chinos", "name": "Chinos", "mainCategory": "Bottoms", "subcategory": "Chinos"},
        {"id": "sneakers", "name": "Sneakers", "mainCategory": "Shoes", "subcategory": "Sneaker"},
        {"id": "loafers", "name": "Loafers", "mainCategory": "Shoes", "subcategory": "Loafer"},
        {"id": "coat", "name": "Wool Coat", "mainCategory": "Outerwear", "subcategory": "Overcoat"},
        {"id": "dress", "name": "Wrap Dress", "mainCategory": "Dresses", "subcategory": "Wrap Dress"},
        {"id": "suit", "name": "Suit Jacket", "mainCategory": "Outerwear", "careStatus": "at_cleaner"},
    ]


def _weather(days: int = 3, low_f: int = 60) -> List[Dict[str, Any]]:
    start = date(2025, 6, 2)
    return [
        {
            "date": (start + timedelta(days=offset)).isoformat(),
            "dayLabel": ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"][offset % 7],
            "highF": 72,
            "lowF": low_f,
            "condition": "sunny",
            "rainChance": 10,
        }
        for offset in range(days)
    ]


def test_first_plan_builds_capsule() -> None:
    response = _planner().plan_capsule(wardrobe=_wardrobe(), weather=_weather(), activities=["Casual", "Dinner"])

    assert response["status"] == "built"
    assert response["decision"] == {"rebuild": False, "reason": "NO_CAPSULE", "mode": "AUTO"}
    assert response["weather"]["source"] == "provided"
    capsule = response["capsule"]
    assert capsule["version"] == 2
    assert [outfit["dayLabel"] for outfit in capsule["outfits"]] == ["Day 1", "Day 2", "Day 3"]
    summary = response["debug_summary"]
    assert summary["wardrobe_count"] == 9
    assert summary["candidate_count"] == 8
    assert summary["outfit_count"] == 3
    packed_ids = {item["wardrobeItemId"] for group in capsule["packingList"] for item in group["items"]}
    assert "suit" not in packed_ids


def test_stored_capsule_is_returned_while_up_to_date() -> None:
    planner = _planner()
    request = {"wardrobe": _wardrobe(), "weather": _weather(), "activities": ["Casual"]}
    first = planner.plan_capsule(**request)

    second = planner.plan_capsule(existing_capsule=first["capsule"], **request)

    assert second["status"] == "up_to_date"
    assert second["decision"]["reason"] == "UP_TO_DATE"
    assert second["capsule"]["build_id"] == first["capsule"]["build_id"]
    assert second["capsule"]["outfits"] == first["capsule"]["outfits"]


def test_changed_inputs_trigger_rebuild() -> None:
    planner = _planner()
    first = planner.plan_capsule(wardrobe=_wardrobe(), weather=_weather(), activities=["Casual"])

    rebuilt = planner.plan_capsule(
        wardrobe=_wardrobe(), weather=_weather(), activities=["Business"], existing_capsule=first["capsule"]
    )
    forced = planner.plan_capsule(
        wardrobe=_wardrobe(),
        weather=_weather(),
        activities=["Casual"],
        existing_capsule=first["capsule"],
        mode="FORCE",
    )

    assert rebuilt["status"] == "rebuilt"
    assert rebuilt["decision"]["reason"] == "FINGERPRINT_MISMATCH"
    assert rebuilt["capsule"]["build_id"] != first["capsule"]["build_id"]
    assert forced["decision"] == {"rebuild": True, "reason": "FORCE_REBUILD", "mode": "FORCE"}


def test_masculine_profile_never_packs_dresses() -> None:
    response = _planner().plan_capsule(
        wardrobe=_wardrobe(), weather=_weather(6), activities=["Casual"], gender_presentation="male"
    )

    assert response["presentation"] == "masculine"
    categories = [item["mainCategory"] for outfit in response["capsule"]["outfits"] for item in outfit["items"]]
    assert "Dresses" not in categories


def test_prompt_override_relaxes_masculine_lock() -> None:
    response = _planner().plan_capsule(
        wardrobe=_wardrobe(),
        weather=_weather(),
        activities=["Casual"],
        gender_presentation="male",
        prompt="Please include my wrap dress",
    )

    assert response["presentation"] == "mixed"
    assert response["debug_summary"]["feminine_override"] is True


def test_resolve_presentation_precedence() -> None:
    wardrobe = [CanonicalWardrobeItem(id=f"d{i}", name="Dress", main_category="Dresses") for i in range(3)]

    assert resolve_presentation(wardrobe) == ("feminine", False)
    assert resolve_presentation(wardrobe, gender_presentation="male") == ("masculine", False)
    assert resolve_presentation(wardrobe, explicit="mixed", gender_presentation="male") == ("mixed", False)
    assert resolve_presentation(wardrobe, explicit="masculine", prompt="bring heels") == ("mixed", True)


def test_destination_uses_weather_provider() -> None:
    response = _planner().plan_capsule(
        wardrobe=_wardrobe(),
        destination="Seattle",
        start_date="2025-10-06",
        end_date="2025-10-08",
        activities=["Sightseeing"],
    )

    assert response["weather"]["source"] == "estimated"
    assert [day["date"] for day in response["weather"]["days"]] == ["2025-10-06", "2025-10-07", "2025-10-08"]
    assert response["debug_summary"]["num_days"] == 3


@pytest.mark.parametrize(
    "request_overrides",
    [
        {"activities": ["Skydiving"], "weather": _weather()},
        {"activities": ["Casual"]},
        {"activities": ["Casual"], "destination": "Paris", "start_date": "2025-06-05", "end_date": "2025-06-01"},
        {"activities": ["Casual"], "weather": _weather(), "mode": "SOMETIMES"},
    ],
)
def test_invalid_requests_need_review(request_overrides: Dict[str, Any]) -> None:
    response = _planner().plan_capsule(wardrobe=_wardrobe(), **request_overrides)

    assert response["status"] == "needs_review"
    assert response["details"]


def test_check_rebuild_reports_decision() -> None:
    planner = _planner()
    stored = {"build_id": "build_1_a", "version": 1, "outfits": []}

    response = planner.check_rebuild(capsule=stored, presentation="mixed")
    invalid = planner.check_rebuild(capsule=stored, presentation="unknown")

    assert response["status"] == "ok"
    assert response["decision"]["reason"] == "VERSION_MISMATCH"
    assert response["debug_summary"]["current_version"] == 2
    assert invalid["status"] == "needs_review"


def test_config_from_env_merges_yaml_and_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path / "staging.yaml"
    config_file.write_text(
        "# staging settings\n"
        "default_location_id: cabin\n"
        "location_min_items: 3\n"
        'weather_api_base_url: "https://weather.example"\n'
    )
    for key in ("APP_CONFIG_PATH", "DEFAULT_LOCATION_ID", "WEATHER_API_BASE_URL", "WEATHER_TIMEOUT_SECONDS"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("APP_ENV", "staging")
    monkeypatch.setenv("TRIP_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("LOCATION_MIN_ITEMS", "7")

    config = CapsuleEngineConfig.from_env()

    assert config.environment == "staging"
    assert config.default_location_id == "cabin"
    assert config.location_min_items == 7
    assert config.weather_api_base_url == "https://weather.example"
    assert config.weather_timeout_seconds == 5.0
    assert isinstance(default_weather_provider(config), ForecastApiWeatherProvider)
    assert isinstance(default_weather_provider(CapsuleEngineConfig()), EstimatedWeatherProvider)


def test_config_location_settings_drive_filter() -> None:
    wardrobe = [{**record, "locationId": "cabin"} for record in _wardrobe()[:4]] + _wardrobe()[4:]
    planner = TripPlanner(
        config=CapsuleEngineConfig(default_location_id="cabin", location_min_items=4),
        weather_provider=EstimatedWeatherProvider(),
    )

    response = planner.plan_capsule(wardrobe=wardrobe, weather=_weather(), activities=["Casual"])

    assert response["debug_summary"]["location_id"] == "cabin"
    assert response["debug_summary"]["candidate_count"] == 4
