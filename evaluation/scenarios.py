"""Evaluation scenarios covering trip length, weather, presentation and closet size."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional

from models.trip import DayWeather
from tools.weather_provider import day_label_for


@dataclass
class EvaluationScenario:
    name: str
    description: str
    wardrobe_items: List[Dict[str, object]]
    weather: List[DayWeather]
    activities: List[str]
    expectations: Dict[str, object]
    gender_presentation: Optional[str] = None
    location_id: str = "home"
    prompt: Optional[str] = None
    extra: Dict[str, object] = field(default_factory=dict)


def _forecast(start: date, days: int, high_f: int, low_f: int, rain_chance: int, condition: str) -> List[DayWeather]:
    return [
        DayWeather(
            date=(start + timedelta(days=offset)).isoformat(),
            day_label=day_label_for(start + timedelta(days=offset)),
            high_f=high_f,
            low_f=low_f,
            condition=condition,
            rain_chance=rain_chance,
        )
        for offset in range(days)
    ]


def _item(item_id: str, name: str, main_category: str, subcategory: str, **extra: object) -> Dict[str, object]:
    record: Dict[str, object] = {
        "id": item_id,
        "name": name,
        "main_category": main_category,
        "subcategory": subcategory,
        "location_id": "home",
        "care_status": "available",
    }
    record.update(extra)
    return record


def _wardrobe_fixtures() -> List[Dict[str, object]]:
    return [
        _item("top_oxford", "Blue Oxford Shirt", "Tops", "Oxford Shirt", color="blue", dressCode="business"),
        _item("top_tee", "White Tee", "Tops", "T-Shirt", color="white", dress_code="casual", formality_score=20),
        _item("top_sweater", "Grey Merino Sweater", "Tops", "Sweater", color="grey", thermalRating=70),
        _item("top_linen", "Linen Shirt", "Tops", "Button Down", color="cream"),
        _item("bottom_chinos", "Khaki Chinos", "Bottoms", "Chinos", color="khaki", formality_score=60),
        _item("bottom_jeans", "Dark Jeans", "Bottoms", "Jeans", color="navy", dress_code="casual"),
        _item("dress_wrap", "Green Wrap Dress", "Dresses", "Wrap Dress", color="green", occasion_tags=["datenight"]),
        _item("shoes_loafer", "Brown Loafers", "Shoes", "Loafer", color="brown", formality_score=70),
        _item("shoes_sneaker", "White Sneakers", "Shoes", "Sneaker", color="white", dress_code="casual"),
        _item("shoes_boot", "Chelsea Boots", "Shoes", "Boot", color="black", thermal_rating=65),
        _item("shoes_sandal", "Leather Sandals", "Shoes", "Sandal", color="tan"),
        _item("outer_wool", "Wool Coat", "Outerwear", "Overcoat", color="charcoal", thermalRating=85),
        _item("outer_shell", "Rain Shell", "Outerwear", "Rain Jacket", color="navy", rainOk=True),
        _item("acc_belt", "Leather Belt", "Accessories", "Belt", color="brown"),
        _item("acc_watch", "Steel Watch", "Jewelry", "Watch", color="silver"),
    ]


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="short_mild_city_break",
        description="Three mild, dry days of sightseeing and dinners.",
        wardrobe_items=_wardrobe_fixtures(),
        weather=_forecast(date(2025, 6, 6), 3, high_f=74, low_f=61, rain_chance=10, condition="sunny"),
        activities=["Sightseeing", "Dinner"],
        gender_presentation="female",
        expectations={"max_shoes": 2, "outfit_count": 3, "requires_outerwear": False},
    ),
    EvaluationScenario(
        name="long_cold_rainy_trip",
        description="Eight cold, wet days; layers required every day.",
        wardrobe_items=_wardrobe_fixtures(),
        weather=_forecast(date(2025, 11, 3), 8, high_f=48, low_f=36, rain_chance=70, condition="rainy"),
        activities=["Business", "Cold Weather"],
        gender_presentation="other",
        expectations={"max_shoes": 3, "outfit_count": 8, "requires_outerwear": True, "no_dresses": True},
    ),
    EvaluationScenario(
        name="masculine_business_trip",
        description="Masculine profile must never receive the dress in the closet.",
        wardrobe_items=_wardrobe_fixtures(),
        weather=_forecast(date(2025, 9, 1), 4, high_f=78, low_f=62, rain_chance=20, condition="partly-cloudy"),
        activities=["Business", "Dinner"],
        gender_presentation="Male",
        expectations={"max_shoes": 2, "outfit_count": 4, "no_dresses": True},
    ),
    EvaluationScenario(
        name="sparse_office_closet",
        description="Only two items at the office; the whole wardrobe is used instead.",
        wardrobe_items=[
            {**record, "location_id": "office"} if record["id"] in {"top_tee", "shoes_sneaker"} else record
            for record in _wardrobe_fixtures()
        ],
        weather=_forecast(date(2025, 7, 14), 2, high_f=85, low_f=70, rain_chance=0, condition="sunny"),
        activities=["Casual"],
        location_id="office",
        expectations={"max_shoes": 2, "outfit_count": 2, "min_candidates": 10},
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS"]
