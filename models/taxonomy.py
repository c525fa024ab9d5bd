"""Canonical vocabularies for trip capsules.

This module centralises the labels shared by the capsule engine: the packing
buckets and the lookup table that maps wardrobe main categories onto them,
trip activities, weather conditions and presentation profiles. Keeping them in
one place keeps the builder, the rebuild gate and the checks consistent.
"""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

CategoryBucket = Literal["tops", "bottoms", "outerwear", "shoes", "accessories", "dresses"]
Presentation = Literal["masculine", "feminine", "mixed"]
ClimateZone = Literal["freezing", "cold", "cool", "mild", "warm", "hot"]
WeatherSource = Literal["live", "cached", "estimated"]
RebuildMode = Literal["AUTO", "FORCE"]

BUCKETS: List[str] = ["tops", "bottoms", "outerwear", "shoes", "accessories", "dresses"]

# Categories absent from this table (Activewear, Swimwear, Loungewear...) have
# no bucket. Activity gear below is added on its own scheduled days.
MAIN_CATEGORY_TO_BUCKET: Dict[str, str] = {
    "Tops": "tops",
    "Formalwear": "tops",
    "Bottoms": "bottoms",
    "Skirts": "bottoms",
    "Outerwear": "outerwear",
    "Shoes": "shoes",
    "Accessories": "accessories",
    "Bags": "accessories",
    "Headwear": "accessories",
    "Jewelry": "accessories",
    "Dresses": "dresses",
    "TraditionalWear": "dresses",
}

_BUCKET_BY_LOWER_CATEGORY: Dict[str, str] = {
    category.lower(): bucket for category, bucket in MAIN_CATEGORY_TO_BUCKET.items()
}

TRIP_ACTIVITIES: List[str] = [
    "Business",
    "Dinner",
    "Casual",
    "Beach",
    "Active",
    "Formal",
    "Sightseeing",
    "Cold Weather",
]

WEATHER_CONDITIONS: List[str] = ["sunny", "partly-cloudy", "cloudy", "rainy", "snowy", "windy"]
DEFAULT_WEATHER_CONDITION = "partly-cloudy"

ACTIVITY_GEAR_CATEGORIES: Dict[str, str] = {"Beach": "Swimwear", "Active": "Activewear"}

PRESENTATIONS: List[str] = ["masculine", "feminine", "mixed"]
FEMININE_ONLY_MAIN_CATEGORIES = frozenset({"Dresses", "Skirts"})

PACKING_CATEGORY_ORDER: List[str] = [
    "Tops",
    "Bottoms",
    "Dresses",
    "Outerwear",
    "Shoes",
    "Accessories",
    "Other",
]

DAY_LABELS: List[str] = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
WEEKDAY_LABELS = frozenset({"Mon", "Tue", "Wed", "Thu", "Fri"})

VERSATILE_COLORS = frozenset(
    {"black", "navy", "grey", "gray", "white", "tan", "charcoal", "cream", "beige", "khaki"}
)


def bucket_for_category(main_category: Optional[str]) -> Optional[str]:
    """Return the packing bucket for a main category, or ``None`` when unmapped."""

    if not main_category:
        return None
    trimmed = main_category.strip()
    bucket = MAIN_CATEGORY_TO_BUCKET.get(trimmed)
    if bucket:
        return bucket
    return _BUCKET_BY_LOWER_CATEGORY.get(trimmed.lower())


def is_trip_activity(value: str) -> bool:
    return value in TRIP_ACTIVITIES


def normalize_condition(value: Optional[str]) -> str:
    """Collapse provider condition strings onto the six supported values."""

    if value and value in WEATHER_CONDITIONS:
        return value
    return DEFAULT_WEATHER_CONDITION


__all__ = [
    "ACTIVITY_GEAR_CATEGORIES",
    "BUCKETS",
    "CategoryBucket",
    "ClimateZone",
    "DAY_LABELS",
    "DEFAULT_WEATHER_CONDITION",
    "FEMININE_ONLY_MAIN_CATEGORIES",
    "MAIN_CATEGORY_TO_BUCKET",
    "PACKING_CATEGORY_ORDER",
    "PRESENTATIONS",
    "Presentation",
    "RebuildMode",
    "TRIP_ACTIVITIES",
    "VERSATILE_COLORS",
    "WEATHER_CONDITIONS",
    "WEEKDAY_LABELS",
    "WeatherSource",
    "bucket_for_category",
    "is_trip_activity",
    "normalize_condition",
]
