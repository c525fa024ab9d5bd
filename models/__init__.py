"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.trip import (
    BackupSuggestion,
    CapsuleOutfit,
    CapsuleWarning,
    DayWeather,
    PackingGroup,
    TripCapsule,
    TripPackingItem,
    WeatherResult,
)
from models.wardrobe_item import CanonicalWardrobeItem, adapt_wardrobe_item

__all__ = [
    "BackupSuggestion",
    "CanonicalWardrobeItem",
    "CapsuleOutfit",
    "CapsuleWarning",
    "DayWeather",
    "PackingGroup",
    "TripCapsule",
    "TripPackingItem",
    "WeatherResult",
    "adapt_wardrobe_item",
]
