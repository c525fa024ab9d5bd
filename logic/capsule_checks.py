"""Traveller-facing sanity checks on a built capsule."""

from __future__ import annotations

from typing import List, Optional, Sequence

from logic.categories import is_in_bucket
from logic.style_eligibility import detect_presentation
from logic.weather_analysis import analyze_weather
from models.trip import CapsuleWarning, DayWeather, TripCapsule
from models.wardrobe_item import CanonicalWardrobeItem


def validate_capsule(
    capsule: TripCapsule,
    weather: Sequence[DayWeather],
    activities: Sequence[str],
    wardrobe: Optional[Sequence[CanonicalWardrobeItem]] = None,
    presentation: Optional[str] = None,
) -> List[CapsuleWarning]:
    """Return warnings for gaps the traveller should fix before packing."""

    warnings: List[CapsuleWarning] = []
    categories = {group.category for group in capsule.packing_list}
    items = capsule.all_items()
    needs = analyze_weather(weather)

    if items and "Shoes" not in categories:
        warnings.append(CapsuleWarning("NO_SHOES", "No shoes in your packing list. Add footwear to your wardrobe."))

    if needs.needs_warm_layer and "Outerwear" not in categories:
        warnings.append(CapsuleWarning("NO_OUTERWEAR", "Cold days ahead but no outerwear available."))

    if needs.needs_rain_layer and not any(is_in_bucket(item, "outerwear") for item in items):
        warnings.append(CapsuleWarning("NO_RAIN_GEAR", "Rain expected but no outerwear packed."))

    if items and "Tops" not in categories and "Dresses" not in categories:
        warnings.append(CapsuleWarning("NO_TOPS", "No tops or dresses. Add clothing to your wardrobe."))

    available = [(item.main_category, item.sub_category) for item in items] + [
        (item.main_category, item.subcategory) for item in wardrobe or ()
    ]

    if "Beach" in activities and not any(
        category == "Swimwear" or "swim" in (sub or "").lower() for category, sub in available
    ):
        warnings.append(CapsuleWarning("NO_SWIMWEAR", "Beach planned but no swimwear found."))

    if "Active" in activities and not any(category == "Activewear" for category, _ in available):
        warnings.append(CapsuleWarning("NO_ACTIVEWEAR", "Workouts planned but no activewear found."))

    resolved = presentation or (detect_presentation(wardrobe) if wardrobe is not None else "mixed")
    if resolved == "masculine" and any(
        is_in_bucket(item, "dresses") for outfit in capsule.outfits for item in outfit.items
    ):
        warnings.append(
            CapsuleWarning("STYLE_COHERENCE_VIOLATION", "Masculine profile but dresses appear in outfits.")
        )

    if not items:
        warnings.append(CapsuleWarning("EMPTY_CAPSULE", "No items could be packed. Add items to your wardrobe."))

    return warnings


__all__ = ["validate_capsule"]
