"""Relevance scoring of wardrobe items against planned trip activities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from logic.categories import is_in_bucket
from models.wardrobe_item import CanonicalWardrobeItem


@dataclass(frozen=True)
class ActivityProfile:
    """Formality level (0-3) and setting of an activity."""

    formality: int
    context: str


_ACTIVITY_PROFILES = {
    "Formal": ActivityProfile(formality=3, context="city"),
    "Business": ActivityProfile(formality=2, context="city"),
    "Dinner": ActivityProfile(formality=2, context="city"),
    "Beach": ActivityProfile(formality=0, context="beach"),
    "Active": ActivityProfile(formality=0, context="sport"),
    "Sightseeing": ActivityProfile(formality=1, context="universal"),
    "Casual": ActivityProfile(formality=0, context="universal"),
    "Cold Weather": ActivityProfile(formality=1, context="universal"),
}
_DEFAULT_PROFILE = ActivityProfile(formality=0, context="universal")


def activity_profile(activity: Optional[str]) -> ActivityProfile:
    return _ACTIVITY_PROFILES.get(activity or "", _DEFAULT_PROFILE)


def _at_least(value: Optional[float], threshold: float) -> bool:
    return value is not None and value >= threshold


def _below(value: Optional[float], threshold: float) -> bool:
    return value is not None and value < threshold


def activity_score(item: CanonicalWardrobeItem, activities: Iterable[str]) -> int:
    """Additive relevance of ``item`` for the planned activities.

    Used only as a sort key. Unknown attributes (``None``) never match a
    predicate, so sparse records score 0 rather than being guessed at.
    """

    occasions = {tag.lower() for tag in item.occasion_tags}
    dress_code = (item.dress_code or "").lower()
    formality = item.formality_score
    category = item.main_category or ""
    score = 0

    for activity in activities:
        if activity == "Business":
            if "business" in dress_code or _at_least(formality, 70):
                score += 2
        elif activity == "Formal":
            if "black" in dress_code or "formal" in dress_code or _at_least(formality, 80):
                score += 2
        elif activity == "Dinner":
            if "datenight" in occasions or _at_least(formality, 50):
                score += 1
        elif activity == "Casual":
            if "casual" in dress_code or _below(formality, 50):
                score += 1
        elif activity == "Beach":
            if category == "Swimwear":
                score += 3
        elif activity == "Active":
            if category == "Activewear" or "gym" in occasions:
                score += 2
        elif activity == "Sightseeing":
            if "casual" in dress_code or "smart" in dress_code:
                score += 1
        elif activity == "Cold Weather":
            if is_in_bucket(item, "outerwear"):
                score += 2
            if (item.thermal_rating or 0) > 60:
                score += 1
    return score


__all__ = ["ActivityProfile", "activity_profile", "activity_score"]
