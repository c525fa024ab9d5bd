"""Presentation-aware eligibility rules for trip packing.

Masculine profiles never receive feminine-only garments unless the traveller
asks for them explicitly. Detection is category-aware: keyword checks run
against the subcategory first and guard against look-alike phrases such as
"dress shirt" or "heel tab".
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from logic.activity_scoring import ActivityProfile
from models.taxonomy import FEMININE_ONLY_MAIN_CATEGORIES
from models.wardrobe_item import CanonicalWardrobeItem

FEMININE_OVERRIDE_KEYWORDS = (
    "dress",
    "skirt",
    "gown",
    "blouse",
    "heel",
    "heels",
    "feminine",
    "women",
    "women's",
    "she/her",
    "halter",
)
_GENDER_SEPARATORS = re.compile(r"[\s_-]+")

# Share of a wardrobe below which a handful of gendered items is treated as noise.
_MINORITY_SHARE = 0.1
_MINORITY_COUNT = 2
_DOMINANT_SHARE = 0.7


@dataclass(frozen=True)
class GarmentFlags:
    is_minimal_coverage: bool = False
    is_beach_context: bool = False
    is_casual_only: bool = False
    is_feminine_only: bool = False


def _any_in(text: str, needles: Iterable[str]) -> bool:
    return any(needle in text for needle in needles)


def _is_dress_subcategory(sub: str) -> bool:
    return "dress" in sub and "dress shirt" not in sub


def infer_garment_flags(item: CanonicalWardrobeItem) -> GarmentFlags:
    """Classify an item from its category, subcategory and name."""

    sub = (item.subcategory or "").lower()
    name = (item.name or "").lower()
    category = item.main_category or ""

    is_shorts = "shorts" in sub or ("shorts" in name and "short sleeve" not in name)
    is_tank_top = ("tank" in sub and "tank watch" not in name) or name == "tank top"
    is_sandal = "sandal" in sub or "flip-flop" in sub or "flip-flop" in name
    is_swimwear = category == "Swimwear"
    is_minimal_coverage = is_shorts or is_tank_top or is_sandal or is_swimwear

    is_hawaiian = "hawaiian" in sub or "hawaiian" in name or "aloha" in name
    is_board_shorts = "board short" in sub or (
        "board" in name and "short" in name and "boardroom" not in name
    )
    is_beach_context = is_hawaiian or is_board_shorts or is_swimwear

    is_informal_shoe = (
        _any_in(sub, ("sneaker", "trainer", "athletic", "running shoe", "work boot", "hiking", "combat boot"))
        or _any_in(name, ("sneaker", "trainer"))
        or sub == "slides"
        or ("slide" in sub and "slideshow" not in name)
        or is_sandal
        or _any_in(sub, ("espadrille", "boat shoe"))
    )
    is_informal_top = (
        _any_in(sub, ("hoodie", "sweatshirt"))
        or ("hoodie" in name and "hood ornament" not in name)
        or (_any_in(sub, ("t-shirt", "tee")) and "dress shirt" not in sub)
        or _any_in(sub, ("crop", "jogger", "sweatpant", "cargo", "legging"))
    )
    is_casual_outerwear = _any_in(sub, ("denim jacket", "jean jacket", "puffer"))
    is_casual_only = (
        is_hawaiian
        or is_swimwear
        or is_tank_top
        or is_shorts
        or is_informal_shoe
        or is_informal_top
        or is_casual_outerwear
    )

    is_dress = category == "Dresses" or _is_dress_subcategory(sub)
    is_skirt = category == "Skirts" or ("skirt" in sub and "skirt steak" not in name)
    is_heels = ("heel" in sub and "heel tab" not in name) or _any_in(
        sub, ("stiletto", "pump", "slingback", "mary jane")
    )
    is_ballet_flat = "ballet flat" in sub or ("ballet" in name and "flat" in name)
    is_jewelry = _any_in(sub, ("earring", "bracelet", "anklet")) or _any_in(
        name, ("earring", "bracelet", "anklet")
    )
    is_purse = _any_in(sub, ("purse", "handbag", "clutch")) or _any_in(name, ("purse", "handbag"))
    is_feminine_only = (
        is_dress
        or is_skirt
        or "blouse" in sub
        or "gown" in sub
        or is_heels
        or is_ballet_flat
        or is_jewelry
        or is_purse
    )

    return GarmentFlags(
        is_minimal_coverage=is_minimal_coverage,
        is_beach_context=is_beach_context,
        is_casual_only=is_casual_only,
        is_feminine_only=is_feminine_only,
    )


def gate_pool(
    items: Sequence[CanonicalWardrobeItem],
    climate_zone: str,
    profile: ActivityProfile,
    presentation: str = "mixed",
) -> List[CanonicalWardrobeItem]:
    """Drop items that do not suit a day's climate zone and activity."""

    cold = climate_zone in {"cold", "freezing"}
    formal = profile.formality >= 2
    city = profile.context == "city"
    masculine = presentation == "masculine"

    kept: List[CanonicalWardrobeItem] = []
    for item in items:
        flags = infer_garment_flags(item)
        if masculine and flags.is_feminine_only:
            continue
        if cold and flags.is_minimal_coverage:
            continue
        if formal and city and flags.is_beach_context:
            continue
        if formal and flags.is_casual_only:
            continue
        kept.append(item)
    return kept


def normalize_gender_to_presentation(raw: Optional[str]) -> str:
    """Map a stored gender-presentation string onto a presentation profile."""

    if not raw:
        return "mixed"
    compact = _GENDER_SEPARATORS.sub("", raw.lower())
    if compact == "male":
        return "masculine"
    if compact == "female":
        return "feminine"
    return "mixed"


def is_item_eligible_for_profile(item: CanonicalWardrobeItem, presentation: str) -> bool:
    if presentation != "masculine":
        return True
    if item.main_category and item.main_category in FEMININE_ONLY_MAIN_CATEGORIES:
        return False
    return not infer_garment_flags(item).is_feminine_only


def filter_eligible_items(
    items: Sequence[CanonicalWardrobeItem], presentation: str
) -> List[CanonicalWardrobeItem]:
    if presentation != "masculine":
        return list(items)
    return [item for item in items if is_item_eligible_for_profile(item, presentation)]


def has_feminine_override(prompt_text: Optional[str]) -> bool:
    """Whether a free-text request explicitly asks for feminine pieces."""

    if not prompt_text:
        return False
    lowered = prompt_text.lower()
    return any(keyword in lowered for keyword in FEMININE_OVERRIDE_KEYWORDS)


def _feminine_signal(item: CanonicalWardrobeItem) -> bool:
    category = item.main_category or ""
    sub = (item.subcategory or "").lower()
    return (
        category in FEMININE_ONLY_MAIN_CATEGORIES
        or _is_dress_subcategory(sub)
        or _any_in(sub, ("skirt", "heel", "blouse", "handbag", "purse"))
    )


def _masculine_signal(item: CanonicalWardrobeItem) -> bool:
    sub = (item.subcategory or "").lower()
    return _any_in(sub, ("oxford", "loafer", "blazer", "suit", "tie", "necktie", "dress shirt"))


def detect_presentation(items: Sequence[CanonicalWardrobeItem]) -> str:
    """Infer a presentation from wardrobe composition.

    A few gendered pieces in a large wardrobe are ignored, so one dress among
    thirty menswear items does not flip the result to feminine.
    """

    total = len(items)
    if total == 0:
        return "mixed"

    feminine = sum(1 for item in items if _feminine_signal(item))
    masculine = sum(1 for item in items if _masculine_signal(item))

    if feminine <= _MINORITY_COUNT and feminine / total <= _MINORITY_SHARE:
        return "masculine"
    if masculine <= _MINORITY_COUNT and masculine / total <= _MINORITY_SHARE:
        return "feminine"

    signals = feminine + masculine
    if signals == 0:
        return "mixed"
    if masculine / signals >= _DOMINANT_SHARE:
        return "masculine"
    if feminine / signals >= _DOMINANT_SHARE:
        return "feminine"
    return "mixed"


__all__ = [
    "FEMININE_OVERRIDE_KEYWORDS",
    "GarmentFlags",
    "detect_presentation",
    "filter_eligible_items",
    "gate_pool",
    "has_feminine_override",
    "infer_garment_flags",
    "is_item_eligible_for_profile",
    "normalize_gender_to_presentation",
]
