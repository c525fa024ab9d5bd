"""Deterministic capsule assembly: day outfits, packing list and backup kit.

Bucket order comes from a seeded shuffle followed by a stable sort on
activity relevance, so identical inputs always produce identical outfits.
The build id is the one field allowed to differ between two identical builds.
"""

from __future__ import annotations

import itertools
import json
import logging
import secrets
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from logic.activity_scoring import activity_profile, activity_score
from logic.categories import group_by_bucket
from logic.outfit_structure import normalize_outfit_structure
from logic.randomizer import hash_string, seeded_random, shuffle_with_seed
from logic.style_eligibility import detect_presentation, filter_eligible_items, gate_pool
from logic.weather_analysis import (
    RAIN_LAYER_CHANCE,
    WeatherNeeds,
    analyze_weather,
    derive_climate_zone,
    needs_outerwear_on,
)
from models.taxonomy import (
    ACTIVITY_GEAR_CATEGORIES,
    BUCKETS,
    PACKING_CATEGORY_ORDER,
    VERSATILE_COLORS,
    WEEKDAY_LABELS,
)
from models.trip import (
    BackupSuggestion,
    CapsuleOutfit,
    DayWeather,
    PackingGroup,
    TripCapsule,
    TripPackingItem,
)
from models.wardrobe_item import CanonicalWardrobeItem, UNKNOWN_ITEM_NAME
from trip_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)

CAPSULE_VERSION = 2

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_BUILD_COUNTER = itertools.count()
_BACKUP_BUCKET_BONUS = {"tops": 3, "outerwear": 2, "shoes": 1}
_BACKUP_KIT_SIZE = 3


@dataclass(frozen=True)
class DaySchedule:
    primary: str
    secondary: Optional[str] = None


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_build_id() -> str:
    """Return ``build_<ms timestamp>_<base36 suffix>``, unique within the process."""

    millis = int(time.time() * 1000)
    suffix = _to_base36(next(_BUILD_COUNTER)) + _to_base36(secrets.randbelow(36**6)).rjust(6, "0")
    return f"build_{millis}_{suffix}"


def to_packing_item(item: CanonicalWardrobeItem, location_label: str) -> TripPackingItem:
    return TripPackingItem(
        id=f"trip_{item.id}",
        wardrobe_item_id=item.id,
        name=item.name or UNKNOWN_ITEM_NAME,
        image_url=item.display_image_url,
        main_category=item.main_category or "Other",
        location_label=location_label,
        color=item.color,
        sub_category=item.subcategory,
        packed=False,
    )


def build_capsule_fingerprint(
    wardrobe: Sequence[CanonicalWardrobeItem],
    weather: Sequence[DayWeather],
    activities: Sequence[str],
    location: str,
    presentation: Optional[str] = None,
) -> str:
    """Opaque summary of every build input that should invalidate a stored capsule."""

    return json.dumps(
        {
            "wardrobe": sorted(item.id for item in wardrobe),
            "weather": [f"{day.date}:{day.high_f}:{day.low_f}:{day.condition}" for day in weather],
            "activities": sorted(activities),
            "location": location,
            "presentation": presentation or "mixed",
        },
        separators=(",", ":"),
    )


def plan_day_schedules(
    activities: Sequence[str], weather: Sequence[DayWeather], num_days: int
) -> List[DaySchedule]:
    """Assign each day a primary (and optional secondary) activity."""

    planned = set(activities)
    schedules: List[DaySchedule] = []
    for day in range(num_days):
        label = weather[day].day_label[:3] if day < len(weather) and weather[day].day_label else ""
        is_last_day = day == num_days - 1

        if "Formal" in planned and is_last_day:
            primary = "Formal"
        elif "Business" in planned and label in WEEKDAY_LABELS:
            primary = "Business"
        elif "Beach" in planned and day % 2 == 0:
            primary = "Beach"
        elif "Active" in planned and day > 0 and (day - 1) % 3 == 0:
            primary = "Active"
        else:
            primary = "Casual"

        secondary = None
        odd_day = day % 2 == 1
        if primary in ("Beach", "Active"):
            if "Formal" in planned and is_last_day:
                secondary = "Formal"
            elif "Dinner" in planned and odd_day:
                secondary = "Dinner"
        elif primary == "Business":
            if "Active" in planned and (day - 1) % 3 == 0:
                secondary = "Active"
            elif "Dinner" in planned and odd_day:
                secondary = "Dinner"
        elif primary == "Casual" and "Dinner" in planned and odd_day:
            secondary = "Dinner"

        schedules.append(DaySchedule(primary=primary, secondary=secondary))
    return schedules


def build_packing_list(outfits: Sequence[CapsuleOutfit]) -> List[PackingGroup]:
    """Deduplicate outfit items by wardrobe id and group them in packing order."""

    unique: Dict[str, TripPackingItem] = {}
    for outfit in outfits:
        for item in outfit.items:
            unique.setdefault(item.wardrobe_item_id, item)

    grouped: Dict[str, List[TripPackingItem]] = {}
    for item in unique.values():
        category = item.main_category if item.main_category in PACKING_CATEGORY_ORDER else "Other"
        grouped.setdefault(category, []).append(item)

    return [
        PackingGroup(category=category, items=tuple(grouped[category]))
        for category in PACKING_CATEGORY_ORDER
        if category in grouped
    ]


def _rank_bucket(
    items: Sequence[CanonicalWardrobeItem], activities: Sequence[str], rand: Callable[[], float]
) -> List[CanonicalWardrobeItem]:
    shuffled = shuffle_with_seed(items, rand)
    return sorted(shuffled, key=lambda item: -activity_score(item, activities))


def _select_outerwear(
    outerwear: Sequence[CanonicalWardrobeItem], needs: WeatherNeeds
) -> tuple[Optional[CanonicalWardrobeItem], Optional[CanonicalWardrobeItem]]:
    """Pick the warm layer and the rain layer; a rain-ready warm layer covers both."""

    warm = outerwear[0] if needs.needs_warm_layer and outerwear else None
    rain = None
    if needs.needs_rain_layer and outerwear:
        rain = next((item for item in outerwear if item.rain_ok), None)
        if rain is None:
            rain = next((item for item in outerwear if item is not warm), None)
    return warm, rain


def _gear_for_day(
    schedule: DaySchedule,
    day: Optional[DayWeather],
    gear: Dict[str, List[CanonicalWardrobeItem]],
    presentation: str,
) -> List[CanonicalWardrobeItem]:
    """Top-ranked swimwear or activewear for Beach and Active days that the day's weather allows."""

    zone = derive_climate_zone(day)
    picks: List[CanonicalWardrobeItem] = []
    for activity in (schedule.primary, schedule.secondary):
        if activity not in gear:
            continue
        profile = activity_profile(activity)
        pick = next((item for item in gear[activity] if gate_pool([item], zone, profile, presentation)), None)
        if pick is not None and pick not in picks:
            picks.append(pick)
    return picks


def _outerwear_for_day(
    day: Optional[DayWeather],
    warm: Optional[CanonicalWardrobeItem],
    rain: Optional[CanonicalWardrobeItem],
) -> Optional[CanonicalWardrobeItem]:
    if not needs_outerwear_on(day):
        return None
    if day is not None and day.rain_chance > RAIN_LAYER_CHANCE:
        return rain or warm
    return warm or rain


def _backup_reason(
    compatible_days: int, item: CanonicalWardrobeItem, bucket: str, cold_trip: bool, rainy_trip: bool
) -> str:
    clauses: List[str] = []
    if compatible_days >= 3:
        clauses.append(f"Works with {compatible_days} outfits.")
    elif compatible_days >= 2:
        clauses.append(f"Pairs with {compatible_days} looks.")
    else:
        clauses.append("Versatile backup pick.")

    if cold_trip and (item.thermal_rating or 0) > 60:
        clauses.append("Extra warmth for colder days.")
    elif rainy_trip:
        clauses.append("Handy if weather turns.")
    else:
        clauses.append("Easy swap if needed.")

    if bucket == "tops":
        clauses.append("Light and easy to pack.")
    elif bucket == "outerwear":
        clauses.append("Layers without extra bulk.")
    elif bucket == "shoes":
        clauses.append("No extra pair needed.")
    return " ".join(clauses)


def build_backup_kit(
    buckets: Dict[str, List[CanonicalWardrobeItem]],
    outfits: Sequence[CapsuleOutfit],
    weather: Sequence[DayWeather],
    presentation: str,
) -> List[BackupSuggestion]:
    """Suggest up to three unused tops, outerwear or shoes that suit the most days."""

    used_ids = {item.wardrobe_item_id for outfit in outfits for item in outfit.items}
    candidates = []
    for bucket in ("tops", "shoes", "outerwear"):
        for item in buckets[bucket]:
            if item.id in used_ids:
                continue
            compatible_days = 0
            for index, outfit in enumerate(outfits):
                if outfit.type != "anchor":
                    continue
                day = weather[index] if index < len(weather) else None
                zone = derive_climate_zone(day)
                if gate_pool([item], zone, activity_profile(outfit.occasion), presentation):
                    compatible_days += 1
            versatile = (item.color or "").lower() in VERSATILE_COLORS
            score = compatible_days * 10 + (5 if versatile else 0) + _BACKUP_BUCKET_BONUS[bucket]
            candidates.append((score, item.id, compatible_days, item, bucket))

    candidates.sort(key=lambda entry: (-entry[0], entry[1]))
    cold_trip = any(day.low_f < 55 for day in weather)
    rainy_trip = any(day.rain_chance > RAIN_LAYER_CHANCE for day in weather)
    return [
        BackupSuggestion(
            wardrobe_item_id=item.id,
            name=item.name or UNKNOWN_ITEM_NAME,
            image_url=item.display_image_url,
            reason=_backup_reason(compatible_days, item, bucket, cold_trip, rainy_trip),
        )
        for _, _, compatible_days, item, bucket in candidates[:_BACKUP_KIT_SIZE]
    ]


def build_capsule(
    wardrobe_items: Sequence[CanonicalWardrobeItem],
    weather: Sequence[DayWeather],
    activities: Sequence[str],
    starting_location_label: str,
    presentation: Optional[str] = None,
) -> TripCapsule:
    """Assemble one outfit per trip day plus a deduplicated packing list.

    ``presentation`` defaults to what the wardrobe composition suggests.
    Empty buckets simply leave their slot out; the build never fails.
    """

    num_days = max(len(weather), 1)
    resolved_presentation = presentation or detect_presentation(wardrobe_items)
    eligible = filter_eligible_items(wardrobe_items, resolved_presentation)
    needs = analyze_weather(weather)

    log_event(
        LOGGER,
        logging.DEBUG,
        "capsule_build_started",
        num_days=num_days,
        activities=list(activities),
        wardrobe_size=len(wardrobe_items),
        eligible_count=len(eligible),
        presentation=resolved_presentation,
    )
    log_event(
        LOGGER,
        logging.DEBUG,
        "capsule_weather_analyzed",
        needs_warm_layer=needs.needs_warm_layer,
        needs_rain_layer=needs.needs_rain_layer,
        is_hot=needs.is_hot,
        is_cold=needs.is_cold,
        climate_zones=[derive_climate_zone(day) for day in weather],
    )

    seed = hash_string(
        ",".join(item.id for item in eligible)
        + ",".join(day.date for day in weather)
        + ",".join(activities)
    )
    rand = seeded_random(seed)
    grouped = group_by_bucket(eligible)
    buckets = {bucket: _rank_bucket(grouped[bucket], activities, rand) for bucket in BUCKETS}
    # Ranked after the buckets so adding gear never reorders them.
    gear = {
        activity: _rank_bucket([item for item in eligible if item.main_category == category], activities, rand)
        for activity, category in ACTIVITY_GEAR_CATEGORIES.items()
        if activity in activities
    }

    if resolved_presentation == "masculine" and buckets["dresses"]:
        log_event(
            LOGGER,
            logging.DEBUG,
            "capsule_presentation_lock",
            rule="masculine_no_dresses",
            removed=len(buckets["dresses"]),
        )
        buckets["dresses"] = []

    schedules = plan_day_schedules(activities, weather, num_days)
    max_shoes = 2 if num_days <= 5 else 3
    shoes = buckets["shoes"][:max_shoes]
    warm_layer, rain_layer = _select_outerwear(buckets["outerwear"], needs)
    tops, bottoms = buckets["tops"], buckets["bottoms"]
    dresses, accessories = buckets["dresses"], buckets["accessories"]

    outfits: List[CapsuleOutfit] = []
    for day_index in range(num_days):
        day = weather[day_index] if day_index < len(weather) else None
        picks: List[CanonicalWardrobeItem] = []

        if dresses and day_index % 3 == 0 and not needs.is_cold:
            picks.append(dresses[day_index % len(dresses)])
        else:
            if tops:
                picks.append(tops[day_index % len(tops)])
            if bottoms:
                picks.append(bottoms[(day_index // 2) % len(bottoms)])
        picks.extend(_gear_for_day(schedules[day_index], day, gear, resolved_presentation))
        if shoes:
            picks.append(shoes[day_index % len(shoes)])
        layer = _outerwear_for_day(day, warm_layer, rain_layer)
        if layer is not None:
            picks.append(layer)
        if accessories:
            picks.append(accessories[day_index % len(accessories)])

        items = normalize_outfit_structure([to_packing_item(item, starting_location_label) for item in picks])
        outfits.append(
            CapsuleOutfit(
                id=f"outfit_{day_index}",
                day_label=f"Day {day_index + 1}",
                items=tuple(items),
                type="anchor",
                occasion=schedules[day_index].primary,
            )
        )

    backup_kit = build_backup_kit(buckets, outfits, weather, resolved_presentation)
    packing_list = build_packing_list(outfits)
    fingerprint = build_capsule_fingerprint(
        wardrobe_items, weather, activities, starting_location_label, resolved_presentation
    )
    build_id = generate_build_id()

    log_event(
        LOGGER,
        logging.DEBUG,
        "capsule_build_completed",
        build_id=build_id,
        outfit_count=len(outfits),
        packing_groups={group.category: len(group.items) for group in packing_list},
        backup_count=len(backup_kit),
    )
    return TripCapsule(
        build_id=build_id,
        outfits=tuple(outfits),
        packing_list=tuple(packing_list),
        version=CAPSULE_VERSION,
        fingerprint=fingerprint,
        trip_backup_kit=tuple(backup_kit),
    )


__all__ = [
    "CAPSULE_VERSION",
    "DaySchedule",
    "build_backup_kit",
    "build_capsule",
    "build_capsule_fingerprint",
    "build_packing_list",
    "generate_build_id",
    "plan_day_schedules",
    "to_packing_item",
]
