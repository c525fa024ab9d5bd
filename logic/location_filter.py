"""Restrict trip candidates to the closet the traveller packs from."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence

from trip_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)

DEFAULT_LOCATION_ID = "home"
DEFAULT_MIN_ITEMS = 5
UNAVAILABLE_CARE_STATUSES = frozenset({"at_cleaner"})


def _field(record: Mapping[str, Any], camel: str, snake: str) -> Optional[Any]:
    value = record.get(camel)
    return value if value is not None else record.get(snake)


def item_location_id(record: Mapping[str, Any]) -> str:
    return str(_field(record, "locationId", "location_id") or DEFAULT_LOCATION_ID)


def is_available(record: Mapping[str, Any]) -> bool:
    return _field(record, "careStatus", "care_status") not in UNAVAILABLE_CARE_STATUSES


def filter_wardrobe_by_location(
    wardrobe: Sequence[Mapping[str, Any]],
    location_id: str,
    min_items: int = DEFAULT_MIN_ITEMS,
) -> List[Mapping[str, Any]]:
    """Return available items stored at ``location_id``.

    When fewer than ``min_items`` qualify, every available item is returned
    regardless of location. Items at the cleaner are never returned.
    """

    available = [record for record in wardrobe if is_available(record)]
    at_location = [record for record in available if item_location_id(record) == location_id]
    if len(at_location) >= min_items:
        return at_location

    log_event(
        LOGGER,
        logging.INFO,
        "location_filter_fallback",
        location_id=location_id,
        matched=len(at_location),
        min_items=min_items,
        fallback_size=len(available),
    )
    return available


__all__ = [
    "DEFAULT_LOCATION_ID",
    "DEFAULT_MIN_ITEMS",
    "filter_wardrobe_by_location",
    "is_available",
    "item_location_id",
]
