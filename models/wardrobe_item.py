"""Canonical wardrobe item model and the adapter for raw inventory records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

UNKNOWN_ITEM_NAME = "Unknown Item"


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


def _pick(raw: Mapping[str, Any], *keys: str) -> Any:
    """Return the first present value among ``keys`` in priority order."""

    for key in keys:
        value = raw.get(key)
        if _is_present(value):
            return value
    return None


def _as_tags(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(tag) for tag in value if _is_present(tag))


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_bool(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes"}
    return bool(value)


def _as_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


@dataclass(frozen=True)
class CanonicalWardrobeItem:
    """Normalized view of a wardrobe item consumed by the capsule engine.

    Optional attributes stay ``None`` when the source record does not carry
    them; scoring treats ``None`` as unknown rather than as a mismatch.
    """

    id: str
    name: str = UNKNOWN_ITEM_NAME
    color: Optional[str] = None
    main_category: Optional[str] = None
    subcategory: Optional[str] = None
    material: Optional[str] = None
    seasonality: Optional[str] = None
    thermal_rating: Optional[float] = None
    breathability: Optional[float] = None
    rain_ok: Optional[bool] = None
    climate_sweetspot_f_min: Optional[float] = None
    climate_sweetspot_f_max: Optional[float] = None
    layering: Optional[str] = None
    occasion_tags: Tuple[str, ...] = ()
    dress_code: Optional[str] = None
    formality_score: Optional[float] = None
    image_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    processed_image_url: Optional[str] = None
    touched_up_image_url: Optional[str] = None

    @property
    def display_image_url(self) -> str:
        """Best available image, preferring processed renders over the original upload."""

        return (
            self.processed_image_url
            or self.touched_up_image_url
            or self.thumbnail_url
            or self.image_url
            or ""
        )


def adapt_wardrobe_item(raw: Mapping[str, Any]) -> CanonicalWardrobeItem:
    """Build a :class:`CanonicalWardrobeItem` from a mixed camelCase/snake_case record.

    camelCase keys win over snake_case ones; missing fields propagate as
    ``None``. The adapter never raises on absent or malformed optional data.
    """

    name = _pick(raw, "name", "aiTitle", "ai_title")
    return CanonicalWardrobeItem(
        id=str(raw.get("id", "")),
        name=str(name) if name is not None else UNKNOWN_ITEM_NAME,
        color=_as_text(_pick(raw, "color")),
        main_category=_as_text(_pick(raw, "mainCategory", "main_category")),
        subcategory=_as_text(_pick(raw, "subCategory", "subcategory", "sub_category")),
        material=_as_text(_pick(raw, "material")),
        seasonality=_as_text(_pick(raw, "seasonality")),
        thermal_rating=_as_float(_pick(raw, "thermalRating", "thermal_rating")),
        breathability=_as_float(_pick(raw, "breathability")),
        rain_ok=_as_bool(_pick(raw, "rainOk", "rain_ok")),
        climate_sweetspot_f_min=_as_float(_pick(raw, "climateSweetspotFMin", "climate_sweetspot_f_min")),
        climate_sweetspot_f_max=_as_float(_pick(raw, "climateSweetspotFMax", "climate_sweetspot_f_max")),
        layering=_as_text(_pick(raw, "layering")),
        occasion_tags=_as_tags(_pick(raw, "occasionTags", "occasion_tags")),
        dress_code=_as_text(_pick(raw, "dressCode", "dress_code")),
        formality_score=_as_float(_pick(raw, "formalityScore", "formality_score")),
        image_url=_as_text(_pick(raw, "imageUrl", "image_url", "image")),
        thumbnail_url=_as_text(_pick(raw, "thumbnailUrl", "thumbnail_url")),
        processed_image_url=_as_text(_pick(raw, "processedImageUrl", "processed_image_url")),
        touched_up_image_url=_as_text(_pick(raw, "touchedUpImageUrl", "touched_up_image_url")),
    )


__all__ = ["CanonicalWardrobeItem", "UNKNOWN_ITEM_NAME", "adapt_wardrobe_item"]
