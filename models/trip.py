"""Trip capsule value objects.

All objects are frozen dataclasses with tuple collections so a capsule cannot
be mutated after it is built. ``to_dict`` produces the JSON-compatible payload
handed to persistence; ``from_dict`` reads a stored payload back, accepting
either camelCase or snake_case keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple


def _get(payload: Mapping[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if payload.get(camel) is not None:
        return payload[camel]
    if payload.get(snake) is not None:
        return payload[snake]
    return default


@dataclass(frozen=True)
class DayWeather:
    """One forecast day in calendar order."""

    date: str
    day_label: str
    high_f: float
    low_f: float
    condition: str
    rain_chance: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "dayLabel": self.day_label,
            "highF": self.high_f,
            "lowF": self.low_f,
            "condition": self.condition,
            "rainChance": self.rain_chance,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DayWeather":
        return cls(
            date=str(payload.get("date", "")),
            day_label=str(_get(payload, "dayLabel", "day_label", "")),
            high_f=_get(payload, "highF", "high_f", 0),
            low_f=_get(payload, "lowF", "low_f", 0),
            condition=str(payload.get("condition", "")),
            rain_chance=_get(payload, "rainChance", "rain_chance", 0),
        )


@dataclass(frozen=True)
class TripPackingItem:
    """Packable projection of a wardrobe item; ``wardrobe_item_id`` joins back to the wardrobe."""

    id: str
    wardrobe_item_id: str
    name: str
    image_url: str
    main_category: str
    location_label: str
    color: Optional[str] = None
    sub_category: Optional[str] = None
    packed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "wardrobeItemId": self.wardrobe_item_id,
            "name": self.name,
            "imageUrl": self.image_url,
            "mainCategory": self.main_category,
            "locationLabel": self.location_label,
            "packed": self.packed,
        }
        if self.color is not None:
            payload["color"] = self.color
        if self.sub_category is not None:
            payload["subCategory"] = self.sub_category
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TripPackingItem":
        return cls(
            id=str(payload.get("id", "")),
            wardrobe_item_id=str(_get(payload, "wardrobeItemId", "wardrobe_item_id", "")),
            name=str(payload.get("name", "")),
            image_url=str(_get(payload, "imageUrl", "image_url", "")),
            main_category=str(_get(payload, "mainCategory", "main_category", "Other")),
            location_label=str(_get(payload, "locationLabel", "location_label", "")),
            color=payload.get("color"),
            sub_category=_get(payload, "subCategory", "sub_category"),
            packed=bool(payload.get("packed", False)),
        )


@dataclass(frozen=True)
class CapsuleOutfit:
    id: str
    day_label: str
    items: Tuple[TripPackingItem, ...] = ()
    type: Optional[str] = "anchor"
    occasion: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "dayLabel": self.day_label,
            "items": [item.to_dict() for item in self.items],
        }
        if self.type is not None:
            payload["type"] = self.type
        if self.occasion is not None:
            payload["occasion"] = self.occasion
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "CapsuleOutfit":
        return cls(
            id=str(payload.get("id", "")),
            day_label=str(_get(payload, "dayLabel", "day_label", "")),
            items=tuple(TripPackingItem.from_dict(item) for item in payload.get("items") or []),
            type=payload.get("type"),
            occasion=payload.get("occasion"),
        )


@dataclass(frozen=True)
class PackingGroup:
    category: str
    items: Tuple[TripPackingItem, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"category": self.category, "items": [item.to_dict() for item in self.items]}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "PackingGroup":
        return cls(
            category=str(payload.get("category", "Other")),
            items=tuple(TripPackingItem.from_dict(item) for item in payload.get("items") or []),
        )


@dataclass(frozen=True)
class BackupSuggestion:
    """A spare item worth packing that no daily outfit uses."""

    wardrobe_item_id: str
    name: str
    image_url: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wardrobeItemId": self.wardrobe_item_id,
            "name": self.name,
            "imageUrl": self.image_url,
            "reason": self.reason,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "BackupSuggestion":
        return cls(
            wardrobe_item_id=str(_get(payload, "wardrobeItemId", "wardrobe_item_id", "")),
            name=str(payload.get("name", "")),
            image_url=str(_get(payload, "imageUrl", "image_url", "")),
            reason=str(payload.get("reason", "")),
        )


@dataclass(frozen=True)
class CapsuleWarning:
    code: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code, "message": self.message}


@dataclass(frozen=True)
class TripCapsule:
    """Full set of day outfits plus the aggregated packing list for one trip."""

    build_id: str
    outfits: Tuple[CapsuleOutfit, ...] = ()
    packing_list: Tuple[PackingGroup, ...] = ()
    version: Optional[int] = None
    fingerprint: Optional[str] = None
    trip_backup_kit: Tuple[BackupSuggestion, ...] = ()

    def all_items(self) -> List[TripPackingItem]:
        return [item for group in self.packing_list for item in group.items]

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "build_id": self.build_id,
            "outfits": [outfit.to_dict() for outfit in self.outfits],
            "packingList": [group.to_dict() for group in self.packing_list],
        }
        if self.version is not None:
            payload["version"] = self.version
        if self.fingerprint is not None:
            payload["fingerprint"] = self.fingerprint
        if self.trip_backup_kit:
            payload["tripBackupKit"] = [suggestion.to_dict() for suggestion in self.trip_backup_kit]
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TripCapsule":
        version = payload.get("version")
        return cls(
            build_id=str(_get(payload, "build_id", "buildId", "")),
            outfits=tuple(CapsuleOutfit.from_dict(outfit) for outfit in payload.get("outfits") or []),
            packing_list=tuple(
                PackingGroup.from_dict(group) for group in _get(payload, "packingList", "packing_list", [])
            ),
            version=int(version) if isinstance(version, (int, float)) and not isinstance(version, bool) else None,
            fingerprint=payload.get("fingerprint"),
            trip_backup_kit=tuple(
                BackupSuggestion.from_dict(entry)
                for entry in _get(payload, "tripBackupKit", "trip_backup_kit", [])
            ),
        )


@dataclass(frozen=True)
class WeatherResult:
    """Resolved forecast window plus where it came from."""

    days: Tuple[DayWeather, ...] = field(default_factory=tuple)
    source: str = "estimated"

    def to_dict(self) -> Dict[str, Any]:
        return {"days": [day.to_dict() for day in self.days], "source": self.source}


__all__ = [
    "BackupSuggestion",
    "CapsuleOutfit",
    "CapsuleWarning",
    "DayWeather",
    "PackingGroup",
    "TripCapsule",
    "TripPackingItem",
    "WeatherResult",
]
