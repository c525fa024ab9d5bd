"""Staleness gate for stored trip capsules."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional, Union

from logic.categories import is_in_bucket
from models.trip import TripCapsule
from trip_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)

FORCE_REBUILD = "FORCE_REBUILD"
NO_CAPSULE = "NO_CAPSULE"
VERSION_MISMATCH = "VERSION_MISMATCH"
DRESS_LEAK = "DRESS_LEAK"
FINGERPRINT_MISMATCH = "FINGERPRINT_MISMATCH"
UP_TO_DATE = "UP_TO_DATE"


@dataclass(frozen=True)
class RebuildDecision:
    rebuild: bool
    reason: str
    mode: str = "AUTO"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _has_dress(capsule: TripCapsule) -> bool:
    return any(is_in_bucket(item, "dresses") for outfit in capsule.outfits for item in outfit.items)


def should_rebuild_capsule(
    capsule: Union[TripCapsule, Mapping[str, Any], None],
    current_version: int,
    presentation: str,
    current_fingerprint: Optional[str] = None,
    mode: str = "AUTO",
) -> RebuildDecision:
    """Decide whether a stored capsule must be rebuilt.

    Checks run in order and the first match wins: forced rebuild, missing
    capsule, version mismatch, dresses in a masculine capsule, fingerprint
    mismatch. A missing capsule is reported as ``rebuild=False``; building a
    first capsule is the caller's job, not an invalidation.
    """

    if mode == "FORCE":
        return RebuildDecision(rebuild=True, reason=FORCE_REBUILD, mode="FORCE")
    if capsule is None:
        return RebuildDecision(rebuild=False, reason=NO_CAPSULE)
    if not isinstance(capsule, TripCapsule):
        capsule = TripCapsule.from_dict(capsule)

    if capsule.version != current_version:
        return RebuildDecision(rebuild=True, reason=VERSION_MISMATCH)

    if presentation == "masculine" and _has_dress(capsule):
        log_event(LOGGER, logging.WARNING, "capsule_dress_leak", build_id=capsule.build_id)
        return RebuildDecision(rebuild=True, reason=DRESS_LEAK)

    if current_fingerprint is not None and capsule.fingerprint != current_fingerprint:
        return RebuildDecision(rebuild=True, reason=FINGERPRINT_MISMATCH)

    return RebuildDecision(rebuild=False, reason=UP_TO_DATE)


__all__ = [
    "DRESS_LEAK",
    "FINGERPRINT_MISMATCH",
    "FORCE_REBUILD",
    "NO_CAPSULE",
    "RebuildDecision",
    "UP_TO_DATE",
    "VERSION_MISMATCH",
    "should_rebuild_capsule",
]
