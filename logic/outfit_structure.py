"""One-piece versus separates composition rules for a single outfit."""

from __future__ import annotations

from typing import List, Sequence

from logic.categories import bucket_for_item
from models.trip import TripPackingItem


def normalize_outfit_structure(items: Sequence[TripPackingItem]) -> List[TripPackingItem]:
    """Enforce outfit composition, keeping the first occurrence of each role.

    When a dress-bucket item is present every top and bottom is removed;
    otherwise at most one top and one bottom survive. Shoes, outerwear,
    accessories and unbucketed pieces (activewear, swimwear) pass through.
    Valid outfits come back with the same item objects in the same order.
    """

    buckets = [bucket_for_item(item) for item in items]

    if "dresses" in buckets:
        return [item for item, bucket in zip(items, buckets) if bucket not in ("tops", "bottoms")]

    kept: List[TripPackingItem] = []
    seen_top = False
    seen_bottom = False
    for item, bucket in zip(items, buckets):
        if bucket == "tops":
            if seen_top:
                continue
            seen_top = True
        elif bucket == "bottoms":
            if seen_bottom:
                continue
            seen_bottom = True
        kept.append(item)
    return kept


__all__ = ["normalize_outfit_structure"]
