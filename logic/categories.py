"""Category bucketing for wardrobe and packing items."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Protocol, TypeVar

from models.taxonomy import BUCKETS, bucket_for_category


class _HasMainCategory(Protocol):
    @property
    def main_category(self) -> Optional[str]: ...


ItemT = TypeVar("ItemT", bound=_HasMainCategory)


def bucket_for_item(item: _HasMainCategory) -> Optional[str]:
    """Return the packing bucket of a wardrobe or packing item, ``None`` when unmapped."""

    return bucket_for_category(item.main_category)


def is_in_bucket(item: _HasMainCategory, bucket: str) -> bool:
    return bucket_for_item(item) == bucket


def group_by_bucket(items: Iterable[ItemT]) -> Dict[str, List[ItemT]]:
    """Split items into the six buckets, preserving input order and dropping unmapped items."""

    grouped: Dict[str, List[ItemT]] = {bucket: [] for bucket in BUCKETS}
    for item in items:
        bucket = bucket_for_item(item)
        if bucket is not None:
            grouped[bucket].append(item)
    return grouped


__all__ = ["bucket_for_item", "group_by_bucket", "is_in_bucket"]
