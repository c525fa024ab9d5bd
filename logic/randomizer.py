"""Seeded hashing, pseudo-random numbers and shuffling.

Everything here runs on 32-bit integer arithmetic so that a seed string always
yields the same sequence, independent of platform or interpreter.
"""

from __future__ import annotations

from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")

_UINT32_MASK = 0xFFFFFFFF
_UINT32_RANGE = 4294967296


def _to_int32(value: int) -> int:
    value &= _UINT32_MASK
    return value - _UINT32_RANGE if value & 0x80000000 else value


def _urshift(value: int, bits: int) -> int:
    return (value & _UINT32_MASK) >> bits


def _imul(a: int, b: int) -> int:
    return _to_int32((a & _UINT32_MASK) * (b & _UINT32_MASK))


def hash_string(value: str) -> int:
    """Order-sensitive rolling hash (``h * 31 + code``) folded to a non-negative int."""

    hashed = 0
    for char in value:
        hashed = _to_int32((hashed << 5) - hashed + ord(char))
    return abs(hashed)


def seeded_random(seed: int) -> Callable[[], float]:
    """Return a stateful generator of floats in ``[0, 1)`` (mulberry32)."""

    state = _to_int32(seed)

    def next_float() -> float:
        nonlocal state
        state = _to_int32(state + 0x6D2B79F5)
        t = _imul(state ^ _urshift(state, 15), 1 | state)
        t = _to_int32(_to_int32(t + _imul(t ^ _urshift(t, 7), 61 | t)) ^ t)
        return ((t ^ _urshift(t, 14)) & _UINT32_MASK) / _UINT32_RANGE

    return next_float


def shuffle_with_seed(items: Sequence[T], rand: Callable[[], float]) -> List[T]:
    """Fisher-Yates shuffle into a new list; the input is left untouched."""

    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rand() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


__all__ = ["hash_string", "seeded_random", "shuffle_with_seed"]
