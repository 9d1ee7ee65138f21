"""Stable cache: a keyed store that keeps previous references alive.

``get_or_set`` returns the stored value whenever the candidate is
shallow-equal to it, so repeated calls with logically unchanged content
observe the same object even if the caller builds a fresh one each time.

Keys are canonicalized to strings: ``1``, ``1.0`` and ``"1"`` address the
same slot. A cache belongs to exactly one scope and is never shared.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Generic, Iterator, Optional, TypeVar, Union

from pagecompose.core.utils.equality import shallow_equal

V = TypeVar("V")

Key = Union[str, int, float]

_MISSING: Any = object()


def canonical_key(key: Key) -> str:
    """Return the canonical string form of a cache key."""
    if isinstance(key, float) and key.is_integer():
        return str(int(key))
    return str(key)


class StableCache(Generic[V]):
    """Generic key -> value cache with shallow-equality reuse."""

    def __init__(self, name: str = "", *, equal: Callable[[Any, Any], bool] = shallow_equal) -> None:
        self.name = name
        self.equal = equal
        self._entries: Dict[str, V] = {}

    def get(self, key: Key, default: Optional[V] = None) -> Optional[V]:
        return self._entries.get(canonical_key(key), default)

    def set(self, key: Key, value: V) -> None:
        self._entries[canonical_key(key)] = value

    def get_or_set(self, key: Key, value: V) -> V:
        """Return the stored value if it equals ``value``, else store ``value``.

        Equality is ``shallow_equal`` unless the cache was built with another
        ``equal`` comparator.
        """
        slot = canonical_key(key)
        existing = self._entries.get(slot, _MISSING)
        if existing is not _MISSING and self.equal(existing, value):
            return existing
        self._entries[slot] = value
        return value

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, int, float)):
            return False
        return canonical_key(key) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<StableCache{label} entries={len(self._entries)}>"


__all__ = ["StableCache", "canonical_key"]
