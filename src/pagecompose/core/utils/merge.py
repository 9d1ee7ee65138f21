"""Canonical merge utilities.

Two families live here:

- ``deep_merge`` / ``merge_arrays``: recursive dictionary merging used by the
  layered configuration loader. Lists are replaced by default; a leading
  ``"+"`` appends and a leading ``"="`` replaces explicitly.
- ``merge_by_key`` / ``arrays_with_key_equal``: reconciliation of keyed
  sequences that keeps the previous item whenever it is shallow-equal to its
  successor, so callers observe stable references across generations.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Sequence, TypeVar

from .equality import shallow_equal

T = TypeVar("T")


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Args:
        base: Base dictionary (lower priority)
        override: Override dictionary (higher priority)

    Returns:
        New merged dictionary

    Example:
        >>> base = {"a": 1, "b": {"c": 2}}
        >>> override = {"b": {"d": 3}}
        >>> deep_merge(base, override)
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if key in result:
            if isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            elif isinstance(result[key], list) and isinstance(value, list):
                result[key] = merge_arrays(result[key], value)
            else:
                result[key] = value
        else:
            result[key] = value
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Merge arrays with override semantics.

    Example:
        >>> merge_arrays([1, 2], [3, 4])
        [3, 4]
        >>> merge_arrays([1, 2], ["+", 3, 4])
        [1, 2, 3, 4]
        >>> merge_arrays([1, 2], ["=", 3, 4])
        [3, 4]
    """
    if not override:
        return list(override)
    first = override[0]
    if isinstance(first, str):
        if first == "+":
            return [*base, *override[1:]]
        if first == "=":
            return list(override[1:])
    return list(override)


def item_key(item: Any) -> Any:
    """Return the ``key`` of a mapping item or an object item (None if absent)."""
    if isinstance(item, Mapping):
        return item.get("key")
    return getattr(item, "key", None)


def merge_by_key(
    prev: Sequence[T],
    next: Sequence[T],
    equal: Callable[[Any, Any], bool] = shallow_equal,
) -> List[T]:
    """Reconcile ``next`` against ``prev`` by key.

    Output follows ``next`` order. Each item is replaced by the ``prev`` item
    sharing its key when ``equal(prev_item, item)`` holds (shallow equality by
    default). When ``prev`` holds the same key twice the last one wins.

    Example:
        >>> a = {"key": 1, "val": "x"}
        >>> merged = merge_by_key([a], [{"key": 1, "val": "x"}, {"key": 2, "val": "y"}])
        >>> merged[0] is a
        True
    """
    if not prev:
        return next  # type: ignore[return-value]
    if not next:
        return []

    prev_by_key: Dict[Any, T] = {}
    for item in prev:
        prev_by_key[item_key(item)] = item

    merged: List[T] = []
    for item in next:
        prev_item = prev_by_key.get(item_key(item))
        if prev_item is not None and equal(prev_item, item):
            merged.append(prev_item)
        else:
            merged.append(item)
    return merged


def arrays_with_key_equal(a: Sequence[Any], b: Sequence[Any]) -> bool:
    """Return True when both sequences are positionally shallow-equal."""
    if len(a) != len(b):
        return False
    return all(shallow_equal(x, y) for x, y in zip(a, b))


__all__ = ["deep_merge", "merge_arrays", "merge_by_key", "arrays_with_key_equal", "item_key"]
