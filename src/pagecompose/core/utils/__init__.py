"""Shared utilities: shallow equality, keyed merging and YAML loading."""
from __future__ import annotations

from .equality import data_equal, functions_equal, is_function, is_primitive, shallow_equal
from .merge import arrays_with_key_equal, deep_merge, item_key, merge_arrays, merge_by_key

__all__ = [
    "shallow_equal",
    "data_equal",
    "functions_equal",
    "is_function",
    "is_primitive",
    "deep_merge",
    "merge_arrays",
    "merge_by_key",
    "arrays_with_key_equal",
    "item_key",
]
