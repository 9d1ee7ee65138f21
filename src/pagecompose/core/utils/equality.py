"""Shallow equality used for identity-stable caching.

Comparison rules:
- Identical references are equal.
- Primitives compare by value. ``bool`` never equals a number and ``str``
  never equals ``bytes``.
- Functions are equal when their names match and their source text matches.
  Closures built from the same definition therefore compare equal even when
  they captured different values; this is a heuristic, not semantic equality.
- Mappings, lists/tuples, dataclasses and plain objects are compared one
  level deep: same set of fields, each pair equal by the function rule or by
  strict equality (value for primitives, identity for anything else).

``data_equal`` applies the same rules but compares functions by identity.

Anything that cannot be introspected or compared safely is unequal. A false
negative only costs a cache hit; a false positive would leak a stale identity.
"""
from __future__ import annotations

import inspect
import logging
import numbers
from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from functools import lru_cache
from types import BuiltinFunctionType, BuiltinMethodType, CodeType, FunctionType, MethodType
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)

_MISSING = object()
_FUNCTION_TYPES = (FunctionType, MethodType, BuiltinFunctionType, BuiltinMethodType)


def is_primitive(value: Any) -> bool:
    """Return True for values compared by value rather than by reference."""
    return value is None or isinstance(value, (str, bytes, bool, numbers.Number))


def is_function(value: Any) -> bool:
    return isinstance(value, _FUNCTION_TYPES)


def _primitive_kind(value: Any) -> str:
    if value is None:
        return "none"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, numbers.Number):
        return "number"
    if isinstance(value, str):
        return "str"
    return "bytes"


def _strict_equal(a: Any, b: Any) -> bool:
    if a is b:
        return True
    if is_primitive(a) and is_primitive(b):
        return _primitive_kind(a) == _primitive_kind(b) and bool(a == b)
    return False


@lru_cache(maxsize=1024)
def _code_source(code: CodeType) -> Optional[str]:
    try:
        return inspect.getsource(code)
    except (OSError, TypeError):
        return None


def functions_equal(a: Any, b: Any) -> bool:
    """Compare two callables by declared name and source text.

    Bound methods additionally require the same bound instance. Callables
    without retrievable source (builtins, REPL definitions) are equal only
    when identical.
    """
    if a is b:
        return True
    name_a = getattr(a, "__name__", None)
    if not isinstance(name_a, str) or name_a != getattr(b, "__name__", None):
        return False

    if isinstance(a, MethodType) or isinstance(b, MethodType):
        if not (isinstance(a, MethodType) and isinstance(b, MethodType)):
            return False
        if a.__self__ is not b.__self__:
            return False
        a, b = a.__func__, b.__func__
        if a is b:
            return True

    code_a = getattr(a, "__code__", None)
    code_b = getattr(b, "__code__", None)
    if not isinstance(code_a, CodeType) or not isinstance(code_b, CodeType):
        return False

    source_a = _code_source(code_a)
    source_b = _code_source(code_b)
    if source_a is None or source_b is None:
        return False
    # Several lambdas on one line share their source line.
    return (
        source_a == source_b
        and code_a.co_code == code_b.co_code
        and code_a.co_consts == code_b.co_consts
    )


def _own_fields(value: Any) -> Optional[Tuple[Any, Mapping]]:
    """Return ``(kind, fields)`` for a comparable container, else None."""
    if isinstance(value, Mapping):
        return "mapping", value
    if isinstance(value, (list, tuple)):
        return type(value), dict(enumerate(value))
    if is_dataclass(value) and not isinstance(value, type):
        return type(value), {f.name: getattr(value, f.name) for f in fields(value)}
    if callable(value):
        return None
    attrs = getattr(value, "__dict__", None)
    if isinstance(attrs, dict):
        return type(value), attrs
    return None


def _shallow_equal(a: Any, b: Any, compare_functions: bool) -> bool:
    if a is b:
        return True
    if a is None or b is None:
        return False
    if is_primitive(a) or is_primitive(b):
        return _strict_equal(a, b)
    if is_function(a) and is_function(b):
        return compare_functions and functions_equal(a, b)
    if is_function(a) or is_function(b):
        return False

    own_a = _own_fields(a)
    own_b = _own_fields(b)
    if own_a is None or own_b is None:
        return False
    kind_a, fields_a = own_a
    kind_b, fields_b = own_b
    if kind_a != kind_b or len(fields_a) != len(fields_b):
        return False

    for key, val_a in fields_a.items():
        val_b = fields_b.get(key, _MISSING)
        if val_b is _MISSING:
            return False
        if compare_functions and is_function(val_a) and is_function(val_b):
            if not functions_equal(val_a, val_b):
                return False
            continue
        if not _strict_equal(val_a, val_b):
            return False
    return True


def shallow_equal(a: Any, b: Any) -> bool:
    """Return True when ``a`` and ``b`` are shallow-equal.

    Never raises: a comparison that fails is reported as unequal.

    Example:
        >>> shallow_equal({"a": 1, "b": "x"}, {"a": 1, "b": "x"})
        True
        >>> shallow_equal({"a": [1]}, {"a": [1]})
        False
    """
    return _safe_equal(a, b, compare_functions=True)


def data_equal(a: Any, b: Any) -> bool:
    """Shallow equality where functions only equal themselves.

    Used for rendered output: a fresh closure carries fresh captured data, so
    it must never be swapped for an older closure with the same source.
    """
    return _safe_equal(a, b, compare_functions=False)


def _safe_equal(a: Any, b: Any, *, compare_functions: bool) -> bool:
    try:
        return _shallow_equal(a, b, compare_functions)
    except Exception:
        logger.debug("Values could not be compared; treating them as unequal", exc_info=True)
        return False


__all__ = ["shallow_equal", "data_equal", "functions_equal", "is_function", "is_primitive"]
