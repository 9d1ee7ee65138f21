"""Descriptor normalization and structural validation.

Descriptors arrive either as ``ContentDescriptor`` instances or as plain
mappings (for example loaded from a YAML page file). Both shapes are checked
at composition time and malformed values fail fast with
``DescriptorValidationError``. The only coercion is that an explicit null
flag in a mapping counts as ``False``.
"""
from __future__ import annotations

import numbers
from collections.abc import Mapping, Sequence
from typing import Any

from pagecompose.core.exceptions import DescriptorValidationError
from pagecompose.core.schemas.validation import validate_payload_safe

from .types import ContentDescriptor, DescriptorKey

_FLAG_FIELDS = ("hidden", "render_in_header", "render_in_footer")
_DEPENDENCY_FIELDS = ("used_queries", "used_form_values")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _check_dependency_list(value: Any, field: str, position: int) -> None:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise DescriptorValidationError(
            f"Descriptor at position {position}: '{field}' must be a list of names, "
            f"got {type(value).__name__}",
            position=position,
            field=field,
        )
    for name in value:
        if not isinstance(name, str):
            raise DescriptorValidationError(
                f"Descriptor at position {position}: '{field}' entries must be strings, "
                f"got {type(name).__name__}",
                position=position,
                field=field,
            )


def check_descriptor(descriptor: ContentDescriptor, position: int) -> ContentDescriptor:
    """Raise ``DescriptorValidationError`` unless ``descriptor`` is well formed."""
    key = descriptor.key
    if key is not None and not (isinstance(key, str) or _is_number(key)):
        raise DescriptorValidationError(
            f"Descriptor at position {position}: 'key' must be a string or a number, "
            f"got {type(key).__name__}",
            position=position,
            field="key",
        )
    if descriptor.index is not None and not _is_int(descriptor.index):
        raise DescriptorValidationError(
            f"Descriptor at position {position}: 'index' must be an integer, "
            f"got {type(descriptor.index).__name__}",
            position=position,
            field="index",
        )
    for field in _FLAG_FIELDS:
        if not isinstance(getattr(descriptor, field), bool):
            raise DescriptorValidationError(
                f"Descriptor at position {position}: '{field}' must be a boolean",
                position=position,
                field=field,
            )
    for field in _DEPENDENCY_FIELDS:
        _check_dependency_list(getattr(descriptor, field), field, position)
    if not isinstance(descriptor.type, str):
        raise DescriptorValidationError(
            f"Descriptor at position {position}: 'type' must be a string",
            position=position,
            field="type",
        )
    return descriptor


def _flag(item: Mapping[str, Any], field: str) -> Any:
    # An explicit null is an unset flag.
    value = item.get(field)
    return False if value is None else value


def descriptor_from_mapping(
    item: Mapping[str, Any], position: int, *, validate_schema: bool = True
) -> ContentDescriptor:
    """Build a ``ContentDescriptor`` from a mapping, keeping the mapping as ``source``."""
    if validate_schema:
        errors = validate_payload_safe(dict(item), "descriptor")
        if errors:
            raise DescriptorValidationError(
                f"Descriptor at position {position} is invalid: {errors[0]}",
                position=position,
                context={"errors": errors},
            )
    used_queries = item.get("used_queries")
    used_form_values = item.get("used_form_values")
    descriptor = ContentDescriptor(
        key=item.get("key"),
        index=item.get("index"),
        hidden=_flag(item, "hidden"),
        render_in_header=_flag(item, "render_in_header"),
        render_in_footer=_flag(item, "render_in_footer"),
        used_queries=used_queries if used_queries is not None else (),
        used_form_values=used_form_values if used_form_values is not None else (),
        type=item.get("type", "custom"),
        component=item.get("component"),
        source=item,
    )
    return check_descriptor(descriptor, position)


def normalize_descriptor(
    item: Any, position: int, *, validate_schema: bool = True
) -> ContentDescriptor:
    """Return a checked ``ContentDescriptor`` for a descriptor or mapping item."""
    if isinstance(item, ContentDescriptor):
        return check_descriptor(item, position)
    if isinstance(item, Mapping):
        return descriptor_from_mapping(item, position, validate_schema=validate_schema)
    raise DescriptorValidationError(
        f"Descriptor at position {position} must be a ContentDescriptor or a mapping, "
        f"got {type(item).__name__}",
        position=position,
    )


def content_key(descriptor: ContentDescriptor, position: int, prefix: str = "content") -> DescriptorKey:
    """Stable key of a content descriptor: explicit key, else ``<prefix>-<position>``.

    Positional keys are not stable when the source list is reordered.
    """
    if descriptor.key is not None:
        return descriptor.key
    return f"{prefix}-{position}"


def auxiliary_key(
    descriptor: ContentDescriptor, position: int, prefix: str = "form-element"
) -> DescriptorKey:
    """Stable key of an auxiliary descriptor: explicit key, else ``<prefix>-<index or position>``."""
    if descriptor.key is not None:
        return descriptor.key
    slot = descriptor.index if descriptor.index is not None else position
    return f"{prefix}-{slot}"


__all__ = [
    "check_descriptor",
    "descriptor_from_mapping",
    "normalize_descriptor",
    "content_key",
    "auxiliary_key",
]
