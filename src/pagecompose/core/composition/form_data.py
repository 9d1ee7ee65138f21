"""Form configuration resolution.

Form items become auxiliary descriptors for the composition engine; submit
entries are handed back to the caller untouched apart from their key. Both
are withheld while the page mappings are incomplete.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from pagecompose.core.cache import StableCache
from pagecompose.core.exceptions import DescriptorValidationError

from .types import PageMappings

FormItem = Union[Mapping[str, Any], Callable[[PageMappings], Mapping[str, Any]]]
SubmitSource = Union[Sequence[Mapping[str, Any]], Callable[[PageMappings], Sequence[Mapping[str, Any]]]]


def _keyed(item: Any, position: int, what: str) -> Dict[str, Any]:
    if not isinstance(item, Mapping):
        raise DescriptorValidationError(
            f"{what} at position {position} must be a mapping, got {type(item).__name__}",
            position=position,
        )
    key = item.get("key")
    return {**item, "key": str(key if key is not None else position)}


class FormDataResolver:
    """Resolves form items and submit entries into keyed, identity-stable mappings."""

    def __init__(self) -> None:
        self.items_cache: StableCache = StableCache("form-items")
        self.submit_cache: StableCache = StableCache("form-submit")

    def resolve_items(
        self,
        items: Optional[Sequence[FormItem]],
        mappings: PageMappings,
        complete: bool,
    ) -> List[Dict[str, Any]]:
        """Return one keyed mapping per form item.

        Callable items are called with the full mappings. An item without a
        ``key`` is keyed by its position; keys are always strings.
        """
        if not items or not complete:
            return []
        resolved: List[Dict[str, Any]] = []
        for position, item in enumerate(items):
            if callable(item):
                item = item(mappings)
            keyed = _keyed(item, position, "Form item")
            resolved.append(self.items_cache.get_or_set(keyed["key"], keyed))
        return resolved

    def resolve_submit(
        self,
        submit: Optional[SubmitSource],
        mappings: PageMappings,
        complete: bool,
    ) -> List[Dict[str, Any]]:
        """Return the keyed submit entries; ``submit`` may be a function of the mappings."""
        if submit is None or not complete:
            return []
        entries = submit(mappings) if callable(submit) else submit
        resolved: List[Dict[str, Any]] = []
        for position, entry in enumerate(entries or ()):
            keyed = _keyed(entry, position, "Submit entry")
            resolved.append(self.submit_cache.get_or_set(keyed["key"], keyed))
        return resolved

    def clear(self) -> None:
        self.items_cache.clear()
        self.submit_cache.clear()


__all__ = ["FormDataResolver", "FormItem", "SubmitSource"]
