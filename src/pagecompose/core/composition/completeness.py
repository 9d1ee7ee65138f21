"""Completeness state machine for page data sources.

A page is ``COMPLETE`` once every declared data source has produced data or
has been exempted. Declaring a new source that has not reported yet moves a
complete page back to ``INCOMPLETE``.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Set

logger = logging.getLogger(__name__)


class Completeness(str, Enum):
    INCOMPLETE = "incomplete"
    COMPLETE = "complete"


def is_mapping_complete(declared: Iterable[str], *mappings: Optional[Mapping[str, Any]]) -> bool:
    """Return True when every declared name is present in one of ``mappings``.

    No declared names means there is nothing to wait for.
    """
    names = list(declared)
    if not names:
        return True
    available: Set[str] = set()
    for mapping in mappings:
        if mapping:
            available.update(mapping.keys())
    return all(name in available for name in names)


class CompletenessTracker:
    """Tracks which declared sources have reported data."""

    def __init__(self, declared: Iterable[str] = ()) -> None:
        self._declared: Set[str] = set()
        self._reported: Set[str] = set()
        self._exempt: Set[str] = set()
        self._state = Completeness.COMPLETE
        self.declare(*declared)

    @property
    def state(self) -> Completeness:
        return self._state

    @property
    def complete(self) -> bool:
        return self._state is Completeness.COMPLETE

    @property
    def declared(self) -> Set[str]:
        return set(self._declared)

    def pending(self) -> Set[str]:
        """Declared sources that have neither reported nor been exempted."""
        return self._declared - self._reported - self._exempt

    def declare(self, *names: str) -> Completeness:
        self._declared.update(names)
        return self._update()

    def report(self, *names: str) -> Completeness:
        """Mark sources as having produced data."""
        self._reported.update(names)
        return self._update()

    def exempt(self, *names: str) -> Completeness:
        self._exempt.update(names)
        return self._update()

    def observe(self, *mappings: Optional[Mapping[str, Any]]) -> Completeness:
        """Report every declared source that is present in ``mappings``."""
        present = [
            name
            for name in self._declared
            if any(mapping and name in mapping for mapping in mappings)
        ]
        return self.report(*present)

    def reset(self) -> None:
        self._declared.clear()
        self._reported.clear()
        self._exempt.clear()
        self._state = Completeness.COMPLETE

    def _update(self) -> Completeness:
        new_state = Completeness.INCOMPLETE if self.pending() else Completeness.COMPLETE
        if new_state is not self._state:
            logger.debug(
                "Completeness %s -> %s (pending: %s)",
                self._state.value,
                new_state.value,
                sorted(self.pending()),
            )
            self._state = new_state
        return self._state


__all__ = ["Completeness", "CompletenessTracker", "is_mapping_complete"]
