"""View-settings resolution with identity reuse."""
from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Union

from pagecompose.core.composition.types import PageMappings
from pagecompose.core.utils.equality import shallow_equal

ViewSettings = Mapping[str, Any]
ViewSettingsSource = Union[ViewSettings, Callable[[PageMappings], ViewSettings], None]

_UNSET: Any = object()


class ViewSettingsResolver:
    """Returns the previously emitted settings while the candidate is shallow-equal to them."""

    def __init__(self) -> None:
        self._last: Any = _UNSET

    @property
    def last(self) -> Optional[ViewSettings]:
        return None if self._last is _UNSET else self._last

    def resolve(self, settings: ViewSettingsSource, mappings: PageMappings) -> ViewSettings:
        candidate = settings(mappings) if callable(settings) else settings
        if candidate is None:
            candidate = {}
        if self._last is not _UNSET and shallow_equal(self._last, candidate):
            return self._last
        self._last = candidate
        return candidate

    def reset(self) -> None:
        self._last = _UNSET


__all__ = ["ViewSettingsResolver", "ViewSettings", "ViewSettingsSource"]
