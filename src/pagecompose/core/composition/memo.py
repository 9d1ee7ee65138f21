"""Render memoization keyed by stable key."""
from __future__ import annotations

from typing import Any, Dict, Tuple

from pagecompose.core.utils.equality import shallow_equal

from .types import RenderCallback, RenderRequest


class MemoizedRender:
    """Wraps a render callback and skips it when the request did not change.

    A request is unchanged when it is shallow-equal to the previous request
    for the same key: same descriptor object and same narrowed mappings.
    """

    def __init__(self, render: RenderCallback) -> None:
        self.render = render
        self._last: Dict[str, Tuple[RenderRequest, Any]] = {}
        self.calls = 0

    @staticmethod
    def _slot(request: RenderRequest) -> str:
        prefix = "aux" if request.auxiliary else "content"
        return f"{prefix}:{request.key}"

    def __call__(self, request: RenderRequest) -> Any:
        slot = self._slot(request)
        previous = self._last.get(slot)
        if previous is not None and shallow_equal(previous[0], request):
            return previous[1]
        self.calls += 1
        element = self.render(request)
        self._last[slot] = (request, element)
        return element

    def clear(self) -> None:
        self._last.clear()


__all__ = ["MemoizedRender"]
