"""Data types for content composition."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

DescriptorKey = Union[str, int, float]


@dataclass(frozen=True)
class PageMappings:
    """The full query, mutation and form-value mappings of one generation."""

    queries: Mapping[str, Any] = field(default_factory=dict)
    mutations: Mapping[str, Any] = field(default_factory=dict)
    form_values: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ContentDescriptor:
    """A declarative unit of content.

    ``used_queries`` / ``used_form_values`` are opt-in: an empty list means the
    render callback receives empty narrowed mappings. ``used_queries`` narrows
    both the query and the mutation mappings.

    ``source`` keeps the raw mapping a descriptor was normalized from, so
    extra fields stay reachable through ``get``.
    """

    key: Optional[DescriptorKey] = None
    index: Optional[int] = None
    hidden: bool = False
    render_in_header: bool = False
    render_in_footer: bool = False
    used_queries: Sequence[str] = ()
    used_form_values: Sequence[str] = ()
    type: str = "custom"
    component: Any = None
    source: Optional[Mapping[str, Any]] = None

    def get(self, name: str, default: Any = None) -> Any:
        if self.source is not None and name in self.source:
            return self.source[name]
        return getattr(self, name, default)


@dataclass(frozen=True)
class RenderRequest:
    """Everything the render callback may read for one descriptor."""

    descriptor: ContentDescriptor
    queries: Mapping[str, Any]
    mutations: Mapping[str, Any]
    form_values: Mapping[str, Any]
    position: int
    key: DescriptorKey
    page_id: str = ""
    namespace: str = ""
    auxiliary: bool = False


@dataclass(frozen=True)
class RenderedElement:
    key: DescriptorKey
    index: int
    render_in_header: bool
    render_in_footer: bool
    element: Any


@dataclass
class CompositionResult:
    """Ordered, bucketed output of one composition generation."""

    header: List[RenderedElement] = field(default_factory=list)
    body: List[RenderedElement] = field(default_factory=list)
    footer: List[RenderedElement] = field(default_factory=list)
    all_descriptors: List[ContentDescriptor] = field(default_factory=list)
    components: List[RenderedElement] = field(default_factory=list)
    complete: bool = True

    def keys(self) -> Dict[str, List[str]]:
        """Return the stable keys of each bucket, in order."""
        return {
            "header": [str(e.key) for e in self.header],
            "body": [str(e.key) for e in self.body],
            "footer": [str(e.key) for e in self.footer],
        }


RenderCallback = Callable[[RenderRequest], Any]
ContentSource = Union[
    Sequence[Union[ContentDescriptor, Mapping[str, Any]]],
    Callable[[PageMappings], Sequence[Union[ContentDescriptor, Mapping[str, Any]]]],
]

__all__ = [
    "PageMappings",
    "ContentDescriptor",
    "RenderRequest",
    "RenderedElement",
    "CompositionResult",
    "RenderCallback",
    "ContentSource",
    "DescriptorKey",
]
