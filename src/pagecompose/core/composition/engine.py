"""Content composition engine.

One ``compose`` call is one generation:

1. resolve the content source (a function source is called with the full
   mappings, and only once they are complete),
2. drop hidden content descriptors,
3. render every content and auxiliary descriptor with narrowed mappings,
4. sort by ``(index, str(key))``,
5. reconcile against the previous generation by key (the new element
   always wins; only an unchanged wrapper is reused),
6. partition into header, body and footer buckets.

While the mappings are incomplete nothing is resolved or rendered and the
previous generation is kept for the next complete call.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Iterable, List, Optional, Tuple

from pagecompose.core.cache import StableCache, canonical_key
from pagecompose.core.config import CompositionConfig
from pagecompose.core.exceptions import DescriptorValidationError
from pagecompose.core.extract import DataExtractor
from pagecompose.core.utils.equality import data_equal
from pagecompose.core.utils.merge import merge_by_key

from .dependency_graph import DependencyGraph, DependencyNode
from .descriptors import auxiliary_key, content_key, normalize_descriptor
from .memo import MemoizedRender
from .types import (
    CompositionResult,
    ContentDescriptor,
    ContentSource,
    DescriptorKey,
    PageMappings,
    RenderCallback,
    RenderedElement,
    RenderRequest,
)

logger = logging.getLogger(__name__)

_SEP = "\x1f"


def same_element(previous: RenderedElement, current: RenderedElement) -> bool:
    """True when ``current`` wraps the very element object ``previous`` holds.

    The new element always wins; the previous wrapper is only kept when it
    already carries that element with the same placement.
    """
    return (
        previous.element is current.element
        and previous.index == current.index
        and previous.render_in_header == current.render_in_header
        and previous.render_in_footer == current.render_in_footer
    )


class ContentComposer:
    """Composes one content tree. Owned by exactly one scope."""

    def __init__(
        self,
        render: RenderCallback,
        *,
        extractor: Optional[DataExtractor] = None,
        element_cache: Optional[StableCache] = None,
        descriptor_cache: Optional[StableCache] = None,
        config: Optional[CompositionConfig] = None,
        graph: Optional[DependencyGraph] = None,
        page_id: str = "",
        namespace: str = "",
    ) -> None:
        self.config = config if config is not None else CompositionConfig()
        if self.config.memoize_render and not isinstance(render, MemoizedRender):
            render = MemoizedRender(render)
        self.render = render
        self.extractor = extractor if extractor is not None else DataExtractor()
        self.element_cache = (
            element_cache if element_cache is not None else StableCache("elements", equal=data_equal)
        )
        self.descriptor_cache = (
            descriptor_cache if descriptor_cache is not None else StableCache("descriptors")
        )
        self.graph = graph if graph is not None else DependencyGraph()
        self.page_id = page_id
        self.namespace = namespace
        self._previous: List[RenderedElement] = []

    @property
    def previous(self) -> List[RenderedElement]:
        """The reconciled elements of the last complete generation."""
        return list(self._previous)

    # ---------- Resolution ----------
    def _resolve_source(self, contents: Optional[ContentSource], mappings: PageMappings) -> Sequence[Any]:
        if contents is None:
            return ()
        resolved = contents(mappings) if callable(contents) else contents
        if resolved is None:
            return ()
        if isinstance(resolved, (str, bytes, Mapping)) or not isinstance(resolved, Sequence):
            raise DescriptorValidationError(
                f"Content source must produce a sequence of descriptors, got {type(resolved).__name__}",
            )
        return resolved

    def _normalize(self, items: Iterable[Any]) -> List[Tuple[int, ContentDescriptor]]:
        validate_schema = self.config.validate_descriptors
        return [
            (position, normalize_descriptor(item, position, validate_schema=validate_schema))
            for position, item in enumerate(items)
        ]

    # ---------- Rendering ----------
    def _render_one(
        self,
        descriptor: ContentDescriptor,
        position: int,
        key: DescriptorKey,
        *,
        auxiliary: bool,
    ) -> Tuple[ContentDescriptor, RenderedElement]:
        slot = ("aux" if auxiliary else "content") + _SEP + canonical_key(key)
        descriptor = self.descriptor_cache.get_or_set(slot, descriptor)
        request = RenderRequest(
            descriptor=descriptor,
            queries=self.extractor.extract_queries(descriptor.used_queries),
            mutations=self.extractor.extract_mutations(descriptor.used_queries),
            form_values=self.extractor.extract_form_values(descriptor.used_form_values),
            position=position,
            key=key,
            page_id=self.page_id,
            namespace=self.namespace,
            auxiliary=auxiliary,
        )
        element = self.element_cache.get_or_set(slot, self.render(request))
        rendered = RenderedElement(
            key=key,
            index=descriptor.index if descriptor.index is not None else position,
            render_in_header=descriptor.render_in_header,
            render_in_footer=descriptor.render_in_footer,
            element=element,
        )
        return descriptor, rendered

    def _register(self, descriptors: Sequence[Tuple[DescriptorKey, ContentDescriptor]]) -> None:
        self.graph.clear()
        for key, descriptor in descriptors:
            self.graph.add_node(
                DependencyNode(
                    component_id=str(key),
                    used_queries=list(descriptor.used_queries),
                    used_form_values=list(descriptor.used_form_values),
                    used_mutations=list(descriptor.used_queries),
                )
            )

    def _warn_duplicates(self, elements: Sequence[RenderedElement]) -> None:
        seen = set()
        duplicates = []
        for element in elements:
            slot = str(element.key)
            if slot in seen:
                duplicates.append(slot)
            seen.add(slot)
        if duplicates:
            logger.warning(
                "Page %s has duplicate content keys %s; the last one wins during reconciliation",
                self.page_id or "?",
                sorted(set(duplicates)),
            )

    # ---------- Composition ----------
    def compose(
        self,
        contents: Optional[ContentSource],
        *,
        queries: Optional[Mapping[str, Any]] = None,
        mutations: Optional[Mapping[str, Any]] = None,
        form_values: Optional[Mapping[str, Any]] = None,
        mapping_complete: bool = True,
        auxiliary: Optional[Sequence[Any]] = None,
    ) -> CompositionResult:
        """Run one composition generation.

        Raises:
            DescriptorValidationError: If a descriptor is malformed or a
                function source does not return a sequence.
        """
        if not mapping_complete:
            logger.debug("Page %s: mappings incomplete, composition withheld", self.page_id or "?")
            return CompositionResult(complete=False)

        self.extractor.bind(queries=queries, mutations=mutations, form_values=form_values)
        mappings = PageMappings(
            queries=queries if queries is not None else {},
            mutations=mutations if mutations is not None else {},
            form_values=form_values if form_values is not None else {},
        )

        content = [
            (position, descriptor)
            for position, descriptor in self._normalize(self._resolve_source(contents, mappings))
            if not descriptor.hidden
        ]
        extra = self._normalize(auxiliary or ())

        prefix = self.config.content_key_prefix
        aux_prefix = self.config.auxiliary_key_prefix
        descriptors: List[ContentDescriptor] = []
        registered: List[Tuple[DescriptorKey, ContentDescriptor]] = []
        rendered: List[RenderedElement] = []
        # Positions count surviving descriptors only.
        for position, (_, descriptor) in enumerate(content):
            key = content_key(descriptor, position, prefix)
            stable, element = self._render_one(descriptor, position, key, auxiliary=False)
            descriptors.append(stable)
            registered.append((key, stable))
            rendered.append(element)
        for position, descriptor in extra:
            key = auxiliary_key(descriptor, position, aux_prefix)
            stable, element = self._render_one(descriptor, position, key, auxiliary=True)
            descriptors.append(stable)
            registered.append((key, stable))
            rendered.append(element)

        if self.config.warn_duplicate_keys:
            self._warn_duplicates(rendered)

        ordered = sorted(rendered, key=lambda e: (e.index, str(e.key)))
        reconciled = merge_by_key(self._previous, ordered, equal=same_element)
        self._previous = list(reconciled)
        self._register(registered)

        result = CompositionResult(
            header=[e for e in reconciled if e.render_in_header],
            body=[e for e in reconciled if not e.render_in_header and not e.render_in_footer],
            footer=[e for e in reconciled if e.render_in_footer],
            all_descriptors=descriptors,
            components=list(reconciled),
            complete=True,
        )
        logger.debug(
            "Page %s: composed %d elements (header=%d body=%d footer=%d)",
            self.page_id or "?",
            len(reconciled),
            len(result.header),
            len(result.body),
            len(result.footer),
        )
        return result

    def reset(self) -> None:
        """Forget the previous generation and clear every cache this composer uses."""
        self._previous = []
        self.extractor.clear_cache()
        self.element_cache.clear()
        self.descriptor_cache.clear()
        self.graph.clear()
        if isinstance(self.render, MemoizedRender):
            self.render.clear()


__all__ = ["ContentComposer", "same_element"]
