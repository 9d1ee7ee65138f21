"""Page scope: the owner of every cache used to compose one page instance.

Caches are never shared between scopes. ``teardown`` clears all of them, after
which the scope refuses further use.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from pagecompose.core.cache import StableCache
from pagecompose.core.composition import (
    CompletenessTracker,
    CompositionResult,
    ContentComposer,
    DependencyGraph,
    FormDataResolver,
    PageMappings,
    changed_keys,
)
from pagecompose.core.composition.form_data import FormItem, SubmitSource
from pagecompose.core.composition.types import ContentSource, RenderCallback
from pagecompose.core.config import CompositionConfig
from pagecompose.core.exceptions import ScopeClosedError
from pagecompose.core.extract import DataExtractor
from pagecompose.core.utils.equality import data_equal
from pagecompose.core.view_settings import ViewSettings, ViewSettingsResolver, ViewSettingsSource

logger = logging.getLogger(__name__)


class PageScope:
    """Composes one page instance across successive generations.

    Usage:
        with PageScope("home", render=render) as scope:
            result = scope.compose(contents, queries=queries)
    """

    def __init__(
        self,
        page_id: str,
        *,
        render: RenderCallback,
        config: Optional[Mapping[str, Any]] = None,
        namespace: str = "",
        declared: Iterable[str] = (),
    ) -> None:
        self.page_id = page_id
        self.namespace = namespace
        self.config = CompositionConfig(config)
        self.extractor = DataExtractor()
        self.element_cache: StableCache = StableCache("elements", equal=data_equal)
        self.descriptor_cache: StableCache = StableCache("descriptors")
        self.graph = DependencyGraph()
        self.tracker = CompletenessTracker(declared)
        self.form = FormDataResolver()
        self.view_settings = ViewSettingsResolver()
        self.composer = ContentComposer(
            render,
            extractor=self.extractor,
            element_cache=self.element_cache,
            descriptor_cache=self.descriptor_cache,
            config=self.config,
            graph=self.graph,
            page_id=page_id,
            namespace=namespace,
        )
        self._mappings = PageMappings()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def mappings(self) -> PageMappings:
        """Mappings passed to the last ``compose`` call."""
        return self._mappings

    def _ensure_open(self) -> None:
        if self._closed:
            raise ScopeClosedError(
                f"Page scope '{self.page_id}' has been torn down",
                context={"page_id": self.page_id},
            )

    def compose(
        self,
        contents: Optional[ContentSource],
        *,
        queries: Optional[Mapping[str, Any]] = None,
        mutations: Optional[Mapping[str, Any]] = None,
        form_values: Optional[Mapping[str, Any]] = None,
        form_items: Optional[Sequence[FormItem]] = None,
        auxiliary: Optional[Sequence[Any]] = None,
        mapping_complete: Optional[bool] = None,
    ) -> CompositionResult:
        """Compose one generation.

        When ``mapping_complete`` is None, completeness comes from the scope's
        tracker after observing ``queries`` and ``mutations``. Resolved
        ``form_items`` are rendered after any explicit ``auxiliary`` items.
        """
        self._ensure_open()
        self._mappings = PageMappings(
            queries=queries if queries is not None else {},
            mutations=mutations if mutations is not None else {},
            form_values=form_values if form_values is not None else {},
        )
        if mapping_complete is None:
            self.tracker.observe(queries, mutations)
            mapping_complete = self.tracker.complete

        extra: List[Any] = list(auxiliary or ())
        extra.extend(self.form.resolve_items(form_items, self._mappings, mapping_complete))
        return self.composer.compose(
            contents,
            queries=queries,
            mutations=mutations,
            form_values=form_values,
            mapping_complete=mapping_complete,
            auxiliary=extra,
        )

    def resolve_form_submit(
        self, submit: Optional[SubmitSource], *, mapping_complete: Optional[bool] = None
    ) -> List[dict]:
        self._ensure_open()
        complete = self.tracker.complete if mapping_complete is None else mapping_complete
        return self.form.resolve_submit(submit, self._mappings, complete)

    def resolve_view_settings(self, settings: ViewSettingsSource) -> ViewSettings:
        self._ensure_open()
        return self.view_settings.resolve(settings, self._mappings)

    def affected_components(self, changed: Iterable[str]) -> List[str]:
        """Ids of the components of the last generation that declared any ``changed`` name."""
        self._ensure_open()
        return self.graph.affected_components(changed)

    def affected_by_change(
        self,
        previous: Optional[Mapping[str, Any]],
        current: Optional[Mapping[str, Any]],
    ) -> List[str]:
        return self.affected_components(changed_keys(previous, current))

    def teardown(self) -> None:
        """Clear every cache owned by the scope. Idempotent."""
        if self._closed:
            return
        self.composer.reset()
        self.form.clear()
        self.view_settings.reset()
        self.tracker.reset()
        self._mappings = PageMappings()
        self._closed = True
        logger.debug("Page scope %s torn down", self.page_id or "?")

    def __enter__(self) -> "PageScope":
        self._ensure_open()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.teardown()


__all__ = ["PageScope"]
