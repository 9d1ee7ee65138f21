"""Dependency extractor.

A render callback that only reads a declared subset of a large mapping should
receive a narrowed mapping that keeps its identity whenever none of the
declared entries changed. ``Extractor`` does this for one source mapping;
``DataExtractor`` owns the per-domain caches for a scope and rebinds its
extractors only when a source mapping reference changes.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from pagecompose.core.cache import StableCache

logger = logging.getLogger(__name__)

QUERIES = "queries"
MUTATIONS = "mutations"
FORM_VALUES = "form_values"
DOMAINS = (QUERIES, MUTATIONS, FORM_VALUES)

_EMPTY: Mapping[str, Any] = {}


class Extractor:
    """Narrows one source mapping through a domain cache.

    Bound to a single source reference; build a new one when the source
    mapping object changes. The caches outlive the extractor.
    """

    def __init__(
        self,
        source: Optional[Mapping[str, Any]],
        cache: StableCache,
        narrowed_cache: StableCache,
        domain: str,
    ) -> None:
        self.source = source
        self.cache = cache
        self.narrowed_cache = narrowed_cache
        self.domain = domain

    def extract(self, used_keys: Iterable[str]) -> Dict[str, Any]:
        """Return ``{name: value}`` for every requested name present in the source.

        Each value passes through the domain cache, and the resulting mapping
        passes through the narrowed cache, so both the entries and the mapping
        itself keep their identity while the declared entries are unchanged.
        """
        names = list(used_keys)
        source = self.source if self.source is not None else _EMPTY
        narrowed: Dict[str, Any] = {}
        for name in names:
            if name not in source:
                continue
            narrowed[name] = self.cache.get_or_set(name, source[name])
        slot = self.domain + "\x1f" + "\x1f".join(names)
        return self.narrowed_cache.get_or_set(slot, narrowed)


class DataExtractor:
    """Scope-owned extractor for queries, mutations and form values.

    Holds three independent caches so equal names in different domains never
    collide. Call ``clear_cache`` on scope teardown.
    """

    def __init__(self) -> None:
        self.query_cache: StableCache = StableCache(QUERIES)
        self.mutation_cache: StableCache = StableCache(MUTATIONS)
        self.form_values_cache: StableCache = StableCache(FORM_VALUES)
        self.narrowed_cache: StableCache = StableCache("narrowed")
        self._extractors: Dict[str, Extractor] = {}

    def _domain_cache(self, domain: str) -> StableCache:
        if domain == QUERIES:
            return self.query_cache
        if domain == MUTATIONS:
            return self.mutation_cache
        if domain == FORM_VALUES:
            return self.form_values_cache
        raise ValueError(f"Unknown extraction domain: {domain}")

    def _bind(self, domain: str, source: Optional[Mapping[str, Any]]) -> Extractor:
        current = self._extractors.get(domain)
        if current is not None and current.source is source:
            return current
        extractor = Extractor(source, self._domain_cache(domain), self.narrowed_cache, domain)
        self._extractors[domain] = extractor
        logger.debug("Rebound %s extractor to a new source mapping", domain)
        return extractor

    def bind(
        self,
        *,
        queries: Optional[Mapping[str, Any]] = None,
        mutations: Optional[Mapping[str, Any]] = None,
        form_values: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Point the extractors at the current source mappings."""
        self._bind(QUERIES, queries)
        self._bind(MUTATIONS, mutations)
        self._bind(FORM_VALUES, form_values)

    def extractor(self, domain: str) -> Extractor:
        existing = self._extractors.get(domain)
        if existing is None:
            return self._bind(domain, None)
        return existing

    def extract_queries(self, used_keys: Iterable[str]) -> Dict[str, Any]:
        return self.extractor(QUERIES).extract(used_keys)

    def extract_mutations(self, used_keys: Iterable[str]) -> Dict[str, Any]:
        return self.extractor(MUTATIONS).extract(used_keys)

    def extract_form_values(self, used_keys: Iterable[str]) -> Dict[str, Any]:
        return self.extractor(FORM_VALUES).extract(used_keys)

    def clear_cache(self) -> None:
        self.query_cache.clear()
        self.mutation_cache.clear()
        self.form_values_cache.clear()
        self.narrowed_cache.clear()


__all__ = ["DataExtractor", "Extractor", "QUERIES", "MUTATIONS", "FORM_VALUES", "DOMAINS"]
