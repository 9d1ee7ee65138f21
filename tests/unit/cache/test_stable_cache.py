from __future__ import annotations

from pagecompose.core.cache import StableCache, canonical_key
from pagecompose.core.utils.equality import data_equal


def test_canonical_key_collapses_numeric_and_string_forms() -> None:
    assert canonical_key(1) == canonical_key("1") == canonical_key(1.0)
    assert canonical_key(1.5) == "1.5"


class TestStableCache:
    def test_get_returns_default_for_unknown_key(self) -> None:
        cache = StableCache()
        assert cache.get("missing") is None
        assert cache.get("missing", 7) == 7
        assert "missing" not in cache

    def test_get_or_set_returns_existing_when_equal(self) -> None:
        cache = StableCache()
        first = cache.get_or_set("a", {"x": 1})
        second = cache.get_or_set("a", {"x": 1})
        assert second is first

    def test_get_or_set_replaces_when_changed(self) -> None:
        cache = StableCache()
        cache.get_or_set("a", {"x": 1})
        fresh = {"x": 2}
        assert cache.get_or_set("a", fresh) is fresh
        assert cache.get("a") is fresh

    def test_falsy_values_are_reused(self) -> None:
        cache = StableCache()
        empty = cache.get_or_set("a", {})
        assert cache.get_or_set("a", {}) is empty

    def test_numeric_and_string_keys_share_a_slot(self) -> None:
        cache = StableCache()
        stored = cache.get_or_set(1, {"x": 1})
        assert cache.get_or_set("1", {"x": 1}) is stored
        assert len(cache) == 1

    def test_clear_empties_the_cache(self) -> None:
        cache = StableCache("queries")
        cache.set("a", 1)
        cache.set("b", 2)
        assert sorted(cache) == ["a", "b"]
        cache.clear()
        assert len(cache) == 0
        assert cache.get("a") is None

    def test_custom_comparator_keeps_fresh_closures(self) -> None:
        cache = StableCache("elements", equal=data_equal)
        cache.get_or_set("a", lambda: "old")
        fresh = lambda: "new"  # noqa: E731
        assert cache.get_or_set("a", fresh) is fresh
        stored = cache.get_or_set("b", {"x": 1})
        assert cache.get_or_set("b", {"x": 1}) is stored

    def test_repr_names_the_cache(self) -> None:
        assert "queries" in repr(StableCache("queries"))
