from __future__ import annotations

import pytest

from pagecompose.core.composition import FormDataResolver, PageMappings
from pagecompose.core.exceptions import DescriptorValidationError

MAPPINGS = PageMappings(queries={"user": {"name": "Ada"}})


class TestResolveItems:
    def test_incomplete_mappings_yield_nothing(self) -> None:
        called = []
        resolver = FormDataResolver()
        assert resolver.resolve_items([lambda m: called.append(m) or {}], MAPPINGS, False) == []
        assert called == []

    def test_items_are_keyed_by_position_when_unkeyed(self) -> None:
        resolver = FormDataResolver()
        items = resolver.resolve_items([{"name": "first"}, {"name": "email", "key": 7}], MAPPINGS, True)
        assert [i["key"] for i in items] == ["0", "7"]
        assert items[0]["name"] == "first"

    def test_callable_items_receive_full_mappings(self) -> None:
        resolver = FormDataResolver()
        items = resolver.resolve_items(
            [lambda m: {"name": "greeting", "placeholder": m.queries["user"]["name"]}],
            MAPPINGS,
            True,
        )
        assert items[0]["placeholder"] == "Ada"

    def test_unchanged_items_keep_identity(self) -> None:
        resolver = FormDataResolver()
        items = [{"name": "first", "index": 1}]
        first = resolver.resolve_items(items, MAPPINGS, True)
        second = resolver.resolve_items(items, MAPPINGS, True)
        assert second[0] is first[0]

    def test_non_mapping_item_is_rejected(self) -> None:
        with pytest.raises(DescriptorValidationError):
            FormDataResolver().resolve_items(["name"], MAPPINGS, True)


class TestResolveSubmit:
    def test_static_and_function_submit(self) -> None:
        resolver = FormDataResolver()
        assert [s["key"] for s in resolver.resolve_submit([{"label": "Save"}], MAPPINGS, True)] == ["0"]
        entries = resolver.resolve_submit(lambda m: [{"key": "go", "label": "Go"}], MAPPINGS, True)
        assert entries == [{"key": "go", "label": "Go"}]

    def test_submit_is_withheld_while_incomplete(self) -> None:
        assert FormDataResolver().resolve_submit([{"label": "Save"}], MAPPINGS, False) == []

    def test_clear(self) -> None:
        resolver = FormDataResolver()
        resolver.resolve_items([{"name": "a"}], MAPPINGS, True)
        resolver.resolve_submit([{"label": "Save"}], MAPPINGS, True)
        resolver.clear()
        assert len(resolver.items_cache) == 0 and len(resolver.submit_cache) == 0
