from __future__ import annotations

from pagecompose.core.composition import PageMappings
from pagecompose.core.view_settings import ViewSettingsResolver

MAPPINGS = PageMappings(queries={"theme": "dark"})


def test_static_settings_are_returned() -> None:
    settings = {"title": "Home"}
    assert ViewSettingsResolver().resolve(settings, MAPPINGS) is settings


def test_none_resolves_to_empty_mapping() -> None:
    assert ViewSettingsResolver().resolve(None, MAPPINGS) == {}


def test_equal_candidate_keeps_previous_identity() -> None:
    resolver = ViewSettingsResolver()
    first = resolver.resolve(lambda m: {"theme": m.queries["theme"], "wide": True}, MAPPINGS)
    second = resolver.resolve(lambda m: {"theme": m.queries["theme"], "wide": True}, MAPPINGS)
    assert second is first


def test_changed_candidate_is_adopted() -> None:
    resolver = ViewSettingsResolver()
    resolver.resolve({"title": "Home"}, MAPPINGS)
    changed = {"title": "About"}
    assert resolver.resolve(changed, MAPPINGS) is changed
    assert resolver.last is changed


def test_reset() -> None:
    resolver = ViewSettingsResolver()
    resolver.resolve({"title": "Home"}, MAPPINGS)
    resolver.reset()
    assert resolver.last is None
