from __future__ import annotations

import pytest

from pagecompose.core.composition import (
    ContentDescriptor,
    auxiliary_key,
    content_key,
    normalize_descriptor,
)
from pagecompose.core.exceptions import DescriptorValidationError


class TestNormalize:
    def test_mapping_becomes_descriptor(self) -> None:
        item = {"key": "hero", "index": 2, "used_queries": ["user"], "title": "Hi"}
        descriptor = normalize_descriptor(item, 0)
        assert descriptor.key == "hero"
        assert descriptor.index == 2
        assert descriptor.used_queries == ["user"]
        assert descriptor.used_form_values == ()
        assert descriptor.type == "custom"
        assert descriptor.source is item

    def test_extra_fields_stay_reachable(self) -> None:
        descriptor = normalize_descriptor({"title": "Hi", "type": "text"}, 0)
        assert descriptor.get("title") == "Hi"
        assert descriptor.get("type") == "text"
        assert descriptor.get("missing", "dflt") == "dflt"

    def test_descriptor_instance_passes_through(self) -> None:
        descriptor = ContentDescriptor(key=3, render_in_header=True)
        assert normalize_descriptor(descriptor, 0) is descriptor

    def test_non_mapping_item_is_rejected(self) -> None:
        with pytest.raises(DescriptorValidationError) as excinfo:
            normalize_descriptor("hero", 4)
        assert excinfo.value.context["position"] == 4

    def test_schema_errors_are_reported_with_context(self) -> None:
        with pytest.raises(DescriptorValidationError) as excinfo:
            normalize_descriptor({"index": True}, 1)
        err = excinfo.value
        assert isinstance(err, ValueError)
        assert err.context["position"] == 1
        assert err.context["errors"]
        assert err.to_json_error()["code"] == "DescriptorValidationError"

    def test_structural_checks_run_without_schema(self) -> None:
        with pytest.raises(DescriptorValidationError) as excinfo:
            normalize_descriptor({"key": False}, 0, validate_schema=False)
        assert excinfo.value.context["field"] == "key"

    def test_negative_index_is_allowed(self) -> None:
        assert normalize_descriptor({"index": -3}, 0).index == -3

    def test_number_keys_are_accepted(self) -> None:
        assert normalize_descriptor({"key": 1.5}, 0).key == 1.5
        assert normalize_descriptor(ContentDescriptor(key=2.5), 0).key == 2.5

    def test_null_flags_become_false(self) -> None:
        descriptor = normalize_descriptor(
            {"hidden": None, "render_in_header": None, "render_in_footer": None}, 0
        )
        assert descriptor.hidden is False
        assert descriptor.render_in_header is False
        assert descriptor.render_in_footer is False

    def test_non_boolean_flag_is_still_rejected(self) -> None:
        with pytest.raises(DescriptorValidationError):
            normalize_descriptor({"hidden": 0}, 0, validate_schema=False)


class TestKeys:
    def test_content_key_prefers_explicit_key(self) -> None:
        assert content_key(ContentDescriptor(key=0), 5) == 0
        assert content_key(ContentDescriptor(), 5) == "content-5"

    def test_auxiliary_key_falls_back_to_index_then_position(self) -> None:
        assert auxiliary_key(ContentDescriptor(key="save"), 1) == "save"
        assert auxiliary_key(ContentDescriptor(index=7), 1) == "form-element-7"
        assert auxiliary_key(ContentDescriptor(), 1) == "form-element-1"

    def test_prefixes_are_configurable(self) -> None:
        assert content_key(ContentDescriptor(), 2, "item") == "item-2"
