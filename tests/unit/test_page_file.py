from __future__ import annotations

from pathlib import Path

import pytest

from pagecompose.core.exceptions import PageFileError
from pagecompose.core.page_file import load_page_file

PAGE = """\
id: home
namespace: site
declared: [user]
queries:
  user: {name: Ada}
mutations:
  save: handler
form_values:
  name: Ada
form:
  items:
    - {name: email, index: 5}
  submit:
    - {label: Save}
contents:
  - key: greeting
    used_queries: [user]
view_settings:
  title: Home
"""


def test_load_page_file(tmp_path: Path) -> None:
    path = tmp_path / "home.yaml"
    path.write_text(PAGE, encoding="utf-8")
    page = load_page_file(path)
    assert page.id == "home"
    assert page.namespace == "site"
    assert page.contents == [{"key": "greeting", "used_queries": ["user"]}]
    assert page.form_items == [{"name": "email", "index": 5}]
    assert page.form_submit == [{"label": "Save"}]
    assert page.view_settings == {"title": "Home"}
    assert page.known_query_names == ["user", "save"]
    assert page.path == path


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(PageFileError):
        load_page_file(tmp_path / "nope.yaml")


def test_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("id: [unclosed\n", encoding="utf-8")
    with pytest.raises(PageFileError):
        load_page_file(path)


def test_non_mapping_document(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(PageFileError):
        load_page_file(path)


def test_schema_violation_carries_errors(tmp_path: Path) -> None:
    path = tmp_path / "page.yaml"
    path.write_text("id: home\nunknown: 1\n", encoding="utf-8")
    with pytest.raises(PageFileError) as excinfo:
        load_page_file(path)
    assert excinfo.value.context["errors"]
