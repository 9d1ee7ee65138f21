from __future__ import annotations

import logging

from pagecompose.core.composition import (
    ValidationIssue,
    log_validation_issues,
    validate_and_log_page,
    validate_page,
)


def messages(issues):
    return [issue.message for issue in issues]


class TestValidatePage:
    def test_valid_page_has_no_issues(self) -> None:
        issues = validate_page("home", [{"key": "a", "used_queries": ["user"]}], None, ["user"])
        assert issues == []

    def test_empty_id_warns(self) -> None:
        issues = validate_page("  ", [{"key": "a"}])
        assert len(issues) == 1
        assert issues[0].level == "warn"
        assert "Page id" in issues[0].message

    def test_empty_page_warns(self) -> None:
        issues = validate_page("home", [], None, [])
        assert messages(issues) == ["Page has no contents, form or queries; it will render empty."]

    def test_function_contents_count_as_content(self) -> None:
        assert validate_page("home", lambda m: [], None, None) == []

    def test_undeclared_query_references(self) -> None:
        contents = [
            {"key": "a", "used_queries": ["user", "ghost"]},
            {
                "type": "container",
                "items": [{"key": "inner", "used_queries": ["phantom"]}],
            },
        ]
        issues = validate_page("home", contents, None, ["user"])
        assert len(issues) == 1
        assert issues[0].context["invalid_references"] == [
            {"item_key": "a", "query": "ghost"},
            {"item_key": "inner", "query": "phantom"},
        ]

    def test_structural_errors_are_errors(self) -> None:
        issues = validate_page("home", [{"key": "a"}, {"index": "x"}], None, None)
        assert [i.level for i in issues] == ["error"]
        assert issues[0].is_error
        assert issues[0].context["position"] == 1


def test_log_validation_issues_uses_level(caplog) -> None:
    issues = [ValidationIssue("warn", "soft"), ValidationIssue("error", "hard")]
    with caplog.at_level(logging.WARNING):
        log_validation_issues(issues, "home")
    levels = [(r.levelname, r.getMessage()) for r in caplog.records]
    assert levels == [("WARNING", "[page home] soft"), ("ERROR", "[page home] hard")]


def test_validate_and_log_page_returns_issues(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        issues = validate_and_log_page("", [{"key": "a"}])
    assert len(issues) == 1
    assert "Page id is empty" in caplog.text
