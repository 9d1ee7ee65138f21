"""
pagecompose validate command.

SUMMARY: Validate a page definition file

Prints every page validation issue. Exits non-zero when the file cannot be
loaded or any issue is an error.
"""

from __future__ import annotations

import argparse

from pagecompose.cli import OutputFormatter, add_json_flag, add_page_file_arg
from pagecompose.core.composition import log_validation_issues, validate_page
from pagecompose.core.exceptions import PageComposeError
from pagecompose.core.page_file import load_page_file

SUMMARY = "Validate a page definition file"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_page_file_arg(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        page = load_page_file(args.page_file)
    except PageComposeError as exc:
        formatter.error(exc)
        return 1

    issues = validate_page(
        page.id,
        page.contents,
        page.form_items or None,
        page.known_query_names,
    )
    log_validation_issues(issues, page.id)
    has_errors = any(issue.is_error for issue in issues)

    if formatter.json_mode:
        formatter.json_output(
            {
                "page": page.id,
                "valid": not has_errors,
                "issues": [
                    {"level": i.level, "message": i.message, "context": i.context} for i in issues
                ],
            }
        )
    elif not issues:
        formatter.text(f"Page {page.id}: no issues")
    else:
        formatter.text(f"Page {page.id}: {len(issues)} issue(s)")
        for issue in issues:
            formatter.text(f"  [{issue.level}] {issue.message}")
    return 1 if has_errors else 0
