"""
pagecompose compose command.

SUMMARY: Compose a page definition file and show its buckets

Runs one composition generation over a YAML page file and prints the stable
keys of the header, body and footer buckets in order.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict

from pagecompose.cli import OutputFormatter, add_config_dir_flag, add_json_flag, add_page_file_arg
from pagecompose.core.composition import RenderRequest
from pagecompose.core.config import ConfigManager
from pagecompose.core.exceptions import PageComposeError
from pagecompose.core.page_file import load_page_file
from pagecompose.core.scope import PageScope

SUMMARY = "Compose a page definition file and show its buckets"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_page_file_arg(parser)
    add_json_flag(parser)
    add_config_dir_flag(parser)


def summarize_render(request: RenderRequest) -> Dict[str, Any]:
    """Render a descriptor as a summary of what it received."""
    return {
        "key": request.key,
        "type": request.descriptor.type,
        "auxiliary": request.auxiliary,
        "queries": sorted(request.queries),
        "form_values": sorted(request.form_values),
    }


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        config = ConfigManager(Path(args.config_dir) if args.config_dir else None).load_config()
        page = load_page_file(args.page_file)
        with PageScope(
            page.id,
            render=summarize_render,
            config=config,
            namespace=page.namespace,
            declared=page.declared,
        ) as scope:
            result = scope.compose(
                page.contents,
                queries=page.queries,
                mutations=page.mutations,
                form_values=page.form_values,
                form_items=page.form_items,
            )
            pending = sorted(scope.tracker.pending())
            submit = scope.resolve_form_submit(page.form_submit)
            view_settings = scope.resolve_view_settings(page.view_settings)
    except PageComposeError as exc:
        formatter.error(exc)
        return 1

    keys = result.keys()
    if formatter.json_mode:
        formatter.json_output(
            {
                "page": page.id,
                "complete": result.complete,
                "pending": pending,
                **keys,
                "elements": [e.element for e in result.components],
                "submit": [entry["key"] for entry in submit],
                "view_settings": dict(view_settings),
            }
        )
        return 0

    if not result.complete:
        formatter.text(f"Page {page.id} is incomplete; waiting for: {', '.join(pending)}")
        return 0
    formatter.text(f"Page {page.id}")
    for bucket in ("header", "body", "footer"):
        formatter.text_kv(bucket, ", ".join(keys[bucket]) or "-")
    if submit:
        formatter.text_kv("submit", ", ".join(entry["key"] for entry in submit))
    return 0
