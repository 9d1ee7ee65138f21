"""
pagecompose config command.

SUMMARY: Show current configuration

Displays the merged configuration from bundled defaults, an optional overlay
directory and ``PAGECOMPOSE_*`` environment variables.
"""

from __future__ import annotations

import argparse
from pathlib import Path

import yaml

from pagecompose.cli import OutputFormatter, add_config_dir_flag, add_json_flag
from pagecompose.core.config import ConfigManager
from pagecompose.core.exceptions import ConfigurationError

SUMMARY = "Show current configuration"

_MISSING = object()


def _nest_key(key: str, value):
    """Nest a dot-notation key into a YAML/JSON-friendly mapping."""
    parts = [p for p in str(key).split(".") if p]
    out = value
    for part in reversed(parts):
        out = {part: out}
    return out


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "key",
        nargs="?",
        help="Specific configuration key to show (e.g., 'composition.memoize_render')",
    )
    add_json_flag(parser)
    add_config_dir_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Show configuration - delegates to ConfigManager."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    manager = ConfigManager(Path(args.config_dir) if args.config_dir else None)

    try:
        data = manager.load_config()
    except ConfigurationError as exc:
        formatter.error(exc)
        return 1

    if args.key:
        value = manager.get(args.key, _MISSING)
        if value is _MISSING:
            formatter.error(KeyError(args.key), f"Key not found: {args.key}")
            return 1
        data = _nest_key(args.key, value)

    if formatter.json_mode:
        formatter.json_output(data)
    else:
        formatter.text(
            yaml.safe_dump(data, default_flow_style=False, sort_keys=True, allow_unicode=True).rstrip()
        )
    return 0
