"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_config_dir_flag(parser: argparse.ArgumentParser) -> None:
    """Add --config-dir flag for a configuration overlay directory."""
    parser.add_argument(
        "--config-dir",
        type=str,
        help="Directory of YAML files merged over the bundled configuration",
    )


def add_page_file_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("page_file", help="Path to a YAML page definition file")
