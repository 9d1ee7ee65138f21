"""
Auto-discovery CLI dispatcher for pagecompose.

Every module under ``cli/commands`` that does not start with an underscore is
a command. A command module provides ``SUMMARY``, ``register_args(parser)``
and ``main(args) -> int``.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any

from pagecompose import __version__

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def discover_commands() -> dict[str, dict[str, Any]]:
    """Discover top-level commands under cli/commands."""
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}
    if not commands_dir.exists():
        return commands

    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue
        cmd_name = item.stem
        module = importlib.import_module(f"pagecompose.cli.commands.{cmd_name}")
        commands[cmd_name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", cmd_name),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }
    return commands


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with auto-discovered commands."""
    parser = argparse.ArgumentParser(
        prog="pagecompose",
        description="pagecompose - identity-preserving page content composition",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override the configured log level (e.g. DEBUG, INFO, WARNING)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands",
        metavar="<command>",
    )
    for cmd_name, cmd_info in sorted(discover_commands().items()):
        cmd_parser = subparsers.add_parser(cmd_name, help=cmd_info["summary"])
        if cmd_info["register_args"]:
            cmd_info["register_args"](cmd_parser)
        if cmd_info["main"]:
            cmd_parser.set_defaults(_func=cmd_info["main"])
    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    from pagecompose.core.config import ConfigManager, LoggingConfig
    from pagecompose.core.exceptions import ConfigurationError
    from pagecompose.core.stdlib_logging import configure_logging

    config_dir = getattr(args, "config_dir", None)
    try:
        cfg = LoggingConfig(ConfigManager(Path(config_dir) if config_dir else None).load_config(validate=False))
        level, path = cfg.level, cfg.path
    except ConfigurationError:
        # The command reports configuration errors itself.
        level, path = "WARNING", None
    configure_logging(level=args.log_level or level, log_path=path)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the pagecompose CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    func: Callable[[argparse.Namespace], int] | None = getattr(args, "_func", None)
    if not args.command or func is None:
        parser.print_help()
        return 0

    _configure_logging(args)
    logger.debug("Running command %s", args.command)
    return int(func(args) or 0)


if __name__ == "__main__":
    sys.exit(main())
