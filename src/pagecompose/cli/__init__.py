"""
pagecompose CLI package.

Provides the command-line interface with auto-discovery of commands under
``cli/commands``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
"""
from ._output import OutputFormatter
from ._args import add_config_dir_flag, add_json_flag, add_page_file_arg

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_config_dir_flag",
    "add_page_file_arg",
]
