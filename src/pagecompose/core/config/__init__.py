"""pagecompose configuration system.

Usage:
    from pagecompose.core.config import ConfigManager, CompositionConfig

    manager = ConfigManager(config_dir=Path("/path/to/overlays"))
    config = manager.load_config()

    composition = CompositionConfig(config)
    composition.content_key_prefix

A loaded configuration is an explicit value handed to each page scope; there
is no process-wide configuration state.
"""
from __future__ import annotations

from .base import BaseDomainConfig
from .domains import CompositionConfig, LoggingConfig
from .manager import ConfigManager

__all__ = [
    "ConfigManager",
    "BaseDomainConfig",
    "CompositionConfig",
    "LoggingConfig",
]
