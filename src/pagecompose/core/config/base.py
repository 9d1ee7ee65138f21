"""Base class for domain-specific configuration accessors.

Provides a standardized pattern for all domain configs with:
- An explicit configuration value (no global cache)
- Type-safe section access
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from typing import Any, Dict, Mapping, Optional


class BaseDomainConfig(ABC):
    """Abstract base class for domain-specific configuration accessors.

    Usage:
        class MyConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "mySection"

            @cached_property
            def my_setting(self) -> str:
                return self.section.get("mySetting", "default")

        cfg = MyConfig(ConfigManager().load_config())
        print(cfg.my_setting)
    """

    def __init__(self, config: Optional[Mapping[str, Any]] = None) -> None:
        """Initialize domain config.

        Args:
            config: Fully merged configuration. Bundled defaults are loaded
                when omitted.
        """
        if config is None:
            from .manager import ConfigManager

            config = ConfigManager().load_config(validate=False)
        self._config: Mapping[str, Any] = config

    @abstractmethod
    def _config_section(self) -> str:
        """Return the top-level config key for this domain."""
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        """Get this domain's configuration section (empty dict when missing)."""
        section = self._config.get(self._config_section(), {}) or {}
        return dict(section) if isinstance(section, Mapping) else {}


__all__ = ["BaseDomainConfig"]
