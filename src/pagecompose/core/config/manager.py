"""
pagecompose configuration management (YAML only).

Precedence (in increasing order):
  1) Bundled defaults (``pagecompose.data/config/*.yaml``)
  2) Overlay directory (``<config_dir>/*.yaml|*.yml``, sorted by name)
  3) Environment overrides (``PAGECOMPOSE_*``)

Environment overrides:
- Path separator: double underscore ``__`` when present, otherwise single
  underscore (e.g., ``PAGECOMPOSE_composition__memoize_render=true``).
- Case handling: case-insensitive lookup against existing keys.
- Type coercion: bool/int/float/JSON-like strings are coerced.
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

import yaml

from pagecompose.core.exceptions import ConfigurationError
from pagecompose.core.schemas.validation import validate_payload_safe
from pagecompose.core.utils.io import iter_yaml_files, read_yaml
from pagecompose.core.utils.merge import deep_merge as _deep_merge
from pagecompose.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "PAGECOMPOSE_"


class ConfigManager:
    """Load, merge, and validate pagecompose configuration.

    Typical usage:

    ```python
    from pagecompose.core.config import ConfigManager
    mgr = ConfigManager()
    cfg = mgr.load_config(validate=True)
    ```

    Attributes:
        core_config_dir: Bundled defaults directory.
        config_dir: Optional overlay directory.
    """

    def __init__(
        self,
        config_dir: Optional[Path] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.core_config_dir = get_data_path("config")
        self.config_dir = Path(config_dir) if config_dir is not None else None
        self._environ = environ

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge dictionaries. Delegates to shared implementation."""
        return _deep_merge(base, override)

    # ---------- Environment overrides ----------
    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__") if "__" in raw else raw.split("_", 1)
        if any(seg == "" for seg in segs):
            raise ConfigurationError(
                f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
                context={"key": raw},
            )
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        environ = self._environ if self._environ is not None else os.environ
        for key in sorted(environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if not raw:
                continue
            yield self._parse_env_key(raw), self._coerce_type(environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Dict[str, Any] = root
        for i, part in enumerate(path):
            key_candidates = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            use_key: Union[str, Any] = key_candidates.get(part, part)
            if i == len(path) - 1:
                cur[use_key] = value
                return
            nxt = cur.get(use_key)
            if nxt is None:
                nxt = {}
                cur[use_key] = nxt
            if not isinstance(nxt, dict):
                raise ConfigurationError(
                    f"Environment override path traverses a non-mapping value at '{part}'",
                    context={"path": ".".join(path)},
                )
            cur = nxt

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            logger.debug("Applying environment override %s", ".".join(path))
            self._set_nested(cfg, path, typed_value)

    # ---------- Loading ----------
    def _merge_directory(self, base: Dict[str, Any], directory: Path) -> Dict[str, Any]:
        """Merge every YAML file of ``directory`` over ``base`` in name order."""
        cfg: Dict[str, Any] = dict(base)
        for path in iter_yaml_files(directory):
            layer = read_yaml(path, default={}, raise_on_error=True)
            if not isinstance(layer, dict):
                raise ValueError(f"Config file must contain a mapping: {path}")
            cfg = _deep_merge(cfg, layer)
        return cfg

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load bundled defaults, overlays and environment overrides.

        Raises:
            ConfigurationError: If an overlay is unreadable or the merged
                configuration fails schema validation.
        """
        try:
            cfg = self._merge_directory({}, self.core_config_dir)
            if self.config_dir is not None:
                cfg = self._merge_directory(cfg, self.config_dir)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Failed to load configuration: {exc}") from exc

        self.apply_env_overrides(cfg)

        if validate:
            errors = validate_payload_safe(cfg, "config")
            if errors:
                raise ConfigurationError(
                    f"Invalid configuration: {errors[0]}",
                    context={"errors": errors},
                )
        return cfg

    def get(self, key: str, default: Any = None) -> Any:
        """Return a dot-notation value from the merged configuration."""
        cur: Any = self.load_config(validate=False)
        for part in [p for p in key.split(".") if p]:
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur


__all__ = ["ConfigManager", "ENV_PREFIX"]
