from __future__ import annotations

from pathlib import Path

import pytest

from pagecompose.core.config import CompositionConfig, ConfigManager, LoggingConfig
from pagecompose.core.exceptions import ConfigurationError


def test_bundled_defaults_validate() -> None:
    cfg = ConfigManager(environ={}).load_config(validate=True)
    assert cfg["composition"]["content_key_prefix"] == "content"
    assert cfg["composition"]["auxiliary_key_prefix"] == "form-element"
    assert cfg["logging"]["level"] == "WARNING"


def test_overlay_directory_is_merged(tmp_path: Path) -> None:
    (tmp_path / "10-composition.yaml").write_text(
        "composition:\n  memoize_render: true\n", encoding="utf-8"
    )
    cfg = ConfigManager(tmp_path, environ={}).load_config()
    assert cfg["composition"]["memoize_render"] is True
    assert cfg["composition"]["validate_descriptors"] is True


def test_env_overrides_are_coerced_and_case_insensitive() -> None:
    mgr = ConfigManager(
        environ={
            "PAGECOMPOSE_COMPOSITION__MEMOIZE_RENDER": "true",
            "PAGECOMPOSE_logging__level": "debug",
            "OTHER_composition__memoize_render": "false",
        }
    )
    cfg = mgr.load_config(validate=False)
    assert cfg["composition"]["memoize_render"] is True
    assert cfg["logging"]["level"] == "debug"


def test_env_override_from_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAGECOMPOSE_composition__warn_duplicate_keys", "false")
    assert ConfigManager().get("composition.warn_duplicate_keys") is False


def test_malformed_env_key_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        ConfigManager(environ={"PAGECOMPOSE_composition____x": "1"}).load_config()


def test_invalid_overlay_fails_validation(tmp_path: Path) -> None:
    (tmp_path / "bad.yaml").write_text("composition:\n  memoize_render: maybe\n", encoding="utf-8")
    with pytest.raises(ConfigurationError) as excinfo:
        ConfigManager(tmp_path, environ={}).load_config()
    assert excinfo.value.context["errors"]


def test_unreadable_overlay_is_a_configuration_error(tmp_path: Path) -> None:
    (tmp_path / "broken.yaml").write_text("composition: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        ConfigManager(tmp_path, environ={}).load_config()


def test_get_dotted_key_with_default() -> None:
    mgr = ConfigManager(environ={})
    assert mgr.get("composition.content_key_prefix") == "content"
    assert mgr.get("composition.missing", "fallback") == "fallback"


class TestDomainConfigs:
    def test_composition_config_defaults(self) -> None:
        cfg = CompositionConfig({})
        assert cfg.content_key_prefix == "content"
        assert cfg.auxiliary_key_prefix == "form-element"
        assert cfg.validate_descriptors is True
        assert cfg.memoize_render is False
        assert cfg.warn_duplicate_keys is True

    def test_logging_config(self, tmp_path: Path) -> None:
        cfg = LoggingConfig({"logging": {"level": "info", "path": str(tmp_path / "x.log")}})
        assert cfg.level == "INFO"
        assert cfg.path == tmp_path / "x.log"

    def test_loads_bundled_defaults_when_omitted(self) -> None:
        assert LoggingConfig().level == "WARNING"
