"""YAML settings source layering base files under per-environment overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic_settings import PydanticBaseSettingsSource


if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


CONFIG_DIR_ENV = "FOODIES_CONFIG_DIR"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``base`` with ``override`` merged in recursively."""
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def default_config_dir() -> Path:
    """Locate the ``config`` directory.

    ``FOODIES_CONFIG_DIR`` wins when set; otherwise the directory next to
    ``src/`` in a source checkout is used.
    """
    override = os.getenv(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    # src/foodies/core/config/yaml_source.py -> project root
    return Path(__file__).resolve().parents[4] / "config"


def load_yaml_config(config_dir: Path, app_env: str) -> dict[str, Any]:
    """Merge ``config_dir/base/*.yaml`` then ``environments/<app_env>/*.yaml``.

    Files inside each directory are applied in name order. Missing
    directories are skipped.
    """
    merged: dict[str, Any] = {}
    for directory in (config_dir / "base", config_dir / "environments" / app_env):
        if not directory.is_dir():
            continue
        for yaml_file in sorted(directory.glob("*.yaml")):
            with yaml_file.open(encoding="utf-8") as f:
                merged = deep_merge(merged, yaml.safe_load(f) or {})
    return merged


class MultiYamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the merged YAML tree for ``APP_ENV``."""

    def __init__(
        self,
        settings_cls: type[Any],
        config_dir: Path | None = None,
    ) -> None:
        super().__init__(settings_cls)
        self._config_dir = config_dir or default_config_dir()
        self._app_env = os.getenv("APP_ENV", "development")
        self._yaml_data = load_yaml_config(self._config_dir, self._app_env)

    def get_field_value(
        self,
        _field: FieldInfo,
        field_name: str,
    ) -> tuple[Any, str, bool]:
        value = self._yaml_data.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, Any]:
        return self._yaml_data
