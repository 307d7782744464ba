"""Configuration hierarchy: layers raw settings and validates the result.

Precedence (later overrides earlier):
  1. CacheSettings field defaults
  2. Global config   (~/.imgcache/config.yaml)
  3. Project config   (imgcache.yaml, nearest to cwd)
  4. Environment variables (IMGCACHE_<FIELD>)
  5. Runtime arguments that are not None
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from imgcache.config.schema import CacheSettings

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".imgcache" / "config.yaml"
_PROJECT_CONFIG_NAME = "imgcache.yaml"
ENV_PREFIX = "IMGCACHE_"


def env_var_for(field_name: str) -> str:
    return f"{ENV_PREFIX}{field_name.upper()}"


def load_settings(**runtime_overrides: Any) -> CacheSettings:
    """Merge every configuration layer into validated CacheSettings."""
    layers: list[Mapping[str, Any]] = [
        _read_yaml(_GLOBAL_CONFIG_PATH),
        _read_yaml(_project_config_path()),
        _env_layer(os.environ),
        {k: v for k, v in runtime_overrides.items() if v is not None},
    ]
    merged: dict[str, Any] = {}
    for layer in layers:
        merged.update(layer)
    return CacheSettings.model_validate(merged)


def _read_yaml(path: Path | None) -> dict[str, Any]:
    if path is None or not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a mapping, got %s", path, type(data).__name__)
        return {}
    return data


def _project_config_path() -> Path | None:
    cwd = Path.cwd()
    candidates = (d / _PROJECT_CONFIG_NAME for d in (cwd, *cwd.parents))
    return next((p for p in candidates if p.is_file()), None)


def _env_layer(environ: Mapping[str, str]) -> dict[str, str]:
    # Raw strings; CacheSettings does the type coercion
    return {
        name: environ[env_var_for(name)]
        for name in CacheSettings.model_fields
        if env_var_for(name) in environ
    }
