"""Configuration hierarchy — merges sources in priority order.

Precedence (later overrides earlier):
  1. Package defaults
  2. Global config   (~/.iconcache/config.yaml)
  3. Project config   (./iconcache.yaml)
  4. Environment variables (ICONCACHE_*)
  5. Runtime arguments
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from iconcache.config.defaults import get_defaults

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".iconcache" / "config.yaml"
_PROJECT_CONFIG_NAME = "iconcache.yaml"

# Map of environment variables to config keys
_ENV_MAP: dict[str, str] = {
    "ICONCACHE_TTL_SECONDS": "ttl_seconds",
    "ICONCACHE_MAX_ENTRIES": "max_entries",
    "ICONCACHE_MAX_VECTOR_BYTES": "max_vector_bytes",
    "ICONCACHE_EVICTION_BATCH_SIZE": "eviction_batch_size",
    "ICONCACHE_CLEANUP_INTERVAL_SECONDS": "cleanup_interval_seconds",
    "ICONCACHE_STORE_PATH": "store_path",
    "ICONCACHE_FETCH_TIMEOUT": "fetch_timeout",
    "ICONCACHE_MAX_CONCURRENCY": "max_concurrency",
    "ICONCACHE_SINGLE_FLIGHT": "single_flight",
    "ICONCACHE_STRICT_VECTOR": "strict_vector",
    "ICONCACHE_LOG_LEVEL": "log_level",
}

# Keys that should be parsed as specific types
_TYPE_MAP: dict[str, type] = {
    "ttl_seconds": float,
    "max_entries": int,
    "max_vector_bytes": int,
    "eviction_batch_size": int,
    "cleanup_interval_seconds": float,
    "fetch_timeout": float,
    "max_concurrency": int,
}

_BOOL_KEYS = {"single_flight", "strict_vector"}

# Boolean env var values
_TRUTHY = {"1", "true", "yes", "on"}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Load and merge configuration from all sources.

    Returns a merged dict with the final resolved values.
    """
    config = get_defaults()

    global_cfg = _load_yaml_config(_GLOBAL_CONFIG_PATH)
    if global_cfg:
        config.update(global_cfg)

    project_path = _find_project_config()
    if project_path:
        project_cfg = _load_yaml_config(project_path)
        if project_cfg:
            config.update(project_cfg)

    config.update(_load_env_vars())

    # Only override when explicitly set
    for key, value in runtime_overrides.items():
        if value is not None:
            config[key] = value

    return config


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Load a YAML config file if it exists."""
    if not path.exists() or not path.is_file():
        return None
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
        if isinstance(data, dict):
            return data
        logger.warning("Config file %s is not a mapping, ignoring", path)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
    return None


def _find_project_config() -> Path | None:
    """Search for iconcache.yaml from cwd upward."""
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / _PROJECT_CONFIG_NAME
        if candidate.exists():
            return candidate
    return None


def _load_env_vars() -> dict[str, Any]:
    """Read ICONCACHE_* environment variables."""
    result: dict[str, Any] = {}
    for env_key, config_key in _ENV_MAP.items():
        value = os.environ.get(env_key)
        if value is None:
            continue
        result[config_key] = _coerce_env_value(config_key, value)
    return result


def _coerce_env_value(key: str, value: str) -> Any:
    """Coerce an environment variable string to the appropriate type."""
    if key in _BOOL_KEYS:
        return value.strip().lower() in _TRUTHY

    target_type = _TYPE_MAP.get(key)
    if target_type:
        try:
            return target_type(value)
        except (ValueError, TypeError):
            logger.warning(
                "Cannot convert env var for '%s' to %s: %s", key, target_type.__name__, value
            )
            return value

    return value
