"""YAML Configuration Loader

Loads the bundled defaults.yaml and, if the XTAL_SCATTER_DEFAULTS_PATH
environment variable names a file, merges that file over it. Override files
only need to contain the keys they change.

It has no dependencies on other config modules to avoid circular imports.

Usage:
    from xtal_scatter.config.yaml_loader import get_default, get_defaults
    temp = get_default('material.default_temperature_k')
"""

from __future__ import annotations

import copy
import os
import threading
from pathlib import Path
from typing import Any, List

import yaml

ENV_VAR = "XTAL_SCATTER_DEFAULTS_PATH"

_BUNDLED_PATH = Path(__file__).parent / "defaults.yaml"


def _source_paths() -> List[Path]:
    """Files making up the configuration, lowest precedence first.

    Raises:
        FileNotFoundError: If the bundled file is missing, or the
            environment variable points to a missing file.
    """
    if not _BUNDLED_PATH.exists():
        raise FileNotFoundError(f"Bundled configuration file not found: {_BUNDLED_PATH}")
    paths = [_BUNDLED_PATH]

    env_path = os.getenv(ENV_VAR)
    if env_path:
        override = Path(env_path)
        if not override.exists():
            raise FileNotFoundError(
                f"{ENV_VAR} points to a missing file: {env_path}"
            )
        paths.append(override)
    return paths


def _merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into a copy of *base*."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml_config() -> dict[str, Any]:
    config: dict[str, Any] = {}
    for path in _source_paths():
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")
        config = _merge(config, data)
    return config


# Cache the loaded configuration
_CONFIG_CACHE: dict[str, Any] | None = None
_CONFIG_LOCK = threading.Lock()


def _get_config() -> dict[str, Any]:
    global _CONFIG_CACHE
    with _CONFIG_LOCK:
        if _CONFIG_CACHE is None:
            _CONFIG_CACHE = _load_yaml_config()
        return _CONFIG_CACHE


def get_defaults() -> dict[str, Any]:
    """Get a deep copy of the merged configuration dictionary.

    Example:
        >>> cfg = get_defaults()
        >>> cfg['material']['default_temperature_k']
        293.15
    """
    return copy.deepcopy(_get_config())


def get_default(key_path: str, default: Any = None) -> Any:
    """Get a configuration value by dotted key path.

    Args:
        key_path: Dotted path to the value (e.g., 'material.state')
        default: Default value if key is not found

    Returns:
        The configuration value or default if not found.

    Example:
        >>> get_default('material.state')
        'solid'
        >>> get_default('nonexistent.key', 'fallback')
        'fallback'
    """
    value: Any = _get_config()
    for key in key_path.split("."):
        if not isinstance(value, dict) or value.get(key) is None:
            return default
        value = value[key]
    return value


def config_sources() -> List[str]:
    """Paths of the files the current configuration was read from."""
    return [str(p) for p in _source_paths()]


def reload_defaults() -> None:
    """Re-read the configuration files.

    Call after editing a defaults file or changing XTAL_SCATTER_DEFAULTS_PATH.
    """
    global _CONFIG_CACHE
    config = _load_yaml_config()
    with _CONFIG_LOCK:
        _CONFIG_CACHE = config
