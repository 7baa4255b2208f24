"""Configuration Module - defaults for material construction.

Default Configuration (loaded from defaults.yaml):
    from xtal_scatter.config import get_default, get_defaults

    # Get a specific default value by dotted key path
    temp = get_default('material.default_temperature_k')

    # Get the full configuration dictionary
    all_defaults = get_defaults()

Submodules:
    defaults: Fallback constants (DEFAULT_BASE_NAME_PREFIX, ...)
    yaml_loader: YAML configuration loader (get_default, get_defaults)

Import Policy:
    DO NOT use: from xtal_scatter.config import *
"""

from xtal_scatter.config.yaml_loader import (
    config_sources,
    get_default,
    get_defaults,
    reload_defaults,
)

__all__ = [
    "config_sources",
    "get_default",
    "get_defaults",
    "reload_defaults",
]
