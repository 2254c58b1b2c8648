"""POLO collector configuration (public API).

Import from here::

    from polo_collector.config import load_settings, resolve

This file stays tiny. Implementation lives in :mod:`.settings` (env + paths)
and :mod:`.collection` (queries.yml resolution).
"""

from .collection import (
    CollectionConfig,
    ConfigError,
    DEFAULT_CONFIG,
    build_config,
    read_config_file,
    resolve,
    value_or_default,
)
from .settings import ProjectPaths, Settings, load_settings, settings_from_env

__all__ = [
    "CollectionConfig",
    "ConfigError",
    "DEFAULT_CONFIG",
    "ProjectPaths",
    "Settings",
    "build_config",
    "load_settings",
    "read_config_file",
    "resolve",
    "settings_from_env",
    "value_or_default",
]
