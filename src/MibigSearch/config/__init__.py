from __future__ import annotations

"""Public configuration API for MibigSearch."""

from MibigSearch.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from MibigSearch.config.output import OutputConfig
from MibigSearch.config.runtime import RuntimeConfig
from MibigSearch.config.search import SearchConfig
from MibigSearch.config.storage import StorageConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "RuntimeConfig",
    "StorageConfig",
    "SearchConfig",
    "OutputConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
