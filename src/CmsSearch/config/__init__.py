"""Public configuration API for CmsSearch."""

from __future__ import annotations

from CmsSearch.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from CmsSearch.config.runtime import RuntimeConfig
from CmsSearch.config.search import SearchConfig
from CmsSearch.config.storage import StorageConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "AppConfig",
    "RuntimeConfig",
    "SearchConfig",
    "StorageConfig",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
