"""Top-level configuration: YAML files in, validated `AppConfig` out.

A user config file is deep-merged over ``config/default.yml``; mappings merge
key by key, while lists and scalars from the user file replace the default.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from CmsSearch.config.runtime import RuntimeConfig, check_runtime, load_runtime
from CmsSearch.config.search import SearchConfig, check_search, load_search
from CmsSearch.config.storage import StorageConfig, check_storage, load_storage

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    runtime: RuntimeConfig
    storage: StorageConfig
    search: SearchConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Build an `AppConfig`, loading every section before checking any."""
    config = AppConfig(
        runtime=load_runtime(raw),
        storage=load_storage(raw),
        search=load_search(raw),
    )
    check_runtime(config.runtime)
    check_storage(config.storage)
    check_search(config.search)
    return config


def load_config(path: Path) -> AppConfig:
    """Load a single YAML file as the complete config."""
    return parse_config_dict(_read_yaml(path))


def load_config_with_defaults(config_path: Path, default_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    defaults = _read_yaml(default_path)
    if Path(config_path).resolve() == Path(default_path).resolve():
        return parse_config_dict(defaults)
    return parse_config_dict(merge_config_dicts(defaults, _read_yaml(config_path)))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse YAML text; an empty document is an empty mapping."""
    data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            value = merge_config_dicts(current, value)
        merged[key] = value
    return merged


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        return parse_yaml(Path(path).read_text(encoding="utf-8"))
    except yaml.YAMLError as error:
        raise ValueError(f"Invalid YAML in {path}: {error}") from error
