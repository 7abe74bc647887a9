"""Storage configuration (``storage`` section)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from CmsSearch.config.common import required, section

DB_PATH_ENV = "CMS_SEARCH_DB_PATH"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Location of the SQLite content database."""

    db_path: str


def load_storage(raw: Mapping[str, Any]) -> StorageConfig:
    """Load the ``storage`` section.

    ``CMS_SEARCH_DB_PATH`` in the environment overrides ``storage.db_path``.
    """
    db_path = required(section(raw, "storage"), "storage.db_path", str)
    return StorageConfig(db_path=os.environ.get(DB_PATH_ENV) or db_path)


def check_storage(config: StorageConfig) -> None:
    if not config.db_path.strip():
        raise ValueError("storage.db_path must not be empty")
