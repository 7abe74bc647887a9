"""Storage layer for CmsSearch.

Provides database management, schema migrations and the SQLite content
repository used by the search service.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from CmsSearch.storage.db import DatabaseManager
from CmsSearch.storage.migration import run_migrations
from CmsSearch.storage.repository import SqliteContentRepository
from CmsSearch.utils.log import log

if TYPE_CHECKING:
    from CmsSearch.config import AppConfig


def create_storage(config: AppConfig) -> tuple[DatabaseManager, SqliteContentRepository]:
    """Create database manager and content repository.

    Args:
        config: Application configuration containing storage settings.

    Returns:
        Tuple of (db_manager, repository).
    """
    db_path = Path(config.storage.db_path)
    db_manager = DatabaseManager(db_path)
    log.info("Content database: %s", db_path)
    return db_manager, SqliteContentRepository(db_manager)


__all__ = [
    "DatabaseManager",
    "SqliteContentRepository",
    "create_storage",
    "run_migrations",
]
