"""SQLite database utilities."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from CmsSearch.storage.migration import run_migrations
from CmsSearch.storage.sql import FOLD_FUNCTION, fold

MEMORY_DB = ":memory:"


class DatabaseManager:
    """Owner of one SQLite connection for the content database.

    Construct one per process (or per test) and pass it to the stores that
    need it. The schema is migrated when the connection opens.

    Supports context manager protocol for automatic connection cleanup.
    """

    def __init__(self, db_path: Path | str) -> None:
        """Open the database and apply pending migrations.

        Args:
            db_path: Path to the database file, or ``":memory:"``.
        """
        self.db_path = str(db_path)
        self.conn: sqlite3.Connection | None = ensure_db(db_path)
        run_migrations(self.conn)

    def get_connection(self) -> sqlite3.Connection:
        """Get the shared database connection.

        Raises:
            RuntimeError: If the manager was already closed.
        """
        if self.conn is None:
            raise RuntimeError(f"Database connection is closed: {self.db_path}")
        return self.conn

    def close(self) -> None:
        """Close the database connection. Calling it twice is a no-op."""
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    def __enter__(self) -> DatabaseManager:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def ensure_db(db_path: Path | str) -> sqlite3.Connection:
    """Ensure the database file exists and return a connection.

    Args:
        db_path: Path to the database file, or ``":memory:"``.

    Returns:
        SQLite connection with `sqlite3.Row` rows and the Unicode-aware
        ``fold()`` SQL function used by text filters.

    Raises:
        OSError: If directory creation fails.
        sqlite3.Error: If database connection fails.
    """
    if str(db_path) != MEMORY_DB:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.create_function(FOLD_FUNCTION, 1, fold, deterministic=True)
    return conn
