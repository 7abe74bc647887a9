"""Versioned schema migrations for the CMS content database.

Each migration lives in its own module under `CmsSearch.storage.migrations`
and exposes ``VERSION``, ``DESCRIPTION`` and ``STATEMENTS``. Pending
migrations run in order when a `DatabaseManager` opens its connection; every
migration is one transaction, so a failing statement leaves the schema at the
previous version.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from types import ModuleType

from CmsSearch.storage.migrations import v001_content_schema
from CmsSearch.utils.log import log

# json_each() backs the tag filters.
MIN_SQLITE_VERSION = (3, 9, 0)


@dataclass(frozen=True, slots=True)
class Migration:
    """One schema step.

    Attributes:
        version: Consecutive integer starting at 1.
        description: Short summary for logs.
        statements: DDL/DML statements executed in order.
    """

    version: int
    description: str
    statements: tuple[str, ...]

    @classmethod
    def from_module(cls, module: ModuleType) -> Migration:
        return cls(
            version=module.VERSION,
            description=module.DESCRIPTION,
            statements=tuple(module.STATEMENTS),
        )


# Append-only.
MIGRATIONS: list[Migration] = [
    Migration.from_module(v001_content_schema),
]


def run_migrations(conn: sqlite3.Connection, migrations: list[Migration] | None = None) -> int:
    """Bring the database schema up to date.

    Args:
        conn: Open SQLite connection.
        migrations: Migrations to consider; defaults to `MIGRATIONS`.

    Returns:
        Schema version after the call.

    Raises:
        RuntimeError: If the SQLite library predates `MIN_SQLITE_VERSION`.
        ValueError: If migration versions are not consecutive from 1.
        sqlite3.Error: If a statement fails; that migration is rolled back.
    """
    if migrations is None:
        migrations = MIGRATIONS

    if sqlite3.sqlite_version_info < MIN_SQLITE_VERSION:
        required = ".".join(map(str, MIN_SQLITE_VERSION))
        raise RuntimeError(f"SQLite >= {required} is required (found {sqlite3.sqlite_version})")

    for expected, migration in enumerate(migrations, start=1):
        if migration.version != expected:
            raise ValueError(
                f"Migration version gap: expected v{expected}, got v{migration.version} "
                f"({migration.description!r})"
            )

    conn.execute(
        "CREATE TABLE IF NOT EXISTS schema_version ("
        " id INTEGER PRIMARY KEY CHECK (id = 1),"
        " version INTEGER NOT NULL)"
    )
    conn.commit()

    version = get_current_version(conn)
    pending = [m for m in migrations if m.version > version]
    if not pending:
        log.debug("Schema at v%d, nothing to migrate", version)
        return version

    for migration in pending:
        _apply(conn, migration)
        log.info("Applied migration v%d: %s", migration.version, migration.description)
        version = migration.version
    return version


def get_current_version(conn: sqlite3.Connection) -> int:
    """Return the applied schema version, 0 for a fresh database."""
    row = conn.execute("SELECT version FROM schema_version WHERE id = 1").fetchone()
    return row[0] if row else 0


def _apply(conn: sqlite3.Connection, migration: Migration) -> None:
    # executescript() would COMMIT implicitly, so statements run one at a time.
    conn.execute("BEGIN")
    try:
        for statement in migration.statements:
            conn.execute(statement)
        conn.execute(
            "INSERT OR REPLACE INTO schema_version (id, version) VALUES (1, ?)",
            (migration.version,),
        )
    except Exception:
        conn.execute("ROLLBACK")
        raise
    conn.execute("COMMIT")
