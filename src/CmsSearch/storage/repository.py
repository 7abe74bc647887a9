"""SQLite-backed content repository."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from dateutil import parser as dt_parser

from CmsSearch.core.models import EntityKind
from CmsSearch.core.predicate import QueryPlan
from CmsSearch.storage.schema import SCHEMAS, TableSchema
from CmsSearch.storage.sql import compile_plan, from_db_timestamp, to_db_value
from CmsSearch.utils.log import log

if TYPE_CHECKING:
    from CmsSearch.storage.db import DatabaseManager


class SqliteContentRepository:
    """Run query plans against the CMS content tables.

    Records come back as plain dicts keyed by column name, with timestamps as
    aware UTC datetimes, booleans as ``bool`` and tags as lists.
    """

    def __init__(self, db_manager: DatabaseManager):
        """Initialize repository.

        Args:
            db_manager: Shared database manager instance.
        """
        log.debug("Initializing SqliteContentRepository")
        self.conn = db_manager.get_connection()

    def find_many(self, plan: QueryPlan) -> list[dict[str, Any]]:
        """Return the records selected by ``plan``.

        Raises:
            ValueError: If the plan references unknown columns.
            sqlite3.Error: If the query fails.
        """
        sql, params = compile_plan(plan)
        log.debug("find_many %s: %s params=%s", plan.kind.value, sql, params)
        schema = SCHEMAS[plan.kind]
        cursor = self.conn.execute(sql, params)
        return [_row_to_record(schema, row) for row in cursor]

    def save_records(self, kind: EntityKind, records: Sequence[Mapping[str, Any]]) -> int:
        """Insert or replace records of one kind.

        Keys with ``None`` values are left to the column default.

        Args:
            kind: Entity kind of every record.
            records: Records keyed by column name; ``id`` is required.

        Returns:
            Number of records written.

        Raises:
            ValueError: If a record lacks ``id`` or has unknown columns.
        """
        if not records:
            return 0

        schema = SCHEMAS[kind]
        try:
            for idx, record in enumerate(records):
                unknown = sorted(key for key in record if not schema.has_column(key))
                if unknown:
                    raise ValueError(f"{kind.value}[{idx}] has unknown columns: {unknown}")
                if not record.get("id"):
                    raise ValueError(f"{kind.value}[{idx}] is missing id")

                values = {key: _to_storage(schema, key, value) for key, value in record.items() if value is not None}
                columns = ", ".join(f'"{key}"' for key in values)
                placeholders = ", ".join("?" for _ in values)
                self.conn.execute(
                    f"INSERT OR REPLACE INTO {schema.table} ({columns}) VALUES ({placeholders})",
                    list(values.values()),
                )
        except Exception:
            self.conn.rollback()
            raise

        self.conn.commit()
        log.debug("Saved %d %s records", len(records), kind.value)
        return len(records)


# Fills date parts a partial timestamp leaves out ("2024-03" -> March 1st).
_PERIOD_START = datetime(2000, 1, 1)


def _to_storage(schema: TableSchema, column: str, value: Any) -> Any:
    if column in schema.timestamp_columns and isinstance(value, str):
        value = dt_parser.parse(value, default=_PERIOD_START)
    if column in schema.json_columns:
        return json.dumps(list(value), ensure_ascii=False)
    return to_db_value(value)


def _row_to_record(schema: TableSchema, row: sqlite3.Row) -> dict[str, Any]:
    record: dict[str, Any] = {}
    for column in schema.columns:
        value = row[column]
        if value is not None and column in schema.timestamp_columns:
            value = from_db_timestamp(value)
        elif value is not None and column in schema.bool_columns:
            value = bool(value)
        elif column in schema.json_columns:
            value = json.loads(value) if value else []
        record[column] = value
    return record
