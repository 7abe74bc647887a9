"""SQLite compiler for predicate trees and query plans.

Compiles `CmsSearch.core.predicate` trees into parameterised SQL for the
tables described in `CmsSearch.storage.schema`.

Mapping
- Equals   -> "col" = ?            (None -> "col" IS NULL)
- OneOf    -> "col" IN (?, ...)    (empty -> 0 = 1)
- Contains -> fold("col") LIKE ?   with %, _ and \\ escaped
- Range    -> "col" >= ? AND "col" <= ?
- IsNull   -> "col" IS NULL
- HasSome  -> EXISTS over json_each("col")
- Never    -> 0 = 1
- AnyOf    -> ( ... OR ... )       (empty -> 0 = 1)
- AllOf    -> ( ... AND ... )      (empty -> 1 = 1)

Column names are validated against the table schema before they are placed
into SQL text; values always travel as parameters.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from CmsSearch.core.models import EntityKind
from CmsSearch.core.predicate import (
    AllOf,
    AnyOf,
    Contains,
    Equals,
    HasSome,
    IsNull,
    Never,
    OneOf,
    OrderBy,
    Predicate,
    QueryPlan,
    Range,
)
from CmsSearch.storage.schema import SCHEMAS, TableSchema

_TRUE = "1 = 1"
_FALSE = "0 = 1"

# Registered on every connection by `CmsSearch.storage.db.ensure_db`;
# SQLite's own lower() folds ASCII only.
FOLD_FUNCTION = "fold"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)


def fold(value: Any) -> Any:
    """Case-fold text the same way search terms are folded."""
    return value.lower() if isinstance(value, str) else value


def compile_predicate(kind: EntityKind, predicate: Predicate) -> tuple[str, list[Any]]:
    """Compile ``predicate`` into a WHERE fragment and its parameters.

    Raises:
        ValueError: If the predicate references a column the kind lacks.
    """
    params: list[Any] = []
    sql = _compile(SCHEMAS[kind], predicate, params)
    return sql, params


def compile_order_by(kind: EntityKind, order_by: tuple[OrderBy, ...]) -> str:
    """Compile ordering terms; ``rowid`` breaks remaining ties.

    Raises:
        ValueError: If a term references a column the kind lacks.
    """
    schema = SCHEMAS[kind]
    terms = [f"{_column(schema, term.field)} {'ASC' if term.direction == 'asc' else 'DESC'}" for term in order_by]
    terms.append("rowid ASC")
    return ", ".join(terms)


def compile_plan(plan: QueryPlan) -> tuple[str, list[Any]]:
    """Compile a full ``SELECT`` statement for a query plan."""
    schema = SCHEMAS[plan.kind]
    where, params = compile_predicate(plan.kind, plan.where)
    columns = ", ".join(f'"{column}"' for column in schema.columns)
    sql = (
        f"SELECT {columns} FROM {schema.table}"
        f" WHERE {where}"
        f" ORDER BY {compile_order_by(plan.kind, plan.order_by)}"
        " LIMIT ? OFFSET ?"
    )
    params.extend([plan.take, plan.skip])
    return sql, params


def to_db_value(value: Any) -> Any:
    """Convert a Python value to its stored representation.

    Datetimes become integer epoch milliseconds; naive values are read as UTC.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return (value - EPOCH) // _MILLISECOND
    return value


def from_db_timestamp(value: int) -> datetime:
    """Inverse of `to_db_value` for timestamp columns."""
    return EPOCH + int(value) * _MILLISECOND


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so ``term`` matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _compile(schema: TableSchema, predicate: Predicate, params: list[Any]) -> str:
    if isinstance(predicate, AllOf):
        if not predicate.clauses:
            return _TRUE
        return "(" + " AND ".join(_compile(schema, c, params) for c in predicate.clauses) + ")"

    if isinstance(predicate, AnyOf):
        if not predicate.clauses:
            return _FALSE
        return "(" + " OR ".join(_compile(schema, c, params) for c in predicate.clauses) + ")"

    column = _column(schema, predicate.field)

    if isinstance(predicate, Equals):
        if predicate.value is None:
            return f"{column} IS NULL"
        params.append(to_db_value(predicate.value))
        return f"{column} = ?"

    if isinstance(predicate, OneOf):
        if not predicate.values:
            return _FALSE
        params.extend(to_db_value(v) for v in predicate.values)
        return f"{column} IN ({', '.join('?' for _ in predicate.values)})"

    if isinstance(predicate, Contains):
        params.append(f"%{escape_like(predicate.term.lower())}%")
        return f"{FOLD_FUNCTION}({column}) LIKE ? ESCAPE '\\'"

    if isinstance(predicate, Range):
        parts: list[str] = []
        if predicate.gte is not None:
            params.append(to_db_value(predicate.gte))
            parts.append(f"{column} >= ?")
        if predicate.lte is not None:
            params.append(to_db_value(predicate.lte))
            parts.append(f"{column} <= ?")
        if not parts:
            return _TRUE
        return "(" + " AND ".join(parts) + ")"

    if isinstance(predicate, IsNull):
        return f"{column} IS NULL"

    if isinstance(predicate, HasSome):
        if not predicate.values:
            return _FALSE
        params.extend(predicate.values)
        placeholders = ", ".join("?" for _ in predicate.values)
        return f"EXISTS (SELECT 1 FROM json_each({column}) WHERE json_each.value IN ({placeholders}))"

    if isinstance(predicate, Never):
        return _FALSE

    raise TypeError(f"Unsupported predicate: {type(predicate).__name__}")


def _column(schema: TableSchema, field: str) -> str:
    if not schema.has_column(field):
        raise ValueError(f"Unknown column for {schema.table}: {field}")
    return f'"{field}"'
