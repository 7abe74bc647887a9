"""Typed query predicates handed to the persistence layer.

A predicate is a small immutable tree. Leaves compare one column of the
queried entity; `AnyOf` / `AllOf` combine children. The tree says nothing
about SQL: storage backends compile it (see `CmsSearch.storage.sql`).

Semantics
- `Equals`   column == value
- `OneOf`    column IN values
- `Contains` case-insensitive substring match on a text column
- `Range`    gte <= column <= lte, either bound optional
- `IsNull`   column IS NULL
- `HasSome`  list-valued column shares at least one element with values
- `AnyOf`    OR of children; empty matches nothing
- `AllOf`    AND of children; empty matches everything
- `Never`    matches nothing
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal, Union

from CmsSearch.core.models import EntityKind

RangeValue = Union[int, float, datetime]
Direction = Literal["asc", "desc"]


@dataclass(frozen=True, slots=True)
class Equals:
    field: str
    value: Any


@dataclass(frozen=True, slots=True)
class OneOf:
    field: str
    values: tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class Contains:
    field: str
    term: str


@dataclass(frozen=True, slots=True)
class Range:
    field: str
    gte: RangeValue | None = None
    lte: RangeValue | None = None


@dataclass(frozen=True, slots=True)
class IsNull:
    field: str


@dataclass(frozen=True, slots=True)
class HasSome:
    field: str
    values: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Never:
    """Unsatisfiable condition, e.g. a range bound that could not be parsed."""

    field: str
    reason: str = ""


@dataclass(frozen=True, slots=True)
class AnyOf:
    clauses: tuple[Predicate, ...]


@dataclass(frozen=True, slots=True)
class AllOf:
    clauses: tuple[Predicate, ...]


Predicate = Union[Equals, OneOf, Contains, Range, IsNull, HasSome, Never, AnyOf, AllOf]


@dataclass(frozen=True, slots=True)
class OrderBy:
    field: str
    direction: Direction = "desc"


@dataclass(frozen=True, slots=True)
class QueryPlan:
    """Everything a repository needs to run one ``find_many`` call.

    Attributes:
        kind: Entity kind to query.
        where: Root predicate (always an `AllOf`).
        order_by: Ordering terms, most significant first.
        take: Maximum number of records.
        skip: Number of records to skip.
    """

    kind: EntityKind
    where: AllOf
    order_by: tuple[OrderBy, ...]
    take: int
    skip: int


def iter_leaves(predicate: Predicate):
    """Yield every leaf predicate of a tree, depth-first."""
    if isinstance(predicate, (AnyOf, AllOf)):
        for clause in predicate.clauses:
            yield from iter_leaves(clause)
    else:
        yield predicate
