"""Query builder: compiles a `FilterSpec` into a per-kind `QueryPlan`.

Rules
- Text search lowercases ``search``, splits on whitespace and ORs every term
  against every searchable column of the kind. Each term may match any
  column; records are not required to contain all terms.
- Pages and media assets always carry ``deleted_at IS NULL``.
- Single-valued enum filters compile to `Equals`, tuples to `OneOf`.
- Date bounds parse with dateutil. Unparseable bounds compile to `Never`, so
  the record fails that range instead of the request failing.
- Ordering maps ``sort_by`` through an alias table; without it each kind has
  its own default ordering.
- ``take`` is ``min(limit, 100)`` for positive limits, else 20.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Mapping

from dateutil import parser as dt_parser

from CmsSearch.core.filters import DateValue, FilterSpec, MultiValue, as_values
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
from CmsSearch.ranking.relevance import split_terms
from CmsSearch.utils.log import log

DEFAULT_LIMIT = 20
MAX_LIMIT = 100

SEARCHABLE_FIELDS: Mapping[EntityKind, tuple[str, ...]] = {
    EntityKind.PAGE: ("page_title", "slug", "meta_description", "meta_keywords", "page_key"),
    EntityKind.TEMPLATE: ("name", "description"),
    EntityKind.MEDIA: ("filename", "original_name", "alt_text", "caption", "description"),
    EntityKind.SECTION: ("title", "subtitle", "section_key"),
}

_DEFAULT_ORDER: Mapping[EntityKind, tuple[OrderBy, ...]] = {
    EntityKind.PAGE: (OrderBy("updated_at", "desc"), OrderBy("created_at", "desc")),
    EntityKind.TEMPLATE: (OrderBy("sort_order", "asc"), OrderBy("updated_at", "desc")),
    EntityKind.MEDIA: (OrderBy("created_at", "desc"),),
    EntityKind.SECTION: (OrderBy("sort_order", "asc"),),
}

_TITLE_COLUMN: Mapping[EntityKind, str] = {
    EntityKind.PAGE: "page_title",
    EntityKind.TEMPLATE: "name",
    EntityKind.MEDIA: "original_name",
    EntityKind.SECTION: "title",
}

_TYPE_COLUMN: Mapping[EntityKind, str] = {
    EntityKind.PAGE: "page_type",
    EntityKind.TEMPLATE: "section_type",
    EntityKind.MEDIA: "asset_type",
    EntityKind.SECTION: "section_type",
}


def build_filters(kind: EntityKind, spec: FilterSpec) -> QueryPlan:
    """Build the query plan for one entity kind.

    Args:
        kind: Entity kind to query.
        spec: Parsed filter request.

    Returns:
        Query plan with predicate, ordering and pagination.
    """
    builder = _BUILDERS[kind]
    clauses = builder(spec)
    take, skip = build_pagination(spec.page, spec.limit)
    plan = QueryPlan(
        kind=kind,
        where=AllOf(tuple(clauses)),
        order_by=build_order_by(kind, spec.sort_by, spec.sort_order or "desc"),
        take=take,
        skip=skip,
    )
    log.debug("Built %s plan: clauses=%d take=%d skip=%d", kind.value, len(clauses), take, skip)
    return plan


def build_page_filters(spec: FilterSpec) -> QueryPlan:
    return build_filters(EntityKind.PAGE, spec)


def build_template_filters(spec: FilterSpec) -> QueryPlan:
    return build_filters(EntityKind.TEMPLATE, spec)


def build_media_filters(spec: FilterSpec) -> QueryPlan:
    return build_filters(EntityKind.MEDIA, spec)


def build_section_filters(spec: FilterSpec) -> QueryPlan:
    return build_filters(EntityKind.SECTION, spec)


def build_order_by(kind: EntityKind, sort_by: str | None, sort_order: str = "desc") -> tuple[OrderBy, ...]:
    """Build ordering terms for ``kind``.

    Unknown ``sort_by`` keys pass through as column names; the storage layer
    decides whether the column exists.
    """
    if not sort_by:
        return _DEFAULT_ORDER[kind]

    aliases = {
        "title": _TITLE_COLUMN[kind],
        "name": "name" if kind is EntityKind.TEMPLATE else "page_title",
        "created": "created_at",
        "updated": "updated_at",
        "published": "published_at",
        "size": "file_size",
        "usage": "usage_count",
        "order": "sort_order",
        "status": "status",
        "type": _TYPE_COLUMN[kind],
    }
    direction = "asc" if sort_order == "asc" else "desc"
    return (OrderBy(aliases.get(sort_by, sort_by), direction),)


def build_pagination(page: int | None, limit: int | None) -> tuple[int, int]:
    """Return ``(take, skip)`` for a page number and page size."""
    take = min(limit, MAX_LIMIT) if limit and limit > 0 else DEFAULT_LIMIT
    skip = (page - 1) * take if page and page > 1 else 0
    return take, skip


_PERIOD_START = datetime(2000, 1, 1)


def parse_date(value: DateValue) -> datetime | None:
    """Convert a date bound into an aware datetime.

    Partial dates mean the start of the period ("2024" is 2024-01-01,
    "2024-03" is 2024-03-01). Naive values are read as UTC.

    Returns:
        Parsed datetime, or ``None`` if the value cannot be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = dt_parser.parse(str(value), default=_PERIOD_START)
        except (ValueError, OverflowError):
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _build_page(spec: FilterSpec) -> list[Predicate]:
    clauses: list[Predicate] = [IsNull("deleted_at")]
    clauses += _text_search(EntityKind.PAGE, spec.search)
    clauses += _enum("status", spec.status)
    clauses += _enum("page_type", spec.page_type)
    clauses += _exact("author_id", spec.author_id)
    clauses += _exact("template_id", spec.template_id)
    clauses += _flag("is_public", spec.is_public)
    clauses += _flag("requires_auth", spec.requires_auth)
    clauses += _date_range("created_at", spec.created_after, spec.created_before)
    clauses += _date_range("updated_at", spec.updated_after, spec.updated_before)
    clauses += _date_range("published_at", spec.published_after, spec.published_before)
    clauses += _number_range("seo_score", spec.min_seo_score, spec.max_seo_score)
    return clauses


def _build_template(spec: FilterSpec) -> list[Predicate]:
    clauses: list[Predicate] = []
    clauses += _text_search(EntityKind.TEMPLATE, spec.search)
    clauses += _enum("category", spec.category)
    clauses += _flag("is_active", spec.is_active)
    clauses += _flag("is_system", spec.is_system)
    clauses += _date_range("created_at", spec.created_after, spec.created_before)
    return clauses


def _build_media(spec: FilterSpec) -> list[Predicate]:
    clauses: list[Predicate] = [IsNull("deleted_at")]
    clauses += _text_search(EntityKind.MEDIA, spec.search)
    clauses += _enum("asset_type", spec.asset_type)
    clauses += _exact("folder_id", spec.folder_id)
    clauses += _exact("uploaded_by", spec.uploaded_by)
    if spec.tags:
        clauses.append(HasSome("tags", as_values(spec.tags)))
    clauses += _number_range("file_size", spec.min_file_size, spec.max_file_size)
    clauses += _date_range("created_at", spec.created_after, spec.created_before)
    return clauses


def _build_section(spec: FilterSpec) -> list[Predicate]:
    clauses: list[Predicate] = []
    clauses += _text_search(EntityKind.SECTION, spec.search)
    clauses += _enum("section_type", spec.section_type)
    clauses += _flag("is_visible", spec.is_visible)
    clauses += _date_range("created_at", spec.created_after, spec.created_before)
    return clauses


_BUILDERS: Mapping[EntityKind, Callable[[FilterSpec], list[Predicate]]] = {
    EntityKind.PAGE: _build_page,
    EntityKind.TEMPLATE: _build_template,
    EntityKind.MEDIA: _build_media,
    EntityKind.SECTION: _build_section,
}


def _text_search(kind: EntityKind, text: str | None) -> list[Predicate]:
    if text is None:
        return []
    columns = SEARCHABLE_FIELDS[kind]
    return [AnyOf(tuple(Contains(column, term) for term in split_terms(text) for column in columns))]


def _enum(field: str, value: MultiValue | None) -> list[Predicate]:
    if not value:
        return []
    if isinstance(value, str):
        return [Equals(field, value)]
    return [OneOf(field, tuple(value))]


def _exact(field: str, value: str | None) -> list[Predicate]:
    return [Equals(field, value)] if value else []


def _flag(field: str, value: bool | None) -> list[Predicate]:
    return [Equals(field, value)] if value is not None else []


def _date_range(field: str, after: DateValue | None, before: DateValue | None) -> list[Predicate]:
    if not after and not before:
        return []
    gte = parse_date(after) if after else None
    lte = parse_date(before) if before else None
    if (after and gte is None) or (before and lte is None):
        log.debug("Unparseable date bound for %s: after=%r before=%r", field, after, before)
        return [Never(field, reason="invalid date")]
    return [Range(field, gte=gte, lte=lte)]


def _number_range(field: str, minimum: int | None, maximum: int | None) -> list[Predicate]:
    if minimum is None and maximum is None:
        return []
    return [Range(field, gte=minimum, lte=maximum)]
