"""Command implementations for the CmsSearch CLI.

Encapsulates business logic for each command, separated from CLI parameter
handling. Commands return the text to print.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

from CmsSearch.core.models import EntityKind
from CmsSearch.core.predicate import iter_leaves
from CmsSearch.query.builder import build_filters
from CmsSearch.query.parser import parse_filter_params
from CmsSearch.query.summary import build_filter_summary
from CmsSearch.renderers import dumps, render
from CmsSearch.services.search import ContentSearchService
from CmsSearch.storage.repository import SqliteContentRepository
from CmsSearch.storage.sql import compile_plan
from CmsSearch.utils.log import log


@dataclass(slots=True)
class SearchCommand:
    """Run one aggregated search and render the response."""

    search_service: ContentSearchService

    def execute(
        self,
        query: str,
        *,
        entity_types: Sequence[str],
        params: Mapping[str, str],
        limit: int | None,
        offset: int,
        fmt: str,
    ) -> str:
        filters = parse_filter_params(params)
        for line in build_filter_summary(filters):
            log.info("filter %s", line)
        response = self.search_service.search(
            query,
            entity_types=entity_types or None,
            filters=filters,
            limit=limit,
            offset=offset,
        )
        log.info("Found %d results (returning %d)", response.total, len(response.results))
        return render(response, fmt)


@dataclass(slots=True)
class SuggestCommand:
    """Print title suggestions for a query."""

    search_service: ContentSearchService

    def execute(self, query: str) -> str:
        return dumps(self.search_service.generate_search_suggestions(query))


def describe_filters(params: Mapping[str, str], kind: EntityKind) -> str:
    """Describe parsed filters and the SQL they compile to for one kind."""
    filters = parse_filter_params(params)
    plan = build_filters(kind, filters)
    sql, sql_params = compile_plan(plan)
    payload = {
        "summary": build_filter_summary(filters),
        "filters": filters.active_fields(),
        "kind": kind.value,
        "take": plan.take,
        "skip": plan.skip,
        "columns": sorted({leaf.field for leaf in iter_leaves(plan.where)}),
        "sql": sql,
        "params": sql_params,
    }
    return dumps(payload)


@dataclass(slots=True)
class ImportCommand:
    """Load records from a JSON document into the content database.

    The document maps kind names to lists of records keyed by column name::

        {"page": [{"id": "p1", "page_key": "home", ...}], "media": [...]}
    """

    repository: SqliteContentRepository

    def execute(self, path: Path) -> str:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("Import file root must be an object keyed by entity kind")

        counts: dict[str, int] = {}
        for key, records in data.items():
            kind = EntityKind.parse(key)
            if not isinstance(records, list):
                raise ValueError(f"{key} must be a list of records")
            counts[kind.value] = self.repository.save_records(kind, records)
            log.info("Imported %d %s records", counts[kind.value], kind.value)
        return dumps(counts)
