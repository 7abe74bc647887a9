"""Search service layer for multi-entity CMS search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Protocol, Sequence

from CmsSearch.core.filters import FilterSpec
from CmsSearch.core.models import ALL_KINDS, EntityKind, SearchResponse, SearchResult
from CmsSearch.core.predicate import AllOf, Contains, Equals, IsNull, OrderBy, Predicate, QueryPlan
from CmsSearch.query.builder import DEFAULT_LIMIT, build_filters, build_pagination
from CmsSearch.ranking.relevance import calculate_relevance, generate_highlights
from CmsSearch.services.facets import calculate_facets
from CmsSearch.utils.log import log

SUGGESTION_MIN_QUERY = 2
SUGGESTION_TRIGGER_LENGTH = 3
SUGGESTIONS_PER_KIND = 5
MAX_SUGGESTIONS = 10

# kind -> (title column, excludes soft-deleted rows)
_SUGGESTION_SOURCES: tuple[tuple[EntityKind, str, bool], ...] = (
    (EntityKind.PAGE, "page_title", True),
    (EntityKind.TEMPLATE, "name", False),
    (EntityKind.MEDIA, "original_name", True),
)


class ContentRepository(Protocol):
    """Persistence collaborator queried by the search service."""

    def find_many(self, plan: QueryPlan) -> Sequence[Mapping[str, Any]]:
        """Return raw records selected by ``plan``."""
        raise NotImplementedError


@dataclass(slots=True)
class ContentSearchService:
    """Application service that searches CMS content across entity kinds.

    Attributes:
        repository: Persistence collaborator.
        entity_types: Kinds searched when a call does not name any.
        default_limit: Page size used when a call passes none.
        suggestions_enabled: Whether sparse searches produce suggestions.
    """

    repository: ContentRepository
    entity_types: tuple[EntityKind, ...] = ALL_KINDS
    default_limit: int = DEFAULT_LIMIT
    suggestions_enabled: bool = True

    def search(
        self,
        query: str,
        *,
        entity_types: Iterable[EntityKind | str] | None = None,
        filters: FilterSpec | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> SearchResponse:
        """Search every requested entity kind and rank the merged results.

        Each kind fetches at most ``limit`` records, so ``total`` and the
        facets count the per-kind capped fetches, not every match in the
        database.

        Args:
            query: Free-text query.
            entity_types: Kinds to search; defaults to the configured kinds.
            filters: Extra filters applied to every kind.
            limit: Page size; also the per-kind fetch cap.
            offset: Number of ranked results to skip.

        Returns:
            Ranked page of results with total, facets and optional suggestions.

        Raises:
            Exception: Any repository failure; no partial results are returned.
        """
        kinds = self._resolve_kinds(entity_types)
        page_size, _ = build_pagination(1, limit if limit is not None else self.default_limit)
        offset = max(offset, 0)
        base = (filters or FilterSpec()).with_updates(
            search=query,
            page=1,
            limit=page_size,
            sort_by=None,
            sort_order=None,
        )

        results: list[SearchResult] = []
        for kind in kinds:
            kind_filters = base
            if kind is EntityKind.SECTION and base.is_visible is None:
                kind_filters = base.with_updates(is_visible=True)
            records = self._fetch(build_filters(kind, kind_filters))
            log.info("Search kind completed: kind=%s count=%d", kind.value, len(records))
            project = _PROJECTORS[kind]
            results.extend(project(query, record) for record in records)

        ranked = sorted(results, key=lambda result: result.relevance_score, reverse=True)
        facets = calculate_facets(ranked)

        suggestions = None
        if self.suggestions_enabled and (len(query) < SUGGESTION_TRIGGER_LENGTH or not ranked):
            suggestions = self.generate_search_suggestions(query)

        return SearchResponse(
            results=tuple(ranked[offset:offset + page_size]),
            total=len(ranked),
            facets=facets,
            suggestions=suggestions,
        )

    def generate_search_suggestions(self, query: str) -> list[str]:
        """Suggest existing titles that contain ``query`` (case-insensitive).

        Looks at page titles, template names and media file names, up to five
        of each, and returns at most ten unique strings in that order.
        """
        if len(query) < SUGGESTION_MIN_QUERY:
            return []

        suggestions: list[str] = []
        for kind, column, exclude_deleted in _SUGGESTION_SOURCES:
            clauses: list[Predicate] = [Contains(column, query)]
            if exclude_deleted:
                clauses.insert(0, IsNull("deleted_at"))
            plan = QueryPlan(kind=kind, where=AllOf(tuple(clauses)), order_by=(), take=SUGGESTIONS_PER_KIND, skip=0)
            for record in self._fetch(plan):
                title = record.get(column)
                if title and title not in suggestions:
                    suggestions.append(title)

        return suggestions[:MAX_SUGGESTIONS]

    def popular_search_terms(self, limit: int = 10) -> list[str]:
        """Return titles of the most recently created published pages."""
        plan = QueryPlan(
            kind=EntityKind.PAGE,
            where=AllOf((IsNull("deleted_at"), Equals("status", "published"))),
            order_by=(OrderBy("created_at", "desc"),),
            take=limit,
            skip=0,
        )
        return [record["page_title"] for record in self._fetch(plan)]

    def _resolve_kinds(self, entity_types: Iterable[EntityKind | str] | None) -> tuple[EntityKind, ...]:
        """Return requested kinds in canonical page/template/media/section order."""
        if entity_types is None:
            requested = set(self.entity_types)
        else:
            requested = {kind if isinstance(kind, EntityKind) else EntityKind.parse(kind) for kind in entity_types}
        return tuple(kind for kind in ALL_KINDS if kind in requested)

    def _fetch(self, plan: QueryPlan) -> Sequence[Mapping[str, Any]]:
        try:
            return self.repository.find_many(plan)
        except Exception as error:
            log.error("Search lookup failed: kind=%s error=%s", plan.kind.value, error)
            raise


def _project_page(query: str, record: Mapping[str, Any]) -> SearchResult:
    return SearchResult(
        id=record["id"],
        type=EntityKind.PAGE,
        title=record["page_title"],
        description=record.get("meta_description") or None,
        url=record.get("slug"),
        thumbnail_url=record.get("og_image") or None,
        metadata={
            "status": record.get("status"),
            "page_type": record.get("page_type"),
            "published_at": record.get("published_at"),
            "author_id": record.get("author_id"),
        },
        relevance_score=calculate_relevance(query, record["page_title"], record.get("meta_description")),
        highlights=generate_highlights(
            query, [record["page_title"], record.get("meta_description"), record.get("slug")]
        ),
    )


def _project_template(query: str, record: Mapping[str, Any]) -> SearchResult:
    return SearchResult(
        id=record["id"],
        type=EntityKind.TEMPLATE,
        title=record["name"],
        description=record.get("description") or None,
        thumbnail_url=record.get("thumbnail_url") or None,
        metadata={
            "category": record.get("category"),
            "is_active": record.get("is_active"),
            "is_system": record.get("is_system"),
        },
        relevance_score=calculate_relevance(query, record["name"], record.get("description")),
        highlights=generate_highlights(query, [record["name"], record.get("description")]),
    )


def _project_media(query: str, record: Mapping[str, Any]) -> SearchResult:
    return SearchResult(
        id=record["id"],
        type=EntityKind.MEDIA,
        title=record["original_name"],
        description=record.get("description") or record.get("alt_text") or None,
        url=record.get("file_url"),
        thumbnail_url=record.get("thumbnail_url") or record.get("file_url"),
        metadata={
            "asset_type": record.get("asset_type"),
            "file_size": record.get("file_size"),
            "mime_type": record.get("mime_type"),
            "tags": list(record.get("tags") or []),
        },
        relevance_score=calculate_relevance(
            query, record["original_name"], record.get("alt_text"), record.get("caption")
        ),
        highlights=generate_highlights(
            query, [record["original_name"], record.get("alt_text"), record.get("caption")]
        ),
    )


def _project_section(query: str, record: Mapping[str, Any]) -> SearchResult:
    return SearchResult(
        id=record["id"],
        type=EntityKind.SECTION,
        title=record.get("title") or record["section_key"],
        description=record.get("subtitle") or None,
        metadata={
            "section_type": record.get("section_type"),
            "page_id": record.get("page_id"),
            "order": record.get("sort_order"),
        },
        relevance_score=calculate_relevance(query, record.get("title"), record.get("subtitle")),
        highlights=generate_highlights(query, [record.get("title"), record.get("subtitle")]),
    )


_PROJECTORS: Mapping[EntityKind, Callable[[str, Mapping[str, Any]], SearchResult]] = {
    EntityKind.PAGE: _project_page,
    EntityKind.TEMPLATE: _project_template,
    EntityKind.MEDIA: _project_media,
    EntityKind.SECTION: _project_section,
}
