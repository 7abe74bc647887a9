"""Core domain types for CMS search."""

from __future__ import annotations

from CmsSearch.core.filters import FilterSpec, as_values
from CmsSearch.core.models import (
    ALL_KINDS,
    EntityKind,
    FacetCount,
    SearchFacets,
    SearchResponse,
    SearchResult,
)
from CmsSearch.core.predicate import QueryPlan

__all__ = [
    "ALL_KINDS",
    "EntityKind",
    "FacetCount",
    "FilterSpec",
    "QueryPlan",
    "SearchFacets",
    "SearchResponse",
    "SearchResult",
    "as_values",
]
