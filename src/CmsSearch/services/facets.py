"""Facet counting over an assembled search result list."""

from __future__ import annotations

from typing import Sequence

from CmsSearch.core.models import FacetCount, SearchFacets, SearchResult


def calculate_facets(results: Sequence[SearchResult]) -> SearchFacets:
    """Count results by type, status, category and asset type."""
    return SearchFacets(
        types=count_by(result.type.value for result in results),
        statuses=count_by(_metadata_values(results, "status")),
        categories=count_by(_metadata_values(results, "category")),
        asset_types=count_by(_metadata_values(results, "asset_type")),
    )


def count_by(values) -> tuple[FacetCount, ...]:
    """Count values, most frequent first; ties keep first-seen order."""
    counts: dict[str, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return tuple(FacetCount(value=value, count=count) for value, count in ordered)


def _metadata_values(results: Sequence[SearchResult], key: str) -> list[str]:
    """Collect non-empty string metadata values for ``key``."""
    out: list[str] = []
    for result in results:
        value = result.metadata.get(key)
        if isinstance(value, str) and value:
            out.append(value)
    return out
