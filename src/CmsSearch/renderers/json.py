"""JSON output renderers.

Renders search responses into the JSON-serializable wire shape consumed by
HTTP callers: ``{results, total, facets, suggestions?}`` with camelCase keys.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Mapping

from CmsSearch.core.models import FacetCount, SearchFacets, SearchResponse, SearchResult


def render_json(response: SearchResponse) -> dict[str, Any]:
    """Render a search response into JSON-serializable Python objects.

    ``suggestions`` is only present when the service generated them.
    """
    payload: dict[str, Any] = {
        "results": [render_result(result) for result in response.results],
        "total": response.total,
        "facets": render_facets(response.facets),
    }
    if response.suggestions is not None:
        payload["suggestions"] = list(response.suggestions)
    return payload


def render_result(result: SearchResult) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": result.id,
        "type": result.type.value,
        "title": result.title,
        "relevanceScore": result.relevance_score,
        "highlights": list(result.highlights),
        "metadata": _jsonable(result.metadata),
    }
    # Only include optional fields that are set
    if result.description is not None:
        out["description"] = result.description
    if result.url is not None:
        out["url"] = result.url
    if result.thumbnail_url is not None:
        out["thumbnailUrl"] = result.thumbnail_url
    return out


def render_facets(facets: SearchFacets) -> dict[str, list[dict[str, Any]]]:
    return {
        "types": _buckets(facets.types, "type"),
        "statuses": _buckets(facets.statuses, "status"),
        "categories": _buckets(facets.categories, "category"),
        "assetTypes": _buckets(facets.asset_types, "assetType"),
    }


def dumps(payload: Any) -> str:
    """Serialize a payload with stable, readable formatting."""
    return json.dumps(payload, ensure_ascii=False, indent=2, default=_default)


def _buckets(counts: tuple[FacetCount, ...], label: str) -> list[dict[str, Any]]:
    return [{label: bucket.value, "count": bucket.count} for bucket in counts]


def _jsonable(metadata: Mapping[str, Any]) -> dict[str, Any]:
    return {_camel(key): _default(value) if isinstance(value, datetime) else value for key, value in metadata.items()}


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
