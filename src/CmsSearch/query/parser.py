"""Request parameter parsing into `FilterSpec`.

Parsing is lenient: unknown keys are ignored, malformed numbers fall back to
defaults and date strings are kept verbatim. Nothing here raises on bad input.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from CmsSearch.core.filters import FilterSpec, MultiValue

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

# wire name -> FilterSpec field
_STRING_PARAMS: dict[str, str] = {
    "search": "search",
    "authorId": "author_id",
    "createdBy": "created_by",
    "uploadedBy": "uploaded_by",
    "createdAfter": "created_after",
    "createdBefore": "created_before",
    "updatedAfter": "updated_after",
    "updatedBefore": "updated_before",
    "publishedAfter": "published_after",
    "publishedBefore": "published_before",
    "templateId": "template_id",
    "folderId": "folder_id",
    "sortBy": "sort_by",
}

_MULTI_PARAMS: dict[str, str] = {
    "status": "status",
    "pageType": "page_type",
    "assetType": "asset_type",
    "sectionType": "section_type",
    "category": "category",
    "tags": "tags",
}

_BOOL_PARAMS: dict[str, str] = {
    "isPublic": "is_public",
    "isActive": "is_active",
    "isVisible": "is_visible",
    "requiresAuth": "requires_auth",
    "isSystem": "is_system",
}

# wire name -> (field, fallback when unparseable; None leaves the field unset)
_INT_PARAMS: dict[str, tuple[str, int | None]] = {
    "minSeoScore": ("min_seo_score", 0),
    "maxSeoScore": ("max_seo_score", 100),
    "minFileSize": ("min_file_size", 0),
    "maxFileSize": ("max_file_size", None),
    "page": ("page", 1),
    "limit": ("limit", 20),
}


def parse_filter_params(params: Mapping[str, Any]) -> FilterSpec:
    """Parse flat request parameters into a `FilterSpec`.

    Args:
        params: Query-string mapping of parameter name to value. A list value
            (multi-dict style) contributes its first element.

    Returns:
        Parsed filters. Absent keys stay ``None``.
    """
    values: dict[str, Any] = {}

    for key, field in _STRING_PARAMS.items():
        raw = _get(params, key)
        if raw:
            values[field] = raw

    for key, field in _MULTI_PARAMS.items():
        raw = _get(params, key)
        if raw:
            values[field] = split_multi(raw)

    for key, field in _BOOL_PARAMS.items():
        raw = _get(params, key)
        if raw is not None:
            values[field] = raw == "true"

    for key, (field, fallback) in _INT_PARAMS.items():
        raw = _get(params, key)
        if raw:
            parsed = parse_int(raw)
            if parsed is None:
                parsed = fallback
            if parsed is not None:
                values[field] = parsed

    sort_order = _get(params, "sortOrder")
    if sort_order:
        values["sort_order"] = "asc" if sort_order.strip().lower() == "asc" else "desc"

    return FilterSpec(**values)


def split_multi(raw: str) -> MultiValue:
    """Split a comma-separated value; values without a comma stay scalar."""
    if "," in raw:
        return tuple(raw.split(","))
    return raw


def parse_int(raw: str) -> int | None:
    """Read the leading integer of ``raw`` (``"12px"`` -> 12).

    Returns:
        Parsed integer, or ``None`` when ``raw`` does not start with digits.
    """
    match = _LEADING_INT_RE.match(raw)
    if match is None:
        return None
    return int(match.group(1))


def _get(params: Mapping[str, Any], key: str) -> str | None:
    """Return a single string value for ``key`` or ``None`` if absent."""
    if key not in params:
        return None
    value = params[key]
    if isinstance(value, (list, tuple)):
        if not value:
            return None
        value = value[0]
    if value is None:
        return None
    return str(value)
