from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Any, Literal, Optional, Union

MultiValue = Union[str, tuple[str, ...]]
DateValue = Union[str, datetime]
SortOrder = Literal["asc", "desc"]


@dataclass(frozen=True, slots=True)
class FilterSpec:
    """Typed, immutable filter request for CMS entity queries.

    Every field defaults to ``None`` which means "not requested": the query
    builder adds no condition for it. Boolean flags are therefore tri-state;
    ``False`` filters on the flag while ``None`` leaves it unconstrained.

    Multi-value fields hold either a single string (equality match) or a tuple
    of strings (membership match). Date bounds are kept as the raw request
    strings; conversion happens in the query builder.
    """

    search: Optional[str] = None

    status: Optional[MultiValue] = None
    page_type: Optional[MultiValue] = None
    asset_type: Optional[MultiValue] = None
    section_type: Optional[MultiValue] = None
    category: Optional[MultiValue] = None
    tags: Optional[MultiValue] = None

    author_id: Optional[str] = None
    created_by: Optional[str] = None
    uploaded_by: Optional[str] = None
    template_id: Optional[str] = None
    folder_id: Optional[str] = None

    created_after: Optional[DateValue] = None
    created_before: Optional[DateValue] = None
    updated_after: Optional[DateValue] = None
    updated_before: Optional[DateValue] = None
    published_after: Optional[DateValue] = None
    published_before: Optional[DateValue] = None

    is_public: Optional[bool] = None
    is_active: Optional[bool] = None
    is_visible: Optional[bool] = None
    requires_auth: Optional[bool] = None
    is_system: Optional[bool] = None

    min_seo_score: Optional[int] = None
    max_seo_score: Optional[int] = None
    min_file_size: Optional[int] = None
    max_file_size: Optional[int] = None

    sort_by: Optional[str] = None
    sort_order: Optional[SortOrder] = None

    page: Optional[int] = None
    limit: Optional[int] = None

    def with_updates(self, **changes: Any) -> FilterSpec:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def active_fields(self) -> dict[str, Any]:
        """Return the fields that are set, in declaration order."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


def as_values(value: Optional[MultiValue]) -> tuple[str, ...]:
    """Normalize a scalar-or-tuple filter value into a tuple."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)
