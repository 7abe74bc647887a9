"""Column layout of the CMS content tables.

Timestamps are stored as integer epoch milliseconds, booleans as 0/1 integers and
list-valued columns as JSON arrays.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from CmsSearch.core.models import EntityKind


@dataclass(frozen=True, slots=True)
class TableSchema:
    """Storage description of one entity kind."""

    table: str
    columns: tuple[str, ...]
    timestamp_columns: frozenset[str] = frozenset()
    bool_columns: frozenset[str] = frozenset()
    json_columns: frozenset[str] = frozenset()

    def has_column(self, column: str) -> bool:
        return column in self.columns


SCHEMAS: Mapping[EntityKind, TableSchema] = {
    EntityKind.PAGE: TableSchema(
        table="cms_pages",
        columns=(
            "id", "page_key", "page_title", "slug", "page_type", "meta_description",
            "meta_keywords", "og_image", "status", "author_id", "template_id",
            "is_public", "requires_auth", "seo_score", "published_at",
            "created_at", "updated_at", "deleted_at",
        ),
        timestamp_columns=frozenset({"published_at", "created_at", "updated_at", "deleted_at"}),
        bool_columns=frozenset({"is_public", "requires_auth"}),
    ),
    EntityKind.TEMPLATE: TableSchema(
        table="cms_templates",
        columns=(
            "id", "name", "description", "category", "thumbnail_url",
            "is_active", "is_system", "sort_order", "created_at", "updated_at",
        ),
        timestamp_columns=frozenset({"created_at", "updated_at"}),
        bool_columns=frozenset({"is_active", "is_system"}),
    ),
    EntityKind.MEDIA: TableSchema(
        table="cms_media_assets",
        columns=(
            "id", "filename", "original_name", "alt_text", "caption", "description",
            "asset_type", "mime_type", "file_size", "file_url", "thumbnail_url",
            "folder_id", "uploaded_by", "tags", "usage_count", "last_used_at",
            "created_at", "updated_at", "deleted_at",
        ),
        timestamp_columns=frozenset({"last_used_at", "created_at", "updated_at", "deleted_at"}),
        json_columns=frozenset({"tags"}),
    ),
    EntityKind.SECTION: TableSchema(
        table="cms_page_sections",
        columns=(
            "id", "page_id", "section_key", "section_type", "title", "subtitle",
            "is_visible", "sort_order", "created_at", "updated_at",
        ),
        timestamp_columns=frozenset({"created_at", "updated_at"}),
        bool_columns=frozenset({"is_visible"}),
    ),
}
