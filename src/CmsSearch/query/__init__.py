"""Filter parsing, query building and filter summaries."""

from __future__ import annotations

from CmsSearch.query.builder import (
    build_filters,
    build_media_filters,
    build_order_by,
    build_page_filters,
    build_pagination,
    build_section_filters,
    build_template_filters,
)
from CmsSearch.query.parser import parse_filter_params
from CmsSearch.query.summary import build_filter_summary

__all__ = [
    "build_filter_summary",
    "build_filters",
    "build_media_filters",
    "build_order_by",
    "build_page_filters",
    "build_pagination",
    "build_section_filters",
    "build_template_filters",
    "parse_filter_params",
]
