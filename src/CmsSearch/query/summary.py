"""Human-readable rendering of a `FilterSpec` for UI display."""

from __future__ import annotations

from CmsSearch.core.filters import DateValue, FilterSpec, as_values
from CmsSearch.query.builder import parse_date


def build_filter_summary(spec: FilterSpec) -> list[str]:
    """Describe the active filters as display strings.

    Args:
        spec: Parsed filters.

    Returns:
        Summary lines such as ``Search: "foo"`` or ``Status: draft, published``.
    """
    summary: list[str] = []

    if spec.search:
        summary.append(f'Search: "{spec.search}"')
    if spec.status:
        summary.append(f"Status: {', '.join(as_values(spec.status))}")
    if spec.page_type:
        summary.append(f"Type: {', '.join(as_values(spec.page_type))}")
    if spec.category:
        summary.append(f"Category: {', '.join(as_values(spec.category))}")

    if spec.created_after and spec.created_before:
        summary.append(f"Created: {format_date(spec.created_after)} - {format_date(spec.created_before)}")
    elif spec.created_after:
        summary.append(f"Created after: {format_date(spec.created_after)}")
    elif spec.created_before:
        summary.append(f"Created before: {format_date(spec.created_before)}")

    if spec.tags:
        summary.append(f"Tags: {', '.join(as_values(spec.tags))}")

    return summary


def format_date(value: DateValue) -> str:
    """Format a date bound as ``M/D/YYYY`` or ``Invalid Date``."""
    parsed = parse_date(value)
    if parsed is None:
        return "Invalid Date"
    return f"{parsed.month}/{parsed.day}/{parsed.year}"
