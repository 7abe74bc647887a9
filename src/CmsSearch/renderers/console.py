"""Console text output renderers."""

from __future__ import annotations

from CmsSearch.core.models import FacetCount, SearchResponse


def render_text(response: SearchResponse) -> str:
    """Render a search response into a human-readable text block."""
    lines: list[str] = [f"{response.total} result(s), showing {len(response.results)}", ""]

    for idx, result in enumerate(response.results, start=1):
        lines.append(f"{idx}. [{result.type.value}] {result.title}  (score {result.relevance_score})")
        if result.description:
            lines.append(f"   {result.description}")
        if result.url:
            lines.append(f"   URL: {result.url}")
        for snippet in result.highlights:
            lines.append(f"   > {snippet}")
        lines.append("")

    facets = response.facets
    for label, buckets in (
        ("Types", facets.types),
        ("Statuses", facets.statuses),
        ("Categories", facets.categories),
        ("Asset types", facets.asset_types),
    ):
        if buckets:
            lines.append(f"{label}: {_fmt_buckets(buckets)}")

    if response.suggestions:
        lines.append(f"Did you mean: {', '.join(response.suggestions)}")

    return "\n".join(lines).rstrip() + "\n"


def _fmt_buckets(buckets: tuple[FacetCount, ...]) -> str:
    return ", ".join(f"{bucket.value} ({bucket.count})" for bucket in buckets)
