"""Output renderers for search responses (console text, JSON)."""

from __future__ import annotations

from CmsSearch.core.models import SearchResponse
from CmsSearch.renderers.console import render_text
from CmsSearch.renderers.json import dumps, render_json

OUTPUT_FORMATS = ("json", "text")


def render(response: SearchResponse, fmt: str) -> str:
    """Render ``response`` in the named output format.

    Raises:
        ValueError: If ``fmt`` is not a known format.
    """
    if fmt == "json":
        return dumps(render_json(response))
    if fmt == "text":
        return render_text(response)
    raise ValueError(f"Unsupported output format: {fmt}")


__all__ = [
    "OUTPUT_FORMATS",
    "dumps",
    "render",
    "render_json",
    "render_text",
]
