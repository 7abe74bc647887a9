"""Search configuration (``search`` section)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from CmsSearch.config.common import expect_str_list, required, section
from CmsSearch.core.models import ALL_KINDS, EntityKind
from CmsSearch.query.builder import MAX_LIMIT


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Validated search defaults.

    Attributes:
        entity_types: Kinds searched when a call names none, canonical order.
        default_limit: Page size when a call passes none.
        suggestions: Whether sparse searches return title suggestions.
    """

    entity_types: tuple[EntityKind, ...]
    default_limit: int
    suggestions: bool


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load the ``search`` section.

    ``entity_types`` is optional and defaults to every kind.
    """
    search_section = section(raw, "search")
    kinds = search_section.get("entity_types", [kind.value for kind in ALL_KINDS])
    return SearchConfig(
        entity_types=_parse_entity_types(kinds),
        default_limit=required(search_section, "search.default_limit", int),
        suggestions=required(search_section, "search.suggestions", bool),
    )


def check_search(config: SearchConfig) -> None:
    if not config.entity_types:
        raise ValueError("search.entity_types must include at least one kind")
    if not 1 <= config.default_limit <= MAX_LIMIT:
        raise ValueError(f"search.default_limit must be between 1 and {MAX_LIMIT}")


def _parse_entity_types(value: Any) -> tuple[EntityKind, ...]:
    """Parse kind names into canonical order, dropping blanks and duplicates."""
    requested: set[EntityKind] = set()
    for idx, item in enumerate(expect_str_list(value, "search.entity_types")):
        if not item.strip():
            continue
        try:
            requested.add(EntityKind.parse(item))
        except ValueError as error:
            raise ValueError(f"search.entity_types[{idx}] has unknown kind: {item}") from error
    return tuple(kind for kind in ALL_KINDS if kind in requested)
