from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence


class EntityKind(str, Enum):
    """Searchable CMS entity kinds, declared in canonical search order."""

    PAGE = "page"
    TEMPLATE = "template"
    MEDIA = "media"
    SECTION = "section"

    @classmethod
    def parse(cls, value: str) -> EntityKind:
        """Return the kind named by ``value`` (case-insensitive).

        Raises:
            ValueError: If ``value`` names no known kind.
        """
        normalized = value.strip().lower()
        for kind in cls:
            if kind.value == normalized:
                return kind
        raise ValueError(f"Unknown entity kind: {value}")


ALL_KINDS: tuple[EntityKind, ...] = tuple(EntityKind)


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Normalized projection of one matched CMS record.

    Attributes:
        id: Record identifier.
        type: Entity kind the record belongs to.
        title: Display title.
        description: Optional short description.
        url: Optional link (page slug, media file URL).
        thumbnail_url: Optional preview image.
        metadata: Kind-specific extra fields (status, category, ...).
        relevance_score: Heuristic score against the query.
        highlights: Up to three matched snippets.
    """

    id: str
    type: EntityKind
    title: str
    relevance_score: int
    description: Optional[str] = None
    url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)
    highlights: Sequence[str] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        object.__setattr__(self, "highlights", tuple(self.highlights))


@dataclass(frozen=True, slots=True)
class FacetCount:
    """One bucket of a facet breakdown."""

    value: str
    count: int


@dataclass(frozen=True, slots=True)
class SearchFacets:
    """Count breakdowns over a single search call's result list."""

    types: tuple[FacetCount, ...] = ()
    statuses: tuple[FacetCount, ...] = ()
    categories: tuple[FacetCount, ...] = ()
    asset_types: tuple[FacetCount, ...] = ()


@dataclass(frozen=True, slots=True)
class SearchResponse:
    """Aggregated multi-entity search output.

    ``suggestions`` is ``None`` when suggestions were not generated for the
    call, and a (possibly empty) list when they were.
    """

    results: tuple[SearchResult, ...]
    total: int
    facets: SearchFacets
    suggestions: Optional[list[str]] = None
