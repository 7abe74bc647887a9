"""Search service layer for CmsSearch.

Provides the multi-entity search service and a factory wiring it from
configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from CmsSearch.services.search import ContentRepository, ContentSearchService

if TYPE_CHECKING:
    from CmsSearch.config import AppConfig


def create_search_service(config: AppConfig, repository: ContentRepository) -> ContentSearchService:
    """Create a search service from configuration.

    Args:
        config: Application configuration containing search settings.
        repository: Persistence collaborator.

    Returns:
        Configured ContentSearchService instance.
    """
    return ContentSearchService(
        repository=repository,
        entity_types=config.search.entity_types,
        default_limit=config.search.default_limit,
        suggestions_enabled=config.search.suggestions,
    )


__all__ = [
    "ContentRepository",
    "ContentSearchService",
    "create_search_service",
]
