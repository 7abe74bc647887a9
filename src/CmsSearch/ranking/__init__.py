"""Relevance ranking for CMS search results."""

from __future__ import annotations

from CmsSearch.ranking.relevance import calculate_relevance, generate_highlights, split_terms

__all__ = ["calculate_relevance", "generate_highlights", "split_terms"]
