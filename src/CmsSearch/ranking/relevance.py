"""Heuristic relevance scoring and highlight extraction.

Fields are passed in decreasing importance. A field at index ``i`` out of
``n`` carries weight ``n - i``, and each field contributes:

- exact match of the whole query:          100 * weight
- field starts with the whole query:        50 * weight
- field contains every search term:         25 * weight
- each search term contained in the field:   5 * weight

Comparisons are case-insensitive via ``str.lower``. Missing or empty fields
still count toward ``n`` but contribute nothing.
"""

from __future__ import annotations

from typing import Optional, Sequence

_EXACT_BONUS = 100
_PREFIX_BONUS = 50
_ALL_TERMS_BONUS = 25
_TERM_BONUS = 5

HIGHLIGHT_CONTEXT = 30
MAX_HIGHLIGHTS = 3


def split_terms(query: str) -> list[str]:
    """Lowercase ``query`` and split it into non-empty whitespace tokens."""
    return query.lower().split()


def calculate_relevance(query: str, *fields: Optional[str]) -> int:
    """Score one record's text fields against ``query``.

    Args:
        query: Raw query text.
        *fields: Candidate fields, most important first.

    Returns:
        Non-negative integer score; 0 means nothing matched.
    """
    query_lower = query.lower()
    terms = split_terms(query)
    field_count = len(fields)

    score = 0
    for index, field in enumerate(fields):
        if not field:
            continue
        weight = field_count - index
        field_lower = field.lower()

        if field_lower == query_lower:
            score += _EXACT_BONUS * weight
        if field_lower.startswith(query_lower):
            score += _PREFIX_BONUS * weight
        if all(term in field_lower for term in terms):
            score += _ALL_TERMS_BONUS * weight
        for term in terms:
            if term in field_lower:
                score += _TERM_BONUS * weight

    return score


def generate_highlights(query: str, fields: Sequence[Optional[str]]) -> list[str]:
    """Extract up to three snippets around the first match of each term.

    Each snippet spans up to 30 characters either side of the match and is
    marked with ``...`` where it was cut. Identical snippets are kept once.

    Args:
        query: Raw query text.
        fields: Candidate fields in discovery order.

    Returns:
        Snippets in field/term order, at most `MAX_HIGHLIGHTS`.
    """
    terms = split_terms(query)
    highlights: list[str] = []

    for field in fields:
        if not field:
            continue
        field_lower = field.lower()
        for term in terms:
            index = field_lower.find(term)
            if index == -1:
                continue
            start = max(0, index - HIGHLIGHT_CONTEXT)
            end = min(len(field), index + len(term) + HIGHLIGHT_CONTEXT)
            snippet = field[start:end]
            if start > 0:
                snippet = "..." + snippet
            if end < len(field):
                snippet = snippet + "..."
            if snippet not in highlights:
                highlights.append(snippet)

    return highlights[:MAX_HIGHLIGHTS]
