"""CmsSearch: filter parsing, query building and relevance-ranked search for CMS content."""

__version__ = "0.1.0"
