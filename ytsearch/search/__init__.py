"""Search package: options, layout adapters, pagination, filters and results.

This package turns YouTube results pages and their continuation answers into
``SearchResults``.
"""

from ytsearch.search.adapters import (
    ContinuationItemKind,
    PageLayout,
    parse_continuation_items,
    parse_first_page,
)
from ytsearch.search.continuation import ContinuationDescriptor
from ytsearch.search.filters import Filter, FilterCatalog, FilterGroup, parse_filters
from ytsearch.search.options import RequestOptions, SearchOptions, normalize_options
from ytsearch.search.results import SearchResults

__all__ = [
    # adapters.py
    "ContinuationItemKind",
    "PageLayout",
    "parse_continuation_items",
    "parse_first_page",
    # continuation.py
    "ContinuationDescriptor",
    # filters.py
    "Filter",
    "FilterCatalog",
    "FilterGroup",
    "parse_filters",
    # options.py
    "RequestOptions",
    "SearchOptions",
    "normalize_options",
    # results.py
    "SearchResults",
]
