"""ytsearch: YouTube search results without an API key.

ytsearch reads the search state YouTube embeds in its results page and follows
the continuation tokens of its internal API to page through results.

Quick Start:
    ```python
    import ytsearch

    # First 20 results
    results = ytsearch.search("lofi hip hop", limit=20)

    # One page now, more later
    page = ytsearch.search("lofi hip hop", pages=1)
    more = ytsearch.continue_request(page.continuation)

    # Available filters, and a search with one applied
    filters = ytsearch.get_filters("lofi hip hop")
    videos = ytsearch.search(filters["Type"]["Video"].url, limit=20)
    ```

Main Functions:
    - `search()`: Search and return mapped result items
    - `continue_request()`: Resume a page-limited search
    - `get_filters()`: List the filters available for a search
"""

import logging
from importlib.metadata import PackageNotFoundError, version

from .api import continue_request, get_filters, search
from .exceptions import (
    BudgetMismatch,
    InvalidDescriptor,
    InvalidQueryType,
    MissingQuery,
    MissingSearchTermInFilterLink,
    NoDocumentFound,
    UnsupportedRoot,
    UnterminatedStructure,
    UpstreamError,
    YTSearchError,
)
from .search import (
    ContinuationDescriptor,
    Filter,
    FilterCatalog,
    FilterGroup,
    SearchResults,
)

logger = logging.getLogger(__name__)

__all__ = [
    # api.py
    "search",
    "continue_request",
    "get_filters",
    # search
    "ContinuationDescriptor",
    "Filter",
    "FilterCatalog",
    "FilterGroup",
    "SearchResults",
    # exceptions.py
    "YTSearchError",
    "UnsupportedRoot",
    "UnterminatedStructure",
    "NoDocumentFound",
    "UpstreamError",
    "InvalidDescriptor",
    "BudgetMismatch",
    "MissingQuery",
    "InvalidQueryType",
    "MissingSearchTermInFilterLink",
]

try:
    __version__ = version("ytsearch")
except PackageNotFoundError:
    __version__ = "0.0.0"
