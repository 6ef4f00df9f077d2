import logging
from typing import Any, Optional

import requests

from ytsearch.search import pagination
from ytsearch.search.filters import FilterCatalog
from ytsearch.search.options import normalize_options
from ytsearch.search.results import SearchResults

logger = logging.getLogger(__name__)


def search(
    query: str,
    session: Optional[requests.Session] = None,
    **options: Any,
) -> SearchResults:
    """Search YouTube and return the mapped result items.

    Parameters:
        query: A search term, or a results URL carrying a filter (``sp=...``)
            as found in ``Filter.url``.
        session: Optional ``requests.Session`` used for every request.
        options:
            options of the search:

            * **limit**: (int) Maximum number of items, default 100. Pass
              ``math.inf`` for an unbounded search.
            * **pages**: (int) Maximum number of pages; disables ``limit`` and
              makes the result carry a ``continuation`` descriptor.
            * **safe_search**: (bool) Request restricted mode.
            * **gl**: (str) Region, e.g. ``"DE"``.
            * **hl**: (str) Language, e.g. ``"de"``.
            * **utc_offset_minutes**: (int) Offset used for relative dates.
            * **request_options**: (dict) ``headers``, ``timeout`` and
              ``max_retries`` of the HTTP transport.

    Returns:
        The search results.

    Examples:
        >>> results = ytsearch.search("cats", limit=5)  # doctest: +SKIP
        >>> page = ytsearch.search("cats", pages=1)  # doctest: +SKIP
        >>> more = ytsearch.continue_request(page.continuation)  # doctest: +SKIP

    Raises:
        MissingQuery: if the query is empty.
        InvalidQueryType: if the query is not a string.
        MissingSearchTermInFilterLink: if a filter link lacks ``search_query``.
        NoDocumentFound: if three attempts returned no initial data.
        UpstreamError: if YouTube reported an error.
    """
    opts = normalize_options(query, options)
    logger.debug("Searching %r with limit=%s pages=%s", opts.search, opts.limit, opts.pages)
    return pagination.search(opts, session)


def continue_request(
    descriptor: Any,
    pages: Optional[int] = 1,
    session: Optional[requests.Session] = None,
) -> SearchResults:
    """Fetch further pages of a search started with a page limit.

    Parameters:
        descriptor: ``SearchResults.continuation`` of a previous call, or its
            ``to_dict()`` / ``to_list()`` form.
        pages: Number of pages to fetch, ``None`` for all remaining ones.
        session: Optional ``requests.Session`` used for every request.

    Returns:
        The items of the fetched pages and the next descriptor, if any.

    Raises:
        InvalidDescriptor: if the descriptor does not have the expected shape.
        BudgetMismatch: if the descriptor belongs to an item-limited search.
    """
    return pagination.resume(descriptor, session, pages=pages)


def get_filters(
    query: str,
    session: Optional[requests.Session] = None,
    retries: Optional[int] = None,
    **options: Any,
) -> FilterCatalog:
    """Return the filters available for a search.

    Parameters:
        query: A search term or filter link.
        session: Optional ``requests.Session``.
        retries: Total attempts for a page without initial data. ``None``
            retries until one arrives.
        options: Same options as ``search``.

    Returns:
        A catalog mapping category names to their filters.

    Examples:
        >>> filters = ytsearch.get_filters("cats")  # doctest: +SKIP
        >>> video = filters["Type"]["Video"]  # doctest: +SKIP
        >>> results = ytsearch.search(video.url, limit=10)  # doctest: +SKIP
    """
    opts = normalize_options(query, options)
    return pagination.fetch_filters(opts, session, retries=retries)
