"""Fetch a search page and follow its continuation tokens.

The first page is an HTML document with the initial data embedded in a
script tag; every further page is a JSON answer to a POST against the
internal search API. Pages are fetched one after the other while a token
is available and the item/page budget is not exhausted.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import urlencode

import requests
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    stop_never,
)

from ytsearch._core._models import Budget, DecodedResponse, ExecutionContext
from ytsearch._core._request import get_text, post_json
from ytsearch.config import BASE_API_URL, BASE_SEARCH_URL, FIRST_PAGE_ATTEMPTS
from ytsearch.decoder import parse_body
from ytsearch.exceptions import NoDocumentFound, UpstreamError
from ytsearch.extraction import parse_text
from ytsearch.items import Item, ItemParser, parse_item
from ytsearch.search.adapters import parse_continuation_items, parse_first_page
from ytsearch.search.continuation import ContinuationDescriptor
from ytsearch.search.filters import FilterCatalog, parse_filters
from ytsearch.search.options import SearchOptions
from ytsearch.search.results import SearchResults

logger = logging.getLogger(__name__)


def _log_retry(retry_state: Any) -> None:
    logger.info(
        "No initial data in search page (attempt %s), retrying",
        retry_state.attempt_number,
    )


def fetch_document(
    options: SearchOptions, session: Optional[requests.Session] = None
) -> DecodedResponse:
    """GET the results page once and decode it.

    Raises:
        NoDocumentFound: if the page carries no initial data.
    """
    logger.debug("Fetching %s?%s", BASE_SEARCH_URL, urlencode(options.query))
    body = get_text(BASE_SEARCH_URL, options.query, options.request_options, session)
    decoded = parse_body(body, options)
    if not isinstance(decoded.document, Mapping):
        raise NoDocumentFound("Unable to find JSON!")
    return decoded


def fetch_document_with_retries(
    options: SearchOptions,
    session: Optional[requests.Session] = None,
    attempts: Optional[int] = FIRST_PAGE_ATTEMPTS,
) -> DecodedResponse:
    """Fetch the results page until it carries initial data.

    Parameters:
        options: Normalized search options.
        session: Optional HTTP session.
        attempts: Total number of attempts, ``None`` to retry forever.

    Raises:
        NoDocumentFound: once every attempt came back without initial data.
    """
    retrying = Retrying(
        stop=stop_never if attempts is None else stop_after_attempt(attempts),
        retry=retry_if_exception_type(NoDocumentFound),
        before_sleep=_log_retry,
        reraise=True,
    )
    return retrying(fetch_document, options, session)


def _raise_for_alerts(document: Mapping[str, Any]) -> None:
    if document.get("contents"):
        return
    message = None
    for alert in document.get("alerts") or []:
        renderer = alert.get("alertRenderer") if isinstance(alert, Mapping) else None
        if renderer and renderer.get("type") == "ERROR":
            message = parse_text(renderer.get("text"))
            break
    raise UpstreamError(message or "* no message *")


def _primary_contents(document: Mapping[str, Any]) -> Mapping[str, Any]:
    try:
        return document["contents"]["twoColumnSearchResultsRenderer"]["primaryContents"]
    except (KeyError, TypeError):
        logger.info("Search page without primary contents")
        return {}


def _refinements(document: Mapping[str, Any]) -> List[Item]:
    refinements = document.get("refinements")
    if not isinstance(refinements, list):
        return []
    return [
        {"q": q, "url": f"{BASE_SEARCH_URL}?{urlencode({'search_query': q})}"}
        for q in refinements
        if isinstance(q, str)
    ]


def _estimated_results(document: Mapping[str, Any]) -> int:
    try:
        return int(document.get("estimatedResults") or 0)
    except (TypeError, ValueError):
        return 0


def _map_items(
    raw_items: List[Any],
    budget: Budget,
    item_parser: ItemParser,
    result: Optional[SearchResults] = None,
) -> List[Item]:
    mapped = (item_parser(raw, result) for raw in raw_items)
    return budget.take([item for item in mapped if item is not None])


def _descriptor(
    api_key: str,
    token: Optional[str],
    context: ExecutionContext,
    options: SearchOptions,
    budget: Budget,
) -> Optional[ContinuationDescriptor]:
    if not token or not budget.items_unbounded:
        return None
    return ContinuationDescriptor(
        api_key=api_key,
        token=token,
        context=context,
        options=options,
        remaining=budget,
    )


def fetch_first_page(
    options: SearchOptions,
    session: Optional[requests.Session] = None,
    item_parser: ItemParser = parse_item,
) -> Tuple[SearchResults, DecodedResponse, Optional[str], Budget]:
    """Fetch and map the first results page.

    Returns:
        The results built from the first page, the decoded response, the
        continuation token (if any) and the budget left afterwards.

    Raises:
        NoDocumentFound: if three attempts returned no initial data.
        UpstreamError: if YouTube answered with an error alert.
    """
    decoded = fetch_document_with_retries(options, session)
    document = decoded.document
    _raise_for_alerts(document)

    result = SearchResults(
        original_query=options.search,
        corrected_query=options.search,
        results=_estimated_results(document),
        refinements=_refinements(document),
    )

    batch = parse_first_page(_primary_contents(document))
    budget = options.budget()
    result.items = _map_items(batch.items, budget, item_parser, result)
    budget = budget.spend(len(result.items))
    result.active_filters = parse_filters(document).active_filters()

    logger.info(
        "First page of %r: %s items, continuation %s",
        options.search,
        len(result.items),
        "present" if batch.continuation_token else "absent",
    )
    return result, decoded, batch.continuation_token, budget


def fetch_next_page(
    api_key: str,
    token: str,
    context: ExecutionContext,
    options: SearchOptions,
    budget: Budget,
    session: Optional[requests.Session] = None,
    item_parser: ItemParser = parse_item,
) -> Tuple[List[Item], Optional[str], Budget]:
    """POST one continuation request and map the returned items.

    A response without the expected command envelope ends the stream: no
    items, no token and the budget unchanged.

    Returns:
        The mapped items, the next token (if any) and the budget left.
    """
    response = post_json(
        BASE_API_URL,
        {"context": context.to_dict(), "continuation": token},
        {"key": api_key},
        options.request_options,
        session,
    )
    try:
        entries = response["onResponseReceivedCommands"][0][
            "appendContinuationItemsAction"
        ]["continuationItems"]
    except (KeyError, IndexError, TypeError):
        logger.info("Continuation response without items, end of results")
        return [], None, budget
    if not isinstance(entries, list):
        return [], None, budget

    batch = parse_continuation_items(entries)
    items = _map_items(batch.items, budget, item_parser)
    logger.debug("Continuation page: %s items", len(items))
    return items, batch.continuation_token, budget.spend(len(items))


def paginate(
    api_key: str,
    token: str,
    context: ExecutionContext,
    options: SearchOptions,
    budget: Budget,
    session: Optional[requests.Session] = None,
    item_parser: ItemParser = parse_item,
) -> Tuple[List[Item], Optional[ContinuationDescriptor]]:
    """Follow continuation tokens until the results or the budget run out.

    Returns:
        The items of every fetched page in retrieval order, and a descriptor
        to resume from when a token remains and items are unbounded.
    """
    items: List[Item] = []
    while True:
        page, token, budget = fetch_next_page(
            api_key, token, context, options, budget, session, item_parser
        )
        items.extend(page)
        if not token or budget.exhausted:
            return items, _descriptor(api_key, token, context, options, budget)


def search(
    options: SearchOptions,
    session: Optional[requests.Session] = None,
    item_parser: ItemParser = parse_item,
) -> SearchResults:
    """Run a full search: the first page, then continuations within budget."""
    result, decoded, token, budget = fetch_first_page(options, session, item_parser)
    result.continuation = _descriptor(
        decoded.api_key, token, decoded.context, options, budget
    )
    if not token or budget.exhausted:
        return result

    items, result.continuation = paginate(
        decoded.api_key, token, decoded.context, options, budget, session, item_parser
    )
    result.items.extend(items)
    return result


def resume(
    descriptor: Any,
    session: Optional[requests.Session] = None,
    pages: Optional[int] = 1,
    item_parser: ItemParser = parse_item,
) -> SearchResults:
    """Fetch further pages of a search from a continuation descriptor.

    Parameters:
        descriptor: A ``ContinuationDescriptor`` or one of its serialized forms.
        session: Optional HTTP session.
        pages: Number of pages to fetch, ``None`` for all remaining pages.

    Raises:
        InvalidDescriptor: if the descriptor does not have the expected shape.
        BudgetMismatch: if the descriptor belongs to an item-limited search.
    """
    descriptor = ContinuationDescriptor.load(descriptor)
    items, continuation = paginate(
        descriptor.api_key,
        descriptor.token,
        descriptor.context,
        descriptor.options,
        Budget(items=None, pages=pages),
        session,
        item_parser,
    )
    return SearchResults(
        original_query=descriptor.options.search,
        corrected_query=descriptor.options.search,
        items=items,
        continuation=continuation,
    )


def fetch_filters(
    options: SearchOptions,
    session: Optional[requests.Session] = None,
    retries: Optional[int] = None,
) -> FilterCatalog:
    """Return the filter catalog of a search.

    Parameters:
        options: Normalized search options.
        session: Optional HTTP session.
        retries: Total attempts for a page without initial data; ``None``
            keeps retrying until one arrives.
    """
    decoded = fetch_document_with_retries(options, session, attempts=retries)
    return parse_filters(decoded.document)
