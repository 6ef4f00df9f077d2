"""Normalize the page layouts YouTube serves into ``PageBatch`` records.

Two generations of the results page are live at the same time: an older
sectioned layout (``sectionListRenderer``) and a newer grid layout
(``richGridRenderer``). Follow-up pages return a flat list of continuation
items mixing both generations. Everything here resolves the shape once and
hands the pagination engine a uniform ``PageBatch``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional

from ytsearch._core._models import PageBatch

logger = logging.getLogger(__name__)

CONTINUATION_KEY = "continuationItemRenderer"


class PageLayout(Enum):
    """Layout of a first results page."""

    SECTIONED = "sectionListRenderer"
    GRID = "richGridRenderer"


class ContinuationItemKind(Enum):
    """Shape of one entry in a continuation batch."""

    LEGACY_SECTION = "itemSectionRenderer"
    GRID_ITEM = "richItemRenderer"
    GRID_SECTION = "richSectionRenderer"
    CONTINUATION = CONTINUATION_KEY


def _first_key(entry: Any) -> Optional[str]:
    if isinstance(entry, Mapping) and entry:
        return next(iter(entry))
    return None


def _body(entry: Any, key: str) -> Optional[Mapping[str, Any]]:
    """Return ``entry[key]`` when it is a renderer mapping, else ``None``."""
    if not isinstance(entry, Mapping):
        return None
    body = entry.get(key)
    return body if isinstance(body, Mapping) else None


def _list(node: Mapping[str, Any], key: str) -> List[Any]:
    value = node.get(key)
    return value if isinstance(value, list) else []


def continuation_token(marker: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Read the continuation token from a ``continuationItemRenderer`` entry."""
    if not marker:
        return None
    try:
        token = marker[CONTINUATION_KEY]["continuationEndpoint"][
            "continuationCommand"
        ]["token"]
    except (KeyError, TypeError):
        logger.debug("Continuation marker without a token: %s", marker)
        return None
    return token if isinstance(token, str) and token else None


def detect_layout(primary_contents: Any) -> Optional[PageLayout]:
    """Return the layout of *primary_contents*, ``None`` if it is unknown."""
    for layout in PageLayout:
        if _body(primary_contents, layout.value) is not None:
            return layout
    return None


def _parse_sectioned(renderer: Mapping[str, Any]) -> PageBatch:
    contents = _list(renderer, "contents")
    sections = (_body(x, ContinuationItemKind.LEGACY_SECTION.value) for x in contents)
    section = next((body for body in sections if body is not None), None)
    marker = next((x for x in contents if _first_key(x) == CONTINUATION_KEY), None)
    items = _list(section, "contents") if section is not None else []
    return PageBatch(items=list(items), continuation_token=continuation_token(marker))


def _parse_grid(renderer: Mapping[str, Any]) -> PageBatch:
    items: List[Any] = []
    marker = None
    for entry in _list(renderer, "contents"):
        if not isinstance(entry, Mapping):
            continue
        if CONTINUATION_KEY in entry:
            marker = marker or entry
            continue
        wrapper = _body(entry, "richItemRenderer") or _body(entry, "richSectionRenderer")
        if wrapper is not None and "content" in wrapper:
            items.append(wrapper["content"])
    return PageBatch(items=items, continuation_token=continuation_token(marker))


def parse_first_page(primary_contents: Mapping[str, Any]) -> PageBatch:
    """Adapt the ``primaryContents`` node of a first results page.

    Parameters:
        primary_contents: The ``twoColumnSearchResultsRenderer.primaryContents``
            node of the initial data document.

    Returns:
        The raw items of the page and its continuation token, if any.
    """
    layout = detect_layout(primary_contents)
    if layout is PageLayout.SECTIONED:
        return _parse_sectioned(primary_contents[layout.value])
    if layout is PageLayout.GRID:
        return _parse_grid(primary_contents[layout.value])
    logger.info("Unknown results layout: %s", _first_key(primary_contents))
    return PageBatch()


def classify(entry: Any) -> Optional[ContinuationItemKind]:
    """Return which known shape a continuation entry has.

    Entries whose renderer body is not a mapping are unknown.
    """
    for kind in ContinuationItemKind:
        if _body(entry, kind.value) is not None:
            return kind
    return None


def parse_continuation_items(entries: Iterable[Any]) -> PageBatch:
    """Adapt the ``continuationItems`` of a follow-up response.

    Legacy sections contribute all of their items, grid entries one item each,
    and the last continuation marker provides the token. Unknown entries are
    skipped.
    """
    items: List[Any] = []
    marker = None
    for entry in entries:
        kind = classify(entry)
        if kind is ContinuationItemKind.LEGACY_SECTION:
            items.extend(_list(entry[kind.value], "contents"))
        elif kind in (ContinuationItemKind.GRID_ITEM, ContinuationItemKind.GRID_SECTION):
            content = entry[kind.value].get("content")
            if content is not None:
                items.append(content)
        elif kind is ContinuationItemKind.CONTINUATION:
            marker = entry
        else:
            logger.debug("Skipping unknown continuation item: %s", _first_key(entry))
    return PageBatch(items=items, continuation_token=continuation_token(marker))
