"""Decode a search page body into its embedded state, API key and context."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Any, Optional

from ytsearch._core._models import ClientInfo, DecodedResponse, ExecutionContext
from ytsearch.config import (
    API_KEY_ANCHORS,
    CLIENT_VERSION_ANCHORS,
    INITIAL_DATA_ANCHOR,
)
from ytsearch.exceptions import ExtractionError
from ytsearch.extraction import between, json_after

logger = logging.getLogger(__name__)


def _first_between(body: str, anchors: tuple, right: str = '"') -> str:
    for anchor in anchors:
        value = between(body, anchor, right)
        if value:
            return value
    return ""


def build_context(client_version: str, options: Optional[Any] = None) -> ExecutionContext:
    """Overlay the caller's locale and safe search choice onto the default context.

    Parameters:
        client_version: Version recovered from the page.
        options: A ``SearchOptions`` instance or ``None``.

    Returns:
        The execution context to send with follow-up requests.
    """
    client = ClientInfo(client_version=client_version)
    overrides = {}
    for name in ("gl", "hl", "utc_offset_minutes"):
        value = getattr(options, name, None)
        if value:
            overrides[name] = value
    if overrides:
        client = replace(client, **overrides)
    return ExecutionContext(
        client=client, safety_mode=bool(getattr(options, "safe_search", False))
    )


def parse_body(body: str, options: Optional[Any] = None) -> DecodedResponse:
    """Extract the state document, API key and execution context from *body*.

    Never raises on malformed input: a document that cannot be extracted is
    reported as ``None`` and missing tokens as empty strings.

    Parameters:
        body: Full text of a search results page.
        options: Optional ``SearchOptions`` providing context overrides.

    Returns:
        A ``DecodedResponse``.
    """
    document = None
    try:
        document = json_after(body, INITIAL_DATA_ANCHOR)
    except (ExtractionError, json.JSONDecodeError) as exc:
        logger.debug("Could not extract initial data: %s", exc)

    api_key = _first_between(body, API_KEY_ANCHORS)
    client_version = _first_between(body, CLIENT_VERSION_ANCHORS)
    if not api_key:
        logger.debug("No API key found in response body")

    return DecodedResponse(
        document=document,
        api_key=api_key,
        context=build_context(client_version, options),
    )
