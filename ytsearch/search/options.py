"""Validation and normalization of search arguments."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional
from urllib.parse import parse_qsl, urlparse

from ytsearch._core._models import Budget, as_limit
from ytsearch.config import (
    BASE_URL,
    DEFAULT_LIMIT,
    DEFAULT_QUERY,
    SAFE_SEARCH_COOKIE,
    Settings,
)
from ytsearch.exceptions import (
    InvalidQueryType,
    MissingQuery,
    MissingSearchTermInFilterLink,
)

KNOWN_OPTIONS = frozenset(
    {
        "limit",
        "pages",
        "safe_search",
        "gl",
        "hl",
        "utc_offset_minutes",
        "request_options",
    }
)


@dataclass(frozen=True)
class RequestOptions:
    """Transport options applied to every request of a search."""

    headers: Dict[str, str] = field(default_factory=dict)
    timeout: float = Settings.timeout
    max_retries: int = Settings.max_retries

    def to_dict(self) -> Dict[str, Any]:
        return {
            "headers": dict(self.headers),
            "timeout": self.timeout,
            "max_retries": self.max_retries,
        }

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "RequestOptions":
        payload = payload or {}
        settings = Settings.from_env()
        return cls(
            headers=dict(payload.get("headers") or {}),
            timeout=payload.get("timeout", settings.timeout),
            max_retries=payload.get("max_retries", settings.max_retries),
        )


@dataclass(frozen=True)
class SearchOptions:
    """Normalized arguments of one search call.

    Attributes:
        search: The plain search term.
        query: Query string parameters of the results page request.
        limit: Maximum number of items, ``None`` for unbounded.
        pages: Maximum number of pages, ``None`` for unbounded.
        safe_search: Whether restricted mode is requested.
        gl: Region override.
        hl: Language override.
        utc_offset_minutes: UTC offset override.
        request_options: Transport options.
    """

    search: str
    query: Dict[str, str] = field(default_factory=dict)
    limit: Optional[int] = DEFAULT_LIMIT
    pages: Optional[int] = None
    safe_search: bool = False
    gl: Optional[str] = None
    hl: Optional[str] = None
    utc_offset_minutes: Optional[int] = None
    request_options: RequestOptions = field(default_factory=RequestOptions)

    def budget(self) -> Budget:
        """Return the initial item and page allowance of this search."""
        return Budget(items=self.limit, pages=self.pages)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "search": self.search,
            "query": dict(self.query),
            "limit": self.limit,
            "pages": self.pages,
            "safe_search": self.safe_search,
            "gl": self.gl,
            "hl": self.hl,
            "utc_offset_minutes": self.utc_offset_minutes,
            "request_options": self.request_options.to_dict(),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SearchOptions":
        query = dict(payload.get("query") or {})
        return cls(
            search=payload.get("search") or query.get("search_query", ""),
            query=query,
            limit=as_limit(payload.get("limit")),
            pages=as_limit(payload.get("pages")),
            safe_search=bool(payload.get("safe_search", False)),
            gl=payload.get("gl"),
            hl=payload.get("hl"),
            utc_offset_minutes=payload.get("utc_offset_minutes"),
            request_options=RequestOptions.from_dict(payload.get("request_options")),
        )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_count(value: Any) -> Optional[int]:
    # fractional counts round up: 5.7 allows a sixth item
    if not _is_number(value) or math.isnan(value) or math.isinf(value):
        return None
    return math.ceil(value)


def _resolve_limits(limit: Any, pages: Any) -> tuple:
    """Decide the (limit, pages) pairing; ``None`` stands for unbounded.

    A positive page count disables the item limit. An invalid item limit falls
    back to the default with no page limit. Otherwise a page count set by the
    caller is kept as given, even when it is not positive.
    """
    if _is_number(pages) and not math.isnan(pages) and pages > 0:
        return None, _as_count(pages)
    if not _is_number(limit) or math.isnan(limit) or limit <= 0:
        return DEFAULT_LIMIT, None
    return _as_count(limit), _as_count(pages)


def _with_safe_search_cookie(headers: Dict[str, str]) -> Dict[str, str]:
    headers = dict(headers)
    cookie = headers.pop("Cookie", None) or headers.pop("cookie", None)
    if isinstance(cookie, (list, tuple)):
        cookie = "; ".join(cookie)
    headers["Cookie"] = f"{cookie}; {SAFE_SEARCH_COOKIE}" if cookie else SAFE_SEARCH_COOKIE
    return headers


def _query_from(search_string: str) -> Dict[str, str]:
    parsed = urlparse(search_string)
    params = dict(parse_qsl(parsed.query, keep_blank_values=True))
    if search_string.startswith(BASE_URL) and parsed.path == "/results" and "sp" in params:
        if not params.get("search_query"):
            raise MissingSearchTermInFilterLink(search_string)
        return params
    return {"search_query": search_string}


def normalize_options(
    search_string: Any, options: Optional[Mapping[str, Any]] = None
) -> SearchOptions:
    """Validate *search_string* and merge *options* with the defaults.

    Parameters:
        search_string: A search term, or a results URL carrying a filter (``sp``).
        options: Any of ``limit``, ``pages``, ``safe_search``, ``gl``, ``hl``,
            ``utc_offset_minutes`` and ``request_options`` (a mapping with
            ``headers``, ``timeout`` and ``max_retries``).

    Returns:
        The normalized ``SearchOptions``.

    Raises:
        MissingQuery: if the search string is empty.
        InvalidQueryType: if the search string is not a ``str``.
        MissingSearchTermInFilterLink: if a filter link lacks ``search_query``.
        ValueError: if an unknown option is passed.
    """
    if not search_string:
        raise MissingQuery()
    if not isinstance(search_string, str):
        raise InvalidQueryType(search_string)

    options = dict(options or {})
    unknown = sorted(set(options) - KNOWN_OPTIONS)
    if unknown:
        raise ValueError(f"Unknown option(s): {', '.join(unknown)}")

    limit, pages = _resolve_limits(options.get("limit", DEFAULT_LIMIT), options.get("pages"))

    safe_search = options.get("safe_search", False)
    if not isinstance(safe_search, bool):
        safe_search = False

    request_options = RequestOptions.from_dict(options.get("request_options"))
    if safe_search:
        request_options = RequestOptions(
            headers=_with_safe_search_cookie(request_options.headers),
            timeout=request_options.timeout,
            max_retries=request_options.max_retries,
        )

    query = _query_from(search_string)
    search = query["search_query"]
    query = {**DEFAULT_QUERY, **query}
    if options.get("gl"):
        query["gl"] = options["gl"]
    if options.get("hl"):
        query["hl"] = options["hl"]

    return SearchOptions(
        search=search,
        query=query,
        limit=limit,
        pages=pages,
        safe_search=safe_search,
        gl=options.get("gl"),
        hl=options.get("hl"),
        utc_offset_minutes=options.get("utc_offset_minutes"),
        request_options=request_options,
    )
