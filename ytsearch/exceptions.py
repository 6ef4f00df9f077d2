"""Exception hierarchy for ytsearch.

All package errors inherit from ``YTSearchError`` so callers can catch the base
class for any failure, or a specific subclass for targeted handling.
"""

from __future__ import annotations


class YTSearchError(Exception):
    """Base exception for all ytsearch errors."""


class ExtractionError(YTSearchError):
    """An embedded JSON value could not be cut out of a larger text."""


class UnsupportedRoot(ExtractionError):
    """The text does not start with ``[`` or ``{``."""

    def __init__(self, found: str) -> None:
        super().__init__(
            "Can't cut unsupported JSON (need to begin with [ or { ) "
            f"but got: {found!r}"
        )
        self.found = found


class UnterminatedStructure(ExtractionError):
    """The text ended before the opening bracket was balanced."""

    def __init__(self) -> None:
        super().__init__(
            "Can't cut unsupported JSON (no matching closing bracket found)"
        )


class NoDocumentFound(YTSearchError):
    """No embedded state document could be found in the search page."""


class UpstreamError(YTSearchError):
    """YouTube answered with an error payload instead of results."""

    def __init__(self, message: str) -> None:
        super().__init__(f"API-Error: {message}")
        self.message = message


class DescriptorError(YTSearchError, ValueError):
    """A continuation descriptor cannot be resumed."""


class InvalidDescriptor(DescriptorError):
    """The descriptor does not have the expected shape."""


class BudgetMismatch(DescriptorError):
    """The descriptor belongs to an item-limited search."""


class ArgumentError(YTSearchError, ValueError):
    """Invalid arguments were passed to a search call."""


class MissingQuery(ArgumentError):
    """The search string is empty or missing."""

    def __init__(self) -> None:
        super().__init__("search string is mandatory")


class InvalidQueryType(ArgumentError, TypeError):
    """The search string is not a ``str``."""

    def __init__(self, value: object) -> None:
        super().__init__(
            f"search string must be of type string, got {type(value).__name__}"
        )


class MissingSearchTermInFilterLink(ArgumentError):
    """A filter link was passed without a ``search_query`` parameter."""

    def __init__(self, url: str) -> None:
        super().__init__(f'filter links have to include a "search_query" query: {url}')
        self.url = url
