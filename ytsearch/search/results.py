"""Result container returned by searches and continuations."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from ytsearch.search.continuation import ContinuationDescriptor
from ytsearch.search.filters import Filter


@dataclass
class SearchResults:
    """Items of a search together with what YouTube reported about it.

    The container behaves like a read-only sequence of items:

        >>> results = ytsearch.search("cats", limit=5)  # doctest: +SKIP
        >>> for item in results:  # doctest: +SKIP
        ...     print(item["title"])

    Attributes:
        original_query: The search term as requested.
        corrected_query: The term YouTube actually searched for.
        results: Estimated number of matching results.
        active_filters: Filters applied to the search.
        refinements: Suggested related searches.
        items: Mapped result items in retrieval order.
        continuation: Descriptor to fetch further pages, if the search was
            not limited by item count and more pages exist.
    """

    original_query: str
    corrected_query: str
    results: int = 0
    active_filters: List[Filter] = field(default_factory=list)
    refinements: List[Dict[str, str]] = field(default_factory=list)
    items: List[Dict[str, Any]] = field(default_factory=list)
    continuation: Optional[ContinuationDescriptor] = None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self.items)

    def __getitem__(self, index: Any) -> Any:
        return self.items[index]

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(query={self.original_query!r}, "
            f"total={self.results}, loaded={len(self.items)}, "
            f"has_continuation={self.continuation is not None})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the results to plain, JSON serializable values."""
        return {
            "original_query": self.original_query,
            "corrected_query": self.corrected_query,
            "results": self.results,
            "active_filters": [f.to_dict() for f in self.active_filters],
            "refinements": list(self.refinements),
            "items": list(self.items),
            "continuation": self.continuation.to_dict() if self.continuation else None,
        }

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), **kwargs)
