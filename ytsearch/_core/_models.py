"""Simple data models shared across the package."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ytsearch.config import DEFAULT_CLIENT


@dataclass(frozen=True)
class ClientInfo:
    """Client identity and locale sent with every API request."""

    gl: str = DEFAULT_CLIENT["gl"]
    hl: str = DEFAULT_CLIENT["hl"]
    utc_offset_minutes: int = DEFAULT_CLIENT["utcOffsetMinutes"]
    client_name: str = DEFAULT_CLIENT["clientName"]
    client_version: str = DEFAULT_CLIENT["clientVersion"]


@dataclass(frozen=True)
class ExecutionContext:
    """Per-session context carried unchanged through a pagination chain.

    Attributes:
        client: Locale and client identity.
        safety_mode: Whether restricted mode was requested.
    """

    client: ClientInfo = field(default_factory=ClientInfo)
    safety_mode: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Return the context in the shape the API expects."""
        user: Dict[str, Any] = {}
        if self.safety_mode:
            user["enableSafetyMode"] = True
        return {
            "client": {
                "utcOffsetMinutes": self.client.utc_offset_minutes,
                "gl": self.client.gl,
                "hl": self.client.hl,
                "clientName": self.client.client_name,
                "clientVersion": self.client.client_version,
            },
            "user": user,
            "request": {},
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ExecutionContext":
        client = payload.get("client") or {}
        user = payload.get("user") or {}
        return cls(
            client=ClientInfo(
                gl=client.get("gl", DEFAULT_CLIENT["gl"]),
                hl=client.get("hl", DEFAULT_CLIENT["hl"]),
                utc_offset_minutes=client.get(
                    "utcOffsetMinutes", DEFAULT_CLIENT["utcOffsetMinutes"]
                ),
                client_name=client.get("clientName", DEFAULT_CLIENT["clientName"]),
                client_version=client.get(
                    "clientVersion", DEFAULT_CLIENT["clientVersion"]
                ),
            ),
            safety_mode=bool(user.get("enableSafetyMode", False)),
        )


@dataclass(frozen=True)
class DecodedResponse:
    """What could be recovered from one search page body.

    ``document`` is ``None`` when the embedded state could not be extracted.
    """

    document: Optional[Any]
    api_key: str = ""
    context: ExecutionContext = field(default_factory=ExecutionContext)


@dataclass(frozen=True)
class PageBatch:
    """Raw items of one page and the token leading to the next one."""

    items: List[Mapping[str, Any]] = field(default_factory=list)
    continuation_token: Optional[str] = None


@dataclass(frozen=True)
class Budget:
    """Remaining item and page allowance; ``None`` means unbounded."""

    items: Optional[int] = None
    pages: Optional[int] = None

    @property
    def items_unbounded(self) -> bool:
        return self.items is None

    @property
    def exhausted(self) -> bool:
        return (self.items is not None and self.items < 1) or (
            self.pages is not None and self.pages < 1
        )

    def take(self, items: Sequence[Any]) -> List[Any]:
        """Truncate *items* to the remaining item allowance."""
        if self.items is None:
            return list(items)
        return list(items[: max(self.items, 0)])

    def spend(self, item_count: int) -> "Budget":
        """Return the budget left after a page yielding *item_count* items."""
        return replace(
            self,
            items=None if self.items is None else self.items - item_count,
            pages=None if self.pages is None else self.pages - 1,
        )

    def to_dict(self) -> Dict[str, Optional[int]]:
        return {"limit": self.items, "pages": self.pages}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Budget":
        return cls(items=as_limit(payload.get("limit")), pages=as_limit(payload.get("pages")))


def as_limit(value: Any) -> Optional[int]:
    """Map stored limits to ``int`` or ``None``; non-finite or non-numeric is unbounded."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isinf(value) or math.isnan(value):
        return None
    return int(value)
