"""Search refinement filters ("Upload date", "Type", "Duration", ...)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urljoin

from ytsearch.config import BASE_URL
from ytsearch.extraction import parse_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Filter:
    """One selectable filter option.

    Attributes:
        name: Display label.
        active: True when this option is the currently applied one.
        url: Search URL applying this option, ``None`` when it is active.
        description: Tooltip text, if any.
    """

    name: str
    active: bool
    url: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "active": self.active,
            "url": self.url,
            "description": self.description,
        }


class FilterGroup(dict):
    """Filters of one category keyed by name, with the active one on ``active``."""

    def __init__(self) -> None:
        super().__init__()
        self.active: Optional[Filter] = None

    def add(self, item: Filter) -> None:
        if item.active:
            self.active = item
        self[item.name] = item


class FilterCatalog(dict):
    """Ordered mapping of category name to ``FilterGroup``."""

    def active_filters(self) -> List[Filter]:
        """Return the active filter of every category that has one."""
        return [group.active for group in self.values() if group.active is not None]

    def to_dict(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        return {
            category: {name: item.to_dict() for name, item in group.items()}
            for category, group in self.items()
        }


def _dig(node: Any, *path: str) -> Any:
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def _find_groups(document: Mapping[str, Any]) -> List[Any]:
    primary = _dig(document, "contents", "twoColumnSearchResultsRenderer", "primaryContents")
    if isinstance(primary, Mapping):
        wrapper = primary.get("sectionListRenderer") or primary.get("richGridRenderer")
        if isinstance(wrapper, Mapping):
            submenu = wrapper.get("subMenu") or wrapper.get("submenu")
            groups = _dig(submenu, "searchSubMenuRenderer", "groups")
            if isinstance(groups, list):
                return groups

    popup = _dig(
        document,
        "header",
        "searchHeaderRenderer",
        "searchFilterButton",
        "buttonRenderer",
        "command",
        "openPopupAction",
        "popup",
    )
    groups = _dig(popup, "searchFilterOptionsDialogRenderer", "groups")
    return groups if isinstance(groups, list) else []


def parse_filter(renderer: Mapping[str, Any]) -> Filter:
    """Build a ``Filter`` from a ``searchFilterRenderer`` node.

    An option without a navigation endpoint is the one currently applied.
    """
    endpoint = renderer.get("navigationEndpoint")
    is_set = not endpoint
    url = None
    if not is_set:
        path = _dig(endpoint, "commandMetadata", "webCommandMetadata", "url")
        url = urljoin(BASE_URL, path) if path else None
    return Filter(
        name=parse_text(renderer.get("label"), "") or "",
        active=is_set,
        url=url,
        description=renderer.get("tooltip"),
    )


def parse_filters(document: Optional[Mapping[str, Any]]) -> FilterCatalog:
    """Return the filter catalog of an initial data document.

    Filters live either in an inline sub menu or in the search header's popup
    dialog, depending on the layout. A document with neither yields an empty
    catalog.
    """
    catalog = FilterCatalog()
    if not isinstance(document, Mapping):
        return catalog

    for group in _find_groups(document):
        group_renderer = _dig(group, "searchFilterGroupRenderer")
        if not isinstance(group_renderer, Mapping):
            continue
        parsed = FilterGroup()
        for entry in group_renderer.get("filters") or []:
            renderer = _dig(entry, "searchFilterRenderer")
            if isinstance(renderer, Mapping):
                parsed.add(parse_filter(renderer))
        title = parse_text(group_renderer.get("title"), "Unknown Category")
        catalog[title] = parsed

    logger.debug("Parsed %s filter groups", len(catalog))
    return catalog
