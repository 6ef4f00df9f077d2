"""Map raw renderer records to plain result items.

Only the common result kinds are mapped; anything else maps to ``None`` and is
dropped by the pagination engine.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional
from urllib.parse import urljoin

from typing_extensions import TypeAlias

from ytsearch.config import BASE_URL
from ytsearch.extraction import parse_integer_from_text, parse_text

logger = logging.getLogger(__name__)

Item: TypeAlias = Dict[str, Any]
"""A mapped result item."""

ItemParser: TypeAlias = Callable[[Mapping[str, Any], Optional[Any]], Optional[Item]]


def prep_thumbnails(thumbnails: Optional[List[Mapping[str, Any]]]) -> List[Item]:
    """Resolve thumbnail URLs against the base URL and sort them widest first."""
    prepared = [
        {**thumb, "url": urljoin(BASE_URL, thumb["url"]) if thumb.get("url") else None}
        for thumb in thumbnails or []
    ]
    return sorted(prepared, key=lambda thumb: thumb.get("width") or 0, reverse=True)


def _thumbnails(node: Mapping[str, Any]) -> Item:
    thumbs = prep_thumbnails((node.get("thumbnail") or {}).get("thumbnails"))
    return {"best_thumbnail": thumbs[0] if thumbs else None, "thumbnails": thumbs}


def _author(node: Mapping[str, Any]) -> Optional[Item]:
    byline = node.get("ownerText") or node.get("shortBylineText") or node.get("longBylineText")
    runs = (byline or {}).get("runs") or []
    if not runs:
        return None
    endpoint = runs[0].get("navigationEndpoint") or {}
    browse = endpoint.get("browseEndpoint") or {}
    url = (endpoint.get("commandMetadata") or {}).get("webCommandMetadata", {}).get("url")
    return {
        "name": runs[0].get("text"),
        "channel_id": browse.get("browseId"),
        "url": urljoin(BASE_URL, url) if url else None,
    }


def _video(node: Mapping[str, Any], result: Optional[Any]) -> Item:
    badges = [
        (badge.get("metadataBadgeRenderer") or {}).get("label", "")
        for badge in node.get("badges") or []
    ]
    video_id = node.get("videoId")
    snippets = node.get("detailedMetadataSnippets") or [{}]
    views = node.get("viewCountText")
    return {
        "type": "video",
        "id": video_id,
        "title": parse_text(node.get("title"), ""),
        "url": urljoin(BASE_URL, f"watch?v={video_id}"),
        "author": _author(node),
        "description": parse_text(snippets[0].get("snippetText")),
        "duration": parse_text(node.get("lengthText")),
        "views": parse_integer_from_text(views) if views else None,
        "uploaded_at": parse_text(node.get("publishedTimeText")),
        "is_live": any(label.upper() == "LIVE" for label in badges),
        **_thumbnails(node),
    }


def _channel(node: Mapping[str, Any], result: Optional[Any]) -> Item:
    channel_id = node.get("channelId")
    return {
        "type": "channel",
        "id": channel_id,
        "name": parse_text(node.get("title"), ""),
        "url": urljoin(BASE_URL, f"channel/{channel_id}"),
        "subscribers": parse_text(node.get("subscriberCountText")),
        "description": parse_text(node.get("descriptionSnippet")),
        **_thumbnails(node),
    }


def _playlist(node: Mapping[str, Any], result: Optional[Any]) -> Item:
    playlist_id = node.get("playlistId")
    return {
        "type": "playlist",
        "id": playlist_id,
        "title": parse_text(node.get("title"), ""),
        "url": urljoin(BASE_URL, f"playlist?list={playlist_id}"),
        "owner": _author(node),
        "length": int(node["videoCount"]) if str(node.get("videoCount", "")).isdigit() else None,
    }


def _mix(node: Mapping[str, Any], result: Optional[Any]) -> Item:
    playlist_id = node.get("playlistId")
    return {
        "type": "mix",
        "id": playlist_id,
        "title": parse_text(node.get("title"), ""),
        "url": urljoin(BASE_URL, f"playlist?list={playlist_id}"),
        **_thumbnails(node),
    }


def _showing_results_for(node: Mapping[str, Any], result: Optional[Any]) -> None:
    corrected = parse_text(node.get("correctedQuery"))
    if result is not None and corrected:
        result.corrected_query = corrected
    return None


PARSERS: Dict[str, ItemParser] = {
    "videoRenderer": _video,
    "channelRenderer": _channel,
    "playlistRenderer": _playlist,
    "radioRenderer": _mix,
    "showingResultsForRenderer": _showing_results_for,
}


def parse_item(raw: Mapping[str, Any], result: Optional[Any] = None) -> Optional[Item]:
    """Map one raw result record to an item dictionary.

    Parameters:
        raw: A single-key mapping such as ``{"videoRenderer": {...}}``.
        result: The ``SearchResults`` being built for the first page, used by
            records that annotate the search itself.

    Returns:
        The item, or ``None`` when the record is not a result.
    """
    if not isinstance(raw, Mapping) or not raw:
        return None
    kind = next(iter(raw))
    parser = PARSERS.get(kind)
    if parser is None:
        logger.debug("Ignoring unsupported item type %s", kind)
        return None
    if not isinstance(raw[kind], Mapping):
        logger.debug("Ignoring %s without a renderer body", kind)
        return None
    return parser(raw[kind], result)
