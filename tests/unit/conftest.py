"""Pytest configuration and shared fixtures for unit tests.

YouTube pages are built from small synthetic documents that mirror the shapes
the live site serves: the sectioned and grid layouts of the first results
page, and the continuation answers of the internal search API.
"""

import json
from typing import Any, Dict, List, Optional

import pytest
import responses

from ytsearch.config import BASE_API_URL, BASE_SEARCH_URL

API_KEY = "AIzaTestKey"
CLIENT_VERSION = "2.20240101.00.00"


class YouTubePages:
    """Builders for synthetic YouTube documents."""

    api_key = API_KEY
    client_version = CLIENT_VERSION

    @staticmethod
    def video(video_id: str, title: Optional[str] = None) -> Dict[str, Any]:
        return {
            "videoRenderer": {
                "videoId": video_id,
                "title": {"runs": [{"text": title or f"Video {video_id}"}]},
                "lengthText": {"simpleText": "3:21"},
                "viewCountText": {"simpleText": "1,234 views"},
                "ownerText": {
                    "runs": [
                        {
                            "text": "Some Channel",
                            "navigationEndpoint": {
                                "browseEndpoint": {"browseId": "UC123"},
                                "commandMetadata": {
                                    "webCommandMetadata": {"url": "/@somechannel"}
                                },
                            },
                        }
                    ]
                },
                "thumbnail": {
                    "thumbnails": [
                        {"url": "https://i.ytimg.com/vi/small.jpg", "width": 120},
                        {"url": "https://i.ytimg.com/vi/large.jpg", "width": 720},
                    ]
                },
            }
        }

    @staticmethod
    def marker(token: str) -> Dict[str, Any]:
        return {
            "continuationItemRenderer": {
                "continuationEndpoint": {"continuationCommand": {"token": token}}
            }
        }

    @classmethod
    def sectioned(
        cls,
        items: List[Dict[str, Any]],
        token: Optional[str] = None,
        groups: Optional[List[Dict[str, Any]]] = None,
        estimated: str = "1000",
    ) -> Dict[str, Any]:
        contents: List[Dict[str, Any]] = [{"itemSectionRenderer": {"contents": items}}]
        if token:
            contents.append(cls.marker(token))
        renderer: Dict[str, Any] = {"contents": contents}
        if groups is not None:
            renderer["subMenu"] = {"searchSubMenuRenderer": {"groups": groups}}
        return {
            "estimatedResults": estimated,
            "contents": {
                "twoColumnSearchResultsRenderer": {
                    "primaryContents": {"sectionListRenderer": renderer}
                }
            },
        }

    @classmethod
    def grid(
        cls, items: List[Dict[str, Any]], token: Optional[str] = None
    ) -> Dict[str, Any]:
        contents: List[Dict[str, Any]] = [
            {"richItemRenderer": {"content": item}} for item in items
        ]
        if token:
            contents.append(cls.marker(token))
        return {
            "contents": {
                "twoColumnSearchResultsRenderer": {
                    "primaryContents": {"richGridRenderer": {"contents": contents}}
                }
            }
        }

    @staticmethod
    def filter_group(title: str, filters: List[Dict[str, Any]]) -> Dict[str, Any]:
        return {
            "searchFilterGroupRenderer": {
                "title": {"simpleText": title},
                "filters": filters,
            }
        }

    @staticmethod
    def filter(label: str, url: Optional[str] = None) -> Dict[str, Any]:
        renderer: Dict[str, Any] = {
            "label": {"simpleText": label},
            "tooltip": f"Search for {label}",
        }
        if url is not None:
            renderer["navigationEndpoint"] = {
                "commandMetadata": {"webCommandMetadata": {"url": url}}
            }
        return {"searchFilterRenderer": renderer}

    @classmethod
    def html(cls, document: Any) -> str:
        return (
            "<!DOCTYPE html><html><head><script>"
            f'ytcfg.set({{"INNERTUBE_API_KEY":"{cls.api_key}",'
            f'"INNERTUBE_CONTEXT_CLIENT_VERSION":"{cls.client_version}"}});'
            "</script></head><body><script>"
            f"var ytInitialData = {json.dumps(document)};"
            "</script></body></html>"
        )

    @classmethod
    def continuation(
        cls, items: List[Dict[str, Any]], token: Optional[str] = None
    ) -> Dict[str, Any]:
        entries: List[Dict[str, Any]] = [
            {"itemSectionRenderer": {"contents": items}}
        ]
        if token:
            entries.append(cls.marker(token))
        return {
            "onResponseReceivedCommands": [
                {"appendContinuationItemsAction": {"continuationItems": entries}}
            ]
        }


@pytest.fixture
def pages() -> YouTubePages:
    """Return the synthetic page builders."""
    return YouTubePages()


@pytest.fixture
def mocked_responses():
    """Activate ``responses`` for the test and yield the mock."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def serve(mocked_responses, pages):
    """Register a results page and follow-up API answers in call order.

    ``serve(first_document, *continuation_payloads)`` registers the HTML of the
    first page and one POST answer per payload.
    """

    def register(document: Any, *continuations: Dict[str, Any]) -> None:
        mocked_responses.add(
            responses.GET, BASE_SEARCH_URL, body=pages.html(document), status=200
        )
        for payload in continuations:
            mocked_responses.add(responses.POST, BASE_API_URL, json=payload, status=200)

    return register
