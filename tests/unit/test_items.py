from ytsearch.items import parse_item, prep_thumbnails
from ytsearch.search.results import SearchResults


class TestParseItem:
    """Test mapping raw renderers to result items."""

    def test_video(self, pages) -> None:
        item = parse_item(pages.video("abc123", "Cute cats"))

        assert item["type"] == "video"
        assert item["id"] == "abc123"
        assert item["title"] == "Cute cats"
        assert item["url"] == "https://www.youtube.com/watch?v=abc123"
        assert item["author"] == {
            "name": "Some Channel",
            "channel_id": "UC123",
            "url": "https://www.youtube.com/@somechannel",
        }
        assert item["duration"] == "3:21"
        assert item["views"] == 1234
        assert item["is_live"] is False
        assert item["best_thumbnail"]["url"] == "https://i.ytimg.com/vi/large.jpg"
        assert [t["width"] for t in item["thumbnails"]] == [720, 120]

    def test_live_video(self, pages) -> None:
        raw = pages.video("live1")
        raw["videoRenderer"]["badges"] = [{"metadataBadgeRenderer": {"label": "LIVE"}}]
        del raw["videoRenderer"]["viewCountText"]

        item = parse_item(raw)

        assert item["is_live"] is True
        assert item["views"] is None

    def test_channel(self) -> None:
        item = parse_item(
            {
                "channelRenderer": {
                    "channelId": "UCcats",
                    "title": {"simpleText": "Cats"},
                    "subscriberCountText": {"simpleText": "1M subscribers"},
                }
            }
        )

        assert item["type"] == "channel"
        assert item["name"] == "Cats"
        assert item["url"] == "https://www.youtube.com/channel/UCcats"
        assert item["subscribers"] == "1M subscribers"

    def test_playlist(self) -> None:
        item = parse_item(
            {
                "playlistRenderer": {
                    "playlistId": "PL1",
                    "title": {"simpleText": "Cat mix"},
                    "videoCount": "12",
                }
            }
        )

        assert item["type"] == "playlist"
        assert item["url"] == "https://www.youtube.com/playlist?list=PL1"
        assert item["length"] == 12
        assert item["owner"] is None

    def test_mix(self) -> None:
        item = parse_item({"radioRenderer": {"playlistId": "RD1", "title": {"simpleText": "Mix"}}})
        assert (item["type"], item["id"]) == ("mix", "RD1")

    def test_unsupported_types(self) -> None:
        assert parse_item({"adSlotRenderer": {}}) is None
        assert parse_item({}) is None
        assert parse_item("nope") is None
        assert parse_item({"videoRenderer": None}) is None
        assert parse_item({"channelRenderer": ["x"]}) is None

    def test_showing_results_for_corrects_query(self) -> None:
        result = SearchResults(original_query="cta", corrected_query="cta")
        raw = {
            "showingResultsForRenderer": {
                "correctedQuery": {"runs": [{"text": "cat"}]},
            }
        }

        assert parse_item(raw, result) is None
        assert result.corrected_query == "cat"


def test_prep_thumbnails_resolves_relative_urls() -> None:
    thumbs = prep_thumbnails(
        [{"url": "/img/a.jpg", "width": 10}, {"url": "//i.ytimg.com/b.jpg", "width": 20}]
    )

    assert thumbs == [
        {"url": "https://i.ytimg.com/b.jpg", "width": 20},
        {"url": "https://www.youtube.com/img/a.jpg", "width": 10},
    ]
    assert prep_thumbnails(None) == []
