import json
from unittest.mock import patch

import pytest
import requests
import responses

from ytsearch._core._request import RequestConfig, get_text, post_json, request
from ytsearch.exceptions import UpstreamError
from ytsearch.search.options import RequestOptions

URL = "https://www.youtube.com/youtubei/v1/search"


@responses.activate
def test_request_retries_server_errors() -> None:
    responses.add(responses.GET, URL, status=503)
    responses.add(responses.GET, URL, status=200, body="ok")

    resp = request(RequestConfig(url=URL, max_retries=2, backoff_factor=0))

    assert resp.text == "ok"
    assert len(responses.calls) == 2


@responses.activate
def test_request_gives_up_after_max_retries() -> None:
    responses.add(responses.GET, URL, status=429)

    with pytest.raises(requests.HTTPError):
        request(RequestConfig(url=URL, max_retries=1, backoff_factor=0))
    assert len(responses.calls) == 2


@responses.activate
def test_request_does_not_retry_client_errors() -> None:
    responses.add(responses.GET, URL, status=404)

    with pytest.raises(requests.HTTPError):
        request(RequestConfig(url=URL, max_retries=3, backoff_factor=0))
    assert len(responses.calls) == 1


@responses.activate
def test_request_backs_off_between_attempts() -> None:
    responses.add(responses.GET, URL, status=500)
    responses.add(responses.GET, URL, status=500)
    responses.add(responses.GET, URL, status=200)

    with patch("ytsearch._core._request.time.sleep") as sleep:
        request(RequestConfig(url=URL, max_retries=2, backoff_factor=0.5))

    assert [c.args[0] for c in sleep.call_args_list] == [0.5, 1.0]


@responses.activate
def test_request_uses_session() -> None:
    responses.add(responses.GET, URL, status=200)
    session = requests.Session()

    with patch.object(session, "request", wraps=session.request) as spy:
        request(RequestConfig(url=URL), session)

    spy.assert_called_once()


@responses.activate
def test_get_text_sends_headers() -> None:
    responses.add(responses.GET, URL, status=200, body="<html></html>")
    options = RequestOptions(headers={"Cookie": "PREF=f2=8000000"}, max_retries=0)

    assert get_text(URL, {"search_query": "cats"}, options) == "<html></html>"

    sent = responses.calls[0].request
    assert sent.headers["Cookie"] == "PREF=f2=8000000"
    assert "search_query=cats" in sent.url


@responses.activate
def test_post_json_round_trip() -> None:
    responses.add(responses.POST, URL, status=200, json={"ok": True})

    answer = post_json(URL, {"continuation": "T"}, {"key": "K"}, RequestOptions())

    assert answer == {"ok": True}
    sent = responses.calls[0].request
    assert json.loads(sent.body) == {"continuation": "T"}
    assert sent.headers["Content-Type"] == "application/json"
    assert sent.url.endswith("?key=K")


@responses.activate
def test_post_json_rejects_non_json() -> None:
    responses.add(responses.POST, URL, status=200, body="<html>oops</html>")

    with pytest.raises(UpstreamError, match="invalid JSON"):
        post_json(URL, {}, {}, RequestOptions(max_retries=0))
