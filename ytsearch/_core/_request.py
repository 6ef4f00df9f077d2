"""HTTP transport: a retrying request helper and the GET/POST calls built on it."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Mapping, MutableMapping, Optional

import requests

from ytsearch.exceptions import UpstreamError

log = logging.getLogger(__name__)


@dataclass
class RequestConfig:
    """Configuration for a single request."""

    method: str = "GET"
    url: str = ""
    params: Mapping[str, Any] = field(default_factory=dict)
    headers: MutableMapping[str, str] = field(default_factory=dict)
    body: Optional[str] = None
    timeout: float = 30
    max_retries: int = 3
    backoff_factor: float = 0.5


def _should_retry(resp: requests.Response) -> bool:
    """Return True for status codes that merit a retry."""
    return resp.status_code >= 500 or resp.status_code == 429


def _backoff(config: RequestConfig, attempt: int) -> None:
    time.sleep(config.backoff_factor * (2 ** (attempt - 1)))


def request(
    config: RequestConfig, session: Optional[requests.Session] = None
) -> requests.Response:
    """Send one HTTP request, retrying connection errors, 5xx and 429 answers.

    Args:
        config: Fully populated ``RequestConfig`` instance.
        session: Session to send the request through; a plain
            ``requests.request`` call is used when omitted.

    Returns:
        The first non-retryable ``requests.Response``.

    Raises:
        requests.HTTPError: for 4xx answers, or once retries are used up.
        requests.RequestException: if the last attempt failed to connect.
    """
    send = session.request if session is not None else requests.request
    headers = dict(config.headers)
    attempts = config.max_retries + 1

    for attempt in range(1, attempts + 1):
        last = attempt == attempts
        try:
            resp = send(
                method=config.method,
                url=config.url,
                params=config.params,
                headers=headers,
                data=config.body,
                timeout=config.timeout,
            )
        except requests.RequestException as exc:
            log.warning(
                "%s %s failed (attempt %s): %s", config.method, config.url, attempt, exc
            )
            if last:
                raise
            _backoff(config, attempt)
            continue

        if _should_retry(resp) and not last:
            log.info("Retryable response %s (attempt %s)", resp.status_code, attempt)
            _backoff(config, attempt)
            continue

        resp.raise_for_status()
        return resp

    raise RuntimeError("max_retries must not be negative")


def get_text(
    url: str,
    params: Mapping[str, Any],
    request_options: Any,
    session: Optional[requests.Session] = None,
) -> str:
    """GET *url* and return the full response body as text."""
    config = RequestConfig(
        method="GET",
        url=url,
        params=params,
        headers=dict(request_options.headers),
        timeout=request_options.timeout,
        max_retries=request_options.max_retries,
    )
    return request(config, session).text


def post_json(
    url: str,
    payload: Mapping[str, Any],
    params: Mapping[str, Any],
    request_options: Any,
    session: Optional[requests.Session] = None,
) -> Any:
    """POST *payload* as JSON to *url* and decode the JSON answer.

    Raises:
        UpstreamError: if the response body is not valid JSON.
    """
    headers = dict(request_options.headers)
    headers.setdefault("Content-Type", "application/json")
    config = RequestConfig(
        method="POST",
        url=url,
        params=params,
        headers=headers,
        body=json.dumps(payload),
        timeout=request_options.timeout,
        max_retries=request_options.max_retries,
    )
    resp = request(config, session)
    try:
        return json.loads(resp.text)
    except json.JSONDecodeError as exc:
        raise UpstreamError(f"invalid JSON in response from {url}") from exc
