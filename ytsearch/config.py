"""Endpoints, defaults and environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

BASE_URL = "https://www.youtube.com/"
BASE_SEARCH_URL = "https://www.youtube.com/results"
BASE_API_URL = "https://www.youtube.com/youtubei/v1/search"

DEFAULT_LIMIT = 100
DEFAULT_QUERY: Dict[str, str] = {"gl": "US", "hl": "en"}
DEFAULT_CLIENT: Dict[str, Any] = {
    "utcOffsetMinutes": 0,
    "gl": "US",
    "hl": "en",
    "clientName": "WEB",
    "clientVersion": "",
}

# Provider convention, must be sent unchanged.
SAFE_SEARCH_COOKIE = "PREF=f2=8000000"

INITIAL_DATA_ANCHOR = "var ytInitialData = "
API_KEY_ANCHORS = ('INNERTUBE_API_KEY":"', 'innertubeApiKey":"')
CLIENT_VERSION_ANCHORS = (
    'INNERTUBE_CONTEXT_CLIENT_VERSION":"',
    'innertube_context_client_version":"',
)

FIRST_PAGE_ATTEMPTS = 3


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    """Process-wide defaults, overridable through ``YTSEARCH_*`` variables.

    Attributes:
        timeout: Seconds to wait for a single HTTP response.
        max_retries: Transport retries for 5xx/429 responses.
        log_level: Level name used by the command line entry point.
    """

    timeout: int = 30
    max_retries: int = 3
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from the environment.

        Parameters:
            environ: Mapping to read from, defaults to ``os.environ``.

        Returns:
            A new ``Settings`` instance.
        """
        environ = os.environ if environ is None else environ
        return cls(
            timeout=_env_int(environ, "YTSEARCH_TIMEOUT", cls.timeout),
            max_retries=_env_int(environ, "YTSEARCH_MAX_RETRIES", cls.max_retries),
            log_level=environ.get("YTSEARCH_LOG_LEVEL", cls.log_level).upper(),
        )
