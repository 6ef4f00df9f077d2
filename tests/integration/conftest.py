import os

import pytest
import requests

# =============================================================================
# Live YouTube access
# =============================================================================


def pytest_collection_modifyitems(config, items):
    """Skip tests hitting youtube.com unless ``YTSEARCH_LIVE_TESTS=1``."""
    if os.environ.get("YTSEARCH_LIVE_TESTS") == "1":
        return
    skip_live = pytest.mark.skip(reason="set YTSEARCH_LIVE_TESTS=1 to run")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


@pytest.fixture
def session():
    """A session with a browser-like user agent, as the site expects one."""
    with requests.Session() as s:
        s.headers["User-Agent"] = (
            "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
        )
        yield s
