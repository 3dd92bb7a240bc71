"""Test configuration and fixtures."""

from pathlib import Path

import pytest
import requests

from workflow_triggers.cache import CacheFactory
from workflow_triggers.clients import FeedParser
from workflow_triggers.events import TriggerEvent
from workflow_triggers.helpers import HelperContext


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Provide a temporary cache directory."""
    cache = tmp_path / "cache"
    cache.mkdir()
    return cache


@pytest.fixture
def helper_context(cache_dir: Path) -> HelperContext:
    """Provide a helper context that never touches the real environment."""
    session = requests.Session()
    return HelperContext(
        default_log_level="warn",
        cache_factory=CacheFactory(cache_dir),
        http=session,
        feed_parser=FeedParser(session, timeout=5.0),
        app_name="Test",
    )


@pytest.fixture
def schedule_event() -> TriggerEvent:
    return TriggerEvent(type="schedule")


@pytest.fixture
def webhook_event() -> TriggerEvent:
    return TriggerEvent(type="webhook", payload={"body": {}})


@pytest.fixture
def workflow_file(tmp_path: Path) -> Path:
    """Write a small workflow under `<tmp>/workflows/feed.yml`."""
    path = tmp_path / "workflows" / "feed.yml"
    path.parent.mkdir()
    path.write_text(
        "\n".join(
            [
                "on:",
                "  rss:",
                "    url: ${{ env.FEED_URL }}",
                "    logLevel: debug",
                "    config:",
                "      every: 10",
                "  webhook:",
                "    config:",
                "      shouldDeduplicate: true",
                "jobs:",
                "  notify:",
                "    runs-on: ubuntu-latest",
                "",
            ]
        ),
        encoding="utf-8",
    )
    return path
