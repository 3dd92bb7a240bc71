"""HTTP and feed-parsing clients handed to triggers."""

from __future__ import annotations

import logging
from typing import Any

import feedparser
import requests

logger = logging.getLogger(__name__)


def build_http_session(user_agent: str) -> requests.Session:
    """Return the shared session triggers use for plain HTTP calls."""

    session = requests.Session()
    session.headers.update({"User-Agent": user_agent})
    return session


class FeedParser:
    """Fetch RSS/Atom feeds through a session and parse them with feedparser."""

    def __init__(self, session: requests.Session, *, timeout: float = 30.0) -> None:
        self._session = session
        self._timeout = timeout

    def parse_string(self, text: str | bytes) -> Any:
        return feedparser.parse(text)

    def parse_url(self, url: str) -> Any:
        logger.debug("Fetching feed", extra={"url": url})
        resp = self._session.get(url, timeout=self._timeout)
        resp.raise_for_status()
        return feedparser.parse(resp.content)
