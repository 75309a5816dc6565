"""Per-widget cache of fetched response bodies keyed by URL."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class RequestCache:
    """Process-lifetime mapping from resolved URL to response body.

    Entries are written only after a successful fetch and never expire, so a
    hit always short-circuits network I/O for the lifetime of the widget.
    """

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    def get(self, url: str) -> str | None:
        body = self._entries.get(url)
        if body is not None:
            logger.debug("Request cache hit for %s", url)
        return body

    def put(self, url: str, body: str) -> None:
        self._entries[url] = body

    def __contains__(self, url: object) -> bool:
        return url in self._entries

    def __len__(self) -> int:
        return len(self._entries)
