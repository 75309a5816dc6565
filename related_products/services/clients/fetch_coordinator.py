"""Single-flight HTTP access to the storefront on behalf of one widget."""

from __future__ import annotations

import asyncio
import logging
import time

import httpx
from pydantic import BaseModel

from related_products.config import settings

logger = logging.getLogger(__name__)


class FetchResult(BaseModel):
    """Outcome of one storefront request."""

    url: str
    status_code: int = 0
    body: str = ""
    error: str | None = None
    fetch_time: float = 0.0

    @property
    def success(self) -> bool:
        """True when the request completed with a 2xx status."""
        return self.error is None and 200 <= self.status_code < 300


class FetchCoordinator:
    """Issues at most one outstanding request at a time.

    Starting a fetch cancels the one in flight; the superseded caller gets a
    failed FetchResult and never sees the response, even when the request
    had already completed before it was superseded. Non-2xx statuses,
    transport errors and cancellation are all reported as failures.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client
        self._active: asyncio.Task[httpx.Response] | None = None

    @property
    def in_flight(self) -> bool:
        return self._active is not None and not self._active.done()

    def cancel(self) -> None:
        """Abort the outstanding request, if any."""
        active, self._active = self._active, None
        if active is not None and not active.done():
            logger.debug("Cancelling superseded storefront request")
            active.cancel()

    async def fetch(self, url: str) -> FetchResult:
        self.cancel()
        task = asyncio.ensure_future(self._client.get(url))
        self._active = task
        start_time = time.monotonic()

        try:
            await asyncio.wait({task})
            # A newer fetch or cancel() took over while this one was pending.
            superseded = self._active is not task
        except asyncio.CancelledError:
            # The caller itself was cancelled: abort the request and propagate.
            task.cancel()
            raise
        finally:
            if self._active is task:
                self._active = None

        fetch_time = time.monotonic() - start_time

        if superseded or task.cancelled():
            logger.debug("Discarding superseded response for %s", url)
            return FetchResult(url=url, error="cancelled", fetch_time=fetch_time)

        exc = task.exception()
        if exc is not None:
            if not isinstance(exc, httpx.HTTPError):
                logger.error("Unexpected error fetching %s: %s", url, exc)
            else:
                logger.warning("Request to %s failed: %s", url, exc)
            return FetchResult(
                url=url,
                error=str(exc) or type(exc).__name__,
                fetch_time=fetch_time,
            )

        response = task.result()
        if not response.is_success:
            return FetchResult(
                url=url,
                status_code=response.status_code,
                error=f"HTTP {response.status_code}",
                fetch_time=fetch_time,
            )

        return FetchResult(
            url=url,
            status_code=response.status_code,
            body=response.text,
            fetch_time=fetch_time,
        )


_storefront_client: httpx.AsyncClient | None = None


def create_storefront_client() -> httpx.AsyncClient:
    """Build the HTTP client used to reach storefront endpoints."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.HTTP_TIMEOUT_SECONDS),
        follow_redirects=True,
        headers={"Accept": "text/html,application/json;q=0.9,*/*;q=0.8"},
    )


def get_storefront_client() -> httpx.AsyncClient:
    """Return a singleton storefront client for the current process."""

    global _storefront_client
    if _storefront_client is None or _storefront_client.is_closed:
        _storefront_client = create_storefront_client()
    return _storefront_client


async def close_storefront_client() -> None:
    global _storefront_client
    if _storefront_client is not None:
        await _storefront_client.aclose()
        _storefront_client = None
