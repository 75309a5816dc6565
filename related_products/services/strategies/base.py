"""Base class shared by every recommendation source strategy."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from related_products.models.recommendation import (
    AcquisitionOutcome,
    RecommendationRequest,
    SourceKind,
)
from related_products.services.cache.request_cache import RequestCache
from related_products.services.clients.fetch_coordinator import FetchCoordinator
from related_products.services.routes import StoreRoutes

logger = logging.getLogger(__name__)


class SourceStrategy(ABC):
    """One self-contained way of acquiring recommendation data."""

    kind: SourceKind

    def __init__(
        self,
        *,
        coordinator: FetchCoordinator,
        cache: RequestCache,
        routes: StoreRoutes,
    ) -> None:
        self.coordinator = coordinator
        self.cache = cache
        self.routes = routes

    async def acquire(self, request: RecommendationRequest) -> AcquisitionOutcome:
        """Run the strategy, converting any failure into a Failed outcome."""

        try:
            return await self._acquire(request)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.warning(
                "Recommendation source %s failed",
                self.kind.value,
                exc_info=True,
                extra={"product_id": request.product_id},
            )
            return AcquisitionOutcome.failed(self.kind)

    @abstractmethod
    async def _acquire(self, request: RecommendationRequest) -> AcquisitionOutcome:
        """Fetch and interpret the source; may raise on any failure."""

    async def _fetch(self, url: str) -> str | None:
        """Return the body for ``url`` from the network, None on failure."""

        result = await self.coordinator.fetch(url)
        if not result.success:
            logger.info(
                "Storefront request failed",
                extra={"url": url, "status": result.status_code, "error": result.error},
            )
            return None
        return result.body

    async def _fetch_cached(self, url: str) -> str | None:
        """Read-through variant of ``_fetch`` backed by the widget's cache."""

        cached = self.cache.get(url)
        if cached is not None:
            return cached

        body = await self._fetch(url)
        if body is not None:
            self.cache.put(url, body)
        return body
