"""Composition of one product recommendations widget instance."""

from __future__ import annotations

import logging
from collections.abc import Callable

import httpx

from related_products.models.recommendation import SourceKind
from related_products.services.activation.trigger import ActivationTrigger, ViewportEntry
from related_products.services.cache.request_cache import RequestCache
from related_products.services.clients.fetch_coordinator import (
    FetchCoordinator,
    create_storefront_client,
)
from related_products.services.orchestrator import (
    AcquisitionOrchestrator,
    ErrorHandler,
    OrchestratorState,
)
from related_products.services.rendering.error_handler import HidingErrorHandler
from related_products.services.rendering.renderer import HtmlRenderer, Renderer
from related_products.services.routes import StoreRoutes
from related_products.services.strategies import (
    CollectionFallbackStrategy,
    JsonRecommendationsStrategy,
    PrimaryFragmentStrategy,
)
from related_products.services.widget.element import WidgetElement

logger = logging.getLogger(__name__)


class ProductRecommendationsWidget:
    """Owns the cache, coordinator, strategies and trigger of one element.

    Hosts call ``connect()`` when the element is attached and ``disconnect()``
    when it is detached. The cache and the in-flight request are never shared
    with other widgets.
    """

    def __init__(
        self,
        element: WidgetElement,
        *,
        client: httpx.AsyncClient | None = None,
        routes: StoreRoutes | None = None,
        renderer: Renderer | None = None,
        error_handler: ErrorHandler | None = None,
        design_mode: Callable[[], bool] | None = None,
    ) -> None:
        self.element = element
        self._owns_client = client is None
        self.client = client or create_storefront_client()
        self.cache = RequestCache()
        self.coordinator = FetchCoordinator(self.client)

        shared = {
            "coordinator": self.coordinator,
            "cache": self.cache,
            "routes": routes or StoreRoutes(),
        }
        strategies = {
            SourceKind.PRIMARY_FRAGMENT: PrimaryFragmentStrategy(**shared),
            SourceKind.JSON: JsonRecommendationsStrategy(**shared),
            SourceKind.COLLECTION: CollectionFallbackStrategy(**shared),
        }

        orchestrator_kwargs = {}
        if design_mode is not None:
            orchestrator_kwargs["design_mode"] = design_mode
        self.orchestrator = AcquisitionOrchestrator(
            element,
            strategies=strategies,
            renderer=renderer or HtmlRenderer(),
            error_handler=error_handler or HidingErrorHandler(element),
            **orchestrator_kwargs,
        )
        self.trigger = ActivationTrigger(element, self.orchestrator)

    @property
    def state(self) -> OrchestratorState:
        return self.orchestrator.state

    def connect(self) -> None:
        self.trigger.start()

    def disconnect(self) -> None:
        self.trigger.stop()
        self.coordinator.cancel()

    def on_viewport(self, entry: ViewportEntry):
        return self.trigger.on_viewport(entry)

    async def load(self, *, force: bool = False) -> OrchestratorState:
        """Run the orchestrator directly, bypassing the activation gates."""
        return await self.orchestrator.load(force=force)

    async def aclose(self) -> None:
        self.disconnect()
        if self._owns_client:
            await self.client.aclose()
