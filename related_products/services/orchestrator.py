"""Sequences recommendation sources and decides overall success or failure."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Protocol

from related_products.config import settings
from related_products.errors import (
    ConfigurationError,
    RecommendationsError,
    TerminalFailure,
)
from related_products.models.recommendation import (
    AcquisitionOutcome,
    CompletionState,
    RecommendationRequest,
    SourceKind,
)
from related_products.services.rendering.renderer import Renderer
from related_products.services.strategies import SOURCE_POLICY, SourceStrategy
from related_products.services.widget.attributes import (
    build_display_settings,
    build_request,
)
from related_products.services.widget.element import (
    ERROR_ATTRIBUTE,
    HIDDEN_CLASS,
    PERFORMED_ATTRIBUTE,
    WidgetElement,
)

logger = logging.getLogger(__name__)


class OrchestratorState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ErrorHandler(Protocol):
    def handle(self, error: BaseException) -> None: ...


def _settings_design_mode() -> bool:
    return settings.DESIGN_MODE


class AcquisitionOrchestrator:
    """Runs the layout-dependent fallback chain for one widget.

    Sources are tried strictly in policy order and the first success is
    rendered. A newer load on the same widget supersedes a running one; the
    superseded run stops at its next await without rendering or failing. If interpreting a success raises, one last JSON attempt is made
    before the failure becomes terminal. Terminal failures go to the error
    handler unless the host is in design mode.
    """

    def __init__(
        self,
        element: WidgetElement,
        *,
        strategies: Mapping[SourceKind, SourceStrategy],
        renderer: Renderer,
        error_handler: ErrorHandler,
        design_mode: Callable[[], bool] = _settings_design_mode,
    ) -> None:
        self.element = element
        self.strategies = dict(strategies)
        self.renderer = renderer
        self.error_handler = error_handler
        self.design_mode = design_mode
        self.state = OrchestratorState.IDLE
        self.last_error: RecommendationsError | None = None
        self._generation = 0

    @property
    def completion(self) -> CompletionState:
        if self.element.get_attribute(PERFORMED_ATTRIBUTE) == "true":
            return CompletionState.DONE
        return CompletionState.PENDING

    async def load(self, *, force: bool = False) -> OrchestratorState:
        """Acquire and render recommendations for the element's configuration.

        ``force`` bypasses the completion check; it is set when the element's
        configuration changed after a previous successful load.
        """

        try:
            request = build_request(self.element)
        except ConfigurationError as exc:
            self._fail(exc)
            return self.state
        except ValueError as exc:
            self._fail(ConfigurationError(str(exc)))
            return self.state

        if self.completion is CompletionState.DONE and not force:
            logger.debug("Recommendations already performed for %s", request.container_id)
            return self.state

        self._generation += 1
        generation = self._generation
        self.state = OrchestratorState.RUNNING
        self.last_error = None
        logger.info(
            "Loading product recommendations",
            extra={
                "widget_id": request.container_id,
                "product_id": request.product_id,
                "layout": request.layout_mode.value,
            },
        )

        try:
            if await self._run_policy(request, generation):
                return self.state
            if self._superseded(generation):
                return self.state
            error: RecommendationsError = TerminalFailure(
                "No recommendations available"
            )
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning(
                "Rendering recommendations failed, retrying JSON source",
                exc_info=True,
                extra={"widget_id": request.container_id},
            )
            if await self._last_resort(request, generation):
                return self.state
            if self._superseded(generation):
                return self.state
            error = TerminalFailure(str(exc) or type(exc).__name__, cause=exc)

        self._fail(error)
        return self.state

    def _superseded(self, generation: int) -> bool:
        if generation == self._generation:
            return False
        logger.debug("Dropping superseded recommendations run for %s", self.element.id)
        return True

    async def _run_policy(self, request: RecommendationRequest, generation: int) -> bool:
        for kind in SOURCE_POLICY[request.layout_mode]:
            strategy = self.strategies.get(kind)
            if strategy is None:
                continue
            outcome = await strategy.acquire(request)
            if self._superseded(generation):
                return False
            if outcome.succeeded:
                self._render(request, outcome)
                return True
        return False

    async def _last_resort(self, request: RecommendationRequest, generation: int) -> bool:
        strategy = self.strategies.get(SourceKind.JSON)
        if strategy is None:
            return False
        try:
            outcome = await strategy.acquire(request)
            if self._superseded(generation) or not outcome.succeeded:
                return False
            self._render(request, outcome)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.warning("Last-resort JSON render failed", exc_info=True)
            return False
        return True

    def _render(
        self, request: RecommendationRequest, outcome: AcquisitionOutcome
    ) -> None:
        if outcome.markup is not None:
            self.renderer.render_fragment(self.element, outcome.markup)
        else:
            self.renderer.render_products(
                self.element,
                outcome.products,
                request.layout_mode,
                build_display_settings(self.element),
            )

        self.element.remove_attribute(ERROR_ATTRIBUTE)
        self.element.remove_class(HIDDEN_CLASS)
        self.element.set_attribute(PERFORMED_ATTRIBUTE, "true")
        self.state = OrchestratorState.SUCCEEDED
        logger.info(
            "Rendered product recommendations",
            extra={
                "widget_id": request.container_id,
                "source": outcome.source.value,
                "count": len(outcome.products),
            },
        )

    def _fail(self, error: RecommendationsError) -> None:
        self.state = OrchestratorState.FAILED
        self.last_error = error
        if self.design_mode():
            logger.debug("Suppressing recommendations error in design mode: %s", error)
            return
        self.error_handler.handle(error)
