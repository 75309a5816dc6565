"""Decides when the orchestrator runs for an attached widget."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from pydantic import BaseModel

from related_products.config import settings
from related_products.services.orchestrator import (
    AcquisitionOrchestrator,
    OrchestratorState,
)
from related_products.services.widget.element import (
    CLASS_ATTRIBUTE,
    ERROR_ATTRIBUTE,
    HIDDEN_CLASS,
    PERFORMED_ATTRIBUTE,
    AttributeMutation,
    WidgetElement,
)

logger = logging.getLogger(__name__)


class ViewportEntry(BaseModel):
    """Element geometry relative to the viewport, in CSS pixels."""

    element_top: float
    element_bottom: float
    viewport_height: float

    def is_intersecting(self, margin: float = 0) -> bool:
        """True when the element is visible or within ``margin`` below the fold."""
        return (
            self.element_top < self.viewport_height + margin
            and self.element_bottom > 0
        )


class ActivationTrigger:
    """Proximity gate plus declarative re-trigger gate.

    The proximity gate fires once: the first qualifying viewport entry
    disarms it before the orchestrator is invoked. Attribute mutations that
    represent a configuration change re-run the orchestrator even after a
    successful load; mutations caused by the widget itself are ignored.
    """

    def __init__(
        self,
        element: WidgetElement,
        orchestrator: AcquisitionOrchestrator,
        *,
        margin_px: int | None = None,
    ) -> None:
        self.element = element
        self.orchestrator = orchestrator
        self.margin_px = settings.PROXIMITY_MARGIN_PX if margin_px is None else margin_px
        self._proximity_armed = False
        self._disconnect_mutations: Callable[[], None] | None = None
        self._task: asyncio.Task[OrchestratorState] | None = None

    @property
    def started(self) -> bool:
        return self._disconnect_mutations is not None

    @property
    def proximity_armed(self) -> bool:
        return self._proximity_armed

    @property
    def task(self) -> asyncio.Task[OrchestratorState] | None:
        """The most recent activation, if any."""
        return self._task

    def start(self) -> None:
        if self.started:
            return
        self._proximity_armed = True
        self._disconnect_mutations = self.element.observe_attributes(self._on_mutations)

    def stop(self) -> None:
        self._proximity_armed = False
        if self._disconnect_mutations is not None:
            self._disconnect_mutations()
            self._disconnect_mutations = None
        if self._task is not None and not self._task.done():
            self._task.cancel()

    def on_viewport(self, entry: ViewportEntry) -> asyncio.Task[OrchestratorState] | None:
        """Feed a viewport observation; returns the activation it started, if any."""

        if not self._proximity_armed or not entry.is_intersecting(self.margin_px):
            return None

        self._proximity_armed = False
        logger.debug("Widget %s entered the proximity margin", self.element.id)
        return self._activate(force=False)

    def _on_mutations(self, mutations: list[AttributeMutation]) -> None:
        for mutation in mutations:
            if mutation.target is not self.element:
                continue
            if self._is_self_inflicted(mutation):
                continue

            logger.info(
                "Widget configuration changed, reloading",
                extra={"widget_id": self.element.id, "attribute": mutation.attribute_name},
            )
            self._activate(force=True)
            break

    def _is_self_inflicted(self, mutation: AttributeMutation) -> bool:
        attribute_name = mutation.attribute_name
        if attribute_name == ERROR_ATTRIBUTE:
            return True
        # Hiding the widget on failure and revealing it again on success.
        if attribute_name == CLASS_ATTRIBUTE and (
            self.element.has_class(HIDDEN_CLASS)
            or HIDDEN_CLASS in (mutation.old_value or "").split()
        ):
            return True
        if (
            attribute_name == PERFORMED_ATTRIBUTE
            and self.element.get_attribute(PERFORMED_ATTRIBUTE) == "true"
        ):
            return True
        return False

    def _activate(self, *, force: bool) -> asyncio.Task[OrchestratorState]:
        if self._task is not None and not self._task.done():
            logger.debug("Superseding in-flight activation for %s", self.element.id)
            self._task.cancel()
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self.orchestrator.load(force=force))
        return self._task
