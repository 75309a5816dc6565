"""Terminal failure handling for the widget."""

from __future__ import annotations

import logging

from related_products.config import settings
from related_products.services.widget.element import (
    ERROR_ATTRIBUTE,
    HIDDEN_CLASS,
    WidgetElement,
)

logger = logging.getLogger(__name__)


class HidingErrorHandler:
    """Hides the widget and exposes a diagnostic attribute. Never raises."""

    def __init__(self, element: WidgetElement, message: str | None = None) -> None:
        self.element = element
        self.message = message or settings.ERROR_MESSAGE

    def handle(self, error: BaseException) -> None:
        logger.error(
            "Product recommendations error: %s",
            error,
            extra={"widget_id": self.element.id},
        )
        try:
            self.element.add_class(HIDDEN_CLASS)
            self.element.set_attribute(ERROR_ATTRIBUTE, self.message)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Failed to flag widget %s as errored", self.element.id)
