"""Read the widget's declarative configuration from its attributes."""

from __future__ import annotations

from related_products.config import settings
from related_products.errors import ConfigurationError
from related_products.models.recommendation import (
    DisplaySettings,
    LayoutMode,
    RecommendationRequest,
    parse_limit,
)
from related_products.services.widget.element import WidgetElement


def build_request(element: WidgetElement) -> RecommendationRequest:
    """Snapshot the element's attributes into a RecommendationRequest.

    Raises ConfigurationError when the product id or the element id is
    missing; nothing else about the configuration is fatal.
    """

    product_id = (element.data("product-id") or "").strip()
    container_id = element.id.strip()
    if not product_id or not container_id:
        raise ConfigurationError("Product ID and an ID attribute are required")

    section_url = element.data("url") or settings.DEFAULT_SECTION_URL

    return RecommendationRequest(
        product_id=product_id,
        container_id=container_id,
        section_id=element.data("section-id") or settings.FALLBACK_SECTION_ID,
        intent=element.data("intent") or settings.DEFAULT_INTENT,
        layout_mode=LayoutMode.parse(element.data("layout")),
        section_url=section_url,
        collection_handle=element.data("collection-handle") or None,
        limit=parse_limit(section_url, settings.DEFAULT_RESULT_LIMIT),
    )


def build_display_settings(element: WidgetElement) -> DisplaySettings:
    columns = element.data("columns") or ""
    defaults = DisplaySettings()
    return DisplaySettings(
        icon_style=element.data("icon-style") or defaults.icon_style,
        icon_shape=element.data("icon-shape") or defaults.icon_shape,
        section_width=element.data("section-width") or defaults.section_width,
        columns=_positive_int(columns, defaults.columns),
    )


def _positive_int(raw: str, default: int) -> int:
    if raw.isascii() and raw.isdigit() and int(raw) > 0:
        return int(raw)
    return default
