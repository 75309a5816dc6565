"""Routes that run the recommendations widget server-side for previews."""

from __future__ import annotations

import logging
from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, status

from related_products.models.widget import WidgetLoadRequest, WidgetLoadResponse
from related_products.services.clients.fetch_coordinator import get_storefront_client
from related_products.services.widget.element import (
    ERROR_ATTRIBUTE,
    HIDDEN_CLASS,
    WidgetElement,
)
from related_products.services.widget.product_recommendations import (
    ProductRecommendationsWidget,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/widgets", tags=["widgets"])

StorefrontDependency = Annotated[httpx.AsyncClient, Depends(get_storefront_client)]


@router.post(
    "/load",
    response_model=WidgetLoadResponse,
    status_code=status.HTTP_200_OK,
    summary="Load product recommendations for a widget configuration",
)
async def load_widget(
    payload: WidgetLoadRequest,
    client: StorefrontDependency,
) -> WidgetLoadResponse:
    """Build the widget from the submitted attributes and run one acquisition."""

    element = WidgetElement(
        element_id=payload.id,
        attributes=payload.attributes,
        inner_html=payload.inner_html,
    )
    widget = ProductRecommendationsWidget(element, client=client)
    try:
        state = await widget.load(force=payload.force)
    finally:
        await widget.aclose()

    logger.info(
        "Widget load finished",
        extra={"widget_id": element.id, "state": state.value},
    )

    return WidgetLoadResponse(
        state=state.value,
        completion=widget.orchestrator.completion,
        hidden=element.has_class(HIDDEN_CLASS),
        error=element.get_attribute(ERROR_ATTRIBUTE),
        html=element.inner_html,
        attributes=element.attributes,
    )
