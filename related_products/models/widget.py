"""API schemas for the widget preview endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from related_products.models.recommendation import CompletionState


class WidgetLoadRequest(BaseModel):
    """A widget as it appears on the page, submitted for a server-side load."""

    id: str | None = Field(None, description="Element id, used as the container id")
    attributes: dict[str, str] = Field(
        default_factory=dict,
        description="Element attributes such as data-product-id or data-layout",
    )
    inner_html: str = Field(
        "",
        description="Initial widget markup, typically holding the list container",
    )
    force: bool = Field(
        False,
        description="Reload even if data-recommendations-performed is already true",
    )


class WidgetLoadResponse(BaseModel):
    """Widget state after one orchestrator run."""

    state: str
    completion: CompletionState
    hidden: bool
    error: str | None = None
    html: str = ""
    attributes: dict[str, str] = Field(default_factory=dict)
