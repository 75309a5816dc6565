"""Models describing a recommendation request and its outcome."""

from __future__ import annotations

from enum import Enum
from typing import Literal

import httpx
from pydantic import BaseModel, ConfigDict, Field

from related_products.models.product import ProductRecord


class LayoutMode(str, Enum):
    GRID = "grid"
    CAROUSEL = "carousel"

    @classmethod
    def parse(cls, value: str | None) -> LayoutMode:
        """Return the layout for an attribute value, defaulting to grid."""
        if value and value.strip().lower() == cls.CAROUSEL.value:
            return cls.CAROUSEL
        return cls.GRID


class SourceKind(str, Enum):
    """Identifies the backend shape a strategy acquires data from."""

    PRIMARY_FRAGMENT = "primary_fragment"
    JSON = "json"
    COLLECTION = "collection"


class CompletionState(str, Enum):
    PENDING = "pending"
    DONE = "done"


class RecommendationRequest(BaseModel):
    """Immutable description of one acquisition attempt."""

    model_config = ConfigDict(frozen=True)

    product_id: str = Field(..., min_length=1)
    container_id: str = Field(..., min_length=1)
    section_id: str = Field(..., min_length=1)
    intent: str = Field(..., min_length=1)
    layout_mode: LayoutMode = LayoutMode.GRID
    section_url: str
    collection_handle: str | None = None
    limit: int = Field(..., ge=1)


def parse_limit(section_url: str | None, default: int) -> int:
    """Extract the ``limit`` query parameter from the configured section URL."""

    if not section_url:
        return default
    try:
        raw = httpx.URL(section_url).params.get("limit")
    except (httpx.InvalidURL, TypeError, ValueError):
        return default
    if raw and raw.isascii() and raw.isdigit() and int(raw) > 0:
        return int(raw)
    return default


class DisplaySettings(BaseModel):
    """Presentation knobs consumed only by the renderer."""

    icon_style: str = "arrow"
    icon_shape: str = "none"
    section_width: str = "page-width"
    columns: int = Field(4, ge=1)


class AcquisitionOutcome(BaseModel):
    """Result of one strategy: either fully satisfied or failed."""

    source: SourceKind
    status: Literal["succeeded", "failed"]
    products: list[ProductRecord] = Field(default_factory=list)
    markup: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == "succeeded"

    @classmethod
    def with_products(
        cls, source: SourceKind, products: list[ProductRecord]
    ) -> AcquisitionOutcome:
        return cls(source=source, status="succeeded", products=products)

    @classmethod
    def with_markup(cls, source: SourceKind, markup: str) -> AcquisitionOutcome:
        return cls(source=source, status="succeeded", markup=markup)

    @classmethod
    def failed(cls, source: SourceKind) -> AcquisitionOutcome:
        return cls(source=source, status="failed")
