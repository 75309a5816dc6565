"""JSON recommendations source."""

from __future__ import annotations

import json
from typing import Any

from related_products.errors import SourceFailure
from related_products.models.product import ProductRecord, normalize_product
from related_products.models.recommendation import (
    AcquisitionOutcome,
    RecommendationRequest,
    SourceKind,
)
from related_products.services.strategies.base import SourceStrategy


class JsonRecommendationsStrategy(SourceStrategy):
    """Queries the structured recommendations endpoint for the product."""

    kind = SourceKind.JSON

    async def _acquire(self, request: RecommendationRequest) -> AcquisitionOutcome:
        body = await self._fetch(self.routes.recommendations_json(request))
        if body is None:
            raise SourceFailure(self.kind.value, "request failed")

        products = parse_products(body)
        if not products:
            raise SourceFailure(self.kind.value, "no products returned")

        return AcquisitionOutcome.with_products(self.kind, products)


def parse_products(body: str) -> list[ProductRecord]:
    """Decode a ``{"products": [...]}`` payload into normalized records."""

    payload: Any = json.loads(body)
    if not isinstance(payload, dict):
        return []
    raw_products = payload.get("products")
    if not isinstance(raw_products, list):
        return []
    return [normalize_product(raw) for raw in raw_products]
