"""Last client-side source: a generic collection listing."""

from __future__ import annotations

from related_products.errors import SourceFailure
from related_products.models.recommendation import (
    AcquisitionOutcome,
    RecommendationRequest,
    SourceKind,
)
from related_products.services.strategies.base import SourceStrategy
from related_products.services.strategies.json_recommendations import parse_products


class CollectionFallbackStrategy(SourceStrategy):
    """Lists a configured collection, minus the product being viewed."""

    kind = SourceKind.COLLECTION

    async def _acquire(self, request: RecommendationRequest) -> AcquisitionOutcome:
        if not request.collection_handle:
            raise SourceFailure(self.kind.value, "no collection handle configured")

        url = self.routes.collection_products(request.collection_handle, request.limit)
        body = await self._fetch(url)
        if body is None:
            raise SourceFailure(self.kind.value, "request failed")

        products = [
            product
            for product in parse_products(body)
            if product.id != request.product_id
        ][: request.limit]
        if not products:
            raise SourceFailure(self.kind.value, "no other products in collection")

        return AcquisitionOutcome.with_products(self.kind, products)
