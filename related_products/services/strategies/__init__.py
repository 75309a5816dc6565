"""Recommendation source strategies and the layout-dependent policy."""

from related_products.models.recommendation import LayoutMode, SourceKind
from related_products.services.strategies.base import SourceStrategy
from related_products.services.strategies.collection_fallback import (
    CollectionFallbackStrategy,
)
from related_products.services.strategies.json_recommendations import (
    JsonRecommendationsStrategy,
)
from related_products.services.strategies.primary_fragment import (
    PrimaryFragmentStrategy,
)

SOURCE_POLICY: dict[LayoutMode, tuple[SourceKind, ...]] = {
    LayoutMode.GRID: (
        SourceKind.JSON,
        SourceKind.COLLECTION,
        SourceKind.PRIMARY_FRAGMENT,
    ),
    LayoutMode.CAROUSEL: (
        SourceKind.PRIMARY_FRAGMENT,
        SourceKind.JSON,
        SourceKind.COLLECTION,
    ),
}

__all__ = [
    "SOURCE_POLICY",
    "CollectionFallbackStrategy",
    "JsonRecommendationsStrategy",
    "PrimaryFragmentStrategy",
    "SourceStrategy",
]
