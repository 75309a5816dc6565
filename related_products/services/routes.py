"""Deterministic construction of storefront endpoint URLs."""

from __future__ import annotations

import httpx

from related_products.config import settings
from related_products.models.recommendation import RecommendationRequest


class StoreRoutes:
    """Builds the URLs used both as network targets and cache keys."""

    def __init__(self, root_url: str | None = None) -> None:
        root = root_url or settings.STORE_ROOT_URL
        if not root.endswith("/"):
            root = f"{root}/"
        self._root = httpx.URL(root)

    @property
    def root(self) -> str:
        return str(self._root)

    def section_urls(self, request: RecommendationRequest) -> list[str]:
        """Markup endpoint candidates: declared section first, then the fallback."""

        section_ids = [request.section_id]
        if request.section_id != settings.FALLBACK_SECTION_ID:
            section_ids.append(settings.FALLBACK_SECTION_ID)

        base = self._root.join(request.section_url)
        return [
            str(
                base.copy_merge_params(
                    {
                        "product_id": request.product_id,
                        "section_id": section_id,
                        "intent": request.intent,
                    }
                )
            )
            for section_id in section_ids
        ]

    def recommendations_json(self, request: RecommendationRequest) -> str:
        url = self._root.join("recommendations/products.json")
        return str(
            url.copy_with(
                params={
                    "product_id": request.product_id,
                    "limit": str(request.limit),
                    "intent": request.intent,
                }
            )
        )

    def collection_products(self, handle: str, limit: int) -> str:
        url = self._root.join(f"collections/{handle}/products.json")
        return str(url.copy_with(params={"limit": str(limit)}))
