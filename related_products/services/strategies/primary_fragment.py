"""Primary source: server-rendered section markup addressed by container id."""

from __future__ import annotations

from bs4 import BeautifulSoup

from related_products.config import settings
from related_products.errors import SourceFailure
from related_products.models.recommendation import (
    AcquisitionOutcome,
    LayoutMode,
    RecommendationRequest,
    SourceKind,
)
from related_products.services.strategies.base import SourceStrategy
from related_products.services.widget.element import HAS_RECOMMENDATIONS_ATTRIBUTE


class PrimaryFragmentStrategy(SourceStrategy):
    """Fetches the recommendations section and extracts this widget's fragment."""

    kind = SourceKind.PRIMARY_FRAGMENT

    async def _acquire(self, request: RecommendationRequest) -> AcquisitionOutcome:
        body = await self._fetch_first_body(request)
        if body is None:
            raise SourceFailure(self.kind.value, "no section markup returned")

        fragment = extract_fragment(body, request.container_id)
        if fragment is None:
            raise SourceFailure(
                self.kind.value,
                f"no fragment for container {request.container_id}",
            )

        if request.layout_mode is LayoutMode.CAROUSEL and not has_products_marker(
            fragment
        ):
            # Let a client-side source build the carousel instead.
            raise SourceFailure(self.kind.value, "fragment has no products marker")

        return AcquisitionOutcome.with_markup(self.kind, fragment)

    async def _fetch_first_body(self, request: RecommendationRequest) -> str | None:
        for url in self.routes.section_urls(request):
            body = await self._fetch_cached(url)
            if body:
                return body
        return None


def extract_fragment(body: str, container_id: str) -> str | None:
    """Return the inner markup of the widget addressed by ``container_id``."""

    soup = BeautifulSoup(body, "html.parser")
    node = soup.find(settings.WIDGET_TAG, id=container_id)
    if node is None:
        return None

    inner = node.decode_contents()
    if not inner.strip():
        return None
    return inner


def has_products_marker(fragment: str) -> bool:
    soup = BeautifulSoup(fragment, "html.parser")
    return soup.find(attrs={HAS_RECOMMENDATIONS_ATTRIBUTE: "true"}) is not None
