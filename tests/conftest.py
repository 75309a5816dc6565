"""Pytest configuration and fixtures for the related products widget."""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable

import httpx
import pytest
import pytest_asyncio

from related_products.services.clients.fetch_coordinator import get_storefront_client
from related_products.services.routes import StoreRoutes
from related_products.services.widget.element import WidgetElement
from related_products.services.widget.product_recommendations import (
    ProductRecommendationsWidget,
)

STORE_ROOT = "http://shop.test/"

Handler = Callable[[httpx.Request], Awaitable[httpx.Response]]


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


class FakeStorefront:
    """Records requests and answers them from per-path canned responses."""

    def __init__(self) -> None:
        self.calls: list[httpx.Request] = []
        self._routes: dict[str, Handler] = {}

    def add(
        self,
        path: str,
        *,
        status_code: int = 200,
        text: str | None = None,
        payload: object | None = None,
    ) -> None:
        async def _respond(request: httpx.Request) -> httpx.Response:
            if payload is not None:
                return httpx.Response(
                    status_code,
                    content=json.dumps(payload).encode(),
                    headers={"content-type": "application/json"},
                )
            return httpx.Response(status_code, text=text or "")

        self._routes[path] = _respond

    def add_handler(self, path: str, handler: Handler) -> None:
        self._routes[path] = handler

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        handler = self._routes.get(request.url.path)
        if handler is None:
            return httpx.Response(404, text="Not Found")
        return await handler(request)

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.calls]

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [request for request in self.calls if request.url.path == path]


@pytest.fixture()
def storefront() -> FakeStorefront:
    return FakeStorefront()


@pytest_asyncio.fixture()
async def http_client(storefront):
    """HTTPX client whose transport is the fake storefront."""
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(storefront.handle)
    ) as client:
        yield client


@pytest.fixture()
def routes() -> StoreRoutes:
    return StoreRoutes(STORE_ROOT)


@pytest.fixture()
def make_widget(http_client, routes):
    """Factory building a widget bound to the fake storefront."""

    def _make(
        element_id: str | None = "W1",
        *,
        design_mode: bool = False,
        inner_html: str = '<div class="resource-list"></div>',
        **data: str,
    ) -> ProductRecommendationsWidget:
        attributes = {f"data-{key.replace('_', '-')}": value for key, value in data.items()}
        element = WidgetElement(
            element_id=element_id,
            attributes=attributes,
            inner_html=inner_html,
        )
        return ProductRecommendationsWidget(
            element,
            client=http_client,
            routes=routes,
            design_mode=lambda: design_mode,
        )

    return _make


@pytest_asyncio.fixture()
async def client(http_client):
    """Return an HTTPX async client pointing at the FastAPI app."""
    from related_products.main import app

    app.dependency_overrides[get_storefront_client] = lambda: http_client
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_storefront_client, None)


@pytest.fixture()
def products_payload():
    """Build a recommendations payload for the given product ids."""

    def _build(*ids: str) -> dict:
        return {
            "products": [
                {
                    "id": product_id,
                    "title": f"Product {product_id}",
                    "handle": f"product-{product_id.lower()}",
                    "price": 1999,
                    "featured_image": f"https://cdn.test/{product_id}.jpg",
                }
                for product_id in ids
            ]
        }

    return _build
