"""API route registration."""

from fastapi import FastAPI

from related_products.api.routes import system, widgets


def include_api_routes(app: FastAPI) -> None:
    """Attach all API routers to the application."""

    app.include_router(system.router)
    app.include_router(widgets.router)
