"""FastAPI application entry point."""

from related_products.application import create_app

app = create_app()

__all__ = ["app"]
