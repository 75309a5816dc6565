"""System-level routes such as health checks."""

from __future__ import annotations

import httpx
from fastapi import APIRouter

from related_products.config import settings

router = APIRouter(tags=["system"])


@router.get("/")
async def read_root() -> dict[str, str]:
    """Hello World endpoint used by smoke tests."""

    return {"message": "Hello World"}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint with storefront connectivity check."""

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(settings.STORE_ROOT_URL, timeout=5.0)
            storefront_status = "connected" if response.is_success else "disconnected"
    except Exception:
        storefront_status = "disconnected"

    return {
        "status": "healthy",
        "storefront": storefront_status,
        "environment": settings.ENVIRONMENT,
    }
