"""Product domain models and normalization of storefront payloads."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, Field


class ProductRecord(BaseModel):
    """Normalized product card data consumed by the renderer."""

    id: str = ""
    title: str = ""
    handle: str = ""
    url: str = "#"
    image_url: str = ""
    price: int = Field(0, description="Price in minor currency units")
    compare_at_price: int | None = Field(
        None,
        description="Compare-at price in minor currency units, when present",
    )

    @property
    def on_sale(self) -> bool:
        return self.compare_at_price is not None and self.compare_at_price > self.price


def normalize_product(raw: Any) -> ProductRecord:
    """Build a ProductRecord from any upstream product shape.

    Storefront endpoints disagree on field names: the recommendations feed
    carries ``price`` in minor units and a ``featured_image`` string, while
    collection listings expose prices as decimal strings on variants and
    images as mappings. Missing or malformed fields degrade to empty values;
    this function never raises.
    """

    if not isinstance(raw, Mapping):
        return ProductRecord()

    variant = _first(raw.get("variants"))
    handle = _as_text(raw.get("handle"))

    price = _first_present(
        raw.get("price"),
        raw.get("price_min"),
        _get(variant, "price"),
    )
    compare_at = _first_present(
        raw.get("compare_at_price"),
        _get(variant, "compare_at_price"),
    )

    return ProductRecord(
        id=_as_text(raw.get("id")),
        title=_as_text(raw.get("title")),
        handle=handle,
        url=_as_text(raw.get("url")) or (f"/products/{handle}" if handle else "#"),
        image_url=_image_url(raw, variant),
        price=to_minor_units(price) or 0,
        compare_at_price=to_minor_units(compare_at),
    )


def to_minor_units(value: Any) -> int | None:
    """Convert a price value into minor currency units.

    Integers are already minor units. Strings containing a decimal point are
    major units (``"19.99"`` -> ``1999``); digit-only strings are minor units.
    Anything else yields ``None``.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        try:
            return int(round(value))
        except (ValueError, OverflowError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.isascii() and text.isdigit():
            return int(text)
        try:
            return int((Decimal(text) * 100).to_integral_value())
        except (InvalidOperation, ValueError, OverflowError):
            return None
    return None


def _image_url(raw: Mapping[str, Any], variant: Any) -> str:
    image = _first_present(
        raw.get("featured_image"),
        _first(raw.get("images")),
        _get(variant, "featured_image"),
    )
    if isinstance(image, str):
        return image
    if isinstance(image, Mapping):
        return _as_text(image.get("src")) or _as_text(image.get("url"))
    return ""


def _first(value: Any) -> Any:
    if isinstance(value, list) and value:
        return value[0]
    return None


def _get(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(key)
    return None


def _first_present(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value)
