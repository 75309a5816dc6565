"""Renderer abstractions and the default product card renderer."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from html import escape

from bs4 import BeautifulSoup, Tag

from related_products.errors import RenderFailure
from related_products.models.product import ProductRecord
from related_products.models.recommendation import DisplaySettings, LayoutMode
from related_products.services.widget.element import (
    HAS_RECOMMENDATIONS_ATTRIBUTE,
    WidgetElement,
)

logger = logging.getLogger(__name__)

LIST_CONTAINER_SELECTORS = (".resource-list", '[data-testid="resource-list-grid"]')


class Renderer(ABC):
    """Turns acquired recommendations into widget markup."""

    @abstractmethod
    def render_products(
        self,
        element: WidgetElement,
        products: list[ProductRecord],
        layout: LayoutMode,
        display: DisplaySettings,
    ) -> None:
        """Render product cards and flag the list container as populated."""

    @abstractmethod
    def render_fragment(self, element: WidgetElement, markup: str) -> None:
        """Replace the widget content with server-rendered markup."""


class HtmlRenderer(Renderer):
    """Builds grid or carousel card markup inside the widget's list container."""

    def render_products(
        self,
        element: WidgetElement,
        products: list[ProductRecord],
        layout: LayoutMode,
        display: DisplaySettings,
    ) -> None:
        if not products:
            raise RenderFailure("Cannot render an empty product list")

        soup = BeautifulSoup(element.inner_html, "html.parser")
        container = self._list_container(soup)

        if layout is LayoutMode.CAROUSEL:
            markup = self._carousel_markup(products, display)
        else:
            markup = "".join(self._card_markup(product) for product in products)

        container.clear()
        for node in list(BeautifulSoup(markup, "html.parser").contents):
            container.append(node.extract())
        container[HAS_RECOMMENDATIONS_ATTRIBUTE] = "true"
        element.inner_html = str(soup)

        logger.debug(
            "Rendered product cards",
            extra={"layout": layout.value, "count": len(products)},
        )

    def render_fragment(self, element: WidgetElement, markup: str) -> None:
        if not markup.strip():
            raise RenderFailure("Cannot render an empty fragment")
        element.inner_html = markup

    @staticmethod
    def _list_container(soup: BeautifulSoup) -> Tag:
        for selector in LIST_CONTAINER_SELECTORS:
            found = soup.select_one(selector)
            if found is not None:
                return found

        container = soup.new_tag(
            "div",
            attrs={"class": "resource-list", "data-testid": "resource-list-grid"},
        )
        soup.append(container)
        return container

    def _carousel_markup(
        self, products: list[ProductRecord], display: DisplaySettings
    ) -> str:
        per_page = display.columns
        pages = [
            products[index : index + per_page]
            for index in range(0, len(products), per_page)
        ]
        slides = "".join(
            f'<div class="slideshow-slide" data-page="{number}"'
            f'{"" if number == 1 else " hidden"}>'
            + "".join(self._card_markup(product) for product in page)
            + "</div>"
            for number, page in enumerate(pages, start=1)
        )

        nav = ""
        if len(pages) > 1:
            icon_class = (
                f"slideshow-control--{escape(display.icon_style)} "
                f"slideshow-control--shape-{escape(display.icon_shape)}"
            )
            nav = (
                f'<button type="button" class="slideshow-control {icon_class}" '
                'data-direction="previous" aria-label="Previous slide"></button>'
                f'<button type="button" class="slideshow-control {icon_class}" '
                'data-direction="next" aria-label="Next slide"></button>'
            )

        return (
            f'<div class="slideshow {escape(display.section_width)}" '
            f'data-pages="{len(pages)}" data-columns="{per_page}">'
            f'<div class="slideshow-slides">{slides}</div>{nav}</div>'
        )

    @staticmethod
    def _card_markup(product: ProductRecord) -> str:
        sale = ""
        if product.on_sale:
            sale = (
                '<s class="price__sale">'
                f"{format_price(product.compare_at_price)}</s>"
            )
        return (
            '<div class="resource-list__item">'
            f'<a href="{escape(product.url)}" class="product-card__link">'
            '<div class="product-card__media">'
            f'<img src="{escape(product.image_url)}" alt="{escape(product.title)}" '
            'loading="lazy" width="400" height="400"/>'
            "</div>"
            '<div class="product-card__content">'
            f'<h3 class="product-card__title">{escape(product.title)}</h3>'
            '<div class="price">'
            f'<span class="price__regular">{format_price(product.price)}</span>'
            f"{sale}"
            "</div></div></a></div>"
        )


def format_price(minor_units: int | None) -> str:
    """Format minor currency units as a two-decimal major amount."""

    if minor_units is None:
        return ""
    return f"{minor_units / 100:,.2f}"
