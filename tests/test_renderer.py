"""Tests for the default HTML renderer and error handler."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from related_products.errors import RenderFailure, TerminalFailure
from related_products.models.product import ProductRecord
from related_products.models.recommendation import DisplaySettings, LayoutMode
from related_products.services.rendering.error_handler import HidingErrorHandler
from related_products.services.rendering.renderer import HtmlRenderer, format_price
from related_products.services.widget.attributes import build_display_settings
from related_products.services.widget.element import (
    ERROR_ATTRIBUTE,
    HIDDEN_CLASS,
    WidgetElement,
)


def _products(count: int) -> list[ProductRecord]:
    return [
        ProductRecord(
            id=str(index),
            title=f"Item {index}",
            url=f"/products/item-{index}",
            image_url=f"https://cdn.test/{index}.jpg",
            price=1000 + index,
        )
        for index in range(count)
    ]


def test_grid_renders_cards_into_existing_list_container():
    element = WidgetElement(
        "W1",
        inner_html='<h2>You may also like</h2><ul class="resource-list"><li>old</li></ul>',
    )

    HtmlRenderer().render_products(element, _products(2), LayoutMode.GRID, DisplaySettings())

    soup = BeautifulSoup(element.inner_html, "html.parser")
    container = soup.select_one(".resource-list")
    assert container["data-has-recommendations"] == "true"
    assert len(container.select(".resource-list__item")) == 2
    assert "old" not in container.get_text()
    assert soup.h2.get_text() == "You may also like"


def test_grid_creates_list_container_when_missing():
    element = WidgetElement("W1")

    HtmlRenderer().render_products(element, _products(1), LayoutMode.GRID, DisplaySettings())

    soup = BeautifulSoup(element.inner_html, "html.parser")
    assert soup.select_one('[data-testid="resource-list-grid"]') is not None


def test_carousel_pages_cards_by_column_count():
    element = WidgetElement("W1", inner_html='<div class="resource-list"></div>')
    display = DisplaySettings(columns=2, icon_style="chevron", icon_shape="circle")

    HtmlRenderer().render_products(element, _products(5), LayoutMode.CAROUSEL, display)

    soup = BeautifulSoup(element.inner_html, "html.parser")
    slides = soup.select(".slideshow-slide")
    assert [len(slide.select(".resource-list__item")) for slide in slides] == [2, 2, 1]
    controls = soup.select(".slideshow-control")
    assert [control["data-direction"] for control in controls] == ["previous", "next"]
    assert "slideshow-control--chevron" in controls[0]["class"]
    assert "slideshow-control--shape-circle" in controls[0]["class"]


def test_single_page_carousel_has_no_controls():
    element = WidgetElement("W1")

    HtmlRenderer().render_products(element, _products(2), LayoutMode.CAROUSEL, DisplaySettings())

    assert "slideshow-control" not in element.inner_html


def test_card_escapes_untrusted_fields_and_shows_sale_price():
    product = ProductRecord(
        title='Quote " <b>bold</b>',
        url="/products/x",
        price=1500,
        compare_at_price=2000,
    )
    element = WidgetElement("W1")

    HtmlRenderer().render_products(element, [product], LayoutMode.GRID, DisplaySettings())

    soup = BeautifulSoup(element.inner_html, "html.parser")
    assert soup.b is None
    assert soup.select_one(".product-card__title").get_text() == 'Quote " <b>bold</b>'
    assert soup.select_one(".price__regular").get_text() == "15.00"
    assert soup.select_one(".price__sale").get_text() == "20.00"


def test_empty_inputs_raise_render_failure():
    element = WidgetElement("W1")
    renderer = HtmlRenderer()

    with pytest.raises(RenderFailure):
        renderer.render_products(element, [], LayoutMode.GRID, DisplaySettings())
    with pytest.raises(RenderFailure):
        renderer.render_fragment(element, "   ")


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0, "0.00"), (1999, "19.99"), (123456789, "1,234,567.89"), (None, "")],
)
def test_format_price(value, expected):
    assert format_price(value) == expected


def test_display_settings_read_from_attributes():
    element = WidgetElement(
        "W1",
        {
            "data-icon-style": "chevron",
            "data-icon-shape": "square",
            "data-section-width": "full-width",
            "data-columns": "3",
        },
    )

    display = build_display_settings(element)

    assert display == DisplaySettings(
        icon_style="chevron",
        icon_shape="square",
        section_width="full-width",
        columns=3,
    )


@pytest.mark.parametrize("columns", ["zero", "0", "²", "-3", ""])
def test_display_settings_ignore_invalid_columns(columns):
    element = WidgetElement("W1", {"data-columns": columns})

    assert build_display_settings(element).columns == 4


def test_error_handler_hides_widget():
    element = WidgetElement("W1")

    HidingErrorHandler(element).handle(TerminalFailure("No recommendations available"))

    assert element.has_class(HIDDEN_CLASS)
    assert element.get_attribute(ERROR_ATTRIBUTE) == "Error loading product recommendations"
