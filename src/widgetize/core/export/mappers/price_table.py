"""Price table mapper."""

from __future__ import annotations

import re
from typing import Any

from widgetize.core.dom import selector as css
from widgetize.core.dom.models import DOMNode
from widgetize.core.export.base import ExportContext, WidgetMapper, icon_class, icon_setting, rgb_to_hex, text_of
from widgetize.core.export.mappers.basic import HEADING_TAGS, link_setting
from widgetize.core.recognition.engine import RecognizedComponent
from widgetize.core.recognition.types import ComponentType

MAX_FEATURES = 10
CURRENCY_PRICE = re.compile(r"([$€£¥₹])\s*(\d[\d,]*(?:\.\d+)?)|(\d[\d,]*(?:\.\d+)?)\s*([$€£¥₹])")
BARE_PRICE = re.compile(r"\d[\d,]*(?:\.\d+)?")
PERIOD = re.compile(r"(?:/|per\s+)\s*(mo(?:nth)?|yr|year|week|day|user|seat)\b", re.IGNORECASE)
CHECK_MARKS = "✓✔☑✅•-–"
PRICE_MARKERS = '[class*="price"], [class*="amount"], [class*="cost"]'
SUBHEADING_MARKERS = '[class*="subtitle"], [class*="sub-heading"], [class*="subheading"], [class*="tagline"]'
RIBBON_MARKERS = '[class*="ribbon"], [class*="badge"], [class*="popular"], [class*="recommended"]'
BUTTON_MARKERS = 'a[class*="btn"], a[class*="button"], button, a[href]'
FEATURED_CLASSES = ("featured", "popular", "recommended", "highlight")


def price_parts(text: str) -> dict[str, str]:
    """Split ``"$29.99/mo"`` into currency symbol, price and period."""
    parts: dict[str, str] = {}
    match = CURRENCY_PRICE.search(text)
    if match:
        parts["currency_symbol"] = match.group(1) or match.group(4)
        parts["price"] = match.group(2) or match.group(3)
    elif bare := BARE_PRICE.search(text):
        parts["price"] = bare.group(0)
    period = PERIOD.search(text)
    if period:
        parts["period"] = "/" + period.group(1)
    return parts


def feature_items(element: DOMNode, context: ExportContext) -> list[dict[str, Any]]:
    items = css.select(element, "ul li, ol li") or css.select(element, '[class*="feature"]')
    features = []
    for item in items[:MAX_FEATURES]:
        text = text_of(item).lstrip(CHECK_MARKS).strip()
        if not text:
            continue
        features.append(
            {
                "_id": context.ids.next(),
                "item_text": text,
                "selected_item_icon": icon_setting(icon_class(item) or "fas fa-check"),
            }
        )
    return features


class PriceTableMapper(WidgetMapper):
    """Maps single pricing plans to the ``price-table`` widget."""

    COMPONENT_TYPES = (ComponentType.PRICE_TABLE,)
    WIDGET_TYPE = "price-table"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        heading = css.select_one(element, ", ".join(HEADING_TAGS))
        subheading = css.select_one(element, SUBHEADING_MARKERS)
        price = css.select_one(element, PRICE_MARKERS)
        ribbon = css.select_one(element, RIBBON_MARKERS)
        button = next(
            (node for node in css.select(element, BUTTON_MARKERS) if css.closest(node, "li") is None),
            None,
        )

        settings: dict[str, Any] = {
            "heading": text_of(heading),
            "sub_heading": text_of(subheading),
            "currency_symbol": "$",
            "price": "",
            "features_list": feature_items(element, context),
            "button_text": text_of(button, "Get Started"),
        }
        settings.update(price_parts(text_of(price) if price is not None else element.text_content))

        anchor = button if button is not None and button.tag == "a" else None
        link = link_setting(anchor)
        if link:
            settings["link"] = link

        classes = element.class_name or ""
        if ribbon is not None or any(word in classes for word in FEATURED_CLASSES):
            settings["show_ribbon"] = "yes"
            settings["ribbon_title"] = text_of(ribbon, "Popular")

        header_color = rgb_to_hex(context.accessor.computed_style(element).get("background-color"))
        if header_color:
            settings["header_bg_color"] = header_color
        return settings
