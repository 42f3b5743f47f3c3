"""Price list mapper."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from widgetize.core.dom import selector as css
from widgetize.core.dom.models import DOMNode
from widgetize.core.export.base import ExportContext, WidgetMapper, background_url, image_url, outermost, text_of
from widgetize.core.recognition.engine import RecognizedComponent
from widgetize.core.recognition.types import ComponentType

CURRENCY = "$€£¥₹"
PRICE_TEXT = re.compile(rf"[{CURRENCY}]\s*\d+(?:[.,]\d{{2}})?|\d+(?:[.,]\d{{2}})?\s*[{CURRENCY}]")
CURRENCY_SPLIT = re.compile(rf"[{CURRENCY}]")

LIST_ITEMS = 'li, [class*="price-item"], [class*="menu-item"], [class*="service-item"]'
BLOCK_ITEMS = '[class*="item"], [class*="row"]'
TITLE_MARKERS = 'h1, h2, h3, h4, h5, h6, [class*="title"], [class*="name"]'
PRICE_MARKERS = '[class*="price"], [class*="cost"], [class*="amount"]'
DESCRIPTION_MARKERS = 'p, [class*="description"], [class*="desc"], [class*="text"]'


@dataclass
class PriceItem:
    """One priced entry."""

    title: str
    price: str
    description: str = ""
    image: str | None = None
    link: str | None = None


def item_title(node: DOMNode) -> str:
    heading = css.select_one(node, TITLE_MARKERS) or css.select_one(node, "strong, b")
    if heading is not None:
        return text_of(heading)
    # Text before the first currency sign
    return CURRENCY_SPLIT.split(node.text_content, maxsplit=1)[0].strip()


def item_price(node: DOMNode) -> str:
    marker = css.select_one(node, PRICE_MARKERS)
    if marker is not None:
        return text_of(marker)
    if node.get("data-price"):
        return node.get("data-price") or ""
    match = PRICE_TEXT.search(node.text_content)
    return match.group(0).strip() if match else ""


def item_description(node: DOMNode) -> str:
    desc = css.select_one(node, DESCRIPTION_MARKERS)
    if desc is not None:
        return text_of(desc)
    small = css.select_one(node, "small, span")
    if small is not None and not CURRENCY_SPLIT.search(small.text_content):
        return text_of(small)
    return ""


def item_from_block(node: DOMNode, context: ExportContext) -> PriceItem | None:
    title = item_title(node)
    price = item_price(node)
    if not title or not price:
        return None

    img = css.select_one(node, "img")
    image = image_url(img) if img is not None else None
    if not image:
        image = background_url(context.accessor.computed_style(node).get("background-image"))

    anchor = node if node.tag == "a" else css.select_one(node, "a")
    return PriceItem(
        title=title,
        price=price,
        description=item_description(node),
        image=image or None,
        link=anchor.href if anchor is not None and anchor.href else None,
    )


def item_from_row(row: DOMNode) -> PriceItem | None:
    cells = [child for child in row.children if child.tag in ("td", "th")]
    if len(cells) < 2:
        return None
    title = text_of(cells[0])
    price = text_of(cells[-1])
    if not title or not price:
        return None
    return PriceItem(title=title, price=price, description=text_of(cells[1]) if len(cells) > 2 else "")


def extract_price_items(element: DOMNode, context: ExportContext) -> list[PriceItem]:
    """
    Extract priced entries.

    Tries list-like items, then table rows, then generic item/row blocks.
    Entries without both a title and a price are dropped.
    """
    items = [item for node in outermost(css.select(element, LIST_ITEMS)) if (item := item_from_block(node, context))]
    if items:
        return items

    items = [item for row in css.select(element, "tr") if (item := item_from_row(row))]
    if items:
        return items

    return [item for node in css.select(element, BLOCK_ITEMS) if (item := item_from_block(node, context))]


class PriceListMapper(WidgetMapper):
    """Maps menus and service price lists to the ``price-list`` widget."""

    COMPONENT_TYPES = (ComponentType.PRICE_LIST,)
    WIDGET_TYPE = "price-list"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        price_list = []
        for item in extract_price_items(component.element, context):
            entry: dict[str, Any] = {
                "_id": context.ids.next(),
                "title": item.title,
                "price": item.price,
                "item_description": item.description,
            }
            if item.image:
                entry["image"] = {"url": item.image, "id": ""}
            if item.link:
                entry["link"] = {"url": item.link}
            price_list.append(entry)

        return {
            "price_list": price_list,
            "row_gap": {"size": 20, "unit": "px"},
            "heading_color": "#000000",
            "price_color": "#6ec1e4",
            "description_color": "#666666",
            "separator_style": "dotted",
            "separator_weight": {"size": 1, "unit": "px"},
            "separator_color": "#dddddd",
        }
