"""Mappers for basic content widgets and the HTML fallback."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from widgetize.core.dom import selector as css
from widgetize.core.dom.accessor import parse_px
from widgetize.core.dom.models import DOMNode
from widgetize.core.export.base import (
    ExportContext,
    WidgetMapper,
    background_url,
    icon_class,
    icon_setting,
    image_url,
    outermost,
    rgb_to_hex,
    text_of,
    text_without_icons,
)
from widgetize.core.recognition.engine import RecognizedComponent
from widgetize.core.recognition.types import ComponentKind, ComponentType, CustomComponentType

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
ALIGNMENTS = {"left", "center", "right", "justify", "start", "end"}


def alignment(style: Mapping[str, str]) -> str:
    """Elementor alignment from ``text-align``; empty when unset."""
    value = style.get("text-align", "")
    if value == "start":
        return "left"
    if value == "end":
        return "right"
    return value if value in ALIGNMENTS else ""


def font_size(style: Mapping[str, str]) -> dict[str, Any] | None:
    size = parse_px(style.get("font-size"))
    return {"size": round(size, 2), "unit": "px"} if size else None


def link_setting(anchor: DOMNode | None) -> dict[str, str] | None:
    if anchor is None or not anchor.href:
        return None
    return {
        "url": anchor.href,
        "is_external": "on" if anchor.get("target") == "_blank" else "",
        "nofollow": "on" if "nofollow" in (anchor.get("rel") or "") else "",
    }


def _compact(settings: dict[str, Any]) -> dict[str, Any]:
    """Drop settings without a value so Elementor applies its own defaults."""
    return {key: value for key, value in settings.items() if value not in (None, "")}


class HeadingMapper(WidgetMapper):
    """Maps headings to the ``heading`` widget."""

    COMPONENT_TYPES = (ComponentType.HEADING,)
    WIDGET_TYPE = "heading"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        style = context.accessor.computed_style(element)
        return _compact(
            {
                "title": text_of(element),
                "header_size": element.tag if element.tag in HEADING_TAGS else "h2",
                "align": alignment(style),
                "title_color": rgb_to_hex(style.get("color")),
                "typography_font_size": font_size(style),
                "typography_font_weight": style.get("font-weight"),
                "link": link_setting(css.closest(element, "a[href]") or css.select_one(element, "a[href]")),
            }
        )


class TextEditorMapper(WidgetMapper):
    """Maps paragraphs and inline text to the ``text-editor`` widget."""

    COMPONENT_TYPES = (ComponentType.PARAGRAPH, ComponentType.TEXT)
    WIDGET_TYPE = "text-editor"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        style = context.accessor.computed_style(element)
        if element.tag == "p":
            editor = f"<p>{element.inner_html()}</p>"
        else:
            editor = element.outer_html()
        return _compact(
            {
                "editor": editor,
                "align": alignment(style),
                "text_color": rgb_to_hex(style.get("color")),
                "typography_font_size": font_size(style),
            }
        )


class ImageMapper(WidgetMapper):
    """Maps images and figures to the ``image`` widget."""

    COMPONENT_TYPES = (ComponentType.IMAGE,)
    WIDGET_TYPE = "image"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        img = element if element.tag == "img" else css.select_one(element, "img")

        if img is not None:
            url = image_url(img)
            alt = img.get("alt") or ""
        else:
            url = background_url(context.accessor.computed_style(element).get("background-image")) or ""
            alt = element.aria_label or ""

        caption = css.select_one(element, "figcaption")
        link = link_setting(css.closest(element, "a[href]"))
        settings: dict[str, Any] = {
            "image": {"url": url, "id": "", "alt": alt},
            "image_size": "full",
            "caption_source": "custom" if caption is not None else "none",
            "caption": text_of(caption),
            "link_to": "custom" if link else "none",
            "link": link,
        }

        box = context.accessor.bounding_box(img or element)
        if box is not None and box.width > 0:
            settings["width"] = {"size": round(box.width), "unit": "px"}
        return _compact(settings)


class ButtonMapper(WidgetMapper):
    """Maps buttons and call-to-action links to the ``button`` widget."""

    COMPONENT_TYPES = (ComponentType.BUTTON,)
    WIDGET_TYPE = "button"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        style = context.accessor.computed_style(element)
        anchor = element if element.tag == "a" else css.closest(element, "a[href]") or css.select_one(element, "a[href]")
        icon = icon_class(element)

        return _compact(
            {
                "text": text_without_icons(element) or element.get("value") or element.aria_label or "Click here",
                "link": link_setting(anchor),
                "size": "md",
                "align": alignment(context.accessor.computed_style(element.parent)) if element.parent else "",
                "selected_icon": icon_setting(icon) if icon else None,
                "background_color": rgb_to_hex(style.get("background-color")),
                "button_text_color": rgb_to_hex(style.get("color")),
                "typography_font_size": font_size(style),
            }
        )


class BlockquoteMapper(WidgetMapper):
    """Maps quotations to the ``blockquote`` widget."""

    COMPONENT_TYPES = (ComponentType.BLOCKQUOTE,)
    WIDGET_TYPE = "blockquote"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        author = css.select_one(element, 'cite, footer, [class*="author"]')
        content = element.text_content
        if author is not None and author.text_content:
            content = content.replace(author.text_content, "", 1)

        return {
            "blockquote_skin": "border",
            "blockquote_content": " ".join(content.split()),
            "author_name": text_of(author).lstrip("—–- ").strip(),
            "tweet_button": "no",
        }


class IconListMapper(WidgetMapper):
    """Maps lists and navigation menus to the ``icon-list`` widget."""

    COMPONENT_TYPES = (ComponentType.LIST, ComponentType.MENU)
    WIDGET_TYPE = "icon-list"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        is_menu = component.component_type == ComponentType.MENU

        entries = []
        if is_menu:
            for link in outermost(css.select(element, "a")):
                entries.append((text_without_icons(link), icon_class(link), link))
        else:
            for item in outermost(css.select(element, "li")):
                anchor = css.select_one(item, "a[href]")
                entries.append((text_without_icons(item), icon_class(item), anchor))

        icon_list = []
        for text, icon, anchor in entries:
            if not text:
                continue
            entry: dict[str, Any] = {"_id": context.ids.next(), "text": text, "selected_icon": icon_setting(icon)}
            link = link_setting(anchor)
            if link:
                entry["link"] = link
            icon_list.append(entry)

        return {"view": "inline" if is_menu else "traditional", "icon_list": icon_list}


class HtmlFallbackMapper(WidgetMapper):
    """
    Emits the component's markup as an ``html`` widget.

    Accepts unknown components and any plugin-defined custom type that has
    no dedicated mapper.
    """

    COMPONENT_TYPES = (ComponentType.UNKNOWN,)
    WIDGET_TYPE = "html"

    def supports(self, component_type: ComponentKind) -> bool:
        return isinstance(component_type, CustomComponentType) or super().supports(component_type)

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        return {"html": component.element.outer_html()}
