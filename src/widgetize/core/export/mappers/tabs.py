"""Tabs and toggle (accordion) mappers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from widgetize.core.dom import selector as css
from widgetize.core.dom.models import DOMNode
from widgetize.core.export.base import (
    ExportContext,
    WidgetMapper,
    find_by_id,
    icon_class,
    icon_setting,
    outermost,
    text_of,
    text_without_icons,
)
from widgetize.core.recognition.engine import RecognizedComponent
from widgetize.core.recognition.types import ComponentType

TAB_LIST = '[role="tablist"], .nav-tabs, [class*="tab-list"]'
TAB_CONTENT = '.tab-content, [class*="tab-content"]'
TAB_BUTTONS = '[role="tab"], .nav-link, [class*="tab"]'
TAB_PANELS = '[role="tabpanel"], .tab-pane, [class*="tab-pane"]'
TAB_HEADERS = '[class*="tab-header"], [class*="tab-title"], [data-tab]'
TAB_BODIES = '[class*="tab-body"], [class*="tab-panel"], [class*="tab-content"]'

ACCORDION_ITEMS = '.accordion-item, [class*="accordion-item"]'
ACCORDION_HEADER = '.accordion-header, [class*="header"]'
ACCORDION_BODY = '.accordion-body, .accordion-collapse, [class*="body"]'
COLLAPSIBLES = '[class*="collapse"], [class*="toggle"], [class*="expandable"]'
COLLAPSIBLE_HEADER = '[class*="header"], [class*="title"], [class*="trigger"], [class*="toggle"]'
COLLAPSIBLE_BODY = '[class*="content"], [class*="body"], [class*="panel"]'


@dataclass
class PanelItem:
    """One title/content pair extracted from tabbed or collapsible markup."""

    title: str
    content: str
    icon: str | None = None
    is_open: bool = False


def details_content(details: DOMNode) -> str:
    """Inner HTML of a ``<details>`` element without its ``<summary>``."""
    parts = [child.outer_html() for child in details.children if child.tag != "summary"]
    return "".join(parts).strip()


def panel_content(node: DOMNode) -> str:
    if node.tag == "details":
        return details_content(node)
    return node.inner_html().strip()


def extract_tabs(element: DOMNode) -> list[PanelItem]:
    """
    Extract tab title/content pairs.

    Tries, in order, a tab list paired with tab panels, header/body class
    pairs and details/summary elements.
    """
    tab_list = css.select_one(element, TAB_LIST)
    tab_content = css.select_one(element, TAB_CONTENT)
    if tab_list is not None and tab_content is not None:
        buttons = outermost(css.select(tab_list, TAB_BUTTONS))
        panels = outermost(css.select(tab_content, TAB_PANELS))
        items = []
        for button, panel in zip(buttons, panels):
            controlled = button.get("aria-controls")
            target = find_by_id(element, controlled) if controlled else None
            items.append(
                PanelItem(
                    title=text_without_icons(button) or "Tab",
                    content=panel_content(target or panel),
                    icon=icon_class(button),
                    is_open=button.get("aria-selected") == "true" or button.has_class("active"),
                )
            )
        return items

    headers = outermost(css.select(element, TAB_HEADERS))
    bodies = outermost(css.select(element, TAB_BODIES))
    if headers and bodies:
        return [
            PanelItem(title=text_without_icons(header) or "Tab", content=panel_content(body), icon=icon_class(header))
            for header, body in zip(headers, bodies)
        ]

    items = []
    for details in css.select(element, "details"):
        summary = next((child for child in details.children if child.tag == "summary"), None)
        if summary is not None:
            items.append(
                PanelItem(
                    title=text_of(summary, "Tab"),
                    content=details_content(details),
                    icon=icon_class(summary),
                    is_open="open" in details.attributes,
                )
            )
    return items


def extract_toggle_items(element: DOMNode) -> list[PanelItem]:
    """
    Extract collapsible title/content pairs.

    Tries, in order, accordion items, details/summary, generic collapsible
    blocks and ``aria-expanded`` triggers with ``aria-controls`` targets.
    """
    accordion = outermost(css.select(element, ACCORDION_ITEMS))
    if accordion:
        items = []
        for item in accordion:
            header = css.select_one(item, ACCORDION_HEADER)
            body = css.select_one(item, ACCORDION_BODY)
            if header is None or body is None:
                continue
            items.append(
                PanelItem(
                    title=text_of(header, "Item"),
                    content=body.inner_html().strip(),
                    icon=icon_class(header),
                    is_open=body.has_class("show"),
                )
            )
        return items

    details_nodes = css.select(element, "details")
    if details_nodes:
        items = []
        for details in details_nodes:
            summary = next((child for child in details.children if child.tag == "summary"), None)
            if summary is not None:
                items.append(
                    PanelItem(
                        title=text_of(summary, "Item"),
                        content=details_content(details),
                        icon=icon_class(summary),
                        is_open="open" in details.attributes,
                    )
                )
        return items

    collapsibles = outermost(css.select(element, COLLAPSIBLES))
    if collapsibles:
        items = []
        for item in collapsibles:
            header = css.select_one(item, COLLAPSIBLE_HEADER)
            if header is None:
                continue
            body = css.select_one(item, COLLAPSIBLE_BODY)
            if body is not None:
                content = body.inner_html().strip()
            else:
                content = "".join(c.outer_html() for c in item.children if c is not header).strip()
            items.append(
                PanelItem(
                    title=text_of(header, "Item"),
                    content=content,
                    icon=icon_class(header),
                    is_open=item.has_class("active") or item.has_class("open"),
                )
            )
        return items

    items = []
    for trigger in css.select(element, "[aria-expanded]"):
        controlled = trigger.get("aria-controls")
        target = find_by_id(element, controlled) if controlled else None
        if target is not None:
            items.append(
                PanelItem(
                    title=text_of(trigger, "Item"),
                    content=target.inner_html().strip(),
                    icon=icon_class(trigger),
                    is_open=trigger.get("aria-expanded") == "true",
                )
            )
    return items


class TabsMapper(WidgetMapper):
    """Maps tab sets to the ``tabs`` widget."""

    COMPONENT_TYPES = (ComponentType.TABS,)
    WIDGET_TYPE = "tabs"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        tabs = []
        for item in extract_tabs(element):
            tab: dict[str, Any] = {"_id": context.ids.next(), "tab_title": item.title, "tab_content": item.content}
            if item.icon:
                tab["tab_icon"] = icon_setting(item.icon)
            tabs.append(tab)

        return {
            "tabs": tabs,
            "type": self._orientation(element, context),
            "navigation_width": {"size": 25, "unit": "%"},
            "border_width": {"size": 1, "unit": "px"},
            "border_color": "#d4d4d4",
            "tab_color": "#555555",
            "tab_active_color": "#000000",
            "content_color": "#333333",
        }

    @staticmethod
    def _orientation(element: DOMNode, context: ExportContext) -> str:
        classes = element.class_name.lower()
        if "vertical" in classes:
            return "vertical"
        if "horizontal" in classes:
            return "horizontal"
        tab_list = css.select_one(element, TAB_LIST)
        if tab_list is not None and context.accessor.computed_style(tab_list).get("flex-direction") == "column":
            return "vertical"
        return "horizontal"


class ToggleMapper(WidgetMapper):
    """Maps accordions and collapsible lists to the ``toggle`` widget."""

    COMPONENT_TYPES = (ComponentType.TOGGLE,)
    WIDGET_TYPE = "toggle"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        tabs = [
            {
                "_id": context.ids.next(),
                "tab_title": item.title,
                "tab_content": item.content,
                "tab_icon": icon_setting(item.icon or "fas fa-caret-right"),
            }
            for item in extract_toggle_items(component.element)
        ]

        return {
            "tabs": tabs,
            "selected_icon": icon_setting("fas fa-caret-right"),
            "selected_active_icon": icon_setting("fas fa-caret-down"),
            "icon_align": "left",
            "title_background": "#ffffff",
            "title_color": "#333333",
            "tab_active_color": "#000000",
            "content_background_color": "#f7f7f7",
            "content_color": "#666666",
        }
