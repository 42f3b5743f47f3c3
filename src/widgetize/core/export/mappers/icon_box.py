"""Icon box mapper."""

from __future__ import annotations

from typing import Any

from widgetize.core.dom import selector as css
from widgetize.core.dom.accessor import parse_px
from widgetize.core.dom.models import DOMNode
from widgetize.core.export.base import ExportContext, WidgetMapper, icon_class, icon_setting, rgb_to_hex, text_of
from widgetize.core.export.mappers.basic import HEADING_TAGS, _compact, font_size, link_setting
from widgetize.core.recognition.engine import RecognizedComponent
from widgetize.core.recognition.types import ComponentType

ICON_MARKERS = ('i[class*="fa-"], svg', 'img[class*="icon"], [class*="icon"]')
DESCRIPTION_MARKERS = 'p, [class*="description"], [class*="desc"], [class*="text"]'
HOVER_ANIMATIONS = ("grow", "shrink", "pulse", "float", "bob", "rotate")


def icon_position(element: DOMNode, icon: DOMNode | None, heading: DOMNode | None, style: dict[str, str]) -> str:
    """
    Elementor ``position``: ``top``, ``left`` or ``right``.

    A row layout puts the icon beside the text, on whichever side it
    comes first in document order; anything else stacks it on top.
    """
    direction = style.get("flex-direction", "row")
    if style.get("display") not in ("flex", "inline-flex") or direction.startswith("column"):
        return "top"
    if icon is None or heading is None:
        return "top"
    order = list(element.iter())
    first = _index_of(order, icon) < _index_of(order, heading)
    if direction == "row-reverse":
        first = not first
    return "left" if first else "right"


def _index_of(nodes: list[DOMNode], target: DOMNode) -> int:
    return next(i for i, node in enumerate(nodes) if node is target)


class IconBoxMapper(WidgetMapper):
    """Maps feature boxes with an icon, title and description to the ``icon-box`` widget."""

    COMPONENT_TYPES = (ComponentType.ICON_BOX,)
    WIDGET_TYPE = "icon-box"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        accessor = context.accessor
        style = accessor.computed_style(element)

        heading = css.select_one(element, ", ".join(HEADING_TAGS))
        icon = next((found for markers in ICON_MARKERS if (found := css.select_one(element, markers))), None)
        description = next(
            (node for node in css.select(element, DESCRIPTION_MARKERS) if node is not heading and node.text_content),
            None,
        )
        anchor = element if element.tag == "a" else css.select_one(element, "a[href]")

        icon_size = None
        if icon is not None:
            size = parse_px(accessor.computed_style(icon).get("font-size"))
            if not size:
                box = accessor.bounding_box(icon)
                size = box.width if box is not None else 0
            icon_size = {"size": round(size), "unit": "px"} if size else None

        hover = next((name for name in HOVER_ANIMATIONS if f"hover-{name}" in (element.class_name or "")), "")
        heading_style = accessor.computed_style(heading) if heading is not None else {}
        description_style = accessor.computed_style(description) if description is not None else {}

        return _compact(
            {
                "selected_icon": icon_setting(icon_class(element) or "fas fa-star"),
                "title_text": text_of(heading),
                "description_text": text_of(description),
                "title_size": heading.tag if heading is not None else "h3",
                "link": link_setting(anchor),
                "position": icon_position(element, icon, heading, dict(style)),
                "primary_color": rgb_to_hex(accessor.computed_style(icon).get("color")) if icon is not None else "",
                "title_color": rgb_to_hex(heading_style.get("color")),
                "description_color": rgb_to_hex(description_style.get("color")),
                "title_typography_font_size": font_size(heading_style),
                "icon_size": icon_size,
                "hover_animation": hover,
            }
        )
