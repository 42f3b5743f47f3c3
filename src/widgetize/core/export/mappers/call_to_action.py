"""Call to action mapper."""

from __future__ import annotations

from typing import Any

from widgetize.core.dom import selector as css
from widgetize.core.export.base import ExportContext, WidgetMapper, background_url, rgb_to_hex, text_of
from widgetize.core.export.mappers.basic import _compact, alignment, link_setting
from widgetize.core.recognition.catalog.predicates import BUTTONS
from widgetize.core.recognition.engine import RecognizedComponent
from widgetize.core.recognition.types import ComponentType

RIBBON_MARKERS = '[class*="ribbon"], [class*="badge"]'


class CallToActionMapper(WidgetMapper):
    """Maps promotional blocks with a heading and a button to the ``call-to-action`` widget."""

    COMPONENT_TYPES = (ComponentType.CALL_TO_ACTION,)
    WIDGET_TYPE = "call-to-action"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        accessor = context.accessor
        style = accessor.computed_style(element)

        title = css.select_one(element, "h1, h2, h3, h4")
        description = css.select_one(element, "p")
        button = css.select_one(element, BUTTONS)
        ribbon = css.select_one(element, RIBBON_MARKERS)
        anchor = button if button is not None and button.tag == "a" else css.select_one(element, "a[href]")

        title_style = accessor.computed_style(title) if title is not None else {}
        description_style = accessor.computed_style(description) if description is not None else {}
        button_style = accessor.computed_style(button) if button is not None else {}
        image = background_url(style.get("background-image"))

        settings = _compact(
            {
                "skin": "cover" if image else "classic",
                "title": text_of(title),
                "description": text_of(description),
                "button": text_of(button, "Learn More"),
                "link": link_setting(anchor),
                "ribbon_title": text_of(ribbon),
                "alignment": alignment(style),
                "background_color": rgb_to_hex(style.get("background-color")),
                "title_color": rgb_to_hex(title_style.get("color")),
                "description_color": rgb_to_hex(description_style.get("color")),
                "button_text_color": rgb_to_hex(button_style.get("color")),
                "button_background_color": rgb_to_hex(button_style.get("background-color")),
            }
        )
        if image:
            settings["bg_image"] = {"url": image, "id": ""}
        return settings
