"""Flip box mapper."""

from __future__ import annotations

from typing import Any

from widgetize.core.dom import selector as css
from widgetize.core.dom.models import DOMNode
from widgetize.core.export.base import (
    ExportContext,
    WidgetMapper,
    background_url,
    icon_class,
    icon_setting,
    image_url,
    rgb_to_hex,
    text_of,
)
from widgetize.core.export.mappers.basic import link_setting
from widgetize.core.recognition.catalog.predicates import BUTTONS, FLIP_BACK, FLIP_FRONT, HEADINGS
from widgetize.core.recognition.engine import RecognizedComponent
from widgetize.core.recognition.types import ComponentType

DIRECTIONS = ("up", "down", "left", "right")
EFFECTS = ("fade", "push", "slide", "zoom-in", "zoom-out")


def faces(element: DOMNode) -> tuple[DOMNode | None, DOMNode | None]:
    """Front and back faces, falling back to the first two children."""
    front = css.select_one(element, FLIP_FRONT)
    back = css.select_one(element, FLIP_BACK)
    if front is None and element.children:
        front = element.children[0]
    if back is None and len(element.children) > 1:
        back = element.children[1]
    return front, back


def face_text(face: DOMNode | None) -> tuple[str, str]:
    if face is None:
        return "", ""
    title = css.select_one(face, HEADINGS)
    description = css.select_one(face, "p")
    return text_of(title), text_of(description)


class FlipBoxMapper(WidgetMapper):
    """Maps two-faced hover cards to the ``flip-box`` widget."""

    COMPONENT_TYPES = (ComponentType.FLIP_BOX,)
    WIDGET_TYPE = "flip-box"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        accessor = context.accessor
        front, back = faces(element)

        title_a, description_a = face_text(front)
        title_b, description_b = face_text(back)
        settings: dict[str, Any] = {
            "title_text_a": title_a,
            "description_text_a": description_a,
            "title_text_b": title_b,
            "description_text_b": description_b,
            "graphic_element": "none",
        }

        img = css.select_one(front, "img") if front is not None else None
        icon = icon_class(front)
        if img is not None and image_url(img):
            settings["graphic_element"] = "image"
            settings["image"] = {"url": image_url(img), "id": "", "alt": img.get("alt") or ""}
        elif icon:
            settings["graphic_element"] = "icon"
            settings["selected_icon"] = icon_setting(icon)

        button = css.select_one(back, BUTTONS) if back is not None else None
        if button is not None:
            settings["button_text"] = text_of(button)
        anchor = button if button is not None and button.tag == "a" else css.select_one(element, "a[href]")
        link = link_setting(anchor)
        if link:
            settings["link"] = link
            settings["link_click"] = "button" if button is not None else "box"

        classes = element.class_name or ""
        settings["flip_effect"] = next((name for name in EFFECTS if f"flip-{name}" in classes), "flip")
        settings["flip_direction"] = next((name for name in DIRECTIONS if f"flip-{name}" in classes), "right")

        box = accessor.bounding_box(element)
        if box is not None and box.height > 0:
            settings["height"] = {"size": round(box.height), "unit": "px"}

        for face, suffix in ((front, "a"), (back, "b")):
            if face is None:
                continue
            face_style = accessor.computed_style(face)
            color = rgb_to_hex(face_style.get("background-color"))
            if color:
                settings[f"background_color_{suffix}"] = color
            image = background_url(face_style.get("background-image"))
            if image:
                settings[f"background_image_{suffix}"] = {"url": image, "id": ""}
        return settings
