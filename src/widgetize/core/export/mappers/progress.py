"""Progress bar mapper."""

from __future__ import annotations

import re
from typing import Any

from widgetize.core.dom import selector as css
from widgetize.core.dom.models import DOMNode
from widgetize.core.export.base import ExportContext, WidgetMapper, rgb_to_hex, text_of
from widgetize.core.recognition.engine import RecognizedComponent
from widgetize.core.recognition.types import ComponentType

DEFAULT_PERCENT = 75
PERCENT_TEXT = re.compile(r"(\d{1,3}(?:\.\d+)?)\s*%")
PERCENT_CLASS = re.compile(r"(?:w|width|progress|percent)-(\d{1,3})\b")
TITLE_MARKERS = '[class*="progress-title"], [class*="skill-name"], [class*="title"], [class*="label"], label'
FILL_MARKERS = '[class*="progress-bar"], [class*="bar-fill"], [class*="fill"], [role="progressbar"]'
PROGRESS_TYPES = ("info", "success", "warning", "danger")


def _number(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return float(value.strip().rstrip("%"))
    except ValueError:
        return None


def progress_percent(element: DOMNode, fill: DOMNode | None, context: ExportContext) -> int:
    """
    Completion percentage, clamped to 0..100.

    Sources in order: data attributes, ``<progress>`` value and max, ARIA
    values, the fill element's percentage width, utility class names and
    finally a percentage in the text.
    """
    for node in (element, fill):
        if node is None:
            continue
        for name in ("data-percentage", "data-percent", "data-value", "data-progress"):
            value = _number(node.get(name))
            if value is not None:
                return _clamp(value)

    if element.tag == "progress":
        value = _number(element.get("value"))
        maximum = _number(element.get("max")) or 1.0
        if value is not None and maximum > 0:
            return _clamp(value / maximum * 100)

    aria = element if element.get("aria-valuenow") else css.select_one(element, "[aria-valuenow]")
    if aria is not None:
        value = _number(aria.get("aria-valuenow"))
        low = _number(aria.get("aria-valuemin")) or 0.0
        high = _number(aria.get("aria-valuemax")) or 100.0
        if value is not None and high > low:
            return _clamp((value - low) / (high - low) * 100)

    if fill is not None:
        width = context.accessor.computed_style(fill).get("width", "")
        if width.endswith("%"):
            value = _number(width)
            if value is not None:
                return _clamp(value)

    for node in (fill, element):
        match = PERCENT_CLASS.search(node.class_name or "") if node is not None else None
        if match:
            return _clamp(float(match.group(1)))

    match = PERCENT_TEXT.search(element.text_content)
    if match:
        return _clamp(float(match.group(1)))
    return DEFAULT_PERCENT


def _clamp(value: float) -> int:
    return max(0, min(100, round(value)))


def progress_title(element: DOMNode) -> str:
    """Label from a title element, a data attribute or the preceding sibling."""
    marker = next((node for node in css.select(element, TITLE_MARKERS) if node.text_content), None)
    if marker is not None:
        return PERCENT_TEXT.sub("", text_of(marker)).strip()
    for name in ("data-title", "data-label", "aria-label"):
        if element.get(name):
            return element.get(name) or ""
    if element.parent is not None:
        siblings = element.parent.children
        position = next(i for i, node in enumerate(siblings) if node is element)
        if position > 0:
            return PERCENT_TEXT.sub("", text_of(siblings[position - 1])).strip()
    return ""


class ProgressBarMapper(WidgetMapper):
    """Maps progress and skill bars to the ``progress`` widget."""

    COMPONENT_TYPES = (ComponentType.PROGRESS_BAR,)
    WIDGET_TYPE = "progress"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        accessor = context.accessor
        fill = css.select_one(element, FILL_MARKERS)

        classes = element.class_name or ""
        progress_type = next((name for name in PROGRESS_TYPES if name in classes), "")

        settings: dict[str, Any] = {
            "title": progress_title(element),
            "percent": {"unit": "%", "size": progress_percent(element, fill, context)},
            "display_percentage": "show",
            "progress_type": progress_type,
        }

        inner = text_of(fill)
        if inner and not PERCENT_TEXT.fullmatch(inner):
            settings["inner_text"] = inner

        bar_color = rgb_to_hex(accessor.computed_style(fill).get("background-color")) if fill is not None else ""
        if bar_color:
            settings["bar_color"] = bar_color
        track_color = rgb_to_hex(accessor.computed_style(element).get("background-color"))
        if track_color:
            settings["bar_bg_color"] = track_color
        return settings
