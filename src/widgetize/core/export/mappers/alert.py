"""Alert / notice mapper."""

from __future__ import annotations

from typing import Any, Literal

from widgetize.core.dom import selector as css
from widgetize.core.dom.models import DOMNode
from widgetize.core.export.base import ExportContext, WidgetMapper, icon_class, icon_setting, text_of
from widgetize.core.recognition.engine import RecognizedComponent
from widgetize.core.recognition.types import ComponentType

AlertType = Literal["info", "success", "warning", "danger"]

TITLE_MARKERS = 'strong, b, [class*="title"], [class*="heading"]'
DISMISS_MARKERS = '[class*="close"], [class*="dismiss"], [data-dismiss], [data-bs-dismiss], button[aria-label*="close" i]'

CLASS_KEYWORDS: list[tuple[AlertType, tuple[str, ...]]] = [
    ("success", ("success", "check")),
    ("warning", ("warning", "warn")),
    ("danger", ("danger", "error", "fail")),
    ("info", ("info", "notice")),
]

TEXT_KEYWORDS: list[tuple[AlertType, tuple[str, ...]]] = [
    ("success", ("success", "complete")),
    ("warning", ("warning", "caution")),
    ("danger", ("error", "failed")),
]

DEFAULT_ICONS: dict[AlertType, str] = {
    "info": "fas fa-info-circle",
    "success": "fas fa-check-circle",
    "warning": "fas fa-exclamation-triangle",
    "danger": "fas fa-times-circle",
}

TYPE_COLORS: dict[AlertType, dict[str, str]] = {
    "info": {"background": "#d1ecf1", "border_color": "#bee5eb", "title_color": "#0c5460"},
    "success": {"background": "#d4edda", "border_color": "#c3e6cb", "title_color": "#155724"},
    "warning": {"background": "#fff3cd", "border_color": "#ffeaa7", "title_color": "#856404"},
    "danger": {"background": "#f8d7da", "border_color": "#f5c6cb", "title_color": "#721c24"},
}


def detect_alert_type(element: DOMNode) -> AlertType:
    """Classify an alert by its class names, then by its wording."""
    classes = element.class_name.lower()
    for alert_type, keywords in CLASS_KEYWORDS:
        if any(keyword in classes for keyword in keywords):
            return alert_type

    if (element.role or "").lower() == "alert":
        text = element.text_content.lower()
        for alert_type, keywords in TEXT_KEYWORDS:
            if any(keyword in text for keyword in keywords):
                return alert_type

    return "info"


class AlertMapper(WidgetMapper):
    """Maps notices and callouts to the ``alert`` widget."""

    COMPONENT_TYPES = (ComponentType.ALERT,)
    WIDGET_TYPE = "alert"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        alert_type = detect_alert_type(element)
        title = self._title(element)
        dismiss = css.select_one(element, DISMISS_MARKERS)
        colors = TYPE_COLORS[alert_type]

        return {
            "alert_type": alert_type,
            "alert_title": title,
            "alert_description": self._description(element, title, dismiss),
            "show_dismiss": "show" if dismiss is not None else "hide",
            "selected_icon": icon_setting(icon_class(element) or DEFAULT_ICONS[alert_type]),
            "background": colors["background"],
            "border_color": colors["border_color"],
            "title_color": colors["title_color"],
            "description_color": colors["title_color"],
        }

    @staticmethod
    def _title(element: DOMNode) -> str:
        heading = css.select_one(element, TITLE_MARKERS) or css.select_one(element, "h1, h2, h3, h4, h5, h6")
        if heading is not None:
            return text_of(heading)
        return element.get("data-title") or ""

    @staticmethod
    def _description(element: DOMNode, title: str, dismiss: DOMNode | None) -> str:
        text = element.text_content
        if title:
            text = text.replace(title, "", 1)
        if dismiss is not None and dismiss.text_content:
            text = text.replace(dismiss.text_content, "", 1)
        return " ".join(text.split())
