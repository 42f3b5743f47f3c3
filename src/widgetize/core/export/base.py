"""Widget mapper contract and shared extraction helpers."""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import structlog

from widgetize.core.analysis import Analysis, StructuralAnalyzer
from widgetize.core.dom import selector as css
from widgetize.core.dom.accessor import IStyleAccessor, SnapshotAccessor
from widgetize.core.dom.models import DOMNode
from widgetize.core.export.ids import IdGenerator
from widgetize.core.export.models import ElementorWidget
from widgetize.core.recognition.engine import RecognizedComponent
from widgetize.core.recognition.types import ComponentKind

logger = structlog.get_logger(__name__)

ICON_FAMILIES = frozenset({"fa", "fas", "far", "fab", "fal", "fad"})
ICON_STYLE_CLASS = re.compile(r"^fa-(?:solid|regular|brands|light|duotone|thin|sharp)$")
ICON_ELEMENTS = frozenset({"i", "svg", "img"})
RGB_COLOR = re.compile(r"rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([\d.]+)\s*)?\)")
CSS_URL = re.compile(r"""url\(\s*["']?(.*?)["']?\s*\)""")
ICON_LIBRARIES = {"fab": "fa-brands", "far": "fa-regular"}
TRUTHY = frozenset({"", "true", "1", "yes", "on"})


class ExportError(Exception):
    """Base exception for export failures."""

    pass


class UnsupportedComponentError(ExportError):
    """A mapper was handed a component type it does not map."""

    def __init__(self, mapper: str, component_type: ComponentKind) -> None:
        self.mapper = mapper
        self.component_type = component_type
        super().__init__(f"{mapper} cannot map '{component_type.value}' components")


class MissingMapperError(ExportError):
    """No mapper or layout rule exists for a component type."""

    def __init__(self, component_types: list[str]) -> None:
        self.component_types = component_types
        super().__init__(f"No mapper registered for: {', '.join(component_types)}")


@dataclass
class ExportContext:
    """
    Per-export state shared by all mappers.

    A fresh context is created for every export call so ids are unique
    within that call only.
    """

    accessor: IStyleAccessor = field(default_factory=SnapshotAccessor)
    ids: IdGenerator = field(default_factory=IdGenerator)
    analyzer: StructuralAnalyzer | None = None

    def __post_init__(self) -> None:
        if self.analyzer is None:
            self.analyzer = StructuralAnalyzer(self.accessor)

    def analysis(self, component: RecognizedComponent) -> Analysis:
        """Get the component's structural analysis, running the analyzer once."""
        if component.analyzer_output is None:
            component.attach_analysis(self.analyzer.analyze(component.component_type, component.element))
        return component.analyzer_output

    def widget(self, widget_type: str, settings: dict[str, Any]) -> ElementorWidget:
        """Build a widget node with a fresh id."""
        return ElementorWidget(id=self.ids.next(), el_type="widget", widget_type=widget_type, settings=settings)


class WidgetMapper(ABC):
    """
    Base class for component-to-widget mappers.

    Subclasses must:
    1. Define COMPONENT_TYPES - component types this mapper accepts
    2. Define WIDGET_TYPE - the Elementor widget slug produced
    3. Implement build_settings() - extract the widget settings

    build_settings() must not raise for missing optional markup; every
    setting has a fallback value.
    """

    COMPONENT_TYPES: tuple[ComponentKind, ...] = ()
    WIDGET_TYPE: str = ""

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def supports(self, component_type: ComponentKind) -> bool:
        """Check whether this mapper accepts a component type."""
        return component_type in self.COMPONENT_TYPES

    def map_to_target(self, component: RecognizedComponent, context: ExportContext) -> ElementorWidget:
        """
        Map a recognized component to an Elementor widget.

        Args:
            component: Component of one of COMPONENT_TYPES
            context: Export context providing ids and analysis

        Returns:
            Widget node with a freshly generated id

        Raises:
            UnsupportedComponentError: If the component type is not accepted
        """
        if not self.supports(component.component_type):
            raise UnsupportedComponentError(self.name, component.component_type)

        settings = self.build_settings(component, context)
        return context.widget(self.WIDGET_TYPE, settings)

    @abstractmethod
    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        """Extract widget settings from the component's element."""
        ...


# Extraction helpers


def text_of(node: DOMNode | None, default: str = "") -> str:
    """Whitespace-normalized subtree text, or the default when empty."""
    if node is None:
        return default
    return node.text_content or default


def text_without_icons(node: DOMNode) -> str:
    """Subtree text with icon and image elements left out."""
    parts = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current is not node and current.tag in ICON_ELEMENTS:
            continue
        if current.text:
            parts.append(current.text)
        stack.extend(reversed(current.children))
    return " ".join(" ".join(parts).split())


def icon_class(node: DOMNode | None) -> str | None:
    """
    Extract a Font Awesome icon class from a node's subtree.

    Returns:
        Family and icon classes (e.g. ``"fas fa-check"``), or None
    """
    if node is None:
        return None
    icon = node if css.matches(node, 'i[class*="fa-"]') else css.select_one(node, 'i[class*="fa-"]')
    if icon is None:
        return None

    classes = icon.class_list
    name = next((c for c in classes if c.startswith("fa-") and not ICON_STYLE_CLASS.match(c)), None)
    if name is None:
        return None
    family = next((c for c in classes if c in ICON_FAMILIES and c != "fa"), "fas")
    return f"{family} {name}"


def icon_setting(value: str | None) -> dict[str, str]:
    """Elementor icon control value; the library follows the family class."""
    if not value:
        return {"value": "", "library": ""}
    family = value.split()[0]
    return {"value": value, "library": ICON_LIBRARIES.get(family, "fa-solid")}


def find_by_id(node: DOMNode, element_id: str) -> DOMNode | None:
    """Find an element by id anywhere in the tree the node belongs to."""
    root = node
    for ancestor in node.ancestors():
        root = ancestor
    for candidate in root.iter():
        if candidate.id_attr == element_id:
            return candidate
    return None


def rgb_to_hex(value: str | None) -> str:
    """
    Convert a computed ``rgb()``/``rgba()`` colour to ``#rrggbb``.

    Fully transparent colours and unparseable values yield ``""``; hex
    values pass through.
    """
    if not value:
        return ""
    value = value.strip()
    if value.startswith("#"):
        return value.lower()
    match = RGB_COLOR.fullmatch(value)
    if not match:
        return ""
    red, green, blue, alpha = match.groups()
    if alpha is not None and float(alpha) == 0:
        return ""
    return "#{:02x}{:02x}{:02x}".format(*(min(int(c), 255) for c in (red, green, blue)))


def background_url(value: str | None) -> str | None:
    """First ``url(...)`` in a ``background-image`` value."""
    if not value:
        return None
    match = CSS_URL.search(value)
    return (match.group(1) or None) if match else None


def image_url(node: DOMNode) -> str:
    """Image source, honouring common lazy-load attributes."""
    return node.get("src") or node.get("data-src") or node.get("data-lazy") or node.get("data-lazy-src") or ""


def is_truthy(value: str | None) -> bool:
    """Interpret a data attribute as a flag; a bare attribute counts as set."""
    return value is not None and value.strip().lower() in TRUTHY


def parse_int(value: Any) -> int | None:
    """Parse an integer from an attribute or JSON value."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return None


def data_json(node: DOMNode, attribute: str) -> dict[str, Any]:
    """Parse a JSON options attribute such as ``data-slick``; {} when absent or invalid."""
    raw = node.get(attribute)
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.debug("Ignoring malformed JSON attribute", attribute=attribute, node_id=node.node_id)
        return {}
    return data if isinstance(data, dict) else {}


def yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def outermost(nodes: list[DOMNode]) -> list[DOMNode]:
    """Drop nodes nested inside other nodes of the list."""
    chosen = {id(node) for node in nodes}
    return [node for node in nodes if not any(id(a) in chosen for a in node.ancestors())]
