"""Style and geometry access for DOM nodes.

Recognition reads structure (tag, attributes, children) straight from the
node tree, but computed style, geometry and rendered text go through an
accessor so the same engine can run against a captured snapshot or a live
page.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

import structlog

from widgetize.core.dom.models import BoundingBox, DOMNode, Viewport

logger = structlog.get_logger(__name__)


class AccessorError(Exception):
    """Raised when style, geometry or text cannot be read for a node."""

    def __init__(self, node: DOMNode, message: str) -> None:
        self.node = node
        super().__init__(f"<{node.tag} id={node.node_id or '?'}>: {message}")


@runtime_checkable
class IStyleAccessor(Protocol):
    """Supplies rendered state for DOM nodes."""

    def computed_style(self, node: DOMNode) -> Mapping[str, str]:
        """Resolved CSS properties, keyed by property name."""
        ...

    def bounding_box(self, node: DOMNode) -> BoundingBox | None:
        """Document-relative geometry, or None when not rendered."""
        ...

    def text(self, node: DOMNode) -> str:
        """Rendered text of the node's subtree."""
        ...

    def viewport(self) -> Viewport:
        """Viewport and document dimensions."""
        ...


class SnapshotAccessor:
    """Accessor backed by a captured snapshot.

    Every call reads the node afresh; nothing is cached between calls.
    """

    def __init__(self, viewport: Viewport | None = None) -> None:
        self._viewport = viewport or Viewport()

    def computed_style(self, node: DOMNode) -> Mapping[str, str]:
        return dict(node.computed_style)

    def bounding_box(self, node: DOMNode) -> BoundingBox | None:
        return node.bounding_box

    def text(self, node: DOMNode) -> str:
        return node.text_content

    def viewport(self) -> Viewport:
        return self._viewport


def style_value(accessor: IStyleAccessor, node: DOMNode, prop: str, default: str = "") -> str:
    """Read a single computed style property."""
    return accessor.computed_style(node).get(prop, default)


def parse_px(value: str | None) -> float | None:
    """Parse a CSS pixel length such as ``"24px"``.

    Returns None for keywords (``normal``, ``auto``) and non-pixel units.
    """
    if not value:
        return None
    value = value.strip()
    if value.endswith("px"):
        value = value[:-2]
    try:
        return float(value)
    except ValueError:
        return None
