"""Snapshot capture from a live browser page and snapshot file IO."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

import structlog

from widgetize.core.dom.models import BoundingBox, DOMNode, DOMSnapshot, Viewport
from widgetize.core.models.config import CaptureConfig

logger = structlog.get_logger(__name__)


class IPage(Protocol):
    """Protocol for browser page interface."""

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        """Evaluate JavaScript expression."""
        ...

    async def url(self) -> str:
        """Get current page URL."""
        ...

    async def title(self) -> str:
        """Get page title."""
        ...

    @property
    def viewport_size(self) -> dict[str, int] | None:
        """Get viewport size."""
        ...


# Computed style properties recorded for every element
CAPTURED_STYLE_PROPERTIES = (
    "display",
    "position",
    "visibility",
    "float",
    "flex-direction",
    "flex-wrap",
    "justify-content",
    "align-items",
    "gap",
    "column-gap",
    "grid-template-columns",
    "width",
    "height",
    "min-height",
    "max-width",
    "top",
    "z-index",
    "overflow",
    "color",
    "background-color",
    "background-image",
    "font-size",
    "font-weight",
    "font-family",
    "text-align",
    "line-height",
    "border-left-width",
    "border-left-color",
    "border-radius",
    "padding",
    "margin",
    "cursor",
    "opacity",
)

# JavaScript for snapshot capture
CAPTURE_SCRIPT = """
([maxDepth, maxTextLength, styleProps]) => {
    let counter = 0;
    const scrollX = window.scrollX || 0;
    const scrollY = window.scrollY || 0;

    const captureNode = (element, depth) => {
        if (depth > maxDepth || !element || element.nodeType !== 1) {
            return null;
        }

        const tag = element.tagName.toLowerCase();
        if (tag === 'script' || tag === 'style' || tag === 'noscript' || tag === 'template') {
            return null;
        }

        const rect = element.getBoundingClientRect();
        const style = window.getComputedStyle(element);

        const attributes = {};
        for (const attr of element.attributes) {
            attributes[attr.name] = attr.value;
        }

        // Direct text only, children carry their own
        let text = '';
        for (const child of element.childNodes) {
            if (child.nodeType === 3) {
                text += child.textContent;
            }
        }
        text = text.replace(/\\s+/g, ' ').trim();

        const computedStyle = {};
        for (const prop of styleProps) {
            const value = style.getPropertyValue(prop);
            if (value) {
                computedStyle[prop] = value;
            }
        }

        const node = {
            tag,
            nodeId: 'n' + (counter++),
            text: text.substring(0, maxTextLength),
            attributes,
            computedStyle,
            boundingBox: {
                x: rect.x + scrollX,
                y: rect.y + scrollY,
                width: rect.width,
                height: rect.height
            },
            children: []
        };

        for (const child of element.children) {
            const childNode = captureNode(child, depth + 1);
            if (childNode) {
                node.children.push(childNode);
            }
        }

        return node;
    };

    const doc = document.documentElement;
    return {
        root: captureNode(document.body, 0),
        documentHeight: Math.max(doc.scrollHeight, document.body ? document.body.scrollHeight : 0),
        viewportWidth: window.innerWidth,
        viewportHeight: window.innerHeight
    };
}
"""


class PageCapture:
    """
    Captures a DOMSnapshot from a live browser page.

    The capture records structure, a fixed set of computed style
    properties and document-relative geometry so recognition can run
    offline afterwards.
    """

    def __init__(self, config: CaptureConfig | None = None) -> None:
        """
        Initialize page capture.

        Args:
            config: Optional capture configuration
        """
        self.config = config or CaptureConfig()

    async def capture(self, page: IPage) -> DOMSnapshot:
        """
        Capture a snapshot of the page's body subtree.

        Args:
            page: Browser page to capture

        Returns:
            DOMSnapshot with the element tree and viewport state

        Raises:
            ValueError: If the page returned no body element
        """
        logger.debug("Capturing page")

        url = await page.url()
        title = await page.title()

        raw = await page.evaluate(
            CAPTURE_SCRIPT,
            [self.config.max_depth, self.config.max_text_length, list(CAPTURED_STYLE_PROPERTIES)],
        )
        if not raw or not raw.get("root"):
            logger.warning("Page capture returned empty", url=url)
            raise ValueError(f"No document body captured from {url or 'page'}")

        size = page.viewport_size or {}
        viewport = Viewport(
            width=int(raw.get("viewportWidth") or size.get("width") or self.config.viewport_width),
            height=int(raw.get("viewportHeight") or size.get("height") or self.config.viewport_height),
            document_height=int(raw.get("documentHeight") or 0),
        )

        root = self._build_tree(raw["root"])
        snapshot = DOMSnapshot(
            root=root,
            url=url,
            title=title,
            viewport=viewport,
            timestamp=datetime.now(),
        )

        logger.info(
            "Page captured",
            url=url,
            nodes=snapshot.node_count,
            document_height=viewport.document_height,
        )
        return snapshot

    def _build_tree(self, raw_node: dict[str, Any]) -> DOMNode:
        """Build DOMNode tree from raw capture data."""
        bounding_box = None
        if raw_node.get("boundingBox"):
            bounding_box = BoundingBox.from_dict(raw_node["boundingBox"])

        node = DOMNode(
            tag=raw_node.get("tag", "div"),
            node_id=raw_node.get("nodeId", ""),
            text=raw_node.get("text", ""),
            attributes=raw_node.get("attributes", {}),
            computed_style=raw_node.get("computedStyle", {}),
            bounding_box=bounding_box,
        )

        for child_data in raw_node.get("children", []):
            node.append(self._build_tree(child_data))

        return node


def load_snapshot(path: str | Path) -> DOMSnapshot:
    """
    Load a snapshot from a JSON file.

    Args:
        path: Path to the snapshot file

    Returns:
        Parsed DOMSnapshot
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    snapshot = DOMSnapshot.from_dict(data)
    logger.debug("Snapshot loaded", path=str(path), nodes=snapshot.node_count)
    return snapshot


def save_snapshot(snapshot: DOMSnapshot, path: str | Path) -> None:
    """Write a snapshot to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(snapshot.to_dict(), f, indent=2)
