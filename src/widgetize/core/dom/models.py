"""Data models for captured DOM snapshots."""

from __future__ import annotations

import html
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

_WHITESPACE = re.compile(r"\s+")

VOID_ELEMENTS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
)


@dataclass
class BoundingBox:
    """Element bounding box in document coordinates."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        """Get right edge X coordinate."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Get bottom edge Y coordinate."""
        return self.y + self.height

    @property
    def center_x(self) -> float:
        """Get center X coordinate."""
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        """Get center Y coordinate."""
        return self.y + self.height / 2

    @property
    def area(self) -> float:
        """Calculate area of bounding box."""
        return self.width * self.height

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary."""
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: dict[str, float]) -> BoundingBox:
        """Create from dictionary."""
        return cls(
            x=data.get("x", 0),
            y=data.get("y", 0),
            width=data.get("width", 0),
            height=data.get("height", 0),
        )


@dataclass
class Viewport:
    """Viewport and document dimensions at capture time."""

    width: int = 1920
    height: int = 1080
    document_height: int = 0

    def __post_init__(self) -> None:
        if self.document_height < self.height:
            self.document_height = self.height

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "document_height": self.document_height,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Viewport:
        """Create from dictionary."""
        return cls(
            width=int(data.get("width", 1920)),
            height=int(data.get("height", 1080)),
            document_height=int(data.get("document_height", 0)),
        )


@dataclass
class DOMNode:
    """A captured DOM element.

    ``text`` holds the element's own text nodes only; ``text_content``
    gathers the text of the whole subtree. ``parent`` is wired up when the
    node is attached to its parent's ``children``.
    """

    tag: str
    node_id: str = ""
    text: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    computed_style: dict[str, str] = field(default_factory=dict)
    bounding_box: BoundingBox | None = None
    children: list[DOMNode] = field(default_factory=list)
    parent: DOMNode | None = field(default=None, repr=False, compare=False)
    # SoupMirror of the tree, set on the root by the selector module
    selector_cache: Any = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.tag = self.tag.lower()
        for child in self.children:
            child.parent = self

    def append(self, child: DOMNode) -> DOMNode:
        """Attach a child node and return it."""
        child.parent = self
        self.children.append(child)
        root = self
        while root.parent is not None:
            root = root.parent
        root.selector_cache = None
        return child

    @property
    def id_attr(self) -> str | None:
        """Get the id attribute."""
        return self.attributes.get("id")

    @property
    def class_name(self) -> str:
        """Get the raw class attribute."""
        return self.attributes.get("class", "")

    @property
    def class_list(self) -> list[str]:
        """Get list of CSS classes."""
        class_attr = self.class_name
        return class_attr.split() if class_attr else []

    @property
    def role(self) -> str | None:
        """Get ARIA role."""
        return self.attributes.get("role")

    @property
    def aria_label(self) -> str | None:
        """Get aria-label."""
        return self.attributes.get("aria-label")

    @property
    def href(self) -> str | None:
        """Get href attribute for links."""
        return self.attributes.get("href")

    @property
    def src(self) -> str | None:
        """Get src attribute for media."""
        return self.attributes.get("src")

    def get(self, name: str, default: str | None = None) -> str | None:
        """Get an attribute value."""
        return self.attributes.get(name, default)

    def has_class(self, name: str) -> bool:
        """Check for an exact class token."""
        return name in self.class_list

    @property
    def text_content(self) -> str:
        """Whitespace-normalized text of the whole subtree."""
        parts: list[str] = []
        for node in self.iter():
            if node.text:
                parts.append(node.text)
        return _WHITESPACE.sub(" ", " ".join(parts)).strip()

    def iter(self) -> Iterator[DOMNode]:
        """Iterate this node and its descendants in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def iter_descendants(self) -> Iterator[DOMNode]:
        """Iterate descendants in document order, excluding this node."""
        nodes = self.iter()
        next(nodes)
        yield from nodes

    def ancestors(self) -> Iterator[DOMNode]:
        """Iterate ancestors from the parent upwards."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    @property
    def depth(self) -> int:
        """Distance from the root node."""
        return sum(1 for _ in self.ancestors())

    @property
    def element_index(self) -> int:
        """Position among the parent's children."""
        if self.parent is None:
            return 0
        for index, sibling in enumerate(self.parent.children):
            if sibling is self:
                return index
        return 0

    def inner_html(self) -> str:
        """Serialize the node's content as HTML."""
        parts = [html.escape(self.text, quote=False)] if self.text else []
        parts.extend(child.outer_html() for child in self.children)
        return "".join(parts)

    def outer_html(self) -> str:
        """Serialize the node and its content as HTML."""
        attrs = "".join(
            f' {name}="{html.escape(value, quote=True)}"' for name, value in self.attributes.items()
        )
        if self.tag in VOID_ELEMENTS:
            return f"<{self.tag}{attrs}>"
        return f"<{self.tag}{attrs}>{self.inner_html()}</{self.tag}>"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, children included."""
        return {
            "tag": self.tag,
            "node_id": self.node_id,
            "text": self.text,
            "attributes": dict(self.attributes),
            "computed_style": dict(self.computed_style),
            "bounding_box": self.bounding_box.to_dict() if self.bounding_box else None,
            "children": [child.to_dict() for child in self.children],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DOMNode:
        """Create from dictionary, children included."""
        box = data.get("bounding_box")
        return cls(
            tag=data.get("tag", "div"),
            node_id=str(data.get("node_id", "")),
            text=data.get("text") or "",
            attributes={k: str(v) for k, v in (data.get("attributes") or {}).items()},
            computed_style=dict(data.get("computed_style") or {}),
            bounding_box=BoundingBox.from_dict(box) if box else None,
            children=[cls.from_dict(child) for child in data.get("children") or []],
        )


@dataclass
class DOMSnapshot:
    """A captured page: its DOM tree plus viewport state."""

    root: DOMNode
    url: str = ""
    title: str = ""
    viewport: Viewport = field(default_factory=Viewport)
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def node_count(self) -> int:
        """Count of all captured elements."""
        return sum(1 for _ in self.root.iter())

    def find(self, node_id: str) -> DOMNode | None:
        """Find a node by its capture id."""
        for node in self.root.iter():
            if node.node_id == node_id:
                return node
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "url": self.url,
            "title": self.title,
            "timestamp": self.timestamp.isoformat(),
            "viewport": self.viewport.to_dict(),
            "root": self.root.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DOMSnapshot:
        """Create from dictionary."""
        timestamp = data.get("timestamp")
        return cls(
            root=DOMNode.from_dict(data["root"]),
            url=data.get("url", ""),
            title=data.get("title", ""),
            viewport=Viewport.from_dict(data.get("viewport") or {}),
            timestamp=datetime.fromisoformat(timestamp) if timestamp else datetime.now(),
        )
