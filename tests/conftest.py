"""Global test fixtures for widgetize."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from widgetize.core.dom.accessor import SnapshotAccessor
from widgetize.core.dom.models import BoundingBox, DOMNode, Viewport
from widgetize.core.export.base import ExportContext
from widgetize.core.recognition.engine import RecognitionEngine, RecognizedComponent
from widgetize.core.recognition.types import ComponentKind

FIXTURES = Path(__file__).parent / "fixtures"


# ============================================================================
# DOM BUILDERS
# ============================================================================


def build_node(
    tag: str,
    *children: DOMNode,
    text: str = "",
    cls: str | None = None,
    box: tuple[float, float, float, float] | None = None,
    style: dict[str, str] | None = None,
    attrs: dict[str, str] | None = None,
    node_id: str = "",
) -> DOMNode:
    """
    Build a DOM node.

    Args:
        tag: Tag name
        children: Child nodes, in order
        text: Own text
        cls: Class attribute
        box: (x, y, width, height)
        style: Computed style
        attrs: Other attributes
        node_id: Capture id
    """
    attributes = dict(attrs or {})
    if cls is not None:
        attributes["class"] = cls
    return DOMNode(
        tag=tag,
        node_id=node_id,
        text=text,
        attributes=attributes,
        computed_style=dict(style or {}),
        bounding_box=BoundingBox(*box) if box else None,
        children=list(children),
    )


def component(
    component_type: ComponentKind,
    element: DOMNode,
    *children: RecognizedComponent,
    confidence: int = 90,
) -> RecognizedComponent:
    """Build a recognized component without running the engine."""
    return RecognizedComponent(
        component_type=component_type,
        confidence=confidence,
        element=element,
        children=tuple(children),
        reason="test",
    )


@pytest.fixture
def node():
    """DOM node builder."""
    return build_node


@pytest.fixture
def make_component():
    """Recognized component builder."""
    return component


@pytest.fixture
def engine() -> RecognitionEngine:
    """Engine with the built-in catalogue and a default viewport."""
    return RecognitionEngine()


@pytest.fixture
def context() -> ExportContext:
    """Fresh export context."""
    return ExportContext(accessor=SnapshotAccessor(Viewport(width=1920, height=1080, document_height=3000)))


@pytest.fixture
def snapshot_file() -> Path:
    """Path to the landing page snapshot fixture."""
    return FIXTURES / "landing_page.json"


# ============================================================================
# MOCK BROWSER PAGE
# ============================================================================


class MockPage:
    """Mock browser page returning a canned capture."""

    def __init__(self, raw: dict[str, Any] | None) -> None:
        self._raw = raw
        self._url = "https://example.com/"
        self._title = "Example"
        self.evaluated: list[tuple[str, Any]] = []

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        self.evaluated.append((expression, arg))
        return self._raw

    async def url(self) -> str:
        return self._url

    async def title(self) -> str:
        return self._title

    @property
    def viewport_size(self) -> dict[str, int] | None:
        return {"width": 1280, "height": 800}


@pytest.fixture
def raw_capture() -> dict[str, Any]:
    """Raw capture payload, as the in-page script returns it."""
    return {
        "viewportWidth": 1280,
        "viewportHeight": 800,
        "documentHeight": 2400,
        "root": {
            "tag": "body",
            "nodeId": "0",
            "boundingBox": {"x": 0, "y": 0, "width": 1280, "height": 2400},
            "children": [
                {
                    "tag": "header",
                    "nodeId": "1",
                    "attributes": {"class": "site-header"},
                    "computedStyle": {"position": "sticky"},
                    "boundingBox": {"x": 0, "y": 0, "width": 1280, "height": 80},
                    "children": [
                        {"tag": "h1", "nodeId": "2", "text": "Acme", "children": []},
                    ],
                },
                {
                    "tag": "p",
                    "nodeId": "3",
                    "text": "Welcome to Acme.",
                    "boundingBox": {"x": 0, "y": 100, "width": 1280, "height": 40},
                },
            ],
        },
    }


@pytest.fixture
def mock_page(raw_capture) -> MockPage:
    """Page whose capture script returns ``raw_capture``."""
    return MockPage(raw_capture)


@pytest.fixture
def empty_page() -> MockPage:
    """Page whose capture script finds no body."""
    return MockPage(None)
