"""Tests for the conversion service."""

from __future__ import annotations

import pytest

from widgetize.core.dom.accessor import SnapshotAccessor
from widgetize.core.dom.capture import CAPTURED_STYLE_PROPERTIES, load_snapshot
from widgetize.core.dom.models import Viewport
from widgetize.core.models.config import Config
from widgetize.core.recognition.types import ComponentType
from widgetize.core.service import ConversionService


def make_service(**overrides):
    """Service without entry point plugins."""
    data = {"plugins": {"autoload": False}}
    data.update(overrides)
    return ConversionService(Config.from_dict(data))


@pytest.fixture
def service():
    return make_service()


class TestConvert:
    """Tests for snapshot conversion."""

    def test_landing_page(self, service, snapshot_file):
        """The landing page converts to five sections."""
        snapshot = load_snapshot(snapshot_file)
        result = service.convert(snapshot)

        assert result.url == "https://acme.example/"
        assert result.document["title"] == "Acme - Build faster"
        assert result.stats.sections == 5
        assert result.stats.widgets == 14
        assert result.stats.nodes_visited == 34
        assert result.stats.by_type["column"] == 3
        assert result.stats.predicate_faults == 0
        assert result.partial is False
        assert result.truncated is False

    def test_title_override(self, service, snapshot_file):
        result = service.convert(load_snapshot(snapshot_file), title="Home")
        assert result.document["title"] == "Home"

    def test_configured_title_for_bare_nodes(self, node):
        """A bare node tree uses the configured page title."""
        service = make_service(export={"page_title": "Draft"})
        result = service.convert(node("body", node("h1", text="Hello")))
        assert result.document["title"] == "Draft"
        assert result.url == ""
        assert result.stats.widgets == 1

    def test_to_dict(self, service, node):
        data = service.convert(node("body", node("p", text="Hi"))).to_dict()
        assert set(data) == {"url", "partial", "truncated", "stats", "document"}
        assert data["stats"]["sections"] == 1
        assert data["stats"]["by_type"] == {"unknown": 1, "paragraph": 1}

    def test_component_and_widget_counts(self, service, node):
        """The synthesized wrapper is not counted as recognized."""
        root = node("body", node("h1", text="Hi"), node("div", node("p", text="There")))
        stats = service.convert(root).stats
        assert stats.total_elements == 4
        assert stats.nodes_visited == 4
        assert stats.recognized_components == 2
        assert 0 < stats.confidence_average <= 100
        assert stats.native_widgets == 2
        assert stats.html_fallbacks == 0
        assert stats.conversion_time_ms == stats.recognition_ms + stats.export_ms

    def test_node_limit_truncates(self, node):
        """Recognition limits from config reach the engine."""
        service = make_service(recognition={"max_nodes": 2})
        root = node("body", node("p", text="One"), node("p", text="Two"), node("p", text="Three"))
        result = service.convert(root)
        assert result.truncated is True
        assert result.stats.nodes_visited == 2


class TestRecognize:
    """Tests for recognition through the service."""

    def test_snapshot_viewport_is_used(self, service, snapshot_file):
        """Geometry patterns see the snapshot's viewport."""
        snapshot = load_snapshot(snapshot_file)
        engine = service.engine(snapshot)
        assert engine.accessor.viewport() == snapshot.viewport

    def test_accessor_override(self, node):
        accessor = SnapshotAccessor(Viewport(width=1200, height=800))
        service = ConversionService(Config.from_dict({"plugins": {"enabled": False}}), accessor=accessor)
        assert service.plugins is None
        assert service.engine().accessor is accessor
        assert service.exporter().accessor is accessor

    def test_recognize_node(self, service, node):
        result = service.recognize(node("nav", node("a", text="Home", attrs={"href": "/"})))
        assert result.root.component_type == ComponentType.MENU


class TestLivePage:
    """Tests for capture and conversion of a live page."""

    @pytest.mark.asyncio
    async def test_convert_page(self, service, mock_page):
        """A captured page is recognized and exported."""
        result = await service.convert_page(mock_page)

        assert result.url == "https://example.com/"
        assert result.document["title"] == "Example"
        assert result.stats.sections == 2
        assert result.stats.widgets == 2
        assert result.recognition.root.children[0].component_type == ComponentType.HEADER

    @pytest.mark.asyncio
    async def test_capture_arguments(self, service, mock_page):
        """The capture script receives the configured limits."""
        snapshot = await service.capture(mock_page)

        (expression, arg) = mock_page.evaluated[0]
        assert "getComputedStyle" in expression
        assert arg == [64, 2000, list(CAPTURED_STYLE_PROPERTIES)]
        assert snapshot.viewport == Viewport(width=1280, height=800, document_height=2400)
        assert snapshot.node_count == 4
        assert snapshot.find("1").computed_style == {"position": "sticky"}

    @pytest.mark.asyncio
    async def test_empty_capture(self, service, empty_page):
        """A page without a body cannot be captured."""
        with pytest.raises(ValueError, match="No document body"):
            await service.capture(empty_page)
