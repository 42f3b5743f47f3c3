"""Conversion service - captures, recognizes and exports pages."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

import structlog

from widgetize.core.dom.accessor import IStyleAccessor, SnapshotAccessor
from widgetize.core.dom.capture import IPage, PageCapture
from widgetize.core.dom.models import DOMNode, DOMSnapshot
from widgetize.core.export.exporter import ElementorExporter
from widgetize.core.models.config import Config
from widgetize.core.recognition.engine import RecognitionEngine, RecognitionResult
from widgetize.core.recognition.registry import PatternRegistry, build_registry
from widgetize.core.recognition.types import ComponentType
from widgetize.core.registry.manager import PluginManager

logger = structlog.get_logger(__name__)


@dataclass
class ConversionStats:
    """Counters for one conversion."""

    total_elements: int = 0
    nodes_visited: int = 0
    recognized_components: int = 0
    confidence_average: float = 0.0
    by_type: dict[str, int] = field(default_factory=dict)
    sections: int = 0
    widgets: int = 0
    native_widgets: int = 0
    html_fallbacks: int = 0
    predicate_faults: int = 0
    accessor_faults: int = 0
    recognition_ms: float = 0.0
    export_ms: float = 0.0

    @property
    def conversion_time_ms(self) -> float:
        """Recognition and export time together."""
        return self.recognition_ms + self.export_ms

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_elements": self.total_elements,
            "nodes_visited": self.nodes_visited,
            "recognized_components": self.recognized_components,
            "confidence_average": self.confidence_average,
            "by_type": dict(self.by_type),
            "sections": self.sections,
            "widgets": self.widgets,
            "native_widgets": self.native_widgets,
            "html_fallbacks": self.html_fallbacks,
            "predicate_faults": self.predicate_faults,
            "accessor_faults": self.accessor_faults,
            "recognition_ms": round(self.recognition_ms, 2),
            "export_ms": round(self.export_ms, 2),
            "conversion_time_ms": round(self.conversion_time_ms, 2),
        }


@dataclass
class ConversionResult:
    """A page converted to an Elementor document."""

    document: dict[str, Any]
    recognition: RecognitionResult
    stats: ConversionStats
    url: str = ""

    @property
    def partial(self) -> bool:
        """Some subtrees could not be read."""
        return self.recognition.partial

    @property
    def truncated(self) -> bool:
        """Depth or node ceilings cut the pass short."""
        return self.recognition.truncated

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "url": self.url,
            "partial": self.partial,
            "truncated": self.truncated,
            "stats": self.stats.to_dict(),
            "document": self.document,
        }


class ConversionService:
    """
    Runs the full pipeline: snapshot, recognition, analysis and export.

    Example:
        service = ConversionService(config)
        result = service.convert(load_snapshot("page.json"), title="Home")
        result.document["content"]
    """

    def __init__(
        self,
        config: Config | None = None,
        plugin_manager: PluginManager | None = None,
        accessor: IStyleAccessor | None = None,
    ) -> None:
        """
        Initialize conversion service.

        Args:
            config: Application configuration
            plugin_manager: Plugin manager; created from config when omitted
            accessor: Style accessor overriding the per-snapshot default
        """
        self.config = config or Config()
        self.plugins = plugin_manager
        if self.plugins is None and self.config.plugins.enabled:
            self.plugins = PluginManager(self.config.plugins)
            if self.config.plugins.autoload:
                self.plugins.load_entrypoints()

        self.accessor = accessor
        self.registry: PatternRegistry = build_registry(self.plugins)
        self.page_capture = PageCapture(self.config.capture)

    def _accessor_for(self, snapshot: DOMSnapshot | None) -> IStyleAccessor:
        if self.accessor is not None:
            return self.accessor
        return SnapshotAccessor(snapshot.viewport if snapshot else None)

    def engine(self, snapshot: DOMSnapshot | None = None) -> RecognitionEngine:
        """Create a recognition engine bound to a snapshot's viewport."""
        return RecognitionEngine(self.registry, self._accessor_for(snapshot), self.config.recognition)

    def exporter(self, snapshot: DOMSnapshot | None = None) -> ElementorExporter:
        """Create an exporter bound to a snapshot's viewport."""
        return ElementorExporter(
            accessor=self._accessor_for(snapshot),
            config=self.config.export,
            plugin_manager=self.plugins,
        )

    def recognize(self, source: DOMSnapshot | DOMNode) -> RecognitionResult:
        """
        Recognize components in a snapshot or subtree.

        Args:
            source: Captured snapshot, or a root node

        Returns:
            RecognitionResult
        """
        if isinstance(source, DOMSnapshot):
            return self.engine(source).recognize(source.root)
        return self.engine().recognize(source)

    def convert(self, source: DOMSnapshot | DOMNode, title: str | None = None) -> ConversionResult:
        """
        Recognize and export a snapshot as an Elementor page.

        Args:
            source: Captured snapshot, or a root node
            title: Page title; defaults to the snapshot title, then the configured title

        Returns:
            ConversionResult with the page document and pass statistics
        """
        snapshot = source if isinstance(source, DOMSnapshot) else None
        recognition = self.recognize(source)

        started = time.perf_counter()
        document = self.exporter(snapshot).export_page(
            recognition,
            title=title or (snapshot.title if snapshot else None),
        )
        export_ms = (time.perf_counter() - started) * 1000

        sections = len(document["content"])
        widget_types = [w for section in document["content"] for w in _widget_types(section)]
        widgets = len(widget_types)
        html_fallbacks = widget_types.count("html")
        recognized = [c for c in recognition.components if c.component_type != ComponentType.UNKNOWN]
        root = snapshot.root if snapshot else source

        stats = ConversionStats(
            total_elements=sum(1 for _ in root.iter()),
            nodes_visited=recognition.nodes_visited,
            recognized_components=len(recognized),
            confidence_average=(
                round(sum(c.confidence for c in recognized) / len(recognized), 1) if recognized else 0.0
            ),
            by_type=recognition.count_by_type(),
            sections=sections,
            widgets=widgets,
            native_widgets=widgets - html_fallbacks,
            html_fallbacks=html_fallbacks,
            predicate_faults=len(recognition.predicate_faults),
            accessor_faults=len(recognition.accessor_faults),
            recognition_ms=recognition.duration_ms,
            export_ms=export_ms,
        )

        logger.info(
            "Conversion complete",
            url=snapshot.url if snapshot else None,
            components=stats.recognized_components,
            sections=sections,
            widgets=widgets,
            html_fallbacks=html_fallbacks,
            partial=recognition.partial,
        )

        return ConversionResult(
            document=document,
            recognition=recognition,
            stats=stats,
            url=snapshot.url if snapshot else "",
        )

    async def capture(self, page: IPage) -> DOMSnapshot:
        """Capture a live page as a snapshot."""
        return await self.page_capture.capture(page)

    async def convert_page(self, page: IPage, title: str | None = None) -> ConversionResult:
        """Capture a live page and convert it."""
        snapshot = await self.capture(page)
        return self.convert(snapshot, title=title)


def _widget_types(element: dict[str, Any]) -> list[str]:
    if element.get("elType") == "widget":
        return [element.get("widgetType") or ""]
    return [t for child in element.get("elements", []) for t in _widget_types(child)]
