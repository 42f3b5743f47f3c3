"""Elementor exporter: turns recognized component trees into page documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from widgetize.core.analysis import (
    ColumnAnalysis,
    FooterAnalysis,
    HeaderAnalysis,
    HeroAnalysis,
    RowAnalysis,
    StructuralAnalyzer,
)
from widgetize.core.dom.accessor import IStyleAccessor, SnapshotAccessor
from widgetize.core.export.base import (
    ExportContext,
    MissingMapperError,
    WidgetMapper,
    rgb_to_hex,
)
from widgetize.core.export.mappers import HtmlFallbackMapper, builtin_mappers
from widgetize.core.export.models import ElementorWidget
from widgetize.core.models.config import ExportConfig
from widgetize.core.recognition.engine import RecognitionResult, RecognizedComponent
from widgetize.core.recognition.types import LAYOUT_TYPES, ComponentKind, ComponentType, CustomComponentType

if TYPE_CHECKING:
    from widgetize.core.registry.manager import PluginManager

logger = structlog.get_logger(__name__)

SECTION_TAGS: dict[ComponentKind, str] = {
    ComponentType.SECTION: "section",
    ComponentType.HEADER: "header",
    ComponentType.FOOTER: "footer",
    ComponentType.SIDEBAR: "aside",
}
FULL_WIDTH_TYPES = frozenset({ComponentType.HERO, ComponentType.HEADER, ComponentType.FOOTER})
CONTENT_POSITIONS = {
    "flex-start": "top",
    "start": "top",
    "center": "middle",
    "flex-end": "bottom",
    "end": "bottom",
}


class ElementorExporter:
    """
    Exports recognized components as Elementor documents.

    Layout components (sections, rows, columns and page regions) become
    sections and columns; every other component is handed to the widget
    mapper registered for its type. Construction fails if a built-in type
    has neither.

    Example:
        exporter = ElementorExporter()
        page = exporter.export_page(result, title="Home")
    """

    def __init__(
        self,
        mappers: list[WidgetMapper] | None = None,
        accessor: IStyleAccessor | None = None,
        config: ExportConfig | None = None,
        plugin_manager: PluginManager | None = None,
    ) -> None:
        """
        Initialize the exporter.

        Args:
            mappers: Widget mappers; defaults to the built-in set
            accessor: Style accessor used by mappers and analyzers
            config: Export configuration
            plugin_manager: Optional plugin manager whose hooks add mappers

        Raises:
            MissingMapperError: If a built-in widget type has no mapper
        """
        self.accessor = accessor or SnapshotAccessor()
        self.config = config or ExportConfig()
        self.analyzer = StructuralAnalyzer(self.accessor)
        self._mappers: dict[ComponentKind, WidgetMapper] = {}
        self._fallback = HtmlFallbackMapper()

        for mapper in builtin_mappers() if mappers is None else mappers:
            self.register_mapper(mapper)

        missing = [t.value for t in ComponentType if t not in LAYOUT_TYPES and t not in self._mappers]
        if missing:
            raise MissingMapperError(missing)

        if plugin_manager is not None:
            plugin_manager.apply_mappers(self)

    def register_mapper(self, mapper: WidgetMapper) -> None:
        """
        Register a mapper for each of its component types.

        A later registration for the same type replaces the earlier one.
        """
        for component_type in mapper.COMPONENT_TYPES:
            previous = self._mappers.get(component_type)
            if previous is not None and previous is not mapper:
                logger.debug(
                    "Replacing mapper",
                    component_type=component_type.value,
                    previous=previous.name,
                    mapper=mapper.name,
                )
            self._mappers[component_type] = mapper

    def mapper_for(self, component_type: ComponentKind) -> WidgetMapper:
        """
        Get the mapper for a widget component type.

        Custom types without a dedicated mapper fall back to the HTML widget
        when ``fallback_to_html`` is enabled.

        Raises:
            MissingMapperError: If no mapper applies
        """
        mapper = self._mappers.get(component_type)
        if mapper is not None:
            return mapper

        if isinstance(component_type, CustomComponentType) and self.config.fallback_to_html:
            logger.warning("No mapper for custom type, exporting as HTML", component_type=component_type.value)
            return self._fallback

        raise MissingMapperError([component_type.value])

    @property
    def mapped_types(self) -> list[ComponentKind]:
        return list(self._mappers)

    def new_context(self) -> ExportContext:
        """Create the per-export context."""
        return ExportContext(accessor=self.accessor, analyzer=self.analyzer)

    def map_to_target(self, component: RecognizedComponent) -> ElementorWidget:
        """
        Export one component with a fresh id space.

        Returns:
            A section for layout components, else a widget
        """
        return self.export_component(component, self.new_context())

    def export_component(self, component: RecognizedComponent, context: ExportContext) -> ElementorWidget:
        """Export one component within an existing context."""
        if self.is_layout(component):
            return self._section(component, context, inner=False)
        return self.mapper_for(component.component_type).map_to_target(component, context)

    def export_page(
        self,
        root: RecognizedComponent | RecognitionResult | None,
        title: str | None = None,
    ) -> dict[str, Any]:
        """
        Export a component tree as an Elementor page document.

        Top-level content holds sections only: a wrapper root is unpacked
        into its children and consecutive bare widgets are grouped into a
        default section.

        Args:
            root: Root component, or a recognition result
            title: Page title; defaults to the configured title

        Returns:
            Elementor page document
        """
        if isinstance(root, RecognitionResult):
            root = root.root

        context = self.new_context()
        content: list[ElementorWidget] = []

        if root is not None:
            if root.component_type in (ComponentType.UNKNOWN, ComponentType.CONTAINER) and root.children:
                top_level = list(root.children)
            else:
                top_level = [root]
            content = self._top_level(top_level, context)

        widgets = sum(1 for section in content for element in section.iter() if element.is_widget)
        logger.info("Page exported", sections=len(content), widgets=widgets, ids=context.ids.issued)

        return {
            "version": self.config.elementor_version,
            "title": title or self.config.page_title,
            "type": self.config.page_type,
            "content": [section.to_dict() for section in content],
            "page_settings": {},
        }

    @staticmethod
    def is_layout(component: RecognizedComponent) -> bool:
        """Check whether a component becomes a section rather than a widget."""
        if component.component_type in LAYOUT_TYPES:
            return True
        return component.component_type == ComponentType.UNKNOWN and bool(component.children)

    def _top_level(self, components: list[RecognizedComponent], context: ExportContext) -> list[ElementorWidget]:
        sections: list[ElementorWidget] = []
        pending: list[RecognizedComponent] = []

        def flush() -> None:
            if pending:
                column = self._column(self._column_content(pending, context, inner_allowed=True), context, 100.0)
                sections.append(ElementorWidget(id=context.ids.next(), el_type="section", elements=(column,)))
                pending.clear()

        for component in components:
            if self.is_layout(component):
                flush()
                sections.append(self._section(component, context, inner=False))
            else:
                pending.append(component)
        flush()
        return sections

    def _section(self, component: RecognizedComponent, context: ExportContext, inner: bool) -> ElementorWidget:
        settings = self._section_settings(component, context)

        if component.component_type == ComponentType.ROW:
            columns = self._row_columns(component, context, inner_allowed=not inner)
        else:
            elements = self._column_content(list(component.children), context, inner_allowed=not inner)
            columns = [self._column(elements, context, 100.0)]

        return ElementorWidget(
            id=context.ids.next(),
            el_type="section",
            settings=settings,
            elements=tuple(columns),
            is_inner=inner,
        )

    def _column(self, elements: list[ElementorWidget], context: ExportContext, width: float) -> ElementorWidget:
        settings: dict[str, Any] = {"_column_size": round(width)}
        if round(width, 3) != round(width):
            settings["_inline_size"] = round(width, 3)
        return ElementorWidget(id=context.ids.next(), el_type="column", settings=settings, elements=tuple(elements))

    def _column_content(
        self,
        components: list[RecognizedComponent],
        context: ExportContext,
        inner_allowed: bool,
    ) -> list[ElementorWidget]:
        """Export components placed inside a column."""
        elements: list[ElementorWidget] = []
        for component in components:
            if not self.is_layout(component):
                elements.append(self.mapper_for(component.component_type).map_to_target(component, context))
            elif inner_allowed:
                elements.append(self._section(component, context, inner=True))
            else:
                # Elementor nests inner sections one level deep; deeper layout is flattened
                elements.extend(self._column_content(list(component.children), context, inner_allowed=False))
        return elements

    def _row_columns(
        self,
        row: RecognizedComponent,
        context: ExportContext,
        inner_allowed: bool,
    ) -> list[ElementorWidget]:
        """One column per column child; other children get a column of their own."""
        children = list(row.children)
        if not children:
            return [self._column([], context, 100.0)]

        for child in children:
            if child.component_type == ComponentType.COLUMN:
                context.analysis(child)
        widths = self._column_widths(children)

        columns = []
        for child, width in zip(children, widths):
            if child.component_type == ComponentType.COLUMN:
                elements = self._column_content(list(child.children), context, inner_allowed)
            else:
                elements = self._column_content([child], context, inner_allowed)
            columns.append(self._column(elements, context, width))
        return columns

    @staticmethod
    def _column_widths(children: list[RecognizedComponent]) -> list[float]:
        """Analyzed column widths when every child has one summing to at most 100, else an even split."""
        even = [100.0 / len(children)] * len(children)
        widths = []
        for child in children:
            analysis = child.analyzer_output
            if child.component_type != ComponentType.COLUMN or not isinstance(analysis, ColumnAnalysis):
                return even
            widths.append(analysis.width_percent)

        total = sum(widths)
        if not 0 < total <= 100.5 or any(width <= 0 for width in widths):
            return even
        return widths

    def _section_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        analysis = context.analysis(component)
        settings: dict[str, Any] = {}

        tag = SECTION_TAGS.get(component.component_type)
        if tag:
            settings["html_tag"] = tag
        if component.component_type in FULL_WIDTH_TYPES:
            settings["layout"] = "full_width"

        if isinstance(analysis, HeroAnalysis):
            if analysis.background_image:
                settings["background_background"] = "classic"
                settings["background_image"] = {"url": analysis.background_image, "id": ""}
            if analysis.min_height_px:
                settings["height"] = "min-height"
                settings["custom_height"] = {"size": round(analysis.min_height_px), "unit": "px"}
            self._background_color(settings, analysis.background_color)
        elif isinstance(analysis, HeaderAnalysis):
            if analysis.is_sticky:
                settings["sticky"] = "top"
        elif isinstance(analysis, FooterAnalysis):
            self._background_color(settings, analysis.background_color)
            color = rgb_to_hex(analysis.text_color)
            if color:
                settings["color_text"] = color
        elif isinstance(analysis, RowAnalysis):
            if analysis.gap_px:
                settings["gap"] = "custom"
                settings["gap_columns_custom"] = {"size": round(analysis.gap_px), "unit": "px"}
            position = CONTENT_POSITIONS.get(analysis.align_items)
            if position:
                settings["content_position"] = position
        return settings

    @staticmethod
    def _background_color(settings: dict[str, Any], value: str) -> None:
        color = rgb_to_hex(value)
        if color:
            settings.setdefault("background_background", "classic")
            settings["background_color"] = color
