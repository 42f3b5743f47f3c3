"""Elementor export of recognized component trees."""

from widgetize.core.export.base import (
    ExportContext,
    ExportError,
    MissingMapperError,
    UnsupportedComponentError,
    WidgetMapper,
)
from widgetize.core.export.exporter import ElementorExporter
from widgetize.core.export.ids import IdGenerator
from widgetize.core.export.mappers import builtin_mappers
from widgetize.core.export.models import ElementorWidget

__all__ = [
    "ElementorExporter",
    "ElementorWidget",
    "ExportContext",
    "IdGenerator",
    "WidgetMapper",
    "builtin_mappers",
    # Errors
    "ExportError",
    "UnsupportedComponentError",
    "MissingMapperError",
]
