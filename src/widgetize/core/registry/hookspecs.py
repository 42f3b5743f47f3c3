"""Plugin hook specifications using pluggy."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from widgetize.core.export.exporter import ElementorExporter
    from widgetize.core.recognition.registry import PatternRegistry

# Plugin markers
hookspec = pluggy.HookspecMarker("widgetize")
hookimpl = pluggy.HookimplMarker("widgetize")


class WidgetizeSpecs:
    """Hook specifications for the plugin system."""

    @hookspec
    def widgetize_register_patterns(self, registry: PatternRegistry) -> None:
        """
        Called after the built-in catalogue is registered.

        Plugins add patterns with ``registry.register`` and may introduce
        new component types with ``registry.define_custom_type`` first.
        Plugin patterns come after built-in ones in registration order.
        """
        ...

    @hookspec
    def widgetize_register_mappers(self, exporter: ElementorExporter) -> None:
        """
        Called when an exporter is created.

        Plugins add or replace widget mappers with
        ``exporter.register_mapper``.
        """
        ...
