"""Plugin registry and hook specifications."""

from widgetize.core.registry.hookspecs import WidgetizeSpecs, hookimpl, hookspec
from widgetize.core.registry.manager import PluginManager

__all__ = [
    "PluginManager",
    "WidgetizeSpecs",
    "hookimpl",
    "hookspec",
]
