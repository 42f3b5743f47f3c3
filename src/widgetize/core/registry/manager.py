"""Plugin manager implementation."""

from __future__ import annotations

import importlib.util
import sys
from typing import TYPE_CHECKING, Any

import pluggy
import structlog

from widgetize.core.registry.hookspecs import WidgetizeSpecs

if TYPE_CHECKING:
    from pathlib import Path

    from widgetize.core.export.exporter import ElementorExporter
    from widgetize.core.models.config import PluginConfig
    from widgetize.core.recognition.registry import PatternRegistry

logger = structlog.get_logger(__name__)


class PluginManager:
    """Manages plugin loading, registration, and hook calls."""

    PROJECT_NAME = "widgetize"

    def __init__(self, config: PluginConfig | None = None) -> None:
        """
        Initialize the plugin manager.

        Args:
            config: Plugin configuration; ``disabled`` names are never registered
        """
        self._pm = pluggy.PluginManager(self.PROJECT_NAME)
        self._pm.add_hookspecs(WidgetizeSpecs)
        self._disabled = set(config.disabled) if config else set()

        # Plugin metadata
        self._loaded_plugins: dict[str, Any] = {}

    @property
    def hook(self) -> Any:
        """Get the hook caller for invoking hooks."""
        return self._pm.hook

    def register(self, plugin: Any, name: str | None = None) -> None:
        """
        Register a plugin.

        Args:
            plugin: Plugin module, class or instance with hook implementations
            name: Optional plugin name
        """
        plugin_name = name or getattr(plugin, "__name__", str(type(plugin).__name__))

        if plugin_name in self._disabled:
            logger.info("Plugin disabled, skipping", name=plugin_name)
            return

        try:
            self._pm.register(plugin, name=plugin_name)
            self._loaded_plugins[plugin_name] = plugin
            logger.info("Plugin registered", name=plugin_name)
        except Exception as e:
            logger.error("Failed to register plugin", name=plugin_name, error=str(e))
            raise

    def unregister(self, plugin: Any | None = None, name: str | None = None) -> None:
        """
        Unregister a plugin.

        Args:
            plugin: Plugin to unregister
            name: Plugin name to unregister
        """
        if name:
            plugin = self._loaded_plugins.get(name)
        if plugin is None:
            return

        self._pm.unregister(plugin)
        plugin_name = name or next((n for n, p in self._loaded_plugins.items() if p is plugin), None)
        if plugin_name:
            self._loaded_plugins.pop(plugin_name, None)
        logger.info("Plugin unregistered", name=plugin_name)

    def is_registered(self, name: str) -> bool:
        """Check if a plugin is registered."""
        return name in self._loaded_plugins

    def load_entrypoints(self, group: str | None = None) -> int:
        """
        Load plugins advertised through package entry points.

        Args:
            group: Entry point group; defaults to ``widgetize``

        Returns:
            Number of plugins loaded
        """
        group = group or self.PROJECT_NAME
        for name in self._disabled:
            self._pm.set_blocked(name)

        before = set(self._pm.get_plugins())
        count = self._pm.load_setuptools_entrypoints(group)

        for plugin in self._pm.get_plugins() - before:
            plugin_name = self._pm.get_name(plugin)
            if plugin_name:
                self._loaded_plugins[plugin_name] = plugin
                logger.info("Plugin registered", name=plugin_name, source="entrypoint")

        logger.debug("Entry point plugins loaded", group=group, count=count)
        return count

    def load_plugin_from_file(self, path: Path) -> Any:
        """
        Load a plugin from a Python file.

        Args:
            path: Path to the plugin file

        Returns:
            The loaded plugin module
        """
        module_name = f"widgetize_plugin_{path.stem}"

        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load plugin from {path}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)

        self.register(module, name=path.stem)
        return module

    def apply_patterns(self, registry: PatternRegistry) -> None:
        """Let plugins add patterns and custom types to a registry."""
        self.hook.widgetize_register_patterns(registry=registry)

    def apply_mappers(self, exporter: ElementorExporter) -> None:
        """Let plugins add widget mappers to an exporter."""
        self.hook.widgetize_register_mappers(exporter=exporter)

    def list_plugins(self) -> list[str]:
        """List all loaded plugin names."""
        return list(self._loaded_plugins.keys())
