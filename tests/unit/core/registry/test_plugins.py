"""Tests for the plugin manager and hooks."""

from __future__ import annotations

import pytest

from widgetize.core.dom.models import DOMSnapshot, Viewport
from widgetize.core.export.base import WidgetMapper
from widgetize.core.models.config import Config, PluginConfig
from widgetize.core.recognition.patterns import RecognitionPattern
from widgetize.core.recognition.registry import UnknownComponentTypeError, build_registry
from widgetize.core.recognition.types import CustomComponentType
from widgetize.core.registry import PluginManager, hookimpl
from widgetize.core.service import ConversionService

QUOTE = CustomComponentType("testimonial")


class QuoteMapper(WidgetMapper):
    """Maps testimonials to the testimonial widget."""

    COMPONENT_TYPES = (QUOTE,)
    WIDGET_TYPE = "testimonial"

    def build_settings(self, component, context):
        return {"testimonial_content": component.element.text_content}


class QuotePlugin:
    """Adds a testimonial type, its pattern and its mapper."""

    @hookimpl
    def widgetize_register_patterns(self, registry):
        kind = registry.define_custom_type("testimonial")
        registry.register(
            kind,
            [RecognitionPattern(kind, confidence=95, reason="testimonial class", class_keywords=("testimonial",))],
        )

    @hookimpl
    def widgetize_register_mappers(self, exporter):
        exporter.register_mapper(QuoteMapper())


class PatternOnlyPlugin:
    """Adds a testimonial type without a mapper."""

    @hookimpl
    def widgetize_register_patterns(self, registry):
        QuotePlugin.widgetize_register_patterns(self, registry)


PLUGIN_SOURCE = '''
from widgetize.core.registry import hookimpl


@hookimpl
def widgetize_register_patterns(registry):
    registry.define_custom_type("pricing-card")
'''


@pytest.fixture
def manager():
    pm = PluginManager()
    pm.register(QuotePlugin(), name="quotes")
    return pm


class TestRegistration:
    """Tests for plugin registration."""

    def test_register_and_list(self, manager):
        assert manager.is_registered("quotes")
        assert manager.list_plugins() == ["quotes"]

    def test_disabled_plugin_is_skipped(self):
        """Plugins named in the disabled list never register."""
        pm = PluginManager(PluginConfig(disabled=["quotes"]))
        pm.register(QuotePlugin(), name="quotes")
        assert not pm.is_registered("quotes")
        with pytest.raises(UnknownComponentTypeError):
            build_registry(pm).resolve_type("testimonial")

    def test_unregister_by_name(self, manager):
        manager.unregister(name="quotes")
        assert manager.list_plugins() == []
        with pytest.raises(UnknownComponentTypeError):
            build_registry(manager).resolve_type("testimonial")

    def test_unregister_unknown_name(self, manager):
        manager.unregister(name="nope")
        assert manager.list_plugins() == ["quotes"]

    def test_load_plugin_from_file(self, tmp_path):
        """A module with hook functions works as a plugin."""
        path = tmp_path / "cards.py"
        path.write_text(PLUGIN_SOURCE)
        pm = PluginManager()
        pm.load_plugin_from_file(path)

        assert pm.is_registered("cards")
        registry = build_registry(pm)
        assert registry.resolve_type("pricing-card") == CustomComponentType("pricing-card")


class TestHooks:
    """Tests for the pattern and mapper hooks."""

    def test_patterns_come_after_builtins(self, manager):
        """Plugin patterns are registered after the built-in catalogue."""
        registry = build_registry(manager)
        patterns = registry.all_patterns()
        assert patterns[-1].component_type == QUOTE
        assert registry.resolve_type("testimonial") == QUOTE

    def test_custom_type_end_to_end(self, manager, node):
        """A plugin type is recognized and exported with the plugin mapper."""
        root = node(
            "body",
            node("div", text="Best purchase this year.", cls="testimonial card"),
            node("p", text="More below."),
        )
        snapshot = DOMSnapshot(root=root, url="https://example.com/", viewport=Viewport(width=1280, height=800))
        service = ConversionService(Config.from_dict({"plugins": {"autoload": False}}), plugin_manager=manager)

        result = service.convert(snapshot)

        assert result.stats.by_type.get("testimonial") == 1
        widgets = [
            element
            for section in result.document["content"]
            for column in section["elements"]
            for element in column["elements"]
        ]
        assert widgets[0]["widgetType"] == "testimonial"
        assert widgets[0]["settings"] == {"testimonial_content": "Best purchase this year."}

    def test_custom_type_without_mapper_is_html(self, node):
        """Without a plugin mapper the custom type exports as HTML."""
        pm = PluginManager()
        pm.register(PatternOnlyPlugin(), name="patterns-only")
        service = ConversionService(Config.from_dict({"plugins": {"autoload": False}}), plugin_manager=pm)

        root = node("body", node("div", text="Lovely service.", cls="testimonial"), node("p", text="More."))
        stats = service.convert(root).stats

        assert stats.by_type["testimonial"] == 1
        assert stats.html_fallbacks == 1
        assert stats.native_widgets == 1
