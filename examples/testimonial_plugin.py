"""
Custom Component Plugin Example

Adds a "testimonial" component type with its own pattern and widget mapper.
Load it with PluginManager.load_plugin_from_file or advertise it under the
"widgetize" entry point group.
"""
from widgetize.core.export.base import WidgetMapper
from widgetize.core.recognition.patterns import RecognitionPattern
from widgetize.core.recognition.types import CustomComponentType
from widgetize.core.registry import hookimpl

TESTIMONIAL = CustomComponentType("testimonial")


class TestimonialMapper(WidgetMapper):
    """Maps testimonial cards to Elementor's testimonial widget."""

    COMPONENT_TYPES = (TESTIMONIAL,)
    WIDGET_TYPE = "testimonial"

    def build_settings(self, component, context):
        element = component.element
        author = next((n for n in element.iter_descendants() if n.tag == "cite"), None)
        return {
            "testimonial_content": element.text_content,
            "testimonial_name": author.text_content if author else "",
        }


@hookimpl
def widgetize_register_patterns(registry):
    kind = registry.define_custom_type("testimonial")
    registry.register(
        kind,
        [
            RecognitionPattern(
                kind,
                confidence=92,
                reason="testimonial card class",
                class_keywords=("testimonial",),
            ),
        ],
    )


@hookimpl
def widgetize_register_mappers(exporter):
    exporter.register_mapper(TestimonialMapper())
