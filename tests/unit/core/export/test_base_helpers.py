"""Tests for export building blocks: ids, document models and extraction helpers."""

from __future__ import annotations

import re

import pytest

from widgetize.core.analysis import RowAnalysis
from widgetize.core.export.base import (
    background_url,
    data_json,
    find_by_id,
    icon_class,
    icon_setting,
    image_url,
    is_truthy,
    outermost,
    parse_int,
    rgb_to_hex,
    text_without_icons,
)
from widgetize.core.export.ids import IdGenerator
from widgetize.core.export.models import ElementorWidget
from widgetize.core.recognition.types import ComponentType


class TestIdGenerator:
    """Tests for IdGenerator."""

    def test_ids_are_unique_hex(self):
        """Ids have Elementor's shape and never repeat."""
        ids = IdGenerator()
        issued = [ids.next() for _ in range(500)]
        assert len(set(issued)) == 500
        assert all(re.fullmatch(r"[0-9a-f]{7}", value) for value in issued)
        assert ids.issued == 500


class TestElementorWidget:
    """Tests for the Elementor document model."""

    def test_widget_to_dict(self):
        """Widgets carry widgetType; sections and columns do not."""
        widget = ElementorWidget(id="abc1234", el_type="widget", widget_type="heading", settings={"title": "Hi"})
        column = ElementorWidget(id="col0001", el_type="column", elements=(widget,))
        section = ElementorWidget(id="sec0001", el_type="section", elements=(column,))

        data = section.to_dict()
        assert data == {
            "id": "sec0001",
            "elType": "section",
            "settings": {},
            "isInner": False,
            "elements": [
                {
                    "id": "col0001",
                    "elType": "column",
                    "settings": {},
                    "isInner": False,
                    "elements": [
                        {
                            "id": "abc1234",
                            "elType": "widget",
                            "widgetType": "heading",
                            "settings": {"title": "Hi"},
                            "isInner": False,
                            "elements": [],
                        }
                    ],
                }
            ],
        }
        assert ElementorWidget.from_dict(data) == section

    def test_iter(self):
        widget = ElementorWidget(id="w", el_type="widget", widget_type="html")
        section = ElementorWidget(id="s", el_type="section", elements=(ElementorWidget(id="c", el_type="column", elements=(widget,)),))
        assert [e.id for e in section.iter()] == ["s", "c", "w"]
        assert [e.is_widget for e in section.iter()] == [False, False, True]


class TestColorsAndUrls:
    """Tests for style value conversion."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("rgb(17, 24, 39)", "#111827"),
            ("rgba(255, 0, 0, 0.5)", "#ff0000"),
            ("rgba(0, 0, 0, 0)", ""),
            ("#ABCDEF", "#abcdef"),
            ("red", ""),
            ("", ""),
            (None, ""),
        ],
    )
    def test_rgb_to_hex(self, value, expected):
        """Computed colours convert to hex; transparent becomes empty."""
        assert rgb_to_hex(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ('url("https://cdn.example/a.jpg")', "https://cdn.example/a.jpg"),
            ("url(b.png), linear-gradient(red, blue)", "b.png"),
            ("none", None),
            ("url()", None),
            (None, None),
        ],
    )
    def test_background_url(self, value, expected):
        assert background_url(value) == expected

    def test_image_url_honours_lazy_loading(self, node):
        """Lazy-load attributes stand in for a missing src."""
        assert image_url(node("img", attrs={"data-src": "lazy.jpg"})) == "lazy.jpg"
        assert image_url(node("img", attrs={"src": "a.jpg", "data-src": "b.jpg"})) == "a.jpg"
        assert image_url(node("img")) == ""


class TestAttributeParsing:
    """Tests for attribute value helpers."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("", True), ("true", True), ("YES", True), ("1", True), ("on", True), ("false", False), ("0", False), (None, False)],
    )
    def test_is_truthy(self, value, expected):
        """A bare attribute counts as set."""
        assert is_truthy(value) is expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("3", 3), (" 4 ", 4), ("2.0", 2), (5, 5), (True, None), ("many", None), (None, None)],
    )
    def test_parse_int(self, value, expected):
        assert parse_int(value) == expected

    def test_data_json(self, node):
        """JSON options attributes parse to dicts; anything else is empty."""
        assert data_json(node("div", attrs={"data-slick": '{"slidesToShow": 4}'}), "data-slick") == {"slidesToShow": 4}
        assert data_json(node("div", attrs={"data-slick": "{broken"}), "data-slick") == {}
        assert data_json(node("div", attrs={"data-slick": "[1, 2]"}), "data-slick") == {}
        assert data_json(node("div"), "data-slick") == {}


class TestIcons:
    """Tests for icon extraction."""

    @pytest.mark.parametrize(
        ("classes", "expected"),
        [
            ("fas fa-check", "fas fa-check"),
            ("fab fa-twitter", "fab fa-twitter"),
            ("fa-solid fa-star", "fas fa-star"),
            ("fa fa-home", "fas fa-home"),
        ],
    )
    def test_icon_class(self, node, classes, expected):
        """Family and icon name come from the first icon element."""
        button = node("button", node("i", cls=classes), text="Go")
        assert icon_class(button) == expected

    def test_no_icon(self, node):
        assert icon_class(node("button", text="Go")) is None
        assert icon_class(None) is None

    def test_icon_setting(self):
        assert icon_setting("fas fa-check") == {"value": "fas fa-check", "library": "fa-solid"}
        assert icon_setting("fab fa-github") == {"value": "fab fa-github", "library": "fa-brands"}
        assert icon_setting("far fa-star") == {"value": "far fa-star", "library": "fa-regular"}
        assert icon_setting(None) == {"value": "", "library": ""}

    def test_text_without_icons(self, node):
        """Icon elements do not contribute text."""
        button = node("button", node("i", text="", cls="fas fa-check"), node("span", text=" Save "))
        assert text_without_icons(button) == "Save"


class TestTreeHelpers:
    """Tests for tree helpers."""

    def test_outermost(self, node):
        """Nested members of the list are dropped."""
        inner = node("li")
        outer = node("li", node("ul", inner))
        other = node("li")
        node("ul", outer, other)
        assert outermost([outer, inner, other]) == [outer, other]

    def test_find_by_id_searches_whole_tree(self, node):
        """Lookup starts from the tree root, not the given node."""
        panel = node("div", attrs={"id": "panel-2"})
        button = node("button")
        node("div", node("div", button), panel)
        assert find_by_id(button, "panel-2") is panel
        assert find_by_id(button, "missing") is None


class TestExportContext:
    """Tests for ExportContext."""

    def test_analysis_runs_once(self, context, node, make_component):
        """Analysis is attached on first use and reused after."""
        row = make_component(ComponentType.ROW, node("div", node("div"), node("div"), style={"gap": "8px"}))
        first = context.analysis(row)
        assert isinstance(first, RowAnalysis)
        assert context.analysis(row) is first
        assert row.analyzer_output is first

    def test_widget_gets_fresh_id(self, context):
        a = context.widget("html", {"html": ""})
        b = context.widget("html", {"html": ""})
        assert a.id != b.id
        assert a.widget_type == "html"
