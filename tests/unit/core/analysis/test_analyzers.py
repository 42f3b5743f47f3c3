"""Tests for structural analyzers."""

from __future__ import annotations

import pytest

from widgetize.core.analysis import (
    ColumnAnalysis,
    EmptyAnalysis,
    RowAnalysis,
    StructuralAnalyzer,
    count_grid_tracks,
)
from widgetize.core.dom.accessor import SnapshotAccessor
from widgetize.core.dom.models import Viewport
from widgetize.core.recognition.types import ComponentType, CustomComponentType


class BrokenAccessor(SnapshotAccessor):
    """Accessor whose style reads always fail."""

    def computed_style(self, node):
        raise RuntimeError("renderer gone")


@pytest.fixture
def analyzer():
    return StructuralAnalyzer(SnapshotAccessor(Viewport(width=1920, height=1080)))


class TestGridTracks:
    """Tests for count_grid_tracks."""

    @pytest.mark.parametrize(
        ("template", "expected"),
        [
            ("200px 200px 200px", 3),
            ("repeat(4, 1fr)", 4),
            ("repeat(2, 100px 1fr)", 4),
            ("repeat(3, minmax(0, 1fr))", 3),
            ("[start] 100px [middle] 200px [end]", 2),
            ("none", 0),
            ("", 0),
            (None, 0),
        ],
    )
    def test_track_count(self, template, expected):
        """Tracks are counted from resolved values and repeat()."""
        assert count_grid_tracks(template) == expected


class TestDispatch:
    """Tests for StructuralAnalyzer.analyze."""

    def test_unhandled_type_gets_empty_analysis(self, analyzer, node):
        """Types without an analyzer get an empty result."""
        assert isinstance(analyzer.analyze(ComponentType.HEADING, node("h1")), EmptyAnalysis)
        assert isinstance(analyzer.analyze(CustomComponentType("testimonial"), node("div")), EmptyAnalysis)

    def test_failure_returns_defaults(self, node):
        """An unreadable element yields the type's defaults."""
        analysis = StructuralAnalyzer(BrokenAccessor()).analyze(ComponentType.ROW, node("div"))
        assert analysis == RowAnalysis()

    def test_to_dict(self, analyzer, node):
        """Analysis results serialize to plain dictionaries."""
        data = analyzer.analyze(ComponentType.COLUMN, node("div", cls="col-6")).to_dict()
        assert data == {"width_percent": 50.0}


class TestRowAnalysis:
    """Tests for row analysis."""

    def test_flex_row(self, analyzer, node):
        """Direction, alignment and gap come from computed style."""
        row = node(
            "div",
            node("div", cls="col-md-6"),
            node("div", cls="col-md-6"),
            style={"display": "flex", "gap": "24px", "justify-content": "space-between"},
        )
        analysis = analyzer.analyze(ComponentType.ROW, row)
        assert analysis.child_count == 2
        assert analysis.direction == "row"
        assert analysis.justify_content == "space-between"
        assert analysis.align_items == "normal"
        assert analysis.gap_px == 24.0
        assert analysis.responsive_grid is True

    def test_two_value_gap_uses_first(self, analyzer, node):
        row = node("div", node("div"), node("div"), style={"gap": "10px 20px"})
        analysis = analyzer.analyze(ComponentType.ROW, row)
        assert analysis.gap == "10px 20px"
        assert analysis.gap_px == 10.0
        assert analysis.responsive_grid is False

    def test_column_gap_fallback(self, analyzer, node):
        """column-gap is used when gap is not set."""
        row = node("div", node("div"), node("div"), style={"column-gap": "16px"})
        assert analyzer.analyze(ComponentType.ROW, row).gap_px == 16.0


class TestFooterAnalysis:
    """Tests for footer analysis."""

    def test_columns_and_contents(self, analyzer, node):
        """Column markers, social links and newsletter forms are found."""
        footer = node(
            "footer",
            node(
                "div",
                node("div", node("a", text="FB", attrs={"href": "https://facebook.com/acme"}), cls="footer-col"),
                node("div", node("input", attrs={"type": "EMAIL"}), cls="footer-col"),
                node("div", node("p", text="Links"), cls="footer-col"),
                cls="inner",
            ),
            node("p", text="Copyright 2023 Acme Corp"),
            style={"background-color": "rgb(20, 20, 20)", "color": "rgb(200, 200, 200)"},
        )
        analysis = analyzer.analyze(ComponentType.FOOTER, footer)
        assert analysis.column_count == 3
        assert analysis.has_social_links is True
        assert analysis.has_newsletter is True
        assert analysis.has_widgets is False
        assert analysis.copyright_text == "Copyright 2023 Acme Corp"
        assert analysis.background_color == "rgb(20, 20, 20)"
        assert analysis.text_color == "rgb(200, 200, 200)"

    def test_grid_columns(self, analyzer, node):
        """Without markers the grid template decides the column count."""
        footer = node(
            "footer",
            node("div", node("div"), node("div"), style={"grid-template-columns": "repeat(4, minmax(0, 1fr))"}),
        )
        assert analyzer.analyze(ComponentType.FOOTER, footer).column_count == 4

    def test_plain_footer(self, analyzer, node):
        """A footer with one line of text has one column and no copyright."""
        analysis = analyzer.analyze(ComponentType.FOOTER, node("footer", node("p", text="Made with care")))
        assert analysis.column_count == 1
        assert analysis.copyright_text is None

    def test_copyright_symbol(self, analyzer, node):
        analysis = analyzer.analyze(ComponentType.FOOTER, node("footer", node("small", text="© 2024 Acme")))
        assert analysis.copyright_text == "© 2024 Acme"


class TestSidebarAnalysis:
    """Tests for sidebar analysis."""

    def test_right_sidebar_with_widgets(self, analyzer, node):
        """Nested widget markers count once."""
        aside = node(
            "aside",
            node("div", node("h4", text="Recent", cls="widget-title"), cls="widget"),
            node("div", node("h4", text="Tags", cls="widget-title"), cls="widget"),
            box=(1500, 0, 300, 1000),
            style={"position": "sticky"},
        )
        analysis = analyzer.analyze(ComponentType.SIDEBAR, aside)
        assert analysis.position == "right"
        assert analysis.width == 300
        assert analysis.height == 1000
        assert analysis.widget_count == 2
        assert analysis.sticky is True

    def test_left_sidebar_counts_children(self, analyzer, node):
        """Without widget markers every child counts."""
        aside = node("aside", node("p"), node("p"), node("ul"), box=(0, 0, 300, 900))
        analysis = analyzer.analyze(ComponentType.SIDEBAR, aside)
        assert analysis.position == "left"
        assert analysis.widget_count == 3
        assert analysis.sticky is False


class TestHeaderAnalysis:
    """Tests for header analysis."""

    def test_full_header(self, analyzer, node):
        header = node(
            "header",
            node("img", attrs={"src": "/logo.svg", "alt": "Site Logo"}),
            node("nav"),
            node("input", attrs={"type": "search"}),
            node("a", text="Sign up", cls="btn"),
            style={"position": "fixed"},
        )
        analysis = analyzer.analyze(ComponentType.HEADER, header)
        assert analysis.has_logo is True
        assert analysis.has_nav is True
        assert analysis.has_search is True
        assert analysis.has_cta is True
        assert analysis.is_sticky is True
        assert analysis.position == "fixed"

    def test_bare_header(self, analyzer, node):
        """An empty header reports nothing."""
        analysis = analyzer.analyze(ComponentType.HEADER, node("header"))
        assert analysis.has_logo is False
        assert analysis.has_nav is False
        assert analysis.is_sticky is False
        assert analysis.position == "static"


class TestMenuAnalysis:
    """Tests for menu analysis."""

    @pytest.fixture
    def dropdown(self, node):
        return node(
            "nav",
            node(
                "ul",
                node("li", node("a", text="Home", attrs={"href": "/"})),
                node(
                    "li",
                    node("a", text="Products", attrs={"href": "/products"}),
                    node("ul", node("li", node("a", text="Widgets", attrs={"href": "/widgets"}))),
                ),
            ),
        )

    def test_dropdown_menu(self, analyzer, dropdown):
        """Nested lists make a dropdown with two levels."""
        analysis = analyzer.analyze(ComponentType.MENU, dropdown)
        assert analysis.menu_type == "dropdown"
        assert analysis.levels == 2
        assert analysis.link_count == 3
        assert analysis.has_dropdowns is True

    @pytest.mark.parametrize(
        ("cls", "style", "expected"),
        [
            ("mobile-menu", {}, "hamburger"),
            ("mega-menu", {}, "mega"),
            ("side-nav", {"flex-direction": "column"}, "vertical"),
            ("main-nav", {}, "horizontal"),
        ],
    )
    def test_menu_types(self, analyzer, node, cls, style, expected):
        """Class names and direction decide the menu type."""
        menu = node("nav", node("a", text="Home", attrs={"href": "/"}), cls=cls, style=style)
        analysis = analyzer.analyze(ComponentType.MENU, menu)
        assert analysis.menu_type == expected
        assert analysis.levels == 1


class TestColumnAnalysis:
    """Tests for column width analysis."""

    def test_width_from_geometry(self, analyzer, node):
        """Width is the share of the parent row's width."""
        column = node("div", box=(0, 0, 400, 300))
        node("div", column, box=(0, 0, 1200, 300))
        assert analyzer.analyze(ComponentType.COLUMN, column).width_percent == 33.333

    def test_width_is_capped(self, analyzer, node):
        column = node("div", box=(0, 0, 1400, 300))
        node("div", column, box=(0, 0, 1200, 300))
        assert analyzer.analyze(ComponentType.COLUMN, column).width_percent == 100.0

    @pytest.mark.parametrize(
        ("cls", "expected"),
        [("col-md-3", 25.0), ("col-lg-4", 33.333), ("col-12", 100.0), ("col", 100.0)],
    )
    def test_width_from_bootstrap_class(self, analyzer, node, cls, expected):
        """Without geometry the grid class gives the width."""
        assert analyzer.analyze(ComponentType.COLUMN, node("div", cls=cls)) == ColumnAnalysis(expected)


class TestHeroAnalysis:
    """Tests for hero analysis."""

    def test_background_and_height(self, analyzer, node):
        hero = node(
            "section",
            style={
                "background-image": 'url("https://cdn.example/hero.jpg")',
                "background-color": "rgb(0, 0, 0)",
                "min-height": "600px",
            },
            box=(0, 0, 1920, 720),
        )
        analysis = analyzer.analyze(ComponentType.HERO, hero)
        assert analysis.background_image == "https://cdn.example/hero.jpg"
        assert analysis.background_color == "rgb(0, 0, 0)"
        assert analysis.min_height_px == 600.0

    def test_height_falls_back_to_box(self, analyzer, node):
        """Without min-height the rendered height is used."""
        analysis = analyzer.analyze(ComponentType.HERO, node("section", box=(0, 0, 1920, 720)))
        assert analysis.background_image is None
        assert analysis.min_height_px == 720
