"""Layout patterns: page regions and grid structure."""

from __future__ import annotations

from widgetize.core.recognition.catalog import predicates as p
from widgetize.core.recognition.patterns import RecognitionPattern, StructurePattern
from widgetize.core.recognition.types import ComponentType

HERO_KEYWORDS = ("hero", "banner", "jumbotron", "masthead", "splash")

HERO_PATTERNS = [
    RecognitionPattern(
        ComponentType.HERO,
        confidence=95,
        priority=100,
        reason="hero region with background and heading",
        tag_names=frozenset({"header", "section", "div"}),
        class_keywords=HERO_KEYWORDS,
        css_properties=p.hero_with_background,
    ),
    RecognitionPattern(
        ComponentType.HERO,
        confidence=95,
        priority=95,
        reason="bootstrap jumbotron",
        class_keywords=("jumbotron", "jumbotron-fluid"),
    ),
    RecognitionPattern(
        ComponentType.HERO,
        confidence=90,
        priority=90,
        reason="hero class name",
        class_keywords=HERO_KEYWORDS,
    ),
    RecognitionPattern(
        ComponentType.HERO,
        confidence=90,
        priority=90,
        reason="video background with heading",
        class_keywords=("hero", "banner", "video-bg", "video-background"),
        css_properties=p.hero_with_video,
    ),
    RecognitionPattern(
        ComponentType.HERO,
        confidence=85,
        priority=85,
        reason="tall first-screen block with heading and call to action",
        css_properties=p.large_hero_block,
    ),
]

HEADER_PATTERNS = [
    RecognitionPattern(
        ComponentType.HEADER,
        confidence=95,
        priority=100,
        reason="semantic <header>",
        tag_names=frozenset({"header"}),
    ),
    RecognitionPattern(
        ComponentType.HEADER,
        confidence=95,
        priority=95,
        reason="ARIA banner landmark",
        aria_role="banner",
    ),
    RecognitionPattern(
        ComponentType.HEADER,
        confidence=95,
        priority=95,
        reason="bootstrap navbar",
        class_keywords=("navbar-expand", "navbar-light", "navbar-dark", "fixed-top"),
    ),
    RecognitionPattern(
        ComponentType.HEADER,
        confidence=90,
        priority=90,
        reason="header class name",
        class_keywords=("site-header", "page-header", "main-header", "top-bar", "elementor-location-header"),
    ),
    RecognitionPattern(
        ComponentType.HEADER,
        confidence=90,
        priority=90,
        reason="sticky header bar",
        class_keywords=("header", "nav", "top"),
        css_properties=p.is_fixed_or_sticky,
    ),
    RecognitionPattern(
        ComponentType.HEADER,
        confidence=85,
        priority=85,
        reason="full-width top bar with navigation",
        css_properties=p.top_bar_with_navigation,
    ),
]

FOOTER_PATTERNS = [
    RecognitionPattern(
        ComponentType.FOOTER,
        confidence=95,
        priority=100,
        reason="semantic <footer>",
        tag_names=frozenset({"footer"}),
    ),
    RecognitionPattern(
        ComponentType.FOOTER,
        confidence=95,
        priority=95,
        reason="ARIA contentinfo landmark",
        aria_role="contentinfo",
    ),
    RecognitionPattern(
        ComponentType.FOOTER,
        confidence=90,
        priority=90,
        reason="footer class name",
        class_keywords=(
            "site-footer",
            "page-footer",
            "main-footer",
            "footer-area",
            "footer-wrapper",
            "elementor-location-footer",
        ),
    ),
    RecognitionPattern(
        ComponentType.FOOTER,
        confidence=85,
        priority=85,
        reason="full-width block at document bottom with copyright notice",
        content_pattern=p.COPYRIGHT,
        css_properties=p.at_document_bottom,
    ),
]

SIDEBAR_PATTERNS = [
    RecognitionPattern(
        ComponentType.SIDEBAR,
        confidence=90,
        priority=85,
        reason="semantic <aside>",
        tag_names=frozenset({"aside"}),
    ),
    RecognitionPattern(
        ComponentType.SIDEBAR,
        confidence=90,
        priority=85,
        reason="ARIA complementary landmark",
        aria_role="complementary",
    ),
    RecognitionPattern(
        ComponentType.SIDEBAR,
        confidence=85,
        priority=80,
        reason="sidebar class name",
        class_keywords=("sidebar", "side-bar", "widget-area"),
    ),
    RecognitionPattern(
        ComponentType.SIDEBAR,
        confidence=75,
        priority=70,
        reason="narrow edge column holding widgets",
        child_pattern='[class*="widget"]',
        css_properties=p.edge_pinned_narrow_column,
    ),
]

MENU_PATTERNS = [
    RecognitionPattern(
        ComponentType.MENU,
        confidence=95,
        priority=100,
        reason="semantic <nav>",
        tag_names=frozenset({"nav"}),
    ),
    RecognitionPattern(
        ComponentType.MENU,
        confidence=95,
        priority=95,
        reason="ARIA navigation landmark",
        aria_role="navigation",
    ),
    RecognitionPattern(
        ComponentType.MENU,
        confidence=90,
        priority=90,
        reason="mobile menu toggle",
        class_keywords=("hamburger", "mobile-menu", "toggle-nav", "menu-toggle"),
    ),
    RecognitionPattern(
        ComponentType.MENU,
        confidence=85,
        priority=85,
        reason="dropdown menu with nested lists",
        class_keywords=("mega-menu", "dropdown", "submenu"),
        child_pattern="ul ul",
    ),
    RecognitionPattern(
        ComponentType.MENU,
        confidence=85,
        priority=80,
        reason="menu class name with links",
        class_keywords=("nav-menu", "main-menu", "navigation", "menu"),
        child_pattern="a[href]",
    ),
]

SECTION_PATTERNS = [
    RecognitionPattern(
        ComponentType.SECTION,
        confidence=80,
        priority=60,
        reason="semantic <section>",
        tag_names=frozenset({"section"}),
    ),
    RecognitionPattern(
        ComponentType.SECTION,
        confidence=80,
        priority=60,
        reason="page builder section",
        class_keywords=("elementor-section", "et_pb_section", "vc_section", "wp-block-group"),
    ),
    RecognitionPattern(
        ComponentType.SECTION,
        confidence=70,
        priority=55,
        reason="ARIA region landmark",
        aria_role="region",
    ),
]

ROW_PATTERNS = [
    RecognitionPattern(
        ComponentType.ROW,
        confidence=85,
        priority=80,
        reason="row class with several children",
        class_keywords=("row", "wp-block-columns", "columns", "et_pb_row", "vc_row"),
        structure_pattern=StructurePattern(min_children=2),
    ),
    RecognitionPattern(
        ComponentType.ROW,
        confidence=70,
        priority=65,
        reason="horizontal flex container",
        structure_pattern=StructurePattern(min_children=2),
        css_properties=p.flex_row,
    ),
    RecognitionPattern(
        ComponentType.ROW,
        confidence=70,
        priority=65,
        reason="grid container",
        structure_pattern=StructurePattern(min_children=2),
        css_properties={"display": {"grid", "inline-grid"}},
    ),
]

COLUMN_PATTERNS = [
    RecognitionPattern(
        ComponentType.COLUMN,
        confidence=85,
        priority=75,
        reason="column class name",
        class_keywords=("col-", "column", "et_pb_column", "vc_column"),
    ),
    RecognitionPattern(
        ComponentType.COLUMN,
        confidence=80,
        priority=70,
        reason="bootstrap auto column",
        attributes={"class": r"(?:^|\s)col(?:\s|$)"},
    ),
]

CONTAINER_PATTERNS = [
    RecognitionPattern(
        ComponentType.CONTAINER,
        confidence=70,
        priority=50,
        reason="semantic <main>",
        tag_names=frozenset({"main"}),
    ),
    RecognitionPattern(
        ComponentType.CONTAINER,
        confidence=60,
        priority=40,
        reason="container class name",
        class_keywords=("container", "wrapper", "e-con", "inner"),
        structure_pattern=StructurePattern(min_children=1),
    ),
]
