"""Per-type structural analyzers.

Analyzers run after a node's type is settled and extract the attributes the
exporters need: arrangement, contents and placement. They only read the DOM
and never raise; when something cannot be determined the field keeps its
default.
"""

from __future__ import annotations

import re
from collections.abc import Callable

import structlog

from widgetize.core.analysis.models import (
    Analysis,
    ColumnAnalysis,
    EmptyAnalysis,
    FooterAnalysis,
    HeaderAnalysis,
    HeroAnalysis,
    MenuAnalysis,
    RowAnalysis,
    SidebarAnalysis,
)
from widgetize.core.dom import selector as css
from widgetize.core.dom.accessor import IStyleAccessor, SnapshotAccessor, parse_px
from widgetize.core.dom.models import DOMNode
from widgetize.core.recognition.types import ComponentKind, ComponentType

logger = structlog.get_logger(__name__)

RESPONSIVE_GRID_CLASS = re.compile(
    r"(?:^|\s)(?:"
    r"(?:col|offset|order)-(?:sm|md|lg|xl|xxl)-\d+"
    r"|(?:sm|md|lg|xl|2xl):(?:grid-cols|flex|w|basis)-"
    r"|wp-block-columns|is-stacked-on-mobile"
    r"|elementor-row|e-con-full|e-flex"
    r"|uk-child-width-\S+@(?:s|m|l|xl)"
    r")"
)

COPYRIGHT_TEXT = re.compile(
    r"(?:©|\(c\)|copyright)[^\n]*?\b(?:19|20)\d{2}\b[^\n]*"
    r"|\b(?:19|20)\d{2}\b[^\n]*?(?:©|\(c\))[^\n]*",
    re.IGNORECASE,
)

BOOTSTRAP_COLUMN = re.compile(r"(?:^|\s)col-(?:(?:sm|md|lg|xl|xxl)-)?(\d{1,2})(?:\s|$)")
CSS_URL = re.compile(r"""url\(\s*["']?(.*?)["']?\s*\)""")

COLUMN_MARKERS = '[class*="col-"], [class*="column"], [class*="footer-widget"], [class*="footer-col"]'
WIDGET_MARKERS = '[class*="widget"]'
SOCIAL_LINKS = (
    'a[href*="facebook.com"], a[href*="twitter.com"], a[href*="x.com/"], '
    'a[href*="instagram.com"], a[href*="linkedin.com"], a[href*="youtube.com"], '
    'a[href*="tiktok.com"], a[href*="pinterest."], [class*="social"]'
)
NEWSLETTER = (
    'input[type="email" i], [class*="newsletter"], [class*="subscribe"], '
    '[class*="mailchimp"], [class*="mc4wp"]'
)


def count_grid_tracks(template: str | None) -> int:
    """
    Count the tracks in a ``grid-template-columns`` value.

    Handles resolved pixel lists (``"200px 200px"``) and ``repeat(n, ...)``.

    Returns:
        Track count, 0 when there is no explicit template
    """
    if not template or template.strip() in ("none", "auto", ""):
        return 0

    tracks = 0
    depth = 0
    token = ""
    tokens: list[str] = []
    for char in template.strip() + " ":
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if char.isspace() and depth == 0:
            if token:
                tokens.append(token)
            token = ""
        else:
            token += char

    for token in tokens:
        match = re.fullmatch(r"repeat\(\s*(\d+)\s*,\s*(.+)\)", token)
        if match:
            tracks += int(match.group(1)) * max(1, count_grid_tracks(match.group(2)))
        elif token.startswith("[") and token.endswith("]"):
            continue  # line name
        else:
            tracks += 1
    return tracks


class StructuralAnalyzer:
    """
    Extracts structural attributes for recognized components.

    Example:
        analyzer = StructuralAnalyzer(accessor)
        footer = analyzer.analyze(ComponentType.FOOTER, node)
        footer.column_count
    """

    def __init__(self, accessor: IStyleAccessor | None = None) -> None:
        self.accessor = accessor or SnapshotAccessor()
        self._handlers: dict[ComponentKind, tuple[Callable[[DOMNode], Analysis], type[Analysis]]] = {
            ComponentType.ROW: (self.analyze_row, RowAnalysis),
            ComponentType.FOOTER: (self.analyze_footer, FooterAnalysis),
            ComponentType.SIDEBAR: (self.analyze_sidebar, SidebarAnalysis),
            ComponentType.HEADER: (self.analyze_header, HeaderAnalysis),
            ComponentType.MENU: (self.analyze_menu, MenuAnalysis),
            ComponentType.COLUMN: (self.analyze_column, ColumnAnalysis),
            ComponentType.HERO: (self.analyze_hero, HeroAnalysis),
        }

    def analyze(self, component_type: ComponentKind, element: DOMNode) -> Analysis:
        """
        Analyze an element as the given component type.

        Args:
            component_type: Settled type of the element
            element: Source DOM node

        Returns:
            Type-specific analysis; defaults when the element cannot be read
        """
        entry = self._handlers.get(component_type)
        if entry is None:
            return EmptyAnalysis()

        handler, default = entry
        try:
            return handler(element)
        except Exception as e:
            logger.warning(
                "Structural analysis failed",
                component_type=component_type.value,
                node_id=element.node_id,
                error=str(e),
            )
            return default()

    def analyze_row(self, element: DOMNode) -> RowAnalysis:
        style = self.accessor.computed_style(element)
        gap = style.get("gap") or style.get("column-gap") or ""
        gap_px = parse_px(gap.split()[0]) if gap else None

        responsive = any(RESPONSIVE_GRID_CLASS.search(node.class_name) for node in [element, *element.children])

        return RowAnalysis(
            child_count=len(element.children),
            direction=style.get("flex-direction", "row") or "row",
            justify_content=style.get("justify-content") or "normal",
            align_items=style.get("align-items") or "normal",
            gap=gap,
            gap_px=gap_px,
            responsive_grid=responsive,
        )

    def analyze_footer(self, element: DOMNode) -> FooterAnalysis:
        style = self.accessor.computed_style(element)
        return FooterAnalysis(
            has_widgets=css.select_one(element, WIDGET_MARKERS) is not None,
            has_social_links=css.select_one(element, SOCIAL_LINKS) is not None,
            has_newsletter=css.select_one(element, NEWSLETTER) is not None,
            copyright_text=self._copyright_text(element),
            column_count=self._footer_columns(element),
            background_color=style.get("background-color", ""),
            text_color=style.get("color", ""),
        )

    def _copyright_text(self, element: DOMNode) -> str | None:
        for node in element.iter():
            if node.text:
                match = COPYRIGHT_TEXT.search(node.text)
                if match:
                    return match.group(0).strip()
        match = COPYRIGHT_TEXT.search(self.accessor.text(element))
        return match.group(0).strip()[:200] if match else None

    def _footer_columns(self, element: DOMNode) -> int:
        # Explicit column markers at the shallowest level holding two or more
        level = [element]
        while level:
            for node in level:
                markers = [child for child in node.children if css.matches(child, COLUMN_MARKERS)]
                if len(markers) >= 2:
                    return len(markers)
            level = [child for node in level for child in node.children]

        for node in element.iter():
            tracks = count_grid_tracks(self.accessor.computed_style(node).get("grid-template-columns"))
            if tracks:
                return tracks

        return 1

    def analyze_sidebar(self, element: DOMNode) -> SidebarAnalysis:
        style = self.accessor.computed_style(element)
        box = self.accessor.bounding_box(element)
        viewport = self.accessor.viewport()

        analysis = SidebarAnalysis(sticky=style.get("position") in ("sticky", "fixed"))
        if box is not None:
            analysis.position = "left" if box.center_x < viewport.width / 2 else "right"
            analysis.width = box.width
            analysis.height = box.height

        widgets = [
            node
            for node in css.select(element, WIDGET_MARKERS)
            if not any(
                css.matches(ancestor, WIDGET_MARKERS)
                for ancestor in self._ancestors_within(node, element)
            )
        ]
        analysis.widget_count = len(widgets) if widgets else len(element.children)
        return analysis

    def analyze_header(self, element: DOMNode) -> HeaderAnalysis:
        position = self.accessor.computed_style(element).get("position") or "static"
        return HeaderAnalysis(
            has_logo=css.select_one(element, 'img[alt*="logo" i], [class*="logo"]') is not None,
            has_nav=css.select_one(element, 'nav, [role="navigation"], [class*="nav"]') is not None,
            has_search=css.select_one(element, 'input[type="search"], [class*="search"]') is not None,
            has_cta=css.select_one(element, 'button, a[class*="btn"], [class*="cta"]') is not None,
            is_sticky=position in ("fixed", "sticky"),
            position=position,
        )

    def analyze_menu(self, element: DOMNode) -> MenuAnalysis:
        style = self.accessor.computed_style(element)
        classes = element.class_name.lower()
        nested = css.select(element, "ul ul")

        if re.search(r"hamburger|mobile|toggle", classes):
            menu_type = "hamburger"
        elif "mega" in classes:
            menu_type = "mega"
        elif style.get("flex-direction") == "column":
            menu_type = "vertical"
        elif nested:
            menu_type = "dropdown"
        else:
            menu_type = "horizontal"

        levels = 1
        for ul in css.select(element, "ul"):
            depth = 1 + sum(1 for a in self._ancestors_within(ul, element) if a.tag == "li")
            levels = max(levels, depth)

        return MenuAnalysis(
            link_count=len(css.select(element, "a")),
            menu_type=menu_type,
            has_dropdowns=bool(nested) or css.select_one(element, ".dropdown, .submenu, .sub-menu") is not None,
            levels=levels,
        )

    def analyze_column(self, element: DOMNode) -> ColumnAnalysis:
        box = self.accessor.bounding_box(element)
        parent_box = self.accessor.bounding_box(element.parent) if element.parent else None
        if box is not None and parent_box is not None and parent_box.width > 0:
            return ColumnAnalysis(width_percent=round(min(box.width / parent_box.width, 1.0) * 100, 3))

        match = BOOTSTRAP_COLUMN.search(element.class_name)
        if match and 0 < int(match.group(1)) <= 12:
            return ColumnAnalysis(width_percent=round(int(match.group(1)) / 12 * 100, 3))

        return ColumnAnalysis()

    def analyze_hero(self, element: DOMNode) -> HeroAnalysis:
        style = self.accessor.computed_style(element)
        match = CSS_URL.search(style.get("background-image", ""))
        min_height = parse_px(style.get("min-height"))
        if min_height is None:
            box = self.accessor.bounding_box(element)
            min_height = box.height if box else None

        return HeroAnalysis(
            background_image=match.group(1) if match else None,
            background_color=style.get("background-color", ""),
            min_height_px=min_height,
        )

    @staticmethod
    def _ancestors_within(node: DOMNode, boundary: DOMNode) -> list[DOMNode]:
        """Ancestors of ``node`` strictly below ``boundary``."""
        result = []
        for ancestor in node.ancestors():
            if ancestor is boundary:
                break
            result.append(ancestor)
        return result
