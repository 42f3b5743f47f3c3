"""Star rating mapper."""

from __future__ import annotations

import re
from typing import Any

from widgetize.core.dom import selector as css
from widgetize.core.dom.accessor import parse_px
from widgetize.core.dom.models import DOMNode
from widgetize.core.export.base import ExportContext, WidgetMapper, rgb_to_hex, text_of
from widgetize.core.recognition.engine import RecognizedComponent
from widgetize.core.recognition.types import ComponentType

ARIA_RATING = re.compile(r"(\d+(?:\.\d+)?)\s*(?:out of|/)\s*(\d+)", re.IGNORECASE)
WIDTH_PERCENT = re.compile(r"width\s*:\s*(\d+(?:\.\d+)?)%")

FILLED_STARS = ".fa-star:not(.fa-star-o), .star-filled, .active"
ALL_STARS = '.fa-star, .star, [class*="star"]'
EMPTY_STARS = '.fa-star-o, [class*="star-empty"], [class*="star-outline"]'
FILLED_GLYPHS = ("★", "⭐")
EMPTY_GLYPH = "☆"

DEFAULT_SCALE = 5
DEFAULT_STAR_COLOR = "#f0ad4e"
DEFAULT_UNMARKED_COLOR = "#ccd6df"
DEFAULT_STAR_SIZE = 20


def _number(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def extract_rating(element: DOMNode) -> float:
    """
    Read the rating value.

    Checks ``data-rating``, an "x out of y" aria-label, filled star
    elements, a percentage-width fill bar and filled star glyphs, in
    that order. Defaults to 5.
    """
    rating = _number(element.get("data-rating"))
    if rating is not None:
        return rating

    match = ARIA_RATING.search(element.aria_label or "")
    if match:
        return float(match.group(1))

    filled = css.select(element, FILLED_STARS)
    if filled:
        return float(len(filled))

    fill = css.select_one(element, '[style*="width"]')
    if fill is not None:
        match = WIDTH_PERCENT.search(fill.get("style") or "")
        if match and float(match.group(1)) > 0:
            return round(float(match.group(1)) / 100 * DEFAULT_SCALE, 2)

    text = element.text_content
    glyphs = sum(text.count(glyph) for glyph in FILLED_GLYPHS)
    if glyphs:
        return float(glyphs)

    return float(DEFAULT_SCALE)


def extract_scale(element: DOMNode) -> int:
    """Read the rating scale: ``data-max-rating``, else the star count up to 10, else 5."""
    scale = _number(element.get("data-max-rating"))
    if scale is not None and scale > 0:
        return int(scale)

    stars = css.select(element, ALL_STARS)
    if 0 < len(stars) <= 10:
        return len(stars)

    text = element.text_content
    glyphs = sum(text.count(glyph) for glyph in (*FILLED_GLYPHS, EMPTY_GLYPH))
    if 0 < glyphs <= 10:
        return glyphs

    return DEFAULT_SCALE


class StarRatingMapper(WidgetMapper):
    """Maps review stars to the ``star-rating`` widget."""

    COMPONENT_TYPES = (ComponentType.STAR_RATING,)
    WIDGET_TYPE = "star-rating"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        scale = extract_scale(element)
        rating = min(extract_rating(element), float(scale))
        star = css.select_one(element, FILLED_STARS) or css.select_one(element, ALL_STARS)
        empty = css.select_one(element, EMPTY_STARS)

        return {
            "rating_scale": str(scale),
            "rating": rating,
            "star_style": "star_unicode" if self._uses_glyphs(element) else "star_fontawesome",
            "unmarked_star_style": "outline" if empty is not None or EMPTY_GLYPH in element.text_content else "solid",
            "title": self._title(element),
            "stars_color": self._color(star, context, DEFAULT_STAR_COLOR),
            "stars_unmarked_color": self._color(empty, context, DEFAULT_UNMARKED_COLOR),
            "icon_size": {"size": self._size(star or element, context), "unit": "px"},
            "icon_space": {"size": 0, "unit": "px"},
            "align": "left",
        }

    @staticmethod
    def _uses_glyphs(element: DOMNode) -> bool:
        if css.select_one(element, 'i[class*="fa-star"]') is not None:
            return False
        return any(glyph in element.text_content for glyph in FILLED_GLYPHS)

    @staticmethod
    def _title(element: DOMNode) -> str:
        if element.parent is not None and element.parent.text.strip():
            return element.parent.text.strip()
        label = css.select_one(element, ".rating-label, .review-label")
        return text_of(label)

    @staticmethod
    def _color(node: DOMNode | None, context: ExportContext, default: str) -> str:
        if node is None:
            return default
        return rgb_to_hex(context.accessor.computed_style(node).get("color")) or default

    @staticmethod
    def _size(node: DOMNode, context: ExportContext) -> int:
        size = parse_px(context.accessor.computed_style(node).get("font-size"))
        return round(size) if size else DEFAULT_STAR_SIZE
