"""Image carousel mapper."""

from __future__ import annotations

from typing import Any

from widgetize.core.dom import selector as css
from widgetize.core.dom.models import DOMNode
from widgetize.core.export.base import (
    ExportContext,
    WidgetMapper,
    data_json,
    image_url,
    is_truthy,
    parse_int,
    yes_no,
)
from widgetize.core.recognition.engine import RecognizedComponent
from widgetize.core.recognition.types import ComponentType

# Slick, Swiper and Owl Carousel
SLIDE_IMAGES = ".slick-slide img, .swiper-slide img, .owl-item img"
CLONED_SLIDES = ".slick-cloned, .swiper-slide-duplicate, .owl-item.cloned"

ARROW_MARKERS = (
    ".slick-arrow, .slick-prev, .slick-next, .swiper-button-next, .swiper-button-prev, "
    ".owl-nav, .carousel-control-prev, .carousel-control-next, "
    '[class*="arrow"]'
)
DOT_MARKERS = (
    ".slick-dots, .swiper-pagination, .owl-dots, .carousel-indicators, "
    '[class*="dots"], [class*="bullets"], [class*="pagination"]'
)
FADE_MARKERS = '.carousel-fade, .swiper-fade, .swiper-container-fade, [class*="fade"]'

SLIDES_TO_SHOW_ATTRS = ("data-slides-to-show", "data-slides-per-view", "data-items")
AUTOPLAY_SPEED_ATTRS = ("data-autoplay-speed", "data-interval")

DEFAULT_SLIDES_TO_SHOW = 3
DEFAULT_AUTOPLAY_SPEED = 3000


class ImageCarouselMapper(WidgetMapper):
    """Maps image sliders to the ``image-carousel`` widget."""

    COMPONENT_TYPES = (ComponentType.IMAGE_CAROUSEL,)
    WIDGET_TYPE = "image-carousel"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        options = data_json(element, "data-slick")

        return {
            "carousel": self.extract_slides(element, context),
            "slides_to_show": str(self._slides_to_show(element, options)),
            "slides_to_scroll": "1",
            "navigation": self._navigation(element),
            "autoplay": yes_no(self._autoplay(element, options)),
            "autoplay_speed": self._autoplay_speed(element, options),
            "infinite": "yes",
            "effect": "fade" if self._fades(element, options) else "slide",
            "speed": 500,
            "thumbnail_size": "full",
        }

    def extract_slides(self, element: DOMNode, context: ExportContext) -> list[dict[str, Any]]:
        """
        Collect slide records from slider markup.

        Images inside library slide markers come first, skipping the clones
        sliders add for infinite looping. Without any, every image becomes a
        slide with no link.
        """
        slides = []
        for img in css.select(element, SLIDE_IMAGES):
            if self._in_clone(img, element):
                continue
            url = image_url(img)
            if not url:
                continue
            slide: dict[str, Any] = {"_id": context.ids.next(), "url": url}
            anchor = css.closest(img, "a[href]")
            if anchor is not None:
                slide["link"] = {"url": anchor.href}
            slides.append(slide)

        if slides:
            return slides

        return [
            {"_id": context.ids.next(), "url": image_url(img)}
            for img in css.select(element, "img")
            if image_url(img)
        ]

    @staticmethod
    def _in_clone(img: DOMNode, boundary: DOMNode) -> bool:
        for ancestor in img.ancestors():
            if css.matches(ancestor, CLONED_SLIDES):
                return True
            if ancestor is boundary:
                break
        return False

    @staticmethod
    def _slides_to_show(element: DOMNode, options: dict[str, Any]) -> int:
        for attr in SLIDES_TO_SHOW_ATTRS:
            value = parse_int(element.get(attr))
            if value and value > 0:
                return value
        value = parse_int(options.get("slidesToShow"))
        return value if value and value > 0 else DEFAULT_SLIDES_TO_SHOW

    @staticmethod
    def _navigation(element: DOMNode) -> str:
        arrows = css.select_one(element, ARROW_MARKERS) is not None
        dots = css.select_one(element, DOT_MARKERS) is not None
        if arrows and dots:
            return "both"
        if arrows:
            return "arrows"
        if dots:
            return "dots"
        return "none"

    @staticmethod
    def _autoplay(element: DOMNode, options: dict[str, Any]) -> bool:
        if is_truthy(element.get("data-autoplay")):
            return True
        if options.get("autoplay") is True:
            return True
        if element.get("data-ride") == "carousel":
            return True
        return "autoplay" in element.class_name.lower()

    @staticmethod
    def _autoplay_speed(element: DOMNode, options: dict[str, Any]) -> int:
        for attr in AUTOPLAY_SPEED_ATTRS:
            value = parse_int(element.get(attr))
            if value and value > 0:
                return value
        value = parse_int(options.get("autoplaySpeed"))
        return value if value and value > 0 else DEFAULT_AUTOPLAY_SPEED

    @staticmethod
    def _fades(element: DOMNode, options: dict[str, Any]) -> bool:
        if options.get("fade") is True:
            return True
        return css.matches(element, FADE_MARKERS) or css.select_one(element, FADE_MARKERS) is not None
