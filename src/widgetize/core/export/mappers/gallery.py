"""Image gallery mapper."""

from __future__ import annotations

import re
from typing import Any

from widgetize.core.dom import selector as css
from widgetize.core.dom.accessor import parse_px
from widgetize.core.dom.models import DOMNode
from widgetize.core.export.base import ExportContext, WidgetMapper, background_url, image_url, parse_int
from widgetize.core.recognition.engine import RecognizedComponent
from widgetize.core.recognition.types import ComponentType

DEFAULT_COLUMNS = 4
MAX_COLUMNS = 10
COLUMN_CLASS = re.compile(r"(?:columns?|cols?|grid)-(\d+)")
GRID_REPEAT = re.compile(r"repeat\(\s*(\d+)")
GALLERY_ITEMS = '[class*="gallery-item"], [class*="gallery-image"], [class*="grid-item"]'
LIGHTBOX_MARKERS = '[data-lightbox], [data-fancybox], [class*="lightbox"], [class*="fancybox"], [class*="magnific"]'
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".gif", ".avif")


def gallery_images(element: DOMNode, context: ExportContext) -> list[dict[str, str]]:
    """
    Gallery entries in document order.

    ``<img>`` sources come first, with inline ``data:`` placeholders left
    out; galleries built from background images on item nodes are read
    from the computed style instead.
    """
    urls = [url for img in css.select(element, "img") if (url := image_url(img)) and not url.startswith("data:")]
    if not urls:
        for item in css.select(element, GALLERY_ITEMS):
            url = background_url(context.accessor.computed_style(item).get("background-image"))
            if url:
                urls.append(url)
    return [{"id": "", "url": url} for url in urls]


def links_to_image(anchor: DOMNode) -> bool:
    path = (anchor.href or "").split("?", 1)[0].lower()
    return path.endswith(IMAGE_EXTENSIONS)


def gallery_columns(element: DOMNode, context: ExportContext) -> int:
    """Column count from data attributes, class names or the grid template."""
    columns = parse_int(element.get("data-columns") or element.get("data-cols"))
    if columns is None:
        match = COLUMN_CLASS.search(element.class_name or "")
        columns = int(match.group(1)) if match else None
    if columns is None:
        template = context.accessor.computed_style(element).get("grid-template-columns", "")
        match = GRID_REPEAT.search(template)
        if match:
            columns = int(match.group(1))
        elif template and template != "none":
            columns = len(template.split())
    if not columns:
        return DEFAULT_COLUMNS
    return max(1, min(columns, MAX_COLUMNS))


class ImageGalleryMapper(WidgetMapper):
    """Maps image grids and lightbox galleries to the ``image-gallery`` widget."""

    COMPONENT_TYPES = (ComponentType.IMAGE_GALLERY,)
    WIDGET_TYPE = "image-gallery"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        style = context.accessor.computed_style(element)

        links = css.select(element, "a[href]")
        lightbox = css.matches(element, LIGHTBOX_MARKERS) or css.select_one(element, LIGHTBOX_MARKERS) is not None
        if lightbox or any(links_to_image(link) for link in links):
            gallery_link = "file"
        elif links:
            gallery_link = "custom"
        else:
            gallery_link = "none"

        settings: dict[str, Any] = {
            "wp_gallery": gallery_images(element, context),
            "gallery_columns": gallery_columns(element, context),
            "gallery_link": gallery_link,
            "open_lightbox": "yes" if lightbox else "default",
            "gallery_display_caption": "" if css.select_one(element, "figcaption") is not None else "none",
            "thumbnail_size": "medium",
        }

        gap = parse_px(style.get("gap") or style.get("column-gap"))
        if gap:
            settings["image_spacing"] = "custom"
            settings["image_spacing_custom"] = {"size": round(gap), "unit": "px"}
        return settings
