"""Social icons mapper."""

from __future__ import annotations

from typing import Any

from widgetize.core.dom import selector as css
from widgetize.core.dom.accessor import parse_px
from widgetize.core.dom.models import DOMNode
from widgetize.core.export.base import ExportContext, WidgetMapper, icon_class, icon_setting, rgb_to_hex
from widgetize.core.export.mappers.basic import alignment, link_setting
from widgetize.core.recognition.catalog.predicates import social_profile_links
from widgetize.core.recognition.engine import RecognizedComponent
from widgetize.core.recognition.types import ComponentType

# Host fragment and Font Awesome brand icon
NETWORKS = (
    ("facebook.", "fab fa-facebook-f"),
    ("instagram.", "fab fa-instagram"),
    ("linkedin.", "fab fa-linkedin-in"),
    ("youtube.", "fab fa-youtube"),
    ("youtu.be", "fab fa-youtube"),
    ("pinterest.", "fab fa-pinterest"),
    ("tiktok.", "fab fa-tiktok"),
    ("github.", "fab fa-github"),
    ("dribbble.", "fab fa-dribbble"),
    ("behance.", "fab fa-behance"),
    ("medium.", "fab fa-medium"),
    ("vimeo.", "fab fa-vimeo-v"),
    ("reddit.", "fab fa-reddit"),
    ("tumblr.", "fab fa-tumblr"),
    ("snapchat.", "fab fa-snapchat"),
    ("whatsapp.", "fab fa-whatsapp"),
    ("//wa.me", "fab fa-whatsapp"),
    ("telegram.", "fab fa-telegram"),
    ("//t.me", "fab fa-telegram"),
    ("discord.", "fab fa-discord"),
    ("twitter.", "fab fa-twitter"),
    ("//x.com", "fab fa-x-twitter"),
    ("www.x.com", "fab fa-x-twitter"),
)
FALLBACK_ICON = "fas fa-link"


def network_icon(url: str) -> str | None:
    """Brand icon for a profile URL, or None for unknown hosts."""
    url = url.lower()
    for fragment, icon in NETWORKS:
        if fragment in url:
            return icon
    return None


def icon_shape(link: DOMNode, style: dict[str, str]) -> str:
    classes = link.class_name or ""
    for shape in ("circle", "rounded", "square"):
        if shape in classes:
            return shape
    radius = style.get("border-radius", "")
    if radius.endswith("%") or (parse_px(radius) or 0) >= 50:
        return "circle"
    if parse_px(radius):
        return "rounded"
    return "square"


class SocialIconsMapper(WidgetMapper):
    """Maps rows of social profile links to the ``social-icons`` widget."""

    COMPONENT_TYPES = (ComponentType.SOCIAL_ICONS,)
    WIDGET_TYPE = "social-icons"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        accessor = context.accessor
        links = social_profile_links(element) or css.select(element, "a[href]")

        icons = []
        custom_colors = set()
        for link in links:
            icon = icon_class(link) or network_icon(link.href or "") or FALLBACK_ICON
            icons.append(
                {
                    "_id": context.ids.next(),
                    "social_icon": icon_setting(icon),
                    "link": link_setting(link) or {"url": "", "is_external": "", "nofollow": ""},
                }
            )
            color = rgb_to_hex(accessor.computed_style(link).get("color"))
            if color:
                custom_colors.add(color)

        settings: dict[str, Any] = {"social_icon_list": icons, "shape": "rounded", "icon_color": "default"}
        if links:
            first_style = dict(accessor.computed_style(links[0]))
            settings["shape"] = icon_shape(links[0], first_style)
            size = parse_px(first_style.get("font-size"))
            if size:
                settings["icon_size"] = {"size": round(size), "unit": "px"}

        # One shared colour means the site styles the icons itself
        if len(custom_colors) == 1:
            settings["icon_color"] = "custom"
            settings["icon_primary_color"] = custom_colors.pop()

        gap = parse_px(accessor.computed_style(element).get("gap"))
        if gap:
            settings["icon_spacing"] = {"size": round(gap), "unit": "px"}

        align = alignment(accessor.computed_style(element))
        if align:
            settings["align"] = align
        return settings
