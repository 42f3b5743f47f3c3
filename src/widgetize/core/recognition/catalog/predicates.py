"""Reusable callable predicates for the built-in catalogue."""

from __future__ import annotations

import re

from widgetize.core.dom import selector as css
from widgetize.core.dom.models import DOMNode
from widgetize.core.recognition.patterns import StyleContext

PAGE_ROOT_TAGS = frozenset({"html", "body", "main"})

COPYRIGHT = re.compile(r"(?s)(?=.*(?:©|&copy;|\(c\)))(?=.*\b(?:19|20)\d{2}\b)", re.IGNORECASE)
PRICE = re.compile(r"(?:[$€£¥₹]\s?\d[\d.,]*|\d[\d.,]*\s?(?:[$€£¥₹]|USD|EUR|GBP))")
STAR_GLYPHS = re.compile(r"(?:[★☆⭐]\s*){3,}")

VIDEO_EMBEDS = (
    'iframe[src*="youtube.com"], iframe[src*="youtube-nocookie.com"], '
    'iframe[src*="youtu.be"], iframe[src*="vimeo.com"], video'
)

HEADINGS = "h1, h2, h3, h4, h5, h6"
ICONS = 'i[class*="fa-"], svg, img[class*="icon"], img[src*="icon"], [class*="icon"]'
BUTTONS = 'button, a[class*="btn"], a[class*="button"], input[type="submit"]'
FLIP_FRONT = '.front, [class*="-front"], [class*="front-side"]'
FLIP_BACK = '.back, [class*="-back"], [class*="back-side"]'
SOCIAL_HOST = re.compile(
    r"(?:^|[/.])(?:facebook|twitter|x|instagram|linkedin|youtube|pinterest|tiktok|github|dribbble|behance"
    r"|medium|vimeo|reddit|tumblr|snapchat|whatsapp|telegram|discord)\.(?:com|org|gg|me)\b"
    r"|//(?:t\.me|wa\.me|youtu\.be)/",
    re.IGNORECASE,
)

# Bottom edge distance from document end still counted as "at the bottom"
BOTTOM_TOLERANCE_PX = 200


def count(ctx: StyleContext, selector: str) -> int:
    """Count descendants of the element matching a selector."""
    return len(css.select(ctx.element, selector))


def is_page_root(ctx: StyleContext) -> bool:
    return ctx.element.tag in PAGE_ROOT_TAGS


def is_full_width(ctx: StyleContext, ratio: float = 0.9) -> bool:
    """Element spans at least ``ratio`` of the viewport width."""
    return ctx.box is not None and ctx.box.width >= ctx.viewport.width * ratio


def at_document_bottom(ctx: StyleContext) -> bool:
    """Full-width block ending near the end of the document."""
    if is_page_root(ctx) or ctx.box is None or not is_full_width(ctx):
        return False
    # Wrappers starting at the top of the document hold the whole page
    if ctx.box.y <= 0:
        return False
    return 0 <= ctx.viewport.document_height - ctx.box.bottom <= BOTTOM_TOLERANCE_PX


def top_bar_with_navigation(ctx: StyleContext) -> bool:
    """Full-width bar at the top of the page holding navigation."""
    if is_page_root(ctx) or ctx.box is None:
        return False
    return (
        ctx.box.y <= 100
        and ctx.box.height <= 300
        and is_full_width(ctx)
        and count(ctx, 'nav, [role="navigation"], [class*="nav"], [class*="menu"]') > 0
    )


def is_fixed_or_sticky(ctx: StyleContext) -> bool:
    return ctx.get("position") in ("fixed", "sticky")


def has_background(ctx: StyleContext) -> bool:
    image = ctx.get("background-image")
    color = ctx.get("background-color")
    has_image = bool(image) and image != "none"
    has_color = bool(color) and color not in ("transparent", "rgba(0, 0, 0, 0)")
    return has_image or has_color


def large_hero_block(ctx: StyleContext) -> bool:
    """Tall first-screen block with a main heading and a call to action."""
    if is_page_root(ctx) or ctx.box is None:
        return False
    viewport = ctx.viewport
    return (
        ctx.box.y < viewport.height
        and viewport.height * 0.6 <= ctx.box.height <= viewport.height * 1.5
        and is_full_width(ctx)
        and count(ctx, "h1, h2") > 0
        and count(ctx, 'button, a[class*="btn"], a[class*="button"], a[class*="cta"]') > 0
    )


def hero_with_background(ctx: StyleContext) -> bool:
    return has_background(ctx) and count(ctx, "h1, h2") > 0


def hero_with_video(ctx: StyleContext) -> bool:
    return count(ctx, 'video, iframe[src*="youtube"], iframe[src*="vimeo"]') > 0 and count(ctx, "h1, h2") > 0


def edge_pinned_narrow_column(ctx: StyleContext) -> bool:
    """Narrow, tall block pinned to one side of its parent or the viewport."""
    node = ctx.element
    if is_page_root(ctx) or ctx.box is None or node.parent is None:
        return False

    box = ctx.box
    reference = ctx.child_box(node.parent)
    left = reference.x if reference else 0
    width = reference.width if reference else ctx.viewport.width
    height = reference.height if reference else ctx.viewport.height
    if width <= 0 or height <= 0:
        return False

    narrow = 150 <= box.width <= width * 0.35
    tall = box.height >= height * 0.5
    pinned = box.x - left <= width * 0.05 or (left + width) - box.right <= width * 0.05
    return narrow and tall and pinned


def flex_row(ctx: StyleContext) -> bool:
    return ctx.get("display") in ("flex", "inline-flex") and ctx.get("flex-direction", "row") in (
        "row",
        "row-reverse",
    )


def accordion_sections(ctx: StyleContext) -> bool:
    sections = count(ctx, '[class*="item"], [class*="panel"], [class*="section"]')
    headers = count(ctx, '[class*="header"], [class*="title"], [class*="trigger"]')
    return sections >= 2 and headers >= 2


def expandable_buttons(ctx: StyleContext) -> bool:
    return count(ctx, "[aria-expanded]") >= 2


def tab_list_with_panels(ctx: StyleContext) -> bool:
    has_list = count(ctx, '[role="tablist"], [class*="tab-list"], [class*="tabs-nav"]') > 0
    panels = count(ctx, '[role="tabpanel"], [class*="tab-panel"], [class*="tab-pane"]')
    return has_list and panels >= 2


def slides_with_controls(ctx: StyleContext) -> bool:
    slides = css.select(ctx.element, '[class*="slide"], [class*="item"]')
    controls = css.select(ctx.element, '[class*="prev"], [class*="next"]')
    if len(slides) < 2 or len(controls) < 2:
        return False
    return is_lowest_container(ctx, slides + controls)


def priced_list_items(ctx: StyleContext) -> bool:
    """Every list item (at least two) carries a price."""
    items = [child for child in ctx.element.children if child.tag == "li"]
    if len(items) < 2:
        return False
    return all(PRICE.search(ctx.accessor.text(item)) for item in items)


def multiple_video_embeds(ctx: StyleContext) -> bool:
    """At least two children hold a video, and they are most of the children."""
    if is_page_root(ctx) or not ctx.element.children:
        return False
    holders = [
        child
        for child in ctx.element.children
        if css.matches(child, VIDEO_EMBEDS) or css.select_one(child, VIDEO_EMBEDS) is not None
    ]
    return len(holders) >= 2 and len(holders) >= len(ctx.element.children) * 0.6


def own_star_glyphs(ctx: StyleContext) -> bool:
    return bool(STAR_GLYPHS.search(ctx.element.text))


def several_list_items(ctx: StyleContext) -> bool:
    return count(ctx, '[role="listitem"], [class*="item"]') >= 2


def cited_quote(ctx: StyleContext) -> bool:
    has_cite = count(ctx, 'cite, [class*="author"], footer') > 0
    text = ctx.text()
    return has_cite or text.startswith(('"', "“"))


def is_lowest_container(ctx: StyleContext, nodes: list[DOMNode]) -> bool:
    """No single child of the element already contains all of ``nodes``."""
    for child in ctx.element.children:
        if all(node is child or any(a is child for a in node.ancestors()) for node in nodes):
            return False
    return True


def icon_with_single_heading(ctx: StyleContext) -> bool:
    """An icon and exactly one heading; a group of feature boxes has several."""
    return count(ctx, HEADINGS) == 1 and count(ctx, ICONS) > 0


def several_images(ctx: StyleContext) -> bool:
    return count(ctx, "img, picture") >= 4


def image_grid(ctx: StyleContext) -> bool:
    """Grid or flex container of at least four children that each hold one image."""
    if ctx.get("display") not in ("grid", "inline-grid", "flex", "inline-flex"):
        return False
    children = ctx.element.children
    if len(children) < 4:
        return False
    return all(child.tag == "img" or len(css.select(child, "img")) == 1 for child in children)


def social_profile_links(element: DOMNode) -> list[DOMNode]:
    return [link for link in css.select(element, "a[href]") if SOCIAL_HOST.search(link.href or "")]


def social_links_only(ctx: StyleContext) -> bool:
    """At least two links, all pointing at social networks, with no tighter wrapper."""
    links = css.select(ctx.element, "a[href]")
    social = social_profile_links(ctx.element)
    if len(social) < 2 or len(social) != len(links):
        return False
    return is_lowest_container(ctx, social)


def several_social_links(ctx: StyleContext) -> bool:
    return len(social_profile_links(ctx.element)) >= 2


def single_price_with_features(ctx: StyleContext) -> bool:
    """One price and a feature list: a single plan rather than a plan comparison."""
    return len(PRICE.findall(ctx.text())) == 1 and count(ctx, 'ul, ol, [class*="feature"]') > 0


def heading_and_button(ctx: StyleContext) -> bool:
    return count(ctx, "h1, h2, h3, h4") > 0 and count(ctx, BUTTONS) > 0


def front_and_back(ctx: StyleContext) -> bool:
    """Holds both faces of a flip card, and no child already holds both."""
    front = css.select_one(ctx.element, FLIP_FRONT)
    back = css.select_one(ctx.element, FLIP_BACK)
    if front is None or back is None:
        return False
    return is_lowest_container(ctx, [front, back])
