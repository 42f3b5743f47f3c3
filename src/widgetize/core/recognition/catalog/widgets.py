"""Widget patterns: interactive and composite components."""

from __future__ import annotations

import re

from widgetize.core.recognition.catalog import predicates as p
from widgetize.core.recognition.patterns import PRESENT, RecognitionPattern, StructurePattern
from widgetize.core.recognition.types import ComponentType

ALERT_PATTERNS = [
    RecognitionPattern(
        ComponentType.ALERT,
        confidence=95,
        priority=95,
        reason="ARIA alert",
        aria_role="alert",
    ),
    RecognitionPattern(
        ComponentType.ALERT,
        confidence=85,
        priority=85,
        reason="alert class name",
        class_keywords=("alert", "notice", "notification", "callout", "admonition", "message-box"),
    ),
]

TOGGLE_PATTERNS = [
    RecognitionPattern(
        ComponentType.TOGGLE,
        confidence=95,
        priority=90,
        reason="tablist of expandable buttons",
        aria_role="tablist",
        css_properties=p.expandable_buttons,
    ),
    RecognitionPattern(
        ComponentType.TOGGLE,
        confidence=95,
        priority=90,
        reason="accordion framework class",
        class_keywords=("MuiAccordion", "accordion-", "collapse-", "panel-group", "elementor-toggle"),
    ),
    RecognitionPattern(
        ComponentType.TOGGLE,
        confidence=90,
        priority=85,
        reason="accordion class with several sections",
        class_keywords=("accordion", "collapse", "expandable", "faq", "toggle"),
        css_properties=p.accordion_sections,
    ),
    RecognitionPattern(
        ComponentType.TOGGLE,
        confidence=85,
        priority=80,
        reason="group of <details> disclosures",
        structure_pattern=StructurePattern(min_children=2, child_selector="details"),
    ),
]

TABS_PATTERNS = [
    RecognitionPattern(
        ComponentType.TABS,
        confidence=95,
        priority=90,
        reason="ARIA tablist",
        aria_role="tablist",
    ),
    RecognitionPattern(
        ComponentType.TABS,
        confidence=95,
        priority=90,
        reason="tabs framework class",
        class_keywords=("nav-tabs", "tab-container", "MuiTabs", "elementor-tabs"),
    ),
    RecognitionPattern(
        ComponentType.TABS,
        confidence=90,
        priority=85,
        reason="tab list with panels",
        class_keywords=("tabs", "tab-", "tabbed"),
        css_properties=p.tab_list_with_panels,
    ),
]

IMAGE_CAROUSEL_PATTERNS = [
    RecognitionPattern(
        ComponentType.IMAGE_CAROUSEL,
        confidence=95,
        priority=90,
        reason="carousel library root",
        class_keywords=("owl-carousel", "flickity", "glide", "splide", "slick-slider", "swiper-container"),
    ),
    RecognitionPattern(
        ComponentType.IMAGE_CAROUSEL,
        confidence=90,
        priority=85,
        reason="carousel class name",
        class_keywords=("carousel", "slider", "slideshow", "swiper", "slick"),
    ),
    RecognitionPattern(
        ComponentType.IMAGE_CAROUSEL,
        confidence=90,
        priority=85,
        reason="ARIA carousel",
        attributes={"aria-roledescription": re.compile(r"^carousel$", re.IGNORECASE)},
    ),
    RecognitionPattern(
        ComponentType.IMAGE_CAROUSEL,
        confidence=85,
        priority=80,
        reason="slides with previous and next controls",
        css_properties=p.slides_with_controls,
    ),
]

POSTS_GRID_PATTERNS = [
    RecognitionPattern(
        ComponentType.POSTS_GRID,
        confidence=90,
        priority=85,
        reason="posts listing class with post items",
        class_keywords=("posts", "post-grid", "blog-grid", "post-list", "blog-list", "articles"),
        structure_pattern=StructurePattern(
            min_children=2, child_selector='article, [class*="post"], [class*="card"]'
        ),
    ),
    RecognitionPattern(
        ComponentType.POSTS_GRID,
        confidence=85,
        priority=80,
        reason="several sibling articles",
        structure_pattern=StructurePattern(min_children=3, child_selector="article"),
    ),
]

PRICE_LIST_PATTERNS = [
    RecognitionPattern(
        ComponentType.PRICE_LIST,
        confidence=92,
        priority=85,
        reason="list whose every item carries a price",
        tag_names=frozenset({"ul", "ol"}),
        css_properties=p.priced_list_items,
    ),
    RecognitionPattern(
        ComponentType.PRICE_LIST,
        confidence=90,
        priority=85,
        reason="price list class name",
        class_keywords=("price-list", "pricing-list", "menu-list", "price-menu", "elementor-price-list"),
    ),
    RecognitionPattern(
        ComponentType.PRICE_LIST,
        confidence=75,
        priority=70,
        reason="menu class with prices",
        class_keywords=("menu", "prices"),
        content_pattern=p.PRICE,
        structure_pattern=StructurePattern(min_children=2),
    ),
]

STAR_RATING_PATTERNS = [
    RecognitionPattern(
        ComponentType.STAR_RATING,
        confidence=90,
        priority=85,
        reason="rating class name",
        class_keywords=("star-rating", "stars", "rating"),
    ),
    RecognitionPattern(
        ComponentType.STAR_RATING,
        confidence=90,
        priority=85,
        reason="data-rating attribute",
        attributes={"data-rating": PRESENT},
    ),
    RecognitionPattern(
        ComponentType.STAR_RATING,
        confidence=90,
        priority=85,
        reason="rated N out of M label",
        attributes={"aria-label": re.compile(r"rated\s+[\d.]+\s+out\s+of", re.IGNORECASE)},
    ),
    RecognitionPattern(
        ComponentType.STAR_RATING,
        confidence=85,
        priority=80,
        reason="row of star icons",
        structure_pattern=StructurePattern(min_children=3, child_selector='[class*="star"]'),
    ),
    RecognitionPattern(
        ComponentType.STAR_RATING,
        confidence=80,
        priority=75,
        reason="star glyphs",
        css_properties=p.own_star_glyphs,
    ),
]

VIDEO_PLAYLIST_PATTERNS = [
    RecognitionPattern(
        ComponentType.VIDEO_PLAYLIST,
        confidence=90,
        priority=85,
        reason="playlist class name",
        class_keywords=("video-playlist", "playlist", "video-list", "video-gallery"),
    ),
    RecognitionPattern(
        ComponentType.VIDEO_PLAYLIST,
        confidence=80,
        priority=75,
        reason="several embedded videos",
        css_properties=p.multiple_video_embeds,
    ),
]

ICON_BOX_PATTERNS = [
    RecognitionPattern(
        ComponentType.ICON_BOX,
        confidence=90,
        priority=85,
        reason="icon box class with icon and heading",
        class_keywords=("icon-box", "iconbox", "feature-box", "info-box"),
        css_properties=p.icon_with_single_heading,
    ),
    RecognitionPattern(
        ComponentType.ICON_BOX,
        confidence=85,
        priority=80,
        reason="feature or service block with icon and heading",
        class_keywords=("feature", "service", "benefit"),
        css_properties=p.icon_with_single_heading,
    ),
]

IMAGE_GALLERY_PATTERNS = [
    RecognitionPattern(
        ComponentType.IMAGE_GALLERY,
        confidence=95,
        priority=90,
        reason="gallery library root",
        class_keywords=("lightgallery", "photoswipe", "justified-gallery", "elementor-image-gallery"),
    ),
    RecognitionPattern(
        ComponentType.IMAGE_GALLERY,
        confidence=85,
        priority=80,
        reason="gallery class with several images",
        class_keywords=("gallery", "photo-grid", "image-grid", "masonry", "portfolio"),
        css_properties=p.several_images,
    ),
    RecognitionPattern(
        ComponentType.IMAGE_GALLERY,
        confidence=80,
        priority=75,
        reason="grid of image tiles",
        css_properties=p.image_grid,
    ),
]

SOCIAL_ICONS_PATTERNS = [
    RecognitionPattern(
        ComponentType.SOCIAL_ICONS,
        confidence=92,
        priority=85,
        reason="social class with profile links",
        class_keywords=("social-icons", "social-links", "social-media", "social-profiles", "elementor-social-icons"),
        css_properties=p.several_social_links,
    ),
    RecognitionPattern(
        ComponentType.SOCIAL_ICONS,
        confidence=92,
        priority=80,
        reason="links to social profiles only",
        css_properties=p.social_links_only,
    ),
]

PROGRESS_BAR_PATTERNS = [
    RecognitionPattern(
        ComponentType.PROGRESS_BAR,
        confidence=95,
        priority=95,
        reason="semantic <progress>",
        tag_names=frozenset({"progress"}),
    ),
    RecognitionPattern(
        ComponentType.PROGRESS_BAR,
        confidence=95,
        priority=95,
        reason="ARIA progressbar",
        aria_role="progressbar",
    ),
    RecognitionPattern(
        ComponentType.PROGRESS_BAR,
        confidence=85,
        priority=80,
        reason="progress class name",
        class_keywords=("progress", "skill-bar", "skillbar"),
    ),
]

PRICE_TABLE_PATTERNS = [
    RecognitionPattern(
        ComponentType.PRICE_TABLE,
        confidence=95,
        priority=90,
        reason="page builder price table",
        class_keywords=("elementor-price-table",),
    ),
    RecognitionPattern(
        ComponentType.PRICE_TABLE,
        confidence=90,
        priority=85,
        reason="pricing plan with one price and features",
        class_keywords=("pricing-table", "price-table", "pricing-plan", "pricing-card", "plan", "package", "tier"),
        css_properties=p.single_price_with_features,
    ),
]

CALL_TO_ACTION_PATTERNS = [
    RecognitionPattern(
        ComponentType.CALL_TO_ACTION,
        confidence=90,
        priority=85,
        reason="call to action class with heading and button",
        class_keywords=("cta", "call-to-action"),
        css_properties=p.heading_and_button,
    ),
    RecognitionPattern(
        ComponentType.CALL_TO_ACTION,
        confidence=80,
        priority=75,
        reason="sign-up block with heading and button",
        class_keywords=("signup", "sign-up", "get-started", "try-free", "subscribe"),
        css_properties=p.heading_and_button,
    ),
]

FLIP_BOX_PATTERNS = [
    RecognitionPattern(
        ComponentType.FLIP_BOX,
        confidence=95,
        priority=90,
        reason="flip box class with front and back",
        class_keywords=("flip-box", "flipbox", "flip-card"),
        css_properties=p.front_and_back,
    ),
    RecognitionPattern(
        ComponentType.FLIP_BOX,
        confidence=85,
        priority=80,
        reason="flip class with front and back",
        class_keywords=("flip",),
        css_properties=p.front_and_back,
    ),
]
