"""Built-in recognition pattern catalogue.

Registration order matters: it breaks ties between candidates of equal
confidence and priority. Hero is registered before header so a
``<header class="hero">`` reads as a hero, and toggle before tabs so a
tablist of expandable buttons reads as an accordion.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from widgetize.core.recognition.catalog.content import (
    BLOCKQUOTE_PATTERNS,
    BUTTON_PATTERNS,
    HEADING_PATTERNS,
    IMAGE_PATTERNS,
    LIST_PATTERNS,
    PARAGRAPH_PATTERNS,
    TEXT_PATTERNS,
)
from widgetize.core.recognition.catalog.layout import (
    COLUMN_PATTERNS,
    CONTAINER_PATTERNS,
    FOOTER_PATTERNS,
    HEADER_PATTERNS,
    HERO_PATTERNS,
    MENU_PATTERNS,
    ROW_PATTERNS,
    SECTION_PATTERNS,
    SIDEBAR_PATTERNS,
)
from widgetize.core.recognition.catalog.widgets import (
    ALERT_PATTERNS,
    CALL_TO_ACTION_PATTERNS,
    FLIP_BOX_PATTERNS,
    ICON_BOX_PATTERNS,
    IMAGE_CAROUSEL_PATTERNS,
    IMAGE_GALLERY_PATTERNS,
    POSTS_GRID_PATTERNS,
    PRICE_LIST_PATTERNS,
    PRICE_TABLE_PATTERNS,
    PROGRESS_BAR_PATTERNS,
    SOCIAL_ICONS_PATTERNS,
    STAR_RATING_PATTERNS,
    TABS_PATTERNS,
    TOGGLE_PATTERNS,
    VIDEO_PLAYLIST_PATTERNS,
)
from widgetize.core.recognition.patterns import RecognitionPattern
from widgetize.core.recognition.types import ComponentType

if TYPE_CHECKING:
    from widgetize.core.recognition.registry import PatternRegistry

BUILTIN_CATALOG: list[tuple[ComponentType, list[RecognitionPattern]]] = [
    # Page regions
    (ComponentType.HERO, HERO_PATTERNS),
    (ComponentType.HEADER, HEADER_PATTERNS),
    (ComponentType.FOOTER, FOOTER_PATTERNS),
    (ComponentType.SIDEBAR, SIDEBAR_PATTERNS),
    (ComponentType.MENU, MENU_PATTERNS),
    # Widgets
    (ComponentType.ALERT, ALERT_PATTERNS),
    (ComponentType.TOGGLE, TOGGLE_PATTERNS),
    (ComponentType.TABS, TABS_PATTERNS),
    (ComponentType.IMAGE_CAROUSEL, IMAGE_CAROUSEL_PATTERNS),
    (ComponentType.POSTS_GRID, POSTS_GRID_PATTERNS),
    (ComponentType.PRICE_LIST, PRICE_LIST_PATTERNS),
    (ComponentType.STAR_RATING, STAR_RATING_PATTERNS),
    (ComponentType.VIDEO_PLAYLIST, VIDEO_PLAYLIST_PATTERNS),
    (ComponentType.FLIP_BOX, FLIP_BOX_PATTERNS),
    (ComponentType.PRICE_TABLE, PRICE_TABLE_PATTERNS),
    (ComponentType.CALL_TO_ACTION, CALL_TO_ACTION_PATTERNS),
    (ComponentType.ICON_BOX, ICON_BOX_PATTERNS),
    (ComponentType.IMAGE_GALLERY, IMAGE_GALLERY_PATTERNS),
    (ComponentType.SOCIAL_ICONS, SOCIAL_ICONS_PATTERNS),
    (ComponentType.PROGRESS_BAR, PROGRESS_BAR_PATTERNS),
    # Content
    (ComponentType.HEADING, HEADING_PATTERNS),
    (ComponentType.PARAGRAPH, PARAGRAPH_PATTERNS),
    (ComponentType.BLOCKQUOTE, BLOCKQUOTE_PATTERNS),
    (ComponentType.LIST, LIST_PATTERNS),
    (ComponentType.IMAGE, IMAGE_PATTERNS),
    (ComponentType.BUTTON, BUTTON_PATTERNS),
    (ComponentType.TEXT, TEXT_PATTERNS),
    # Structure
    (ComponentType.SECTION, SECTION_PATTERNS),
    (ComponentType.ROW, ROW_PATTERNS),
    (ComponentType.COLUMN, COLUMN_PATTERNS),
    (ComponentType.CONTAINER, CONTAINER_PATTERNS),
]


def register_builtin_patterns(registry: PatternRegistry) -> None:
    """Register the built-in catalogue into a registry."""
    for component_type, patterns in BUILTIN_CATALOG:
        registry.register(component_type, patterns)


__all__ = ["BUILTIN_CATALOG", "register_builtin_patterns"]
