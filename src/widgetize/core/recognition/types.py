"""Component type vocabulary."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ComponentType(str, Enum):
    """Built-in semantic component types."""

    # Layout
    SECTION = "section"
    CONTAINER = "container"
    ROW = "row"
    COLUMN = "column"
    HERO = "hero"
    HEADER = "header"
    FOOTER = "footer"
    SIDEBAR = "sidebar"
    MENU = "menu"

    # Content
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    TEXT = "text"
    BLOCKQUOTE = "blockquote"
    LIST = "list"
    IMAGE = "image"
    BUTTON = "button"

    # Widgets
    ALERT = "alert"
    TABS = "tabs"
    TOGGLE = "toggle"
    IMAGE_CAROUSEL = "image-carousel"
    POSTS_GRID = "posts-grid"
    PRICE_LIST = "price-list"
    STAR_RATING = "star-rating"
    VIDEO_PLAYLIST = "video-playlist"
    ICON_BOX = "icon-box"
    IMAGE_GALLERY = "image-gallery"
    SOCIAL_ICONS = "social-icons"
    PROGRESS_BAR = "progress-bar"
    PRICE_TABLE = "price-table"
    CALL_TO_ACTION = "call-to-action"
    FLIP_BOX = "flip-box"

    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CustomComponentType:
    """A component type contributed by a plugin.

    Created through ``PatternRegistry.define_custom_type`` so names never
    collide with the built-in vocabulary.
    """

    value: str

    def __str__(self) -> str:
        return self.value


ComponentKind = ComponentType | CustomComponentType


LAYOUT_TYPES = frozenset(
    {
        ComponentType.SECTION,
        ComponentType.CONTAINER,
        ComponentType.ROW,
        ComponentType.COLUMN,
        ComponentType.HERO,
        ComponentType.HEADER,
        ComponentType.FOOTER,
        ComponentType.SIDEBAR,
    }
)

WIDGET_TYPES = frozenset(
    {
        ComponentType.ALERT,
        ComponentType.TABS,
        ComponentType.TOGGLE,
        ComponentType.IMAGE_CAROUSEL,
        ComponentType.POSTS_GRID,
        ComponentType.PRICE_LIST,
        ComponentType.STAR_RATING,
        ComponentType.VIDEO_PLAYLIST,
        ComponentType.ICON_BOX,
        ComponentType.IMAGE_GALLERY,
        ComponentType.SOCIAL_ICONS,
        ComponentType.PROGRESS_BAR,
        ComponentType.PRICE_TABLE,
        ComponentType.CALL_TO_ACTION,
        ComponentType.FLIP_BOX,
    }
)
