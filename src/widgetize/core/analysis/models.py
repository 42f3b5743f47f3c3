"""Structural analysis results."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal


@dataclass
class Analysis:
    """Base for per-type analysis output."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class EmptyAnalysis(Analysis):
    """Analysis for types without a structural analyzer."""


@dataclass
class RowAnalysis(Analysis):
    """Horizontal arrangement of a row."""

    child_count: int = 0
    direction: str = "row"
    justify_content: str = "normal"
    align_items: str = "normal"
    gap: str = ""
    gap_px: float | None = None
    responsive_grid: bool = False


@dataclass
class FooterAnalysis(Analysis):
    """Contents and layout of a page footer."""

    has_widgets: bool = False
    has_social_links: bool = False
    has_newsletter: bool = False
    copyright_text: str | None = None
    column_count: int = 1
    background_color: str = ""
    text_color: str = ""


@dataclass
class SidebarAnalysis(Analysis):
    """Placement and contents of a sidebar."""

    position: Literal["left", "right"] = "right"
    width: float = 0.0
    height: float = 0.0
    widget_count: int = 0
    sticky: bool = False


@dataclass
class HeaderAnalysis(Analysis):
    """Contents and positioning of a page header."""

    has_logo: bool = False
    has_nav: bool = False
    has_search: bool = False
    has_cta: bool = False
    is_sticky: bool = False
    position: str = "static"


@dataclass
class MenuAnalysis(Analysis):
    """Shape of a navigation menu."""

    link_count: int = 0
    menu_type: Literal["horizontal", "vertical", "dropdown", "mega", "hamburger"] = "horizontal"
    has_dropdowns: bool = False
    levels: int = 1


@dataclass
class ColumnAnalysis(Analysis):
    """Width of a column relative to its row."""

    width_percent: float = 100.0


@dataclass
class HeroAnalysis(Analysis):
    """Background and height of a hero region."""

    background_image: str | None = None
    background_color: str = ""
    min_height_px: float | None = None
