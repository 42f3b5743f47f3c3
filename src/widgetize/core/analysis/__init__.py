"""Structural analysis of recognized components."""

from widgetize.core.analysis.analyzers import StructuralAnalyzer, count_grid_tracks
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

__all__ = [
    "StructuralAnalyzer",
    "count_grid_tracks",
    "Analysis",
    "EmptyAnalysis",
    "RowAnalysis",
    "FooterAnalysis",
    "SidebarAnalysis",
    "HeaderAnalysis",
    "MenuAnalysis",
    "ColumnAnalysis",
    "HeroAnalysis",
]
