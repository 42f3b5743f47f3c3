"""Captured DOM model, style access and selector matching."""

from widgetize.core.dom.accessor import AccessorError, IStyleAccessor, SnapshotAccessor
from widgetize.core.dom.capture import IPage, PageCapture, load_snapshot, save_snapshot
from widgetize.core.dom.models import BoundingBox, DOMNode, DOMSnapshot, Viewport
from widgetize.core.dom.selector import (
    SelectorGenerator,
    SelectorSyntaxError,
    closest,
    compile_selector,
    matches,
    select,
    select_one,
)

__all__ = [
    # Capture
    "PageCapture",
    "IPage",
    "load_snapshot",
    "save_snapshot",
    # Access
    "IStyleAccessor",
    "SnapshotAccessor",
    "AccessorError",
    # Selectors
    "SelectorGenerator",
    "SelectorSyntaxError",
    "select",
    "select_one",
    "matches",
    "closest",
    "compile_selector",
    # Models
    "DOMNode",
    "DOMSnapshot",
    "BoundingBox",
    "Viewport",
]
