"""Elementor document models."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Literal

ElementType = Literal["section", "column", "widget"]


@dataclass(frozen=True)
class ElementorWidget:
    """
    A node of an Elementor document.

    Sections and columns are elements too; they carry child ``elements``
    and no ``widget_type``.
    """

    id: str
    el_type: ElementType
    settings: dict[str, Any] = field(default_factory=dict)
    widget_type: str | None = None
    elements: tuple[ElementorWidget, ...] = ()
    is_inner: bool = False

    @property
    def is_widget(self) -> bool:
        return self.el_type == "widget"

    def iter(self) -> Iterator[ElementorWidget]:
        """Iterate this element and its descendants depth-first."""
        yield self
        for element in self.elements:
            yield from element.iter()

    def to_dict(self) -> dict[str, Any]:
        """Convert to Elementor JSON form."""
        data: dict[str, Any] = {
            "id": self.id,
            "elType": self.el_type,
            "settings": self.settings,
            "elements": [element.to_dict() for element in self.elements],
            "isInner": self.is_inner,
        }
        if self.widget_type is not None:
            data["widgetType"] = self.widget_type
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ElementorWidget:
        """Create from Elementor JSON form."""
        return cls(
            id=data["id"],
            el_type=data["elType"],
            settings=dict(data.get("settings") or {}),
            widget_type=data.get("widgetType"),
            elements=tuple(cls.from_dict(e) for e in data.get("elements") or []),
            is_inner=bool(data.get("isInner", False)),
        )
