"""Recognition pattern definitions.

A pattern is a conjunction of predicates over one DOM node. Every predicate
a pattern declares must hold for the pattern to match; predicates it leaves
unset are ignored.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from widgetize.core.dom import selector as css
from widgetize.core.dom.accessor import IStyleAccessor, parse_px
from widgetize.core.dom.models import BoundingBox, DOMNode, Viewport
from widgetize.core.recognition.types import ComponentKind


class _Present:
    """Marker for attribute predicates that only require presence."""

    _instance: _Present | None = None

    def __new__(cls) -> _Present:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "PRESENT"


PRESENT = _Present()


@dataclass(frozen=True)
class StyleContext:
    """What a callable CSS predicate gets to look at."""

    element: DOMNode
    style: Mapping[str, str]
    box: BoundingBox | None
    viewport: Viewport
    accessor: IStyleAccessor

    def get(self, prop: str, default: str = "") -> str:
        """Get a computed style value."""
        return self.style.get(prop, default)

    def px(self, prop: str) -> float | None:
        """Get a computed style value as pixels."""
        return parse_px(self.style.get(prop))

    def text(self) -> str:
        """Rendered text of the element."""
        return self.accessor.text(self.element)

    def child_style(self, child: DOMNode) -> Mapping[str, str]:
        """Computed style of another node, usually a child."""
        return self.accessor.computed_style(child)

    def child_box(self, child: DOMNode) -> BoundingBox | None:
        """Geometry of another node, usually a child."""
        return self.accessor.bounding_box(child)


CSSPredicate = Callable[[StyleContext], bool]


def _declared(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (Mapping, tuple, frozenset, set)):
        return len(value) > 0
    return True


@dataclass(frozen=True)
class StructurePattern:
    """Requires a minimum number of (optionally matching) direct children."""

    min_children: int = 1
    child_selector: str | None = None

    def matches(self, node: DOMNode) -> bool:
        if self.child_selector is None:
            return len(node.children) >= self.min_children
        count = sum(1 for child in node.children if css.matches(child, self.child_selector))
        return count >= self.min_children


@dataclass(frozen=True)
class RecognitionPattern:
    """
    One candidate rule for one component type.

    Attributes:
        component_type: Type assigned when the pattern wins
        confidence: Match strength, 0-100
        priority: Tie-break between types at equal confidence
        reason: Human-readable audit string
        tag_names: Node tag must be one of these
        class_keywords: Class attribute must contain one of these substrings
        attributes: Attribute name to PRESENT or a regex the value must satisfy
        aria_role: Exact role attribute
        content_pattern: Regex the rendered text must satisfy
        child_pattern: Selector at least one descendant must match
        structure_pattern: Direct-children requirement
        css_properties: Allowed values per style property, or a predicate
    """

    component_type: ComponentKind
    confidence: int
    priority: int = 0
    reason: str = ""
    tag_names: frozenset[str] | None = None
    class_keywords: tuple[str, ...] | None = None
    attributes: Mapping[str, Any] | None = None
    aria_role: str | None = None
    content_pattern: re.Pattern[str] | None = None
    child_pattern: str | None = None
    structure_pattern: StructurePattern | None = None
    css_properties: Mapping[str, frozenset[str]] | CSSPredicate | None = field(default=None)

    def __post_init__(self) -> None:
        if not 0 <= self.confidence <= 100:
            raise ValueError(f"confidence must be within 0-100, got {self.confidence}")

        # Normalize authoring shorthands into their canonical forms
        if isinstance(self.tag_names, str):
            object.__setattr__(self, "tag_names", (self.tag_names,))
        if isinstance(self.class_keywords, str):
            object.__setattr__(self, "class_keywords", (self.class_keywords,))
        if self.tag_names is not None:
            object.__setattr__(self, "tag_names", frozenset(t.lower() for t in self.tag_names))
        if self.class_keywords is not None:
            object.__setattr__(self, "class_keywords", tuple(self.class_keywords))
        if isinstance(self.content_pattern, str):
            object.__setattr__(self, "content_pattern", re.compile(self.content_pattern))
        if self.attributes is not None:
            object.__setattr__(
                self,
                "attributes",
                {
                    name: re.compile(rule) if isinstance(rule, str) else rule
                    for name, rule in self.attributes.items()
                },
            )
        if isinstance(self.css_properties, Mapping):
            object.__setattr__(
                self,
                "css_properties",
                {
                    prop: frozenset([allowed] if isinstance(allowed, str) else allowed)
                    for prop, allowed in self.css_properties.items()
                },
            )
        if self.child_pattern is not None:
            css.compile_selector(self.child_pattern)
        if self.structure_pattern is not None and self.structure_pattern.child_selector:
            css.compile_selector(self.structure_pattern.child_selector)

    @property
    def predicate_count(self) -> int:
        """Number of predicates this pattern declares, ignoring empty collections."""
        return sum(
            _declared(value)
            for value in (
                self.tag_names,
                self.class_keywords,
                self.attributes,
                self.aria_role,
                self.content_pattern,
                self.child_pattern,
                self.structure_pattern,
                self.css_properties,
            )
        )

    def matches(self, node: DOMNode, accessor: IStyleAccessor) -> bool:
        """
        Check whether every declared predicate holds for the node.

        Structural predicates are checked before ones that need the
        accessor. Exceptions from the accessor or from callable predicates
        propagate to the caller.

        Args:
            node: Node to test
            accessor: Source of style, geometry and text

        Returns:
            True if the node satisfies the pattern
        """
        if self.tag_names is not None and node.tag not in self.tag_names:
            return False

        if self.aria_role is not None and node.role != self.aria_role:
            return False

        if self.class_keywords is not None:
            class_attr = node.class_name
            if not class_attr or not any(keyword in class_attr for keyword in self.class_keywords):
                return False

        if self.attributes is not None and not self._attributes_match(node):
            return False

        if self.structure_pattern is not None and not self.structure_pattern.matches(node):
            return False

        if self.child_pattern is not None and css.select_one(node, self.child_pattern) is None:
            return False

        if self.css_properties is not None and not self._css_matches(node, accessor):
            return False

        if self.content_pattern is not None and not self.content_pattern.search(accessor.text(node)):
            return False

        return True

    def _attributes_match(self, node: DOMNode) -> bool:
        for name, rule in (self.attributes or {}).items():
            value = node.attributes.get(name)
            if value is None:
                return False
            if rule is not PRESENT and not rule.search(value):
                return False
        return True

    def _css_matches(self, node: DOMNode, accessor: IStyleAccessor) -> bool:
        style = accessor.computed_style(node)

        if callable(self.css_properties):
            context = StyleContext(
                element=node,
                style=style,
                box=accessor.bounding_box(node),
                viewport=accessor.viewport(),
                accessor=accessor,
            )
            return bool(self.css_properties(context))

        for prop, allowed in self.css_properties.items():
            if style.get(prop) not in allowed:
                return False
        return True

    def describe(self) -> dict[str, Any]:
        """Summarize the pattern for listings."""
        predicates = []
        if self.tag_names is not None:
            predicates.append("tag=" + ",".join(sorted(self.tag_names)))
        if self.class_keywords is not None:
            predicates.append("class~" + ",".join(self.class_keywords))
        if self.attributes is not None:
            predicates.append("attrs=" + ",".join(self.attributes))
        if self.aria_role is not None:
            predicates.append(f"role={self.aria_role}")
        if self.content_pattern is not None:
            predicates.append(f"text~/{self.content_pattern.pattern}/")
        if self.child_pattern is not None:
            predicates.append(f"child={self.child_pattern}")
        if self.structure_pattern is not None:
            predicates.append(f"children>={self.structure_pattern.min_children}")
        if self.css_properties is not None:
            if callable(self.css_properties):
                predicates.append("css=<predicate>")
            else:
                predicates.append("css=" + ",".join(self.css_properties))

        return {
            "type": str(getattr(self.component_type, "value", self.component_type)),
            "confidence": self.confidence,
            "priority": self.priority,
            "reason": self.reason,
            "predicates": predicates,
        }
