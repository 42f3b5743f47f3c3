"""CSS selector matching and generation for snapshot nodes.

Matching runs on a BeautifulSoup mirror of the captured tree, with
soupsieve evaluating the selectors. The mirror is built once per tree
root and dropped whenever ``DOMNode.append`` changes the tree.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import TYPE_CHECKING

import soupsieve
import structlog
from bs4 import BeautifulSoup, Tag

if TYPE_CHECKING:
    from widgetize.core.dom.models import DOMNode

logger = structlog.get_logger(__name__)

_NAME = re.compile(r"[-\w]+")


class SelectorSyntaxError(ValueError):
    """Raised for selectors soupsieve cannot compile."""

    pass


class SoupMirror:
    """BeautifulSoup copy of a node tree, linked back to its nodes."""

    def __init__(self, root: DOMNode) -> None:
        self.root = root
        self.soup = BeautifulSoup("", "html.parser")
        self._tags: dict[int, Tag] = {}
        self._nodes: dict[int, DOMNode] = {}
        self.soup.append(self._build(root))
        logger.debug("Selector mirror built", tag=root.tag, nodes=len(self._nodes))

    def _build(self, node: DOMNode) -> Tag:
        attrs: dict[str, str | list[str]] = dict(node.attributes)
        if "class" in attrs:
            attrs["class"] = node.class_list
        tag = self.soup.new_tag(node.tag, attrs=attrs)
        if node.text:
            tag.append(node.text)
        for child in node.children:
            tag.append(self._build(child))

        self._tags[id(node)] = tag
        self._nodes[id(tag)] = node
        return tag

    def tag_for(self, node: DOMNode) -> Tag | None:
        return self._tags.get(id(node))

    def node_for(self, tag: Tag) -> DOMNode:
        return self._nodes[id(tag)]


def _tree_root(node: DOMNode) -> DOMNode:
    while node.parent is not None:
        node = node.parent
    return node


def _locate(node: DOMNode) -> tuple[SoupMirror, Tag]:
    """Get the mirror of the node's tree and the node's tag in it."""
    root = _tree_root(node)
    mirror = root.selector_cache
    tag = mirror.tag_for(node) if mirror is not None else None
    if tag is None:
        # Missing or stale after the tree was edited in place
        mirror = SoupMirror(root)
        root.selector_cache = mirror
        tag = mirror.tag_for(node)
    return mirror, tag


@lru_cache(maxsize=512)
def compile_selector(selector: str) -> soupsieve.SoupSieve:
    """
    Compile a selector list.

    Args:
        selector: CSS selector text, possibly comma-separated

    Returns:
        Compiled soupsieve matcher

    Raises:
        SelectorSyntaxError: If the selector is malformed or unsupported
    """
    if not selector or not selector.strip():
        raise SelectorSyntaxError("empty selector")
    try:
        return soupsieve.compile(selector.strip())
    except soupsieve.SelectorSyntaxError as e:
        raise SelectorSyntaxError(f"{selector!r}: {e}") from e


def matches(node: DOMNode, selector: str) -> bool:
    """Check whether a node matches any group of the selector."""
    compiled = compile_selector(selector)
    _, tag = _locate(node)
    return compiled.match(tag)


def select(root: DOMNode, selector: str) -> list[DOMNode]:
    """
    Find all descendants of ``root`` matching the selector.

    Like ``Element.querySelectorAll``, ``root`` itself is not a candidate
    but ancestors of ``root`` may satisfy descendant combinators.

    Returns:
        Matching nodes in document order
    """
    compiled = compile_selector(selector)
    mirror, tag = _locate(root)
    return [mirror.node_for(found) for found in compiled.select(tag)]


def select_one(root: DOMNode, selector: str) -> DOMNode | None:
    """Find the first descendant matching the selector."""
    compiled = compile_selector(selector)
    mirror, tag = _locate(root)
    found = compiled.select_one(tag)
    return mirror.node_for(found) if found is not None else None


def closest(node: DOMNode, selector: str) -> DOMNode | None:
    """Find the node itself or its nearest ancestor matching the selector."""
    compiled = compile_selector(selector)
    mirror, tag = _locate(node)
    found = compiled.closest(tag)
    return mirror.node_for(found) if found is not None else None


class SelectorGenerator:
    """
    Suggests readable CSS selectors for captured nodes.

    Prioritizes selectors in this order:
    1. ID (most reliable)
    2. data-testid / data-cy / data-test (testing attributes)
    3. ARIA label
    4. Meaningful class combinations
    5. Short ancestor path (last resort)
    """

    # Testing-related data attributes
    TEST_ATTRIBUTES = [
        "data-testid",
        "data-test-id",
        "data-test",
        "data-cy",
        "data-qa",
    ]

    UTILITY_PATTERNS = [
        re.compile(r"^(m|p|w|h|flex|grid|block|inline|gap)-", re.IGNORECASE),
        re.compile(r"^(text|bg|border|rounded|shadow)-", re.IGNORECASE),
        re.compile(r"^(col|d|order|offset)-", re.IGNORECASE),
        re.compile(r"^(u-|js-|is-|has-)", re.IGNORECASE),
        re.compile(r"^[a-z]{1,2}-\d+$", re.IGNORECASE),
        re.compile(r":"),
    ]

    def __init__(self, max_depth: int = 3) -> None:
        """
        Initialize selector generator.

        Args:
            max_depth: Maximum ancestors included in path selectors
        """
        self.max_depth = max_depth

    def generate(self, node: DOMNode) -> str:
        """
        Generate a CSS selector for a node.

        Args:
            node: DOM node to generate selector for

        Returns:
            CSS selector string
        """
        selector = (
            self._selector_by_id(node)
            or self._selector_by_test_attr(node)
            or self._selector_by_aria(node)
            or self._selector_by_classes(node)
        )
        if selector:
            return selector
        return self._selector_by_path(node)

    def _selector_by_id(self, node: DOMNode) -> str | None:
        """Generate selector using ID attribute."""
        id_value = node.id_attr
        if not id_value or any(c in id_value for c in " .:[]()\"'"):
            return None
        if id_value[0].isdigit():
            return f'[id="{id_value}"]'
        return f"#{id_value}"

    def _selector_by_test_attr(self, node: DOMNode) -> str | None:
        """Generate selector using test attributes."""
        for attr in self.TEST_ATTRIBUTES:
            if attr in node.attributes:
                return f'[{attr}="{node.attributes[attr]}"]'
        return None

    def _selector_by_aria(self, node: DOMNode) -> str | None:
        """Generate selector using aria-label."""
        label = node.aria_label
        if label and '"' not in label:
            return f'{node.tag}[aria-label="{label}"]'
        return None

    def _selector_by_classes(self, node: DOMNode) -> str | None:
        """Generate selector using up to two meaningful classes."""
        meaningful = [c for c in node.class_list if not self._is_utility_class(c)]
        if not meaningful:
            return None
        return node.tag + "".join(f".{c}" for c in meaningful[:2])

    def _selector_by_path(self, node: DOMNode) -> str:
        """Generate selector from the nearest ancestors."""
        parts = [self._step(node)]
        for ancestor in node.ancestors():
            if len(parts) > self.max_depth:
                break
            anchor = self._selector_by_id(ancestor)
            if anchor:
                parts.append(anchor)
                break
            parts.append(self._step(ancestor))
        return " > ".join(reversed(parts))

    def _step(self, node: DOMNode) -> str:
        meaningful = [c for c in node.class_list if not self._is_utility_class(c)]
        if meaningful:
            return f"{node.tag}.{meaningful[0]}"
        return node.tag

    def _is_utility_class(self, class_name: str) -> bool:
        """Check if class is a utility class (Tailwind, Bootstrap, etc.)."""
        if not _NAME.fullmatch(class_name):
            return True
        return any(pattern.search(class_name) for pattern in self.UTILITY_PATTERNS)
