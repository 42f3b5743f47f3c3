"""Content patterns: text, media and basic controls."""

from __future__ import annotations

import re

from widgetize.core.recognition.catalog import predicates as p
from widgetize.core.recognition.patterns import RecognitionPattern, StructurePattern
from widgetize.core.recognition.types import ComponentType

NON_EMPTY = re.compile(r"\S")

HEADING_PATTERNS = [
    RecognitionPattern(
        ComponentType.HEADING,
        confidence=95,
        priority=90,
        reason="heading element",
        tag_names=frozenset({"h1", "h2", "h3", "h4", "h5", "h6"}),
    ),
    RecognitionPattern(
        ComponentType.HEADING,
        confidence=90,
        priority=85,
        reason="ARIA heading",
        aria_role="heading",
        content_pattern=NON_EMPTY,
    ),
]

PARAGRAPH_PATTERNS = [
    RecognitionPattern(
        ComponentType.PARAGRAPH,
        confidence=90,
        priority=70,
        reason="paragraph with text",
        tag_names=frozenset({"p"}),
        content_pattern=NON_EMPTY,
    ),
]

TEXT_PATTERNS = [
    RecognitionPattern(
        ComponentType.TEXT,
        confidence=60,
        priority=30,
        reason="inline text element",
        tag_names=frozenset({"span", "strong", "em", "b", "small", "label", "address", "figcaption", "time"}),
        content_pattern=NON_EMPTY,
    ),
]

BLOCKQUOTE_PATTERNS = [
    RecognitionPattern(
        ComponentType.BLOCKQUOTE,
        confidence=95,
        priority=90,
        reason="semantic <blockquote>",
        tag_names=frozenset({"blockquote"}),
    ),
    RecognitionPattern(
        ComponentType.BLOCKQUOTE,
        confidence=80,
        priority=75,
        reason="quote class with citation",
        class_keywords=("quote", "pullquote", "blockquote"),
        css_properties=p.cited_quote,
    ),
]

LIST_PATTERNS = [
    RecognitionPattern(
        ComponentType.LIST,
        confidence=90,
        priority=80,
        reason="list with several items",
        tag_names=frozenset({"ul", "ol"}),
        structure_pattern=StructurePattern(min_children=2, child_selector="li"),
    ),
    RecognitionPattern(
        ComponentType.LIST,
        confidence=90,
        priority=80,
        reason="ARIA list",
        aria_role="list",
    ),
    RecognitionPattern(
        ComponentType.LIST,
        confidence=75,
        priority=70,
        reason="list class with several items",
        class_keywords=("list", "checklist", "feature-list"),
        css_properties=p.several_list_items,
    ),
]

IMAGE_PATTERNS = [
    RecognitionPattern(
        ComponentType.IMAGE,
        confidence=95,
        priority=90,
        reason="image element",
        tag_names=frozenset({"img"}),
    ),
    RecognitionPattern(
        ComponentType.IMAGE,
        confidence=90,
        priority=85,
        reason="figure wrapping an image",
        tag_names=frozenset({"figure", "picture"}),
        child_pattern="img",
    ),
    RecognitionPattern(
        ComponentType.IMAGE,
        confidence=80,
        priority=75,
        reason="ARIA image",
        aria_role="img",
    ),
]

BUTTON_PATTERNS = [
    RecognitionPattern(
        ComponentType.BUTTON,
        confidence=95,
        priority=90,
        reason="button element",
        tag_names=frozenset({"button"}),
    ),
    RecognitionPattern(
        ComponentType.BUTTON,
        confidence=90,
        priority=85,
        reason="link styled as a button",
        tag_names=frozenset({"a"}),
        class_keywords=("btn", "button", "cta"),
    ),
    RecognitionPattern(
        ComponentType.BUTTON,
        confidence=90,
        priority=85,
        reason="submit or button input",
        tag_names=frozenset({"input"}),
        attributes={"type": r"^(?:submit|button|reset)$"},
    ),
    RecognitionPattern(
        ComponentType.BUTTON,
        confidence=85,
        priority=80,
        reason="ARIA button",
        aria_role="button",
    ),
]
