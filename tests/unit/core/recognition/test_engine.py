"""Tests for the recognition engine."""

from __future__ import annotations

import pytest

from widgetize.core.dom.accessor import AccessorError, SnapshotAccessor
from widgetize.core.dom.models import Viewport
from widgetize.core.models.config import RecognitionConfig
from widgetize.core.recognition.engine import (
    Candidate,
    RecognitionEngine,
    RecognizedComponent,
    select_candidate,
)
from widgetize.core.recognition.patterns import RecognitionPattern
from widgetize.core.recognition.registry import PatternRegistry
from widgetize.core.recognition.types import ComponentType


def pattern(component_type, confidence, priority=0, reason="", **predicates):
    predicates.setdefault("tag_names", frozenset({"div"}))
    return RecognitionPattern(component_type, confidence=confidence, priority=priority, reason=reason, **predicates)


class FailingAccessor(SnapshotAccessor):
    """Snapshot accessor that cannot read one node."""

    def __init__(self, failing_id: str, viewport: Viewport | None = None) -> None:
        super().__init__(viewport)
        self.failing_id = failing_id

    def _check(self, node):
        if node.node_id == self.failing_id:
            raise AccessorError(node, "node detached")

    def computed_style(self, node):
        self._check(node)
        return super().computed_style(node)

    def bounding_box(self, node):
        self._check(node)
        return super().bounding_box(node)

    def text(self, node):
        self._check(node)
        return super().text(node)


class TestSelectCandidate:
    """Tests for conflict resolution between candidates."""

    def test_no_candidates(self):
        """No candidates means no component."""
        assert select_candidate([]) is None

    def test_higher_confidence_wins(self):
        """Confidence is compared first."""
        low = Candidate(pattern(ComponentType.TEXT, 60, priority=100), order=0)
        high = Candidate(pattern(ComponentType.ALERT, 80, priority=0), order=1)
        assert select_candidate([low, high]) is high

    def test_priority_breaks_confidence_ties(self):
        """At equal confidence the higher priority wins."""
        a = Candidate(pattern(ComponentType.TEXT, 80, priority=10), order=0)
        b = Candidate(pattern(ComponentType.ALERT, 80, priority=20), order=1)
        assert select_candidate([a, b]) is b

    def test_registration_order_breaks_full_ties(self):
        """At equal confidence and priority the earlier registration wins."""
        first = Candidate(pattern(ComponentType.TEXT, 80, priority=10), order=3)
        second = Candidate(pattern(ComponentType.ALERT, 80, priority=10), order=7)
        assert select_candidate([second, first]) is first


class TestRecognize:
    """Tests for RecognitionEngine.recognize."""

    def test_single_recognized_root(self, engine, node):
        """A recognized root is returned as is."""
        result = engine.recognize(node("h1", text="Welcome"))
        assert result.root.component_type == ComponentType.HEADING
        assert result.root.confidence == 95
        assert result.root.children == ()

    def test_nothing_recognized(self, engine, node):
        """An empty subtree yields no root and no components."""
        result = engine.recognize(node("div", node("div")))
        assert result.root is None
        assert result.components == []
        assert result.nodes_visited == 2

    def test_unrecognized_containers_are_flattened(self, engine, node):
        """Recognized descendants attach to the nearest recognized ancestor."""
        paragraph = node("p", text="Deep text")
        section = node("section", node("div", node("div", node("div", paragraph))))
        result = engine.recognize(node("div", section))

        root = result.root
        assert root.component_type == ComponentType.UNKNOWN
        assert root.confidence == 0
        assert [c.component_type for c in root.children] == [ComponentType.SECTION]
        section_component = root.children[0]
        assert [c.component_type for c in section_component.children] == [ComponentType.PARAGRAPH]
        assert section_component.children[0].element is paragraph

    def test_components_are_depth_first(self, engine, node):
        """components lists the tree in depth-first order."""
        tree = node(
            "section",
            node("h2", text="Title"),
            node("ul", node("li", text="One"), node("li", text="Two")),
            node("p", text="Body"),
        )
        result = engine.recognize(tree)
        assert [c.type_name for c in result.components] == ["section", "heading", "list", "paragraph"]
        assert result.count_by_type() == {"section": 1, "heading": 1, "list": 1, "paragraph": 1}

    def test_recognition_is_deterministic(self, engine, node):
        """Repeated passes over the same tree produce identical trees."""

        def build():
            return node(
                "body",
                node("header", node("nav", node("a", text="Home", attrs={"href": "/"}))),
                node("section", node("h1", text="Hi"), node("button", text="Go")),
                node("footer", node("p", text="© 2024 Acme")),
            )

        tree = build()
        first = engine.recognize(tree).to_dict()
        second = engine.recognize(tree).to_dict()
        third = RecognitionEngine().recognize(build()).to_dict()
        assert first == second == third

    def test_source_tree_is_not_modified(self, engine, node):
        """Recognition only reads the DOM."""
        tree = node("section", node("h1", text="Title"), cls="intro")
        before = tree.to_dict()
        engine.recognize(tree)
        assert tree.to_dict() == before

    def test_result_to_dict(self, engine, node):
        """The result serializes with diagnostics."""
        data = engine.recognize(node("h2", text="Title", attrs={"id": "top"})).to_dict()
        assert data["root"]["type"] == "heading"
        assert data["root"]["selector"] == "#top"
        assert data["partial"] is False
        assert data["truncated"] is False
        assert data["predicate_faults"] == []

    def test_classify_single_node(self, engine, node):
        """classify looks at one node only."""
        candidate = engine.classify(node("button", text="Buy"))
        assert candidate.component_type == ComponentType.BUTTON
        assert engine.classify(node("div")) is None


class TestConfidenceMonotonicity:
    """Adding patterns only changes the outcome when they outrank the winner."""

    def test_weaker_pattern_does_not_change_winner(self, node):
        """A lower-confidence match leaves the winner alone."""
        registry = PatternRegistry()
        registry.register(ComponentType.ALERT, [pattern(ComponentType.ALERT, 80, class_keywords=("note",))])
        target = node("div", cls="note")
        engine = RecognitionEngine(registry)
        assert engine.classify(target).component_type == ComponentType.ALERT

        registry.register(ComponentType.TEXT, [pattern(ComponentType.TEXT, 70, class_keywords=("note",))])
        assert RecognitionEngine(registry).classify(target).component_type == ComponentType.ALERT

    def test_stronger_pattern_takes_over(self, node):
        """A higher-confidence match replaces the winner."""
        registry = PatternRegistry()
        registry.register(ComponentType.ALERT, [pattern(ComponentType.ALERT, 80, class_keywords=("note",))])
        registry.register(ComponentType.BLOCKQUOTE, [pattern(ComponentType.BLOCKQUOTE, 90, class_keywords=("note",))])
        winner = RecognitionEngine(registry).classify(node("div", cls="note"))
        assert winner.component_type == ComponentType.BLOCKQUOTE
        assert winner.confidence == 90

    def test_min_confidence_discards_weak_matches(self, node):
        """Patterns below the configured floor are not evaluated."""
        registry = PatternRegistry()
        registry.register(ComponentType.ALERT, [pattern(ComponentType.ALERT, 40, class_keywords=("note",))])
        engine = RecognitionEngine(registry, config=RecognitionConfig(min_confidence=50))
        assert engine.recognize(node("div", cls="note")).root is None


class TestBuiltinTieBreaks:
    """Registration order of the built-in catalogue settles equal matches."""

    def test_hero_header_reads_as_hero(self, engine, node):
        """A header styled as a hero with a heading is a hero."""
        header = node(
            "header",
            node("h1", text="Big news"),
            cls="hero",
            style={"background-color": "rgb(10, 20, 30)"},
        )
        assert engine.classify(header).component_type == ComponentType.HERO

    def test_plain_header_stays_header(self, engine, node):
        """Without hero styling a header is a header."""
        assert engine.classify(node("header", node("h1", text="Logo"))).component_type == ComponentType.HEADER

    def test_tablist_of_expandable_buttons_is_toggle(self, engine, node):
        """An accordion built on role=tablist is a toggle."""
        accordion = node(
            "div",
            node("button", text="Q1", attrs={"aria-expanded": "true"}),
            node("div", text="A1"),
            node("button", text="Q2", attrs={"aria-expanded": "false"}),
            node("div", text="A2"),
            attrs={"role": "tablist"},
        )
        assert engine.classify(accordion).component_type == ComponentType.TOGGLE

    def test_plain_tablist_is_tabs(self, engine, node):
        """A tablist without expandable buttons is tabs."""
        tabs = node(
            "div",
            node("button", text="One", attrs={"role": "tab"}),
            node("button", text="Two", attrs={"role": "tab"}),
            attrs={"role": "tablist"},
        )
        assert engine.classify(tabs).component_type == ComponentType.TABS


class TestFaults:
    """Tests for predicate and accessor failures."""

    def test_predicate_fault_is_recorded_and_skipped(self, node):
        """A raising predicate counts as a non-match and is recorded."""
        def broken(ctx):
            raise ZeroDivisionError("boom")

        registry = PatternRegistry()
        registry.register(ComponentType.ALERT, [pattern(ComponentType.ALERT, 99, tag_names=None, css_properties=broken)])
        registry.register(
            ComponentType.HEADING, [pattern(ComponentType.HEADING, 50, tag_names=frozenset({"h1"}))]
        )

        result = RecognitionEngine(registry).recognize(node("h1", text="Title", node_id="n1"))

        assert result.root.component_type == ComponentType.HEADING
        assert result.partial is False
        assert len(result.predicate_faults) == 1
        fault = result.predicate_faults[0]
        assert fault.node_id == "n1"
        assert fault.component_type == "alert"
        assert fault.error == "ZeroDivisionError: boom"

    def test_accessor_fault_excludes_subtree(self, node):
        """An unreadable node drops its subtree and flags the result partial."""
        tree = node(
            "section",
            node("div", node("p", text="Hidden"), node_id="bad"),
            node("p", text="Visible"),
        )
        engine = RecognitionEngine(accessor=FailingAccessor("bad"))

        result = engine.recognize(tree)

        assert result.partial is True
        assert [f.node_id for f in result.accessor_faults] == ["bad"]
        texts = [c.element.text for c in result.components if c.component_type == ComponentType.PARAGRAPH]
        assert texts == ["Visible"]

    def test_accessor_fault_is_not_raised(self, node):
        """recognize never raises for an unreadable node."""
        engine = RecognitionEngine(accessor=FailingAccessor("root"))
        result = engine.recognize(node("div", node("p", text="x"), node_id="root"))
        assert result.root is None
        assert result.partial is True

    def test_classify_raises_accessor_error(self, node):
        """classify surfaces accessor failures to the caller."""
        engine = RecognitionEngine(accessor=FailingAccessor("x"))
        with pytest.raises(AccessorError):
            engine.classify(node("div", node_id="x"))


class TestLimits:
    """Tests for depth and node ceilings."""

    def test_max_depth_truncates(self, node):
        """Nodes below the depth ceiling are not visited."""
        tree = node("div", node("div", node("div", node("h1", text="Deep"))))
        result = RecognitionEngine(config=RecognitionConfig(max_depth=1)).recognize(tree)
        assert result.truncated is True
        assert result.root is None
        assert result.nodes_visited == 2

    def test_max_nodes_truncates(self, node):
        """The pass stops once the node limit is reached."""
        tree = node("section", *[node("p", text=str(i)) for i in range(10)])
        result = RecognitionEngine(config=RecognitionConfig(max_nodes=4)).recognize(tree)
        assert result.truncated is True
        assert result.nodes_visited == 4
        assert len(result.root.children) == 3

    def test_within_limits_not_truncated(self, engine, node):
        """Small trees are never truncated."""
        assert engine.recognize(node("p", text="x")).truncated is False


class TestRecognizedComponent:
    """Tests for RecognizedComponent."""

    def test_analysis_attaches_once(self, node):
        """Analysis can be attached only once."""
        component = RecognizedComponent(ComponentType.ROW, 85, node("div"))
        component.attach_analysis({"gap": 10})
        assert component.analyzer_output == {"gap": 10}
        with pytest.raises(RuntimeError):
            component.attach_analysis({"gap": 20})
