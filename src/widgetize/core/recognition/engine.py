"""Recognition engine: classifies DOM nodes into semantic components."""

from __future__ import annotations

import time
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

import structlog

from widgetize.core.dom.accessor import AccessorError, IStyleAccessor, SnapshotAccessor
from widgetize.core.dom.models import DOMNode
from widgetize.core.dom.selector import SelectorGenerator
from widgetize.core.models.config import RecognitionConfig
from widgetize.core.recognition.patterns import RecognitionPattern
from widgetize.core.recognition.registry import PatternRegistry, build_registry
from widgetize.core.recognition.types import ComponentKind, ComponentType

logger = structlog.get_logger(__name__)

_selectors = SelectorGenerator()


@dataclass
class RecognizedComponent:
    """
    A DOM node classified as a semantic component.

    ``element`` references the source node and is never modified.
    ``analyzer_output`` starts empty and is attached once by the export
    stage.
    """

    component_type: ComponentKind
    confidence: int
    element: DOMNode = field(repr=False)
    children: tuple[RecognizedComponent, ...] = ()
    reason: str = ""
    analyzer_output: Any = field(default=None, repr=False)

    @property
    def type_name(self) -> str:
        """Component type as a plain string."""
        return self.component_type.value

    def attach_analysis(self, output: Any) -> None:
        """
        Attach structural analysis.

        Raises:
            RuntimeError: If analysis was already attached
        """
        if self.analyzer_output is not None:
            raise RuntimeError(f"Analysis already attached to {self.type_name} component")
        self.analyzer_output = output

    def iter(self) -> Iterator[RecognizedComponent]:
        """Iterate this component and its descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.iter()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, children included."""
        analysis = self.analyzer_output
        if analysis is not None and hasattr(analysis, "to_dict"):
            analysis = analysis.to_dict()
        return {
            "type": self.type_name,
            "confidence": self.confidence,
            "reason": self.reason,
            "tag": self.element.tag,
            "node_id": self.element.node_id,
            "selector": _selectors.generate(self.element),
            "analysis": analysis,
            "children": [child.to_dict() for child in self.children],
        }


@dataclass(frozen=True)
class Candidate:
    """A matching pattern together with its registration position."""

    pattern: RecognitionPattern
    order: int

    @property
    def component_type(self) -> ComponentKind:
        return self.pattern.component_type

    @property
    def confidence(self) -> int:
        return self.pattern.confidence

    @property
    def priority(self) -> int:
        return self.pattern.priority

    def rank(self) -> tuple[int, int, int]:
        """Sort key: higher confidence, then priority, then earlier registration."""
        return (self.pattern.confidence, self.pattern.priority, -self.order)


@dataclass(frozen=True)
class PredicateFault:
    """A pattern predicate raised while evaluating a node."""

    node_id: str
    tag: str
    component_type: str
    reason: str
    error: str

    def to_dict(self) -> dict[str, str]:
        return {
            "node_id": self.node_id,
            "tag": self.tag,
            "component_type": self.component_type,
            "reason": self.reason,
            "error": self.error,
        }


@dataclass(frozen=True)
class AccessorFault:
    """Style or geometry could not be read; the node's subtree was skipped."""

    node_id: str
    tag: str
    error: str

    def to_dict(self) -> dict[str, str]:
        return {"node_id": self.node_id, "tag": self.tag, "error": self.error}


@dataclass
class RecognitionResult:
    """Outcome of one recognition pass."""

    root: RecognizedComponent | None
    partial: bool = False
    truncated: bool = False
    predicate_faults: list[PredicateFault] = field(default_factory=list)
    accessor_faults: list[AccessorFault] = field(default_factory=list)
    nodes_visited: int = 0
    duration_ms: float = 0.0

    @property
    def components(self) -> list[RecognizedComponent]:
        """All recognized components, depth-first."""
        return list(self.root.iter()) if self.root else []

    def count_by_type(self) -> dict[str, int]:
        """Count of recognized components per type."""
        counts: dict[str, int] = {}
        for component in self.components:
            counts[component.type_name] = counts.get(component.type_name, 0) + 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "root": self.root.to_dict() if self.root else None,
            "partial": self.partial,
            "truncated": self.truncated,
            "nodes_visited": self.nodes_visited,
            "predicate_faults": [fault.to_dict() for fault in self.predicate_faults],
            "accessor_faults": [fault.to_dict() for fault in self.accessor_faults],
        }


@dataclass
class _Pass:
    """Mutable state of a single recognition pass."""

    patterns: list[tuple[int, RecognitionPattern]]
    visited: int = 0
    partial: bool = False
    truncated: bool = False
    predicate_faults: list[PredicateFault] = field(default_factory=list)
    accessor_faults: list[AccessorFault] = field(default_factory=list)


def select_candidate(candidates: list[Candidate]) -> Candidate | None:
    """Pick the winning candidate, or None when there are none."""
    if not candidates:
        return None
    return max(candidates, key=Candidate.rank)


class RecognitionEngine:
    """
    Classifies a DOM tree into a tree of recognized components.

    For each node every registered pattern is evaluated; the best match
    wins. Unrecognized nodes are transparent: their recognized descendants
    attach to the nearest recognized ancestor. The engine keeps no state
    between passes.
    """

    def __init__(
        self,
        registry: PatternRegistry | None = None,
        accessor: IStyleAccessor | None = None,
        config: RecognitionConfig | None = None,
    ) -> None:
        """
        Initialize recognition engine.

        Args:
            registry: Pattern registry; defaults to the built-in catalogue
            accessor: Style accessor; defaults to reading snapshot nodes
            config: Pass limits
        """
        self.registry = registry or build_registry()
        self.accessor = accessor or SnapshotAccessor()
        self.config = config or RecognitionConfig()

    def recognize(self, root: DOMNode) -> RecognitionResult:
        """
        Run one recognition pass over a subtree.

        Args:
            root: Root of the subtree to classify

        Returns:
            RecognitionResult with the component tree and pass diagnostics
        """
        started = time.perf_counter()
        state = self._new_pass()

        components = self._visit(root, 0, state)

        if not components:
            root_component = None
        elif len(components) == 1 and components[0].element is root:
            root_component = components[0]
        else:
            root_component = RecognizedComponent(
                component_type=ComponentType.UNKNOWN,
                confidence=0,
                element=root,
                children=tuple(components),
                reason="unrecognized container",
            )

        result = RecognitionResult(
            root=root_component,
            partial=state.partial,
            truncated=state.truncated,
            predicate_faults=state.predicate_faults,
            accessor_faults=state.accessor_faults,
            nodes_visited=state.visited,
            duration_ms=(time.perf_counter() - started) * 1000,
        )

        logger.info(
            "Recognition complete",
            nodes=state.visited,
            components=len(result.components),
            partial=state.partial,
            truncated=state.truncated,
            predicate_faults=len(state.predicate_faults),
        )
        return result

    def classify(self, node: DOMNode) -> Candidate | None:
        """
        Classify a single node without descending into its children.

        Raises:
            AccessorError: If the node's style or geometry is unavailable
        """
        return select_candidate(self.candidates(node, self._new_pass()))

    def candidates(self, node: DOMNode, state: _Pass) -> list[Candidate]:
        """Evaluate every pattern against a node and collect the matches."""
        min_confidence = self.config.min_confidence
        matched: list[Candidate] = []

        for order, pattern in state.patterns:
            if pattern.confidence < min_confidence:
                continue
            try:
                is_match = pattern.matches(node, self.accessor)
            except AccessorError:
                raise
            except Exception as e:
                fault = PredicateFault(
                    node_id=node.node_id,
                    tag=node.tag,
                    component_type=pattern.component_type.value,
                    reason=pattern.reason,
                    error=f"{type(e).__name__}: {e}",
                )
                state.predicate_faults.append(fault)
                logger.warning(
                    "Pattern predicate failed",
                    node_id=node.node_id,
                    tag=node.tag,
                    component_type=fault.component_type,
                    pattern=pattern.reason,
                    error=fault.error,
                )
                continue
            if is_match:
                matched.append(Candidate(pattern, order))

        return matched

    def _new_pass(self) -> _Pass:
        return _Pass(patterns=list(enumerate(self.registry.all_patterns())))

    def _visit(self, node: DOMNode, depth: int, state: _Pass) -> list[RecognizedComponent]:
        """Classify a node and its subtree; return the components to attach upward."""
        if depth > self.config.max_depth or state.visited >= self.config.max_nodes:
            if not state.truncated:
                logger.warning(
                    "Recognition truncated",
                    depth=depth,
                    visited=state.visited,
                    max_depth=self.config.max_depth,
                    max_nodes=self.config.max_nodes,
                )
            state.truncated = True
            return []

        state.visited += 1

        try:
            winner = select_candidate(self.candidates(node, state))
        except AccessorError as e:
            state.partial = True
            state.accessor_faults.append(AccessorFault(node_id=node.node_id, tag=node.tag, error=str(e)))
            logger.warning("Style access failed, skipping subtree", node_id=node.node_id, tag=node.tag, error=str(e))
            return []

        children: list[RecognizedComponent] = []
        for child in node.children:
            children.extend(self._visit(child, depth + 1, state))

        if winner is None:
            # Transparent container: hand recognized descendants to the ancestor
            return children

        return [
            RecognizedComponent(
                component_type=winner.component_type,
                confidence=winner.confidence,
                element=node,
                children=tuple(children),
                reason=winner.pattern.reason,
            )
        ]
