"""Pattern-based component recognition."""

from widgetize.core.recognition.engine import (
    AccessorFault,
    Candidate,
    PredicateFault,
    RecognitionEngine,
    RecognitionResult,
    RecognizedComponent,
    select_candidate,
)
from widgetize.core.recognition.patterns import (
    PRESENT,
    RecognitionPattern,
    StructurePattern,
    StyleContext,
)
from widgetize.core.recognition.registry import (
    EmptyPatternError,
    PatternRegistry,
    UnknownComponentTypeError,
    build_registry,
)
from widgetize.core.recognition.types import ComponentKind, ComponentType, CustomComponentType

__all__ = [
    # Engine
    "RecognitionEngine",
    "RecognitionResult",
    "RecognizedComponent",
    "Candidate",
    "PredicateFault",
    "AccessorFault",
    "select_candidate",
    # Patterns
    "RecognitionPattern",
    "StructurePattern",
    "StyleContext",
    "PRESENT",
    # Registry
    "PatternRegistry",
    "build_registry",
    "EmptyPatternError",
    "UnknownComponentTypeError",
    # Types
    "ComponentType",
    "CustomComponentType",
    "ComponentKind",
]
