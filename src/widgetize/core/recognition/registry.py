"""Ordered catalogue of recognition patterns."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import structlog

from widgetize.core.recognition.patterns import RecognitionPattern
from widgetize.core.recognition.types import ComponentKind, ComponentType, CustomComponentType

if TYPE_CHECKING:
    from widgetize.core.registry.manager import PluginManager

logger = structlog.get_logger(__name__)


class EmptyPatternError(ValueError):
    """Raised when registering a pattern that declares no predicates."""

    pass


class UnknownComponentTypeError(KeyError):
    """Raised when a type name is neither built-in nor registered."""

    pass


class PatternRegistry:
    """
    Holds recognition patterns grouped by component type.

    Registration order is kept globally; the engine uses it as the final
    tie-break between equally scored candidates.
    """

    def __init__(self) -> None:
        self._by_type: dict[ComponentKind, list[RecognitionPattern]] = {}
        self._ordered: list[RecognitionPattern] = []
        self._custom_types: dict[str, CustomComponentType] = {}

    def register(self, component_type: ComponentKind, patterns: Iterable[RecognitionPattern]) -> None:
        """
        Register patterns for a component type.

        Args:
            component_type: Type the patterns recognize
            patterns: Patterns in priority-of-authoring order

        Raises:
            EmptyPatternError: If a pattern declares no predicates
            ValueError: If a pattern targets a different type
        """
        patterns = list(patterns)
        for pattern in patterns:
            if pattern.predicate_count == 0:
                raise EmptyPatternError(
                    f"Pattern for {component_type} declares no predicates: {pattern.reason!r}"
                )
            if pattern.component_type != component_type:
                raise ValueError(
                    f"Pattern for {pattern.component_type} registered under {component_type}"
                )
        if isinstance(component_type, CustomComponentType):
            self._require_custom(component_type)

        self._by_type.setdefault(component_type, []).extend(patterns)
        self._ordered.extend(patterns)
        logger.debug("Patterns registered", component_type=str(component_type), count=len(patterns))

    def all_patterns_for(self, component_type: ComponentKind) -> tuple[RecognitionPattern, ...]:
        """Get the patterns for one type, in registration order."""
        return tuple(self._by_type.get(component_type, ()))

    def all_patterns(self) -> tuple[RecognitionPattern, ...]:
        """Get every pattern in global registration order."""
        return tuple(self._ordered)

    def component_types(self) -> list[ComponentKind]:
        """Types with at least one pattern, in first-registration order."""
        return list(self._by_type)

    def define_custom_type(self, name: str) -> CustomComponentType:
        """
        Define a plugin component type.

        Args:
            name: Type name, e.g. ``"testimonial"``

        Returns:
            The custom type, or the existing one if already defined

        Raises:
            ValueError: If the name is empty or is a built-in type
        """
        name = name.strip()
        if not name:
            raise ValueError("Custom component type name must not be empty")
        if name in ComponentType._value2member_map_:
            raise ValueError(f"{name!r} is a built-in component type")

        custom = self._custom_types.get(name)
        if custom is None:
            custom = CustomComponentType(name)
            self._custom_types[name] = custom
            logger.debug("Custom component type defined", name=name)
        return custom

    @property
    def custom_types(self) -> list[CustomComponentType]:
        """Custom types in definition order."""
        return list(self._custom_types.values())

    def resolve_type(self, name: str) -> ComponentKind:
        """
        Resolve a type name to a built-in or custom type.

        Raises:
            UnknownComponentTypeError: If the name is not known
        """
        try:
            return ComponentType(name)
        except ValueError:
            pass
        custom = self._custom_types.get(name)
        if custom is None:
            raise UnknownComponentTypeError(name)
        return custom

    def _require_custom(self, component_type: CustomComponentType) -> None:
        if self._custom_types.get(component_type.value) != component_type:
            raise UnknownComponentTypeError(
                f"{component_type.value!r} must be defined with define_custom_type first"
            )

    def __len__(self) -> int:
        return len(self._ordered)

    def __contains__(self, component_type: object) -> bool:
        return component_type in self._by_type


def build_registry(plugin_manager: PluginManager | None = None) -> PatternRegistry:
    """
    Create a registry holding the built-in catalogue and plugin patterns.

    Built-in patterns are registered first so they win registration-order
    ties against plugin patterns.

    Args:
        plugin_manager: Optional plugin manager whose hooks add patterns

    Returns:
        Populated registry
    """
    from widgetize.core.recognition.catalog import register_builtin_patterns

    registry = PatternRegistry()
    register_builtin_patterns(registry)
    if plugin_manager is not None:
        plugin_manager.apply_patterns(registry)

    logger.debug("Registry built", patterns=len(registry), types=len(registry.component_types()))
    return registry
