"""Rich renderables for recognition output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

if TYPE_CHECKING:
    from collections.abc import Iterable

    from widgetize.core.recognition.engine import RecognitionResult, RecognizedComponent
    from widgetize.core.recognition.patterns import RecognitionPattern

# Confidence at or above which a component is shown as a strong match
STRONG_MATCH = 80


def _label(component: RecognizedComponent) -> str:
    style = "green" if component.confidence >= STRONG_MATCH else "yellow"
    element = component.element
    tag = element.tag
    if element.id_attr:
        tag += f"#{element.id_attr}"
    return (
        f"[bold cyan]{escape(component.type_name)}[/bold cyan] "
        f"[{style}]{component.confidence}%[/{style}] "
        f"[dim]<{escape(tag)}> {escape(component.reason)}[/dim]"
    )


def _add_children(branch: Tree, component: RecognizedComponent) -> None:
    for child in component.children:
        _add_children(branch.add(_label(child)), child)


def component_tree(result: RecognitionResult, title: str = "Page") -> Tree:
    """Render a recognized component tree."""
    tree = Tree(f"[bold]{escape(title)}[/bold]")
    if result.root is not None:
        _add_children(tree.add(_label(result.root)), result.root)
    return tree


def pattern_table(patterns: Iterable[RecognitionPattern]) -> Table:
    """Render registered patterns as a table."""
    table = Table(title="Recognition Patterns")
    table.add_column("Type", style="cyan")
    table.add_column("Confidence", style="green", justify="right")
    table.add_column("Priority", style="yellow", justify="right")
    table.add_column("Reason")
    table.add_column("Predicates", style="dim")

    for pattern in patterns:
        info = pattern.describe()
        table.add_row(
            escape(info["type"]),
            str(info["confidence"]),
            str(info["priority"]),
            escape(info["reason"]),
            escape("; ".join(info["predicates"])),
        )
    return table
