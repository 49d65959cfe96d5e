"""Rendering of operand subgraphs as rich trees.

Rendering only reads cache state; it never calls ``evaluate()``. Shared
subgraphs are drawn once per place they are used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.tree import Tree

from ._nodes import BinaryOperator, Constant, Expression, UnaryOperator, Variable

if TYPE_CHECKING:
    from ._nodes import Node


def _node_title(node: Node) -> str:
    """Get the kind and name or label of a node."""
    kind = type(node).__name__
    match node:
        case Expression() | Variable():
            return f"[bold]{kind}[/bold] {escape(node.name)}"
        case UnaryOperator() | BinaryOperator():
            return f"[bold]{kind}[/bold] {escape(node.label)}"
        case Constant():
            return f"[bold]{kind}[/bold]"
        case _:
            return f"[bold]{escape(kind)}[/bold]"


def _format_state(node: Node) -> str:
    """Format the cached value with a dirty marker."""
    if not node.is_cached:
        return "[dim]unset[/dim]"
    value = f"{node.cached_value:g}"
    if node.needs_recalculation():
        return f"[yellow]{value} (dirty)[/yellow]"
    return f"[green]{value}[/green]"


def format_node(node: Node) -> str:
    """Format a single node as a one-line rich markup string."""
    return f"{_node_title(node)} = {_format_state(node)}"


def _add_children(tree: Tree, node: Node) -> None:
    for operand in node.operands:
        branch = tree.add(format_node(operand))
        _add_children(branch, operand)


def render_tree(root: Node) -> Tree:
    """Render a subgraph as a rich Tree.

    Example:
        >>> from rich.console import Console
        >>> Console().print(render_tree(ctx.lookup_expression("E")))

    """
    tree = Tree(format_node(root))
    _add_children(tree, root)
    return tree
