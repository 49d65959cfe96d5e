"""Read-only traversal over operand subgraphs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._nodes import Variable

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ._nodes import Node


def iter_nodes(root: Node) -> Iterator[Node]:
    """Iterate over a subgraph depth-first, pre-order.

    Shared nodes are yielded once, on first visit. Nothing is evaluated.

    Args:
        root: The node to start from (yielded first).

    Yields:
        Each distinct node reachable from ``root``.

    """
    visited: set[int] = set()
    stack = [root]
    while stack:
        current = stack.pop()
        if id(current) in visited:
            continue
        visited.add(id(current))
        yield current
        # reversed so the left operand is visited first
        stack.extend(reversed(current.operands))


def iter_variables(root: Node) -> Iterator[Variable]:
    """Iterate over the distinct variables a subgraph reads."""
    for node in iter_nodes(root):
        if isinstance(node, Variable):
            yield node
