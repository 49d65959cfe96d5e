"""Node builders for common numeric functions.

Arithmetic (``+ - * / **``, unary ``-`` and ``abs()``) is available directly on
nodes. The functions here cover the rest, wrapping :mod:`math` so that graphs
can be written as ``sqrt(x * x + y * y)``. Domain errors raised by :mod:`math`
(e.g. ``sqrt`` of a negative value) propagate from ``evaluate()`` unchanged.
"""

import math
from typing import SupportsFloat

from ._nodes import BinaryOperator, Node, UnaryOperator, as_node


def sqrt(operand: Node | SupportsFloat) -> UnaryOperator:
    """Square root of ``operand``."""
    return UnaryOperator(as_node(operand), math.sqrt)


def exp(operand: Node | SupportsFloat) -> UnaryOperator:
    """Exponential of ``operand``."""
    return UnaryOperator(as_node(operand), math.exp)


def log(operand: Node | SupportsFloat) -> UnaryOperator:
    """Natural logarithm of ``operand``."""
    return UnaryOperator(as_node(operand), math.log)


def sin(operand: Node | SupportsFloat) -> UnaryOperator:
    return UnaryOperator(as_node(operand), math.sin)


def cos(operand: Node | SupportsFloat) -> UnaryOperator:
    return UnaryOperator(as_node(operand), math.cos)


def minimum(left: Node | SupportsFloat, right: Node | SupportsFloat) -> BinaryOperator:
    """Smaller of two operands."""
    return BinaryOperator(as_node(left), as_node(right), min, label="min")


def maximum(left: Node | SupportsFloat, right: Node | SupportsFloat) -> BinaryOperator:
    """Larger of two operands."""
    return BinaryOperator(as_node(left), as_node(right), max, label="max")
