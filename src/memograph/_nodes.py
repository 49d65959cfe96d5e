"""Computation nodes with lazy, memoized evaluation.

Every node caches the last value it computed. ``Node.evaluate`` is the single
entry point: it serves the cached value while the node reports that it does
not need recalculation, and recomputes otherwise.

Dirtiness is never stored on inner nodes. Only a ``Variable`` carries a dirty
flag; operators and expressions answer ``needs_recalculation`` by asking their
operands every time.

Graphs may share operand subgraphs freely. Cycles are not detected: evaluating
a node that (transitively) depends on itself recurses until Python raises
``RecursionError``.
"""

from __future__ import annotations

import logging
import math
import numbers
import operator
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, SupportsFloat, TypeAlias

from ._errors import NotSetError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

UnaryFunction: TypeAlias = "Callable[[float], float]"
BinaryFunction: TypeAlias = "Callable[[float, float], float]"


class Node(ABC):
    """A unit of the evaluation graph producing a single float.

    The cached value is ``None`` until the first successful evaluation.
    Subclasses implement ``_compute`` and usually ``needs_recalculation``;
    the default assumes a node without state of its own must always be
    recalculated.
    """

    __slots__ = ("_cached",)

    def __init__(self, value: float | None = None) -> None:
        self._cached: float | None = value

    @property
    def _cache_value(self) -> float | None:
        return self._cached

    @_cache_value.setter
    def _cache_value(self, value: float | None) -> None:
        self._cached = value

    @property
    def cached_value(self) -> float | None:
        """The memoized value, or None if the node was never evaluated."""
        return self._cached

    @property
    def is_cached(self) -> bool:
        """Check if the node holds a memoized value."""
        return self._cached is not None

    @property
    def operands(self) -> tuple[Node, ...]:
        """Direct operand nodes (empty for leaves)."""
        return ()

    def evaluate(self) -> float:
        """Return the node's value, recomputing only when needed.

        Returns:
            The memoized value if present and clean, otherwise a freshly
            computed value, which becomes the new memoized value.

        Raises:
            NotSetError: If a variable in the subgraph was never set.

        """
        cached = self._cached
        if cached is not None and not self.needs_recalculation():
            logger.debug("Using cache for %r", self)
            return cached

        value = self._compute()
        logger.debug("Computed %r = %r", self, value)
        self._cached = value
        return value

    def needs_recalculation(self) -> bool:
        """Check whether the next ``evaluate`` call must recompute."""
        return True

    @abstractmethod
    def _compute(self) -> float:
        """Compute the value without consulting this node's cache."""

    # Arithmetic builds new nodes; nothing is evaluated here.

    def __add__(self, other: Node | SupportsFloat) -> BinaryOperator:
        return _binary(self, other, operator.add)

    def __radd__(self, other: Node | SupportsFloat) -> BinaryOperator:
        return _binary(other, self, operator.add)

    def __sub__(self, other: Node | SupportsFloat) -> BinaryOperator:
        return _binary(self, other, operator.sub)

    def __rsub__(self, other: Node | SupportsFloat) -> BinaryOperator:
        return _binary(other, self, operator.sub)

    def __mul__(self, other: Node | SupportsFloat) -> BinaryOperator:
        return _binary(self, other, operator.mul)

    def __rmul__(self, other: Node | SupportsFloat) -> BinaryOperator:
        return _binary(other, self, operator.mul)

    def __truediv__(self, other: Node | SupportsFloat) -> BinaryOperator:
        return _binary(self, other, operator.truediv)

    def __rtruediv__(self, other: Node | SupportsFloat) -> BinaryOperator:
        return _binary(other, self, operator.truediv)

    def __pow__(self, other: Node | SupportsFloat) -> BinaryOperator:
        return _binary(self, other, math.pow)

    def __rpow__(self, other: Node | SupportsFloat) -> BinaryOperator:
        return _binary(other, self, math.pow)

    def __neg__(self) -> UnaryOperator:
        return UnaryOperator(self, operator.neg)

    def __abs__(self) -> UnaryOperator:
        return UnaryOperator(self, operator.abs)


def as_node(value: Node | SupportsFloat) -> Node:
    """Pass nodes through and wrap plain numbers in a ``Constant``.

    Raises:
        TypeError: If ``value`` is neither a node nor a real number.

    """
    if isinstance(value, Node):
        return value
    if isinstance(value, numbers.Real | Decimal):
        return Constant(value)
    msg = f"Cannot use {type(value).__name__} as a graph node"
    raise TypeError(msg)


def _binary(left: Node | SupportsFloat, right: Node | SupportsFloat, function: BinaryFunction) -> BinaryOperator:
    return BinaryOperator(as_node(left), as_node(right), function)


def _function_label(function: Callable[..., float]) -> str:
    return getattr(function, "__name__", type(function).__name__)


class Constant(Node):
    """A fixed value. Never needs recalculation."""

    __slots__ = ()

    def __init__(self, value: SupportsFloat | str) -> None:
        super().__init__(float(value))

    @property
    def value(self) -> float:
        """The constant's value."""
        return self._compute()

    def needs_recalculation(self) -> bool:
        return False

    def _compute(self) -> float:
        value = self._cache_value
        assert value is not None  # primed in __init__
        return value

    def __repr__(self) -> str:
        return f"Constant({self._cached!r})"


class Variable(Node):
    """A named, externally settable value.

    A variable is dirty from every ``set`` until the next ``freeze``. There is
    no change detection: setting the same value again still makes it dirty.
    """

    __slots__ = ("_dirty", "_name")

    def __init__(self, name: str, value: SupportsFloat | str | None = None) -> None:
        super().__init__()
        self._name = name
        self._dirty = True
        if value is not None:
            self.set(value)

    @property
    def name(self) -> str:
        """The variable's name."""
        return self._name

    @property
    def is_set(self) -> bool:
        """Check if a value was ever assigned."""
        return self._cache_value is not None

    def set(self, value: SupportsFloat | str) -> None:
        """Assign a new value and mark the variable dirty."""
        self._cache_value = float(value)
        self._dirty = True

    def freeze(self) -> None:
        """Mark the variable clean, keeping its value."""
        self._dirty = False

    def needs_recalculation(self) -> bool:
        return self._dirty

    def _compute(self) -> float:
        value = self._cache_value
        if value is None:
            raise NotSetError(self._name)
        return value

    def __repr__(self) -> str:
        return f"Variable({self._name!r})"


class UnaryOperator(Node):
    """Applies a one-argument function to an operand node."""

    __slots__ = ("_function", "_label", "_operand")

    def __init__(self, operand: Node, function: UnaryFunction, label: str | None = None) -> None:
        super().__init__()
        self._operand = operand
        self._function = function
        self._label = label or _function_label(function)

    @property
    def label(self) -> str:
        """Display name of the function."""
        return self._label

    @property
    def operands(self) -> tuple[Node, ...]:
        return (self._operand,)

    def needs_recalculation(self) -> bool:
        return self._operand.needs_recalculation()

    def _compute(self) -> float:
        return self._function(self._operand.evaluate())

    def __repr__(self) -> str:
        return f"UnaryOperator({self._label})"


class BinaryOperator(Node):
    """Applies a two-argument function to a pair of operand nodes."""

    __slots__ = ("_function", "_label", "_left", "_right")

    def __init__(self, left: Node, right: Node, function: BinaryFunction, label: str | None = None) -> None:
        super().__init__()
        self._left = left
        self._right = right
        self._function = function
        self._label = label or _function_label(function)

    @property
    def label(self) -> str:
        """Display name of the function."""
        return self._label

    @property
    def operands(self) -> tuple[Node, ...]:
        return (self._left, self._right)

    def needs_recalculation(self) -> bool:
        return self._left.needs_recalculation() or self._right.needs_recalculation()

    def _compute(self) -> float:
        return self._function(self._left.evaluate(), self._right.evaluate())

    def __repr__(self) -> str:
        return f"BinaryOperator({self._label})"


class Expression(Node):
    """A named entry point into an operand subgraph."""

    __slots__ = ("_name", "_operand")

    def __init__(self, name: str, operand: Node) -> None:
        super().__init__()
        self._name = name
        self._operand = operand

    @property
    def name(self) -> str:
        """The expression's name."""
        return self._name

    @property
    def operand(self) -> Node:
        """The wrapped subgraph."""
        return self._operand

    @property
    def operands(self) -> tuple[Node, ...]:
        return (self._operand,)

    def needs_recalculation(self) -> bool:
        return self._operand.needs_recalculation()

    def _compute(self) -> float:
        return self._operand.evaluate()

    def __repr__(self) -> str:
        return f"Expression({self._name!r})"
