"""Evaluation context owning named expressions and variables."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, SupportsFloat

from ._errors import DuplicateNameError, NameMismatchError, UnknownExpressionError, UnknownVariableError
from ._nodes import Expression, Variable

if TYPE_CHECKING:
    from ._nodes import Node

logger = logging.getLogger(__name__)


class EvaluationContext:
    """Named lookup tables for expressions and variables, plus the recalculation pass.

    Expressions are evaluated in registration order, not in dependency order.
    Each evaluation pulls its operands on demand, so the order decides which
    failure surfaces first in a pass, not which values are seen.

    Expression names and variable names live in separate namespaces. The
    context holds references to registered nodes only; it does not track the
    edges of the subgraphs behind them.

    Example:
        >>> ctx = EvaluationContext()
        >>> a = ctx.create_variable("a", 2)
        >>> b = ctx.create_variable("b", 3)
        >>> _ = ctx.create_expression("E", a + b)
        >>> ctx.recalculate("E")
        5.0
        >>> ctx.set_variable("a", 10)
        >>> ctx.recalculate("E")
        13.0

    """

    def __init__(self) -> None:
        # dict preserves insertion order, which is the evaluation order
        self._expressions: dict[str, Expression] = {}
        self._variables: dict[str, Variable] = {}

    @property
    def expression_names(self) -> tuple[str, ...]:
        """Registered expression names in evaluation order."""
        return tuple(self._expressions)

    @property
    def variable_names(self) -> tuple[str, ...]:
        """Registered variable names."""
        return tuple(self._variables)

    def is_known_expression(self, name: str) -> bool:
        return name in self._expressions

    def is_known_variable(self, name: str) -> bool:
        return name in self._variables

    def lookup_expression(self, name: str) -> Expression:
        """Get a registered expression.

        Raises:
            UnknownExpressionError: If no expression is registered under ``name``.

        """
        try:
            return self._expressions[name]
        except KeyError:
            raise UnknownExpressionError(name) from None

    def lookup_variable(self, name: str) -> Variable:
        """Get a registered variable.

        Raises:
            UnknownVariableError: If no variable is registered under ``name``.

        """
        try:
            return self._variables[name]
        except KeyError:
            raise UnknownVariableError(name) from None

    def register_expression(self, name: str, expression: Expression) -> None:
        """Register an expression and append it to the evaluation order.

        Raises:
            DuplicateNameError: If ``name`` is already registered as an expression.
            NameMismatchError: If ``name`` differs from ``expression.name``.

        """
        if name != expression.name:
            raise NameMismatchError("expression", name, expression.name)
        if name in self._expressions:
            raise DuplicateNameError("expression", name)
        self._expressions[name] = expression

    def register_variable(self, name: str, variable: Variable) -> None:
        """Register a variable so it can be set by name and frozen after each pass.

        Raises:
            DuplicateNameError: If ``name`` is already registered as a variable.
            NameMismatchError: If ``name`` differs from ``variable.name``.

        """
        if name != variable.name:
            raise NameMismatchError("variable", name, variable.name)
        if name in self._variables:
            raise DuplicateNameError("variable", name)
        self._variables[name] = variable

    def create_variable(self, name: str, value: SupportsFloat | str | None = None) -> Variable:
        """Create a variable named ``name`` and register it under the same name."""
        variable = Variable(name, value)
        self.register_variable(name, variable)
        return variable

    def create_expression(self, name: str, operand: Node) -> Expression:
        """Wrap ``operand`` in an expression named ``name`` and register it."""
        expression = Expression(name, operand)
        self.register_expression(name, expression)
        return expression

    def set_variable(self, name: str, value: SupportsFloat | str) -> None:
        """Set a registered variable.

        Writes to unknown names are ignored.
        """
        variable = self._variables.get(name)
        if variable is None:
            logger.debug("Ignoring write to unknown variable %r", name)
            return
        variable.set(value)

    def recalculate(self, target: str) -> float:
        """Run a recalculation pass and return the value of ``target``.

        Every registered expression is evaluated, in registration order,
        whichever one is the target. Variables are frozen only after all
        expressions succeeded.

        Raises:
            UnknownExpressionError: If ``target`` is not a registered expression.
            NotSetError: If an expression reads a variable that was never set.

        """
        self._run_pass()
        if target not in self._expressions:
            raise UnknownExpressionError(target)
        return self._expressions[target].evaluate()

    def recalculate_all(self) -> dict[str, float]:
        """Run a recalculation pass and return every expression's value by name."""
        self._run_pass()
        return {name: expression.evaluate() for name, expression in self._expressions.items()}

    def _run_pass(self) -> None:
        logger.debug("Recalculating %d expressions", len(self._expressions))
        for expression in self._expressions.values():
            expression.evaluate()

        for variable in self._variables.values():
            variable.freeze()
        logger.debug("Froze %d variables", len(self._variables))

    def __contains__(self, name: object) -> bool:
        """Check if ``name`` is registered as an expression or a variable."""
        return name in self._expressions or name in self._variables

    def __len__(self) -> int:
        """Return the number of registered expressions."""
        return len(self._expressions)
