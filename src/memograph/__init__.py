"""Lazily evaluated, memoized computation graphs."""

__all__ = [
    "BinaryOperator",
    "ConfigError",
    "Constant",
    "DuplicateNameError",
    "EvaluationContext",
    "Expression",
    "MemographConfig",
    "MemographError",
    "NameMismatchError",
    "Node",
    "NotSetError",
    "UnaryOperator",
    "UnknownExpressionError",
    "UnknownVariableError",
    "Variable",
    "as_node",
    "configure_logging",
    "cos",
    "exp",
    "find_pyproject_toml",
    "format_node",
    "get_config",
    "iter_nodes",
    "iter_variables",
    "load_config",
    "log",
    "maximum",
    "minimum",
    "render_tree",
    "sin",
    "sqrt",
]

from ._config import MemographConfig, find_pyproject_toml, get_config, load_config
from ._context import EvaluationContext
from ._errors import (
    ConfigError,
    DuplicateNameError,
    MemographError,
    NameMismatchError,
    NotSetError,
    UnknownExpressionError,
    UnknownVariableError,
)
from ._logging import configure_logging
from ._nodes import BinaryOperator, Constant, Expression, Node, UnaryOperator, Variable, as_node
from ._operators import cos, exp, log, maximum, minimum, sin, sqrt
from ._render import format_node, render_tree
from ._walk import iter_nodes, iter_variables
