"""Exceptions raised by memograph."""


class MemographError(Exception):
    """Base class for all memograph errors."""


class NotSetError(MemographError, ValueError):
    """A variable was evaluated before any value was assigned to it."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Variable '{name}' is not set")


class UnknownExpressionError(MemographError, KeyError):
    """An expression name is not registered in the context."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown expression: '{name}'")

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return str(self.args[0])


class UnknownVariableError(MemographError, KeyError):
    """A variable name is not registered in the context."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown variable: '{name}'")

    def __str__(self) -> str:
        return str(self.args[0])


class DuplicateNameError(MemographError, ValueError):
    """A name was registered twice in the same namespace."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"{kind.capitalize()} '{name}' is already registered")


class ConfigError(MemographError):
    """Error in memograph configuration."""


class NameMismatchError(MemographError, ValueError):
    """A node was registered under a name other than its own."""

    def __init__(self, kind: str, name: str, node_name: str) -> None:
        self.kind = kind
        self.name = name
        self.node_name = node_name
        super().__init__(f"Cannot register {kind} '{node_name}' under the name '{name}'")
