from typing import Any, Self

from treelox.diagnostics import LoxRuntimeError
from treelox.tokens import Token

class Environment:
    """A single scope: a mutable name-to-value mapping plus its enclosing scope.

    Scopes are shared by reference between the running call frame and any
    closure that captured them, and are only ever mutated in place.
    """
    values: dict[str, Any]
    enclosing: Self | None

    def __init__(self, enclosing: Self | None = None) -> None:
        self.values = {}
        self.enclosing = enclosing

    def define(self, name: str, value: Any) -> None:
        self.values[name] = value

    def ancestor(self, distance: int) -> Self:
        environment = self
        for _ in range(distance):
            if environment.enclosing is None:
                raise ValueError("Invalid distance")
            environment = environment.enclosing

        return environment

    def owner(self, name: Token) -> Self:
        """Nearest scope in the chain that binds ``name``."""
        environment: Self | None = self
        while environment is not None:
            if name.lexeme in environment.values:
                return environment
            environment = environment.enclosing

        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def get(self, name: Token) -> Any:
        return self.owner(name).values[name.lexeme]

    def get_at(self, distance: int, name: str) -> Any:
        return self.ancestor(distance).values.get(name)

    def assign(self, name: Token, value: Any) -> None:
        self.owner(name).values[name.lexeme] = value

    def assign_at(self, distance: int, name: Token, value: Any) -> None:
        self.ancestor(distance).values[name.lexeme] = value
