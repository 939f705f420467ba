"""Runtime environment for PUT.

One flat frame of variable bindings, created for a single evaluation run.
There are no nested scopes: assignment either creates a binding or silently
overwrites the existing one.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator

from put.errors import UndefinedVariableError
from put.types.value import Value


class Environment:
    """Mapping from variable names to evaluated values."""

    __slots__ = ("vars",)

    def __init__(self, bindings: dict[str, Value] | None = None):
        self.vars: dict[str, Value] = dict(bindings) if bindings else {}

    def define(self, name: str, value: Value) -> None:
        """Bind `name` to `value`, replacing any previous binding."""
        self.vars[name] = value

    def lookup(self, name: str) -> Value:
        """Return the value bound to `name`.

        Raises UndefinedVariableError if nothing has been assigned to it yet.
        """
        try:
            return self.vars[name]
        except KeyError:
            raise UndefinedVariableError(name) from None

    def __contains__(self, name: str) -> bool:
        return name in self.vars

    def __iter__(self) -> Iterator[str]:
        return iter(self.vars)

    def __len__(self) -> int:
        return len(self.vars)

    def items(self):
        return self.vars.items()

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("{")
            first = True
            for k, v in self.vars.items():
                if not first:
                    buffer.write(", ")
                buffer.write(f"{k}: {v!r}")
                first = False
            buffer.write("}")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Environment {self}>"
