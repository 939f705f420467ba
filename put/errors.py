from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from put.reader.token import Token


class PutError(Exception):
    """ Base class for all PUT errors"""
    pass


class LexError(PutError):
    """ Raised when the lexer meets a character it does not recognise"""

    def __init__(self, char: str, position: int, line: int = 1, column: int = 1):
        super().__init__(f"Unexpected character {char!r} at line {line}, column {column}")
        self.char = char
        self.position = position
        self.line = line
        self.column = column


class ParseError(PutError):
    """ Raised when the token stream does not match the grammar"""

    def __init__(self, expected: str, found: Token):
        shown = found.text if found.text else "end of input"
        super().__init__(
            f"Expected {expected} but found {shown!r} at line {found.line}, column {found.column}"
        )
        self.expected = expected
        self.found = found

    @property
    def position(self) -> int:
        return self.found.position


class EvalError(PutError):
    """ Base class for errors raised while evaluating a program"""


class UndefinedVariableError(EvalError):
    """ Raised when a variable is read before it is assigned"""

    def __init__(self, name: str):
        super().__init__(f"Undefined variable '{name}'")
        self.name = name


class PutTypeError(EvalError, TypeError):
    """ Raised when an operation receives a scalar where a tensor is required, or vice versa"""


class ShapeError(EvalError, ValueError):
    """ Raised when a tensor's data length disagrees with its shape"""


class ShapeMismatchError(EvalError, ValueError):
    """ Raised when two tensors with incompatible shapes are combined"""

    def __init__(self, op: str, left: Sequence[int], right: Sequence[int]):
        super().__init__(f"Cannot {op} tensors of shape {list(left)} and {list(right)}")
        self.op = op
        self.left = tuple(left)
        self.right = tuple(right)


class ProjectConfigError(PutError):
    """ Raised when a project manifest cannot be read"""
