"""Syntax tree nodes for PUT programs.

Nodes are frozen dataclasses: the parser builds each tree once and nothing
mutates it afterwards. `position` is the source offset of the token that started
the node; it is informational and does not take part in equality, so two parses
of the same text compare equal and hand-built trees compare equal to parsed ones.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

TENSOR_BINARY_OPS = ("add", "sub", "mul", "matmul")
TENSOR_FUNCTIONS = ("transpose", "exp", "log", "mean", "variance", "std")


@dataclass(frozen=True, slots=True)
class NumberLiteral:
    value: float
    position: int = field(default=0, compare=False)


@dataclass(frozen=True, slots=True)
class Identifier:
    name: str
    position: int = field(default=0, compare=False)


@dataclass(frozen=True, slots=True)
class BinaryOp:
    op: str
    left: Expression
    right: Expression
    position: int = field(default=0, compare=False)


@dataclass(frozen=True, slots=True)
class Assignment:
    """var name = value;"""
    name: str
    value: Expression
    position: int = field(default=0, compare=False)


@dataclass(frozen=True, slots=True)
class TensorLiteral:
    """Tensor([data...], [shape...]) - validated only when evaluated."""
    data: tuple[float, ...]
    shape: tuple[int, ...]
    position: int = field(default=0, compare=False)


@dataclass(frozen=True, slots=True)
class TensorOp:
    """add/sub/mul/matmul(left, right)"""
    op: str
    left: Expression
    right: Expression
    position: int = field(default=0, compare=False)


@dataclass(frozen=True, slots=True)
class TensorFn:
    """transpose/exp/log/mean/variance/std(operand)"""
    name: str
    operand: Expression
    position: int = field(default=0, compare=False)


@dataclass(frozen=True, slots=True)
class TensorZeros:
    """zeros([shape...])"""
    shape: tuple[int, ...]
    position: int = field(default=0, compare=False)


Expression = Union[
    NumberLiteral, Identifier, BinaryOp, TensorLiteral, TensorOp, TensorFn, TensorZeros
]
Statement = Union[Assignment, Expression]
Program = tuple[Statement, ...]
