"""Runtime values: a scalar is a Python float, anything else is a Tensor."""

from __future__ import annotations

from typing import Union

from put.types.tensor import Tensor

Scalar = float
Value = Union[Scalar, Tensor]


def is_scalar(value: Value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_tensor(value: Value) -> bool:
    return isinstance(value, Tensor)


def type_name(value: Value) -> str:
    return "tensor" if is_tensor(value) else "scalar"


def format_value(value: Value | None) -> str:
    if value is None:
        return "nil"
    if is_tensor(value):
        return str(value)
    return repr(float(value))
