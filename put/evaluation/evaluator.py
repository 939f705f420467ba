"""Tree-walking evaluator for PUT programs.

Statements run in order against a single Environment. Every node is visited
once, depth-first and left to right; nodes are never modified.

Scalar arithmetic is raw IEEE-754: dividing by zero yields inf/-inf/nan rather
than an error. Tensor arithmetic is shape-checked and never broadcasts.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from put.errors import EvalError, PutTypeError
from put.types.ast_nodes import (
    Assignment,
    BinaryOp,
    Identifier,
    NumberLiteral,
    Statement,
    TensorFn,
    TensorLiteral,
    TensorOp,
    TensorZeros,
)
from put.types.environment import Environment
from put.types.tensor import Tensor
from put.types.value import Value, is_scalar, is_tensor, type_name

_SCALAR_KERNELS = {
    "+": np.add,
    "-": np.subtract,
    "*": np.multiply,
    "/": np.true_divide,
}

# BinaryOp operators that also apply to a pair of tensors
_TENSOR_OPERATORS = {
    "+": Tensor.add,
    "-": Tensor.sub,
    "*": Tensor.mul,
}

_TENSOR_OPS = {
    "add": Tensor.add,
    "sub": Tensor.sub,
    "mul": Tensor.mul,
    "matmul": Tensor.matmul,
}

_TENSOR_FUNCTIONS = {
    "transpose": Tensor.transpose,
    "exp": Tensor.exp,
    "log": Tensor.log,
    "mean": Tensor.mean,
    "variance": Tensor.variance,
    "std": Tensor.std_dev,
}


def evaluate(program: Iterable[Statement], env: Environment | None = None) -> Value | None:
    """Evaluate each statement in order and return the last value.

    A fresh Environment is created when none is given. An empty program
    evaluates to None.
    """
    if env is None:
        env = Environment()
    result: Value | None = None
    for statement in program:
        try:
            result = evaluate_node(statement, env)
        except RecursionError:
            raise EvalError("Expression nesting too deep to evaluate") from None
    return result


def evaluate_node(node: Statement, env: Environment) -> Value:
    match node:
        case NumberLiteral(value=value):
            return float(value)

        case Identifier(name=name):
            return env.lookup(name)

        case Assignment(name=name, value=expr):
            value = evaluate_node(expr, env)
            env.define(name, value)
            return value

        case BinaryOp():
            return _binary_chain(node, env)

        case TensorLiteral(data=data, shape=shape):
            return Tensor(data, shape)

        case TensorZeros(shape=shape):
            return Tensor.zeros(shape)

        case TensorOp(op=op, left=left, right=right):
            a = evaluate_node(left, env)
            b = evaluate_node(right, env)
            _require_tensors(op, a, b)
            return _TENSOR_OPS[op](a, b)

        case TensorFn(name=name, operand=operand):
            a = evaluate_node(operand, env)
            _require_tensors(name, a)
            result = _TENSOR_FUNCTIONS[name](a)
            return result if is_tensor(result) else float(result)

    raise PutTypeError(f"Cannot evaluate node of type {type(node).__name__}")


def _binary_chain(node: BinaryOp, env: Environment) -> Value:
    # left-associative chains nest down the left spine; fold them iteratively
    spine = []
    while isinstance(node, BinaryOp):
        spine.append(node)
        node = node.left
    value = evaluate_node(node, env)
    for op_node in reversed(spine):
        value = _binary(op_node.op, value, evaluate_node(op_node.right, env))
    return value


def _binary(op: str, left: Value, right: Value) -> Value:
    if is_scalar(left) and is_scalar(right):
        with np.errstate(all="ignore"):
            return float(_SCALAR_KERNELS[op](np.float64(left), np.float64(right)))

    if is_tensor(left) and is_tensor(right) and op in _TENSOR_OPERATORS:
        return _TENSOR_OPERATORS[op](left, right)

    raise PutTypeError(
        f"Unsupported operand types for {op}: {type_name(left)} and {type_name(right)}"
    )


def _require_tensors(op: str, *operands: Value) -> None:
    for operand in operands:
        if not is_tensor(operand):
            kinds = ", ".join(type_name(o) for o in operands)
            raise PutTypeError(f"{op} requires tensor operands, got {kinds}")
