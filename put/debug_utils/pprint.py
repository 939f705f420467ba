import json
from typing import Optional

from put.types.ast_nodes import (
    Assignment,
    BinaryOp,
    Identifier,
    NumberLiteral,
    TensorFn,
    TensorLiteral,
    TensorOp,
    TensorZeros,
)

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_NODE = "\033[94m"
COLOR_NAME = "\033[92m"
COLOR_LITERAL = "\033[95m"
COLOR_OPERATOR = "\033[93m"
COLOR_TENSOR = "\033[96m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "indent": 2,
    "max_depth": 32,
    "color": False,
}


# ----------------- Colorize utility -----------------
def colorize(text: str, color: str, options: dict = DEFAULT_OPTIONS) -> str:
    if options.get("color", False):
        return f"{color}{text}{RESET}"
    return text


def _format_number(value: float) -> str:
    return repr(float(value))


def _label(node, options: dict) -> str:
    kind = colorize(type(node).__name__, COLOR_NODE, options)
    match node:
        case NumberLiteral(value=value):
            return f"{kind}: {colorize(_format_number(value), COLOR_LITERAL, options)}"
        case Identifier(name=name):
            return f"{kind}: {colorize(name, COLOR_NAME, options)}"
        case Assignment(name=name):
            return f"{kind}: {colorize(name, COLOR_NAME, options)}"
        case BinaryOp(op=op):
            return f"{kind}: {colorize(op, COLOR_OPERATOR, options)}"
        case TensorOp(op=op):
            return f"{kind}: {colorize(op, COLOR_OPERATOR, options)}"
        case TensorFn(name=name):
            return f"{kind}: {colorize(name, COLOR_OPERATOR, options)}"
        case TensorLiteral(data=data, shape=shape):
            body = f"data={[float(d) for d in data]}, shape={list(shape)}"
            return f"{kind}: {colorize(body, COLOR_TENSOR, options)}"
        case TensorZeros(shape=shape):
            return f"{kind}: {colorize(f'shape={list(shape)}', COLOR_TENSOR, options)}"
    return f"Unknown node {node!r}"


def _children(node) -> tuple:
    match node:
        case Assignment(value=value):
            return (value,)
        case BinaryOp(left=left, right=right) | TensorOp(left=left, right=right):
            return (left, right)
        case TensorFn(operand=operand):
            return (operand,)
    return ()


# ----------------- Pretty printer -----------------
def pprint_node(
    node,
    indent: int = 0,
    options: Optional[dict] = None,
    _current_depth: int = 0,
) -> str:
    """Render one syntax tree as an indented outline, one node per line."""
    if options is None:
        options = DEFAULT_OPTIONS
    pad = " " * (options.get("indent", 2) * indent)

    if _current_depth >= options.get("max_depth", 32):
        return pad + "..."

    lines = [pad + _label(node, options)]
    for child in _children(node):
        lines.append(pprint_node(child, indent + 1, options, _current_depth + 1))
    return "\n".join(lines)


def pprint_program(program, options: Optional[dict] = None) -> str:
    return "\n".join(pprint_node(stmt, options=options) for stmt in program)


# ----------------- Load JSON config -----------------
def load_options_from_json(json_str: str) -> dict:
    try:
        user_opts = json.loads(json_str)
    except json.JSONDecodeError:
        return dict(DEFAULT_OPTIONS)
    if not isinstance(user_opts, dict):
        return dict(DEFAULT_OPTIONS)
    return {**DEFAULT_OPTIONS, **user_opts}
