# PUT: a small expression language with first-class tensors.
#
# Layout:
# - put.reader:     tokens, lexer and recursive-descent parser (source -> syntax tree)
# - put.types:      syntax tree nodes, Tensor, runtime values and the Environment
# - put.evaluation: tree-walking evaluator
# - put.interpreter: the `parse` / `evaluate` entry points and the Interpreter facade

__version__ = "0.1.0"
