from __future__ import annotations

import logging
from typing import Iterable

from put.evaluation.evaluator import evaluate as _evaluate
from put.project import ProjectConfig
from put.reader.lexer import tokenize
from put.reader.parser import parse_tokens
from put.types.ast_nodes import Program, Statement
from put.types.environment import Environment
from put.types.value import Value

logger = logging.getLogger(__name__)


def parse(source: str) -> Program:
    """Turn source text into a program; raises LexError or ParseError."""
    tokens = tokenize(source)
    logger.debug("lexed %d tokens", len(tokens) - 1)
    program = parse_tokens(tokens)
    logger.debug("parsed %d statements", len(program))
    return program


def evaluate(program: Iterable[Statement], env: Environment | None = None) -> Value | None:
    """Run a parsed program and return its last value; raises EvalError."""
    return _evaluate(program, env)


class Interpreter:
    """
    Orchestrates reading and evaluating PUT source.
    Each call to `eval` runs in a fresh Environment, kept on `env` afterwards
    so callers can inspect the bindings the program made.
    """

    def __init__(self, project: ProjectConfig | None = None):
        self.project = project
        self.env: Environment = Environment()

    def eval(self, code: str) -> Value | None:
        if self.project is not None:
            logger.debug("evaluating for project %s %s", self.project.name, self.project.version)
        program = parse(code)
        self.env = Environment()
        result = evaluate(program, self.env)
        logger.debug("evaluated program, %d bindings", len(self.env))
        return result
