"""
  PUT recursive-descent parser

Precedence, lowest to highest:

    statement  := 'var' IDENT '=' expression ';' | expression ';'
    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/') factor)*
    factor     := NUMBER | IDENT | '(' expression ')' | call

Calls are the built-in tensor forms (Tensor, zeros, add, sub, mul, matmul,
transpose, exp, log, mean, variance, std). There are no user-defined functions,
so any other name directly followed by '(' is a syntax error.

Parsing is all-or-nothing: the first unexpected token raises ParseError and no
partial program is returned. Parentheses and calls may nest at most
MAX_NESTING levels deep.
"""

from __future__ import annotations

from typing import Iterable

from put.errors import ParseError
from put.reader.token import Token, TokenKind
from put.types.ast_nodes import (
    TENSOR_BINARY_OPS,
    TENSOR_FUNCTIONS,
    Assignment,
    BinaryOp,
    Expression,
    Identifier,
    NumberLiteral,
    Program,
    Statement,
    TensorFn,
    TensorLiteral,
    TensorOp,
    TensorZeros,
)

MAX_NESTING = 100

_DESCRIBE = {
    TokenKind.NUMBER: "a number",
    TokenKind.IDENTIFIER: "an identifier",
    TokenKind.LPAREN: "'('",
    TokenKind.RPAREN: "')'",
    TokenKind.LBRACKET: "'['",
    TokenKind.RBRACKET: "']'",
    TokenKind.SEMICOLON: "';'",
    TokenKind.ASSIGN: "'='",
    TokenKind.COMMA: "','",
    TokenKind.EOF: "end of input",
}


class Parser:
    def __init__(self, tokens: Iterable[Token]):
        self.tokens: list[Token] = list(tokens)
        if not self.tokens or self.tokens[-1].kind is not TokenKind.EOF:
            end = self.tokens[-1].position + len(self.tokens[-1].text) if self.tokens else 0
            self.tokens.append(Token(TokenKind.EOF, "", end))
        self.pos = 0
        self.depth = 0

    # ------------------------------------------------------------------ stream

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def peek_next(self) -> Token:
        return self.tokens[min(self.pos + 1, len(self.tokens) - 1)]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if tok.kind is not TokenKind.EOF:
            self.pos += 1
        return tok

    def expect(self, kind: TokenKind) -> Token:
        tok = self.peek()
        if tok.kind is not kind:
            raise ParseError(_DESCRIBE.get(kind, kind.value), tok)
        return self.advance()

    # ------------------------------------------------------------------ program

    def parse_program(self) -> Program:
        statements: list[Statement] = []
        while self.peek().kind is not TokenKind.EOF:
            statements.append(self.parse_statement())
        return tuple(statements)

    def parse_statement(self) -> Statement:
        tok = self.peek()
        if tok.kind is TokenKind.KEYWORD and tok.text == "var":
            self.advance()
            name = self.expect(TokenKind.IDENTIFIER)
            self.expect(TokenKind.ASSIGN)
            value = self.parse_expression()
            self.expect(TokenKind.SEMICOLON)
            return Assignment(name.text, value, position=tok.position)

        expr = self.parse_expression()
        self.expect(TokenKind.SEMICOLON)
        return expr

    # ------------------------------------------------------------------ expressions

    def parse_expression(self) -> Expression:
        left = self.parse_term()
        while self.peek().is_operator("+", "-"):
            op = self.advance()
            right = self.parse_term()
            left = BinaryOp(op.text, left, right, position=op.position)
        return left

    def parse_term(self) -> Expression:
        left = self.parse_factor()
        while self.peek().is_operator("*", "/"):
            op = self.advance()
            right = self.parse_factor()
            left = BinaryOp(op.text, left, right, position=op.position)
        return left

    def parse_factor(self) -> Expression:
        tok = self.peek()

        if tok.kind is TokenKind.NUMBER:
            self.advance()
            return NumberLiteral(float(tok.text), position=tok.position)

        if tok.kind is TokenKind.IDENTIFIER:
            if self.peek_next().kind is TokenKind.LPAREN:
                return self._nested(self.parse_call)
            self.advance()
            return Identifier(tok.text, position=tok.position)

        if tok.kind is TokenKind.LPAREN:
            return self._nested(self.parse_parenthesized)

        raise ParseError("an expression", tok)

    def parse_parenthesized(self) -> Expression:
        self.expect(TokenKind.LPAREN)
        expr = self.parse_expression()
        self.expect(TokenKind.RPAREN)
        return expr

    def _nested(self, parse) -> Expression:
        if self.depth >= MAX_NESTING:
            raise ParseError(f"at most {MAX_NESTING} levels of nesting", self.peek())
        self.depth += 1
        try:
            return parse()
        finally:
            self.depth -= 1

    # ------------------------------------------------------------------ tensor forms

    def parse_call(self) -> Expression:
        name = self.advance()
        self.expect(TokenKind.LPAREN)

        if name.text == "Tensor":
            data = self.parse_number_list()
            self.expect(TokenKind.COMMA)
            shape = self.parse_shape_list()
            node: Expression = TensorLiteral(data, shape, position=name.position)
        elif name.text == "zeros":
            node = TensorZeros(self.parse_shape_list(), position=name.position)
        elif name.text in TENSOR_BINARY_OPS:
            left = self.parse_expression()
            self.expect(TokenKind.COMMA)
            right = self.parse_expression()
            node = TensorOp(name.text, left, right, position=name.position)
        elif name.text in TENSOR_FUNCTIONS:
            node = TensorFn(name.text, self.parse_expression(), position=name.position)
        else:
            raise ParseError("a built-in tensor form", name)

        self.expect(TokenKind.RPAREN)
        return node

    def _parse_signed(self) -> tuple[Token, str]:
        sign = ""
        if self.peek().is_operator("-"):
            self.advance()
            sign = "-"
        return self.expect(TokenKind.NUMBER), sign

    def _parse_list(self, convert) -> tuple:
        self.expect(TokenKind.LBRACKET)
        items = []
        if self.peek().kind is not TokenKind.RBRACKET:
            items.append(convert(*self._parse_signed()))
            while self.peek().kind is TokenKind.COMMA:
                self.advance()
                items.append(convert(*self._parse_signed()))
        self.expect(TokenKind.RBRACKET)
        return tuple(items)

    def parse_number_list(self) -> tuple[float, ...]:
        return self._parse_list(lambda tok, sign: float(sign + tok.text))

    def parse_shape_list(self) -> tuple[int, ...]:
        def to_dim(tok: Token, sign: str) -> int:
            if "." in tok.text:
                raise ParseError("an integer dimension", tok)
            return int(sign + tok.text)

        return self._parse_list(to_dim)


def parse_tokens(tokens: Iterable[Token]) -> Program:
    """Parse a token sequence into a program (tuple of statements)."""
    return Parser(tokens).parse_program()
