"""
  PUT Lexer

- Lazy tokenisation via `lex`, eager via `tokenize`
- Every token records the character offset (plus line/column) where it starts
- The stream always ends with a single EOF token
"""

from __future__ import annotations

import re
from typing import Iterator

from put.errors import LexError
from put.reader.token import KEYWORDS, Token, TokenKind


TOKEN_RE = re.compile(
    r"(?P<newline>\n)"
    r"|(?P<whitespace>[ \t\r\f\v]+)"
    r"|(?P<number>\d+(?:\.\d+)?)"  # digits, at most one '.'
    r"|(?P<identifier>[A-Za-z][A-Za-z0-9_]*)"
    r"|(?P<operator>[+\-*/])"
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r"|(?P<lbracket>\[)"
    r"|(?P<rbracket>\])"
    r"|(?P<semicolon>;)"
    r"|(?P<assign>=)"
    r"|(?P<comma>,)",
    re.ASCII,
)


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Tokens, finishing with an EOF token."""
    pos = 0
    line = 1
    line_start = 0
    n = len(source)

    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            raise LexError(source[pos], pos, line, pos - line_start + 1)
        group = m.lastgroup
        if group == "newline":
            line += 1
            line_start = m.end()
        elif group != "whitespace":
            text = m.group(group)
            kind = TokenKind(group)
            if kind is TokenKind.IDENTIFIER and text in KEYWORDS:
                kind = TokenKind.KEYWORD
            yield Token(kind, text, pos, line, pos - line_start + 1)
        pos = m.end()

    yield Token(TokenKind.EOF, "", pos, line, pos - line_start + 1)


def tokenize(source: str) -> list[Token]:
    """Tokenize the whole source; raises LexError on the first bad character."""
    return list(lex(source))
