from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    NUMBER = "number"
    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    OPERATOR = "operator"
    LPAREN = "lparen"
    RPAREN = "rparen"
    LBRACKET = "lbracket"
    RBRACKET = "rbracket"
    SEMICOLON = "semicolon"
    ASSIGN = "assign"
    COMMA = "comma"
    EOF = "eof"


KEYWORDS = frozenset({"var"})


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str
    position: int
    line: int = 1
    column: int = 1

    def is_operator(self, *symbols: str) -> bool:
        return self.kind is TokenKind.OPERATOR and self.text in symbols

    def __repr__(self):
        return f"Token({self.kind.value}, {self.text!r}, pos={self.position})"
