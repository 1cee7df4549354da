# Ethan Doughty
# tokens.py
"""Token model shared by the scanner, the diagnostic pass and the report."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class TokenClass(Enum):
    """Syntactic class of a lexeme (ATTRIBUTE column of the report)."""
    KEYWORD = "KEYWORD"
    IDENTIFIER = "IDENTIFIER"
    NUMBER = "NUMBER"
    OPERATOR = "OPERATOR"
    SEPARATOR = "SEPARATOR"
    STRING = "STRING"
    CHAR = "CHAR"
    NAMESPACE = "NAMESPACE"

    def __str__(self) -> str:
        return self.value


# Classes accepted on either side of a relational operator
OPERAND_CLASSES = frozenset({
    TokenClass.IDENTIFIER,
    TokenClass.NUMBER,
    TokenClass.STRING,
    TokenClass.CHAR,
})


@dataclass(frozen=True)
class Token:
    lexeme: str  # verbatim source text ("int", "==", "\"hi\"")
    kind: TokenClass
    line: int  # 1-based line of the first character
    col: int = 0  # 1-based column of the first character (0 = unknown)

    def is_keyword(self) -> bool:
        return self.kind is TokenClass.KEYWORD

    def is_identifier(self) -> bool:
        return self.kind is TokenClass.IDENTIFIER

    def __str__(self) -> str:
        return f"{self.kind}({self.lexeme!r}) line {self.line}"


def presentation_order(tokens) -> list:
    """Tokens sorted by (line, lexeme) for display. Analysis always uses scan order."""
    return sorted(tokens, key=lambda t: (t.line, t.lexeme))


@dataclass(frozen=True)
class Comment:
    """Verbatim comment text, delimiters included. No line is kept."""
    body: str

    def __str__(self) -> str:
        return self.body
