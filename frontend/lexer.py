# Ethan Doughty
# lexer.py
"""Java/Kotlin scanner with inline declaration capture.

Reads the source one character at a time (with one-character pushback),
appends Tokens and Comments to an AnalysisContext, and records a
declaration whenever a KEYWORD token is immediately followed by an
IDENTIFIER token (`int x`, `String name`, also `var x`).

Malformed constructs never raise: unterminated strings, block comments
and char literals keep whatever text was read before end of input.
"""

from __future__ import annotations
from collections import deque
from typing import List, Optional

from frontend.classify import NAMESPACE_KEYWORDS, classify
from frontend.tokens import Comment, Token, TokenClass
from runtime.context import AnalysisContext

WHITESPACE = " \t\v\f"
OPERATOR_CHARS = "+-*/%=<>!&|?:.()"
SEPARATOR_CHARS = "{}[];,"

# Two-character operators fused from adjacent characters
FUSED_OPERATORS = {"?.", "?:", "..", "==", "!=", "<=", ">=", "&&", "||"}


def _is_alpha(ch: Optional[str]) -> bool:
    return ch is not None and ch.isascii() and ch.isalpha()


def _is_digit(ch: Optional[str]) -> bool:
    return ch is not None and "0" <= ch <= "9"


def _is_word_char(ch: Optional[str]) -> bool:
    return ch is not None and (ch == "_" or _is_alpha(ch) or _is_digit(ch))


class CharStream:
    """Character reader with line/column accounting and pushback.

    Carriage returns are dropped before any consumer sees them. `line`
    and `col` always describe the most recently read character; unread()
    restores them, so a pushed-back newline does not count twice.
    """

    def __init__(self, src: str):
        self._src = src
        self._pos = 0
        self._pushback: List[str] = []
        self._marks: deque = deque(maxlen=8)
        self.line = 1
        self.col = 0

    def _next_raw(self) -> Optional[str]:
        while self._pos < len(self._src):
            ch = self._src[self._pos]
            self._pos += 1
            if ch != "\r":
                return ch
        return None

    def read(self) -> Optional[str]:
        """Next character, or None at end of input."""
        ch = self._pushback.pop() if self._pushback else self._next_raw()
        if ch is None:
            return None
        self._marks.append((self.line, self.col))
        if ch == "\n":
            self.line += 1
            self.col = 0
        else:
            self.col += 1
        return ch

    def unread(self, ch: Optional[str]) -> None:
        """Push ch back so the next read() returns it. None is ignored."""
        if ch is None:
            return
        self._pushback.append(ch)
        self.line, self.col = self._marks.pop()


class Scanner:
    """First pass: tokens, comments and Java-style declarations."""

    def __init__(self, src: str, ctx: AnalysisContext):
        self.stream = CharStream(src)
        self.ctx = ctx

    def scan(self) -> List[Token]:
        stream = self.stream
        while True:
            ch = stream.read()
            if ch is None:
                break
            line, col = stream.line, stream.col

            if ch in WHITESPACE or ch == "\n":
                continue

            if ch == "/" and self._scan_comment():
                continue

            if _is_alpha(ch) or ch == "_":
                self._scan_word(ch, line, col)
            elif _is_digit(ch):
                self._scan_number(ch, line, col)
            elif ch == "'":
                self._scan_char(line, col)
            elif ch == '"':
                self._scan_string(line, col)
            elif ch in OPERATOR_CHARS:
                self._scan_operator(ch, line, col)
            elif ch in SEPARATOR_CHARS:
                self._emit(ch, TokenClass.SEPARATOR, line, col)
            # anything else is dropped

        return list(self.ctx.tokens)

    def _emit(self, lexeme: str, kind: TokenClass, line: int, col: int) -> bool:
        return self.ctx.tokens.append(Token(lexeme, kind, line, col))

    # ---------------
    # Comments
    # ---------------

    def _scan_comment(self) -> bool:
        """Capture a // or /* comment after a '/'. False if neither follows."""
        stream = self.stream
        nxt = stream.read()
        if nxt == "/":
            buf = ["//"]
            c = stream.read()
            while c is not None and c != "\n":
                buf.append(c)
                c = stream.read()
            self.ctx.comments.append(Comment("".join(buf)))
            return True
        if nxt == "*":
            buf = ["/*"]
            prev = None
            c = stream.read()
            while c is not None:
                buf.append(c)
                if prev == "*" and c == "/":
                    break
                prev = c
                c = stream.read()
            self.ctx.comments.append(Comment("".join(buf)))
            return True
        stream.unread(nxt)
        return False

    # ---------------
    # Words
    # ---------------

    def _scan_word(self, first: str, line: int, col: int) -> None:
        stream = self.stream
        buf = [first]
        c = stream.read()
        while _is_word_char(c):
            buf.append(c)
            c = stream.read()
        stream.unread(c)

        word = "".join(buf)
        kind = classify(word)
        appended = self._emit(word, kind, line, col)

        if kind is TokenClass.KEYWORD and word in NAMESPACE_KEYWORDS:
            self._scan_namespace()
            return

        # `TYPE IDENT`: purely positional, no statement boundaries
        tokens = self.ctx.tokens
        if appended and kind is TokenClass.IDENTIFIER and len(tokens) >= 2 and tokens[-2].is_keyword():
            self.ctx.declarations.record(word, tokens[-2].lexeme, line)

    def _scan_namespace(self) -> None:
        """Rest of a package/import line as one NAMESPACE token.

        The terminating ';' or newline is consumed. Nothing is emitted when
        the rest of the line is blank.
        """
        stream = self.stream
        c = stream.read()
        while c is not None and c.isspace() and c != "\n":
            c = stream.read()
        if c is None or c == "\n":
            stream.unread(c)
            return

        line, col = stream.line, stream.col
        buf = []
        while c is not None and c != "\n" and c != ";":
            buf.append(c)
            c = stream.read()

        name = "".join(buf).strip()
        if name:
            self._emit(name, TokenClass.NAMESPACE, line, col)

    # ---------------
    # Literals
    # ---------------

    def _scan_number(self, first: str, line: int, col: int) -> None:
        """Digits and dots, then any trailing letters (suffixes like f, L)."""
        stream = self.stream
        buf = [first]
        c = stream.read()
        while _is_digit(c) or c == ".":
            buf.append(c)
            c = stream.read()
        while _is_alpha(c):
            buf.append(c)
            c = stream.read()
        stream.unread(c)
        self._emit("".join(buf), TokenClass.NUMBER, line, col)

    def _scan_char(self, line: int, col: int) -> None:
        stream = self.stream
        buf = ["'"]
        c = stream.read()
        if c == "\\":
            buf.append(c)
            esc = stream.read()
            if esc is not None:
                buf.append(esc)
        elif c is not None:
            buf.append(c)

        close = stream.read()
        if close == "'":
            buf.append(close)
        else:
            stream.unread(close)
        self._emit("".join(buf), TokenClass.CHAR, line, col)

    def _scan_string(self, line: int, col: int) -> None:
        stream = self.stream
        buf = ['"']
        c = stream.read()
        while c is not None:
            buf.append(c)
            if c == '"':
                break
            if c == "\\":
                # escape pair is atomic: \" cannot close the literal
                esc = stream.read()
                if esc is None:
                    break
                buf.append(esc)
            c = stream.read()
        self._emit("".join(buf), TokenClass.STRING, line, col)

    # ---------------
    # Operators
    # ---------------

    def _scan_operator(self, first: str, line: int, col: int) -> None:
        stream = self.stream
        op = first
        nxt = stream.read()
        if nxt is not None and first + nxt in FUSED_OPERATORS:
            op = first + nxt
            if op == "==":
                third = stream.read()
                if third == "=":
                    op = "==="
                else:
                    stream.unread(third)
        else:
            stream.unread(nxt)

        # a lone ':' is a separator (type annotations, labels)
        kind = TokenClass.SEPARATOR if op == ":" else TokenClass.OPERATOR
        self._emit(op, kind, line, col)


def lex(src: str, ctx: Optional[AnalysisContext] = None) -> List[Token]:
    """Scan a Java/Kotlin source string.

    Args:
        src: Source text
        ctx: Context receiving tokens, comments and declarations (a fresh
            one is created if not provided; an existing one is not reset)

    Returns:
        Tokens in scan order
    """
    if ctx is None:
        ctx = AnalysisContext()
    return Scanner(src, ctx).scan()
