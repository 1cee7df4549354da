# Ethan Doughty
# kotlin_decls.py
"""Kotlin `var/val NAME [: TYPE] [= VALUE]` capture, run right after scanning."""

from __future__ import annotations
from typing import List

from analysis.type_compat import check_assignment_type, strip_nullable
from frontend.classify import DECL_KEYWORDS
from frontend.tokens import Token
from runtime.context import AnalysisContext


def capture_kotlin_declarations(tokens: List[Token], ctx: AnalysisContext) -> None:
    """Record Kotlin declarations and type-check annotated initializers.

    Patterns (token positions relative to the var/val keyword at i):
        var NAME : TYPE            -> declare NAME as TYPE
        var NAME : TYPE = VALUE    -> declare, then check VALUE against TYPE
        var NAME = VALUE           -> declare NAME with an unresolved type

    The initializer is checked against the annotated type even when an
    earlier `var NAME` sniff already claimed the name, since the table
    keeps only the first declaration.

    Args:
        tokens: Tokens in scan order
        ctx: Context receiving declarations and diagnostics
    """
    n = len(tokens)
    for i, tok in enumerate(tokens):
        if not (tok.is_keyword() and tok.lexeme in DECL_KEYWORDS):
            continue
        if i + 1 >= n or not tokens[i + 1].is_identifier():
            continue

        name_tok = tokens[i + 1]
        name = name_tok.lexeme

        if i + 3 < n and tokens[i + 2].lexeme == ":":
            dtype = strip_nullable(tokens[i + 3].lexeme)
            ctx.declarations.record(name, dtype, name_tok.line)
            if i + 5 < n and tokens[i + 4].lexeme == "=":
                value_tok = tokens[i + 5]
                diag = check_assignment_type(
                    dtype, value_tok.lexeme, name_tok.line, name, value_tok.col, value_tok.line
                )
                if diag is not None:
                    ctx.diagnostics.append(diag)
        elif i + 2 < n and tokens[i + 2].lexeme == "=":
            ctx.declarations.record(name, None, name_tok.line)
