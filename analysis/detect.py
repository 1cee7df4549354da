# Ethan Doughty
# detect.py
"""Second pass: walk scan-ordered tokens and emit diagnostics.

Per token, in order:
    E2  identifier that looks like a misspelled keyword
    E3  identifier with no declaration (outside an assignment target)
    E1  `IDENT = VALUE` type check (or E3 when IDENT is undeclared)
    E4  relational operator at an edge or between non-operands

Checks are independent and purely additive. "Declared" means present in
the table built by the first pass, wherever in the file that was.
"""

from __future__ import annotations
from typing import List

from analysis.diagnostics import (
    err_misspelled_keyword,
    err_relational_operands,
    err_relational_position,
    err_use_before_declaration,
)
from analysis.type_compat import check_assignment_type
from frontend.classify import closest_keyword, is_keyword_like, is_relational_op
from frontend.tokens import OPERAND_CLASSES, Token
from runtime.context import AnalysisContext


def _is_assignment_target(tokens: List[Token], i: int) -> bool:
    """tokens[i] is IDENT in a complete `IDENT = VALUE` window."""
    return (
        tokens[i].is_identifier()
        and i + 2 < len(tokens)
        and tokens[i + 1].lexeme == "="
    )


def detect_diagnostics(tokens: List[Token], ctx: AnalysisContext) -> None:
    """Append E1-E4 diagnostics for tokens to ctx.diagnostics.

    Args:
        tokens: Tokens in scan order (never presentation order)
        ctx: Context holding the declaration table and diagnostic log
    """
    decls = ctx.declarations
    out = ctx.diagnostics
    n = len(tokens)

    for i, tok in enumerate(tokens):
        prev_is_keyword = i > 0 and tokens[i - 1].is_keyword()
        assignment = _is_assignment_target(tokens, i)

        if tok.is_identifier():
            declared = decls.is_declared(tok.lexeme)

            # E2: misspelled keyword
            if not declared and not prev_is_keyword and is_keyword_like(tok.lexeme):
                out.append(err_misspelled_keyword(
                    tok.line, tok.lexeme, closest_keyword(tok.lexeme), tok.col
                ))

            # E3: assignment targets are reported by the assignment check below
            if not declared and not prev_is_keyword and not assignment:
                out.append(err_use_before_declaration(tok.line, tok.lexeme, tok.col))

        # E1: IDENT = VALUE
        if assignment:
            value = tokens[i + 2]
            if not decls.is_declared(tok.lexeme):
                out.append(err_use_before_declaration(tok.line, tok.lexeme, tok.col))
            else:
                diag = check_assignment_type(
                    decls.lookup(tok.lexeme), value.lexeme, tok.line, tok.lexeme,
                    value.col, value.line,
                )
                if diag is not None:
                    out.append(diag)

        # E4: relational operator misuse
        if is_relational_op(tok.lexeme):
            if i == 0 or i == n - 1:
                out.append(err_relational_position(tok.line, tok.lexeme, tok.col))
            else:
                left_ok = tokens[i - 1].kind in OPERAND_CLASSES
                right_ok = tokens[i + 1].kind in OPERAND_CLASSES
                if not left_ok or not right_ok:
                    out.append(err_relational_operands(tok.line, tok.lexeme, tok.col))
