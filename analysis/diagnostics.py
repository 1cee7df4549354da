# Ethan Doughty
# diagnostics.py

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Optional

# ---------------
# Diagnostic kinds
# ---------------

class DiagnosticKind(Enum):
    """The four diagnostic categories, keyed by their report code."""
    TYPE_MISMATCH = "E1"
    MISSPELLED_KEYWORD = "E2"
    USE_BEFORE_DECLARATION = "E3"
    RELATIONAL_OPERATOR_MISUSE = "E4"

    @property
    def code(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Report prefix, e.g. 'E1-TypeMismatch'."""
        return f"{self.value}-{_LABELS[self]}"


_LABELS = {
    DiagnosticKind.TYPE_MISMATCH: "TypeMismatch",
    DiagnosticKind.MISSPELLED_KEYWORD: "MisspelledKeyword",
    DiagnosticKind.USE_BEFORE_DECLARATION: "IdentifierError",
    DiagnosticKind.RELATIONAL_OPERATOR_MISUSE: "RelationalError",
}

# ---------------
# Diagnostic dataclass
# ---------------

@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic produced by the analysis passes.

    Fields:
        line: Source line number
        kind: Diagnostic category
        message: Human-readable message (no code or line prefix)
        lexeme: Offending token text (used for editor ranges)
        col: 1-based column of the offending token, 0 if unknown
        lexeme_line: Line of the offending token when it differs from `line`
            (an assignment value written on a later line), 0 if the same
        suggestion: Replacement keyword for misspellings, if any
    """
    line: int
    kind: DiagnosticKind
    message: str
    lexeme: str = ""
    col: int = 0
    suggestion: Optional[str] = None
    lexeme_line: int = 0

    @property
    def code(self) -> str:
        return self.kind.code

    def __str__(self) -> str:
        return f"{self.kind.label} line {self.line}: {self.message}"

# ------------------------
# Diagnostic builders
# ------------------------

def err_type_mismatch(line: int, declared_type: str, name: str, value: str, col: int = 0,
                      value_line: int = 0) -> Diagnostic:
    return Diagnostic(
        line=line,
        kind=DiagnosticKind.TYPE_MISMATCH,
        message=f"{declared_type} '{name}' cannot take '{value}'",
        lexeme=value,
        col=col,
        lexeme_line=value_line,
    )

def err_char_expected(line: int, declared_type: str, name: str, value: str, col: int = 0,
                      value_line: int = 0) -> Diagnostic:
    return Diagnostic(
        line=line,
        kind=DiagnosticKind.TYPE_MISMATCH,
        message=f"{declared_type} '{name}' must take a char literal, got '{value}'",
        lexeme=value,
        col=col,
        lexeme_line=value_line,
    )

def err_misspelled_keyword(line: int, word: str, suggestion: Optional[str] = None, col: int = 0) -> Diagnostic:
    msg = f"'{word}' resembles a keyword"
    if suggestion:
        msg += f" (did you mean '{suggestion}'?)"
    return Diagnostic(
        line=line,
        kind=DiagnosticKind.MISSPELLED_KEYWORD,
        message=msg,
        lexeme=word,
        col=col,
        suggestion=suggestion,
    )

def err_use_before_declaration(line: int, name: str, col: int = 0) -> Diagnostic:
    return Diagnostic(
        line=line,
        kind=DiagnosticKind.USE_BEFORE_DECLARATION,
        message=f"'{name}' used before declaration",
        lexeme=name,
        col=col,
    )

def err_relational_position(line: int, op: str, col: int = 0) -> Diagnostic:
    return Diagnostic(
        line=line,
        kind=DiagnosticKind.RELATIONAL_OPERATOR_MISUSE,
        message=f"Operator '{op}' at invalid position",
        lexeme=op,
        col=col,
    )

def err_relational_operands(line: int, op: str, col: int = 0) -> Diagnostic:
    return Diagnostic(
        line=line,
        kind=DiagnosticKind.RELATIONAL_OPERATOR_MISUSE,
        message=f"Operator '{op}' has invalid operands",
        lexeme=op,
        col=col,
    )

# ---------------
# Summary counts
# ---------------

@dataclass
class DiagnosticSummary:
    """Per-kind counts plus total, as shown under the error report."""
    counts: Dict[DiagnosticKind, int] = field(
        default_factory=lambda: {kind: 0 for kind in DiagnosticKind}
    )

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def __getitem__(self, kind: DiagnosticKind) -> int:
        return self.counts[kind]

    def __str__(self) -> str:
        parts = "  ".join(f"{kind.code}={n}" for kind, n in self.counts.items())
        return f"{parts}   Total={self.total}"


def summarize(diagnostics: Iterable[Diagnostic]) -> DiagnosticSummary:
    """Count diagnostics by kind.

    Args:
        diagnostics: Diagnostics of one run

    Returns:
        DiagnosticSummary with one count per kind (zeros included)
    """
    summary = DiagnosticSummary()
    for d in diagnostics:
        summary.counts[d.kind] += 1
    return summary
