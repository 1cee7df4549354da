"""Convert jklint Diagnostic objects to LSP Diagnostic objects."""
from __future__ import annotations

from lsprotocol import types
from analysis.diagnostics import Diagnostic as JklintDiagnostic, DiagnosticKind

# Kinds that are reported as warnings; everything else is an error
WARNING_KINDS = {
    DiagnosticKind.MISSPELLED_KEYWORD,
}


def diagnostic_range(d: JklintDiagnostic, source_lines: list[str]) -> types.Range:
    """Range covering the offending lexeme, or the whole line as a fallback.

    Args:
        d: jklint diagnostic with 1-based line and column (the range sits on
            the offending lexeme's own line when it has one)
        source_lines: Source code split into lines

    Returns:
        LSP Range with 0-based positions
    """
    line_num = (d.lexeme_line or d.line) - 1
    if not (0 <= line_num < len(source_lines)):
        pos = types.Position(line=max(line_num, 0), character=0)
        return types.Range(start=pos, end=pos)

    line_text = source_lines[line_num]
    lexeme = d.lexeme.split("\n", 1)[0]

    if d.col > 0:
        start_char = min(d.col - 1, len(line_text))
    elif lexeme and lexeme in line_text:
        start_char = line_text.index(lexeme)
    else:
        start_char = None

    if start_char is None or not lexeme:
        start_char, end_char = 0, len(line_text)
    else:
        end_char = min(start_char + len(lexeme), len(line_text))

    return types.Range(
        start=types.Position(line=line_num, character=start_char),
        end=types.Position(line=line_num, character=end_char),
    )


def to_lsp_diagnostic(d: JklintDiagnostic, source_lines: list[str]) -> types.Diagnostic:
    """Convert a jklint Diagnostic to an LSP Diagnostic.

    Args:
        d: jklint diagnostic with 1-based line numbering
        source_lines: Source code split into lines (for range calculation)

    Returns:
        LSP Diagnostic with 0-based line numbering
    """
    if d.kind in WARNING_KINDS:
        severity = types.DiagnosticSeverity.Warning
    else:
        severity = types.DiagnosticSeverity.Error

    # Suggestion travels with the diagnostic so code actions can use it
    data = {"suggestion": d.suggestion} if d.suggestion else None

    return types.Diagnostic(
        range=diagnostic_range(d, source_lines),
        severity=severity,
        code=d.code,
        source="jklint",
        message=d.message,
        data=data,
    )
