"""Code actions (quick fixes) for jklint diagnostics."""
from __future__ import annotations

from typing import List, Optional

from lsprotocol import types

from analysis.diagnostics import DiagnosticKind


def _suggestion(diagnostic: types.Diagnostic) -> Optional[str]:
    data = diagnostic.data
    if isinstance(data, dict):
        value = data.get("suggestion")
        if isinstance(value, str) and value:
            return value
    return None


def code_actions_for_diagnostic(
    diagnostic: types.Diagnostic,
    uri: str,
    source_lines: list[str],
) -> List[types.CodeAction]:
    """Generate code actions for a single diagnostic.

    Args:
        diagnostic: LSP diagnostic to generate fixes for
        uri: Document URI
        source_lines: Source code split into lines

    Returns:
        List of CodeAction quick fixes (may be empty)
    """
    actions: List[types.CodeAction] = []
    line_num = diagnostic.range.start.line

    if line_num < 0 or line_num >= len(source_lines):
        return actions

    if diagnostic.code == DiagnosticKind.MISSPELLED_KEYWORD.code:
        # Replace the misspelled word with the nearest keyword
        keyword = _suggestion(diagnostic)
        if keyword is None:
            return actions

        line_text = source_lines[line_num]
        start = diagnostic.range.start.character
        end = diagnostic.range.end.character
        if line_text[start:end] == keyword:
            return actions

        edit = types.WorkspaceEdit(
            changes={
                uri: [
                    types.TextEdit(
                        range=diagnostic.range,
                        new_text=keyword,
                    )
                ]
            }
        )
        actions.append(
            types.CodeAction(
                title=f"Replace with '{keyword}'",
                kind=types.CodeActionKind.QuickFix,
                diagnostics=[diagnostic],
                edit=edit,
                is_preferred=True,
            )
        )

    return actions
