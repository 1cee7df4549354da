"""Document symbol provider for outline view."""
from __future__ import annotations
import re
from lsprotocol import types
from runtime.declarations import DeclarationTable


def get_document_symbols(declarations: DeclarationTable, source_lines: list[str]) -> list[types.DocumentSymbol]:
    """One Variable symbol per recorded declaration.

    Args:
        declarations: Declaration table of the last analysis
        source_lines: Source code lines (for computing ranges)

    Returns:
        List of DocumentSymbol entries in declaration order
    """
    symbols: list[types.DocumentSymbol] = []

    for decl in declarations:
        line_num = decl.line - 1
        line_text = source_lines[line_num] if 0 <= line_num < len(source_lines) else ""

        # Selection range: the name itself when it can be found on its line
        m = re.search(rf"\b{re.escape(decl.name)}\b", line_text)
        if m:
            start, end = m.span()
        else:
            start, end = 0, len(line_text)

        full_range = types.Range(
            start=types.Position(line=max(line_num, 0), character=0),
            end=types.Position(line=max(line_num, 0), character=len(line_text))
        )
        selection_range = types.Range(
            start=types.Position(line=max(line_num, 0), character=start),
            end=types.Position(line=max(line_num, 0), character=end)
        )

        symbols.append(types.DocumentSymbol(
            name=decl.name,
            kind=types.SymbolKind.Variable,
            range=full_range,
            selection_range=selection_range,
            detail=decl.type_label()
        ))

    return symbols
