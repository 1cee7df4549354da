"""Hover provider for showing keywords and declared types."""
from __future__ import annotations

import re
from typing import Optional
from lsprotocol import types

from frontend.classify import KEYWORD_SET
from runtime.declarations import DeclarationTable

_WORD_RE = re.compile(r"[A-Za-z_]\w*")


def word_at(line_text: str, character: int) -> Optional[re.Match]:
    """Identifier-shaped match covering the cursor position, if any."""
    for match in _WORD_RE.finditer(line_text):
        start, end = match.span()
        if start <= character < end:
            return match
    return None


def get_hover(
    declarations: DeclarationTable,
    source: str,
    line: int,
    character: int,
) -> Optional[types.Hover]:
    """Get hover information for the word at the given position.

    Args:
        declarations: Declaration table of the last analysis
        source: Full source code text
        line: Zero-indexed line number
        character: Zero-indexed character position in line

    Returns:
        Hover with the declared type or keyword marker, or None
    """
    lines = source.split("\n")
    if not (0 <= line < len(lines)):
        return None

    line_text = lines[line]
    if not (0 <= character <= len(line_text)):
        return None

    match = word_at(line_text, character)
    if match is None:
        return None
    word = match.group(0)

    hover_range = types.Range(
        start=types.Position(line=line, character=match.start()),
        end=types.Position(line=line, character=match.end())
    )

    if word in KEYWORD_SET:
        hover_text = f"(keyword) `{word}`"
    else:
        decl = declarations.get(word)
        if decl is None:
            return None
        hover_text = f"(variable) `{word}`: `{decl.type_label()}` (declared line {decl.line})"

    return types.Hover(
        contents=types.MarkupContent(
            kind=types.MarkupKind.Markdown,
            value=hover_text,
        ),
        range=hover_range
    )
