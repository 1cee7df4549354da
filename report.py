# Ethan Doughty
# report.py
"""Text report for one analysis run: symbol table, comments, error report.

Everything here only formats what the analysis produced; nothing feeds back
into it. Tokens are shown in presentation order (line, then lexeme) unless
scan order is requested.
"""

from typing import Iterable, List

from analysis.diagnostics import Diagnostic, DiagnosticKind, summarize
from frontend.tokens import Comment, Token, TokenClass, presentation_order
from runtime.context import AnalysisContext

# Pastel 256-color ANSI palette
COL_RESET = "\033[0m"
PASTEL_IDENT = "\033[38;5;120m"      # soft green
PASTEL_NUMBER = "\033[38;5;159m"     # soft cyan
PASTEL_OPERATOR = "\033[38;5;228m"   # soft yellow
PASTEL_KEYWORD = "\033[38;5;170m"    # soft magenta
PASTEL_SEP = "\033[38;5;246m"        # soft gray
PASTEL_STRING = "\033[38;5;215m"     # soft peach
PASTEL_CHAR = "\033[38;5;180m"       # soft purple
PASTEL_NS = "\033[38;5;244m"         # slate
PASTEL_COMMENT = "\033[38;5;153m"    # soft blue
PASTEL_ERROR1 = "\033[38;5;203m"     # soft red
PASTEL_ERROR2 = "\033[38;5;208m"     # soft orange
PASTEL_HDR = "\033[48;5;236m\033[38;5;225m"

TOKEN_COLORS = {
    TokenClass.KEYWORD: PASTEL_KEYWORD,
    TokenClass.IDENTIFIER: PASTEL_IDENT,
    TokenClass.NUMBER: PASTEL_NUMBER,
    TokenClass.OPERATOR: PASTEL_OPERATOR,
    TokenClass.SEPARATOR: PASTEL_SEP,
    TokenClass.STRING: PASTEL_STRING,
    TokenClass.CHAR: PASTEL_CHAR,
    TokenClass.NAMESPACE: PASTEL_NS,
}

TOKEN_WIDTH = 40
ATTR_WIDTH = 18
LINE_WIDTH = 6
COMMENT_WIDTH = 65
ERROR_WIDTH = 70
MESSAGE_WIDTH = 60


class Painter:
    """Wraps text in ANSI codes, or passes it through when color is off."""

    def __init__(self, color: bool = False):
        self.color = color

    def __call__(self, text: str, code: str) -> str:
        if not self.color:
            return text
        return f"{code}{text}{COL_RESET}"


def _rule(width: int) -> str:
    return "-" * width


def _header(title_cells: str, width: int, paint: Painter) -> List[str]:
    return [paint(_rule(width), PASTEL_HDR), paint(title_cells, PASTEL_HDR), paint(_rule(width), PASTEL_HDR)]


def format_token_table(tokens: Iterable[Token], paint: Painter, scan_order: bool = False) -> str:
    """Symbol table box: TOKEN | ATTRIBUTE | LINE."""
    total = TOKEN_WIDTH + ATTR_WIDTH + LINE_WIDTH + 6
    rows = list(tokens) if scan_order else presentation_order(tokens)

    out = _header(
        f"| {'TOKEN':<{TOKEN_WIDTH}} | {'ATTRIBUTE':<{ATTR_WIDTH}} | {'LINE':<{LINE_WIDTH}} |",
        total, paint,
    )
    for tok in rows:
        code = TOKEN_COLORS.get(tok.kind, COL_RESET)
        shown = tok.lexeme.replace("\n", " ")[:TOKEN_WIDTH - 1].ljust(TOKEN_WIDTH)
        attr = tok.kind.value.ljust(ATTR_WIDTH)
        line = str(tok.line).rjust(LINE_WIDTH - 1)
        out.append(f"| {paint(shown, code)} | {paint(attr, code)} | {line} |")
    out.append(_rule(total))
    return "\n".join(out)


def format_comments(comments: Iterable[Comment], paint: Painter) -> str:
    """Comment box; block comments keep their line breaks."""
    comments = list(comments)
    out = _header(f"| {'COMMENTS':<{COMMENT_WIDTH - 4}} |", COMMENT_WIDTH, paint)
    if not comments:
        out.append(f"| {paint('(no comments found)', PASTEL_COMMENT)}")
    for c in comments:
        for text in c.body.split("\n"):
            out.append(f"| {paint(text, PASTEL_COMMENT)}")
    out.append(_rule(COMMENT_WIDTH))
    return "\n".join(out)


def _error_color(d: Diagnostic) -> str:
    if d.kind is DiagnosticKind.MISSPELLED_KEYWORD:
        return PASTEL_ERROR2
    return PASTEL_ERROR1


def format_errors(diagnostics: Iterable[Diagnostic], paint: Painter) -> str:
    """Error report box followed by the per-kind summary line."""
    diagnostics = list(diagnostics)
    out = _header(f"| {'ERROR REPORT':<{ERROR_WIDTH - 4}} |", ERROR_WIDTH, paint)
    if not diagnostics:
        out.append(paint("No errors found.", PASTEL_IDENT))
        out.append(_rule(ERROR_WIDTH))
        return "\n".join(out)

    for d in diagnostics:
        text = f"{d.kind.label}: {d.message}".ljust(MESSAGE_WIDTH)
        out.append(f"| {paint(text, _error_color(d))} | {d.line:>3} |")
    out.append(_rule(ERROR_WIDTH))
    out.append(f"{paint('Summary:', PASTEL_IDENT)} {summarize(diagnostics)}")
    return "\n".join(out)


def format_truncation(ctx: AnalysisContext) -> str:
    """One line per store that hit its capacity, empty if none did."""
    return "\n".join(
        f"NOTE: {what} limit reached, {count} not recorded"
        for what, count in ctx.truncation().items()
    )


def format_report(ctx: AnalysisContext, color: bool = False, scan_order: bool = False,
                  show_tokens: bool = True) -> str:
    """Full report in the order symbol table, comments, errors.

    Args:
        ctx: Context of a finished analysis run
        color: Use the pastel ANSI palette
        scan_order: List tokens in scan order instead of (line, lexeme)
        show_tokens: Include the symbol table

    Returns:
        Report text
    """
    paint = Painter(color)
    sections = []
    if show_tokens:
        sections.append(format_token_table(ctx.tokens, paint, scan_order=scan_order))
    sections.append(format_comments(ctx.comments, paint))
    sections.append(format_errors(ctx.diagnostics, paint))
    notes = format_truncation(ctx)
    if notes:
        sections.append(notes)
    return "\n\n".join(sections)
