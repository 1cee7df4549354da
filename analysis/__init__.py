# Ethan Doughty
# analysis/__init__.py
"""Analysis package: two-pass lexical checks for Java/Kotlin sources."""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Union

from analysis.detect import detect_diagnostics
from analysis.diagnostics import Diagnostic, DiagnosticKind, DiagnosticSummary, summarize
from analysis.kotlin_decls import capture_kotlin_declarations
from frontend.lexer import Scanner
from frontend.pipeline import SourceReadError, read_source
from runtime.context import AnalysisContext

logger = logging.getLogger(__name__)


def analyze_source(src: str, ctx: Optional[AnalysisContext] = None) -> AnalysisContext:
    """Run both passes over an in-memory source.

    Two-pass analysis:
    1. Scan tokens, comments and Java-style declarations, then capture
       Kotlin var/val declarations (type-checking annotated initializers)
    2. Walk the scan-ordered tokens and emit diagnostics

    Args:
        src: Source code string
        ctx: Analysis context (created if not provided, reset if provided)

    Returns:
        The context holding tokens, comments, declarations and diagnostics
    """
    if ctx is None:
        ctx = AnalysisContext()
    ctx.reset()

    # Pass 1: scan + declaration capture
    tokens = Scanner(src, ctx).scan()
    capture_kotlin_declarations(tokens, ctx)

    # Pass 2: diagnostics
    detect_diagnostics(tokens, ctx)

    logger.debug(
        "%s: %d tokens, %d comments, %d declarations, %d diagnostics",
        ctx.source_name, len(ctx.tokens), len(ctx.comments),
        len(ctx.declarations), len(ctx.diagnostics),
    )
    dropped = ctx.truncation()
    if dropped:
        logger.warning("%s: capacity reached, dropped %s", ctx.source_name, dropped)
    return ctx


def analyze_file(path: Union[str, Path], ctx: Optional[AnalysisContext] = None) -> AnalysisContext:
    """Read and analyze one source file.

    Args:
        path: File to analyze
        ctx: Analysis context (created if not provided, reset if provided)

    Returns:
        The populated context

    Raises:
        SourceReadError: if the file cannot be read (no partial results)
    """
    src = read_source(path)
    if ctx is None:
        ctx = AnalysisContext()
    ctx.source_name = str(path)
    return analyze_source(src, ctx)


__all__ = [
    "AnalysisContext",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticSummary",
    "SourceReadError",
    "analyze_file",
    "analyze_source",
    "summarize",
]
