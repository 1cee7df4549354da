"""LSP server for the jklint Java/Kotlin analyzer."""
from __future__ import annotations

import asyncio
import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Dict, Optional

from pygls.lsp.server import LanguageServer
from lsprotocol import types

from analysis import analyze_source
from runtime.context import AnalysisContext, DEFAULT_MAX_DIAGNOSTICS
from lsp.diagnostics import to_lsp_diagnostic
from lsp.hover import get_hover
from lsp.code_actions import code_actions_for_diagnostic
from lsp.symbols import get_document_symbols

logger = logging.getLogger(__name__)


@dataclass
class AnalysisCache:
    """Cache for last analysis results per document."""

    ctx: AnalysisContext
    source_hash: str
    settings_hash: str  # Hash of settings used during analysis


# Global cache: URI -> AnalysisCache
analysis_cache: Dict[str, AnalysisCache] = {}

# Debouncing: URI -> asyncio.Task
debounce_tasks: Dict[str, asyncio.Task] = {}

# Server settings (updated via workspace/didChangeConfiguration or initializationOptions)
server_settings: Dict[str, object] = {
    "analyze_on_change": False,
    "max_diagnostics": DEFAULT_MAX_DIAGNOSTICS,
}

# Create server instance
server = LanguageServer(
    "jklint", "v1.0", text_document_sync_kind=types.TextDocumentSyncKind.Full
)


def _compute_hash(source: str) -> str:
    """Compute hash of source text for cache validation."""
    return hashlib.sha256(source.encode("utf-8")).hexdigest()


def _compute_settings_hash() -> str:
    """Compute hash of current server settings for cache validation."""
    settings_str = f"{server_settings['max_diagnostics']}"
    return hashlib.sha256(settings_str.encode("utf-8")).hexdigest()


def apply_settings(options: object) -> None:
    """Update server_settings from a client options dict (camelCase keys)."""
    if not isinstance(options, dict):
        return
    if "analyzeOnChange" in options:
        server_settings["analyze_on_change"] = bool(options["analyzeOnChange"])
    if "maxDiagnostics" in options:
        try:
            value = int(options["maxDiagnostics"])
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid maxDiagnostics: %r", options["maxDiagnostics"])
        else:
            if value >= 0:
                server_settings["max_diagnostics"] = value


def analyze_document(uri: str, source: str, force: bool = False) -> AnalysisContext:
    """Analyze a document, reusing the cached run when source and settings match.

    Args:
        uri: Document URI
        source: Document source text
        force: If True, bypass cache and force re-analysis

    Returns:
        Context of the (possibly cached) analysis run
    """
    source_hash = _compute_hash(source)
    settings_hash = _compute_settings_hash()

    if not force and uri in analysis_cache:
        cached = analysis_cache[uri]
        if cached.source_hash == source_hash and cached.settings_hash == settings_hash:
            logger.info("Cache hit for %s (source unchanged)", uri)
            return cached.ctx

    ctx = AnalysisContext(
        max_diagnostics=int(server_settings["max_diagnostics"]),
        source_name=uri,
    )
    analyze_source(source, ctx)
    analysis_cache[uri] = AnalysisCache(
        ctx=ctx,
        source_hash=source_hash,
        settings_hash=settings_hash,
    )
    return ctx


def _publish_error(ls: LanguageServer, uri: str, message: str) -> None:
    error_diagnostic = types.Diagnostic(
        range=types.Range(
            start=types.Position(line=0, character=0),
            end=types.Position(line=0, character=0),
        ),
        severity=types.DiagnosticSeverity.Error,
        source="jklint",
        message=message,
    )
    ls.text_document_publish_diagnostics(
        types.PublishDiagnosticsParams(uri=uri, diagnostics=[error_diagnostic])
    )


def _validate(ls: LanguageServer, uri: str, source: str, force: bool = False) -> None:
    """Analyze Java/Kotlin source and publish diagnostics.

    Args:
        ls: Language server instance
        uri: Document URI
        source: Document source text
        force: If True, bypass cache and force re-analysis
    """
    start_time = time.time()
    logger.info("Analyzing %s", uri)
    source_lines = source.split("\n")

    try:
        ctx = analyze_document(uri, source, force=force)
        lsp_diagnostics = [to_lsp_diagnostic(d, source_lines) for d in ctx.diagnostics]
        ls.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(uri=uri, diagnostics=lsp_diagnostics)
        )
        elapsed = time.time() - start_time
        logger.info("Analysis complete: %s (%.3fs, %d diagnostics)", uri, elapsed, len(lsp_diagnostics))
        if ctx.truncated:
            logger.warning("Analysis of %s hit capacity limits: %s", uri, ctx.truncation())

    except Exception as e:
        # Internal error: analyzer bug
        _publish_error(ls, uri, f"Internal error: {str(e)}")
        logger.error("Analysis failed for %s: %s", uri, e, exc_info=True)


@server.feature(types.INITIALIZE)
def initialize(ls: LanguageServer, params: types.InitializeParams):
    """Handle initialize request: apply initialization options."""
    logger.info("Server initialized")
    apply_settings(params.initialization_options)


@server.feature(types.TEXT_DOCUMENT_DID_OPEN)
async def did_open(ls: LanguageServer, params: types.DidOpenTextDocumentParams):
    """Handle document open: analyze immediately."""
    _validate(ls, params.text_document.uri, params.text_document.text)


@server.feature(types.TEXT_DOCUMENT_DID_SAVE)
async def did_save(ls: LanguageServer, params: types.DidSaveTextDocumentParams):
    """Handle document save: analyze immediately (no debounce)."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    _validate(ls, params.text_document.uri, doc.source)


@server.feature(types.TEXT_DOCUMENT_DID_CHANGE)
async def did_change(ls: LanguageServer, params: types.DidChangeTextDocumentParams):
    """Handle document change: debounce analysis by 500ms (if enabled)."""
    if not server_settings["analyze_on_change"]:
        return

    uri = params.text_document.uri

    # Cancel existing debounce task if any
    if uri in debounce_tasks:
        debounce_tasks[uri].cancel()

    async def debounced_validate():
        """Wait 500ms then validate."""
        await asyncio.sleep(0.5)
        doc = ls.workspace.get_text_document(uri)
        _validate(ls, uri, doc.source)
        # Clean up task reference
        if uri in debounce_tasks:
            del debounce_tasks[uri]

    # Schedule new debounced validation
    task = asyncio.create_task(debounced_validate())
    debounce_tasks[uri] = task


@server.feature(types.TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: LanguageServer, params: types.DidCloseTextDocumentParams):
    """Handle document close: drop cached results and clear diagnostics."""
    uri = params.text_document.uri
    analysis_cache.pop(uri, None)
    task = debounce_tasks.pop(uri, None)
    if task is not None:
        task.cancel()
    ls.text_document_publish_diagnostics(
        types.PublishDiagnosticsParams(uri=uri, diagnostics=[])
    )


@server.feature(types.TEXT_DOCUMENT_HOVER)
def hover(ls: LanguageServer, params: types.HoverParams) -> Optional[types.Hover]:
    """Handle hover request: show declared type or keyword at cursor."""
    uri = params.text_document.uri

    # Check if we have analysis results cached
    if uri not in analysis_cache:
        return None

    doc = ls.workspace.get_text_document(uri)
    cached = analysis_cache[uri]

    return get_hover(
        cached.ctx.declarations,
        doc.source,
        params.position.line,
        params.position.character,
    )


@server.feature(
    types.TEXT_DOCUMENT_CODE_ACTION,
    types.CodeActionOptions(code_action_kinds=[types.CodeActionKind.QuickFix]),
)
def code_action(
    ls: LanguageServer, params: types.CodeActionParams
) -> Optional[list[types.CodeAction]]:
    """Handle code action request: return quick fixes for diagnostics."""
    uri = params.text_document.uri
    try:
        doc = ls.workspace.get_text_document(uri)
    except Exception:
        logger.debug("No open document for %s", uri, exc_info=True)
        return None

    source_lines = doc.source.split("\n")
    actions: list[types.CodeAction] = []

    for diagnostic in params.context.diagnostics:
        actions.extend(code_actions_for_diagnostic(diagnostic, uri, source_lines))

    return actions if actions else None


@server.feature(types.TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbol(
    ls: LanguageServer, params: types.DocumentSymbolParams
) -> Optional[list[types.DocumentSymbol]]:
    """Handle document symbol request: return declarations for outline view."""
    uri = params.text_document.uri

    if uri not in analysis_cache:
        return None

    doc = ls.workspace.get_text_document(uri)
    source_lines = doc.source.split("\n")
    symbols = get_document_symbols(analysis_cache[uri].ctx.declarations, source_lines)
    return symbols if symbols else None


@server.feature(types.WORKSPACE_DID_CHANGE_CONFIGURATION)
def did_change_configuration(
    ls: LanguageServer, params: types.DidChangeConfigurationParams
):
    """Handle configuration changes from the client."""
    settings = getattr(params, "settings", None)
    if settings and isinstance(settings, dict):
        apply_settings(settings.get("jklint", {}))

    # Re-analyze all open documents with new settings
    for uri in list(analysis_cache.keys()):
        try:
            doc = ls.workspace.get_text_document(uri)
        except Exception:
            logger.debug("Skipping re-analysis of closed document %s", uri, exc_info=True)
            continue
        _validate(ls, uri, doc.source)
