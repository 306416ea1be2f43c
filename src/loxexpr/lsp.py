"""Minimal LSP server for Lox expressions, diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from loxexpr import __version__
from loxexpr.errors import EvalError, LexError, LoxError, ParseError
from loxexpr.eval import evaluate
from loxexpr.lexer import scan
from loxexpr.parser import parse

server = LanguageServer(
    "loxexpr-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _diagnostic(exc: LoxError, severity: DiagnosticSeverity) -> Diagnostic:
    line = exc.position.line - 1
    col = exc.position.column - 1
    message = exc.message
    if exc.help:
        message += f" (help: {exc.help})"
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=col),
            end=Position(line=line, character=col + 1),
        ),
        message=message,
        severity=severity,
        source="loxexpr",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Run the scan/parse/evaluate pipeline and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    diagnostics: list[Diagnostic] = []

    # Blank documents are not an error while the user is still typing
    if source.strip():
        try:
            expr = parse(scan(source))
        except (LexError, ParseError) as exc:
            diagnostics.append(_diagnostic(exc, DiagnosticSeverity.Error))
        else:
            try:
                evaluate(expr)
            except EvalError as exc:
                diagnostics.append(_diagnostic(exc, DiagnosticSeverity.Warning))

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
