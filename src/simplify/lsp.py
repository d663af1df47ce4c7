"""elm-simplify language server: pygls-based LSP for .elm files.

Publishes simplification diagnostics whenever a document opens or
changes. Each diagnostic gets a quick fix that applies all of its edits
at once, and a fix-all source action applies every compatible fix in the
file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from lsprotocol import types as lsp
from pygls.lsp.server import LanguageServer

from simplify import __version__
from simplify.errors import Diagnostic, Severity, SourceError
from simplify.fix import Edit, replacement_text
from simplify.simplifier import compatible_fixes, simplify_source
from simplify.source import Range, SourceFile

logger = logging.getLogger(__name__)

SOURCE = "simplify"

_SEVERITY_MAP = {
    Severity.ERROR: lsp.DiagnosticSeverity.Error,
    Severity.WARNING: lsp.DiagnosticSeverity.Warning,
    Severity.NOTE: lsp.DiagnosticSeverity.Information,
}


def _utf16_offset(line: str, column: int) -> int:
    """UTF-16 code units before the 1-indexed code point ``column`` of ``line``."""
    prefix = line[:column - 1]
    astral = sum(1 for ch in prefix if ord(ch) > 0xFFFF)
    return column - 1 + astral


def range_to_lsp(rng: Range, source: SourceFile | None = None) -> lsp.Range:
    """Convert a 1-indexed, end-exclusive Range to a 0-indexed LSP Range.

    Columns count code points. LSP counts UTF-16 code units by default, so
    with the document text at hand astral characters count twice.
    """

    def point(row: int, column: int) -> lsp.Position:
        if source is None:
            return lsp.Position(line=row - 1, character=column - 1)
        return lsp.Position(line=row - 1, character=_utf16_offset(source.line_at(row), column))

    return lsp.Range(
        start=point(rng.start.row, rng.start.column),
        end=point(rng.end.row, rng.end.column),
    )


def to_lsp_diagnostic(diag: Diagnostic, source: SourceFile | None = None) -> lsp.Diagnostic:
    return lsp.Diagnostic(
        range=range_to_lsp(diag.range, source),
        severity=_SEVERITY_MAP[diag.severity],
        source=SOURCE,
        message="\n\n".join([diag.message, *diag.details]),
    )


def to_text_edit(edit: Edit, source: SourceFile | None = None) -> lsp.TextEdit:
    return lsp.TextEdit(range=range_to_lsp(edit.range, source), new_text=replacement_text(edit))


def to_code_action(uri: str, diag: Diagnostic, source: SourceFile | None = None) -> lsp.CodeAction:
    """A quick fix applying every edit of ``diag`` as one workspace edit."""
    return lsp.CodeAction(
        title=f"Fix: {diag.message}",
        kind=lsp.CodeActionKind.QuickFix,
        diagnostics=[to_lsp_diagnostic(diag, source)],
        is_preferred=True,
        edit=lsp.WorkspaceEdit(changes={uri: [to_text_edit(e, source) for e in diag.fixes]}),
    )


def _touches(first: lsp.Range, second: lsp.Range) -> bool:
    """Inclusive overlap, so a cursor at either end of a diagnostic still counts."""
    start = max((first.start.line, first.start.character), (second.start.line, second.start.character))
    end = min((first.end.line, first.end.character), (second.end.line, second.end.character))
    return start <= end


@dataclass
class DocumentState:
    """Analysis results for one open document, at one version."""

    version: int | None = None
    text: SourceFile | None = None
    simplifications: list[Diagnostic] = field(default_factory=list)
    diagnostics: list[lsp.Diagnostic] = field(default_factory=list)


class DocumentStore:
    """Latest analysis per document URI."""

    def __init__(self) -> None:
        self._documents: dict[str, DocumentState] = {}

    def analyze(self, uri: str, source: str, version: int | None = None) -> DocumentState:
        text = SourceFile(source, uri)
        state = DocumentState(version=version, text=text)
        try:
            _, state.simplifications = simplify_source(source, uri)
        except SourceError as e:
            logger.debug("%s does not parse: %s", uri, e)
            state.diagnostics = [to_lsp_diagnostic(d, text) for d in e.diagnostics]
        else:
            state.diagnostics = [to_lsp_diagnostic(d, text) for d in state.simplifications]
        self._documents[uri] = state
        return state

    def get(self, uri: str) -> DocumentState | None:
        return self._documents.get(uri)

    def forget(self, uri: str) -> None:
        self._documents.pop(uri, None)

    def quick_fixes(self, uri: str, requested: lsp.Range) -> list[lsp.CodeAction]:
        state = self._documents.get(uri)
        if state is None:
            return []
        return [
            to_code_action(uri, diag, state.text)
            for diag in state.simplifications
            if diag.fixes and _touches(range_to_lsp(diag.range, state.text), requested)
        ]

    def fix_all(self, uri: str) -> lsp.CodeAction | None:
        """One source action with every fix that can be applied together."""
        state = self._documents.get(uri)
        if state is None:
            return None
        edits = compatible_fixes(state.simplifications)
        if not edits:
            return None
        return lsp.CodeAction(
            title="Apply all simplifications",
            kind=lsp.CodeActionKind.SourceFixAll,
            edit=lsp.WorkspaceEdit(changes={uri: [to_text_edit(e, state.text) for e in edits]}),
        )


documents = DocumentStore()
server = LanguageServer(
    "simplify-lsp", __version__,
    text_document_sync_kind=lsp.TextDocumentSyncKind.Incremental,
)


def _refresh(uri: str) -> None:
    """Re-analyse the workspace copy of ``uri`` and publish the result."""
    document = server.workspace.get_text_document(uri)
    state = documents.analyze(uri, document.source, document.version)
    server.text_document_publish_diagnostics(
        lsp.PublishDiagnosticsParams(uri=uri, version=state.version, diagnostics=state.diagnostics)
    )


@server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
def did_open(params: lsp.DidOpenTextDocumentParams) -> None:
    _refresh(params.text_document.uri)


@server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: lsp.DidChangeTextDocumentParams) -> None:
    _refresh(params.text_document.uri)


@server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: lsp.DidCloseTextDocumentParams) -> None:
    uri = params.text_document.uri
    documents.forget(uri)
    server.text_document_publish_diagnostics(lsp.PublishDiagnosticsParams(uri=uri, diagnostics=[]))


@server.feature(
    lsp.TEXT_DOCUMENT_CODE_ACTION,
    lsp.CodeActionOptions(
        code_action_kinds=[lsp.CodeActionKind.QuickFix, lsp.CodeActionKind.SourceFixAll],
    ),
)
def code_action(params: lsp.CodeActionParams) -> list[lsp.CodeAction] | None:
    uri = params.text_document.uri
    wanted = params.context.only
    actions: list[lsp.CodeAction] = []
    if not wanted or lsp.CodeActionKind.QuickFix in wanted:
        actions.extend(documents.quick_fixes(uri, params.range))
    if not wanted or lsp.CodeActionKind.SourceFixAll in wanted:
        fix_all = documents.fix_all(uri)
        if fix_all is not None:
            actions.append(fix_all)
    return actions or None


def main() -> None:
    """Start the elm-simplify language server on stdio."""
    server.start_io()
