"""Minimal LSP server: hover shows decoded literal values, diagnostics flag malformed ones."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_HOVER,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from litdecode import __version__
from litdecode.decoder import LiteralDecoder, Status
from litdecode.source import decode_auto, find_lexeme, iter_lexemes
from litdecode.values import describe

server = LanguageServer("litdecode-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)
decoder = LiteralDecoder()


def _utf16_len(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def _offset_at(source: str, position: Position) -> int:
    """Convert an LSP position (UTF-16 columns) to an offset into *source*."""
    lines = source.splitlines(keepends=True)
    if position.line >= len(lines):
        return len(source)
    offset = sum(len(line) for line in lines[: position.line])
    units = 0
    for ch in lines[position.line]:
        if units >= position.character or ch in "\r\n":
            break
        units += _utf16_len(ch)
        offset += 1
    return offset


def _position_at(source: str, offset: int) -> Position:
    """Convert an offset into *source* to an LSP position."""
    line = source.count("\n", 0, offset)
    line_start = source.rfind("\n", 0, offset) + 1
    return Position(line=line, character=_utf16_len(source[line_start:offset]))


def _hover_for(source: str, offset: int) -> Hover | None:
    """Build the hover for the literal at *offset*, if there is one."""
    match = find_lexeme(source, offset)
    if match is None:
        return None
    outcome = decode_auto(decoder, match.text)
    if outcome is None or outcome.status is Status.MISMATCH:
        return None

    if outcome.status is Status.MALFORMED:
        text = f"**malformed {outcome.kind.value} literal**: {outcome.error.message}"
    else:
        text = f"**{outcome.kind.value}**\n\n```\n{describe(outcome.value)}\n```"

    return Hover(
        contents=MarkupContent(kind=MarkupKind.Markdown, value=text),
        range=Range(
            start=_position_at(source, match.start),
            end=_position_at(source, match.end),
        ),
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Decode every literal in the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    diagnostics: list[Diagnostic] = []

    for match in iter_lexemes(source):
        outcome = decode_auto(decoder, match.text)
        if outcome is None or outcome.status is not Status.MALFORMED:
            continue
        exc = outcome.error
        start = match.start + exc.position.offset
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=_position_at(source, start),
                    end=_position_at(source, min(start + 1, match.end)),
                ),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="litdecode",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: LanguageServer, params: HoverParams) -> Hover | None:
    doc = ls.workspace.get_text_document(params.text_document.uri)
    return _hover_for(doc.source, _offset_at(doc.source, params.position))


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
