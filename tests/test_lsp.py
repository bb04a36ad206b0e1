"""Tests for the LSP server: diagnostics, hover, and position mapping."""

from __future__ import annotations

import pytest
from lsprotocol.types import (
    DiagnosticSeverity,
    DidOpenTextDocumentParams,
    HoverParams,
    MarkupKind,
    Position,
    PublishDiagnosticsParams,
    TextDocumentIdentifier,
    TextDocumentItem,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import Workspace

from litdecode.lsp import _hover_for, _offset_at, _position_at, _validate, did_open, hover

URI = "file:///test.rs"


@pytest.fixture
def lsp_env():
    """Create a LanguageServer with an initialized workspace and captured diagnostics."""
    ls = LanguageServer("test", "v0", text_document_sync_kind=TextDocumentSyncKind.Full)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    published: list[PublishDiagnosticsParams] = []
    ls.text_document_publish_diagnostics = lambda params: published.append(params)

    def put(source: str, uri: str = URI) -> None:
        ws.put_text_document(TextDocumentItem(uri=uri, language_id="rust", version=0, text=source))

    return ls, published, put


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


class TestDiagnostics:
    def test_malformed_escape(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put('let s = "ok";\nlet t = "bad \\q";')
        _validate(ls, URI)

        assert len(published) == 1
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Error
        assert "\\q" in d.message
        assert d.source == "litdecode"
        assert d.range.start.line == 1
        assert d.range.start.character == 13
        assert d.range.end.character == 14

    def test_clean_document(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("let x = 0xFFu8 + 1.5e2; // note\n/// docs\nfn f() -> char { 'c' }")
        _validate(ls, URI)

        assert len(published) == 1
        assert published[0].diagnostics == []

    def test_several_errors(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("let a = '\\x80';\nlet b = b\"\\u{41}\";")
        _validate(ls, URI)

        diags = published[0].diagnostics
        assert [d.range.start.line for d in diags] == [0, 1]
        assert "out of range hex escape" in diags[0].message
        assert "unicode escape in byte literal" in diags[1].message

    def test_out_of_range_integer_not_flagged(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("let x = 256u8;")
        _validate(ls, URI)
        assert published[0].diagnostics == []

    def test_did_open_publishes(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put('"\\q"')
        item = TextDocumentItem(uri=URI, language_id="rust", version=0, text='"\\q"')
        did_open(ls, DidOpenTextDocumentParams(text_document=item))
        assert len(published[0].diagnostics) == 1


# ---------------------------------------------------------------------------
# Hover
# ---------------------------------------------------------------------------


class TestHover:
    def test_integer(self) -> None:
        result = _hover_for("let x = 0xFFu8;", 9)
        assert result.contents.kind == MarkupKind.Markdown
        assert result.contents.value == "**int**\n\n```\n255 (u8)\n```"
        assert result.range.start == Position(line=0, character=8)
        assert result.range.end == Position(line=0, character=14)

    def test_string(self) -> None:
        result = _hover_for('f("a\\tb")', 3)
        assert "'a\\tb'" in result.contents.value

    def test_doc_comment(self) -> None:
        result = _hover_for("//! crate docs\nfn f() {}", 0)
        assert result.contents.value.startswith("**inner-doc**")

    def test_malformed(self) -> None:
        result = _hover_for('"\\q"', 1)
        assert result.contents.value.startswith("**malformed str literal**")

    def test_plain_comment(self) -> None:
        assert _hover_for("// note", 3) is None

    def test_no_literal(self) -> None:
        assert _hover_for("let x = y;", 4) is None

    def test_feature_handler(self, lsp_env) -> None:
        ls, _, put = lsp_env
        put("let c = 'z';")
        params = HoverParams(
            text_document=TextDocumentIdentifier(uri=URI),
            position=Position(line=0, character=9),
        )
        result = hover(ls, params)
        assert result.contents.value == "**char**\n\n```\n'z'\n```"


# ---------------------------------------------------------------------------
# Position mapping
# ---------------------------------------------------------------------------


class TestPositions:
    def test_offset_on_later_line(self) -> None:
        assert _offset_at("ab\ncd", Position(line=1, character=1)) == 4

    def test_offset_past_end(self) -> None:
        assert _offset_at("ab\ncd", Position(line=5, character=0)) == 5

    def test_offset_clamped_to_line(self) -> None:
        assert _offset_at("ab\ncd", Position(line=0, character=10)) == 2

    def test_utf16_columns(self) -> None:
        source = "'" + chr(0x1F415) + "' 'a'"
        assert _offset_at(source, Position(line=0, character=4)) == 3
        assert _position_at(source, 3) == Position(line=0, character=4)

    def test_position_on_later_line(self) -> None:
        assert _position_at("ab\ncd", 4) == Position(line=1, character=1)
