"""Tests for the CLI module: arg parsing, exit codes, output formats, end-to-end."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from litdecode.cli import (
    CliOptions,
    build_parser,
    decode_lexeme,
    main,
    read_lexeme_file,
    resolve_options,
    to_json,
)
from litdecode.decoder import LiteralDecoder, LiteralKind, Status
from litdecode.source import decode_auto

# ---------------------------------------------------------------------------
# Arg parsing via build_parser
# ---------------------------------------------------------------------------


class TestArgParsing:
    def test_lexemes_only(self) -> None:
        ns = build_parser().parse_args(["0xFF", "'a'"])
        assert ns.lexemes == ["0xFF", "'a'"]
        assert ns.kind == "auto"
        assert ns.file == []
        assert ns.json is False
        assert ns.debug is False
        assert ns.verbose is False

    def test_kind(self) -> None:
        ns = build_parser().parse_args(["-k", "inner-doc", "//! x"])
        assert ns.kind == "inner-doc"

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["-k", "integer", "1"])

    def test_repeatable_file(self) -> None:
        ns = build_parser().parse_args(["-f", "a.txt", "--file", "b.txt"])
        assert ns.file == ["a.txt", "b.txt"]

    def test_widths(self) -> None:
        ns = build_parser().parse_args(["--pointer-width", "32", "--float-width", "32", "1"])
        assert ns.pointer_width == 32
        assert ns.float_width == 32

    def test_bad_pointer_width(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--pointer-width", "8", "1"])


# ---------------------------------------------------------------------------
# Option resolution
# ---------------------------------------------------------------------------


class TestResolveOptions:
    def test_defaults(self, tmp_path: Path) -> None:
        ns = build_parser().parse_args(["1"])
        opts = resolve_options(ns, tmp_path)
        assert isinstance(opts, CliOptions)
        assert opts.lexemes == ["1"]
        assert opts.kind is None
        assert opts.config.wide_integers is True

    def test_kind(self, tmp_path: Path) -> None:
        ns = build_parser().parse_args(["-k", "bytes", 'b"x"'])
        assert resolve_options(ns, tmp_path).kind is LiteralKind.BYTE_STRING

    def test_flags(self, tmp_path: Path) -> None:
        ns = build_parser().parse_args(
            ["--no-wide-integers", "--pointer-width", "16", "--float-width", "32", "1"]
        )
        config = resolve_options(ns, tmp_path).config
        assert config.wide_integers is False
        assert config.pointer_width == 16
        assert config.default_float_width == 32

    def test_file_lexemes_follow_positional(self, tmp_path: Path) -> None:
        src = tmp_path / "lit.txt"
        src.write_text('"from file"\n')
        ns = build_parser().parse_args(["1", "-f", str(src)])
        assert resolve_options(ns, tmp_path).lexemes == ["1", '"from file"']

    def test_no_lexemes(self, tmp_path: Path) -> None:
        import argparse

        ns = build_parser().parse_args([])
        with pytest.raises(argparse.ArgumentTypeError, match="no lexemes"):
            resolve_options(ns, tmp_path)


class TestReadLexemeFile:
    def test_strips_one_newline(self, tmp_path: Path) -> None:
        src = tmp_path / "lit.txt"
        src.write_bytes(b'"a\n"\n\n')
        assert read_lexeme_file(src) == '"a\n"\n'

    def test_strips_crlf(self, tmp_path: Path) -> None:
        src = tmp_path / "lit.txt"
        src.write_bytes(b"42\r\n")
        assert read_lexeme_file(src) == "42"

    def test_keeps_multiline_content(self, tmp_path: Path) -> None:
        src = tmp_path / "lit.txt"
        src.write_text('r#"one\ntwo"#')
        assert read_lexeme_file(src) == 'r#"one\ntwo"#'


# ---------------------------------------------------------------------------
# Single lexeme decoding
# ---------------------------------------------------------------------------


class TestDecodeLexeme:
    def test_auto_classifies(self) -> None:
        outcome = decode_lexeme(LiteralDecoder(), "b'z'", None)
        assert outcome.kind is LiteralKind.BYTE
        assert outcome.value == 0x7A

    def test_auto_unclassified(self) -> None:
        assert decode_lexeme(LiteralDecoder(), "ident", None) is None

    def test_requested_kind_mismatch(self) -> None:
        outcome = decode_lexeme(LiteralDecoder(), "42", LiteralKind.STRING)
        assert outcome.status is Status.MISMATCH


# ---------------------------------------------------------------------------
# JSON rendering
# ---------------------------------------------------------------------------


class TestToJson:
    def test_integer(self) -> None:
        outcome = decode_auto(LiteralDecoder(), "0xFFu8")
        record = json.loads(to_json("0xFFu8", outcome))
        assert record == {
            "lexeme": "0xFFu8",
            "kind": "int",
            "status": "ok",
            "value": {"magnitude": 255, "type": "u8"},
        }

    def test_float(self) -> None:
        outcome = decode_auto(LiteralDecoder(), "1.5f32")
        record = json.loads(to_json("1.5f32", outcome))
        assert record["value"] == {"value": 1.5, "type": "f32"}

    def test_bytes(self) -> None:
        outcome = decode_auto(LiteralDecoder(), 'b"AB"')
        assert json.loads(to_json('b"AB"', outcome))["value"] == [65, 66]

    def test_malformed(self) -> None:
        outcome = decode_auto(LiteralDecoder(), r'"\q"')
        record = json.loads(to_json(r'"\q"', outcome))
        assert record["status"] == "malformed"
        assert "unknown character escape" in record["error"]
        assert "value" not in record

    def test_unclassified(self) -> None:
        record = json.loads(to_json("abc", None))
        assert record == {"lexeme": "abc", "kind": None, "status": "unclassified"}


# ---------------------------------------------------------------------------
# End-to-end via main()
# ---------------------------------------------------------------------------


class TestMain:
    @pytest.fixture(autouse=True)
    def _isolated(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)

    def test_integer(self, capsys) -> None:
        assert main(["0xFFu8"]) == 0
        assert capsys.readouterr().out == "int: 255 (u8)\n"

    def test_unsuffixed_integer_type(self, capsys) -> None:
        assert main(["42"]) == 0
        assert capsys.readouterr().out == "int: 42 (isize)\n"

    def test_several_lexemes(self, capsys) -> None:
        assert main(["1.5e2", r'"a\tb"', "b'a'", "/// docs"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == [
            "float: 150.0 (f64)",
            "str: 'a\\tb'",
            "byte: 97 (b'a')",
            "outer-doc: 'docs'",
        ]

    def test_malformed_exit_code(self, capsys) -> None:
        assert main([r'"bad \q"']) == 1
        err = capsys.readouterr().err
        assert "error: unknown character escape '\\q'" in err
        assert "^^" in err

    def test_mismatch_exit_code(self, capsys) -> None:
        assert main(["-k", "char", "'ab'"]) == 2
        assert "is not a char literal" in capsys.readouterr().err

    def test_out_of_range_exit_code(self, capsys) -> None:
        assert main(["256u8"]) == 2
        assert "is not a int literal" in capsys.readouterr().err

    def test_unclassified_exit_code(self, capsys) -> None:
        assert main(["abc"]) == 2
        assert "cannot classify literal 'abc'" in capsys.readouterr().err

    def test_malformed_wins_over_mismatch(self) -> None:
        assert main(["abc", r'"\q"', "1"]) == 1

    def test_no_lexemes(self, capsys) -> None:
        assert main([]) == 2
        assert "no lexemes given" in capsys.readouterr().err

    def test_missing_file(self, capsys) -> None:
        assert main(["-f", "missing.txt"]) == 2
        assert capsys.readouterr().err.startswith("error:")

    def test_explicit_kind(self, capsys) -> None:
        assert main(["--kind", "inner-doc", "//! crate docs"]) == 0
        assert capsys.readouterr().out == "inner-doc: 'crate docs'\n"

    def test_no_wide_integers(self, capsys) -> None:
        assert main(["--no-wide-integers", "1u128"]) == 2

    def test_float_width(self, capsys) -> None:
        assert main(["--float-width", "32", "1.5"]) == 0
        assert capsys.readouterr().out == "float: 1.5 (f32)\n"

    def test_json(self, capsys) -> None:
        assert main(["--json", "7u8", "abc"]) == 2
        lines = capsys.readouterr().out.splitlines()
        assert json.loads(lines[0])["value"] == {"magnitude": 7, "type": "u8"}
        assert json.loads(lines[1])["status"] == "unclassified"

    def test_file_input(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "lit.txt"
        src.write_text('"line one\nline two"\n')
        assert main(["-f", str(src)]) == 0
        assert capsys.readouterr().out == "str: 'line one\\nline two'\n"

    def test_debug(self, capsys) -> None:
        assert main(["--debug", "0xFFu8"]) == 0
        err = capsys.readouterr().err
        assert "Lexeme '0xFFu8'" in err
        assert "Numeric radix=16" in err
        assert "IntegerValue 255 unsigned width=8 type=u8" in err
