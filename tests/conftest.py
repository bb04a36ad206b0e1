"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from litdecode.decoder import DecoderConfig, LiteralDecoder, LiteralKind
from litdecode.escapes import decode_bytes, decode_text


@pytest.fixture
def decoder() -> LiteralDecoder:
    """A decoder with the default configuration."""
    return LiteralDecoder()


@pytest.fixture
def narrow_decoder() -> LiteralDecoder:
    """A decoder without 128-bit integer support."""
    return LiteralDecoder(DecoderConfig(wide_integers=False))


@pytest.fixture
def text():
    """Return a helper that decodes escaped content as a plain string body."""

    def _text(content: str) -> str:
        lexeme = f'"{content}"'
        return decode_text(lexeme, 1, len(lexeme) - 1, '"')

    return _text


@pytest.fixture
def data():
    """Return a helper that decodes escaped content as a byte string body."""

    def _data(content: str) -> bytes:
        lexeme = f'b"{content}"'
        return decode_bytes(lexeme, 2, len(lexeme) - 1, '"')

    return _data


@pytest.fixture
def only_kind(decoder):
    """Return a helper asserting a lexeme decodes as exactly one kind."""

    def _only_kind(lexeme: str, kind: LiteralKind):
        value = decoder.decode(lexeme, kind)
        assert value is not None, f"{lexeme!r} did not decode as {kind.value}"
        for other in LiteralKind:
            if other is not kind:
                assert decoder.decode(lexeme, other) is None, (
                    f"{lexeme!r} unexpectedly decoded as {other.value}"
                )
        return value

    return _only_kind
