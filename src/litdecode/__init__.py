"""Decode the lexemes of literal tokens into their values."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from litdecode.decoder import DecoderConfig, LiteralKind, Value

__version__ = "0.1.0"


def decode(
    lexeme: str,
    kind: LiteralKind | str,
    config: DecoderConfig | None = None,
) -> Value | None:
    """Decode *lexeme* as *kind* ("int", "float", "str", ...).

    Returns None if the lexeme is not a literal of that kind and raises
    DecodeError if it is one but its content is malformed.
    """
    from litdecode.decoder import LiteralDecoder, LiteralKind

    return LiteralDecoder(config).decode(lexeme, LiteralKind(kind))
