"""Literal decoder facade: one entry point per requested interpretation.

Each ``as_*`` method returns the decoded value, or None when the lexeme is
not a literal of that kind (or its value is out of range). A literal that
is of the requested kind but has malformed content raises DecodeError.
``outcome()`` folds those three results into a single Outcome value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from litdecode.docs import inner_doc, outer_doc
from litdecode.errors import DecodeError
from litdecode.floats import float_lit
from litdecode.integers import int_lit
from litdecode.quoted import byte_lit, byte_str_lit, char_lit, str_lit
from litdecode.tokens import LiteralToken, TokenKind
from litdecode.values import FLOAT_TYPES, INT_TYPES, WIDE_INT_TYPES, FloatValue, IntegerValue

logger = logging.getLogger(__name__)

Value = IntegerValue | FloatValue | str | bytes | int


class LiteralKind(Enum):
    """Requested semantic interpretation of a lexeme."""

    INT = "int"
    FLOAT = "float"
    STRING = "str"
    CHAR = "char"
    BYTE_STRING = "bytes"
    BYTE = "byte"
    INNER_DOC = "inner-doc"
    OUTER_DOC = "outer-doc"


class Status(Enum):
    OK = "ok"
    MISMATCH = "mismatch"
    MALFORMED = "malformed"


@dataclass(frozen=True, slots=True)
class Outcome:
    """Three-state decode result."""

    kind: LiteralKind
    status: Status
    value: Value | None = None
    error: DecodeError | None = None


@dataclass(frozen=True, slots=True)
class DecoderConfig:
    """Capability switches for decoding.

    An unsuffixed integer has no type of its own: it is typed as
    *default_int_type*. An unsuffixed float is rounded at
    *default_float_width*.
    """

    wide_integers: bool = True
    pointer_width: int = 64
    default_int_type: str = "isize"
    default_float_width: int = 64

    def __post_init__(self) -> None:
        if self.pointer_width not in (16, 32, 64):
            raise ValueError(f"pointer_width must be 16, 32 or 64, got {self.pointer_width}")
        if self.default_int_type not in INT_TYPES:
            raise ValueError(f"unknown default_int_type {self.default_int_type!r}")
        if self.default_int_type in WIDE_INT_TYPES and not self.wide_integers:
            raise ValueError(f"default_int_type {self.default_int_type} needs wide_integers")
        if self.default_float_width not in FLOAT_TYPES.values():
            raise ValueError(
                f"default_float_width must be 32 or 64, got {self.default_float_width}"
            )


class LiteralDecoder:
    """Decode literal lexemes according to a DecoderConfig."""

    def __init__(self, config: DecoderConfig | None = None) -> None:
        self.config = config or DecoderConfig()

    # ------------------------------------------------------------------
    # Per-kind operations
    # ------------------------------------------------------------------

    def as_int(self, lexeme: str) -> IntegerValue | None:
        return int_lit(
            lexeme,
            wide_integers=self.config.wide_integers,
            pointer_width=self.config.pointer_width,
            default_type=self.config.default_int_type,
        )

    def as_float(self, lexeme: str) -> FloatValue | None:
        return float_lit(lexeme, default_width=self.config.default_float_width)

    def as_string(self, lexeme: str) -> str | None:
        return str_lit(lexeme)

    def as_char(self, lexeme: str) -> str | None:
        return char_lit(lexeme)

    def as_bytes(self, lexeme: str) -> bytes | None:
        return byte_str_lit(lexeme)

    def as_byte(self, lexeme: str) -> int | None:
        return byte_lit(lexeme)

    def as_inner_doc(self, lexeme: str) -> str | None:
        return inner_doc(lexeme)

    def as_outer_doc(self, lexeme: str) -> str | None:
        return outer_doc(lexeme)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def decode(self, lexeme: str, kind: LiteralKind) -> Value | None:
        """Decode *lexeme* as *kind*; None if it is not that kind of literal."""
        method = getattr(self, _METHODS[kind])
        try:
            value = method(lexeme)
        except DecodeError as exc:
            logger.debug(f"malformed {kind.value} literal {lexeme!r}: {exc.message}")
            raise
        if value is None:
            logger.debug(f"{lexeme!r} is not a {kind.value} literal")
        return value

    def outcome(self, lexeme: str, kind: LiteralKind) -> Outcome:
        """Decode *lexeme* as *kind* without raising."""
        try:
            value = self.decode(lexeme, kind)
        except DecodeError as exc:
            return Outcome(kind, Status.MALFORMED, error=exc)
        if value is None:
            return Outcome(kind, Status.MISMATCH)
        return Outcome(kind, Status.OK, value)

    def decode_token(self, token: LiteralToken) -> Value | None:
        """Decode a token the source has already classified."""
        return self.decode(token.text, kind_for_token(token))


_METHODS = {
    LiteralKind.INT: "as_int",
    LiteralKind.FLOAT: "as_float",
    LiteralKind.STRING: "as_string",
    LiteralKind.CHAR: "as_char",
    LiteralKind.BYTE_STRING: "as_bytes",
    LiteralKind.BYTE: "as_byte",
    LiteralKind.INNER_DOC: "as_inner_doc",
    LiteralKind.OUTER_DOC: "as_outer_doc",
}

_TOKEN_KINDS = {
    TokenKind.INTEGER: LiteralKind.INT,
    TokenKind.FLOAT: LiteralKind.FLOAT,
    TokenKind.STRING: LiteralKind.STRING,
    TokenKind.CHAR: LiteralKind.CHAR,
    TokenKind.BYTE_STRING: LiteralKind.BYTE_STRING,
    TokenKind.BYTE: LiteralKind.BYTE,
}


def kind_for_token(token: LiteralToken) -> LiteralKind:
    """Pick the interpretation for a classified token.

    Comments are inner or outer by the third character of their delimiter.
    """
    if token.kind in (TokenKind.LINE_COMMENT, TokenKind.BLOCK_COMMENT):
        return LiteralKind.INNER_DOC if token.text[2:3] == "!" else LiteralKind.OUTER_DOC
    return _TOKEN_KINDS[token.kind]
