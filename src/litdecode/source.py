"""Adapters that connect token sources to the decoder."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator

from litdecode.decoder import LiteralDecoder, Outcome, kind_for_token
from litdecode.numeric import scan_number
from litdecode.quoted import split_quoted
from litdecode.tokens import LiteralToken, TokenKind
from litdecode.values import FloatValue, IntegerValue


class LiteralMixin(ABC):
    """Give any class with a ``lexeme()`` method the eight decode operations."""

    decoder: LiteralDecoder = LiteralDecoder()

    @abstractmethod
    def lexeme(self) -> str:
        """Return the literal text to decode."""

    def as_int(self) -> IntegerValue | None:
        return self.decoder.as_int(self.lexeme())

    def as_float(self) -> FloatValue | None:
        return self.decoder.as_float(self.lexeme())

    def as_string(self) -> str | None:
        return self.decoder.as_string(self.lexeme())

    def as_char(self) -> str | None:
        return self.decoder.as_char(self.lexeme())

    def as_bytes(self) -> bytes | None:
        return self.decoder.as_bytes(self.lexeme())

    def as_byte(self) -> int | None:
        return self.decoder.as_byte(self.lexeme())

    def as_inner_doc(self) -> str | None:
        return self.decoder.as_inner_doc(self.lexeme())

    def as_outer_doc(self) -> str | None:
        return self.decoder.as_outer_doc(self.lexeme())


class DummyLiteral(LiteralMixin):
    """Wrap any object and decode ``str(value)`` as its lexeme.

    No validation is done beyond what decoding needs; a malformed lexeme can
    decode to something unexpected.
    """

    def __init__(self, value: object) -> None:
        self.value = value

    def lexeme(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"DummyLiteral({self.value!r})"


def classify(lexeme: str) -> TokenKind | None:
    """Classify a lexeme from its prefix and delimiters."""
    if lexeme.startswith("//"):
        return TokenKind.LINE_COMMENT
    if lexeme.startswith("/*"):
        return TokenKind.BLOCK_COMMENT

    if lexeme[:1].isdigit():
        num = scan_number(lexeme)
        if num is None:
            return None
        if num.radix == 10 and (num.has_float_syntax or num.is_float_suffix):
            return TokenKind.FLOAT
        return TokenKind.INTEGER

    span = split_quoted(lexeme)
    if span is None:
        return None
    if span.prefix == "b":
        return TokenKind.BYTE_STRING if span.quote == '"' else TokenKind.BYTE
    return TokenKind.STRING if span.quote == '"' else TokenKind.CHAR


def decode_auto(decoder: LiteralDecoder, lexeme: str) -> Outcome | None:
    """Classify and decode a lexeme; None if it cannot be classified."""
    kind = classify(lexeme)
    if kind is None:
        return None
    return decoder.outcome(lexeme, kind_for_token(LiteralToken(kind, lexeme)))


# ----------------------------------------------------------------------
# Locating lexemes in source text
# ----------------------------------------------------------------------

_LEXEME_RE = re.compile(
    r"""
      //[^\n]*                                      # line comment
    | /\*.*?\*/                                     # block comment
    | (?<![\w])b?r(?P<hashes>\#*)".*?"(?P=hashes)   # raw string
    | (?<![\w])b?"(?:[^"\\]|\\.)*"                  # string
    | (?<![\w])b?'(?:[^'\\\n]|\\(?:u\{[^}\n]*\}|x[0-9a-fA-F]{2}|.))'  # char or byte
    | (?<!\w)(?<!\w\.)                                # number
      (?:0[xXoObB][0-9a-fA-F_]+|[0-9][0-9_]*(?:\.(?![.a-zA-Z_])[0-9_]*)?(?:[eE][+-]?[0-9_]+)?)
      (?:[iuf](?:8|16|32|64|128|size))?
    """,
    re.VERBOSE | re.DOTALL,
)


@dataclass(frozen=True, slots=True)
class LexemeMatch:
    """A literal lexeme found in source text, with its offsets."""

    start: int
    end: int
    text: str


def iter_lexemes(text: str) -> Iterator[LexemeMatch]:
    """Yield the literal lexemes of *text* in order."""
    for m in _LEXEME_RE.finditer(text):
        yield LexemeMatch(m.start(), m.end(), m.group())


def find_lexeme(text: str, offset: int) -> LexemeMatch | None:
    """Return the literal lexeme of *text* covering *offset*, if any."""
    for match in iter_lexemes(text):
        if match.start > offset:
            break
        if match.start <= offset < match.end:
            return match
    return None
