"""Escape sequence decoding for string, char, byte and byte string content."""

from __future__ import annotations

from litdecode.errors import DecodeError
from litdecode.tokens import digit_value, is_hex_digit, is_whitespace, position_at

_SIMPLE_ESCAPES = {
    "n": 0x0A,
    "r": 0x0D,
    "t": 0x09,
    "\\": 0x5C,
    "0": 0x00,
    "'": 0x27,
    '"': 0x22,
}

_MAX_UNICODE_DIGITS = 6


class EscapeDecoder:
    """Decode the content between a literal's delimiters.

    Works on ``lexeme[start:end]`` so that errors can point at the exact
    position within the whole lexeme. In byte mode the result is a sequence
    of byte values and content must be ASCII; otherwise it is a sequence of
    Unicode scalar values.
    """

    def __init__(self, lexeme: str, start: int, end: int, *, quote: str, byte_mode: bool) -> None:
        self._lexeme = lexeme
        self._pos = start
        self._end = end
        self._quote = quote
        self._byte_mode = byte_mode
        self._out: list[int] = []

    def decode(self) -> list[int]:
        """Decode the full content span and return the resulting values."""
        while self._pos < self._end:
            ch = self._peek()

            if ch == "\\":
                self._lex_escape()
                continue

            if ch == "\r":
                if self._peek(1) != "\n":
                    raise self._error("bare CR not allowed in literal")
                self._pos += 2
                self._out.append(0x0A)
                continue

            if ch == self._quote:
                raise self._error(f"unescaped {ch!r} in literal")

            if self._byte_mode and not ch.isascii():
                raise self._error(f"non-ASCII character {ch!r} in byte literal")

            self._out.append(ord(ch))
            self._pos += 1

        return self._out

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < self._end:
            return self._lexeme[idx]
        return ""

    def _error(self, message: str, offset: int | None = None, *, end: int | None = None) -> DecodeError:
        """Build a DecodeError at *offset*, marking through *end*.

        An escape error marks from its backslash up to and including the
        character being looked at.
        """
        if offset is None:
            offset = self._pos
        if end is None:
            end = max(offset + 1, min(self._pos + 1, self._end))
        return DecodeError(message, position_at(self._lexeme, offset), self._lexeme, end)

    # ------------------------------------------------------------------
    # Escapes
    # ------------------------------------------------------------------

    def _lex_escape(self) -> None:
        start = self._pos
        self._pos += 1  # consume backslash

        if self._pos >= self._end:
            raise self._error("unexpected end of literal after '\\'", start)

        ch = self._peek()

        if ch in _SIMPLE_ESCAPES:
            self._pos += 1
            self._out.append(_SIMPLE_ESCAPES[ch])
            return

        if ch == "x":
            self._pos += 1
            value = self._lex_hex_byte(start)
            if value > 0x7F and not self._byte_mode:
                raise self._error(
                    f"out of range hex escape '\\x{value:02X}' (must be at most \\x7F)",
                    start,
                    end=self._pos,
                )
            self._out.append(value)
            return

        if ch == "u":
            if self._byte_mode:
                raise self._error("unicode escape in byte literal", start)
            self._pos += 1
            self._out.append(self._lex_unicode_escape(start))
            return

        # Only string content may continue onto the next line
        if self._quote == '"' and (ch == "\n" or (ch == "\r" and self._peek(1) == "\n")):
            self._skip_line_continuation()
            return

        shown = "\\" + ch
        if ch in "\r\n":
            raise self._error(f"unknown character escape {shown!r}", start)
        raise self._error(f"unknown character escape '{shown}'", start)

    def _lex_hex_byte(self, start: int) -> int:
        """Read exactly two hex digits after '\\x'."""
        value = 0
        for i in range(2):
            ch = self._peek()
            if not is_hex_digit(ch):
                if ch:
                    raise self._error(f"invalid hex digit {ch!r} in escape sequence", start)
                raise self._error(f"numeric escape too short: expected 2 hex digits, got {i}", start)
            value = value * 16 + digit_value(ch)
            self._pos += 1
        return value

    def _lex_unicode_escape(self, start: int) -> int:
        """Read '{' hex digits '}' after '\\u' and return the scalar value."""
        if self._peek() != "{":
            raise self._error("expected '{' after '\\u'", start)
        self._pos += 1

        value = 0
        count = 0
        while True:
            ch = self._peek()
            if ch == "}":
                self._pos += 1
                break
            if ch == "_" and count:
                self._pos += 1
                continue
            if not is_hex_digit(ch):
                if ch:
                    raise self._error(f"invalid character {ch!r} in unicode escape", start)
                raise self._error("unterminated unicode escape", start)
            count += 1
            if count > _MAX_UNICODE_DIGITS:
                raise self._error("overlong unicode escape (at most 6 hex digits)", start)
            value = value * 16 + digit_value(ch)
            self._pos += 1

        if count == 0:
            raise self._error("empty unicode escape", start, end=self._pos)
        if 0xD800 <= value <= 0xDFFF:
            raise self._error(f"unicode escape U+{value:04X} is a surrogate", start, end=self._pos)
        if value > 0x10FFFF:
            raise self._error(f"unicode escape U+{value:X} is out of range", start, end=self._pos)
        return value

    def _skip_line_continuation(self) -> None:
        """Drop the line break after a backslash and the whitespace that follows."""
        while self._pos < self._end:
            ch = self._peek()
            if not is_whitespace(ch) or (self._byte_mode and not ch.isascii()):
                break
            self._pos += 1


def decode_text(lexeme: str, start: int, end: int, quote: str) -> str:
    """Decode escaped string or char content to text."""
    values = EscapeDecoder(lexeme, start, end, quote=quote, byte_mode=False).decode()
    return "".join(map(chr, values))


def decode_bytes(lexeme: str, start: int, end: int, quote: str) -> bytes:
    """Decode escaped byte or byte string content to bytes."""
    return bytes(EscapeDecoder(lexeme, start, end, quote=quote, byte_mode=True).decode())


def check_ascii(lexeme: str, start: int, end: int) -> None:
    """Raise DecodeError at the first non-ASCII character of raw byte content."""
    for offset in range(start, end):
        ch = lexeme[offset]
        if not ch.isascii():
            raise DecodeError(
                f"non-ASCII character {ch!r} in byte literal",
                position_at(lexeme, offset),
                lexeme,
            )
