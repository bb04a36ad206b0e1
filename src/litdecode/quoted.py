"""String, char, byte string and byte literal decoding."""

from __future__ import annotations

from dataclasses import dataclass

from litdecode.escapes import check_ascii, decode_bytes, decode_text


@dataclass(frozen=True, slots=True)
class QuotedSpan:
    """Delimiters of a quoted literal and the span of its content."""

    prefix: str  # "" or "b"
    raw: bool
    hashes: int
    quote: str  # '"' or "'"
    start: int
    end: int


def split_quoted(lexeme: str) -> QuotedSpan | None:
    """Find the opening and closing delimiters of a quoted lexeme.

    Returns None if the lexeme is not quoted or its delimiters do not
    balance: a raw string must close with a quote followed by as many ``#``
    as it opened with, and the content may not contain that closing
    sequence.
    """
    pos = 0
    prefix = ""
    if lexeme.startswith("b"):
        prefix = "b"
        pos = 1

    raw = False
    hashes = 0
    if lexeme[pos : pos + 1] == "r":
        raw = True
        pos += 1
        while lexeme[pos : pos + 1] == "#":
            hashes += 1
            pos += 1

    quote = lexeme[pos : pos + 1]
    if quote not in ('"', "'") or (raw and quote != '"'):
        return None

    closing = quote + "#" * hashes
    start = pos + 1
    if len(lexeme) < start + len(closing) or not lexeme.endswith(closing):
        return None
    end = len(lexeme) - len(closing)

    if raw and closing in lexeme[start:end]:
        return None

    return QuotedSpan(prefix, raw, hashes, quote, start, end)


def str_lit(lexeme: str) -> str | None:
    """Decode ``"..."`` or a raw ``r#"..."#`` string literal."""
    span = split_quoted(lexeme)
    if span is None or span.prefix or span.quote != '"':
        return None
    if span.raw:
        return lexeme[span.start : span.end]
    return decode_text(lexeme, span.start, span.end, span.quote)


def byte_str_lit(lexeme: str) -> bytes | None:
    """Decode ``b"..."`` or a raw ``br#"..."#`` byte string literal."""
    span = split_quoted(lexeme)
    if span is None or span.prefix != "b" or span.quote != '"':
        return None
    if span.raw:
        check_ascii(lexeme, span.start, span.end)
        return lexeme[span.start : span.end].encode("ascii")
    return decode_bytes(lexeme, span.start, span.end, span.quote)


def char_lit(lexeme: str) -> str | None:
    """Decode a ``'x'`` char literal to a single character."""
    span = split_quoted(lexeme)
    if span is None or span.prefix or span.quote != "'":
        return None
    text = decode_text(lexeme, span.start, span.end, span.quote)
    if len(text) != 1:
        return None
    return text


def byte_lit(lexeme: str) -> int | None:
    """Decode a ``b'x'`` byte literal to its byte value."""
    span = split_quoted(lexeme)
    if span is None or span.prefix != "b" or span.quote != "'":
        return None
    data = decode_bytes(lexeme, span.start, span.end, span.quote)
    if len(data) != 1:
        return None
    return data[0]
