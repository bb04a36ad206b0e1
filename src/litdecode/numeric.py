"""Numeric lexeme scanning shared by the integer and float decoders.

A numeric lexeme is split into an optional radix prefix, a digit body with
``_`` separators removed, and for decimal lexemes an optional fraction and
exponent, followed by an optional type suffix:

    0x_7F__u8     -> radix 16, digits "7F", suffix "u8"
    1.0__3e-23    -> radix 10, digits "1", fraction "03", exponent "-23"
    5f32          -> radix 10, digits "5", suffix "f32"

Scanning only splits the lexeme; deciding whether it is an integer or a
float is left to the decoders.
"""

from __future__ import annotations

from dataclasses import dataclass

from litdecode.tokens import digit_value, is_ascii_digit
from litdecode.values import FLOAT_TYPES, INT_TYPES

_RADIX_PREFIXES = {"x": 16, "X": 16, "o": 8, "O": 8, "b": 2, "B": 2}


@dataclass(frozen=True, slots=True)
class NumericLexeme:
    """A numeric lexeme split into its parts."""

    radix: int
    digits: str
    fraction: str | None
    exponent: str | None
    suffix: str

    @property
    def has_float_syntax(self) -> bool:
        """True if a fractional part or an exponent is present."""
        return self.fraction is not None or self.exponent is not None

    @property
    def is_float_suffix(self) -> bool:
        return self.suffix in FLOAT_TYPES

    @property
    def is_int_suffix(self) -> bool:
        return self.suffix in INT_TYPES

    def decimal_parts(self) -> tuple[int, int]:
        """Return (mantissa, scale) with the exact value mantissa * 10**scale."""
        fraction = self.fraction or ""
        mantissa = int(self.digits + fraction, 10)
        scale = int(self.exponent or "0", 10) - len(fraction)
        return mantissa, scale


def scan_number(lexeme: str) -> NumericLexeme | None:
    """Split *lexeme* into a NumericLexeme, or return None if it is not one.

    None is returned when the lexeme does not start with a decimal digit,
    the digit body is empty, a digit lies outside the radix, an exponent
    marker has no digits, or the remainder is not a recognized suffix.
    """
    if not lexeme or not is_ascii_digit(lexeme[0]):
        return None

    pos = 0
    radix = 10
    if lexeme[0] == "0" and len(lexeme) > 1 and lexeme[1] in _RADIX_PREFIXES:
        radix = _RADIX_PREFIXES[lexeme[1]]
        pos = 2

    pos, digits = _read_digits(lexeme, pos, radix)
    if not digits:
        return None

    fraction = None
    exponent = None
    if radix == 10:
        if _peek(lexeme, pos) == ".":
            pos, fraction = _read_digits(lexeme, pos + 1, 10)
            if fraction is None:
                return None
        if _peek(lexeme, pos) in ("e", "E"):
            pos, exponent = _read_exponent(lexeme, pos + 1)
            if exponent is None:
                return None

    suffix = lexeme[pos:]
    if suffix and suffix not in INT_TYPES and suffix not in FLOAT_TYPES:
        return None

    return NumericLexeme(radix, digits, fraction, exponent, suffix)


def _peek(lexeme: str, pos: int) -> str:
    if pos < len(lexeme):
        return lexeme[pos]
    return ""


def _read_digits(lexeme: str, pos: int, radix: int) -> tuple[int, str | None]:
    """Read digits and separators; return (new pos, digits).

    Digits is None if a decimal digit outside the radix is found, since no
    suffix can begin with a digit.
    """
    digits = []
    while pos < len(lexeme):
        ch = lexeme[pos]
        if ch == "_":
            pos += 1
            continue
        value = digit_value(ch)
        if 0 <= value < radix:
            digits.append(ch)
            pos += 1
            continue
        if is_ascii_digit(ch):
            return pos, None
        break
    return pos, "".join(digits)


def _read_exponent(lexeme: str, pos: int) -> tuple[int, str | None]:
    """Read an exponent after 'e'/'E'; return (new pos, signed digits)."""
    sign = ""
    if _peek(lexeme, pos) in ("+", "-"):
        sign = lexeme[pos]
        pos += 1
    pos, digits = _read_digits(lexeme, pos, 10)
    if not digits:
        return pos, None
    return pos, sign + digits
