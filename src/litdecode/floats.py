"""Floating point literal decoding with correctly rounded results."""

from __future__ import annotations

from fractions import Fraction
from struct import Struct

from litdecode.numeric import scan_number
from litdecode.values import FLOAT_TYPES, FloatValue

_F32 = Struct(">f")
_U32 = Struct(">I")

# Decimal orders of magnitude outside of which the result is known without
# exact arithmetic: (overflow above, zero at or below)
_ORDER_LIMITS = {64: (309, -325), 32: (39, -46)}

# Smallest value that rounds to infinity in binary32: FLT_MAX + half an ulp
_F32_OVERFLOW = Fraction(2**128 - 2**103)
_F32_MAX_BITS = 0x7F7FFFFF
_F32_INF_BITS = 0x7F800000


def float_lit(lexeme: str, *, default_width: int = 64) -> FloatValue | None:
    """Decode a decimal floating point literal such as ``1.5e2f64``.

    The lexeme must be decimal and have a fraction, an exponent or a float
    suffix; a bare integer lexeme is not a float. Returns None otherwise,
    or if the value overflows the literal's width.
    """
    num = scan_number(lexeme)
    if num is None or num.radix != 10 or num.is_int_suffix:
        return None
    if not num.has_float_syntax and not num.suffix:
        return None

    width = FLOAT_TYPES[num.suffix] if num.suffix else default_width
    mantissa, scale = num.decimal_parts()
    value = round_decimal(mantissa, scale, width)
    if value is None:
        return None
    return FloatValue(value, num.suffix, width, mantissa, scale)


def round_decimal(mantissa: int, scale: int, width: int) -> float | None:
    """Round mantissa * 10**scale to the nearest binary32 or binary64 value.

    Ties round to even. Returns None if the value overflows to infinity.
    """
    if mantissa == 0:
        return 0.0

    overflow_order, zero_order = _ORDER_LIMITS[width]
    order = len(str(mantissa)) + scale
    if order > overflow_order:
        return None
    if order <= zero_order:
        return 0.0

    if scale >= 0:
        exact = Fraction(mantissa * 10**scale)
    else:
        exact = Fraction(mantissa, 10**-scale)

    if width == 64:
        return _round_binary64(exact)
    return _round_binary32(exact)


def _round_binary64(exact: Fraction) -> float | None:
    # int / int true division is correctly rounded
    try:
        return float(exact)
    except OverflowError:
        return None


def _round_binary32(exact: Fraction) -> float | None:
    if exact >= _F32_OVERFLOW:
        return None

    approx = _round_binary64(exact)
    try:
        bits = _U32.unpack(_F32.pack(approx))[0]
    except OverflowError:
        bits = _F32_MAX_BITS

    # The correctly rounded binary32 is within one step of the double
    # rounded candidate.
    candidates = [b for b in (bits - 1, bits, bits + 1) if 0 <= b < _F32_INF_BITS]
    best = min(candidates, key=lambda b: (abs(Fraction(_bits_to_f32(b)) - exact), b & 1))
    return _bits_to_f32(best)


def _bits_to_f32(bits: int) -> float:
    return _F32.unpack(_U32.pack(bits))[0]
