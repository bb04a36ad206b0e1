"""Integer literal decoding."""

from __future__ import annotations

from litdecode.numeric import scan_number
from litdecode.tokens import digit_value
from litdecode.values import WIDE_INT_TYPES, IntegerValue, int_max, int_type


def int_lit(
    lexeme: str,
    *,
    wide_integers: bool = True,
    pointer_width: int = 64,
    default_type: str = "isize",
) -> IntegerValue | None:
    """Decode an integer literal such as ``42``, ``0x_7F__u8`` or ``0b1001i8``.

    Returns None if the lexeme is not an integer literal (it has a fraction,
    an exponent or a float suffix), if its magnitude overflows 128 bits (64
    without *wide_integers*), or if it does not fit the suffixed type. An
    unsuffixed literal is typed as *default_type*.
    """
    num = scan_number(lexeme)
    if num is None or num.has_float_syntax or num.is_float_suffix:
        return None

    type_name = num.suffix or default_type
    if type_name in WIDE_INT_TYPES and not wide_integers:
        return None

    limit = 1 << (128 if wide_integers else 64)
    value = 0
    for ch in num.digits:
        value = value * num.radix + digit_value(ch)
        if value >= limit:
            return None

    signed, width = int_type(type_name, pointer_width)
    if value > int_max(signed, width):
        return None

    return IntegerValue(
        magnitude=value,
        suffix=num.suffix,
        signed=signed,
        bit_width=width,
        is_size=type_name in ("usize", "isize"),
        pointer_width=pointer_width,
    )
