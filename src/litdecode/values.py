"""Decoded literal values and the suffix tables that type them."""

from __future__ import annotations

from dataclasses import dataclass

# suffix -> (signed, bit width); None width means pointer width
INT_TYPES: dict[str, tuple[bool, int | None]] = {
    "u8": (False, 8),
    "i8": (True, 8),
    "u16": (False, 16),
    "i16": (True, 16),
    "u32": (False, 32),
    "i32": (True, 32),
    "u64": (False, 64),
    "i64": (True, 64),
    "u128": (False, 128),
    "i128": (True, 128),
    "usize": (False, None),
    "isize": (True, None),
}

WIDE_INT_TYPES = frozenset({"u128", "i128"})

FLOAT_TYPES: dict[str, int] = {"f32": 32, "f64": 64}


def int_type(name: str, pointer_width: int) -> tuple[bool, int]:
    """Return (signed, bit width) for an integer type name."""
    signed, width = INT_TYPES[name]
    return signed, pointer_width if width is None else width


def int_max(signed: bool, width: int) -> int:
    """Largest value of an integer type."""
    return (1 << (width - 1)) - 1 if signed else (1 << width) - 1


@dataclass(frozen=True, slots=True)
class IntegerValue:
    """An integer literal: its magnitude and the type it carries."""

    magnitude: int
    suffix: str
    signed: bool
    bit_width: int
    is_size: bool = False
    # A minus sign is a separate token, so a decoded lexeme is never negative
    is_negative: bool = False
    pointer_width: int = 64

    @property
    def type_name(self) -> str:
        if self.suffix:
            return self.suffix
        prefix = "i" if self.signed else "u"
        return f"{prefix}size" if self.is_size else f"{prefix}{self.bit_width}"

    def as_type(self, name: str) -> int | None:
        """Return the value as integer type *name*.

        None if the literal is suffixed with a different type, or the
        magnitude does not fit in *name*.
        """
        if name not in INT_TYPES:
            raise ValueError(f"unknown integer type {name!r}")
        if self.suffix and self.suffix != name:
            return None
        signed, width = int_type(name, self.pointer_width)
        if self.magnitude > int_max(signed, width):
            return None
        return -self.magnitude if self.is_negative else self.magnitude

    def as_u8(self) -> int | None:
        return self.as_type("u8")

    def as_i8(self) -> int | None:
        return self.as_type("i8")

    def as_u16(self) -> int | None:
        return self.as_type("u16")

    def as_i16(self) -> int | None:
        return self.as_type("i16")

    def as_u32(self) -> int | None:
        return self.as_type("u32")

    def as_i32(self) -> int | None:
        return self.as_type("i32")

    def as_u64(self) -> int | None:
        return self.as_type("u64")

    def as_i64(self) -> int | None:
        return self.as_type("i64")

    def as_u128(self) -> int | None:
        return self.as_type("u128")

    def as_i128(self) -> int | None:
        return self.as_type("i128")

    def as_usize(self) -> int | None:
        return self.as_type("usize")

    def as_isize(self) -> int | None:
        return self.as_type("isize")


@dataclass(frozen=True, slots=True)
class FloatValue:
    """A floating point literal rounded to its width.

    The exact decimal value is mantissa * 10**scale; it is kept so the
    literal can be re-rounded to the other width without double rounding.
    """

    value: float
    suffix: str
    bit_width: int
    mantissa: int
    scale: int

    @property
    def type_name(self) -> str:
        return self.suffix or f"f{self.bit_width}"

    def as_width(self, width: int) -> float | None:
        if width not in FLOAT_TYPES.values():
            raise ValueError(f"unsupported float width {width}")
        if self.suffix and FLOAT_TYPES[self.suffix] != width:
            return None
        if width == self.bit_width:
            return self.value

        from litdecode.floats import round_decimal

        return round_decimal(self.mantissa, self.scale, width)

    def as_f32(self) -> float | None:
        return self.as_width(32)

    def as_f64(self) -> float | None:
        return self.as_width(64)


def describe(value: object) -> str:
    """Short human-readable rendering of a decoded value."""
    if isinstance(value, IntegerValue):
        return f"{value.magnitude} ({value.type_name})"
    if isinstance(value, FloatValue):
        return f"{value.value!r} ({value.type_name})"
    if isinstance(value, int):
        return f"{value} ({bytes([value])!r})"
    return repr(value)
