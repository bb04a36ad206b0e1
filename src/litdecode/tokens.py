"""Token kinds, lexeme positions, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol


class TokenKind(Enum):
    # Numbers
    INTEGER = auto()  # 42, 0xFF, 7u8
    FLOAT = auto()  # 1.5, 2e10, 3f32

    # Quoted
    STRING = auto()  # "..." r#"..."#
    CHAR = auto()  # 'x'
    BYTE_STRING = auto()  # b"..." br"..."
    BYTE = auto()  # b'x'

    # Doc comments
    LINE_COMMENT = auto()  # /// or //!
    BLOCK_COMMENT = auto()  # /** */ or /*! */


@dataclass(frozen=True, slots=True)
class Position:
    """Position inside a lexeme, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


class LiteralSource(Protocol):
    """Anything that can hand over the exact source text of one literal."""

    def lexeme(self) -> str: ...


@dataclass(frozen=True, slots=True)
class LiteralToken:
    """A literal already classified by the token source."""

    kind: TokenKind
    text: str

    def lexeme(self) -> str:
        return self.text


def position_at(text: str, offset: int) -> Position:
    """Return the Position of *offset* within *text*."""
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return Position(line, offset - line_start + 1, offset)


# Unicode White_Space property
_WHITESPACE = frozenset(
    [chr(cp) for cp in range(0x09, 0x0E)]
    + [chr(cp) for cp in range(0x2000, 0x200B)]
    + [chr(cp) for cp in (0x20, 0x85, 0xA0, 0x1680, 0x2028, 0x2029, 0x202F, 0x205F, 0x3000)]
)

_HEX_VALUES = {ch: int(ch, 16) for ch in "0123456789abcdefABCDEF"}


def is_whitespace(ch: str) -> bool:
    """Return True if ch has the Unicode White_Space property."""
    return ch in _WHITESPACE


def is_hex_digit(ch: str) -> bool:
    """Return True if ch is a hexadecimal digit."""
    return ch in _HEX_VALUES


def digit_value(ch: str) -> int:
    """Return the value of a hex digit, or -1 if ch is not one."""
    return _HEX_VALUES.get(ch, -1)


def is_ascii_digit(ch: str) -> bool:
    return ch in "0123456789" and len(ch) == 1
