"""--debug dump of a decode outcome to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from litdecode.decoder import LiteralKind, Outcome, Status
from litdecode.numeric import scan_number
from litdecode.quoted import split_quoted
from litdecode.values import FloatValue, IntegerValue


def dump_outcome(lexeme: str, outcome: Outcome, *, file: TextIO | None = None) -> None:
    """Print a human-readable breakdown of decoding *lexeme* to *file* (default stderr)."""
    if file is None:
        file = sys.stderr
    file.write(f"Lexeme {lexeme!r}\n")
    file.write(f"{_indent(1)}Kind {outcome.kind.value}\n")
    if outcome.kind in (LiteralKind.INT, LiteralKind.FLOAT):
        _dump_numeric(lexeme, 2, file)
    elif outcome.kind not in (LiteralKind.INNER_DOC, LiteralKind.OUTER_DOC):
        _dump_quoted(lexeme, 2, file)
    file.write(f"{_indent(1)}Status {outcome.status.value}\n")
    if outcome.status is Status.OK:
        _dump_value(outcome.value, 2, file)
    elif outcome.status is Status.MALFORMED and outcome.error is not None:
        pos = outcome.error.position
        file.write(f"{_indent(2)}Error {outcome.error.message!r} at {pos.line}:{pos.column}\n")


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_numeric(lexeme: str, depth: int, f: TextIO) -> None:
    num = scan_number(lexeme)
    if num is None:
        f.write(f"{_indent(depth)}Numeric(unrecognized)\n")
        return
    f.write(
        f"{_indent(depth)}Numeric radix={num.radix} digits={num.digits!r} "
        f"fraction={num.fraction!r} exponent={num.exponent!r} suffix={num.suffix!r}\n"
    )


def _dump_quoted(lexeme: str, depth: int, f: TextIO) -> None:
    span = split_quoted(lexeme)
    if span is None:
        f.write(f"{_indent(depth)}Quoted(unbalanced)\n")
        return
    style = "raw" if span.raw else "escaped"
    f.write(
        f"{_indent(depth)}Quoted prefix={span.prefix!r} {style} hashes={span.hashes} "
        f"content={lexeme[span.start : span.end]!r}\n"
    )


def _dump_value(value: object, depth: int, f: TextIO) -> None:
    if isinstance(value, IntegerValue):
        sign = "signed" if value.signed else "unsigned"
        f.write(
            f"{_indent(depth)}IntegerValue {value.magnitude} {sign} "
            f"width={value.bit_width} type={value.type_name}\n"
        )
    elif isinstance(value, FloatValue):
        f.write(
            f"{_indent(depth)}FloatValue {value.value!r} width={value.bit_width} "
            f"exact={value.mantissa}e{value.scale}\n"
        )
    elif isinstance(value, bytes):
        f.write(f"{_indent(depth)}Bytes({len(value)}) {value!r}\n")
    elif isinstance(value, int):
        f.write(f"{_indent(depth)}Byte 0x{value:02X}\n")
    else:
        f.write(f"{_indent(depth)}Text({len(value)}) {value!r}\n")
