"""Doc comment decoding.

Inner doc comments (``//!``, ``/*! */``) document the enclosing item;
outer doc comments (``///``, ``/** */``) document the item that follows.
``////`` and ``/***`` open ordinary comments, as does the empty ``/**/``.
"""

from __future__ import annotations


def inner_doc(lexeme: str) -> str | None:
    """Return the body of an inner doc comment, or None."""
    if lexeme.startswith("//!"):
        return _line_body(lexeme)
    if lexeme.startswith("/*!"):
        return _block_body(lexeme)
    return None


def outer_doc(lexeme: str) -> str | None:
    """Return the body of an outer doc comment, or None."""
    if lexeme.startswith("///") and not lexeme.startswith("////"):
        return _line_body(lexeme)
    if lexeme.startswith("/**") and not lexeme.startswith("/***") and lexeme != "/**/":
        return _block_body(lexeme)
    return None


def _line_body(lexeme: str) -> str:
    return _strip_leading_space(lexeme[3:])


def _block_body(lexeme: str) -> str | None:
    # Opening delimiter and "*/" must not overlap
    if len(lexeme) < 5 or not lexeme.endswith("*/"):
        return None
    return _strip_leading_space(lexeme[3:-2])


def _strip_leading_space(body: str) -> str:
    if body.startswith(" "):
        return body[1:]
    return body
