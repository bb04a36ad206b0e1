"""Error types with formatted lexeme context."""

from __future__ import annotations

from litdecode.tokens import Position


class DecodeError(Exception):
    """Raised when a literal of the requested kind has malformed content.

    This is distinct from a decoder returning None, which only means the
    lexeme is not a literal of the requested kind. *end* is the offset just
    past the offending text (a whole escape sequence, say); without it a
    single character is marked.
    """

    def __init__(self, message: str, position: Position, lexeme: str, end: int | None = None) -> None:
        self.message = message
        self.position = position
        self.lexeme = lexeme
        self.end = end if end is not None else position.offset + 1
        super().__init__(self.format())

    @property
    def span(self) -> str:
        """The offending text of the lexeme."""
        return self.lexeme[self.position.offset : self.end]

    def format(self, filename: str = "<literal>") -> str:
        line_no = self.position.line
        col = self.position.column
        lines = self.lexeme.split("\n")
        source_line = lines[line_no - 1].rstrip("\r") if line_no <= len(lines) else ""

        # Mark the span, cut at the end of the line it starts on
        line_rest = len(source_line) - (col - 1)
        width = max(1, min(self.end - self.position.offset, line_rest))

        gutter = " " * len(str(line_no))
        return "\n".join(
            [
                f"error: {self.message}",
                f"{gutter} --> {filename}:{line_no}:{col}",
                f"{gutter} |",
                f"{line_no} | {source_line}",
                f"{gutter} | {' ' * (col - 1)}{'^' * width}",
            ]
        )
