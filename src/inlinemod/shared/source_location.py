"""
Source Location (Span)

Rust Pattern: proc_macro2::Span (line/column start and end)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Source location of a syntax node.

    - File, 1-based line and column of the first character
    - Byte-free: start/end are character offsets into the file text
    - end_line/end_column point just past the last character, 0 if unknown
    - Immutable (frozen) for hashability
    """
    file: str
    line: int
    column: int
    start: int = 0
    end: int = 0
    end_line: int = 0
    end_column: int = 0

    def __str__(self) -> str:
        """Format as file:line:column (rustc pattern)"""
        return f"{self.file}:{self.line}:{self.column}"

    @property
    def line_column(self) -> tuple:
        return (self.line, self.column)
