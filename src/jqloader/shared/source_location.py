"""
Source Location (Span)

Points diagnostics at a position inside a module or data file.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Source location of a node or an error.

    - File, line, column (1-based; 0 means unknown)
    - Optional end line/column for spans
    - Immutable (frozen) for hashability
    """
    file: str
    line: int
    column: int
    end_line: int = 0
    end_column: int = 0

    def __str__(self) -> str:
        """Format as file:line:column"""
        return f"{self.file}:{self.line}:{self.column}"
