"""Source location tracking for error messages.

Passes only know absolute token offsets. SourceLocation turns an offset
into a line/column pair for text-like sources (str and bytes) so parse
errors read like compiler diagnostics.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages.

    Line and column are 1-indexed; offset is the 0-indexed token offset.
    Sources that are not str or bytes have no notion of lines, so they
    always report line 1 and column offset + 1.

    Attributes:
        lineno: Line number (1-indexed)
        col_offset: Column offset (1-indexed)
        offset: Absolute token offset in the source
        source_file: Source file path (optional)

    Examples:
        >>> SourceLocation.from_offset("ab\\ncd", 4)
        SourceLocation(lineno=2, col_offset=2, offset=4, source_file=None)

    """

    lineno: int
    col_offset: int
    offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.txt:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def from_offset(
        cls,
        source: Sequence[Any],
        offset: int,
        source_file: str | None = None,
    ) -> SourceLocation:
        """Compute the location of a token offset within source."""
        offset = max(0, min(offset, len(source)))
        if isinstance(source, str):
            newline: str | bytes = "\n"
        elif isinstance(source, (bytes, bytearray)):
            newline = b"\n"
        else:
            return cls(lineno=1, col_offset=offset + 1, offset=offset, source_file=source_file)

        lineno = source.count(newline, 0, offset) + 1
        line_start = source.rfind(newline, 0, offset) + 1
        return cls(
            lineno=lineno,
            col_offset=offset - line_start + 1,
            offset=offset,
            source_file=source_file,
        )
