"""Exception classes for Feast.

Combinators report failures as values (see feast.passes.Failure). The
exceptions here cover the boundaries around them: input-level
insufficiency, misuse of captures and cursors, and the one-shot parse()
entry point.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from feast.hinting import Requirement
    from feast.passes import PassError


class FeastError(Exception):
    """Base exception for all Feast errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(FeastError):
    """Error raised by parse() when a parser fails on complete input.

    Carries the structured PassError alongside the formatted location.
    """

    def __init__(
        self,
        message: str,
        offset: int | None = None,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
        error: PassError | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            offset: Absolute token offset of the failure (0-indexed)
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
            error: The failure payload produced by the parser (optional)
        """
        self.message = message
        self.offset = offset
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file
        self.error = error

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class InsufficientInputError(FeastError):
    """Raised by Input.split_at when fewer tokens remain than requested.

    This is an insufficiency signal, never a mismatch. Pass.with_input_result
    turns it into an Incomplete failure at the current position.
    """

    def __init__(self, requirement: Requirement) -> None:
        self.requirement = requirement
        super().__init__(f"not enough input: need {requirement.describe()}")


class IncompleteCaptureError(FeastError):
    """Raised when the value of an incomplete capture is requested."""

    pass


class InvalidCommitError(FeastError):
    """Raised when a pass is committed to a view it cannot reach.

    A committed view must share the pass's backing storage and end where
    the pass's current input ends.
    """

    pass
