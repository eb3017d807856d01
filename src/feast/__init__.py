"""
Feast: composable parser combinators for complete and streaming input

Combinators build parsers over any ordered token sequence (bytes, str, or
custom symbols). Every parser is a function from a Pass (the cursor) to an
Outcome, and failures distinguish wrong input (Unexpected) from input that
simply has not arrived yet (Incomplete).

Quick Start:
    >>> from feast import in_range, map_, parse, tag
    >>> parse(tag(b"hello"), b"hello") == b"hello"
    True
    >>> parse(map_(in_range(ord("0"), ord("9")), lambda t: t - ord("0")), b"5")
    5

Streaming:
    >>> from feast import complete, parse_partial, take_while
    >>> digits = complete(take_while(lambda t: 0x30 <= t <= 0x39))
    >>> parse_partial(digits, b"12").error.is_incomplete
    True
"""

from collections.abc import Sequence
from typing import Any

from feast.combinators import (
    and_then,
    complete,
    end_of_input,
    in_range,
    map_,
    or_,
    peek,
    tag,
    take_token_if,
    take_while,
)
from feast.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from feast.errors import (
    FeastError,
    IncompleteCaptureError,
    InsufficientInputError,
    InvalidCommitError,
    ParseError,
)
from feast.hinting import (
    ExpectedHint,
    HintKind,
    Requirement,
    RequirementKind,
    TokenTag,
    Unexpected,
)
from feast.input import Capture, Captured, Input, OrderedToken, SliceInput, Token
from feast.location import SourceLocation
from feast.passes import (
    ErrorKind,
    Failure,
    Outcome,
    Parser,
    Pass,
    PassError,
    SlicePass,
    Success,
)
from feast.utils.logger import get_logger

__version__ = "0.1.0"

logger = get_logger(__name__)


def parse[T](
    parser: Parser[T],
    source: Sequence[Any],
    *,
    source_file: str | None = None,
) -> T:
    """Run parser over complete input and return its value.

    Trailing input is allowed; compose with end_of_input() to forbid it.

    Args:
        parser: Parser built from feast combinators
        source: The whole input (bytes, str, or any token sequence)
        source_file: Optional source file path for error messages

    Returns:
        The value produced by parser

    Raises:
        ParseError: parser failed. Incomplete failures are reported as an
            unexpected end of input, since no more input can arrive.

    Example:
        >>> parse(tag("ab"), "ax")
        Traceback (most recent call last):
        ...
        feast.errors.ParseError: 1:2 expected 'ab', found 'x'
    """
    outcome = parser(SlicePass.from_source(source))
    if outcome:
        return outcome.value

    error = outcome.error
    config = get_parse_config()
    location = SourceLocation.from_offset(source, error.token_offset, source_file=source_file)
    message = error.describe(config.preview_tokens, final=True)
    logger.debug("parse failed at %s: %s", location, message)
    raise ParseError(
        message,
        offset=error.token_offset,
        lineno=location.lineno,
        col_offset=location.col_offset,
        source_file=source_file,
        error=error,
    )


def parse_partial[T](parser: Parser[T], source: Sequence[Any]) -> Outcome[T]:
    """Run parser over the input buffered so far.

    Returns the raw Outcome. A Failure whose error is_incomplete means the
    caller should buffer more input and retry from the start of the buffer.
    """
    return parser(SlicePass.from_source(source, partial=True))


__all__ = [
    # Parsing
    "parse",
    "parse_partial",
    # Combinators
    "and_then",
    "complete",
    "end_of_input",
    "in_range",
    "map_",
    "or_",
    "peek",
    "tag",
    "take_token_if",
    "take_while",
    # Cursor and outcomes
    "ErrorKind",
    "Failure",
    "Outcome",
    "Parser",
    "Pass",
    "PassError",
    "SlicePass",
    "Success",
    # Input
    "Capture",
    "Captured",
    "Input",
    "OrderedToken",
    "SliceInput",
    "Token",
    # Diagnostics
    "ExpectedHint",
    "HintKind",
    "Requirement",
    "RequirementKind",
    "SourceLocation",
    "TokenTag",
    "Unexpected",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
    # Errors
    "FeastError",
    "IncompleteCaptureError",
    "InsufficientInputError",
    "InvalidCommitError",
    "ParseError",
]
