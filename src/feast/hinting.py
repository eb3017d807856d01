"""Diagnostic payloads for parser failures.

Defines what a failure reports, never how parsing proceeds:

- TokenTag: the observed token, or the end-of-input marker
- ExpectedHint: what would have satisfied the match (tag, named, range)
- Unexpected: observed TokenTag paired with an ExpectedHint
- Requirement: how much more input would settle an undetermined match

Thread Safety:
All payloads are frozen dataclasses and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


def render_token(token: Any) -> str:
    """Render a single token for diagnostics.

    Tokens taken from bytes are ints; printable ASCII values are shown with
    their character.
    """
    if isinstance(token, int) and not isinstance(token, bool) and 0x20 <= token < 0x7F:
        return f"{chr(token)!r} (0x{token:02x})"
    if isinstance(token, int) and not isinstance(token, bool) and 0 <= token <= 0xFF:
        return f"0x{token:02x}"
    return repr(token)


def render_sequence(sequence: Sequence[Any], limit: int) -> str:
    """Render a token sequence, truncated to at most limit tokens."""
    materialize = getattr(sequence, "materialize", None)
    if materialize is not None:
        sequence = materialize()
    if isinstance(sequence, (bytearray, memoryview)):
        sequence = bytes(sequence)
    if isinstance(sequence, (str, bytes)):
        if len(sequence) > limit:
            return f"{sequence[:limit]!r}..."
        return repr(sequence)
    items = list(sequence)
    if len(items) > limit:
        return "[" + ", ".join(repr(item) for item in items[:limit]) + ", ...]"
    return repr(items)


class HintKind(Enum):
    """Shape of an ExpectedHint."""

    TAG = auto()  # literal token sequence
    NAMED = auto()  # predicate with a human-readable name
    RANGE = auto()  # inclusive token range


@dataclass(frozen=True, slots=True)
class ExpectedHint:
    """Description of what would have satisfied a failed match.

    Used only for diagnostics; combinators never branch on hints.

    Build with the classmethods rather than the constructor:

        >>> ExpectedHint.tag(b"hello").describe()
        "b'hello'"
        >>> ExpectedHint.range("0", "9").describe()
        "'0'..='9'"

    """

    kind: HintKind
    sequence: Sequence[Any] | None = None
    name: str | None = None
    low: Any = None
    high: Any = None

    @classmethod
    def tag(cls, sequence: Sequence[Any]) -> ExpectedHint:
        return cls(HintKind.TAG, sequence=sequence)

    @classmethod
    def named(cls, name: str) -> ExpectedHint:
        return cls(HintKind.NAMED, name=name)

    @classmethod
    def range(cls, low: Any, high: Any) -> ExpectedHint:
        return cls(HintKind.RANGE, low=low, high=high)

    def describe(self, limit: int = 16) -> str:
        match self.kind:
            case HintKind.TAG:
                return render_sequence(self.sequence or (), limit)
            case HintKind.NAMED:
                return str(self.name)
            case HintKind.RANGE:
                return f"{render_token(self.low)}..={render_token(self.high)}"


@dataclass(frozen=True, slots=True)
class TokenTag:
    """The observed token at a failure point, or the end-of-input marker."""

    token: Any = None
    is_end: bool = False

    @classmethod
    def of(cls, token: Any) -> TokenTag:
        return cls(token=token)

    @classmethod
    def end_of_input(cls) -> TokenTag:
        return cls(is_end=True)

    def describe(self) -> str:
        if self.is_end:
            return "end of input"
        return render_token(self.token)


@dataclass(frozen=True, slots=True)
class Unexpected:
    """Payload for deterministically wrong input.

    Attributes:
        found: What was actually at the failure point
        expecting: What would have matched
        index: Position of the offending token relative to where the
            failed match started (0 for single-token matches)

    """

    found: TokenTag
    expecting: ExpectedHint
    index: int = 0

    def describe(self, limit: int = 16) -> str:
        return f"expected {self.expecting.describe(limit)}, found {self.found.describe()}"


class RequirementKind(Enum):
    """How precisely a Requirement knows the missing amount."""

    EXACT = auto()
    AT_LEAST = auto()
    UNKNOWN = auto()


@dataclass(frozen=True, slots=True)
class Requirement:
    """How much more input would resolve an undetermined match.

    split_at reports exact shortfalls; complete() reports unknown ones.
    AT_LEAST exists for streaming sources that can bound the shortfall
    without knowing it precisely.

    """

    kind: RequirementKind
    amount: int | None = None

    @classmethod
    def exact(cls, amount: int) -> Requirement:
        return cls(RequirementKind.EXACT, amount)

    @classmethod
    def at_least(cls, amount: int) -> Requirement:
        return cls(RequirementKind.AT_LEAST, amount)

    @classmethod
    def unknown(cls) -> Requirement:
        return cls(RequirementKind.UNKNOWN)

    @property
    def is_known(self) -> bool:
        return self.kind is not RequirementKind.UNKNOWN

    def describe(self) -> str:
        match self.kind:
            case RequirementKind.EXACT:
                return f"{self.amount} more token{'' if self.amount == 1 else 's'}"
            case RequirementKind.AT_LEAST:
                return f"at least {self.amount} more token{'' if self.amount == 1 else 's'}"
            case _:
                return "more input"
