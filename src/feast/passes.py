"""The parsing cursor and the outcome types threaded through combinators.

A Pass owns the remaining input plus enough context to build errors at the
current position. Combinators take a Pass and return an Outcome:

- Success(value, pass_): the produced value and the advanced pass
- Failure(error, pass_): the diagnostic and the pass at the failure point

Failures never discard the pass, so or_ and peek can resume from exactly
where the failing branch stopped.

Thread Safety:
Passes and outcomes are immutable values. Independent parses share nothing
but the read-only backing storage.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Protocol, runtime_checkable

from feast.errors import InsufficientInputError, InvalidCommitError
from feast.hinting import Requirement, Unexpected
from feast.input import Input, SliceInput


class ErrorKind(Enum):
    """The two mutually exclusive failure kinds."""

    UNEXPECTED = auto()  # deterministically wrong input
    INCOMPLETE = auto()  # ran out of input before the match was decided


@dataclass(frozen=True, slots=True)
class PassError:
    """A parser failure tied to an absolute input offset.

    Exactly one of unexpected/requirement is set, according to kind.
    offset is the position of the pass that failed (where the failed match
    started); token_offset points at the offending token itself.

    """

    kind: ErrorKind
    offset: int
    unexpected: Unexpected | None = None
    requirement: Requirement | None = None

    @classmethod
    def from_unexpected(cls, offset: int, unexpected: Unexpected) -> PassError:
        return cls(ErrorKind.UNEXPECTED, offset, unexpected=unexpected)

    @classmethod
    def from_requirement(cls, offset: int, requirement: Requirement) -> PassError:
        return cls(ErrorKind.INCOMPLETE, offset, requirement=requirement)

    @property
    def is_unexpected(self) -> bool:
        return self.kind is ErrorKind.UNEXPECTED

    @property
    def is_incomplete(self) -> bool:
        return self.kind is ErrorKind.INCOMPLETE

    @property
    def token_offset(self) -> int:
        if self.unexpected is not None:
            return self.offset + self.unexpected.index
        return self.offset

    def describe(self, limit: int = 16, *, final: bool = False) -> str:
        """Render the failure for humans.

        Args:
            limit: Maximum number of tokens shown for sequences
            final: The input is known to be complete, so an Incomplete
                failure is reported as an unexpected end of input

        """
        if self.unexpected is not None:
            return self.unexpected.describe(limit)
        requirement = self.requirement or Requirement.unknown()
        if final:
            return f"unexpected end of input, needed {requirement.describe()}"
        return f"incomplete input, need {requirement.describe()}"


@dataclass(frozen=True, slots=True)
class Success[T]:
    """A successful parse: the value and the advanced pass. Always truthy."""

    value: T
    pass_: Pass

    def __bool__(self) -> bool:
        return True

    def __iter__(self) -> Iterator[Any]:
        yield self.value
        yield self.pass_


@dataclass(frozen=True, slots=True)
class Failure:
    """A failed parse: the error and the pass at the failure point. Always falsy."""

    error: PassError
    pass_: Pass

    def __bool__(self) -> bool:
        return False

    def __iter__(self) -> Iterator[Any]:
        yield self.error
        yield self.pass_


type Outcome[T] = Success[T] | Failure

type Parser[T] = Callable[[Pass], Outcome[T]]


@runtime_checkable
class Pass(Protocol):
    """Cursor contract every combinator is written against.

    Implementations must be immutable: every method either inspects the
    pass or returns a new one.
    """

    def input(self) -> Input:
        """Read-only view of the remaining input."""
        ...

    def is_partial(self) -> bool:
        """Whether more input may arrive after the current buffer."""
        ...

    def with_input_result[R](self, op: Callable[..., R], *args: Any) -> Outcome[R]:
        """Run a fallible input operation without advancing.

        Insufficiency becomes an Incomplete failure at this pass.
        """
        ...

    def commit(self, remaining: Input) -> Pass:
        """Return a pass whose remaining input is remaining."""
        ...

    def with_input_error_unexpected(self, unexpected: Unexpected) -> Failure: ...

    def with_input_error_incomplete(self, requirement: Requirement) -> Failure: ...


class SlicePass:
    """Pass over an in-memory SliceInput.

    A complete pass (the default) holds the whole input for a one-shot
    parse. A partial pass holds the data buffered so far; combinators that
    read to the end of it report incompleteness instead of finishing.

    Example:
        >>> pass_ = SlicePass.from_source(b"hello")
        >>> pass_.offset, len(pass_.input())
        (0, 5)

    """

    __slots__ = ("_input", "_partial")

    def __init__(self, input_: SliceInput, *, partial: bool = False) -> None:
        self._input = input_
        self._partial = partial

    @classmethod
    def from_source(cls, source: Sequence[Any], *, partial: bool = False) -> SlicePass:
        return cls(SliceInput(source), partial=partial)

    @property
    def offset(self) -> int:
        """Absolute offset of the next unconsumed token."""
        return self._input.start

    def input(self) -> SliceInput:
        return self._input

    def is_partial(self) -> bool:
        return self._partial

    def with_input_result[R](self, op: Callable[..., R], *args: Any) -> Outcome[R]:
        try:
            result = op(*args)
        except InsufficientInputError as exc:
            return self.with_input_error_incomplete(exc.requirement)
        return Success(result, self)

    def commit(self, remaining: SliceInput) -> SlicePass:
        """Advance (or, for lookahead, rewind) to remaining.

        Raises:
            InvalidCommitError: remaining is not a suffix of this pass's
                backing storage window

        """
        current = self._input
        if not isinstance(remaining, SliceInput) or remaining.source is not current.source:
            raise InvalidCommitError("committed input does not share this pass's storage")
        if remaining.end != current.end:
            raise InvalidCommitError(
                f"committed input ends at {remaining.end}, expected {current.end}"
            )
        return SlicePass(remaining, partial=self._partial)

    def with_input_error_unexpected(self, unexpected: Unexpected) -> Failure:
        return Failure(PassError.from_unexpected(self.offset, unexpected), self)

    def with_input_error_incomplete(self, requirement: Requirement) -> Failure:
        return Failure(PassError.from_requirement(self.offset, requirement), self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SlicePass):
            return NotImplemented
        return (
            self._input.source is other._input.source
            and self._input.start == other._input.start
            and self._input.end == other._input.end
            and self._partial == other._partial
        )

    def __hash__(self) -> int:
        return hash((id(self._input.source), self._input.start, self._input.end, self._partial))

    def __repr__(self) -> str:
        mode = "partial" if self._partial else "complete"
        return f"SlicePass(offset={self.offset}, remaining={len(self._input)}, {mode})"
