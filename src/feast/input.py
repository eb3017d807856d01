"""Token, Input and Capture contracts, plus the in-memory implementations.

Any input source that satisfies the Input protocol (and a Pass over it)
gets the whole combinator library. SliceInput is the reference
implementation: a (start, end) view over a read-only Sequence that is
narrowed, never copied.

Thread Safety:
SliceInput and Captured are immutable. The backing sequence is shared
read-only and must outlive every view derived from it.

"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any, Protocol, overload, runtime_checkable

from feast.errors import IncompleteCaptureError, InsufficientInputError
from feast.hinting import Requirement


@runtime_checkable
class Token(Protocol):
    """An atomic input unit. Equality is all combinators rely on by default."""

    def __eq__(self, other: object, /) -> bool: ...


@runtime_checkable
class OrderedToken(Token, Protocol):
    """A token with a total order, required by in_range."""

    def __lt__(self, other: Any, /) -> bool: ...
    def __le__(self, other: Any, /) -> bool: ...


@runtime_checkable
class Capture[V](Protocol):
    """A produced value annotated with a completeness flag.

    value() is only legal once is_complete() has returned True.
    """

    def is_complete(self) -> bool: ...
    def value(self) -> V: ...


@runtime_checkable
class Input(Protocol):
    """An ordered, splittable sequence of tokens.

    split_at(n) returns (taken, remaining) as views over the same storage,
    or raises InsufficientInputError when fewer than n tokens remain.
    """

    def split_at(self, n: int) -> tuple[Input, Input]: ...
    def __len__(self) -> int: ...
    def __iter__(self) -> Iterator[Any]: ...
    def __getitem__(self, index: int) -> Any: ...


class SliceInput:
    """Zero-copy view over a read-only sequence of tokens.

    Indexing and iteration are relative to the view. Equality compares
    content, so a view can be checked directly against bytes or str.
    A SliceInput is also a complete Capture of itself.

    Example:
        >>> taken, rest = SliceInput(b"hello").split_at(2)
        >>> taken == b"he", rest == b"llo"
        (True, True)

    """

    __slots__ = ("_source", "_start", "_end")

    def __init__(self, source: Sequence[Any], start: int = 0, end: int | None = None) -> None:
        size = len(source)
        if end is None:
            end = size
        if not 0 <= start <= end <= size:
            raise ValueError(f"invalid view bounds {start}..{end} for source of length {size}")
        self._source = source
        self._start = start
        self._end = end

    @property
    def source(self) -> Sequence[Any]:
        """The shared backing sequence."""
        return self._source

    @property
    def start(self) -> int:
        """Absolute offset of the first token in the view."""
        return self._start

    @property
    def end(self) -> int:
        """Absolute offset one past the last token in the view."""
        return self._end

    def split_at(self, n: int) -> tuple[SliceInput, SliceInput]:
        """Split off the first n tokens.

        Raises:
            ValueError: n is negative
            InsufficientInputError: fewer than n tokens remain

        """
        if n < 0:
            raise ValueError(f"cannot split at negative count {n}")
        available = self._end - self._start
        if n > available:
            raise InsufficientInputError(Requirement.exact(n - available))
        mid = self._start + n
        return (
            SliceInput(self._source, self._start, mid),
            SliceInput(self._source, mid, self._end),
        )

    def materialize(self) -> Sequence[Any]:
        """Copy the viewed tokens out of the backing sequence."""
        return self._source[self._start : self._end]

    # -- Capture ---------------------------------------------------------------

    def is_complete(self) -> bool:
        return True

    def value(self) -> SliceInput:
        return self

    # -- Sequence behaviour ----------------------------------------------------

    def __len__(self) -> int:
        return self._end - self._start

    def __iter__(self) -> Iterator[Any]:
        source = self._source
        for i in range(self._start, self._end):
            yield source[i]

    @overload
    def __getitem__(self, index: int) -> Any: ...
    @overload
    def __getitem__(self, index: slice) -> SliceInput: ...

    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            start, stop, step = index.indices(len(self))
            if step != 1:
                raise ValueError("SliceInput views do not support stepped slices")
            return SliceInput(self._source, self._start + start, self._start + max(start, stop))
        size = self._end - self._start
        if index < 0:
            index += size
        if not 0 <= index < size:
            raise IndexError("SliceInput index out of range")
        return self._source[self._start + index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (SliceInput, Sequence)):
            return len(self) == len(other) and all(a == b for a, b in zip(self, other))
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SliceInput({self.materialize()!r}, start={self._start}, end={self._end})"


class Captured[V]:
    """Concrete Capture: a value plus whether enough input produced it.

    Example:
        >>> Captured.complete(5).value()
        5
        >>> Captured.partial(b"12").is_complete()
        False

    """

    __slots__ = ("_value", "_complete")

    def __init__(self, value: V, complete: bool = True) -> None:
        self._value = value
        self._complete = complete

    @classmethod
    def complete(cls, value: V) -> Captured[V]:
        return cls(value, True)

    @classmethod
    def partial(cls, value: V) -> Captured[V]:
        return cls(value, False)

    def is_complete(self) -> bool:
        return self._complete

    def value(self) -> V:
        """Return the captured value.

        Raises:
            IncompleteCaptureError: the capture has not been completed

        """
        if not self._complete:
            raise IncompleteCaptureError("value of an incomplete capture is not final")
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Captured):
            return NotImplemented
        return self._complete == other._complete and self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        state = "complete" if self._complete else "partial"
        return f"Captured.{state}({self._value!r})"
