"""Combinator constructors.

Every function here builds a parser: a callable taking a Pass and returning
an Outcome. Parsers never raise for bad input; they return Failure paired
with the pass at the failure point, and forward failures they do not
resolve unchanged.

Usage:
    >>> from feast.passes import SlicePass
    >>> digit = in_range(ord("0"), ord("9"))
    >>> number = map_(digit, lambda token: token - ord("0"))
    >>> value, pass_ = number(SlicePass.from_source(b"5"))
    >>> value
    5

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from feast.config import get_parse_config
from feast.hinting import ExpectedHint, Requirement, TokenTag, Unexpected
from feast.input import Capture, Captured, Input, OrderedToken
from feast.passes import Outcome, Parser, Pass, Success
from feast.utils.logger import get_logger

logger = get_logger(__name__)

_END_OF_INPUT = ExpectedHint.named("end of input")


def tag(sequence: Sequence[Any]) -> Parser[Input]:
    """Match sequence token-by-token at the front of the input.

    A mismatch among the available tokens is Unexpected, naming the whole
    sequence and the index of the offending token; nothing is consumed.
    Input that is a proper prefix of sequence is Incomplete, never
    Unexpected. Returns the matched span as a view of the input.
    """
    tag_len = len(sequence)
    expecting = ExpectedHint.tag(sequence)

    def parse_tag(pass_: Pass) -> Outcome[Input]:
        input_ = pass_.input()
        for index, (expected, actual) in enumerate(zip(sequence, input_)):
            if expected != actual:
                return pass_.with_input_error_unexpected(
                    Unexpected(found=TokenTag.of(actual), expecting=expecting, index=index)
                )
        outcome = pass_.with_input_result(input_.split_at, tag_len)
        if not outcome:
            return outcome
        (taken, rest), pass_ = outcome
        return Success(taken, pass_.commit(rest))

    return parse_tag


def take_token_if(
    predicate: Callable[[Any], bool],
    expecting: ExpectedHint | None = None,
) -> Parser[Any]:
    """Consume a single token accepted by predicate.

    Without an explicit hint, failures name the predicate's __name__.
    """
    if expecting is None:
        expecting = ExpectedHint.named(getattr(predicate, "__name__", repr(predicate)))

    def parse_token(pass_: Pass) -> Outcome[Any]:
        outcome = pass_.with_input_result(pass_.input().split_at, 1)
        if not outcome:
            return outcome
        (taken, rest), pass_ = outcome
        token = taken[0]
        if not predicate(token):
            return pass_.with_input_error_unexpected(
                Unexpected(found=TokenTag.of(token), expecting=expecting)
            )
        return Success(token, pass_.commit(rest))

    return parse_token


def in_range(low: OrderedToken, high: OrderedToken) -> Parser[Any]:
    """Match one token t with low <= t <= high (inclusive both ends)."""
    return take_token_if(
        lambda token: low <= token <= high,
        ExpectedHint.range(low, high),
    )


def or_[T](a: Parser[T], b: Parser[T]) -> Parser[T]:
    """Try a, then b from the pass a's failure returned.

    When both fail, b's error is the result and a's diagnostic is dropped.
    """

    def parse_or(pass_: Pass) -> Outcome[T]:
        first = a(pass_)
        if first:
            return first
        second = b(first.pass_)
        config = get_parse_config()
        if not second and config.trace:
            logger.debug(
                "alternation discarded first-branch error at offset %d: %s",
                first.error.offset,
                first.error.describe(config.preview_tokens),
            )
        return second

    return parse_or


def peek[T](sub: Parser[T]) -> Parser[T]:
    """Run sub and keep its value, but rewind the input on success."""

    def parse_peek(pass_: Pass) -> Outcome[T]:
        input_ = pass_.input()
        outcome = sub(pass_)
        if not outcome:
            return outcome
        value, pass_ = outcome
        return Success(value, pass_.commit(input_))

    return parse_peek


def map_[T, R](sub: Parser[T], transform: Callable[[T], R]) -> Parser[R]:
    """Apply transform to sub's value; the pass advances as sub's does."""

    def parse_map(pass_: Pass) -> Outcome[R]:
        outcome = sub(pass_)
        if not outcome:
            return outcome
        value, pass_ = outcome
        return Success(transform(value), pass_)

    return parse_map


def and_then[T, R](
    sub: Parser[T],
    continuation: Callable[[T, Pass], Outcome[R]],
) -> Parser[R]:
    """Hand sub's value and advanced pass to continuation.

    Lets the next step depend on what was just parsed, e.g. a length
    prefix followed by that many tokens.
    """

    def parse_and_then(pass_: Pass) -> Outcome[R]:
        outcome = sub(pass_)
        if not outcome:
            return outcome
        value, pass_ = outcome
        return continuation(value, pass_)

    return parse_and_then


def complete[V](sub: Parser[Capture[V]]) -> Parser[V]:
    """Unwrap a complete capture, or fail with an unknown-amount Incomplete."""

    def parse_complete(pass_: Pass) -> Outcome[V]:
        outcome = sub(pass_)
        if not outcome:
            return outcome
        capture, pass_ = outcome
        if capture.is_complete():
            return Success(capture.value(), pass_)
        return pass_.with_input_error_incomplete(Requirement.unknown())

    return parse_complete


def take_while(predicate: Callable[[Any], bool]) -> Parser[Captured[Input]]:
    """Consume the longest run of tokens accepted by predicate.

    The run is a partial capture when it stops at the end of the buffer of
    a partial pass, since the next chunk could extend it.
    """

    def parse_take_while(pass_: Pass) -> Outcome[Captured[Input]]:
        input_ = pass_.input()
        count = 0
        for token in input_:
            if not predicate(token):
                break
            count += 1
        outcome = pass_.with_input_result(input_.split_at, count)
        if not outcome:
            return outcome
        (taken, rest), pass_ = outcome
        if count == len(input_) and pass_.is_partial():
            capture = Captured.partial(taken)
        else:
            capture = Captured.complete(taken)
        return Success(capture, pass_.commit(rest))

    return parse_take_while


def end_of_input() -> Parser[None]:
    """Succeed only when no input remains and none can arrive."""

    def parse_end(pass_: Pass) -> Outcome[None]:
        input_ = pass_.input()
        if len(input_):
            return pass_.with_input_error_unexpected(
                Unexpected(found=TokenTag.of(input_[0]), expecting=_END_OF_INPUT)
            )
        if pass_.is_partial():
            return pass_.with_input_error_incomplete(Requirement.unknown())
        return Success(None, pass_)

    return parse_end


__all__ = [
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
]
