"""Thread safety tests for shared parsers.

Parsers are closures over immutable values and passes never mutate shared
storage, so one parser and one source buffer can serve many threads.
These tests use real threading to catch actual concurrency bugs.
"""

from concurrent.futures import ThreadPoolExecutor

from feast import SlicePass, and_then, in_range, map_, or_, parse, tag
from feast.passes import Outcome, Pass


def repeat_digits(count: int, pass_: Pass) -> Outcome[int]:
    """Sum count further digits."""
    digit = map_(in_range(ord("0"), ord("9")), lambda t: t - ord("0"))
    total = 0
    for _ in range(count):
        outcome = digit(pass_)
        if not outcome:
            return outcome
        value, pass_ = outcome
        total += value
    return map_(tag(b";"), lambda _: total)(pass_)


class TestConcurrentParsing:
    """Verify independent parses over shared parsers and storage."""

    def test_shared_parser_and_source(self) -> None:
        source = b"3123;"
        parser = and_then(map_(in_range(ord("0"), ord("9")), lambda t: t - ord("0")), repeat_digits)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: parse(parser, source), range(200)))

        assert results == [6] * 200

    def test_shared_pass_is_never_mutated(self) -> None:
        pass_in = SlicePass.from_source(b"left right")
        parser = or_(tag(b"right"), tag(b"left"))

        with ThreadPoolExecutor(max_workers=8) as pool:
            outcomes = list(pool.map(lambda _: parser(pass_in), range(200)))

        assert all(outcome.pass_.offset == 4 for outcome in outcomes)
        assert pass_in.offset == 0
        assert pass_in.input() == b"left right"
