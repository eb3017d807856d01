"""Tests for diagnostic payloads and their rendering."""

import pytest

from feast.hinting import (
    ExpectedHint,
    HintKind,
    Requirement,
    RequirementKind,
    TokenTag,
    Unexpected,
    render_sequence,
    render_token,
)
from feast.input import SliceInput


class TestRenderToken:
    """Verify single-token rendering."""

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            (ord("p"), "'p' (0x70)"),
            (0x00, "0x00"),
            (0xFF, "0xff"),
            (300, "300"),
            ("x", "'x'"),
            (True, "True"),
            ("NUM", "'NUM'"),
        ],
    )
    def test_render(self, token: object, expected: str) -> None:
        assert render_token(token) == expected


class TestRenderSequence:
    """Verify sequence rendering and truncation."""

    def test_bytes(self) -> None:
        assert render_sequence(b"hello", 16) == "b'hello'"

    def test_str_truncated(self) -> None:
        assert render_sequence("abcdef", 3) == "'abc'..."

    def test_bytearray_rendered_as_bytes(self) -> None:
        assert render_sequence(bytearray(b"ab"), 16) == "b'ab'"

    def test_list(self) -> None:
        assert render_sequence([1, 2], 16) == "[1, 2]"
        assert render_sequence([1, 2, 3, 4], 2) == "[1, 2, ...]"

    def test_view_is_materialized(self) -> None:
        assert render_sequence(SliceInput(b"hello", 1, 3), 16) == "b'el'"


class TestExpectedHint:
    """Verify hint construction and descriptions."""

    def test_tag(self) -> None:
        hint = ExpectedHint.tag(b"hello")
        assert hint.kind is HintKind.TAG
        assert hint.describe() == "b'hello'"

    def test_named(self) -> None:
        hint = ExpectedHint.named("ascii digit")
        assert hint.kind is HintKind.NAMED
        assert hint.describe() == "ascii digit"

    def test_range_of_chars(self) -> None:
        assert ExpectedHint.range("0", "9").describe() == "'0'..='9'"

    def test_range_of_bytes(self) -> None:
        assert ExpectedHint.range(0x30, 0x39).describe() == "'0' (0x30)..='9' (0x39)"

    def test_equality(self) -> None:
        assert ExpectedHint.tag(b"ab") == ExpectedHint.tag(b"ab")
        assert ExpectedHint.tag(b"ab") != ExpectedHint.named("ab")

    def test_immutability(self) -> None:
        hint = ExpectedHint.named("x")
        with pytest.raises(AttributeError):
            hint.name = "y"  # type: ignore[misc]


class TestTokenTag:
    """Verify observed-token markers."""

    def test_token(self) -> None:
        tag = TokenTag.of(ord("a"))
        assert not tag.is_end
        assert tag.describe() == "'a' (0x61)"

    def test_end_of_input(self) -> None:
        tag = TokenTag.end_of_input()
        assert tag.is_end
        assert tag.describe() == "end of input"

    def test_end_differs_from_none_token(self) -> None:
        assert TokenTag.of(None) != TokenTag.end_of_input()


class TestUnexpected:
    """Verify the mismatch payload."""

    def test_describe(self) -> None:
        unexpected = Unexpected(found=TokenTag.of("x"), expecting=ExpectedHint.named("digit"))
        assert unexpected.describe() == "expected digit, found 'x'"
        assert unexpected.index == 0

    def test_describe_end_of_input(self) -> None:
        unexpected = Unexpected(found=TokenTag.end_of_input(), expecting=ExpectedHint.tag("ab"))
        assert unexpected.describe() == "expected 'ab', found end of input"


class TestRequirement:
    """Verify insufficiency descriptions."""

    def test_exact(self) -> None:
        requirement = Requirement.exact(3)
        assert requirement.kind is RequirementKind.EXACT
        assert requirement.amount == 3
        assert requirement.is_known
        assert requirement.describe() == "3 more tokens"

    def test_exact_singular(self) -> None:
        assert Requirement.exact(1).describe() == "1 more token"

    def test_at_least(self) -> None:
        requirement = Requirement.at_least(2)
        assert requirement.kind is RequirementKind.AT_LEAST
        assert requirement.describe() == "at least 2 more tokens"

    def test_unknown(self) -> None:
        requirement = Requirement.unknown()
        assert requirement.amount is None
        assert not requirement.is_known
        assert requirement.describe() == "more input"
