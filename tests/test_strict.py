"""Tests for json_mend.strict module."""

from json_mend.strict import is_valid, strict_parse
from json_mend.types import Invalid, Valid


class TestStrictParse:
    """Tests for strict_parse function."""

    def test_valid_object(self) -> None:
        """Test parsing a valid object."""
        outcome = strict_parse('{"key": [1, 2.5, null]}')
        assert isinstance(outcome, Valid)
        assert outcome.value == {"key": [1, 2.5, None]}
        assert outcome.elapsed_ms >= 0

    def test_valid_scalar(self) -> None:
        """Test that top-level scalars are accepted."""
        outcome = strict_parse("42")
        assert isinstance(outcome, Valid)
        assert outcome.value == 42

    def test_invalid_keeps_message(self) -> None:
        """Test that the parser message is passed through."""
        outcome = strict_parse('{"a": 1,}')
        assert isinstance(outcome, Invalid)
        assert outcome.raw_message

    def test_relaxed_syntax_rejected(self) -> None:
        """Test that relaxed syntax is not accepted."""
        for text in ["{a: 1}", "{'a': 1}", "[1,]", "[NaN]", "[0x1F]", "[.5]", "// c\n1", ""]:
            assert isinstance(strict_parse(text), Invalid), text


class TestIsValid:
    """Tests for is_valid function."""

    def test_valid(self) -> None:
        """Test valid JSON."""
        assert is_valid("[true, false]")

    def test_invalid(self) -> None:
        """Test invalid JSON."""
        assert not is_valid("[True]")


class TestParserLimits:
    """Tests for well-formed JSON that orjson still rejects."""

    def test_escaped_lone_surrogate(self) -> None:
        """Test that an escaped unpaired surrogate is rejected."""
        outcome = strict_parse(r'["\ud800"]')
        assert isinstance(outcome, Invalid)

    def test_nesting_depth(self) -> None:
        """Test that nesting past the recursion limit is rejected."""
        assert is_valid("[" * 100 + "]" * 100)
        assert not is_valid("[" * 1100 + "]" * 1100)
