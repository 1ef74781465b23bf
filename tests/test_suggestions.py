"""Tests for json_mend.suggestions module."""

import pytest

from json_mend.suggestions import DEFAULT_SUGGESTION, display_char, suggest, suggest_from_message
from json_mend.types import Cause, ErrorKind


class TestSuggest:
    """Tests for suggest function."""

    @pytest.mark.parametrize(
        ("cause", "expected"),
        [
            (Cause.DUPLICATE_COMMA, "Remove the duplicate or trailing comma"),
            (Cause.TRAILING_COMMA, "Remove the duplicate or trailing comma"),
            (Cause.MISSING_COMMA_AFTER_BRACE, "Add a comma after the closing brace } before the next property"),
            (Cause.MISSING_COMMA_AFTER_BRACKET, "Add a comma after the closing bracket ] before the next property"),
            (Cause.MISSING_COMMA_AFTER_VALUE, "Add a comma after the value before the next property"),
            (Cause.UNCLOSED_BRACE, "Check that all opening braces { have matching closing braces }"),
            (Cause.UNCLOSED_BRACKET, "Check that all opening brackets [ have matching closing brackets ]"),
        ],
    )
    def test_cause_suggestions(self, cause: Cause, expected: str) -> None:
        """Test that each structural cause has its own hint."""
        assert suggest(cause.kind, cause) == expected

    def test_cause_wins_over_message(self) -> None:
        """Test that a cause takes priority over message keywords."""
        result = suggest(ErrorKind.STRUCTURAL_COMMA, Cause.TRAILING_COMMA, "unexpected end of data")
        assert result == "Remove the duplicate or trailing comma"

    def test_invalid_character(self) -> None:
        """Test the hint for a stray character."""
        result = suggest(ErrorKind.INVALID_CHARACTER, Cause.INVALID_CHARACTER, token="=")
        assert result == "Remove the \"=\" character - it's not valid in JSON"

    def test_angle_brackets(self) -> None:
        """Test the shared hint for < and >."""
        result = suggest(ErrorKind.INVALID_CHARACTER, Cause.INVALID_CHARACTER, token=">")
        assert result == "Remove the \"<\" or \">\" characters - they're not valid in JSON"

    def test_unprintable_character_escaped(self) -> None:
        """Test that invisible characters are spelled out in the hint."""
        result = suggest(ErrorKind.INVALID_CHARACTER, Cause.INVALID_CHARACTER, token="\ud800")
        assert result == "Remove the \"\\ud800\" character - it's not valid in JSON"

    def test_kind_without_cause(self) -> None:
        """Test falling back to the error kind."""
        assert suggest(ErrorKind.MISSING_COMMA) == "Add a comma to separate properties or array items"
        assert suggest(ErrorKind.UNBALANCED_BRACKETS) == (
            "Check that opening and closing brackets/braces are properly balanced"
        )

    def test_generic_uses_message(self) -> None:
        """Test that generic errors are matched on the message."""
        result = suggest(ErrorKind.GENERIC_TOKEN_ERROR, message="unexpected end of data: line 1 column 2 (char 1)")
        assert result == "Check for missing closing brackets, braces, or quotes"

    def test_unlocatable_default(self) -> None:
        """Test the default hint."""
        assert suggest(ErrorKind.UNLOCATABLE, message="something broke") == DEFAULT_SUGGESTION

    def test_always_non_empty(self) -> None:
        """Test that every kind yields some hint."""
        for kind in ErrorKind:
            assert suggest(kind)


class TestSuggestFromMessage:
    """Tests for suggest_from_message function."""

    @pytest.mark.parametrize(
        ("message", "expected"),
        [
            ("Unexpected comma", "Remove the duplicate or trailing comma"),
            (
                "Missing comma - add comma after closing brace",
                "Add a comma after the closing brace } before the next property",
            ),
            ("Missing comma somewhere", "Add a comma to separate properties or array items"),
            ("Missing closing bracket", "Check that all opening brackets [ have matching closing brackets ]"),
            ("Unexpected token 'x' at position 3", "Check for missing quotes around strings or keys"),
            ("unexpected character: line 1 column 4 (char 3)", "Check for missing commas, brackets, or quotes"),
            ("Expecting ',' delimiter", "Check for missing commas, brackets, or quotes"),
            ("Unexpected end of JSON input", "Check for missing closing brackets, braces, or quotes"),
            ("Unexpected number in JSON", "Check for invalid number format or missing quotes"),
            ("Unexpected string in JSON", "Check for missing quotes or invalid string format"),
            ("duplicate key found", "Remove duplicate object keys"),
            ("bad = sign", "Remove the \"=\" character - it's not valid in JSON"),
            ("", DEFAULT_SUGGESTION),
        ],
    )
    def test_keywords(self, message: str, expected: str) -> None:
        """Test keyword matching on raw messages."""
        assert suggest_from_message(message) == expected

    def test_case_insensitive(self) -> None:
        """Test that matching ignores case."""
        assert suggest_from_message("UNEXPECTED END") == "Check for missing closing brackets, braces, or quotes"


class TestDisplayChar:
    """Tests for display_char function."""

    def test_printable(self) -> None:
        """Test that printable characters are shown as is."""
        assert display_char("=") == "="
        assert display_char("\u00e9") == "\u00e9"

    def test_unprintable(self) -> None:
        """Test that control and surrogate characters are escaped."""
        assert display_char("\ud800") == "\\ud800"
        assert display_char("\t") == "\\u0009"
        assert display_char("\u200b") == "\\u200b"
