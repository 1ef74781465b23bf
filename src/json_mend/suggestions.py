"""Map a diagnosed failure to one human-readable remediation hint."""

from __future__ import annotations

from .types import Cause, ErrorKind

DEFAULT_SUGGESTION = "Check the syntax around the highlighted position"

_COMMA_SUGGESTION = "Remove the duplicate or trailing comma"
_BRACE_SUGGESTION = "Add a comma after the closing brace } before the next property"
_BRACKET_SUGGESTION = "Add a comma after the closing bracket ] before the next property"
_VALUE_SUGGESTION = "Add a comma after the value before the next property"
_SEPARATOR_SUGGESTION = "Add a comma to separate properties or array items"
_UNCLOSED_BRACE_SUGGESTION = "Check that all opening braces { have matching closing braces }"
_UNCLOSED_BRACKET_SUGGESTION = "Check that all opening brackets [ have matching closing brackets ]"
_BALANCE_SUGGESTION = "Check that opening and closing brackets/braces are properly balanced"

_CAUSE_SUGGESTIONS = {
    Cause.DUPLICATE_COMMA: _COMMA_SUGGESTION,
    Cause.TRAILING_COMMA: _COMMA_SUGGESTION,
    Cause.MISSING_COMMA_AFTER_BRACE: _BRACE_SUGGESTION,
    Cause.MISSING_COMMA_AFTER_BRACKET: _BRACKET_SUGGESTION,
    Cause.MISSING_COMMA_AFTER_VALUE: _VALUE_SUGGESTION,
    Cause.UNCLOSED_BRACE: _UNCLOSED_BRACE_SUGGESTION,
    Cause.UNCLOSED_BRACKET: _UNCLOSED_BRACKET_SUGGESTION,
}

_KIND_SUGGESTIONS = {
    ErrorKind.STRUCTURAL_COMMA: _COMMA_SUGGESTION,
    ErrorKind.MISSING_COMMA: _SEPARATOR_SUGGESTION,
    ErrorKind.UNBALANCED_BRACKETS: _BALANCE_SUGGESTION,
}


def suggest(
    kind: ErrorKind,
    cause: Cause | None = None,
    message: str = "",
    token: str | None = None,
) -> str:
    """Return exactly one remediation hint.

    Structural causes win over the error kind, which wins over keywords in
    the parser message. Falls back to ``DEFAULT_SUGGESTION``.

    Examples:
        >>> suggest(ErrorKind.MISSING_COMMA, Cause.MISSING_COMMA_AFTER_VALUE)
        'Add a comma after the value before the next property'
    """
    if cause is not None and cause in _CAUSE_SUGGESTIONS:
        return _CAUSE_SUGGESTIONS[cause]
    if kind is ErrorKind.INVALID_CHARACTER and token:
        return _character_suggestion(token)
    if kind in _KIND_SUGGESTIONS:
        return _KIND_SUGGESTIONS[kind]
    return suggest_from_message(message)


def display_char(char: str) -> str:
    """Render a character for a message, escaping unprintable ones."""
    return char if char.isprintable() else f"\\u{ord(char):04x}"


def _character_suggestion(char: str) -> str:
    if char in "<>":
        return "Remove the \"<\" or \">\" characters - they're not valid in JSON"
    return f"Remove the \"{display_char(char)}\" character - it's not valid in JSON"


def suggest_from_message(message: str) -> str:
    """Pick a hint by keyword-matching a raw parser message."""
    lowered = (message or "").lower()

    if "duplicate comma" in lowered or "unexpected comma" in lowered:
        return _COMMA_SUGGESTION

    if "missing comma" in lowered:
        if "after closing brace" in lowered:
            return _BRACE_SUGGESTION
        if "after closing bracket" in lowered:
            return _BRACKET_SUGGESTION
        if "after value" in lowered:
            return _VALUE_SUGGESTION
        return _SEPARATOR_SUGGESTION

    if "missing closing brace" in lowered:
        return _UNCLOSED_BRACE_SUGGESTION
    if "missing closing bracket" in lowered:
        return _UNCLOSED_BRACKET_SUGGESTION
    if "bracket balance" in lowered:
        return _BALANCE_SUGGESTION

    # Generic token classes reported by strict parsers
    if "unexpected token" in lowered or "unexpected character" in lowered:
        if "'" in lowered:
            return "Check for missing quotes around strings or keys"
        return "Check for missing commas, brackets, or quotes"
    if "delimiter" in lowered:
        return "Check for missing commas, brackets, or quotes"
    if "unexpected end" in lowered or "eof" in lowered or "end of data" in lowered:
        return "Check for missing closing brackets, braces, or quotes"
    if "unexpected number" in lowered:
        return "Check for invalid number format or missing quotes"
    if "unexpected string" in lowered:
        return "Check for missing quotes or invalid string format"
    if "duplicate key" in lowered:
        return "Remove duplicate object keys"

    if "=" in lowered:
        return _character_suggestion("=")
    if ";" in lowered:
        return _character_suggestion(";")
    if "<" in lowered or ">" in lowered:
        return _character_suggestion("<")

    return DEFAULT_SUGGESTION
