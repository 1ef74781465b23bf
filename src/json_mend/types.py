"""Type definitions for json-mend."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class ErrorKind(Enum):
    """Classification of repair failures."""

    STRUCTURAL_COMMA = "structural_comma"
    MISSING_COMMA = "missing_comma"
    UNBALANCED_BRACKETS = "unbalanced_brackets"
    INVALID_CHARACTER = "invalid_character"
    GENERIC_TOKEN_ERROR = "generic_token_error"
    UNLOCATABLE = "unlocatable"


class Cause(Enum):
    """Concrete structural defect found by the structural scan."""

    DUPLICATE_COMMA = "duplicate_comma"
    TRAILING_COMMA = "trailing_comma"
    MISSING_COMMA_AFTER_BRACE = "missing_comma_after_brace"
    MISSING_COMMA_AFTER_BRACKET = "missing_comma_after_bracket"
    MISSING_COMMA_AFTER_VALUE = "missing_comma_after_value"
    UNCLOSED_BRACE = "unclosed_brace"
    UNCLOSED_BRACKET = "unclosed_bracket"
    INVALID_CHARACTER = "invalid_character"

    @property
    def kind(self) -> ErrorKind:
        return _CAUSE_KINDS[self]

    @property
    def message(self) -> str:
        return _CAUSE_MESSAGES[self]


_CAUSE_KINDS = {
    Cause.DUPLICATE_COMMA: ErrorKind.STRUCTURAL_COMMA,
    Cause.TRAILING_COMMA: ErrorKind.STRUCTURAL_COMMA,
    Cause.MISSING_COMMA_AFTER_BRACE: ErrorKind.MISSING_COMMA,
    Cause.MISSING_COMMA_AFTER_BRACKET: ErrorKind.MISSING_COMMA,
    Cause.MISSING_COMMA_AFTER_VALUE: ErrorKind.MISSING_COMMA,
    Cause.UNCLOSED_BRACE: ErrorKind.UNBALANCED_BRACKETS,
    Cause.UNCLOSED_BRACKET: ErrorKind.UNBALANCED_BRACKETS,
    Cause.INVALID_CHARACTER: ErrorKind.INVALID_CHARACTER,
}

_CAUSE_MESSAGES = {
    Cause.DUPLICATE_COMMA: "Unexpected comma - remove duplicate comma",
    Cause.TRAILING_COMMA: "Unexpected comma - remove trailing comma",
    Cause.MISSING_COMMA_AFTER_BRACE: "Missing comma - add comma after closing brace",
    Cause.MISSING_COMMA_AFTER_BRACKET: "Missing comma - add comma after closing bracket",
    Cause.MISSING_COMMA_AFTER_VALUE: "Missing comma - add comma after value",
    Cause.UNCLOSED_BRACE: "Missing closing brace - check bracket balance",
    Cause.UNCLOSED_BRACKET: "Missing closing bracket - check bracket balance",
    Cause.INVALID_CHARACTER: "Invalid character",
}


@dataclass(frozen=True)
class Position:
    """1-based line/column location inside a text."""

    line: int
    col: int

    def __post_init__(self) -> None:
        if self.line < 1 or self.col < 1:
            raise ValueError(f"Position must be 1-based, got line={self.line}, col={self.col}")


@dataclass(frozen=True)
class Diagnostic:
    """Description of why a text could not be repaired."""

    kind: ErrorKind
    message: str
    suggestion: str = ""
    offset: int | None = None
    position: Position | None = None
    token: str | None = None
    cause: Cause | None = None


@dataclass(frozen=True)
class Valid:
    """Strict parse succeeded."""

    value: Any
    elapsed_ms: float


@dataclass(frozen=True)
class Invalid:
    """Strict parse failed with the parser's own message."""

    raw_message: str


ParseOutcome = Union[Valid, Invalid]


@dataclass
class RepairResult:
    """Result of a repair-and-diagnose attempt.

    ``ok`` is True on success, False on failure and None for empty input.
    """

    ok: bool | None
    value: Any | None = None
    cleaned_text: str = ""
    elapsed_ms: float | None = None
    diagnostic: Diagnostic | None = None
    passes: int = 0
    repairs_applied: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.ok is False and self.diagnostic is None:
            raise ValueError("A failed RepairResult requires a diagnostic")


class RepairError(Exception):
    """Exception raised by ``loads`` when text cannot be repaired."""

    def __init__(self, message: str, diagnostic: Diagnostic | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.diagnostic = diagnostic

    @property
    def position(self) -> Position | None:
        return self.diagnostic.position if self.diagnostic else None

    def __repr__(self) -> str:
        kind = self.diagnostic.kind.value if self.diagnostic else None
        return f"RepairError({kind!r}, {self.message!r})"
