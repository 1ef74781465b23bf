"""Locate the first structural defect in text that failed to parse.

Three sources of location are used, all computed against the text the caller
supplied and never against a repaired variant:

* a structural scan that tokenizes the text and looks for classified defects
  (doubled commas, missing commas, unbalanced brackets, stray characters),
* the strict parser's own message, when it embeds an absolute offset,
* for encoding failures, the first lone surrogate in the text. The parser's
  offset for those always points at the start.

A position is only reported when it lies inside the text. A wrong position
is worse than none.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .rules import find_literal_end
from .suggestions import display_char
from .types import Cause, Diagnostic, ErrorKind, Position

logger = logging.getLogger(__name__)

# Shapes of parser messages that carry an absolute character offset
_MESSAGE_SHAPES = (
    re.compile(r"Unexpected token '(?P<token>[^']+)'.*? at position (?P<offset>\d+)"),
    re.compile(r"Unexpected token (?P<token>\S+) in JSON at position (?P<offset>\d+)"),
    re.compile(r"\(char (?P<offset>\d+)\)"),
    re.compile(r"at position (?P<offset>\d+)"),
    re.compile(r"position (?P<offset>\d+)"),
)

_INVALID_CHARS = frozenset("=;<>|&%$@!")
# The parser fails encoding the text, not parsing it; its offset is meaningless
_ENCODING_MESSAGE_RE = re.compile(r"not valid UTF-8")
_SURROGATE_RE = re.compile("[\ud800-\udfff]")
_KEY_WORD_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")
_WORD_RE = re.compile(r"[A-Za-z0-9_.+\-]+")

STRING = "string"
WORD = "word"
PUNCT = "punct"
OTHER = "other"


@dataclass(frozen=True)
class Token:
    """A lexeme of the scanned text."""

    kind: str
    text: str
    start: int
    line: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)


@dataclass(frozen=True)
class Finding:
    """A classified defect found by the structural scan."""

    cause: Cause
    offset: int
    token: str


def _clamp(text: str, offset: int) -> int:
    return max(0, min(len(text) - 1, offset))


def offset_to_position(text: str, offset: int) -> Position | None:
    """Convert an absolute offset into a 1-based line/column.

    The offset is clamped into the text first. Returns None for empty text or
    when the column would fall outside its line.

    Examples:
        >>> offset_to_position("ab\\ncd", 3)
        Position(line=2, col=1)
    """
    if not text:
        return None
    offset = _clamp(text, offset)
    line_start = 0
    for number, line in enumerate(text.split("\n"), start=1):
        if line_start + len(line) >= offset:
            col = offset - line_start + 1
            if 1 <= col <= len(line) + 1:
                return Position(line=number, col=col)
            return None
        line_start += len(line) + 1
    return None


def offset_from_message(message: str) -> tuple[int | None, str | None]:
    """Extract an offset, and the offending token if named, from a parser message."""
    for shape in _MESSAGE_SHAPES:
        match = shape.search(message or "")
        if match:
            groups = match.groupdict()
            return int(groups["offset"]), groups.get("token")
    return None, None


def _line_end(text: str, pos: int) -> int:
    end = text.find("\n", pos)
    return len(text) if end == -1 else end


def _starts_line(text: str, pos: int) -> bool:
    return not text[text.rfind("\n", 0, pos) + 1 : pos].strip()


def tokenize(text: str) -> list[Token]:
    """Split text into strings, words, punctuation and stray characters.

    Comments are skipped. Unterminated literals run to the end of their line.
    """
    tokens: list[Token] = []
    line = 0
    i = 0
    n = len(text)
    while i < n:
        char = text[i]
        if char == "\n":
            line += 1
            i += 1
            continue
        if char.isspace():
            i += 1
            continue
        if char in "\"'":
            end = find_literal_end(text, i)
            stop = end + 1 if end is not None else _line_end(text, i)
            tokens.append(Token(STRING, text[i:stop], i, line))
            i = stop
            continue
        if text.startswith("/*", i):
            close = text.find("*/", i + 2)
            if close != -1:
                line += text.count("\n", i, close)
                i = close + 2
                continue
        if text.startswith("//", i) and (i == 0 or text[i - 1] != ":"):
            i = _line_end(text, i)
            continue
        if char == "#" or (char == ";" and _starts_line(text, i)):
            i = _line_end(text, i)
            continue
        match = _WORD_RE.match(text, i)
        if match:
            tokens.append(Token(WORD, match.group(), i, line))
            i = match.end()
            continue
        tokens.append(Token(PUNCT if char in "{}[]:," else OTHER, char, i, line))
        i += 1
    return tokens


def _is_punct(token: Token | None, chars: str) -> bool:
    return token is not None and token.kind == PUNCT and token.text in chars


class _StructureScan:
    """Line-by-line search for the first classified structural defect."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens = tokenize(text)
        self.unmatched = self._unmatched_openers()

    def run(self) -> Finding | None:
        lines: dict[int, list[int]] = {}
        for index, token in enumerate(self.tokens):
            lines.setdefault(token.line, []).append(index)

        checks = (
            self._doubled_comma,
            self._comma_before_closer,
            self._closer_before_key,
            self._value_before_key,
            self._unclosed_opener,
            self._invalid_character,
        )
        for indexes in lines.values():
            for check in checks:
                for index in indexes:
                    finding = check(index)
                    if finding is not None:
                        logger.debug("Structural scan matched %s at offset %d", finding.cause.value, finding.offset)
                        return finding
        return None

    def _unmatched_openers(self) -> set[int]:
        # Braces and brackets are counted independently
        open_braces: list[int] = []
        open_brackets: list[int] = []
        for index, token in enumerate(self.tokens):
            if token.kind != PUNCT:
                continue
            if token.text == "{":
                open_braces.append(index)
            elif token.text == "[":
                open_brackets.append(index)
            elif token.text == "}" and open_braces:
                open_braces.pop()
            elif token.text == "]" and open_brackets:
                open_brackets.pop()
        return set(open_braces) | set(open_brackets)

    def _token(self, index: int) -> Token | None:
        return self.tokens[index] if 0 <= index < len(self.tokens) else None

    def _is_key(self, index: int) -> bool:
        token = self._token(index)
        if token is None:
            return False
        if token.kind == WORD and not _KEY_WORD_RE.match(token.text):
            return False
        return token.kind in (STRING, WORD) and _is_punct(self._token(index + 1), ":")

    def _gap_end(self, offset: int) -> int:
        while offset < len(self.text) and self.text[offset] in " \t":
            offset += 1
        return offset

    def _same_line_next(self, index: int) -> Token | None:
        following = self._token(index + 1)
        if following is None or following.line != self.tokens[index].line:
            return None
        return following

    def _doubled_comma(self, index: int) -> Finding | None:
        following = self._same_line_next(index)
        if following is not None and _is_punct(self.tokens[index], ",") and _is_punct(following, ","):
            return Finding(Cause.DUPLICATE_COMMA, following.start, ",")
        return None

    def _comma_before_closer(self, index: int) -> Finding | None:
        token = self.tokens[index]
        if _is_punct(token, ",") and _is_punct(self._same_line_next(index), "}]"):
            return Finding(Cause.TRAILING_COMMA, token.start, ",")
        return None

    def _closer_before_key(self, index: int) -> Finding | None:
        token = self.tokens[index]
        if not _is_punct(token, "}]") or not self._is_key(index + 1):
            return None
        cause = Cause.MISSING_COMMA_AFTER_BRACE if token.text == "}" else Cause.MISSING_COMMA_AFTER_BRACKET
        return Finding(cause, self._gap_end(token.end), ",")

    def _value_before_key(self, index: int) -> Finding | None:
        token = self.tokens[index]
        if token.kind not in (STRING, WORD) or not _is_punct(self._token(index - 1), ":,["):
            return None
        if self._is_key(index) or not self._is_key(index + 1):
            return None
        return Finding(Cause.MISSING_COMMA_AFTER_VALUE, self._gap_end(token.end), ",")

    def _unclosed_opener(self, index: int) -> Finding | None:
        if index not in self.unmatched:
            return None
        token = self.tokens[index]
        cause = Cause.UNCLOSED_BRACE if token.text == "{" else Cause.UNCLOSED_BRACKET
        return Finding(cause, token.start, token.text)

    def _invalid_character(self, index: int) -> Finding | None:
        token = self.tokens[index]
        if token.kind == OTHER and token.text in _INVALID_CHARS:
            return Finding(Cause.INVALID_CHARACTER, token.start, token.text)
        return None


def scan_structure(text: str) -> Finding | None:
    """Return the first classified structural defect in text, if any.

    Lines are visited in order; within a line the checks run in priority
    order: doubled comma, comma before a closer, missing comma after a
    closer, missing comma after a value, unclosed opener, stray character.
    """
    return _StructureScan(text).run()


def _finding_message(finding: Finding) -> str:
    if finding.cause is Cause.INVALID_CHARACTER:
        return f'Unexpected character "{display_char(finding.token)}" - not valid in JSON'
    return finding.cause.message


def _locate_unencodable(text: str, raw_message: str) -> Diagnostic:
    """Point at the first lone surrogate, the only thing the encoder rejects."""
    match = _SURROGATE_RE.search(text)
    if match is None:
        logger.debug("Encoding error without a surrogate in the text: %s", raw_message)
        return Diagnostic(kind=ErrorKind.UNLOCATABLE, message=raw_message)

    offset = match.start()
    char = match.group()
    logger.debug("Lone surrogate U+%04X at offset %d", ord(char), offset)
    return Diagnostic(
        kind=ErrorKind.INVALID_CHARACTER,
        message=f'Unexpected character "{display_char(char)}" - lone surrogate is not valid in JSON',
        offset=offset,
        position=offset_to_position(text, offset),
        token=char,
        cause=Cause.INVALID_CHARACTER,
    )


def locate(text: str, raw_message: str) -> Diagnostic:
    """Build a diagnostic for text that failed to parse.

    Args:
        text: The original text, exactly as the caller supplied it.
        raw_message: The strict parser's message for that same text.

    Returns:
        Diagnostic without a suggestion. When no trustworthy position can be
        derived the kind is UNLOCATABLE and only the raw message is kept.
    """
    finding = scan_structure(text)
    if finding is not None:
        position = offset_to_position(text, finding.offset)
        if position is not None:
            return Diagnostic(
                kind=finding.cause.kind,
                message=_finding_message(finding),
                offset=_clamp(text, finding.offset),
                position=position,
                token=finding.token,
                cause=finding.cause,
            )

    if raw_message and _ENCODING_MESSAGE_RE.search(raw_message):
        return _locate_unencodable(text, raw_message)

    offset, token = offset_from_message(raw_message)
    if offset is not None:
        position = offset_to_position(text, offset)
        if position is not None:
            offset = _clamp(text, offset)
            if token is None and not text[offset].isspace():
                token = text[offset]
            logger.debug("Parser message located error at offset %d", offset)
            return Diagnostic(
                kind=ErrorKind.GENERIC_TOKEN_ERROR,
                message=raw_message,
                offset=offset,
                position=position,
                token=token,
            )

    logger.debug("Could not locate error: %s", raw_message)
    return Diagnostic(kind=ErrorKind.UNLOCATABLE, message=raw_message or "Unknown error")
