"""Text rewrite rules for turning JSON-like text into strict JSON.

Every rule is a pure ``str -> str`` function that never raises and makes no
assumption that its input is valid JSON. ``REWRITE_RULES`` is ordered: later
rules rely on the earlier ones having run.

Most rules only look at the text *between* quoted literals. The literals are
swapped for a placeholder before the rule's patterns run and restored
afterwards, so string contents such as ``"a, b: True"`` are never rewritten.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from typing import Callable

# Private-use range searched for a placeholder absent from the text
_PLACEHOLDERS = range(0xE000, 0xF900)
_QUOTES = "\"'"


@dataclass(frozen=True)
class RewriteRule:
    """A named text transformation applied by the repair pipeline."""

    name: str
    apply: Callable[[str], str]


def find_literal_end(text: str, start: int) -> int | None:
    """Return the index of the quote closing the literal opened at ``start``.

    Literals never span lines. Escaped quotes are skipped.

    Returns:
        Index of the closing quote, or None if the literal is unterminated.
    """
    quote = text[start]
    i = start + 1
    n = len(text)
    while i < n:
        char = text[i]
        if char == "\\" and text[i + 1 : i + 2] != "\n":
            i += 2
            continue
        if char == quote:
            return i
        if char == "\n":
            return None
        i += 1
    return None


def _line_end(text: str, pos: int) -> int:
    end = text.find("\n", pos)
    return len(text) if end == -1 else end


def _placeholder_for(text: str) -> str | None:
    for code in _PLACEHOLDERS:
        if chr(code) not in text:
            return chr(code)
    return None


def _mask_literals(text: str, placeholder: str) -> tuple[str, list[str]]:
    """Replace each terminated quoted literal with ``placeholder``."""
    parts: list[str] = []
    literals: list[str] = []
    i = 0
    last = 0
    n = len(text)
    while i < n:
        if text[i] in _QUOTES:
            end = find_literal_end(text, i)
            if end is not None:
                parts.append(text[last:i])
                parts.append(placeholder)
                literals.append(text[i : end + 1])
                i = last = end + 1
                continue
        i += 1
    parts.append(text[last:])
    return "".join(parts), literals


def _unmask_literals(text: str, literals: list[str], placeholder: str) -> str | None:
    pieces = text.split(placeholder)
    if len(pieces) != len(literals) + 1:
        return None
    out = [pieces[0]]
    for literal, piece in zip(literals, pieces[1:]):
        out.append(literal)
        out.append(piece)
    return "".join(out)


def _outside_literals(transform: Callable[[str], str]) -> Callable[[str], str]:
    """Make ``transform`` operate only on text outside quoted literals."""

    @functools.wraps(transform)
    def rule(text: str) -> str:
        placeholder = _placeholder_for(text)
        if placeholder is None:
            return text
        masked, literals = _mask_literals(text, placeholder)
        restored = _unmask_literals(transform(masked), literals, placeholder)
        return text if restored is None else restored

    return rule


# 1. Comments

_EMPTY_LINE_RE = re.compile(r"^[ \t\r\f\v]*\n", re.MULTILINE)


def strip_comments(text: str) -> str:
    """Remove block, ``//``, ``#`` and ``;`` comments, then empty lines.

    A ``//`` directly after ``:`` is kept so bare URLs survive. Comment
    markers inside quoted literals are left alone.

    Example: {"a": 1 // note} -> {"a": 1 }
    """
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        char = text[i]
        if char in _QUOTES:
            end = find_literal_end(text, i)
            if end is not None:
                out.append(text[i : end + 1])
                i = end + 1
                continue
        elif text.startswith("/*", i):
            close = text.find("*/", i + 2)
            if close != -1:
                i = close + 2
                continue
        elif char in "#;" or (text.startswith("//", i) and (i == 0 or text[i - 1] != ":")):
            i = _line_end(text, i)
            continue
        out.append(char)
        i += 1
    return _EMPTY_LINE_RE.sub("", "".join(out))


# 3. Unquoted keys and values

_IDENT = r"[A-Za-z_][\w-]*"
_NOT_RESERVED = r"(?!(?:true|false|null|True|False|None|NaN|Infinity|undefined)(?![\w-]))"

_KEY_RE = re.compile(rf"([{{,]\s*)({_IDENT})(\s*:)")
_VALUE_RE = re.compile(rf"(:\s*){_NOT_RESERVED}({_IDENT})(?=\s*[,}}\]])")
_VALUE_EOL_RE = re.compile(rf"(:[ \t]*){_NOT_RESERVED}({_IDENT})(?=[ \t\r]*$)", re.MULTILINE)
_ITEM_RE = re.compile(rf"([\[,]\s*){_NOT_RESERVED}({_IDENT})(?=\s*[,}}\]])")
_ITEM_EOL_RE = re.compile(rf"([\[,][ \t]*){_NOT_RESERVED}({_IDENT})(?=[ \t\r]*$)", re.MULTILINE)


@_outside_literals
def quote_unquoted(text: str) -> str:
    """Wrap bare identifiers in key, value or array-item position in quotes.

    Reserved literals such as ``True`` or ``NaN`` are left bare for the
    translation rules that follow.

    Example: {key: value} -> {"key": "value"}
    """
    text = _KEY_RE.sub(r'\1"\2"\3', text)
    text = _VALUE_RE.sub(r'\1"\2"', text)
    text = _VALUE_EOL_RE.sub(r'\1"\2"', text)
    text = _ITEM_RE.sub(r'\1"\2"', text)
    return _ITEM_EOL_RE.sub(r'\1"\2"', text)


# 4. Quote style

_JSON_ESCAPES = frozenset('"\\/bfnrtu')


def _to_double_quoted(body: str) -> str:
    out = ['"']
    i = 0
    n = len(body)
    while i < n:
        char = body[i]
        if char == "\\" and i + 1 < n:
            escaped = body[i + 1]
            if escaped == "'":
                out.append("'")
            elif escaped in _JSON_ESCAPES:
                out.append(char + escaped)
            else:
                out.append("\\\\" + escaped)
            i += 2
            continue
        if char == "\\":
            out.append("\\\\")
        elif char == '"':
            out.append('\\"')
        else:
            out.append(char)
        i += 1
    out.append('"')
    return "".join(out)


def normalize_quotes(text: str) -> str:
    """Convert single-quoted literals to double-quoted ones.

    Double-quoted literals are copied untouched, so apostrophes inside them
    are never treated as delimiters.

    Example: {'it': 'isn\\'t'} -> {"it": "isn't"}
    """
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        char = text[i]
        if char in _QUOTES:
            end = find_literal_end(text, i)
            if end is not None:
                literal = text[i : end + 1]
                out.append(literal if char == '"' else _to_double_quoted(literal[1:-1]))
                i = end + 1
                continue
        out.append(char)
        i += 1
    return "".join(out)


# 5. Python literals

_PY_LITERAL_RE = re.compile(r"\b(True|False|None)\b")
_PY_LITERALS = {"True": "true", "False": "false", "None": "null"}


@_outside_literals
def translate_literals(text: str) -> str:
    """Translate ``True``/``False``/``None`` to their JSON spelling."""
    return _PY_LITERAL_RE.sub(lambda m: _PY_LITERALS[m.group(1)], text)


# 6. Numbers JSON cannot represent

_SIGNED_INFINITY_RE = re.compile(r"[-+]Infinity\b")
_NON_FINITE_RE = re.compile(r"\b(?:Infinity|NaN|undefined)\b")
_RADIX_RE = re.compile(r"[-+]?\b0(?:[xX][0-9a-fA-F]+|[bB][01]+|[oO][0-7]+)\b")


@_outside_literals
def null_invalid_numbers(text: str) -> str:
    """Replace non-finite markers and hex/binary/octal literals with ``null``.

    The signed ``-Infinity`` form is handled before bare ``Infinity`` so no
    stray sign is left behind.
    """
    text = _SIGNED_INFINITY_RE.sub("null", text)
    text = _NON_FINITE_RE.sub("null", text)
    return _RADIX_RE.sub("null", text)


# 7. Number shapes

_LEADING_ZEROS_RE = re.compile(r"(?<![\w.])0+(?=\d)")
_BARE_DOT_RE = re.compile(r"(?<![\w.])\.(?=\d)")
_DANGLING_DOT_RE = re.compile(r"(?<=\d)\.(?!\d)")
_DANGLING_EXPONENT_RE = re.compile(r"(?<=\d)[eE][-+]?(?![\w+\-])")


@_outside_literals
def fix_number_shapes(text: str) -> str:
    """Repair number spellings strict JSON rejects.

    Example: [0123, .5, 5., 1e] -> [123, 0.5, 5.0, 1]
    """
    text = _LEADING_ZEROS_RE.sub("", text)
    text = _BARE_DOT_RE.sub("0.", text)
    text = _DANGLING_DOT_RE.sub(".0", text)
    return _DANGLING_EXPONENT_RE.sub("", text)


# 8. Commas

_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")
_COMMA_BEFORE_INVALID_RE = re.compile(r",\s*[=;]")
_DANGLING_COMMA_RE = re.compile(r",\s*\Z")


@_outside_literals
def clean_commas(text: str) -> str:
    """Remove trailing commas and commas followed by ``=`` or ``;``.

    Example: {"a": 1,} -> {"a": 1}
    """
    text = _TRAILING_COMMA_RE.sub(r"\1", text)
    text = _COMMA_BEFORE_INVALID_RE.sub("", text)
    return _DANGLING_COMMA_RE.sub("", text)


# 9. Missing commas

_MISSING_COMMA_RE = re.compile(r"([}\]])(\s*)(?=[A-Za-z_]\w*\s*:|[{\[])")


@_outside_literals
def insert_missing_commas(text: str) -> str:
    """Insert a comma between a closer and a following key or container.

    Example: [{"a": 1} {"b": 2}] -> [{"a": 1}, {"b": 2}]
    """
    return _MISSING_COMMA_RE.sub(r"\1,\2", text)


# 10. Cosmetics

_CURLY_QUOTES = str.maketrans({"\u2018": "'", "\u2019": "'", "\u201c": '"', "\u201d": '"'})
_ZERO_WIDTH_RE = re.compile("[\u200b\u200c\u200d]")


@_outside_literals
def _straighten(text: str) -> str:
    return _ZERO_WIDTH_RE.sub("", text.translate(_CURLY_QUOTES))


def normalize_cosmetics(text: str) -> str:
    """Straighten curly quotes, drop zero-width characters and a BOM, trim."""
    text = _straighten(text).strip()
    if text.startswith("\ufeff"):
        text = text[1:].lstrip()
    return text


COMMENT_RULE = RewriteRule("strip_comments", strip_comments)

REWRITE_RULES: tuple[RewriteRule, ...] = (
    RewriteRule("quote_unquoted", quote_unquoted),
    RewriteRule("normalize_quotes", normalize_quotes),
    RewriteRule("translate_literals", translate_literals),
    RewriteRule("null_invalid_numbers", null_invalid_numbers),
    RewriteRule("fix_number_shapes", fix_number_shapes),
    RewriteRule("clean_commas", clean_commas),
    RewriteRule("insert_missing_commas", insert_missing_commas),
    RewriteRule("normalize_cosmetics", normalize_cosmetics),
)
