"""Strict JSON parsing adapter around orjson."""

from __future__ import annotations

import time

import orjson

from .types import Invalid, ParseOutcome, Valid


def strict_parse(text: str) -> ParseOutcome:
    """Parse text as strict JSON.

    Args:
        text: The candidate JSON text.

    Returns:
        Valid with the decoded value and parse time, or Invalid carrying the
        parser's message verbatim.

    orjson is stricter than RFC 8259 in two places, and such text is reported
    Invalid even though it is well-formed JSON:

    * an escaped lone surrogate such as ``"\\ud800"`` (``no low surrogate``),
    * nesting deeper than 1024 arrays or objects (``depth limit exceeded``).

    A ``str`` holding a raw lone surrogate cannot be encoded at all and fails
    with ``str is not valid UTF-8``.
    """
    start = time.perf_counter()
    try:
        value = orjson.loads(text)
    except orjson.JSONDecodeError as e:
        return Invalid(raw_message=str(e))
    return Valid(value=value, elapsed_ms=(time.perf_counter() - start) * 1000.0)


def is_valid(text: str) -> bool:
    """Return True if text parses as strict JSON."""
    return isinstance(strict_parse(text), Valid)
