"""Main parser module that orchestrates repair, strict parsing and diagnosis."""

from __future__ import annotations

import dataclasses
import logging
import time
from typing import Any

from .locator import locate
from .repair import run_pipeline
from .strict import strict_parse
from .suggestions import suggest
from .types import Diagnostic, RepairError, RepairResult, Valid

logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 2
MAX_PASSES_LIMIT = 10


def process(text: str, *, max_passes: int = DEFAULT_MAX_PASSES) -> RepairResult:
    """Repair text into strict JSON, or diagnose why it cannot be repaired.

    Args:
        text: The JSON-like text to process.
        max_passes: How many repair passes to attempt before giving up.
            Clamped to ``1..MAX_PASSES_LIMIT``.

    Returns:
        RepairResult. ``ok`` is None for empty input, True with the parsed
        value on success, and False with a Diagnostic located in the
        original text on failure. Never raises.

    Examples:
        >>> result = process("{a: 1}")
        >>> result.ok, result.value
        (True, {'a': 1})
    """
    if not text or not text.strip():
        return RepairResult(ok=None)

    start = time.perf_counter()

    # Fast path: already strict JSON
    raw_outcome = strict_parse(text)
    if isinstance(raw_outcome, Valid):
        logger.debug("Input is already valid JSON")
        return RepairResult(
            ok=True,
            value=raw_outcome.value,
            cleaned_text=text,
            elapsed_ms=_elapsed_ms(start),
        )

    current = text
    repairs_applied: list[str] = []
    passes = 0
    for _ in range(_clamp_passes(max_passes)):
        result = run_pipeline(current)
        passes += 1
        repairs_applied.extend(result.repairs_applied)
        logger.debug("Repair pass %d applied: %s", passes, ", ".join(result.repairs_applied) or "nothing")

        outcome = strict_parse(result.text)
        if isinstance(outcome, Valid):
            return RepairResult(
                ok=True,
                value=outcome.value,
                cleaned_text=result.text,
                elapsed_ms=_elapsed_ms(start),
                passes=passes,
                repairs_applied=repairs_applied,
            )

        if result.text == current:
            logger.debug("Repair reached a fixed point after %d pass(es)", passes)
            break
        current = result.text

    logger.debug("Repair failed after %d pass(es), locating error in original text", passes)
    # Locate against the original text and its own parser message; repaired
    # text lives in a different offset space.
    diagnostic = locate(text, raw_outcome.raw_message)
    diagnostic = dataclasses.replace(
        diagnostic,
        suggestion=suggest(diagnostic.kind, diagnostic.cause, diagnostic.message, diagnostic.token),
    )
    return RepairResult(
        ok=False,
        cleaned_text=current,
        diagnostic=diagnostic,
        passes=passes,
        repairs_applied=repairs_applied,
    )


def loads(
    text: str,
    *,
    max_passes: int = DEFAULT_MAX_PASSES,
    raise_on_error: bool = True,
) -> Any:
    """Repair and parse text, returning the decoded value.

    Args:
        text: The JSON-like text to parse.
        max_passes: How many repair passes to attempt.
        raise_on_error: Whether to raise RepairError on failure.
            If False, returns None on failure.

    Raises:
        RepairError: If text is empty or cannot be repaired and
            raise_on_error is True.

    Examples:
        >>> loads("{'key': True}")
        {'key': True}

        >>> loads("{", raise_on_error=False)
    """
    result = process(text, max_passes=max_passes)

    if result.ok:
        return result.value

    if not raise_on_error:
        return None

    if result.diagnostic is None:
        raise RepairError("Empty input text")
    raise RepairError(describe(result.diagnostic), result.diagnostic)


def describe(diagnostic: Diagnostic) -> str:
    """Render a diagnostic's message and location as one line."""
    if diagnostic.position is None:
        return diagnostic.message
    location = f"line {diagnostic.position.line}, column {diagnostic.position.col}"
    return f"{diagnostic.message} at {location}"


def _clamp_passes(max_passes: int) -> int:
    return max(1, min(MAX_PASSES_LIMIT, max_passes))


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000.0, 1)
