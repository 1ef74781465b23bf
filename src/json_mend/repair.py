"""Repair pipeline that applies the rewrite rules in order."""

from __future__ import annotations

from dataclasses import dataclass, field

from .rules import COMMENT_RULE, REWRITE_RULES, RewriteRule
from .strict import is_valid


@dataclass
class PassResult:
    """Result of one pass of the repair pipeline."""

    text: str
    repairs_applied: list[str] = field(default_factory=list)
    short_circuited: bool = False


def run_pipeline(text: str) -> PassResult:
    """Apply every rewrite rule once, in order.

    Comments are stripped first. If the text then parses as strict JSON it is
    returned as is, so valid input is never reformatted.

    Args:
        text: The JSON-like text to repair.

    Returns:
        PassResult with the rewritten text and the names of the rules that
        changed it.
    """
    if not text:
        return PassResult(text="")

    repairs_applied: list[str] = []
    current = _apply(COMMENT_RULE, text, repairs_applied)
    if is_valid(current):
        return PassResult(text=current, repairs_applied=repairs_applied, short_circuited=True)

    for rule in REWRITE_RULES:
        current = _apply(rule, current, repairs_applied)

    return PassResult(text=current, repairs_applied=repairs_applied)


def _apply(rule: RewriteRule, text: str, repairs_applied: list[str]) -> str:
    new_text = rule.apply(text)
    if new_text != text:
        repairs_applied.append(rule.name)
    return new_text


def repair(text: str) -> str:
    """Return a best-effort repaired version of text.

    Never raises. The result is not guaranteed to be valid JSON; use
    ``process`` to find out.

    Examples:
        >>> repair("{key: 'value',}")
        '{"key": "value"}'
    """
    return run_pipeline(text).text
