"""Text helpers: token estimation, truncation and line counting."""

from __future__ import annotations

TRUNCATION_SUFFIX = "... [truncated]"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def estimate_tokens(text: str) -> int:
    """Approximate the token count of ``text`` as a quarter of its length.

    Every token figure in ctxpack (per-file costs, budgets, totals) goes
    through this function.
    """
    return round_half_up(len(text) / 4)


def count_lines(text: str) -> int:
    """Number of newline-separated lines; an empty string counts as one line."""
    return text.count("\n") + 1


def truncate_content(content: str, max_length: int) -> str:
    """Cut ``content`` to ``max_length`` characters and mark the cut."""
    if len(content) > max_length:
        return content[:max_length] + TRUNCATION_SUFFIX
    return content


__all__ = ["count_lines", "estimate_tokens", "round_half_up", "truncate_content"]
