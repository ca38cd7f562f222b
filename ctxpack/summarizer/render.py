"""Markdown rendering of file summaries."""

from __future__ import annotations

from typing import List

from .base import FileSummary

_HASH_COMMENT_LANGUAGES = frozenset({"python", "ruby", "yaml"})


def comment_marker(language: str) -> str:
    return "#" if language in _HASH_COMMENT_LANGUAGES else "//"


def format_summary(summary: FileSummary) -> str:
    """Render ``summary`` as a fenced block headed by the file path."""
    marker = comment_marker(summary.language)
    count = len(summary.declarations)
    noun = "item" if count == 1 else "items"

    lines: List[str] = [
        f"### File: {summary.path}",
        f"```{summary.language}",
        f"{marker} File contains {count} {noun}, {summary.total_lines} lines",
        "",
    ]
    if summary.imports:
        lines.extend([f"{marker} Imports: {', '.join(summary.imports)}", ""])
    if summary.exports:
        lines.extend([f"{marker} Exports: {', '.join(summary.exports)}", ""])

    for declaration in summary.declarations:
        if declaration.description:
            if marker == "#":
                lines.append(f"# {declaration.description}")
            else:
                lines.extend(["/**", f" * {declaration.description}", " */"])
        lines.extend([declaration.signature, ""])

    lines.append("```")
    return "\n".join(lines) + "\n"


__all__ = ["comment_marker", "format_summary"]
