"""Heuristic code summarizers used by ``--summary`` mode."""

from __future__ import annotations

from typing import List, Sequence

from ..text import count_lines
from .base import DeclarationInfo, FileSummary, Summarizer, detect_language
from .python import PythonSummarizer
from .render import format_summary
from .script import ScriptSummarizer

_BUILTIN_SUMMARIZERS: tuple[type[Summarizer], ...] = (ScriptSummarizer, PythonSummarizer)


def default_summarizers() -> List[Summarizer]:
    return [factory() for factory in _BUILTIN_SUMMARIZERS]


def summarize_code(
    content: str,
    path: str,
    summarizers: Sequence[Summarizer] | None = None,
) -> FileSummary:
    """Outline ``content``; unsupported languages only get a line count."""
    language = detect_language(path)
    summary = FileSummary(path=path, language=language, total_lines=count_lines(content))
    for summarizer in summarizers if summarizers is not None else default_summarizers():
        if summarizer.supports(language):
            summarizer.summarize(content, summary)
            break
    return summary


__all__ = [
    "DeclarationInfo",
    "FileSummary",
    "PythonSummarizer",
    "ScriptSummarizer",
    "Summarizer",
    "default_summarizers",
    "format_summary",
    "summarize_code",
]
