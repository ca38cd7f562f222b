"""Regex-based outline extraction for Python sources."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .base import (
    DeclarationInfo,
    FileSummary,
    Summarizer,
    in_source_order,
    line_number,
    ordered_unique,
)

_DEF = re.compile(
    r"^([ \t]*)(async[ \t]+)?def[ \t]+(\w+)[ \t]*\([^)]*\)(?:[ \t]*->[ \t]*[^:]+)?[ \t]*:",
    re.MULTILINE,
)
_CLASS = re.compile(r"^([ \t]*)class[ \t]+(\w+)(?:[ \t]*\([^)]*\))?[ \t]*:", re.MULTILINE)
_DOCSTRING = re.compile(
    r"[ \t]*(?:#[^\n]*)?\n\s*[rRuU]?"
    r"(?:\"\"\"(?P<dq>.*?)\"\"\"|'''(?P<sq>.*?)'''|\"(?P<d>[^\"\n]*)\"|'(?P<s>[^'\n]*)')",
    re.DOTALL,
)
_IMPORT = re.compile(r"^[ \t]*import[ \t]+([\w.]+(?:[ \t]*,[ \t]*[\w.]+)*)", re.MULTILINE)
_FROM_IMPORT = re.compile(r"^[ \t]*from[ \t]+([\w.]+)[ \t]+import\b", re.MULTILINE)


class PythonSummarizer(Summarizer):
    """Summarizes Python modules: defs, classes and imported modules."""

    def supports(self, language: str) -> bool:
        return language == "python"

    def summarize(self, content: str, summary: FileSummary) -> None:
        summary.imports = extract_imports(content)
        summary.declarations = extract_declarations(content)


def extract_imports(content: str) -> List[str]:
    found: List[Tuple[int, str]] = []
    for match in _IMPORT.finditer(content):
        for name in match.group(1).split(","):
            found.append((match.start(), name.strip()))
    for match in _FROM_IMPORT.finditer(content):
        found.append((match.start(), match.group(1)))
    return ordered_unique(found)


def extract_declarations(content: str) -> List[DeclarationInfo]:
    found: List[Tuple[int, DeclarationInfo]] = []

    for match in _DEF.finditer(content):
        indent, is_async, name = match.group(1), match.group(2), match.group(3)
        found.append(
            (
                match.start(),
                DeclarationInfo(
                    name=name,
                    kind="function",
                    signature=match.group(0).strip(),
                    line=line_number(content, match.start()),
                    is_exported=not indent,
                    is_async=bool(is_async),
                    description=extract_docstring(content, match.end()),
                ),
            )
        )

    for match in _CLASS.finditer(content):
        indent, name = match.group(1), match.group(2)
        found.append(
            (
                match.start(),
                DeclarationInfo(
                    name=name,
                    kind="class",
                    signature=match.group(0).strip(),
                    line=line_number(content, match.start()),
                    is_exported=not indent,
                    description=extract_docstring(content, match.end()),
                ),
            )
        )

    return in_source_order(found)


def extract_docstring(content: str, header_end: int) -> Optional[str]:
    """First non-empty line of the string literal right after a header."""
    match = _DOCSTRING.match(content, header_end)
    if match is None:
        return None
    text = next(value for value in match.groupdict().values() if value is not None)
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return None


__all__ = ["PythonSummarizer", "extract_declarations", "extract_docstring", "extract_imports"]
