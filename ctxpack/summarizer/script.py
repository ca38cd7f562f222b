"""Regex-based outline extraction for TypeScript and JavaScript."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .base import (
    DeclarationInfo,
    DeclarationKind,
    FileSummary,
    Summarizer,
    in_source_order,
    line_number,
    ordered_unique,
)

_IMPORT_FROM = re.compile(r"\bimport\s+(?:type\s+)?[\w*${}\s,]+?\s*from\s*['\"`]([^'\"`]+)['\"`]")
_IMPORT_BARE = re.compile(r"\bimport\s*['\"`]([^'\"`]+)['\"`]")
_REQUIRE = re.compile(r"\brequire\(\s*['\"`]([^'\"`]+)['\"`]\s*\)")

_EXPORT = re.compile(
    r"\bexport\s+(?:default\s+)?(?:declare\s+)?(?:async\s+)?"
    r"(?:function\b\s*\*?\s*(\w+)|(?:abstract\s+)?class\s+(\w+)|interface\s+(\w+)"
    r"|type\s+(\w+)|(?:const|let|var)\s+(\w+))"
)

# Every scan captures the export keyword as group 1.
_FUNCTION = re.compile(
    r"(export\s+)?(?:default\s+)?(async\s+)?\bfunction\b\s*\*?\s*(\w+)\s*\([^)]*\)(?:\s*:\s*[^{]+)?"
)
_ARROW = re.compile(
    r"(export\s+)?\b(?:const|let|var)\s+(\w+)\s*(?::\s*[^=]+?)?=\s*(async\s+)?"
    r"(?:\([^)]*\)|\w+)\s*(?::\s*[^=]+?)?\s*=>"
)
_CLASS = re.compile(
    r"(export\s+)?(?:default\s+)?(?:abstract\s+)?\bclass\s+(\w+)"
    r"(?:\s+extends\s+[\w.]+)?(?:\s+implements\s+[\w,\s]+)?"
)
_INTERFACE = re.compile(r"(export\s+)?\binterface\s+(\w+)(?:\s+extends\s+[\w,\s]+)?")
_TYPE = re.compile(r"(export\s+)?\btype\s+(\w+)(?:<[^>]*>)?\s*=")

_DOC_COMMENT = re.compile(r"/\*\*\s*([\s\S]*?)\s*\*/")
_DOC_LINE_PREFIX = re.compile(r"^\s*\*\s?")

# A doc comment counts as attached when it ends this close to the declaration.
DOC_COMMENT_DISTANCE = 100


class ScriptSummarizer(Summarizer):
    """Summarizes TypeScript and JavaScript sources."""

    LANGUAGES = frozenset({"typescript", "javascript"})

    def supports(self, language: str) -> bool:
        return language in self.LANGUAGES

    def summarize(self, content: str, summary: FileSummary) -> None:
        summary.imports = extract_imports(content)
        summary.exports = extract_exports(content)
        summary.declarations = extract_declarations(content)


def extract_imports(content: str) -> List[str]:
    found: List[Tuple[int, str]] = []
    for pattern in (_IMPORT_FROM, _IMPORT_BARE, _REQUIRE):
        found.extend((match.start(), match.group(1)) for match in pattern.finditer(content))
    return ordered_unique(found)


def extract_exports(content: str) -> List[str]:
    exports: List[str] = []
    for match in _EXPORT.finditer(content):
        name = next((group for group in match.groups() if group), None)
        if name:
            exports.append(name)
    return exports


def extract_declarations(content: str) -> List[DeclarationInfo]:
    found: List[Tuple[int, DeclarationInfo]] = []

    for match in _FUNCTION.finditer(content):
        found.append(
            (match.start(), _declaration(content, match, match.group(3), "function", bool(match.group(2))))
        )

    for match in _ARROW.finditer(content):
        found.append(
            (match.start(), _declaration(content, match, match.group(2), "function", bool(match.group(3))))
        )

    for pattern, kind in ((_CLASS, "class"), (_INTERFACE, "interface"), (_TYPE, "type")):
        for match in pattern.finditer(content):
            found.append((match.start(), _declaration(content, match, match.group(2), kind, False)))

    return in_source_order(found)


def _declaration(
    content: str,
    match: re.Match[str],
    name: str,
    kind: DeclarationKind,
    is_async: bool,
) -> DeclarationInfo:
    return DeclarationInfo(
        name=name,
        kind=kind,
        signature=match.group(0).strip(),
        line=line_number(content, match.start()),
        is_exported=bool(match.group(1)),
        is_async=is_async,
        description=extract_doc_comment(content, match.start()),
    )


def extract_doc_comment(content: str, index: int) -> Optional[str]:
    """Text of the last ``/** */`` comment ending just before ``index``."""
    description: Optional[str] = None
    for match in _DOC_COMMENT.finditer(content, 0, index):
        if index - match.end() >= DOC_COMMENT_DISTANCE:
            continue
        lines = (_DOC_LINE_PREFIX.sub("", line).strip() for line in match.group(1).split("\n"))
        description = " ".join(line for line in lines if line).strip()
    return description or None


__all__ = [
    "DOC_COMMENT_DISTANCE",
    "ScriptSummarizer",
    "extract_declarations",
    "extract_doc_comment",
    "extract_exports",
    "extract_imports",
]
