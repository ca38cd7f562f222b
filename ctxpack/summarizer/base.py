"""Shared types and helpers for the code summarizers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Iterable, List, Literal, Optional, Tuple

from ..constants import DEFAULT_LANGUAGE, LANGUAGE_BY_SUFFIX

DeclarationKind = Literal["function", "class", "interface", "type", "variable"]


@dataclass(frozen=True)
class DeclarationInfo:
    """A top-level construct found in a source file."""

    name: str
    kind: DeclarationKind
    signature: str
    line: int
    is_exported: bool = False
    is_async: bool = False
    description: Optional[str] = None


@dataclass
class FileSummary:
    """Outline of one file used instead of its full content."""

    path: str
    language: str
    total_lines: int
    declarations: List[DeclarationInfo] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    exports: List[str] = field(default_factory=list)


class Summarizer(ABC):
    """Contract for language-specific summarizers."""

    @abstractmethod
    def supports(self, language: str) -> bool:
        """Return True when this summarizer handles ``language``."""

    @abstractmethod
    def summarize(self, content: str, summary: FileSummary) -> None:
        """Fill ``summary`` with imports, exports and declarations."""


def detect_language(path: str) -> str:
    return LANGUAGE_BY_SUFFIX.get(PurePosixPath(path).suffix.lower(), DEFAULT_LANGUAGE)


def line_number(content: str, offset: int) -> int:
    """1-based line of the character at ``offset``."""
    return content.count("\n", 0, offset) + 1


def ordered_unique(found: Iterable[Tuple[int, str]]) -> List[str]:
    """Values sorted by source offset with later repeats dropped."""
    seen: set[str] = set()
    result: List[str] = []
    for _, value in sorted(found, key=lambda item: item[0]):
        if value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result


def in_source_order(found: Iterable[Tuple[int, DeclarationInfo]]) -> List[DeclarationInfo]:
    return [declaration for _, declaration in sorted(found, key=lambda item: item[0])]
