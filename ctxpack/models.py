"""Core data models shared across ctxpack components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Candidate:
    """A file selected by discovery, not yet read."""

    path: Path
    display: str
    explicit: bool = False


@dataclass(frozen=True)
class FileRecord:
    """An admitted file and the content that will be packaged."""

    path: str
    size: int
    line_count: int
    content: str


@dataclass(frozen=True)
class VcsSnapshot:
    """Latest-commit metadata for the repository holding the primary path."""

    commit: str
    branch: str
    author: str
    date: str


@dataclass(frozen=True)
class LargestFile:
    path: str
    lines: int


@dataclass(frozen=True)
class RunStatistics:
    """Aggregates collected while files are admitted."""

    total_files: int = 0
    total_lines: int = 0
    total_tokens: int = 0
    total_characters: int = 0
    directories_processed: int = 0
    file_types: Dict[str, int] = field(default_factory=dict)
    largest_file: Optional[LargestFile] = None
    average_file_size: int = 0


@dataclass
class AnalysisResult:
    """Everything the document assembler needs from one analysis run."""

    primary_path: Path
    vcs: Optional[VcsSnapshot]
    files: List[FileRecord]
    statistics: RunStatistics
    recent_days: Optional[int] = None
