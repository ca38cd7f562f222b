"""Running aggregates over admitted files."""

from __future__ import annotations

import posixpath
from typing import Dict, Optional, Sequence, Set

from .constants import DEFAULT_FILE_TYPE
from .models import FileRecord, LargestFile, RunStatistics
from .text import estimate_tokens, round_half_up


def calculate_average_file_size(line_counts: Sequence[int]) -> int:
    """Average lines per file, ``0`` when there are no files."""
    if not line_counts:
        return 0
    return round_half_up(sum(line_counts) / len(line_counts))


def file_type(path: str) -> str:
    _, extension = posixpath.splitext(posixpath.basename(path))
    return extension.lower() or DEFAULT_FILE_TYPE


class StatisticsTracker:
    """Accumulates per-run statistics; updated once per admitted file."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.total_files = 0
        self.total_lines = 0
        self.total_tokens = 0
        self.total_characters = 0
        self._file_types: Dict[str, int] = {}
        self._largest_file: Optional[LargestFile] = None
        self._directories: Set[str] = set()

    def track_file(self, record: FileRecord) -> None:
        self.total_files += 1
        self.total_lines += record.line_count
        self.total_tokens += estimate_tokens(record.content)
        self.total_characters += len(record.content)

        extension = file_type(record.path)
        self._file_types[extension] = self._file_types.get(extension, 0) + 1

        # Strict comparison: the first file reaching a maximum keeps it.
        if self._largest_file is None or record.line_count > self._largest_file.lines:
            self._largest_file = LargestFile(path=record.path, lines=record.line_count)

        directory = posixpath.dirname(record.path)
        if directory not in ("", "."):
            self._directories.add(directory)

    @property
    def file_types(self) -> Dict[str, int]:
        return dict(self._file_types)

    @property
    def largest_file(self) -> Optional[LargestFile]:
        return self._largest_file

    @property
    def directories_processed(self) -> int:
        return len(self._directories)

    def average_file_size(self) -> int:
        if self.total_files == 0:
            return 0
        return round_half_up(self.total_lines / self.total_files)

    def snapshot(self) -> RunStatistics:
        return RunStatistics(
            total_files=self.total_files,
            total_lines=self.total_lines,
            total_tokens=self.total_tokens,
            total_characters=self.total_characters,
            directories_processed=self.directories_processed,
            file_types=self.file_types,
            largest_file=self._largest_file,
            average_file_size=self.average_file_size(),
        )


__all__ = ["StatisticsTracker", "calculate_average_file_size", "file_type"]
