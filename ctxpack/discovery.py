"""File discovery: directory walking with layered ignore rules."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

from .constants import DEFAULT_IGNORE_PATTERNS, IGNORE_FILENAME
from .logging import get_logger
from .models import Candidate
from .paths import ResolvedInputs

logger = get_logger("discovery")

_SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class PathPattern:
    """A glob pattern evaluated against ``/``-separated relative paths.

    Patterns without a slash match any single path segment; patterns with a
    leading or inner slash are anchored to the walked root and matched one
    segment at a time, with ``**`` standing for any number of segments. A
    trailing slash limits the pattern to directories. Matching a directory
    also matches everything beneath it.
    """

    pattern: str
    directory_only: bool
    anchored: bool
    segments: Tuple[str, ...]

    @classmethod
    def parse(cls, raw: str) -> Optional["PathPattern"]:
        pattern = raw.strip()
        if not pattern:
            return None

        directory_only = pattern.endswith("/")
        pattern = pattern.rstrip("/")
        anchored = "/" in pattern
        pattern = pattern.lstrip("/")
        if not pattern:
            return None

        return cls(
            pattern=pattern,
            directory_only=directory_only,
            anchored=anchored,
            segments=tuple(part for part in pattern.split("/") if part),
        )

    def matches(self, rel_path: str, is_dir: bool = False) -> bool:
        parts = [part for part in rel_path.split("/") if part]
        last = len(parts) - 1
        for index, part in enumerate(parts):
            target_is_dir = index < last or is_dir
            if self.directory_only and not target_is_dir:
                continue
            if self.anchored:
                if _match_segments(self.segments, parts[: index + 1]):
                    return True
            elif fnmatchcase(part, self.pattern):
                return True
        return False


def _match_segments(segments: Sequence[str], parts: Sequence[str]) -> bool:
    if not segments:
        return not parts
    head, rest = segments[0], segments[1:]
    if head == "**":
        return any(_match_segments(rest, parts[index:]) for index in range(len(parts) + 1))
    return bool(parts) and fnmatchcase(parts[0], head) and _match_segments(rest, parts[1:])


def compile_patterns(patterns: Sequence[str]) -> List[PathPattern]:
    compiled: List[PathPattern] = []
    for raw in patterns:
        pattern = PathPattern.parse(raw)
        if pattern is not None:
            compiled.append(pattern)
    return compiled


def load_ignore_file(path: Path) -> List[str]:
    """Read ignore patterns line by line, skipping blanks and ``#`` comments."""
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return []
    except OSError as exc:
        logger.warning("Could not read ignore file '%s': %s", path, exc)
        return []

    patterns: List[str] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        patterns.append(line)
    return patterns


class RecencyFilter:
    """Keeps files changed within the last ``days`` days."""

    def __init__(self, days: int, now: float | None = None) -> None:
        self.days = days
        self.now = time.time() if now is None else now

    @property
    def cutoff(self) -> float:
        return self.now - self.days * _SECONDS_PER_DAY

    def is_recent(self, path: Path) -> bool:
        try:
            stat_result = path.stat()
        except OSError as exc:
            logger.debug("Cannot determine modification time of '%s': %s", path, exc)
            return False
        modified = max(stat_result.st_mtime, stat_result.st_ctime)
        return modified >= self.cutoff


class FileDiscovery:
    """Expands resolved inputs into an ordered list of candidate files."""

    def __init__(
        self,
        include: Sequence[str] | None = None,
        exclude: Sequence[str] | None = None,
        recency: RecencyFilter | None = None,
    ) -> None:
        self.include = list(include or [])
        self.exclude = list(exclude or [])
        self.recency = recency

    def discover(self, inputs: ResolvedInputs) -> List[Candidate]:
        candidates: List[Candidate] = []
        for directory in inputs.directories:
            for rel_path in self.collect_files(directory):
                path = directory / rel_path
                if self.recency is not None and not self.recency.is_recent(path):
                    logger.debug("Skipping %s: not modified in the last %d days", rel_path, self.recency.days)
                    continue
                candidates.append(Candidate(path=path, display=inputs.display_path(path)))

        # Named files bypass ignore rules and the recency window.
        for path in inputs.files:
            candidates.append(Candidate(path=path, display=inputs.display_path(path), explicit=True))

        logger.debug("Discovered %d candidate files", len(candidates))
        return candidates

    def collect_files(self, root: Path) -> List[str]:
        """Return ``/``-separated paths under ``root`` that survive the filters."""
        ignore_patterns = list(DEFAULT_IGNORE_PATTERNS)
        ignore_patterns.extend(load_ignore_file(root / IGNORE_FILENAME))
        ignore_patterns.extend(self.exclude)
        ignore_rules = compile_patterns(ignore_patterns)
        include_rules = compile_patterns(self.include)
        return list(_iter_files(root, ignore_rules, include_rules))


def _iter_files(
    root: Path,
    ignore_rules: Sequence[PathPattern],
    include_rules: Sequence[PathPattern],
) -> Iterator[str]:
    def _on_error(exc: OSError) -> None:
        logger.error("Cannot read directory '%s': %s", exc.filename, exc.strerror or exc)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept_dirs = []
        for name in sorted(dirnames):
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _is_ignored(rel_path, True, ignore_rules):
                continue
            kept_dirs.append(name)
        dirnames[:] = kept_dirs

        for filename in sorted(filenames):
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if (current_dir / filename).is_dir():
                continue
            if _is_ignored(rel_path, False, ignore_rules):
                continue
            if include_rules and not any(rule.matches(rel_path) for rule in include_rules):
                continue
            yield rel_path


def _is_ignored(rel_path: str, is_dir: bool, rules: Sequence[PathPattern]) -> bool:
    return any(rule.matches(rel_path, is_dir) for rule in rules)


__all__ = [
    "FileDiscovery",
    "PathPattern",
    "RecencyFilter",
    "compile_patterns",
    "load_ignore_file",
]
