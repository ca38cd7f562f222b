"""Resolution of user-supplied input paths."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from .logging import get_logger

logger = get_logger("paths")


@dataclass
class ResolvedInputs:
    """Inputs split by kind, anchored on a primary directory.

    ``base`` is the single directory every display path is relative to, so
    two inputs never render the same file name. ``None`` means absolute.
    """

    primary: Path
    directories: List[Path] = field(default_factory=list)
    files: List[Path] = field(default_factory=list)
    base: Optional[Path] = None

    def display_path(self, path: Path) -> str:
        return display_path(path, self.base)


class PathResolver:
    """Turns a heterogeneous list of paths into a primary path plus inputs."""

    def __init__(self, cwd: Path | None = None) -> None:
        self._cwd = cwd

    def resolve(self, paths: Sequence[str | Path]) -> ResolvedInputs:
        cwd = (self._cwd or Path.cwd()).resolve()
        absolute = [self._absolute(Path(raw), cwd) for raw in paths]
        primary = self.primary_path(absolute, cwd)
        resolved = ResolvedInputs(primary=primary)

        for raw, path in zip(paths, absolute):
            if not path.exists():
                logger.error("Path '%s' does not exist", raw)
                continue
            if path.is_dir():
                if not os.access(path, os.R_OK | os.X_OK):
                    logger.error("Cannot read directory '%s': Permission denied", raw)
                    continue
                resolved.directories.append(path)
            elif path.is_file():
                if not os.access(path, os.R_OK):
                    logger.error("Cannot read file '%s': Permission denied", raw)
                    continue
                resolved.files.append(path)
            else:
                logger.warning("'%s' is neither a file nor a directory", raw)

        resolved.base = self.display_base(primary, resolved.directories + resolved.files, cwd)
        return resolved

    @staticmethod
    def primary_path(paths: Sequence[Path], cwd: Path) -> Path:
        """First existing directory, else the first existing file's parent, else cwd."""
        for path in paths:
            if path.is_dir():
                return path
        for path in paths:
            if path.is_file():
                return path.parent
        return cwd

    @staticmethod
    def display_base(primary: Path, inputs: Sequence[Path], cwd: Path) -> Optional[Path]:
        """Primary when it holds every input, else cwd when that does, else ``None``."""
        for base in (primary, cwd):
            if all(_is_within(path, base) for path in inputs):
                return base
        return None

    @staticmethod
    def _absolute(path: Path, cwd: Path) -> Path:
        path = path.expanduser()
        if not path.is_absolute():
            path = cwd / path
        return Path(os.path.normpath(path))


def display_path(path: Path, base: Optional[Path]) -> str:
    """Relative, ``/``-separated path used in the document and statistics."""
    if base is not None and base in path.parents:
        return path.relative_to(base).as_posix()
    return path.as_posix()


def _is_within(path: Path, base: Path) -> bool:
    return path == base or base in path.parents


__all__ = ["PathResolver", "ResolvedInputs", "display_path"]
