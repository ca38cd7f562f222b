"""Per-file admission control and the running token budget."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from .logging import get_logger
from .models import Candidate, FileRecord
from .reader import ContentReader
from .text import count_lines, estimate_tokens

logger = get_logger("admission")


class AdmissionFilter:
    """Decides which candidates are read and kept.

    ``_load`` is a lazy producer of readable records (existence, size ceiling,
    read errors); ``admit`` consumes it and stops pulling as soon as the next
    record would overflow the token budget, so trailing candidates are never
    read.
    """

    def __init__(
        self,
        reader: ContentReader | None = None,
        *,
        max_file_size: Optional[int] = None,
        max_tokens: Optional[int] = None,
    ) -> None:
        self.reader = reader or ContentReader()
        self.max_file_size = max_file_size
        self.max_tokens = max_tokens
        self.running_tokens = 0

    def admit(self, candidates: Iterable[Candidate]) -> Iterator[FileRecord]:
        self.running_tokens = 0
        for record in self._load(candidates):
            cost = estimate_tokens(record.content)
            if self.max_tokens and self.running_tokens + cost > self.max_tokens:
                logger.info(
                    "Stopping at %s: token limit reached (%d > %d)",
                    record.path,
                    self.running_tokens + cost,
                    self.max_tokens,
                )
                return
            self.running_tokens += cost
            yield record

    def _load(self, candidates: Iterable[Candidate]) -> Iterator[FileRecord]:
        for candidate in candidates:
            record = self._load_one(candidate)
            if record is not None:
                yield record

    def _load_one(self, candidate: Candidate) -> Optional[FileRecord]:
        display = candidate.display
        try:
            if not candidate.path.exists():
                logger.warning("File '%s' no longer exists, skipping", display)
                return None

            stat_result = candidate.path.stat()
            if self.max_file_size and stat_result.st_size > self.max_file_size:
                logger.info(
                    "Skipping %s: file too large (%d bytes, limit: %d)",
                    display,
                    stat_result.st_size,
                    self.max_file_size,
                )
                return None

            content = self.reader.read(candidate.path, stat_result.st_size)
        except FileNotFoundError:
            logger.error("File '%s' not found", display)
            return None
        except PermissionError:
            logger.error("Permission denied reading '%s'", display)
            return None
        except IsADirectoryError:
            logger.error("'%s' is a directory, not a file", display)
            return None
        except OSError as exc:
            logger.error("Could not read file '%s': %s", display, exc)
            return None

        return FileRecord(
            path=display,
            size=stat_result.st_size,
            line_count=count_lines(content),
            content=content,
        )


__all__ = ["AdmissionFilter"]
