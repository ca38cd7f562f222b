"""Pipeline orchestration: resolve, discover, admit, track, assemble."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from .admission import AdmissionFilter
from .assembler import DocumentAssembler
from .config import PackOptions
from .discovery import FileDiscovery, RecencyFilter
from .git.info import GitInfoProvider
from .logging import get_logger
from .models import AnalysisResult, FileRecord
from .paths import PathResolver
from .reader import ContentReader
from .statistics import StatisticsTracker


class Packager:
    """Runs one packaging pass over a set of input paths.

    A packager owns its statistics tracker and token counter; create a new
    instance (or call ``analyze`` again, which resets them) per run.
    """

    def __init__(
        self,
        paths: str | Path | Sequence[str | Path],
        options: PackOptions | None = None,
        *,
        git_provider: GitInfoProvider | None = None,
        resolver: PathResolver | None = None,
        reader: ContentReader | None = None,
        now: float | None = None,
    ) -> None:
        if isinstance(paths, (str, Path)):
            paths = [paths]
        self.paths: List[str | Path] = list(paths)
        self.options = options or PackOptions()
        self.git_provider = git_provider or GitInfoProvider()
        self.resolver = resolver or PathResolver()
        self.reader = reader or ContentReader()
        self.tracker = StatisticsTracker()
        self._now = now
        self._result: Optional[AnalysisResult] = None
        self.logger = get_logger("packager")

    def analyze(self) -> AnalysisResult:
        options = self.options
        self.tracker.reset()

        inputs = self.resolver.resolve(self.paths)
        self.logger.debug("Primary path: %s", inputs.primary)
        vcs = self.git_provider.get_repo_info(inputs.primary)

        recency = None
        if options.recent:
            recency = RecencyFilter(options.recent, now=self._now)
        discovery = FileDiscovery(include=options.include, exclude=options.exclude, recency=recency)
        candidates = discovery.discover(inputs)

        admission = AdmissionFilter(
            self.reader,
            max_file_size=options.max_file_size,
            max_tokens=options.max_tokens,
        )
        files: List[FileRecord] = []
        for record in admission.admit(candidates):
            self.tracker.track_file(record)
            files.append(record)

        self.logger.debug(
            "Admitted %d of %d candidates (%d tokens)",
            len(files),
            len(candidates),
            admission.running_tokens,
        )
        self._result = AnalysisResult(
            primary_path=inputs.primary,
            vcs=vcs,
            files=files,
            statistics=self.tracker.snapshot(),
            recent_days=options.recent or None,
        )
        return self._result

    @property
    def result(self) -> Optional[AnalysisResult]:
        return self._result

    def generate(self, result: AnalysisResult | None = None) -> str:
        """Render the document, analysing first when needed."""
        if result is None:
            result = self._result or self.analyze()
        assembler = DocumentAssembler(summary=self.options.summary, show_tokens=self.options.tokens)
        return assembler.render(result)


def pack(
    paths: str | Path | Sequence[str | Path],
    options: PackOptions | None = None,
    **kwargs: object,
) -> str:
    """Analyse ``paths`` and return the packaged document."""
    packager = Packager(paths, options, **kwargs)  # type: ignore[arg-type]
    return packager.generate()


__all__ = ["Packager", "pack"]
