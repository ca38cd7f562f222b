"""Latest-commit metadata lookup."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable, Optional

from ..logging import get_logger
from ..models import VcsSnapshot

logger = get_logger("git")

_FIELD_SEPARATOR = "\x1f"
_LOG_FORMAT = _FIELD_SEPARATOR.join(("%H", "%an <%ae>", "%aI"))


class GitInfoProvider:
    """Reads commit, branch, author and date for the repository at a path."""

    def __init__(self, runner: Callable[..., str] | None = None) -> None:
        self._runner = runner or self._default_runner

    def get_repo_info(self, repo_path: str | Path) -> Optional[VcsSnapshot]:
        """Return the latest commit snapshot, or None when unavailable.

        Never raises: non-repositories, repositories without commits, a
        missing ``git`` executable and command failures all map to None.
        """
        repo = Path(repo_path).resolve()
        if not repo.exists():
            return None
        cwd = repo if repo.is_dir() else repo.parent

        try:
            inside = self._run(["git", "rev-parse", "--is-inside-work-tree"], cwd=cwd)
            if inside.strip() != "true":
                return None
            log_line = self._run(["git", "log", "-1", f"--format={_LOG_FORMAT}"], cwd=cwd)
            branch = self._run(["git", "rev-parse", "--abbrev-ref", "HEAD"], cwd=cwd)
        except subprocess.CalledProcessError as exc:
            logger.debug("git lookup failed in %s: %s", cwd, exc)
            return None
        except OSError as exc:
            logger.debug("git is unavailable: %s", exc)
            return None

        fields = log_line.strip().split(_FIELD_SEPARATOR)
        if len(fields) != 3 or not fields[0]:
            logger.debug("No commits found in %s", cwd)
            return None

        commit, author, date = fields
        return VcsSnapshot(commit=commit, branch=branch.strip(), author=author, date=date)

    def _run(self, args: Iterable[str], *, cwd: Path) -> str:
        return self._runner(args, cwd=cwd)

    @staticmethod
    def _default_runner(args: Iterable[str], *, cwd: Path) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=True,
        )
        return completed.stdout


__all__ = ["GitInfoProvider"]
