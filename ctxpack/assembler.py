"""Rendering of the packaged Markdown document."""

from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from jinja2 import Environment, FileSystemLoader

from .models import AnalysisResult, FileRecord
from .summarizer import format_summary, summarize_code

DOCUMENT_TEMPLATE = "document.md.j2"

_BRANCH = "├── "
_LAST = "└── "
_PIPE = "│   "
_SPACE = "    "

_TreeNode = Dict[str, Optional["_TreeNode"]]


class DocumentAssembler:
    """Turns an analysis result into the final document text."""

    def __init__(
        self,
        *,
        summary: bool = False,
        show_tokens: bool = False,
    ) -> None:
        self.summary = summary
        self.show_tokens = show_tokens
        self._env = self._create_env()

    def render(self, result: AnalysisResult) -> str:
        template = self._env.get_template(DOCUMENT_TEMPLATE)
        stats = result.statistics
        return template.render(
            location=str(result.primary_path),
            vcs=result.vcs,
            recent_days=result.recent_days,
            tree=render_tree(record.path for record in result.files),
            file_blocks=[self.render_file(record) for record in result.files],
            stats=stats,
            file_types=sorted_file_types(stats.file_types),
            show_tokens=self.show_tokens,
        )

    def render_file(self, record: FileRecord) -> str:
        if self.summary:
            return format_summary(summarize_code(record.content, record.path))
        return render_file_block(record)

    @staticmethod
    def _create_env() -> Environment:
        loader = FileSystemLoader(str(Path(__file__).with_name("templates")))
        return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


def render_file_block(record: FileRecord) -> str:
    _, extension = posixpath.splitext(posixpath.basename(record.path))
    language = extension[1:] or "txt"
    return f"### File: {record.path}\n```{language}\n{record.content}\n```\n"


def sorted_file_types(file_types: Dict[str, int]) -> List[Tuple[str, int]]:
    """Histogram entries by descending count, then extension."""
    return sorted(file_types.items(), key=lambda item: (-item[1], item[0]))


def build_tree(paths: Iterable[str]) -> _TreeNode:
    root: _TreeNode = {}
    for path in paths:
        parts = [part for part in path.split("/") if part]
        current = root
        for index, part in enumerate(parts):
            is_file = index == len(parts) - 1
            if part not in current:
                current[part] = None if is_file else {}
            if not is_file:
                child = current[part]
                if child is None:
                    # A file and a directory share a name; keep the directory.
                    child = current[part] = {}
                current = child
    return root


def render_tree(paths: Iterable[str]) -> str:
    """Draw ``paths`` as a tree, directories before files at every level."""
    lines: List[str] = []
    _render_node(build_tree(paths), "", lines)
    return "\n".join(lines)


def _render_node(node: _TreeNode, prefix: str, lines: List[str]) -> None:
    entries = _sorted_entries(node)
    for index, name in enumerate(entries):
        is_last = index == len(entries) - 1
        lines.append(f"{prefix}{_LAST if is_last else _BRANCH}{name}")
        child = node[name]
        if child is not None:
            _render_node(child, prefix + (_SPACE if is_last else _PIPE), lines)


def _sorted_entries(node: _TreeNode) -> Sequence[str]:
    return sorted(node, key=lambda name: (node[name] is None, name.lower(), name))


__all__ = [
    "DocumentAssembler",
    "build_tree",
    "render_file_block",
    "render_tree",
    "sorted_file_types",
]
