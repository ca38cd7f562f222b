"""Reading file content for packaging."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import BINARY_EXTENSIONS, MANIFEST_SUMMARY_KEYS, MAX_CONTENT_CHARS
from .logging import get_logger

logger = get_logger("reader")


def is_binary_file(path: Path | str) -> bool:
    """Return True when the suffix marks a known binary format."""
    return Path(path).suffix.lower() in BINARY_EXTENSIONS


def binary_placeholder(path: Path, size: int) -> str:
    return f"[Binary file: {path.name} ({size} bytes)]"


def summarize_manifest(filename: str, text: str) -> Optional[str]:
    """Reduce a package manifest or compiler config to its key fields.

    Returns ``None`` when the file is not one of the recognised manifests or
    its content is not a JSON object.
    """
    keys = MANIFEST_SUMMARY_KEYS.get(filename)
    if keys is None:
        return None
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None

    reduced: Dict[str, Any] = {key: data[key] for key in keys if key in data}
    return json.dumps(reduced, indent=2, ensure_ascii=False)


def truncate_at_line(content: str, limit: int = MAX_CONTENT_CHARS) -> str:
    """Cut oversized text at the last full line and append a marker."""
    if len(content) <= limit:
        return content
    truncated = content[:limit]
    last_newline = truncated.rfind("\n")
    shown = truncated[:last_newline] if last_newline > 0 else truncated
    return (
        f"{shown}\n\n... [File truncated: showing first {len(shown)} "
        f"characters of {len(content)}]"
    )


class ContentReader:
    """Loads the text that represents a file in the packaged document."""

    def __init__(self, max_chars: int = MAX_CONTENT_CHARS) -> None:
        self.max_chars = max_chars

    def read(self, path: Path, size: int | None = None) -> str:
        """Return the packaged text for ``path``.

        OSErrors propagate so the caller can classify them per file.
        """
        if is_binary_file(path):
            if size is None:
                size = path.stat().st_size
            return binary_placeholder(path, size)

        content = path.read_text(encoding="utf-8", errors="replace")

        summary = summarize_manifest(path.name, content)
        if summary is not None:
            content = summary

        if len(content) > self.max_chars:
            logger.debug(
                "Truncating %s: %d characters exceeds %d", path, len(content), self.max_chars
            )
            content = truncate_at_line(content, self.max_chars)
        return content


__all__ = [
    "ContentReader",
    "binary_placeholder",
    "is_binary_file",
    "summarize_manifest",
    "truncate_at_line",
]
