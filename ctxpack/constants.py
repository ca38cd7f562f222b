"""Static tables shared by discovery, reading and summarization."""

from __future__ import annotations

from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple

# Files larger than this many characters are cut at a line boundary.
MAX_CONTENT_CHARS = 16 * 1024

DEFAULT_OUTPUT_FILENAME = "output.md"
IGNORE_FILENAME = ".gitignore"

DEFAULT_IGNORE_PATTERNS: Tuple[str, ...] = (
    # dependencies and build output
    "node_modules/",
    "bower_components/",
    ".venv/",
    "venv/",
    "__pycache__/",
    "dist/",
    "build/",
    "coverage/",
    ".nyc_output/",
    ".pytest_cache/",
    ".mypy_cache/",
    # version control internals
    ".git/",
    ".hg/",
    ".svn/",
    ".gitignore",
    ".gitattributes",
    # lock files
    "*.lock",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "bun.lockb",
    # generated output and logs
    DEFAULT_OUTPUT_FILENAME,
    "*.log",
    # documentation and licensing boilerplate
    "README.md",
    "readme.md",
    "Instruction.md",
    "instruction.md",
    "INSTRUCTIONS.md",
    "LICENSE",
    "license",
    "LICENSE.txt",
    "CHANGELOG.md",
    "changelog.md",
    # secrets
    ".env*",
    "*.env",
    # OS cruft
    ".DS_Store",
    "Thumbs.db",
    # editor metadata
    ".vscode/",
    ".idea/",
    "*.swp",
    "*.swo",
    "*~",
    # temp and cache files
    "*.tmp",
    "*.temp",
    "*.cache",
)

BINARY_EXTENSIONS: FrozenSet[str] = frozenset(
    {
        # images
        ".jpg",
        ".jpeg",
        ".png",
        ".gif",
        ".bmp",
        ".ico",
        ".svg",
        ".webp",
        # office documents
        ".pdf",
        ".doc",
        ".docx",
        ".xls",
        ".xlsx",
        ".ppt",
        ".pptx",
        # archives
        ".zip",
        ".tar",
        ".gz",
        ".rar",
        ".7z",
        # executables and libraries
        ".exe",
        ".dll",
        ".so",
        ".dylib",
        # audio and video
        ".mp3",
        ".mp4",
        ".avi",
        ".mov",
        ".wav",
        # fonts
        ".ttf",
        ".otf",
        ".woff",
        ".woff2",
        # compiled objects
        ".pyc",
        ".class",
        ".o",
        ".obj",
    }
)

LANGUAGE_BY_SUFFIX: Mapping[str, str] = MappingProxyType(
    {
        ".ts": "typescript",
        ".tsx": "typescript",
        ".js": "javascript",
        ".jsx": "javascript",
        ".mjs": "javascript",
        ".cjs": "javascript",
        ".py": "python",
        ".pyi": "python",
        ".java": "java",
        ".go": "go",
        ".rs": "rust",
        ".cpp": "cpp",
        ".c": "c",
        ".h": "c",
        ".cs": "csharp",
        ".php": "php",
        ".rb": "ruby",
        ".json": "json",
        ".md": "markdown",
        ".yaml": "yaml",
        ".yml": "yaml",
    }
)

DEFAULT_LANGUAGE = "text"
DEFAULT_FILE_TYPE = ".txt"

# Top-level keys kept when a structured manifest is reduced to a summary.
MANIFEST_SUMMARY_KEYS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "package.json": (
            "name",
            "version",
            "description",
            "type",
            "main",
            "module",
            "types",
            "bin",
            "scripts",
            "engines",
            "dependencies",
            "devDependencies",
            "peerDependencies",
        ),
        "tsconfig.json": (
            "extends",
            "compilerOptions",
            "include",
            "exclude",
            "files",
            "references",
        ),
    }
)
