"""End-to-end tests for the packaging pipeline."""

from __future__ import annotations

import logging
import time

from ctxpack.config import PackOptions
from ctxpack.models import VcsSnapshot
from ctxpack.packager import Packager, pack

from tests._fixtures.repo_builder import RepoBuilder, StubGitProvider


def test_analyze_walks_repository_and_applies_default_ignores(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "main.py": "print('hi')\n",
            "src/util.py": "def helper():\n    return 1\n",
            "README.md": "# Project\n",
            "node_modules/lib/index.js": "module.exports = {};\n",
            "yarn.lock": "lock\n",
        }
    )

    result = repo_builder.analyze()

    assert [record.path for record in result.files] == ["main.py", "src/util.py"]
    stats = result.statistics
    assert stats.total_files == 2
    assert stats.total_lines == 2 + 3
    assert stats.directories_processed == 1
    assert stats.file_types == {".py": 2}
    assert stats.largest_file is not None
    assert stats.largest_file.path == "src/util.py"
    assert result.primary_path == repo_builder.path()
    assert repo_builder.git.calls == [repo_builder.path()]


def test_gitignore_and_exclude_patterns_are_layered(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            ".gitignore": "# generated\ngenerated/\n*.bak\n",
            "app.ts": "export const a = 1;\n",
            "app.ts.bak": "old\n",
            "generated/schema.ts": "export {};\n",
            "docs/guide.md": "guide\n",
            "src/keep.ts": "export {};\n",
        }
    )

    result = repo_builder.analyze(PackOptions(exclude=["docs/"]))

    assert [record.path for record in result.files] == ["app.ts", "src/keep.ts"]


def test_include_patterns_restrict_directory_files(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "a.ts": "export {};\n",
            "b.js": "module.exports = {};\n",
            "lib/c.ts": "export {};\n",
        }
    )

    result = repo_builder.analyze(PackOptions(include=["*.ts"]))

    assert [record.path for record in result.files] == ["a.ts", "lib/c.ts"]


def test_token_budget_stops_before_overflowing_file(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"a.txt": "x" * 40, "b.txt": "y" * 40, "c.txt": "z" * 4})

    packager = repo_builder.packager(PackOptions(max_tokens=15))
    result = packager.analyze()

    assert [record.path for record in result.files] == ["a.txt"]
    assert result.statistics.total_tokens == 10


def test_max_file_size_skips_large_files(repo_builder: RepoBuilder, caplog) -> None:  # type: ignore[no-untyped-def]
    repo_builder.write({"big.txt": "b" * 50, "small.txt": "tiny"})

    with caplog.at_level(logging.INFO, logger="ctxpack"):
        result = repo_builder.analyze(PackOptions(max_file_size=10))

    assert [record.path for record in result.files] == ["small.txt"]
    assert "Skipping big.txt: file too large (50 bytes, limit: 10)" in caplog.text


def test_binary_files_are_replaced_by_placeholder(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"assets/logo.png": "abc"})

    result = repo_builder.analyze()

    assert len(result.files) == 1
    assert result.files[0].content == "[Binary file: logo.png (3 bytes)]"


def test_generate_renders_document_with_git_info(repo_builder: RepoBuilder) -> None:
    repo_builder.git = StubGitProvider(
        VcsSnapshot(commit="deadbeef", branch="main", author="Dev <dev@example.com>", date="2024-01-01")
    )
    repo_builder.write({"main.py": "print('hi')\n"})

    document = repo_builder.packager(PackOptions(tokens=True)).generate()

    assert document.startswith("# Repository Context\n\n## File System Location\n\n")
    assert f"\n{repo_builder.path()}\n" in document
    assert "- Commit: deadbeef\n- Branch: main\n" in document
    assert "└── main.py" in document
    assert "### File: main.py\n```py\nprint('hi')\n\n```\n" in document
    assert "- Estimated tokens: 3\n" in document


def test_missing_vcs_and_empty_repository(repo_builder: RepoBuilder) -> None:
    document = repo_builder.packager().generate()

    assert "Not a git repository" in document
    assert "## File Contents\n\n## Summary" in document
    assert "- Total files: 0\n" in document


def test_analyze_is_repeatable(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"a.py": "x = 1\n", "pkg/b.py": "y = 2\n"})
    packager = repo_builder.packager(PackOptions(tokens=True))

    first = packager.analyze()
    first_document = packager.generate(first)
    second = packager.analyze()

    assert second.statistics == first.statistics
    assert packager.generate(second) == first_document
    assert packager.result is second


def test_recent_window_drops_old_directory_files_but_keeps_named_files(
    repo_builder: RepoBuilder,
) -> None:
    repo_builder.write({"main.py": "print('hi')\n", "old.py": "pass\n"})
    root = repo_builder.path()
    later = time.time() + 30 * 24 * 60 * 60

    packager = Packager(
        [str(root), str(root / "main.py")],
        PackOptions(recent=7),
        git_provider=repo_builder.git,
        now=later,
    )
    result = packager.analyze()

    assert [record.path for record in result.files] == ["main.py"]
    assert result.recent_days == 7
    assert "## Recent Changes" in packager.generate(result)


def test_missing_inputs_are_logged_and_skipped(repo_builder: RepoBuilder, caplog) -> None:  # type: ignore[no-untyped-def]
    repo_builder.write({"main.py": "print('hi')\n"})
    missing = repo_builder.path() / "missing.py"

    with caplog.at_level(logging.ERROR, logger="ctxpack"):
        result = repo_builder.packager(paths=[str(repo_builder.path()), str(missing)]).analyze()

    assert [record.path for record in result.files] == ["main.py"]
    assert "does not exist" in caplog.text


def test_pack_summary_mode_outlines_code(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"greet.py": "def greet(name):\n    return name\n"})

    document = pack(
        [str(repo_builder.path())],
        PackOptions(summary=True),
        git_provider=repo_builder.git,
    )

    assert "### File: greet.py\n```python\n# File contains 1 item, 3 lines\n" in document
    assert "def greet(name):\n" in document
    assert "    return name" not in document


def test_sibling_directories_keep_distinct_paths(tmp_path, monkeypatch) -> None:  # type: ignore[no-untyped-def]
    (tmp_path / "a" / "b").mkdir(parents=True)
    (tmp_path / "b").mkdir()
    (tmp_path / "a" / "b" / "x.py").write_text("a = 1\n", encoding="utf-8")
    (tmp_path / "b" / "x.py").write_text("b = 2\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    packager = Packager(["a", "b"], git_provider=StubGitProvider())
    result = packager.analyze()

    assert [record.path for record in result.files] == ["a/b/x.py", "b/x.py"]
    assert result.primary_path == tmp_path / "a"
    document = packager.generate(result)
    assert "├── a\n│   └── b\n│       └── x.py\n└── b\n    └── x.py" in document
