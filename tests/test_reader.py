"""Tests for ctxpack.reader."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from ctxpack.constants import MAX_CONTENT_CHARS
from ctxpack.reader import ContentReader, is_binary_file, summarize_manifest, truncate_at_line


def test_binary_files_are_never_opened(tmp_path: Path, monkeypatch) -> None:
    image = tmp_path / "logo.PNG"
    image.write_bytes(b"\x89PNG\r\n" + b"\x00" * 10)

    def _fail(*args, **kwargs):  # type: ignore[no-untyped-def]
        raise AssertionError("binary content must not be read")

    monkeypatch.setattr(Path, "read_text", _fail)
    monkeypatch.setattr(Path, "read_bytes", _fail)

    content = ContentReader().read(image, image.stat().st_size)

    assert content == "[Binary file: logo.PNG (16 bytes)]"


def test_is_binary_file_matches_known_suffixes() -> None:
    assert is_binary_file("dist/app.exe")
    assert is_binary_file(Path("fonts/Inter.woff2"))
    assert not is_binary_file("src/app.ts")
    assert not is_binary_file("Makefile")


def test_text_is_returned_verbatim(tmp_path: Path) -> None:
    source = tmp_path / "app.py"
    source.write_text("print('hi')\n", encoding="utf-8")

    assert ContentReader().read(source) == "print('hi')\n"


def test_invalid_utf8_is_replaced_rather_than_failing(tmp_path: Path) -> None:
    source = tmp_path / "latin.txt"
    source.write_bytes(b"caf\xe9\n")

    assert ContentReader().read(source) == "caf�\n"


def test_package_json_is_reduced_to_key_fields(tmp_path: Path) -> None:
    manifest = tmp_path / "package.json"
    manifest.write_text(
        json.dumps(
            {
                "name": "demo",
                "version": "1.2.3",
                "scripts": {"build": "tsc"},
                "dependencies": {"commander": "^11.0.0"},
                "repository": {"type": "git", "url": "https://example.invalid"},
                "keywords": ["a", "b"],
            }
        ),
        encoding="utf-8",
    )

    content = ContentReader().read(manifest)
    data = json.loads(content)

    assert data == {
        "name": "demo",
        "version": "1.2.3",
        "scripts": {"build": "tsc"},
        "dependencies": {"commander": "^11.0.0"},
    }
    assert content.startswith('{\n  "name"')


def test_tsconfig_keeps_compiler_options(tmp_path: Path) -> None:
    config = tmp_path / "tsconfig.json"
    config.write_text(
        '{"compilerOptions": {"strict": true}, "include": ["src"], "watchOptions": {}}',
        encoding="utf-8",
    )

    data = json.loads(ContentReader().read(config))

    assert data == {"compilerOptions": {"strict": True}, "include": ["src"]}


@pytest.mark.parametrize("raw", ["{ not json", "[1, 2, 3]"])
def test_malformed_manifest_falls_back_to_raw_text(tmp_path: Path, raw: str) -> None:
    manifest = tmp_path / "package.json"
    manifest.write_text(raw, encoding="utf-8")

    assert ContentReader().read(manifest) == raw


def test_summarize_manifest_ignores_other_files() -> None:
    assert summarize_manifest("composer.json", '{"name": "x"}') is None


def test_oversized_text_is_cut_at_line_boundary(tmp_path: Path) -> None:
    line = "x" * 99 + "\n"
    content = line * 200  # 20000 characters
    source = tmp_path / "big.txt"
    source.write_text(content, encoding="utf-8")

    result = ContentReader().read(source)

    kept_lines = MAX_CONTENT_CHARS // 100
    shown = (line * kept_lines)[:-1]
    assert result == (
        f"{shown}\n\n... [File truncated: showing first {len(shown)} characters of {len(content)}]"
    )


def test_truncate_at_line_hard_cuts_single_long_line() -> None:
    text = "y" * 50

    result = truncate_at_line(text, 20)

    assert result.startswith("y" * 20 + "\n\n... [File truncated")
    assert result.endswith("showing first 20 characters of 50]")


def test_truncate_at_line_keeps_short_text() -> None:
    assert truncate_at_line("short\ntext", 100) == "short\ntext"
