"""Tests for bounded file reads and relative paths."""

from pathlib import Path

from ctxlens.core.file_reading import (
    TRUNCATION_MARKER,
    get_relative_path,
    path_depth,
    read_file_with_limit,
    read_trimmed,
    truncate_content,
)
from tests.test_utils.repo_files import write_file


def test_truncate_content_under_limit_is_unchanged() -> None:
    assert truncate_content("short", 100) == "short"


def test_truncate_content_cuts_at_late_newline() -> None:
    content = "a" * 90 + "\n" + "b" * 50

    result = truncate_content(content, 100)

    assert result == "a" * 90 + "\n\n" + TRUNCATION_MARKER


def test_truncate_content_hard_cuts_when_newline_is_early() -> None:
    content = "a" * 10 + "\n" + "b" * 200

    result = truncate_content(content, 100)

    assert result == content[:100] + "\n\n" + TRUNCATION_MARKER


def test_read_file_with_limit_missing_file_returns_none(tmp_path: Path) -> None:
    assert read_file_with_limit(tmp_path / "missing.md", 100) is None


def test_read_file_with_limit_reads_content(tmp_path: Path) -> None:
    path = write_file(tmp_path, "doc.md", "# Doc\n")

    assert read_file_with_limit(path, 100) == "# Doc\n"


def test_read_trimmed(tmp_path: Path) -> None:
    path = write_file(tmp_path, "doc.md", "\n  content \n\n")

    assert read_trimmed(path) == "content"
    assert read_trimmed(tmp_path / "missing.md") is None


def test_get_relative_path(tmp_path: Path) -> None:
    assert get_relative_path(tmp_path / "docs" / "guide.md", tmp_path) == "docs/guide.md"


def test_get_relative_path_outside_base_is_absolute(tmp_path: Path) -> None:
    outside = tmp_path.parent / "elsewhere.md"

    assert get_relative_path(outside, tmp_path) == outside.as_posix()


def test_path_depth() -> None:
    assert path_depth("AGENTS.md") == 1
    assert path_depth("a/b/AGENTS.md") == 3
