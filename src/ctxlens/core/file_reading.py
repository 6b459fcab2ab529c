"""Bounded file reads and repository-relative path helpers."""

import os
from pathlib import Path

TRUNCATION_MARKER = "[Content truncated...]"

# Fraction of the limit within which a newline boundary is preferred
NEWLINE_CUT_THRESHOLD = 0.8


def truncate_content(content: str, max_length: int) -> str:
    """Truncate content to max_length characters, marking the cut.

    The cut lands on the last newline when that newline falls within the final
    20% of the limit; otherwise the content is hard-cut at max_length.
    """
    if len(content) <= max_length:
        return content

    truncated = content[:max_length]
    last_newline = truncated.rfind("\n")
    if last_newline > max_length * NEWLINE_CUT_THRESHOLD:
        return f"{truncated[:last_newline]}\n\n{TRUNCATION_MARKER}"
    return f"{truncated}\n\n{TRUNCATION_MARKER}"


def read_file_with_limit(path: Path, max_length: int) -> str | None:
    """Read a UTF-8 text file, truncating it to max_length.

    Returns:
        File content, or None if the file cannot be read.
    """
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
    return truncate_content(content, max_length)


def read_trimmed(path: Path) -> str | None:
    """Read a file and strip surrounding whitespace, or None if unreadable."""
    try:
        return path.read_text(encoding="utf-8", errors="replace").strip()
    except OSError:
        return None


def get_relative_path(path: Path, base_dir: Path) -> str:
    """Return path relative to base_dir in POSIX form.

    Paths outside base_dir are returned unchanged.
    """
    absolute = Path(os.path.abspath(path))
    root = Path(os.path.abspath(base_dir))
    if absolute.is_relative_to(root):
        return absolute.relative_to(root).as_posix()
    return absolute.as_posix()


def path_depth(rel_path: str) -> int:
    """Number of segments in a POSIX relative path, used for shallow-first sorting."""
    return len(rel_path.split("/"))
