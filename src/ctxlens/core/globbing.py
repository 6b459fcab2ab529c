"""Case-insensitive glob matching over a repository tree.

Patterns use forward slashes and support `*` within a segment and `**` for
any number of directories. Hidden directories are traversed; the usual
dependency and build output directories are pruned, matched case-insensitively.
"""

import os
import re
from pathlib import Path

IGNORED_DIR_NAMES = frozenset(
    {
        "node_modules",
        "dist",
        "build",
        ".git",
        "vendor",
        "coverage",
    }
)


def _segment_to_regex(segment: str) -> str:
    parts: list[str] = []
    for char in segment:
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        else:
            parts.append(re.escape(char))
    return "".join(parts)


def compile_glob(pattern: str) -> re.Pattern[str]:
    """Compile a glob pattern into a case-insensitive regex over POSIX paths."""
    regex = ""
    segments = pattern.split("/")
    for index, segment in enumerate(segments):
        is_last = index == len(segments) - 1
        if segment == "**":
            regex += "(?:[^/]+/)*"
            continue
        regex += _segment_to_regex(segment)
        if not is_last:
            regex += "/"
    return re.compile(f"^{regex}$", re.IGNORECASE)


def _walk_relative_files(base_dir: Path) -> list[str]:
    relative_files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(base_dir):
        dirnames[:] = [name for name in dirnames if name.lower() not in IGNORED_DIR_NAMES]
        rel_dir = Path(dirpath).relative_to(base_dir).as_posix()
        for filename in filenames:
            if rel_dir == ".":
                relative_files.append(filename)
            else:
                relative_files.append(f"{rel_dir}/{filename}")
    return relative_files


def glob_files(base_dir: Path, pattern: str) -> list[Path]:
    """Return absolute paths under base_dir matching pattern.

    Symlinked files are returned as found; symlinked directories are not
    descended into. Results are sorted for deterministic ordering.

    Raises:
        FileNotFoundError: If base_dir does not exist.
        NotADirectoryError: If base_dir is not a directory.
    """
    root = Path(os.path.abspath(base_dir))
    if not root.exists():
        raise FileNotFoundError(f"Directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    matcher = compile_glob(pattern)
    matches = [rel for rel in _walk_relative_files(root) if matcher.match(rel)]
    return [root / rel for rel in sorted(matches)]


def relative_depth(path: Path, base_dir: Path) -> int:
    """Depth of path below base_dir; a file directly in base_dir has depth 0."""
    rel = Path(os.path.abspath(path)).relative_to(Path(os.path.abspath(base_dir)))
    return len(rel.parts) - 1


def filter_by_depth(files: list[Path], base_dir: Path, max_depth: int | None) -> list[Path]:
    """Drop files deeper than max_depth. None means unlimited."""
    if max_depth is None:
        return files
    return [f for f in files if relative_depth(f, base_dir) <= max_depth]
