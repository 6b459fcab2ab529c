"""Locate and deduplicate context files in a repository.

Context files are AGENTS.md, CLAUDE.md, GitHub Copilot instructions and
Claude Code rules files. They all serve the same purpose, and repositories
commonly carry the same instructions several times over (symlinks, copies,
`@file` pointers). Discovery collapses those into one canonical list:

1. Glob the five context file patterns concurrently.
2. Drop files deeper than max_depth.
3. Resolve symlinks; keep one file per canonical target.
4. In each directory, collapse an AGENTS.md/CLAUDE.md pair that is
   identical or where one file only points at the other.
5. Drop Copilot instructions identical to any AGENTS.md/CLAUDE.md in the repo.
6. Sort shallow files first.
"""

import errno
import logging
import os
import stat
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from ctxlens.core.file_reading import (
    get_relative_path,
    path_depth,
    read_file_with_limit,
    read_trimmed,
)
from ctxlens.core.frontmatter import parse_rules_frontmatter
from ctxlens.core.globbing import filter_by_depth, glob_files
from ctxlens.discovery.file_reference import detect_cross_reference
from ctxlens.discovery.models import ContextArtifact, ContextFileType

AGENTS_PATTERN = "**/AGENTS.md"
CLAUDE_PATTERN = "**/CLAUDE.md"
COPILOT_PATTERN = "**/.github/**/copilot-instructions.md"
COPILOT_INSTRUCTIONS_PATTERN = "**/.github/instructions/**/*.instructions.md"
CLAUDE_RULES_PATTERN = "**/.claude/rules/**/*.md"

DEFAULT_CONTEXT_MAX_CONTENT_LENGTH = 50_000

_CLAUDE_RULES_MARKER = ".claude/rules/"
_SKILLS_DIR_MARKERS = (".cursor/skills/", ".claude/skills/", ".agents/skills/", ".github/skills/")

logger = logging.getLogger(__name__)

SkipReason = Literal[
    "duplicate-target",
    "circular-symlink",
    "broken-symlink",
    "permission-denied",
    "symlink-error",
]

# (st_dev, st_ino) of the file a path ultimately refers to
CanonicalKey = tuple[int, int]


@dataclass(frozen=True)
class KeepFile:
    """File survives symlink resolution.

    canonical_key is None when the file could not be inspected at all; such
    files are kept without taking part in deduplication.
    """

    path: Path
    canonical_key: CanonicalKey | None


@dataclass(frozen=True)
class SkipFile:
    """File dropped during symlink resolution, with the reason."""

    path: Path
    reason: SkipReason


FileResolution = KeepFile | SkipFile


def find_claude_rules_files(base_dir: Path, max_depth: int | None) -> list[Path]:
    """Find Claude Code rules files (.claude/rules/**/*.md) at any depth.

    Files inside hidden directories below .claude/rules/ (e.g. .archived/)
    are excluded.
    """
    rules_files = glob_files(base_dir, CLAUDE_RULES_PATTERN)

    visible: list[Path] = []
    for file in rules_files:
        posix = get_relative_path(file, base_dir)
        marker_index = posix.lower().find(_CLAUDE_RULES_MARKER)
        if marker_index == -1:
            visible.append(file)
            continue
        segments = posix[marker_index + len(_CLAUDE_RULES_MARKER) :].split("/")
        hidden = next((s for s in segments[:-1] if s.startswith(".")), None)
        if hidden is not None:
            logger.debug("Excluded hidden rules directory: %s (segment: %s)", file, hidden)
            continue
        visible.append(file)

    result = filter_by_depth(visible, base_dir, max_depth)
    if result:
        logger.debug("Found %d Claude Code rules file(s)", len(result))
    return result


def _classify_symlink_error(error: OSError) -> SkipReason:
    if error.errno == errno.ELOOP:
        return "circular-symlink"
    if error.errno == errno.ENOENT:
        return "broken-symlink"
    if error.errno in (errno.EACCES, errno.EPERM):
        return "permission-denied"
    return "symlink-error"


def classify_file(path: Path, seen_targets: dict[CanonicalKey, Path]) -> FileResolution:
    """Decide whether path survives symlink resolution.

    Args:
        path: Discovered file, possibly a symlink.
        seen_targets: Canonical keys already claimed, mapped to the claiming file.

    Returns:
        KeepFile or SkipFile. seen_targets is not modified.
    """
    try:
        link_stat = os.lstat(path)
    except OSError as e:
        logger.debug("Error checking %s, keeping it: %s", path, e)
        return KeepFile(path=path, canonical_key=None)

    if not stat.S_ISLNK(link_stat.st_mode):
        key = (link_stat.st_dev, link_stat.st_ino)
        if key in seen_targets:
            logger.debug("Deduplicated: %s (same target as %s)", path, seen_targets[key])
            return SkipFile(path=path, reason="duplicate-target")
        return KeepFile(path=path, canonical_key=key)

    try:
        target_stat = os.stat(path)
    except OSError as e:
        reason = _classify_symlink_error(e)
        logger.warning("Skipping symlink %s (%s): %s", path, reason, e)
        return SkipFile(path=path, reason=reason)

    key = (target_stat.st_dev, target_stat.st_ino)
    if key in seen_targets:
        logger.debug("Deduplicated symlink: %s (same target as %s)", path, seen_targets[key])
        return SkipFile(path=path, reason="duplicate-target")
    logger.debug("Symlink: %s -> %s", path, os.path.realpath(path))
    return KeepFile(path=path, canonical_key=key)


def resolve_symlinks(files: list[Path]) -> list[Path]:
    """Keep the first file seen for each canonical target, in input order."""
    seen_targets: dict[CanonicalKey, Path] = {}
    kept: list[Path] = []
    for file in files:
        resolution = classify_file(file, seen_targets)
        if isinstance(resolution, SkipFile):
            continue
        if resolution.canonical_key is not None:
            seen_targets[resolution.canonical_key] = file
        kept.append(file)
    return kept


def _colocated_file_to_drop(agents_file: Path, claude_file: Path) -> Path | None:
    """Pick which file of an AGENTS.md/CLAUDE.md pair is redundant, if any."""
    agents_content = read_trimmed(agents_file)
    claude_content = read_trimmed(claude_file)
    if agents_content is None or claude_content is None:
        logger.debug("Error reading files in %s, keeping both", agents_file.parent)
        return None

    if agents_content == claude_content:
        logger.debug("Deduplicated: %s (identical to %s)", claude_file, agents_file)
        return claude_file

    cross_ref = detect_cross_reference(agents_content, claude_content)
    if cross_ref.has_reference:
        pointer = agents_file if cross_ref.reference_file == "agents" else claude_file
        content_file = claude_file if pointer == agents_file else agents_file
        logger.debug("Deduplicated: %s (file reference to %s)", pointer, content_file)
        return pointer

    logger.debug("Keeping both files in %s (different content)", agents_file.parent)
    return None


def deduplicate_colocated_files(files: list[Path]) -> list[Path]:
    """Collapse redundant AGENTS.md/CLAUDE.md pairs that share a directory.

    Output is grouped by directory in first-seen order.
    """
    files_by_dir: dict[Path, list[Path]] = {}
    for file in files:
        files_by_dir.setdefault(file.parent, []).append(file)

    result: list[Path] = []
    for dir_files in files_by_dir.values():
        agents_file = next((f for f in dir_files if f.name.lower() == "agents.md"), None)
        claude_file = next((f for f in dir_files if f.name.lower() == "claude.md"), None)
        if agents_file is None or claude_file is None:
            result.extend(dir_files)
            continue

        dropped = _colocated_file_to_drop(agents_file, claude_file)
        result.extend(f for f in dir_files if f != dropped)
    return result


def is_copilot_instructions_file(path: Path) -> bool:
    """True for copilot-instructions.md and .github/instructions/**/*.instructions.md."""
    filename = path.name.lower()
    if filename == "copilot-instructions.md":
        return True
    return filename.endswith(".instructions.md") and ".github/instructions/" in path.as_posix()


def deduplicate_copilot_instructions(files: list[Path]) -> list[Path]:
    """Drop Copilot instructions whose trimmed content matches any AGENTS.md/CLAUDE.md.

    The comparison is repository-wide, not per directory. Unreadable Copilot
    files are kept.
    """
    copilot_files = [f for f in files if is_copilot_instructions_file(f)]
    if not copilot_files:
        return files
    other_files = [f for f in files if not is_copilot_instructions_file(f)]

    primary_contents: set[str] = set()
    for file in other_files:
        if file.name.lower() not in ("agents.md", "claude.md"):
            continue
        content = read_trimmed(file)
        if content is not None:
            primary_contents.add(content)

    unique_copilot_files: list[Path] = []
    for file in copilot_files:
        content = read_trimmed(file)
        if content is not None and content in primary_contents:
            logger.debug("Deduplicated: %s (identical to an AGENTS.md/CLAUDE.md file)", file)
            continue
        unique_copilot_files.append(file)

    return [*other_files, *unique_copilot_files]


def find_context_files(base_dir: Path, max_depth: int | None = None) -> list[Path]:
    """Find canonical context files under base_dir.

    Args:
        base_dir: Repository root.
        max_depth: Maximum directory depth (0 = root only). None = unlimited.

    Returns:
        Absolute paths, shallower files first.

    Raises:
        FileNotFoundError: If base_dir does not exist.
    """
    root = Path(os.path.abspath(base_dir))
    with ThreadPoolExecutor(max_workers=5) as executor:
        glob_futures = [
            executor.submit(glob_files, root, pattern)
            for pattern in (
                AGENTS_PATTERN,
                CLAUDE_PATTERN,
                COPILOT_PATTERN,
                COPILOT_INSTRUCTIONS_PATTERN,
            )
        ]
        rules_future = executor.submit(find_claude_rules_files, root, max_depth)
        all_files = [file for future in glob_futures for file in future.result()]
        all_files.extend(rules_future.result())

    depth_filtered = filter_by_depth(all_files, root, max_depth)
    symlink_resolved = resolve_symlinks(depth_filtered)
    colocated_deduplicated = deduplicate_colocated_files(symlink_resolved)
    deduplicated = deduplicate_copilot_instructions(colocated_deduplicated)

    return sorted(deduplicated, key=lambda f: len(f.parts))


def get_context_file_type(file_path: str) -> ContextFileType:
    """Infer the context file category from its repository-relative path."""
    posix = file_path.replace("\\", "/")

    if ".cursor/rules/" in posix:
        return "cursor-rules"
    if any(marker in posix for marker in _SKILLS_DIR_MARKERS):
        return "skills"
    if _CLAUDE_RULES_MARKER in posix:
        return "rules"

    filename = posix.rsplit("/", 1)[-1].lower()
    if "agents" in filename:
        return "agents"
    if "claude" in filename:
        return "claude"
    if "copilot" in filename:
        return "copilot"
    if filename.endswith(".instructions.md") and ".github/instructions/" in posix:
        return "copilot"
    return "agents"


def load_context_artifacts(
    files: list[Path],
    base_dir: Path,
    *,
    max_content_length: int = DEFAULT_CONTEXT_MAX_CONTENT_LENGTH,
) -> list[ContextArtifact]:
    """Read context files into ContextArtifact records.

    Unreadable files are skipped. Rules files carry their frontmatter globs;
    Cursor rules also carry description and alwaysApply.
    """
    artifacts: list[ContextArtifact] = []
    for file in files:
        relative_path = get_relative_path(file, base_dir)
        content = read_file_with_limit(file, max_content_length)
        if content is None:
            logger.debug("Could not read context file: %s", relative_path)
            continue

        file_type = get_context_file_type(relative_path)
        globs: str | None = None
        description: str | None = None
        always_apply: bool | None = None
        if file_type in ("rules", "cursor-rules"):
            metadata = parse_rules_frontmatter(
                content, include_cursor_fields=file_type == "cursor-rules"
            )
            globs = metadata.globs
            description = metadata.description
            always_apply = metadata.always_apply

        artifacts.append(
            ContextArtifact(
                path=relative_path,
                type=file_type,
                content=content,
                globs=globs,
                description=description,
                always_apply=always_apply,
            )
        )

    return sorted(artifacts, key=lambda a: path_depth(a.path))


def locate(
    base_dir: Path,
    max_depth: int | None = None,
    *,
    max_content_length: int = DEFAULT_CONTEXT_MAX_CONTENT_LENGTH,
) -> list[ContextArtifact]:
    """Discover, deduplicate and load the context artifacts of a repository."""
    files = find_context_files(base_dir, max_depth)
    return load_context_artifacts(files, base_dir, max_content_length=max_content_length)
