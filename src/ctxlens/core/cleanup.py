"""Housekeeping for isolated prompt sandboxes.

Sandboxes remove themselves, but a killed process can leave prompt-*
directories behind, and the shared tmp/isolated-prompts/ parent is never
removed by invoke_isolated.
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from ctxlens.core.isolated_prompt import PROMPT_DIR_PREFIX, get_isolated_prompts_dir

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleanupSummary:
    """What cleanup_isolated_prompt_dirs removed and what it could not."""

    orphans_removed: list[Path]
    empty_dirs_removed: list[Path]
    errors: list[str]


def _remove_orphan_sandboxes(sandbox_root: Path, errors: list[str]) -> list[Path]:
    if not sandbox_root.is_dir():
        return []

    removed: list[Path] = []
    for entry in sorted(sandbox_root.iterdir()):
        if not entry.is_dir() or not entry.name.startswith(PROMPT_DIR_PREFIX):
            continue
        try:
            shutil.rmtree(entry)
        except OSError as e:
            errors.append(f"Failed to remove {entry}: {e}")
            continue
        logger.debug("Removed orphaned sandbox %s", entry)
        removed.append(entry)
    return removed


def _remove_empty_parents(start: Path, stop_at: Path, errors: list[str]) -> list[Path]:
    """Remove empty directories from start upward, never removing stop_at."""
    removed: list[Path] = []
    current = start
    while current != stop_at and current.is_relative_to(stop_at):
        if not current.is_dir():
            break
        try:
            if any(current.iterdir()):
                break
            current.rmdir()
        except OSError as e:
            errors.append(f"Failed to remove {current}: {e}")
            break
        logger.debug("Removed empty directory %s", current)
        removed.append(current)
        current = current.parent
    return removed


def cleanup_isolated_prompt_dirs(project_root: Path, *, remove_orphans: bool) -> CleanupSummary:
    """Remove leftover sandbox directories under project_root.

    Args:
        project_root: Directory that invoke_isolated ran from.
        remove_orphans: Also delete prompt-* directories left by crashed runs.

    Returns:
        CleanupSummary; failures are reported in errors, never raised.
    """
    root = project_root.resolve()
    sandbox_root = get_isolated_prompts_dir(root)
    errors: list[str] = []

    orphans: list[Path] = []
    if remove_orphans:
        orphans = _remove_orphan_sandboxes(sandbox_root, errors)

    empty_dirs = _remove_empty_parents(sandbox_root, root, errors)
    return CleanupSummary(orphans_removed=orphans, empty_dirs_removed=empty_dirs, errors=errors)
