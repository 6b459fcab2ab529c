"""Discover Agent Skills (SKILL.md manifests) and deduplicate them by content.

Skills live in `<skill-name>/SKILL.md` anywhere in the repository. The same
skill is often vendored for several agents (.claude/skills, .cursor/skills,
...), so identical manifests are collapsed into one catalog entry.
"""

import hashlib
import logging
import os
from pathlib import Path

from ctxlens.core.file_reading import get_relative_path, path_depth
from ctxlens.core.frontmatter import parse_skill_frontmatter
from ctxlens.core.globbing import filter_by_depth, glob_files
from ctxlens.discovery.models import Skill, SkillsSummaryResult

SKILL_PATTERN = "**/SKILL.md"

logger = logging.getLogger(__name__)


def compute_content_hash(raw: bytes) -> str:
    """SHA-256 hex digest of raw file bytes."""
    return hashlib.sha256(raw).hexdigest()


def _load_skill(file: Path, base_dir: Path) -> Skill | None:
    try:
        raw = file.read_bytes()
    except OSError as e:
        logger.debug("Error reading %s: %s", file, e)
        return None

    content = raw.decode("utf-8", errors="replace")
    parsed = parse_skill_frontmatter(content)
    if not parsed.is_valid or parsed.name is None or parsed.description is None:
        logger.debug("Skipping %s: %s", file, parsed.error)
        return None

    return Skill(
        name=parsed.name,
        description=parsed.description,
        path=get_relative_path(file, base_dir),
        directory=file.parent.name,
        content_hash=compute_content_hash(raw),
        content=content,
        summary=None,
        duplicate_paths=None,
    )


def find_skills_files(base_dir: Path, max_depth: int | None = None) -> list[Skill]:
    """Find SKILL.md files with valid frontmatter under base_dir.

    Args:
        base_dir: Repository root.
        max_depth: Maximum directory depth (0 = root only). None = unlimited.

    Returns:
        Skills with content and hash, shallower paths first. Manifests
        missing name or description are left out.
    """
    root = Path(os.path.abspath(base_dir))
    skill_files = filter_by_depth(glob_files(root, SKILL_PATTERN), root, max_depth)

    skills: list[Skill] = []
    for file in skill_files:
        skill = _load_skill(file, root)
        if skill is not None:
            skills.append(skill)

    return sorted(skills, key=lambda s: path_depth(s.path))


def summarize_and_deduplicate_skills(skills: list[Skill]) -> SkillsSummaryResult:
    """Collapse skills with identical content into one entry each.

    The first skill of each content group (the shallowest, given depth-sorted
    input) is kept. Its summary is the frontmatter description; no AI call
    is made. Paths of the other group members go into duplicate_paths.
    """
    if not skills:
        return SkillsSummaryResult(
            skills=[], total_processed=0, unique_count=0, duplicates_removed=0
        )

    skills_by_hash: dict[str, list[Skill]] = {}
    for skill in skills:
        skills_by_hash.setdefault(skill.content_hash, []).append(skill)

    unique_count = len(skills_by_hash)
    duplicates_removed = len(skills) - unique_count
    logger.debug(
        "Found %d skill(s), %d unique (%d duplicates)",
        len(skills),
        unique_count,
        duplicates_removed,
    )

    result_skills: list[Skill] = []
    for group in skills_by_hash.values():
        representative = group[0]
        duplicate_paths = [s.path for s in group[1:]] or None
        if duplicate_paths is not None:
            logger.debug(
                'Skill "%s" has %d duplicate(s): %s',
                representative.name,
                len(duplicate_paths),
                ", ".join(duplicate_paths),
            )
        result_skills.append(
            Skill(
                name=representative.name,
                description=representative.description,
                path=representative.path,
                directory=representative.directory,
                content_hash=representative.content_hash,
                content=representative.content,
                summary=representative.description,
                duplicate_paths=duplicate_paths,
            )
        )

    result_skills.sort(key=lambda s: path_depth(s.path))
    return SkillsSummaryResult(
        skills=result_skills,
        total_processed=len(skills),
        unique_count=unique_count,
        duplicates_removed=duplicates_removed,
    )


def build_skill_catalog(base_dir: Path, max_depth: int | None = None) -> SkillsSummaryResult:
    """Find and deduplicate the skills of a repository."""
    return summarize_and_deduplicate_skills(find_skills_files(base_dir, max_depth))
