"""Data models for the context artifact catalog."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

# Category of a context file, inferred from its path
ContextFileType = Literal["agents", "claude", "copilot", "rules", "cursor-rules", "skills"]


@dataclass(frozen=True)
class ContextArtifact:
    """A documentation file written for AI coding agents.

    Attributes:
        path: Path relative to the repository root (POSIX form).
        type: Category inferred from the path.
        content: File content, possibly truncated.
        globs: Raw `globs` frontmatter value (rules and Cursor rules only).
        description: `description` frontmatter value (Cursor rules only).
        always_apply: `alwaysApply` frontmatter value (Cursor rules only).
    """

    path: str
    type: ContextFileType
    content: str
    globs: str | None
    description: str | None
    always_apply: bool | None


@dataclass(frozen=True)
class Skill:
    """An Agent Skill declared by a SKILL.md manifest.

    Attributes:
        name: Name from frontmatter.
        description: Description from frontmatter.
        path: Relative path to the SKILL.md file.
        directory: Name of the directory containing SKILL.md.
        content_hash: SHA-256 hex digest of the raw file bytes.
        content: Raw file content.
        summary: Catalog summary (the description), set after deduplication.
        duplicate_paths: Other paths with identical content, None if unique.
    """

    name: str
    description: str
    path: str
    directory: str
    content_hash: str
    content: str
    summary: str | None
    duplicate_paths: list[str] | None


@dataclass(frozen=True)
class SkillsSummaryResult:
    """Deduplicated skill catalog with processing counts."""

    skills: list[Skill]
    total_processed: int
    unique_count: int
    duplicates_removed: int


@dataclass(frozen=True)
class ExtractedLink:
    """A Markdown link to a .md file found in a context artifact.

    Attributes:
        raw_path: Link target as written, anchor removed.
        absolute_path: Target resolved against the source file's directory.
        link_text: Link label.
        source_path: Absolute path of the file containing the link.
    """

    raw_path: str
    absolute_path: Path
    link_text: str
    source_path: Path


@dataclass(frozen=True)
class LinkedDocSummary:
    """A linked documentation file with its one-sentence summary."""

    path: str
    summary: str
    linked_from: str
    content: str


@dataclass(frozen=True)
class LinkedDocsResult:
    """Outcome of linked documentation discovery."""

    docs: list[LinkedDocSummary]
    total_links_found: int
    unresolved_links: list[str]


@dataclass(frozen=True)
class ContextCatalog:
    """The three catalogs produced for one repository."""

    context_files: list[ContextArtifact]
    skills: SkillsSummaryResult
    linked_docs: LinkedDocsResult

    @property
    def agents_file_count(self) -> int:
        return len(self.context_files)

    @property
    def skills_count(self) -> int:
        return len(self.skills.skills)

    @property
    def linked_docs_count(self) -> int:
        return len(self.linked_docs.docs)
