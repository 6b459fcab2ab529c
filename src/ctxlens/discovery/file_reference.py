"""Detect AGENTS.md / CLAUDE.md files that only point at their sibling.

Some agents read only one of the two files, so repositories often keep the
real content in one and put a bare `@CLAUDE.md` (or `@AGENTS.md`) in the other.
"""

from dataclasses import dataclass
from typing import Literal

ContextFileRole = Literal["agents", "claude"]

_REFERENCEABLE_FILES = ("agents.md", "claude.md")


@dataclass(frozen=True)
class FileReferenceResult:
    """Whether content is purely an `@file` reference, and to which file."""

    is_reference: bool
    referenced_file: str | None


@dataclass(frozen=True)
class CrossReferenceResult:
    """Which file of a colocated pair is the pointer and which holds content."""

    has_reference: bool
    reference_file: ContextFileRole | None
    content_file: ContextFileRole | None


_NO_REFERENCE = FileReferenceResult(is_reference=False, referenced_file=None)


def is_file_reference(content: str) -> FileReferenceResult:
    """Check whether content is nothing but an `@AGENTS.md`/`@CLAUDE.md` reference.

    Matches `@CLAUDE.md`, `@AGENTS.md`, `@./CLAUDE.md` and `@./AGENTS.md`,
    case-insensitively, with surrounding whitespace allowed. References into
    other directories do not count.
    """
    trimmed = content.strip()
    if not trimmed.startswith("@"):
        return _NO_REFERENCE

    referenced = trimmed[1:]
    if referenced.startswith("./"):
        referenced = referenced[2:]

    if "/" in referenced or "\\" in referenced:
        return _NO_REFERENCE

    if referenced.lower() in _REFERENCEABLE_FILES:
        return FileReferenceResult(is_reference=True, referenced_file=referenced)
    return _NO_REFERENCE


def detect_cross_reference(agents_content: str, claude_content: str) -> CrossReferenceResult:
    """Detect whether one file of an AGENTS.md/CLAUDE.md pair points at the other.

    AGENTS.md pointing at CLAUDE.md is checked first. Self-references are
    not cross-references.
    """
    agents_ref = is_file_reference(agents_content)
    if agents_ref.referenced_file is not None and agents_ref.referenced_file.lower() == "claude.md":
        return CrossReferenceResult(
            has_reference=True, reference_file="agents", content_file="claude"
        )

    claude_ref = is_file_reference(claude_content)
    if claude_ref.referenced_file is not None and claude_ref.referenced_file.lower() == "agents.md":
        return CrossReferenceResult(
            has_reference=True, reference_file="claude", content_file="agents"
        )

    return CrossReferenceResult(has_reference=False, reference_file=None, content_file=None)
