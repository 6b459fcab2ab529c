"""Frontmatter extraction for skill manifests and rules files.

Only the single-line `key: value` subset is supported. Callers receive
frozen result records instead of exceptions so that "skip this file" stays
an explicit decision at the call site.
"""

import re
from dataclasses import dataclass

_FRONTMATTER_RE = re.compile(r"---\s*\n(.*?)\n---", re.DOTALL)

# Optional quotes are stripped independently on either side
_SKILL_NAME_RE = re.compile(r"""^name:\s*["']?(.+?)["']?\s*$""", re.MULTILINE)
_SKILL_DESCRIPTION_RE = re.compile(r"""^description:\s*["']?(.+?)["']?\s*$""", re.MULTILINE)


@dataclass(frozen=True)
class SkillFrontmatterParseResult:
    """Result of parsing SKILL.md frontmatter.

    Attributes:
        name: Skill name, or None if parsing failed.
        description: Skill description, or None if parsing failed.
        error: Reason the manifest is unusable, None when valid.
    """

    name: str | None
    description: str | None
    error: str | None

    @property
    def is_valid(self) -> bool:
        """Return True if both required fields were found."""
        return self.error is None


@dataclass(frozen=True)
class RulesFrontmatter:
    """Metadata extracted from a rules file frontmatter block."""

    globs: str | None
    description: str | None
    always_apply: bool | None


def extract_frontmatter_block(content: str) -> str | None:
    """Return the text between the leading `---` delimiters, or None."""
    match = _FRONTMATTER_RE.match(content)
    if match is None:
        return None
    return match.group(1)


def extract_field(block: str, key: str) -> str | None:
    """Extract a single-line scalar value for key from a frontmatter block.

    Matching surrounding quotes are removed. Bracketed inline arrays such as
    `[a, b]` are returned verbatim.
    """
    match = re.search(rf"^{re.escape(key)}:\s*(.+)", block, re.MULTILINE)
    if match is None:
        return None

    value = match.group(1).strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def parse_skill_frontmatter(content: str) -> SkillFrontmatterParseResult:
    """Parse name and description from SKILL.md content.

    Handles these cases:
    - Both fields present: valid result
    - No delimited frontmatter block: error
    - Missing or empty name/description (including `name value` lines
      without a colon): error
    """
    block = extract_frontmatter_block(content)
    if block is None:
        return SkillFrontmatterParseResult(
            name=None, description=None, error="No frontmatter found"
        )

    name_match = _SKILL_NAME_RE.search(block)
    description_match = _SKILL_DESCRIPTION_RE.search(block)
    name = name_match.group(1).strip() if name_match else ""
    description = description_match.group(1).strip() if description_match else ""

    if not name:
        return SkillFrontmatterParseResult(
            name=None, description=None, error="Missing required field 'name'"
        )
    if not description:
        return SkillFrontmatterParseResult(
            name=None, description=None, error="Missing required field 'description'"
        )
    return SkillFrontmatterParseResult(name=name, description=description, error=None)


def _parse_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def parse_rules_frontmatter(content: str, *, include_cursor_fields: bool) -> RulesFrontmatter:
    """Extract globs (and for Cursor rules, description and alwaysApply)."""
    block = extract_frontmatter_block(content)
    if block is None:
        return RulesFrontmatter(globs=None, description=None, always_apply=None)

    globs = extract_field(block, "globs")
    if not include_cursor_fields:
        return RulesFrontmatter(globs=globs, description=None, always_apply=None)

    return RulesFrontmatter(
        globs=globs,
        description=extract_field(block, "description"),
        always_apply=_parse_bool(extract_field(block, "alwaysApply")),
    )
