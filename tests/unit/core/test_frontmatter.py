"""Tests for frontmatter extraction."""

from ctxlens.core.frontmatter import (
    extract_field,
    extract_frontmatter_block,
    parse_rules_frontmatter,
    parse_skill_frontmatter,
)


def test_parse_skill_frontmatter_valid() -> None:
    content = """\
---
name: react-patterns
description: Patterns for React components
---

# React Patterns
"""
    result = parse_skill_frontmatter(content)

    assert result.is_valid
    assert result.error is None
    assert result.name == "react-patterns"
    assert result.description == "Patterns for React components"


def test_parse_skill_frontmatter_strips_quotes() -> None:
    content = "---\nname: \"Quoted Skill\"\ndescription: 'Single quoted'\n---\n"

    result = parse_skill_frontmatter(content)

    assert result.name == "Quoted Skill"
    assert result.description == "Single quoted"


def test_parse_skill_frontmatter_no_frontmatter() -> None:
    result = parse_skill_frontmatter("# Just a heading\n")

    assert not result.is_valid
    assert result.error == "No frontmatter found"
    assert result.name is None


def test_parse_skill_frontmatter_missing_closing_delimiter() -> None:
    content = "---\nname: Test\ndescription: Test\n\n# Missing closing marker\n"

    result = parse_skill_frontmatter(content)

    assert not result.is_valid


def test_parse_skill_frontmatter_line_without_colon() -> None:
    content = "---\nname Test Skill\ndescription: Missing colon\n---\n"

    result = parse_skill_frontmatter(content)

    assert not result.is_valid
    assert result.error == "Missing required field 'name'"


def test_parse_skill_frontmatter_missing_description() -> None:
    result = parse_skill_frontmatter("---\nname: only-name\n---\n")

    assert not result.is_valid
    assert result.error == "Missing required field 'description'"


def test_parse_skill_frontmatter_extra_whitespace() -> None:
    content = "---\nname:    spaced   \ndescription:   lots of space   \n---\n"

    result = parse_skill_frontmatter(content)

    assert result.name == "spaced"
    assert result.description == "lots of space"


def test_extract_frontmatter_block() -> None:
    assert extract_frontmatter_block("---\nkey: value\n---\nbody") == "key: value"
    assert extract_frontmatter_block("body\n---\nkey: value\n---") is None


def test_extract_field_array_passed_through() -> None:
    value = '["src/**/*.ts", "lib/*.ts"]'

    assert extract_field(f"globs: {value}", "globs") == value


def test_extract_field_missing_key() -> None:
    assert extract_field("other: value", "globs") is None


def test_parse_rules_frontmatter_claude_rules_only_globs() -> None:
    content = '---\nglobs: "src/**/*.py"\ndescription: Python rules\nalwaysApply: true\n---\n'

    result = parse_rules_frontmatter(content, include_cursor_fields=False)

    assert result.globs == "src/**/*.py"
    assert result.description is None
    assert result.always_apply is None


def test_parse_rules_frontmatter_cursor_fields() -> None:
    content = "---\ndescription: 'Frontend rules'\nglobs: *.tsx\nalwaysApply: false\n---\n"

    result = parse_rules_frontmatter(content, include_cursor_fields=True)

    assert result.globs == "*.tsx"
    assert result.description == "Frontend rules"
    assert result.always_apply is False


def test_parse_rules_frontmatter_without_block() -> None:
    result = parse_rules_frontmatter("# No frontmatter", include_cursor_fields=True)

    assert result.globs is None
    assert result.description is None
    assert result.always_apply is None
