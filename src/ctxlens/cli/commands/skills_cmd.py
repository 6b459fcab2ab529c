"""List the deduplicated Agent Skills of a repository."""

from pathlib import Path

import click

from ctxlens.cli.commands.shared import (
    BASE_DIR_ARGUMENT,
    JSON_OPTION,
    MAX_DEPTH_OPTION,
    camel_case_keys,
    echo_json,
    load_options_or_fail,
    new_table,
    print_table,
)
from ctxlens.discovery.skills import build_skill_catalog


@click.command("skills")
@BASE_DIR_ARGUMENT
@MAX_DEPTH_OPTION
@JSON_OPTION
def skills_cmd(base_dir: Path, max_depth: int | None, as_json: bool) -> None:
    """List SKILL.md skills, one entry per distinct manifest."""
    options = load_options_or_fail(base_dir, max_depth=max_depth)

    result = build_skill_catalog(base_dir, options.max_depth)

    if as_json:
        echo_json(
            {
                "skills": [camel_case_keys(s) for s in result.skills],
                "totalProcessed": result.total_processed,
                "uniqueCount": result.unique_count,
                "duplicatesRemoved": result.duplicates_removed,
            }
        )
        return

    if not result.skills:
        click.echo("No skills found", err=True)
        return

    table = new_table("Name", "Path", "Duplicates", "Description")
    for skill in result.skills:
        duplicates = str(len(skill.duplicate_paths)) if skill.duplicate_paths else "-"
        table.add_row(skill.name, skill.path, duplicates, skill.description)
    print_table(table)
    click.echo(
        f"{result.total_processed} processed, {result.unique_count} unique, "
        f"{result.duplicates_removed} duplicate(s) removed",
        err=True,
    )
