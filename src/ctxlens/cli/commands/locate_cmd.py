"""List the canonical context files of a repository."""

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
from ctxlens.discovery.context_files import locate


@click.command("locate")
@BASE_DIR_ARGUMENT
@MAX_DEPTH_OPTION
@JSON_OPTION
def locate_cmd(base_dir: Path, max_depth: int | None, as_json: bool) -> None:
    """Locate AGENTS.md, CLAUDE.md, Copilot instructions and rules files.

    Symlinked, identical and pointer-only copies are collapsed.

    Examples:

    \b
      # Current repository
      ctxlens locate

    \b
      # Root and first-level directories only, as JSON
      ctxlens locate path/to/repo --max-depth 1 --json
    """
    options = load_options_or_fail(base_dir, max_depth=max_depth)

    artifacts = locate(
        base_dir, options.max_depth, max_content_length=options.max_content_length
    )

    if as_json:
        echo_json([camel_case_keys(a) for a in artifacts])
        return

    if not artifacts:
        click.echo("No context files found", err=True)
        return

    table = new_table("Path", "Type", "Globs")
    for artifact in artifacts:
        table.add_row(artifact.path, artifact.type, artifact.globs or "-")
    print_table(table)
