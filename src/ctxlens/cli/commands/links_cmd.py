"""List documentation linked from a repository's context files."""

from pathlib import Path

import click

from ctxlens.cli.commands.shared import (
    BASE_DIR_ARGUMENT,
    JSON_OPTION,
    MAX_DEPTH_OPTION,
    echo_json,
    load_options_or_fail,
    new_table,
    print_table,
)
from ctxlens.core.file_reading import get_relative_path
from ctxlens.discovery.context_files import find_context_files
from ctxlens.discovery.linked_docs import collect_linked_doc_links


@click.command("links")
@BASE_DIR_ARGUMENT
@MAX_DEPTH_OPTION
@click.option(
    "--max-docs",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum number of linked docs to list. Overrides config.",
)
@JSON_OPTION
def links_cmd(base_dir: Path, max_depth: int | None, max_docs: int | None, as_json: bool) -> None:
    """List Markdown docs linked from context files, without summarizing them.

    Links are deduplicated across context files, root-level files first.
    """
    options = load_options_or_fail(base_dir, max_depth=max_depth)
    limit = max_docs if max_docs is not None else options.linked_docs.max_docs

    sources = find_context_files(base_dir, options.max_depth)
    links, total_links_found = collect_linked_doc_links(sources, base_dir, max_docs=limit)

    rows = [
        {
            "path": get_relative_path(link.absolute_path, base_dir),
            "rawPath": link.raw_path,
            "linkText": link.link_text,
            "linkedFrom": get_relative_path(link.source_path, base_dir),
            "exists": link.absolute_path.is_file(),
        }
        for link in links
    ]

    if as_json:
        echo_json({"links": rows, "totalLinksFound": total_links_found})
        return

    if not rows:
        click.echo("No linked docs found", err=True)
        return

    table = new_table("Path", "Linked from", "Status")
    for row in rows:
        status = "[green]ok[/green]" if row["exists"] else "[red]missing[/red]"
        table.add_row(str(row["path"]), str(row["linkedFrom"]), status)
    print_table(table)
    if total_links_found > len(rows):
        click.echo(f"{total_links_found - len(rows)} more link(s) not shown", err=True)
