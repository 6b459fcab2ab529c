"""Remove leftover isolated prompt sandboxes."""

from pathlib import Path

import click

from ctxlens.core.cleanup import cleanup_isolated_prompt_dirs


@click.command("cleanup")
@click.option(
    "--orphans",
    is_flag=True,
    help="Also remove prompt-* sandboxes left behind by interrupted runs",
)
def cleanup_cmd(orphans: bool) -> None:
    """Remove empty tmp/isolated-prompts/ directories under the current directory."""
    summary = cleanup_isolated_prompt_dirs(Path.cwd(), remove_orphans=orphans)

    for path in summary.orphans_removed:
        click.echo(f"Removed orphaned sandbox: {path}")
    for path in summary.empty_dirs_removed:
        click.echo(f"Removed empty directory: {path}")
    for error in summary.errors:
        click.echo(click.style(error, fg="red"), err=True)

    if not summary.orphans_removed and not summary.empty_dirs_removed and not summary.errors:
        click.echo("Nothing to clean up")
    if summary.errors:
        raise SystemExit(1)
