"""Helpers shared by ctxlens commands."""

import dataclasses
import json
import re
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from ctxlens.cli.config import load_config
from ctxlens.discovery.catalog import CatalogOptions

BASE_DIR_ARGUMENT = click.argument(
    "base_dir",
    required=False,
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)

MAX_DEPTH_OPTION = click.option(
    "--max-depth",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum directory depth (0 = repository root only). Overrides config.",
)

JSON_OPTION = click.option("--json", "as_json", is_flag=True, help="Output as JSON")

_SNAKE_SEGMENT_RE = re.compile(r"_([a-z])")


def load_options_or_fail(base_dir: Path, *, max_depth: int | None) -> CatalogOptions:
    """Load config into CatalogOptions, turning configuration errors into a CLI error.

    A max_depth given on the command line replaces the configured one.
    """
    try:
        options = load_config(base_dir).to_catalog_options()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if max_depth is None:
        return options
    return dataclasses.replace(options, max_depth=max_depth)


def camel_case_keys(record: Any) -> dict[str, Any]:
    """Convert a dataclass record to a dict with camelCase keys for JSON output."""
    return {
        _SNAKE_SEGMENT_RE.sub(lambda m: m.group(1).upper(), key): value
        for key, value in dataclasses.asdict(record).items()
    }


def echo_json(data: object) -> None:
    click.echo(json.dumps(data, indent=2))


def print_table(table: Table) -> None:
    """Print a table to stderr, keeping stdout for machine-readable output."""
    # Use width=200 to prevent truncation in terminal environments with narrow defaults
    console = Console(stderr=True, width=200)
    console.print(table)


def new_table(*columns: str) -> Table:
    table = Table(show_header=True, header_style="bold", box=None)
    for column in columns:
        table.add_column(column, overflow="fold")
    return table
