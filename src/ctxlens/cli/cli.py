import logging

import click

from ctxlens.cli.commands.cleanup_cmd import cleanup_cmd
from ctxlens.cli.commands.links_cmd import links_cmd
from ctxlens.cli.commands.locate_cmd import locate_cmd
from ctxlens.cli.commands.skills_cmd import skills_cmd

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="ctxlens")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(debug: bool) -> None:
    """Catalog the AI-agent documentation of a repository."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")


cli.add_command(locate_cmd)
cli.add_command(skills_cmd)
cli.add_command(links_cmd)
cli.add_command(cleanup_cmd)
