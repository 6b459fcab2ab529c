"""ctxlens: catalog the AI-agent documentation of a repository.

Discovers context files (AGENTS.md, CLAUDE.md, Copilot instructions, rules),
Agent Skills and the docs they link to, collapsing the duplicates that
repositories accumulate. See `ctxlens --help` for the CLI.
"""

from ctxlens.cli.cli import cli


def main() -> None:
    """CLI entry point used by the `ctxlens` console script."""
    cli()
