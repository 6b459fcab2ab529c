"""Tests for the links command."""

import json
from pathlib import Path

from click.testing import CliRunner

from ctxlens.cli.cli import cli
from tests.test_utils.repo_files import write_file


def test_links_json(tmp_path: Path) -> None:
    write_file(tmp_path, "AGENTS.md", "See [Guide](./docs/guide.md) and [Old](docs/old.md#top)")
    write_file(tmp_path, "docs/guide.md", "# Guide")

    runner = CliRunner()
    result = runner.invoke(cli, ["links", str(tmp_path), "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["totalLinksFound"] == 2
    assert data["links"] == [
        {
            "path": "docs/guide.md",
            "rawPath": "./docs/guide.md",
            "linkText": "Guide",
            "linkedFrom": "AGENTS.md",
            "exists": True,
        },
        {
            "path": "docs/old.md",
            "rawPath": "docs/old.md",
            "linkText": "Old",
            "linkedFrom": "AGENTS.md",
            "exists": False,
        },
    ]


def test_links_max_docs(tmp_path: Path) -> None:
    write_file(tmp_path, "AGENTS.md", " ".join(f"[D{i}](d{i}.md)" for i in range(4)))

    runner = CliRunner()
    result = runner.invoke(cli, ["links", str(tmp_path), "--json", "--max-docs", "2"])

    data = json.loads(result.output)
    assert [link["rawPath"] for link in data["links"]] == ["d0.md", "d1.md"]
    assert data["totalLinksFound"] == 4


def test_links_table_reports_hidden_count(tmp_path: Path) -> None:
    write_file(tmp_path, "AGENTS.md", " ".join(f"[D{i}](d{i}.md)" for i in range(3)))

    runner = CliRunner()
    result = runner.invoke(cli, ["links", str(tmp_path), "--max-docs", "1"])

    assert result.exit_code == 0, result.output
    assert "d0.md" in result.output
    assert "missing" in result.output
    assert "2 more link(s) not shown" in result.output


def test_links_none_found(tmp_path: Path) -> None:
    write_file(tmp_path, "AGENTS.md", "# No links")

    runner = CliRunner()
    result = runner.invoke(cli, ["links", str(tmp_path)])

    assert result.exit_code == 0
    assert "No linked docs found" in result.output
