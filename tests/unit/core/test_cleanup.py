"""Tests for sandbox housekeeping."""

from pathlib import Path

from ctxlens.core.cleanup import cleanup_isolated_prompt_dirs


def test_removes_empty_sandbox_parents(tmp_path: Path) -> None:
    (tmp_path / "tmp" / "isolated-prompts").mkdir(parents=True)

    summary = cleanup_isolated_prompt_dirs(tmp_path, remove_orphans=False)

    assert not (tmp_path / "tmp").exists()
    assert summary.empty_dirs_removed == [
        tmp_path.resolve() / "tmp" / "isolated-prompts",
        tmp_path.resolve() / "tmp",
    ]
    assert summary.errors == []
    assert tmp_path.exists()


def test_stops_at_non_empty_directory(tmp_path: Path) -> None:
    (tmp_path / "tmp" / "isolated-prompts").mkdir(parents=True)
    (tmp_path / "tmp" / "clones").mkdir()

    summary = cleanup_isolated_prompt_dirs(tmp_path, remove_orphans=False)

    assert summary.empty_dirs_removed == [tmp_path.resolve() / "tmp" / "isolated-prompts"]
    assert (tmp_path / "tmp" / "clones").exists()


def test_orphans_kept_without_flag(tmp_path: Path) -> None:
    orphan = tmp_path / "tmp" / "isolated-prompts" / "prompt-abc123"
    orphan.mkdir(parents=True)

    summary = cleanup_isolated_prompt_dirs(tmp_path, remove_orphans=False)

    assert orphan.exists()
    assert summary.orphans_removed == []
    assert summary.empty_dirs_removed == []


def test_orphans_removed_with_flag(tmp_path: Path) -> None:
    orphan = tmp_path / "tmp" / "isolated-prompts" / "prompt-abc123"
    orphan.mkdir(parents=True)
    (orphan / "scratch.txt").write_text("left behind", encoding="utf-8")
    unrelated = tmp_path / "tmp" / "isolated-prompts" / "keep-me"
    unrelated.mkdir()

    summary = cleanup_isolated_prompt_dirs(tmp_path, remove_orphans=True)

    assert summary.orphans_removed == [orphan.resolve()]
    assert not orphan.exists()
    assert unrelated.exists()


def test_nothing_to_clean(tmp_path: Path) -> None:
    summary = cleanup_isolated_prompt_dirs(tmp_path, remove_orphans=True)

    assert summary.orphans_removed == []
    assert summary.empty_dirs_removed == []
    assert summary.errors == []
