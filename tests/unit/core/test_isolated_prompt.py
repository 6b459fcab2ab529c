"""Tests for isolated provider invocation."""

from pathlib import Path

import pytest

from ctxlens.core.isolated_prompt import invoke_isolated
from ctxlens.providers.fake import FakeAIProvider


def test_invokes_from_empty_sandbox(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "AGENTS.md").write_text("repo file", encoding="utf-8")
    provider = FakeAIProvider(response="A summary sentence.")

    response = invoke_isolated(provider, "prompt", timeout_ms=1234, verbose=False)

    assert response.result == "A summary sentence."
    call = provider.invocations[0]
    assert call.cwd is not None
    assert call.cwd.parent == tmp_path.resolve() / "tmp" / "isolated-prompts"
    assert call.cwd.name.startswith("prompt-")
    assert call.cwd_existed
    assert call.cwd_was_empty
    assert call.timeout_ms == 1234


def test_sandbox_removed_after_success(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    provider = FakeAIProvider(response="ok")

    invoke_isolated(provider, "prompt", timeout_ms=1000, verbose=False)

    cwd = provider.invocations[0].cwd
    assert cwd is not None
    assert not cwd.exists()


def test_sandbox_removed_after_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    provider = FakeAIProvider(error=TimeoutError("provider timed out"))

    with pytest.raises(TimeoutError, match="provider timed out"):
        invoke_isolated(provider, "prompt", timeout_ms=1000, verbose=False)

    cwd = provider.invocations[0].cwd
    assert cwd is not None
    assert not cwd.exists()


def test_each_invocation_gets_distinct_sandbox(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    provider = FakeAIProvider(response="ok")

    invoke_isolated(provider, "one", timeout_ms=1000, verbose=False)
    invoke_isolated(provider, "two", timeout_ms=1000, verbose=False)

    first, second = provider.invocations
    assert first.cwd != second.cwd
