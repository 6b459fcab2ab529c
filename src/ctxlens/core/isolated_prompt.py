"""Invoke an AI provider from an empty, disposable working directory.

Summarization prompts carry all the context they need. Running the provider
from an empty directory keeps it from exploring the repository instead of
answering.
"""

import logging
import shutil
import tempfile
from pathlib import Path

from ctxlens.providers.abc import AIProvider, InvokeOptions, ProviderResponse

ISOLATED_PROMPTS_SUBDIR = Path("tmp") / "isolated-prompts"
PROMPT_DIR_PREFIX = "prompt-"

logger = logging.getLogger(__name__)


def get_isolated_prompts_dir(project_root: Path) -> Path:
    """Directory holding per-invocation sandboxes under project_root."""
    return project_root / ISOLATED_PROMPTS_SUBDIR


def invoke_isolated(
    provider: AIProvider,
    prompt: str,
    *,
    timeout_ms: int,
    verbose: bool,
) -> ProviderResponse:
    """Invoke provider with a fresh empty directory as its working directory.

    The sandbox is created under <cwd>/tmp/isolated-prompts/prompt-<random>
    and removed afterwards whether the invocation succeeds or raises. Cleanup
    failures are ignored so they never mask the provider's result or error.
    """
    sandbox_root = get_isolated_prompts_dir(Path.cwd().resolve())
    sandbox_root.mkdir(parents=True, exist_ok=True)
    sandbox = Path(tempfile.mkdtemp(prefix=PROMPT_DIR_PREFIX, dir=sandbox_root))
    logger.debug("Invoking %s from sandbox %s", provider.name, sandbox)

    try:
        return provider.invoke(
            prompt,
            options=InvokeOptions(cwd=sandbox, timeout_ms=timeout_ms, verbose=verbose),
        )
    finally:
        shutil.rmtree(sandbox, ignore_errors=True)
