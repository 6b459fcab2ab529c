"""Fake AIProvider implementation for testing.

FakeAIProvider returns canned responses and records every invocation,
enabling deterministic tests without spawning provider processes.
"""

import threading
from collections.abc import Callable
from pathlib import Path
from typing import NamedTuple

from ctxlens.providers.abc import AIProvider, InvokeOptions, ProviderResponse


class InvocationCall(NamedTuple):
    """Record of an invoke call."""

    prompt: str
    cwd: Path | None
    timeout_ms: int
    verbose: bool
    cwd_existed: bool
    cwd_was_empty: bool


class FakeAIProvider(AIProvider):
    """In-memory fake provider.

    This class has NO public setup methods. All behavior is provided via the
    constructor; invocations are captured for assertions.
    """

    def __init__(
        self,
        *,
        response: str = "",
        responder: Callable[[str], str] | None = None,
        error: Exception | None = None,
        available: bool = True,
    ) -> None:
        """Create a FakeAIProvider.

        Args:
            response: Text returned from every invocation.
            responder: Optional function mapping prompt to response text;
                takes precedence over response. May raise to simulate failure.
            error: Exception raised from every invocation; takes precedence
                over response and responder.
            available: Value returned by is_available().
        """
        self._response = response
        self._responder = responder
        self._error = error
        self._available = available
        self._invocations: list[InvocationCall] = []
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "fake"

    @property
    def display_name(self) -> str:
        return "Fake Provider"

    @property
    def invocations(self) -> list[InvocationCall]:
        """Invocations received so far.

        This property is for test assertions only.
        """
        with self._lock:
            return list(self._invocations)

    def is_available(self) -> bool:
        return self._available

    def invoke(self, prompt: str, *, options: InvokeOptions) -> ProviderResponse:
        cwd = options.cwd
        cwd_existed = cwd is not None and cwd.is_dir()
        cwd_was_empty = cwd_existed and cwd is not None and not any(cwd.iterdir())
        with self._lock:
            self._invocations.append(
                InvocationCall(
                    prompt=prompt,
                    cwd=cwd,
                    timeout_ms=options.timeout_ms,
                    verbose=options.verbose,
                    cwd_existed=cwd_existed,
                    cwd_was_empty=cwd_was_empty,
                )
            )

        if self._error is not None:
            raise self._error
        if self._responder is not None:
            text = self._responder(prompt)
        else:
            text = self._response
        return ProviderResponse(result=text, cost_usd=None, duration_ms=None)
