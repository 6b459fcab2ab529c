"""AI provider abstraction.

Concrete provider adapters (Claude, Codex, Cursor, Copilot, OpenCode CLIs)
live outside this package. The catalog only needs to send a prompt and get
plain text back.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

DEFAULT_TIMEOUT_MS = 60_000


@dataclass(frozen=True)
class InvokeOptions:
    """Options for a single provider invocation.

    Attributes:
        cwd: Working directory for the provider process, None for the caller's cwd.
        timeout_ms: Per-invocation timeout in milliseconds.
        verbose: Whether the provider should emit diagnostic output.
    """

    cwd: Path | None
    timeout_ms: int
    verbose: bool


@dataclass(frozen=True)
class ProviderResponse:
    """Plain-text response from a provider."""

    result: str
    cost_usd: float | None
    duration_ms: int | None


class AIProvider(ABC):
    """Abstract capability: invoke a prompt, get text back."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for the provider (e.g., "claude")."""
        ...

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable provider name."""
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the provider can be invoked."""
        ...

    @abstractmethod
    def invoke(self, prompt: str, *, options: InvokeOptions) -> ProviderResponse:
        """Send a prompt and return the provider's text response.

        Must tolerate running from an empty working directory. Timeouts and
        process failures are raised as exceptions.
        """
        ...
