"""Bounded concurrent execution of independent tasks."""

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskOutcome(Generic[R]):
    """Outcome of one task: either a value or the exception it raised."""

    value: R | None
    error: Exception | None

    @property
    def succeeded(self) -> bool:
        return self.error is None


def run_with_concurrency_limit(
    items: Sequence[T],
    limit: int,
    fn: Callable[[T, int], R],
) -> list[TaskOutcome[R]]:
    """Run fn over items with at most `limit` calls in flight.

    A failing task occupies its slot only until it raises; its exception is
    captured in the returned outcome and never cancels sibling tasks.

    Args:
        items: Items to process.
        limit: Maximum concurrent calls (must be >= 1).
        fn: Called as fn(item, index).

    Returns:
        One TaskOutcome per item, in input order.
    """
    if limit < 1:
        raise ValueError(f"Concurrency limit must be at least 1, got {limit}")
    if not items:
        return []

    def run_one(index: int) -> TaskOutcome[R]:
        try:
            return TaskOutcome(value=fn(items[index], index), error=None)
        except Exception as e:
            logger.error("Task %d failed: %s", index, e)
            return TaskOutcome(value=None, error=e)

    with ThreadPoolExecutor(max_workers=min(limit, len(items))) as executor:
        return list(executor.map(run_one, range(len(items))))
