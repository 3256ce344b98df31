"""Bounded-concurrency fan-out with per-item failure isolation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class TaskOutcome(Generic[T, R]):
    """Result of one fan-out task: either a value or the error that ended it."""

    item: T
    value: Optional[R] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def gather_isolated(
    items: Iterable[T],
    fn: Callable[[T], Awaitable[R]],
    *,
    limit: int = 5,
    timeout: float | None = None,
) -> list[TaskOutcome[T, R]]:
    """
    Run fn(item) for every item, at most `limit` at a time.

    Each call gets its own timeout. An exception or timeout in one call is
    recorded on its outcome and never cancels the others. Outcomes keep input
    order. Cancelling the whole gather still propagates.
    """
    sem = asyncio.Semaphore(max(1, limit))

    async def _run(item: T) -> TaskOutcome[T, R]:
        async with sem:
            try:
                if timeout is not None and timeout > 0:
                    value = await asyncio.wait_for(fn(item), timeout=timeout)
                else:
                    value = await fn(item)
            except Exception as e:
                return TaskOutcome(item=item, error=e)
            return TaskOutcome(item=item, value=value)

    return list(await asyncio.gather(*[_run(item) for item in items]))


def successes(outcomes: Iterable[TaskOutcome[T, R]], what: str = "task") -> list[R]:
    """Values of successful outcomes; failures are logged and dropped."""
    values: list[R] = []
    for outcome in outcomes:
        if outcome.ok:
            values.append(outcome.value)
        else:
            logger.warning(
                "%s failed for %s: %r", what, outcome.item, outcome.error, exc_info=outcome.error
            )
    return values
