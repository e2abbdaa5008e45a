"""Deferred execution of automated turns.

The game manager never runs the automated opponent inside one of its own
mutating calls. It hands a think step to a scheduler, tagged with the
token of the current round, and the scheduler runs it later.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable

logger = logging.getLogger(__name__)

ThinkStep = Callable[["RoundToken"], None]


class RoundToken:
    """Cancellation token tied to the lifetime of one round."""

    def __init__(self, round_number: int = 0):
        self.round_number = round_number
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "live"
        return f"RoundToken(round={self.round_number}, {state})"


class Scheduler(ABC):
    """Runs think steps outside the caller's stack frame."""

    @abstractmethod
    def schedule(self, step: ThinkStep, token: RoundToken, delay: float = 0.0) -> None:
        """Queue ``step(token)`` to run after ``delay`` seconds."""

    def _run(self, step: ThinkStep, token: RoundToken) -> None:
        if token.cancelled:
            logger.debug(f"Skipping stale think step for {token!r}")
            return
        step(token)


class ManualScheduler(Scheduler):
    """Queues steps until the owner pumps them with ``run_pending``.

    Delays are ignored. Used for headless play and tests.
    """

    def __init__(self) -> None:
        self._queue: deque[tuple[ThinkStep, RoundToken]] = deque()

    def schedule(self, step: ThinkStep, token: RoundToken, delay: float = 0.0) -> None:
        self._queue.append((step, token))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def clear(self) -> None:
        """Drop all queued steps without running them."""
        self._queue.clear()

    def run_next(self) -> bool:
        """Run one queued step. Returns False if the queue was empty."""
        if not self._queue:
            return False
        step, token = self._queue.popleft()
        self._run(step, token)
        return True

    def run_pending(self, limit: int = 10_000) -> int:
        """Run queued steps, including ones they queue, until empty.

        Args:
            limit: Maximum number of steps to run.

        Returns:
            Number of steps run.
        """
        count = 0
        while count < limit and self.run_next():
            count += 1
        return count


class AsyncioScheduler(Scheduler):
    """Runs steps as asyncio tasks on the given (or running) event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop
        self._tasks: set[asyncio.Task] = set()

    def schedule(self, step: ThinkStep, token: RoundToken, delay: float = 0.0) -> None:
        loop = self._loop or asyncio.get_running_loop()
        task = loop.create_task(self._delayed(step, token, delay))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _delayed(self, step: ThinkStep, token: RoundToken, delay: float) -> None:
        if delay > 0:
            await asyncio.sleep(delay)
        self._run(step, token)

    async def drain(self) -> None:
        """Wait until no scheduled step is left, including follow-ups."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()
