"""Background task that drives the game clock."""

import asyncio
import logging
from contextlib import suppress
from typing import Callable

logger = logging.getLogger(__name__)

# Called once per simulated second. Returns False once the clock has no reason to keep running (game over)
TickFn = Callable[[], bool]


class ClockTask:
    """Cancellable periodic task. Owned by a GameSession, never shared between sessions."""

    def __init__(self, tick: TickFn, period_seconds: float = 1.0) -> None:
        self.tick = tick
        self.period_seconds = period_seconds
        self.task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self.task is not None and not self.task.done()

    def start(self) -> None:
        """Needs a running event loop (call it from a coroutine)."""
        if self.running:
            logger.warning("Clock already running")
            return
        self.task = asyncio.get_running_loop().create_task(self._run())
        logger.debug("Clock started, period=%ss", self.period_seconds)

    def cancel(self) -> None:
        """Synchronous cancel, safe to call from inside a tick (the loop then simply stops)."""
        if not self.running:
            return
        assert self.task is not None
        with suppress(RuntimeError):
            # no running loop -> certainly not called from inside the task itself
            if self.task is asyncio.current_task():
                return
        self.task.cancel()
        logger.debug("Clock cancelled")

    async def stop(self) -> None:
        """Cancel and wait until the task is really gone."""
        task = self.task
        self.cancel()
        if task is not None:
            with suppress(asyncio.CancelledError):
                await task
        self.task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.period_seconds)
            if not self.tick():
                break
        logger.debug("Clock loop finished")
