"""One-shot completion latch shared by a step's completion channels."""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..errors import StepError


@dataclass(frozen=True)
class Outcome:
    """Settled result of one step: either an error or the updated data."""

    error: Any = None
    data: Any = None
    failed: bool = False


class CompletionLatch:
    """Settle exactly once from the continuation, a raise or the step's awaitable.

    The first signal claims the latch; later signals are reported to
    ``on_ignored`` and otherwise dropped. Signals from other threads are
    marshalled onto the owning event loop.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        on_ignored: Callable[[str], None] | None = None,
    ) -> None:
        self._loop = loop
        self._future: asyncio.Future[Outcome] = loop.create_future()
        self._lock = threading.Lock()
        self._claimed = False
        self._on_ignored = on_ignored

    @property
    def settled(self) -> bool:
        return self._claimed

    def succeed(self, data: Any = None) -> bool:
        return self._settle(Outcome(data=data), "continue")

    def fail(self, error: Any) -> bool:
        return self._settle(Outcome(error=error, failed=True), "fail")

    def watch(self, task: asyncio.Future[Any]) -> None:
        """Fail the latch when the step's awaitable raises or is cancelled."""
        task.add_done_callback(self._on_task_done)

    async def wait(self) -> Outcome:
        return await self._future

    def _on_task_done(self, task: asyncio.Future[Any]) -> None:
        if task.cancelled():
            self.fail(StepError("Step was cancelled"))
            return
        exc = task.exception()
        if exc is not None:
            self.fail(exc)

    def _settle(self, outcome: Outcome, signal: str) -> bool:
        with self._lock:
            claimed = not self._claimed
            self._claimed = True

        if not claimed:
            if self._on_ignored is not None:
                self._on_ignored(signal)
            return False

        if self._in_loop_thread():
            self._resolve(outcome)
        else:
            self._loop.call_soon_threadsafe(self._resolve, outcome)
        return True

    def _resolve(self, outcome: Outcome) -> None:
        if not self._future.done():
            self._future.set_result(outcome)

    def _in_loop_thread(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False


__all__ = ["CompletionLatch", "Outcome"]
