"""Pipeline execution engine."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Iterable, Mapping
from typing import Any

from ..domain.state import CURRENT_STEP_KEY, ChainState, RunningContext
from ..errors import StepError, StepTimeoutError
from .hooks import ChainHooks, guarded
from .latch import CompletionLatch
from .step_base import StepRunner, step_name


def _replacement(data: Any) -> RunningContext:
    if isinstance(data, dict):
        return data
    if isinstance(data, Mapping):
        return dict(data)
    raise StepError("Step passed a non-mapping context to next")


async def run_step(
    step: StepRunner,
    state: ChainState,
    idx: int,
    *,
    hooks: ChainHooks,
    step_timeout_s: float | None = None,
) -> None:
    """Invoke one step and wait for its completion signal.

    On success ``state.running`` holds the context for the next step. On
    failure a ``StepError`` attributed to this step is raised.
    """
    name = step_name(step)
    state.running[CURRENT_STEP_KEY] = name
    hooks.step_started(name, idx)

    latch = CompletionLatch(
        asyncio.get_running_loop(),
        on_ignored=lambda signal: hooks.signal_ignored(name, idx, signal),
    )

    def next_(error: Any = None, data: Any = None) -> None:
        if error is not None:
            latch.fail(error)
        else:
            latch.succeed(data)

    task: asyncio.Future[Any] | None = None
    try:
        result = step(state.running, next_)
    except Exception as exc:
        latch.fail(exc)
    else:
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            latch.watch(task)

    try:
        if step_timeout_s is None:
            outcome = await latch.wait()
        else:
            outcome = await asyncio.wait_for(latch.wait(), step_timeout_s)
    except asyncio.TimeoutError:
        timeout_error = StepTimeoutError(step_timeout_s or 0.0, func=name)
        latch.fail(timeout_error)
        if task is not None and not task.done():
            task.cancel()
        hooks.step_failed(name, idx, timeout_error)
        raise timeout_error from None

    try:
        if outcome.failed:
            raise StepError.coerce(outcome.error)
        if outcome.data is not None:
            state.running = _replacement(outcome.data)
    except StepError as err:
        err.attribute(name)
        hooks.step_failed(name, idx, err)
        raise

    state.steps_run += 1


async def run(
    steps: Iterable[StepRunner],
    state: ChainState,
    *,
    hooks: ChainHooks | None = None,
    step_timeout_s: float | None = None,
) -> ChainState:
    """Run steps sequentially against the given chain state."""
    active_hooks = guarded(hooks)
    for idx, step in enumerate(steps):
        await run_step(step, state, idx, hooks=active_hooks, step_timeout_s=step_timeout_s)
    return state
