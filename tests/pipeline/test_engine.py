"""Unit tests for the pipeline engine and hooks."""

from __future__ import annotations

import asyncio
import threading
from typing import Any

import pytest
from structlog.testing import capture_logs

from handlerchain.domain.state import ChainState, seed_running_context
from handlerchain.errors import StepError, StepTimeoutError
from handlerchain.pipeline.engine import run
from handlerchain.pipeline.hooks import StructlogHooks


pytestmark = pytest.mark.unit


class RecordingHooks:
    def __init__(self) -> None:
        self.events: list[tuple[Any, ...]] = []

    def step_started(self, name: str, index: int) -> None:
        self.events.append(("started", name, index))

    def step_failed(self, name: str, index: int, error: StepError) -> None:
        self.events.append(("failed", name, index, error.message))

    def signal_ignored(self, name: str, index: int, signal: str) -> None:
        self.events.append(("ignored", name, index, signal))

    def chain_completed(self, status: int, steps_run: int) -> None:
        self.events.append(("completed", status, steps_run))


def _state() -> ChainState:
    return ChainState(running=seed_running_context({"e": 1}, {"c": 2}))


def test_run_tracks_steps_and_current_step() -> None:
    def one(data: dict[str, Any], next_: Any) -> None:
        next_()

    def two(data: dict[str, Any], next_: Any) -> None:
        next_()

    state = asyncio.run(run([one, two], _state()))
    assert state.steps_run == 2
    assert state.current_step == "two"


def test_hooks_see_start_failure_and_ignored_signal() -> None:
    hooks = RecordingHooks()

    def ok(data: dict[str, Any], next_: Any) -> None:
        next_()

    def flaky(data: dict[str, Any], next_: Any) -> None:
        next_(StepError("nope"))
        next_()

    state = _state()
    with pytest.raises(StepError) as info:
        asyncio.run(run([ok, flaky], state, hooks=hooks))

    assert info.value.func == "flaky"
    assert state.steps_run == 1
    assert hooks.events == [
        ("started", "ok", 0),
        ("started", "flaky", 1),
        ("ignored", "flaky", 1, "continue"),
        ("failed", "flaky", 1, "nope"),
    ]


def test_non_callable_step_fails_as_anonymous() -> None:
    with pytest.raises(StepError) as info:
        asyncio.run(run([42], _state()))  # type: ignore[list-item]
    assert info.value.func == "anonymous function"
    assert isinstance(info.value.__cause__, TypeError)


def test_step_timeout_fails_stalled_step() -> None:
    seen: dict[str, bool] = {}

    async def stalled(data: dict[str, Any], next_: Any) -> None:
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            seen["cancelled"] = True
            raise

    async def scenario() -> None:
        with pytest.raises(StepTimeoutError) as info:
            await run([stalled], _state(), step_timeout_s=0.05)
        assert info.value.status == 504
        assert info.value.func == "stalled"
        await asyncio.sleep(0)

    asyncio.run(scenario())
    assert seen == {"cancelled": True}


def test_continuation_from_worker_thread() -> None:
    def threaded(data: dict[str, Any], next_: Any) -> None:
        def work() -> None:
            data["threaded"] = True
            next_(None, data)

        threading.Timer(0.01, work).start()

    state = asyncio.run(run([threaded], _state(), step_timeout_s=2.0))
    assert state.running["threaded"] is True


def test_structlog_hooks_emit_events() -> None:
    def failing(data: dict[str, Any], next_: Any) -> None:
        next_(StepError("bad input", status=400))

    with capture_logs() as logs:
        hooks = StructlogHooks(request_id="req-9")
        with pytest.raises(StepError):
            asyncio.run(run([failing], _state(), hooks=hooks))

    assert [entry["event"] for entry in logs] == ["step_started", "step_failed"]
    assert logs[1]["log_level"] == "error"
    assert logs[1]["status"] == 400
    assert logs[1]["request_id"] == "req-9"
