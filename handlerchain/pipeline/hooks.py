"""Observability hooks invoked by the pipeline engine."""

from __future__ import annotations

from typing import Any, Protocol

from ..errors import StepError
from ..observability.logging import get_logger


class ChainHooks(Protocol):
    def step_started(self, name: str, index: int) -> None: ...

    def step_failed(self, name: str, index: int, error: StepError) -> None: ...

    def signal_ignored(self, name: str, index: int, signal: str) -> None: ...

    def chain_completed(self, status: int, steps_run: int) -> None: ...


class NullHooks:
    """Default hooks: do nothing."""

    def step_started(self, name: str, index: int) -> None:
        pass

    def step_failed(self, name: str, index: int, error: StepError) -> None:
        pass

    def signal_ignored(self, name: str, index: int, signal: str) -> None:
        pass

    def chain_completed(self, status: int, steps_run: int) -> None:
        pass


class GuardedHooks:
    """Wrap hooks so an observer that raises never disturbs the chain."""

    def __init__(self, hooks: ChainHooks) -> None:
        self.hooks = hooks

    def _call(self, method: str, *args: Any) -> None:
        try:
            getattr(self.hooks, method)(*args)
        except Exception:
            pass

    def step_started(self, name: str, index: int) -> None:
        self._call("step_started", name, index)

    def step_failed(self, name: str, index: int, error: StepError) -> None:
        self._call("step_failed", name, index, error)

    def signal_ignored(self, name: str, index: int, signal: str) -> None:
        self._call("signal_ignored", name, index, signal)

    def chain_completed(self, status: int, steps_run: int) -> None:
        self._call("chain_completed", status, steps_run)


def guarded(hooks: ChainHooks | None) -> ChainHooks:
    """Return hooks safe to call from the engine; None means no-op hooks."""
    if hooks is None:
        return NullHooks()
    if isinstance(hooks, (NullHooks, GuardedHooks)):
        return hooks
    return GuardedHooks(hooks)


class StructlogHooks:
    """Hooks that emit structured log events."""

    def __init__(self, logger: Any | None = None, **bindings: Any) -> None:
        base = logger if logger is not None else get_logger("handlerchain")
        self.logger = base.bind(**bindings) if bindings else base

    def step_started(self, name: str, index: int) -> None:
        self.logger.info("step_started", step=name, index=index)

    def step_failed(self, name: str, index: int, error: StepError) -> None:
        self.logger.error(
            "step_failed",
            step=name,
            index=index,
            func=error.func,
            status=error.status,
            error=error.message,
        )

    def signal_ignored(self, name: str, index: int, signal: str) -> None:
        self.logger.warning("signal_ignored", step=name, index=index, signal=signal)

    def chain_completed(self, status: int, steps_run: int) -> None:
        self.logger.info("chain_completed", status=status, steps_run=steps_run)


__all__ = ["ChainHooks", "GuardedHooks", "NullHooks", "StructlogHooks", "guarded"]
