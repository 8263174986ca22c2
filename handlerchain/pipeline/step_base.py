"""Step and continuation interfaces used by the pipeline engine/registry."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

ANONYMOUS_STEP = "anonymous function"


class Continuation(Protocol):
    def __call__(self, error: Any = None, data: Any = None) -> None: ...


StepRunner = Callable[[dict[str, Any], Continuation], "Awaitable[Any] | None"]


def step_name(step: Any) -> str:
    """Return the declared name of a step, or the anonymous placeholder."""
    explicit = getattr(step, "step_name", None)
    if isinstance(explicit, str) and explicit:
        return explicit
    name = getattr(step, "__name__", None)
    if not isinstance(name, str) or not name or name == "<lambda>":
        return ANONYMOUS_STEP
    return name


def named_step(name: str) -> Callable[[StepRunner], StepRunner]:
    """Decorator attaching an explicit name to a step."""

    def _wrap(step: StepRunner) -> StepRunner:
        setattr(step, "step_name", name)
        return step

    return _wrap


__all__ = ["ANONYMOUS_STEP", "Continuation", "StepRunner", "named_step", "step_name"]
