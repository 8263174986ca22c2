"""Running context keys and seeding/stripping helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

EVENT_KEY = "event"
CONTEXT_KEY = "context"
CURRENT_STEP_KEY = "_current_step"

RESERVED_KEYS = (EVENT_KEY, CONTEXT_KEY, CURRENT_STEP_KEY)

RunningContext = dict[str, Any]


def seed_running_context(event: Any, context: Any) -> RunningContext:
    """Build a fresh running context for one chain run."""
    return {EVENT_KEY: event, CONTEXT_KEY: context}


def strip_reserved(running: Mapping[str, Any]) -> dict[str, Any]:
    """Shallow copy of the running context without seed and bookkeeping keys."""
    data = dict(running)
    for key in RESERVED_KEYS:
        data.pop(key, None)
    return data


def current_step(running: Mapping[str, Any]) -> str | None:
    """Return the step name recorded in the running context, if any."""
    value = running.get(CURRENT_STEP_KEY)
    return value if isinstance(value, str) and value else None


@dataclass
class ChainState:
    """Mutable state of one chain run shared with the engine."""

    running: RunningContext
    steps_run: int = 0

    @property
    def current_step(self) -> str | None:
        return current_step(self.running)
