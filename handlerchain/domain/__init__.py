"""Domain-layer types and constants."""

from .envelope import (
    DEFAULT_ERROR_MESSAGE,
    DEFAULT_ERROR_STATUS,
    SUCCESS_STATUS,
    UNKNOWN_FUNCTION,
    Envelope,
    format_error,
    format_success,
)
from .state import (
    ChainState,
    CONTEXT_KEY,
    CURRENT_STEP_KEY,
    EVENT_KEY,
    RunningContext,
    current_step,
    seed_running_context,
    strip_reserved,
)

__all__ = [
    "CONTEXT_KEY",
    "ChainState",
    "CURRENT_STEP_KEY",
    "DEFAULT_ERROR_MESSAGE",
    "DEFAULT_ERROR_STATUS",
    "EVENT_KEY",
    "Envelope",
    "RunningContext",
    "SUCCESS_STATUS",
    "UNKNOWN_FUNCTION",
    "current_step",
    "format_error",
    "format_success",
    "seed_running_context",
    "strip_reserved",
]
