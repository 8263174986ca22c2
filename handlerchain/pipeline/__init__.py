"""Pipeline primitives for step-based execution."""

from .engine import run, run_step
from .hooks import ChainHooks, GuardedHooks, NullHooks, StructlogHooks, guarded
from .latch import CompletionLatch, Outcome
from .registry import StepRegistry, create_step_registry, import_step, resolve_steps
from .step_base import ANONYMOUS_STEP, Continuation, StepRunner, named_step, step_name

__all__ = [
    "ANONYMOUS_STEP",
    "ChainHooks",
    "CompletionLatch",
    "GuardedHooks",
    "Continuation",
    "NullHooks",
    "Outcome",
    "StepRegistry",
    "StepRunner",
    "StructlogHooks",
    "create_step_registry",
    "guarded",
    "import_step",
    "named_step",
    "resolve_steps",
    "run",
    "run_step",
    "step_name",
]
