"""Sequential middleware chains for serverless-style handlers."""

from .config import ExecutorSettings
from .domain import Envelope, format_error, format_success
from .errors import ChainConfigError, ChainFailure, StepError, StepTimeoutError
from .pipeline import ANONYMOUS_STEP, ChainHooks, NullHooks, StructlogHooks, named_step, step_name
from .services import ChainExecutor, ChainService, build_chain_service

__version__ = "0.1.0"

__all__ = [
    "ANONYMOUS_STEP",
    "ChainConfigError",
    "ChainExecutor",
    "ChainFailure",
    "ChainHooks",
    "ChainService",
    "Envelope",
    "ExecutorSettings",
    "NullHooks",
    "StepError",
    "StepTimeoutError",
    "StructlogHooks",
    "build_chain_service",
    "format_error",
    "format_success",
    "named_step",
    "step_name",
]
