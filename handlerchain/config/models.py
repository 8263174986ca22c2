"""Typed models for executor and chain configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from ..domain.envelope import DEFAULT_ERROR_MESSAGE, DEFAULT_ERROR_STATUS


@dataclass(frozen=True)
class ExecutorSettings:
    """Chain executor behavior and logging settings."""

    default_status: int = DEFAULT_ERROR_STATUS
    default_message: str = DEFAULT_ERROR_MESSAGE
    step_timeout_s: float | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "console"] = "json"


@dataclass(frozen=True)
class ChainDefinition:
    """Chain loaded from a definition file: step references plus settings."""

    steps: list[str] = field(default_factory=list)
    settings: ExecutorSettings = field(default_factory=ExecutorSettings)
