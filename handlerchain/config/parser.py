"""Config parsing utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Mapping, cast

import yaml

from ..errors import ChainConfigError
from .models import ChainDefinition, ExecutorSettings
from .validators import (
    as_mapping,
    ensure_choice,
    opt_mapping,
    reject_unknown,
    required,
    to_status_code,
    to_timeout,
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMATS = ("json", "console")
SETTINGS_KEYS = ("default_status", "default_message", "step_timeout_s", "log_level", "log_format")
CHAIN_KEYS = ("steps", "settings")


def parse_settings(raw: Mapping[str, Any] | None, context: str = "settings") -> ExecutorSettings:
    """Extract typed executor settings from a plain mapping."""
    payload = opt_mapping(raw, context)
    reject_unknown(payload, SETTINGS_KEYS, context)
    defaults = ExecutorSettings()

    default_message = str(payload.get("default_message", defaults.default_message))
    if not default_message:
        raise ValueError(f"{context}.default_message must not be empty.")

    log_level = ensure_choice(
        f"{context}.log_level", str(payload.get("log_level", defaults.log_level)).upper(), LOG_LEVELS
    )
    log_format = ensure_choice(
        f"{context}.log_format", str(payload.get("log_format", defaults.log_format)).lower(), LOG_FORMATS
    )

    return ExecutorSettings(
        default_status=to_status_code(payload.get("default_status", defaults.default_status), "default_status", context),
        default_message=default_message,
        step_timeout_s=to_timeout(payload.get("step_timeout_s", defaults.step_timeout_s), "step_timeout_s", context),
        log_level=cast(Literal["DEBUG", "INFO", "WARNING", "ERROR"], log_level),
        log_format=cast(Literal["json", "console"], log_format),
    )


def parse_chain_definition(raw: Mapping[str, Any]) -> ChainDefinition:
    """Parse a chain definition payload (``steps`` plus optional ``settings``)."""
    payload = as_mapping(raw, "chain")
    reject_unknown(payload, CHAIN_KEYS, "chain")
    raw_steps = required(payload, "steps", "chain")
    if not isinstance(raw_steps, list):
        raise ValueError("chain.steps must be a list of step references.")

    steps: list[str] = []
    for idx, ref in enumerate(raw_steps):
        if not isinstance(ref, str) or not ref.strip():
            raise ValueError(f"chain.steps[{idx}] must be a non-empty string.")
        steps.append(ref.strip())

    return ChainDefinition(steps=steps, settings=parse_settings(payload.get("settings"), "chain.settings"))


def load_yaml_mapping(path: str | Path) -> dict[str, Any]:
    """Read a YAML (or JSON) file whose top level must be a mapping."""
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as exc:
        raise ChainConfigError(f"Cannot read '{p}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ChainConfigError(f"Invalid YAML in '{p}': {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ChainConfigError(f"'{p}' must contain a mapping at the top level.")
    return data


def load_chain_definition(path: str | Path) -> ChainDefinition:
    """Load and validate a chain definition file."""
    data = load_yaml_mapping(path)
    try:
        return parse_chain_definition(data)
    except ValueError as exc:
        raise ChainConfigError(f"{path}: {exc}") from exc


def load_settings(path: str | Path) -> ExecutorSettings:
    """Load executor settings from a YAML file."""
    data = load_yaml_mapping(path)
    try:
        return parse_settings(data)
    except ValueError as exc:
        raise ChainConfigError(f"{path}: {exc}") from exc
