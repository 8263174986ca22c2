"""Shared config validation helpers."""

from __future__ import annotations

from typing import Any, Mapping, Sequence


def as_mapping(value: Any, context: str) -> dict[str, Any]:
    """Require a plain dict (what YAML mappings load as)."""
    if not isinstance(value, dict):
        raise ValueError(f"{context} must be a mapping.")
    return value


def opt_mapping(value: Any, context: str) -> dict[str, Any]:
    """Return mapping or empty mapping for None."""
    if value is None:
        return {}
    return as_mapping(value, context)


def required(mapping: Mapping[str, Any], key: str, context: str) -> Any:
    """Require mapping key existence."""
    if not isinstance(mapping, Mapping):
        raise ValueError(f"{context} must be a mapping.")
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context}.")
    return mapping[key]


def reject_unknown(mapping: Mapping[str, Any], allowed: Sequence[str], context: str) -> None:
    """Fail on keys outside ``allowed`` so typos do not pass silently."""
    unknown = sorted(set(mapping) - set(allowed))
    if unknown:
        raise ValueError(f"{context} has unknown keys: {', '.join(unknown)}.")


def to_float(value: Any, key: str, context: str) -> float:
    """Convert value to float; booleans are rejected."""
    if isinstance(value, bool):
        raise ValueError(f"{context}.{key} must be a number, got {value!r}.")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{context}.{key} must be a number, got {value!r}.") from exc


def to_int(value: Any, key: str, context: str) -> int:
    """Convert value to int; booleans are rejected."""
    if isinstance(value, bool):
        raise ValueError(f"{context}.{key} must be an integer, got {value!r}.")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{context}.{key} must be an integer, got {value!r}.") from exc


def to_status_code(value: Any, key: str, context: str) -> int:
    """Convert value to an HTTP status code in 100-599."""
    status = to_int(value, key, context)
    if not 100 <= status <= 599:
        raise ValueError(f"{context}.{key} must be an HTTP status code (100-599), got {status}.")
    return status


def to_timeout(value: Any, key: str, context: str) -> float | None:
    """None disables the timeout; anything else must be a positive number of seconds."""
    if value is None:
        return None
    seconds = to_float(value, key, context)
    if seconds <= 0.0:
        raise ValueError(f"{context}.{key} must be > 0 seconds or null.")
    return seconds


def ensure_choice(name: str, value: str, allowed: Sequence[str]) -> str:
    """Validate str choice and return it."""
    val = str(value)
    if val not in allowed:
        joined = ", ".join(allowed)
        raise ValueError(f"{name} must be one of: {joined}. Got '{val}'.")
    return val
