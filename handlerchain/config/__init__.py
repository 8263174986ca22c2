"""Typed config models and parsers."""

from .models import ChainDefinition, ExecutorSettings
from .parser import (
    load_chain_definition,
    load_settings,
    load_yaml_mapping,
    parse_chain_definition,
    parse_settings,
)
from .validators import (
    as_mapping,
    ensure_choice,
    opt_mapping,
    reject_unknown,
    required,
    to_float,
    to_int,
    to_status_code,
    to_timeout,
)

__all__ = [
    "ChainDefinition",
    "ExecutorSettings",
    "as_mapping",
    "ensure_choice",
    "load_chain_definition",
    "load_settings",
    "load_yaml_mapping",
    "opt_mapping",
    "parse_chain_definition",
    "parse_settings",
    "reject_unknown",
    "required",
    "to_float",
    "to_int",
    "to_status_code",
    "to_timeout",
]
