"""Unit tests for step naming, registry and step references."""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Any

import pytest

from handlerchain.errors import ChainConfigError
from handlerchain.pipeline.registry import StepRegistry, import_step, resolve_steps
from handlerchain.pipeline.step_base import ANONYMOUS_STEP, named_step, step_name


pytestmark = pytest.mark.unit


def parse_body(data: dict[str, Any], next_: Any) -> None:
    next_()


def test_step_name_variants() -> None:
    assert step_name(parse_body) == "parse_body"
    assert step_name(lambda d, n: n()) == ANONYMOUS_STEP
    assert step_name(functools.partial(parse_body)) == ANONYMOUS_STEP

    @named_step("validate-input")
    def validator(data: dict[str, Any], next_: Any) -> None:
        next_()

    assert step_name(validator) == "validate-input"


def test_registry_normalizes_names() -> None:
    registry = StepRegistry({"Parse": parse_body})
    assert registry.resolve(" parse ") is parse_body
    assert registry.resolve("missing") is None
    assert registry.supported_names() == ("parse",)


def test_registry_rejects_non_callables() -> None:
    with pytest.raises(TypeError, match="must be callable"):
        StepRegistry().register("bad", 3)  # type: ignore[arg-type]


def test_import_step_reference() -> None:
    step = import_step("handlerchain.selfcheck:_smoke_sync")
    assert step_name(step) == "_smoke_sync"


@pytest.mark.parametrize(
    ("ref", "message"),
    [
        ("no_colon", "must look like"),
        ("handlerchain_missing_module:step", "Cannot import module"),
        ("handlerchain.selfcheck:nope", "has no attribute 'nope'"),
        ("handlerchain.selfcheck:__doc__", "is not callable"),
    ],
)
def test_import_step_errors(ref: str, message: str) -> None:
    with pytest.raises(ChainConfigError, match=message):
        import_step(ref)


def test_resolve_steps_mixes_names_and_references() -> None:
    registry = StepRegistry({"parse": parse_body})
    steps = resolve_steps(["parse", "handlerchain.selfcheck:_smoke_async"], registry)
    assert steps[0] is parse_body
    assert step_name(steps[1]) == "_smoke_async"

    with pytest.raises(ChainConfigError, match="Use one of: parse"):
        resolve_steps(["unknown"], registry)


def test_import_step_wraps_module_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "handlerchain_broken_steps.py").write_text(
        "raise ValueError('misconfigured at import')\n", encoding="utf-8"
    )
    monkeypatch.syspath_prepend(str(tmp_path))

    with pytest.raises(ChainConfigError, match="misconfigured at import"):
        import_step("handlerchain_broken_steps:step")
