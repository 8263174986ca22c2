"""Step registry and step reference resolution."""

from __future__ import annotations

import importlib
from collections.abc import Iterable

from ..errors import ChainConfigError
from .step_base import StepRunner


class StepRegistry:
    """Registry that maps normalized step names to step callables."""

    def __init__(self, steps: dict[str, StepRunner] | None = None) -> None:
        self._steps: dict[str, StepRunner] = {}
        if steps:
            for name, step in steps.items():
                self.register(name, step)

    @staticmethod
    def _normalize(name: str) -> str:
        return str(name).strip().lower()

    def register(self, name: str, step: StepRunner) -> None:
        if not callable(step):
            raise TypeError(f"Step '{name}' must be callable.")
        self._steps[self._normalize(name)] = step

    def resolve(self, name: str) -> StepRunner | None:
        return self._steps.get(self._normalize(name))

    def supported_names(self) -> tuple[str, ...]:
        return tuple(self._steps)


def import_step(ref: str) -> StepRunner:
    """Import a step from a ``package.module:attr`` reference."""
    module_path, sep, attr_path = str(ref).partition(":")
    if not sep or not module_path or not attr_path:
        raise ChainConfigError(f"Step reference '{ref}' must look like 'package.module:function'.")

    try:
        target: object = importlib.import_module(module_path)
    except Exception as exc:
        raise ChainConfigError(f"Cannot import module '{module_path}' for step '{ref}': {exc}") from exc

    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ChainConfigError(f"Step reference '{ref}' has no attribute '{part}'.") from exc

    if not callable(target):
        raise ChainConfigError(f"Step reference '{ref}' is not callable.")
    return target  # type: ignore[return-value]


def resolve_steps(refs: Iterable[str], registry: StepRegistry | None = None) -> list[StepRunner]:
    """Resolve registered names and ``module:attr`` references to step callables."""
    resolved: list[StepRunner] = []
    for idx, ref in enumerate(refs):
        step = registry.resolve(ref) if registry is not None else None
        if step is None:
            if ":" not in str(ref):
                supported = ", ".join(registry.supported_names()) if registry is not None else ""
                hint = f" Use one of: {supported}." if supported else ""
                raise ChainConfigError(f"steps[{idx}] '{ref}' is not a registered step.{hint}")
            step = import_step(ref)
        resolved.append(step)
    return resolved


def create_step_registry(steps: dict[str, StepRunner]) -> StepRegistry:
    """Build a registry from a name -> step mapping."""
    return StepRegistry(steps=steps)
