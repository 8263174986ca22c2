"""Chain executor built on top of pipeline primitives."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..config.models import ExecutorSettings
from ..domain.envelope import Envelope, format_error, format_success
from ..domain.state import ChainState, seed_running_context
from ..errors import ChainFailure, StepError
from ..pipeline.engine import run as run_pipeline
from ..pipeline.hooks import ChainHooks, guarded
from ..pipeline.registry import StepRegistry, resolve_steps
from ..pipeline.step_base import StepRunner


class ChainExecutor:
    """Run an ordered chain of steps for one ``(event, context)`` invocation.

    ``event`` and ``context`` are opaque: they only seed the running context
    of each chain run. ``run_chain`` returns the success envelope or raises
    ``ChainFailure`` carrying the error envelope.
    """

    def __init__(
        self,
        event: Any,
        context: Any,
        *,
        settings: ExecutorSettings | None = None,
        hooks: ChainHooks | None = None,
    ) -> None:
        self.event = event
        self.context = context
        self.settings = settings if settings is not None else ExecutorSettings()
        self.hooks = guarded(hooks)
        self.response_data: dict[str, Any] | None = None

    async def run_chain(self, steps: Iterable[StepRunner]) -> Envelope:
        state = ChainState(running=seed_running_context(self.event, self.context))
        try:
            await run_pipeline(
                steps,
                state,
                hooks=self.hooks,
                step_timeout_s=self.settings.step_timeout_s,
            )
        except StepError as err:
            envelope = format_error(
                err,
                state.current_step,
                default_status=self.settings.default_status,
                default_message=self.settings.default_message,
            )
            self.hooks.chain_completed(envelope.status, state.steps_run)
            raise ChainFailure(envelope) from err

        envelope = format_success(state.running)
        self.hooks.chain_completed(envelope.status, state.steps_run)
        return envelope

    async def handle_request(self, *steps: StepRunner) -> Envelope:
        """Variadic form of ``run_chain``."""
        return await self.run_chain(steps)

    def response(self, status: int, data: dict[str, Any]) -> Envelope:
        """Record custom response data and return it as an envelope."""
        self.response_data = dict(data)
        return Envelope(status=status, data=data)


class ChainService:
    """Resolve step references through a registry and run them."""

    def __init__(
        self,
        registry: StepRegistry | None = None,
        *,
        settings: ExecutorSettings | None = None,
        hooks: ChainHooks | None = None,
    ) -> None:
        self.registry = registry if registry is not None else StepRegistry()
        self.settings = settings if settings is not None else ExecutorSettings()
        self.hooks = hooks

    def executor(self, event: Any, context: Any) -> ChainExecutor:
        return ChainExecutor(event, context, settings=self.settings, hooks=self.hooks)

    async def run_refs(self, refs: Iterable[str], event: Any, context: Any) -> Envelope:
        """Run a chain given as registered names or ``module:attr`` references."""
        steps = resolve_steps(refs, self.registry)
        return await self.executor(event, context).run_chain(steps)


def build_chain_service(
    steps: dict[str, StepRunner] | None = None,
    *,
    settings: ExecutorSettings | None = None,
    hooks: ChainHooks | None = None,
) -> ChainService:
    """Create ChainService from explicit named steps."""
    return ChainService(StepRegistry(steps=steps), settings=settings, hooks=hooks)
