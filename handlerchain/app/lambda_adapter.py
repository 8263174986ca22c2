"""Serverless platform adapter: envelope -> platform response."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from typing import Any

from ..config.models import ExecutorSettings
from ..domain.envelope import Envelope
from ..errors import ChainFailure
from ..observability import setup_logging
from ..pipeline.hooks import ChainHooks, StructlogHooks
from ..pipeline.step_base import StepRunner
from ..services import ChainExecutor


def to_platform_response(envelope: Envelope) -> dict[str, Any]:
    """Map an envelope to the ``{statusCode, body}`` response shape."""
    return {
        "statusCode": envelope.status,
        "body": json.dumps(envelope.data, default=str),
    }


def _request_hooks(context: Any) -> ChainHooks:
    request_id = getattr(context, "aws_request_id", None)
    if request_id is None and isinstance(context, dict):
        request_id = context.get("aws_request_id") or context.get("awsRequestId")
    if request_id is None:
        return StructlogHooks()
    return StructlogHooks(request_id=request_id)


def lambda_handler(
    *steps: StepRunner,
    settings: ExecutorSettings | None = None,
    hooks: ChainHooks | None = None,
) -> Callable[[Any, Any], dict[str, Any]]:
    """Build a synchronous ``handler(event, context)`` running the given chain.

    Both outcome channels map to the same response shape; the status code
    tells them apart for the platform.
    """
    chain = tuple(steps)
    active_settings = settings if settings is not None else ExecutorSettings()
    setup_logging(active_settings.log_level, active_settings.log_format)

    def handler(event: Any, context: Any) -> dict[str, Any]:
        executor = ChainExecutor(
            event,
            context,
            settings=active_settings,
            hooks=hooks if hooks is not None else _request_hooks(context),
        )
        try:
            envelope = asyncio.run(executor.run_chain(chain))
        except ChainFailure as failure:
            envelope = failure.envelope
        return to_platform_response(envelope)

    return handler
