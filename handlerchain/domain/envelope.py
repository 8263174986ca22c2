"""Uniform success/error envelopes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ..errors import StepError, numeric_status
from .state import strip_reserved

SUCCESS_STATUS = 200
DEFAULT_ERROR_STATUS = 500
DEFAULT_ERROR_MESSAGE = "Something went wrong"
UNKNOWN_FUNCTION = "unknown function"


@dataclass(frozen=True)
class Envelope:
    """Outcome shape shared by both result channels."""

    status: int
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "data": self.data}


def format_success(running: Mapping[str, Any]) -> Envelope:
    """Build the success envelope from the final running context."""
    return Envelope(status=SUCCESS_STATUS, data=strip_reserved(running))


def format_error(
    error: StepError,
    current_step: str | None = None,
    *,
    default_status: int = DEFAULT_ERROR_STATUS,
    default_message: str = DEFAULT_ERROR_MESSAGE,
) -> Envelope:
    """Build the error envelope for a captured failure.

    The status falls back to ``default_status`` unless the error carries a
    numeric override. The attributed step name falls back from the error's
    own ``func`` to ``current_step`` and finally to ``"unknown function"``.
    """
    status = numeric_status(error.status)
    message = error.message if isinstance(error.message, str) and error.message else default_message
    func = error.func or current_step or UNKNOWN_FUNCTION
    return Envelope(
        status=default_status if status is None else status,
        data={"message": message, "func": func},
    )
