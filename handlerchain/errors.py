"""Shared error types for handlerchain orchestration layers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from .domain.envelope import Envelope


def numeric_status(value: Any) -> int | None:
    """Return value as an int status code, or None when it is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


class StepError(Exception):
    """Failure record produced by a step or synthesized from a raw failure.

    ``status`` is an optional numeric override for the envelope status,
    ``message`` the human-readable text and ``func`` the name of the step the
    failure is attributed to. ``func`` is normally filled in by the engine.
    """

    def __init__(
        self,
        message: str | None = None,
        *,
        status: int | None = None,
        func: str | None = None,
    ) -> None:
        super().__init__(message or "")
        self.message = message
        self.status = status
        self.func = func

    def attribute(self, step_name: str) -> StepError:
        """Stamp the originating step name unless one is already set."""
        if not self.func:
            self.func = step_name
        return self

    @classmethod
    def coerce(cls, raw: Any) -> StepError:
        """Normalize any failure value into a StepError."""
        if isinstance(raw, StepError):
            return raw

        if isinstance(raw, Mapping):
            message = raw.get("message")
            err = cls(
                str(message) if message else None,
                status=numeric_status(raw.get("status")),
                func=raw.get("func") if isinstance(raw.get("func"), str) else None,
            )
            return err

        if isinstance(raw, str):
            return cls(raw or None)

        message = getattr(raw, "message", None)
        if not isinstance(message, str) or not message:
            message = (str(raw) or None) if isinstance(raw, BaseException) else None
        func = getattr(raw, "func", None)
        err = cls(
            message,
            status=numeric_status(getattr(raw, "status", None)),
            func=func if isinstance(func, str) else None,
        )
        if isinstance(raw, BaseException):
            err.__cause__ = raw
        return err


class StepTimeoutError(StepError):
    """Raised when a step does not signal completion within the step timeout."""

    def __init__(self, timeout_s: float, *, func: str | None = None) -> None:
        super().__init__(f"Step timed out after {timeout_s:g}s", status=504, func=func)
        self.timeout_s = timeout_s


class ChainFailure(Exception):
    """Failed outcome of a chain run, carrying the error envelope."""

    def __init__(self, envelope: Envelope) -> None:
        super().__init__(envelope.data.get("message"))
        self.envelope = envelope

    @property
    def status(self) -> int:
        return self.envelope.status

    @property
    def data(self) -> dict[str, Any]:
        return self.envelope.data


class ChainConfigError(ValueError):
    """Raised when settings or a chain definition are invalid."""
