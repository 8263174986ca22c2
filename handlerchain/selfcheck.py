from __future__ import annotations

import asyncio
import importlib
from dataclasses import dataclass
from typing import Any

from .errors import ChainFailure
from .services import ChainExecutor


@dataclass
class CheckRow:
    name: str
    ok: bool
    detail: str


@dataclass
class SelfCheckReport:
    rows: list[CheckRow]

    @property
    def ok(self) -> bool:
        return all(row.ok for row in self.rows)

    def to_text(self) -> str:
        lines: list[str] = []
        for row in self.rows:
            status = "OK" if row.ok else "FAIL"
            lines.append(f"[{status}] {row.name}: {row.detail}")
        lines.append(f"overall: {'OK' if self.ok else 'FAIL'}")
        return "\n".join(lines)


def _smoke_sync(data: dict[str, Any], next_: Any) -> None:
    data["sync"] = True
    next_(None, data)


async def _smoke_async(data: dict[str, Any], next_: Any) -> None:
    await asyncio.sleep(0)
    data["async"] = True
    next_()


def _smoke_fail(data: dict[str, Any], next_: Any) -> None:
    raise RuntimeError("selfcheck failure")


def run_selfcheck(*, smoke: bool = True) -> SelfCheckReport:
    rows: list[CheckRow] = []

    for module_name in ("yaml", "structlog"):
        try:
            mod = importlib.import_module(module_name)
            version = getattr(mod, "__version__", "unknown")
            rows.append(CheckRow(module_name, True, f"version={version}"))
        except ImportError as exc:
            rows.append(CheckRow(module_name, False, str(exc)))

    if smoke and all(row.ok for row in rows):
        executor = ChainExecutor({"source": "selfcheck"}, None)
        try:
            envelope = asyncio.run(executor.run_chain([_smoke_sync, _smoke_async]))
            if envelope.status == 200 and envelope.data == {"sync": True, "async": True}:
                rows.append(CheckRow("smoke", True, f"status={envelope.status}, keys={sorted(envelope.data)}"))
            else:
                rows.append(CheckRow("smoke", False, f"unexpected envelope {envelope.to_dict()!r}"))
        except ChainFailure as failure:
            rows.append(CheckRow("smoke", False, f"chain failed: {failure.envelope.to_dict()!r}"))

        try:
            asyncio.run(executor.run_chain([_smoke_sync, _smoke_fail]))
            rows.append(CheckRow("smoke_failure", False, "failing chain did not fail"))
        except ChainFailure as failure:
            ok = failure.status == 500 and failure.data.get("func") == "_smoke_fail"
            rows.append(CheckRow("smoke_failure", ok, f"status={failure.status}, func={failure.data.get('func')}"))

    return SelfCheckReport(rows=rows)
