"""Adapter tests for CLI entrypoint."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

import handlerchain.app.cli as app_cli
import handlerchain.cli as entry_cli
from handlerchain.app.cli import main


pytestmark = pytest.mark.adapter


def _write_chain(tmp_path: Path, steps: list[str], settings: dict | None = None) -> Path:
    payload: dict = {"steps": steps}
    if settings:
        payload["settings"] = settings
    path = tmp_path / "chain.yaml"
    path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
    return path


def test_cli_wrapper_exports_app_entrypoints() -> None:
    assert entry_cli.main is app_cli.main
    assert entry_cli.build_parser is app_cli.build_parser


def test_cli_run_success(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    chain = _write_chain(
        tmp_path,
        ["handlerchain.selfcheck:_smoke_sync", "handlerchain.selfcheck:_smoke_async"],
        {"log_format": "console"},
    )
    event = tmp_path / "event.json"
    event.write_text(json.dumps({"body": "{}"}), encoding="utf-8")

    rc = main(["run", str(chain), "--event", str(event)])
    captured = capsys.readouterr()

    assert rc == 0
    response = json.loads(captured.out.strip().splitlines()[-1])
    assert response["statusCode"] == 200
    assert json.loads(response["body"]) == {"sync": True, "async": True}


def test_cli_run_failure_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    chain = _write_chain(tmp_path, ["handlerchain.selfcheck:_smoke_fail"])

    rc = main(["run", str(chain)])
    captured = capsys.readouterr()

    assert rc == 1
    response = json.loads(captured.out.strip().splitlines()[-1])
    assert response["statusCode"] == 500
    assert json.loads(response["body"]) == {"message": "selfcheck failure", "func": "_smoke_fail"}


def test_cli_run_config_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    chain = _write_chain(tmp_path, ["not_a_reference"])

    with pytest.raises(SystemExit) as info:
        main(["run", str(chain)])
    captured = capsys.readouterr()

    assert info.value.code == 2
    assert "is not a registered step" in captured.err


def test_cli_selfcheck_imports_only(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["selfcheck", "--no-smoke"])
    captured = capsys.readouterr()
    assert rc == 0
    assert "overall: OK" in captured.out
