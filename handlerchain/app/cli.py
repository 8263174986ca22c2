"""Application-layer CLI adapter."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from ..config import load_chain_definition, load_settings, load_yaml_mapping
from ..domain.envelope import Envelope
from ..errors import ChainConfigError, ChainFailure
from ..observability import setup_logging
from ..pipeline.hooks import StructlogHooks
from ..pipeline.registry import resolve_steps
from ..selfcheck import run_selfcheck
from ..services import ChainService
from .lambda_adapter import to_platform_response


def build_parser() -> argparse.ArgumentParser:
    """Create CLI parser."""
    parser = argparse.ArgumentParser(
        prog="handlerchain", description="handlerchain middleware chain runner"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run_p = sub.add_parser("run", help="Run a YAML chain definition")
    run_p.add_argument("chain", type=str, help="Path to chain YAML")
    run_p.add_argument(
        "--event",
        type=str,
        default=None,
        help="JSON/YAML file with the event payload",
    )
    run_p.add_argument(
        "--context",
        type=str,
        default=None,
        help="JSON/YAML file with the invocation context",
    )
    run_p.add_argument(
        "--settings",
        type=str,
        default=None,
        help="YAML settings file overriding the chain's settings block",
    )

    selfcheck_p = sub.add_parser(
        "selfcheck", help="Run dependency and smoke self-check"
    )
    selfcheck_p.add_argument(
        "--no-smoke",
        action="store_true",
        help="Run import checks only (skip smoke chain).",
    )

    return parser


def _load_payload(path: str | None) -> Any:
    if path is None:
        return {}
    return load_yaml_mapping(path)


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        try:
            definition = load_chain_definition(args.chain)
            settings = load_settings(args.settings) if args.settings else definition.settings
            service = ChainService(settings=settings, hooks=StructlogHooks())
            steps = resolve_steps(definition.steps, service.registry)
            event = _load_payload(args.event)
            context = _load_payload(args.context)
        except ChainConfigError as exc:
            parser.exit(2, f"Error: {exc}\n")

        setup_logging(settings.log_level, settings.log_format, stream=sys.stderr)
        executor = service.executor(event, context)
        ok = True
        envelope: Envelope
        try:
            envelope = asyncio.run(executor.run_chain(steps))
        except ChainFailure as failure:
            envelope = failure.envelope
            ok = False

        print(json.dumps(to_platform_response(envelope)))
        return 0 if ok else 1

    if args.command == "selfcheck":
        report = run_selfcheck(smoke=not bool(args.no_smoke))
        print(report.to_text())
        return 0 if report.ok else 1

    parser.exit(2, "Unknown command\n")
    return 2
