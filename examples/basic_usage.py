#!/usr/bin/env python3
"""Programmatic step gating example.

This demonstrates using the step components directly:

* build steps with initializer guards
* ask each step whether it may run
* see guard failures reported through structured logging

Nothing is executed; the example only prints decisions.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from step_orchestrator.orchestrator.logging import configure_logging
from step_orchestrator.steps import Step
from step_orchestrator.steps.atoms import Echo
from step_orchestrator.steps.initializers import (
    CommandFound,
    EnvVarSet,
    FileExists,
    SkipIf,
    SkipUnless,
)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print run decisions for a few sample steps.")
    parser.add_argument(
        "--marker",
        default=".bootstrapped",
        help="File whose presence means bootstrap already happened",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(args.log_level)

    steps = [
        Step(
            atom=Echo("bootstrap"),
            initializers=[SkipIf(FileExists(Path(args.marker)))],
        ),
        Step(
            atom=Echo("clone repositories"),
            initializers=[SkipUnless(CommandFound("git"))],
        ),
        Step(
            atom=Echo("local-only tweaks"),
            initializers=[SkipIf(EnvVarSet("CI")), SkipUnless(CommandFound(""))],
        ),
    ]

    for step in steps:
        print(f"{step}: {'run' if step.may_run() else 'skip'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
