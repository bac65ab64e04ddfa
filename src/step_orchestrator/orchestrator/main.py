"""CLI entrypoint for the step orchestrator.

Only the run decision is exposed: `check` loads a plan and reports, per step,
whether its initializers allow it to run. Atoms are never executed here.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from step_orchestrator import __version__
from step_orchestrator.orchestrator.config import OrchestratorSettings
from step_orchestrator.orchestrator.logging import configure_logging
from step_orchestrator.orchestrator.plan import PlanError, load_plan

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="step-orchestrator",
        description="Decide which steps of a plan are allowed to run",
    )
    parser.add_argument("--version", action="version", version=f"step-orchestrator {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser(
        "check",
        help="Evaluate each step's initializers and print run/skip",
    )
    check.add_argument(
        "--plan",
        default=None,
        help="Path to the JSON plan (defaults to ORCHESTRATOR_PLAN_PATH, then plan.json)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = OrchestratorSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        if args.command == "check":
            plan_path = Path(args.plan) if args.plan else settings.plan_path
            steps = load_plan(plan_path)

            allowed = 0
            for step in steps:
                may_run = step.may_run()
                allowed += int(may_run)
                print(f"{step}: {'run' if may_run else 'skip'}")

            logger.info(
                "Plan checked",
                extra={"path": str(plan_path), "steps": len(steps), "allowed": allowed},
            )
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except PlanError as e:
        logger.error(str(e), extra={"command": args.command})
        print(str(e), file=sys.stderr)
        return 3

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
