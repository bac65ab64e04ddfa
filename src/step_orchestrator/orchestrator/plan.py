"""Build steps from a JSON plan document.

A plan is a list of steps, each naming an atom plus its initializers and
finalizers:

    {"steps": [{
        "atom": {"kind": "echo", "message": "hello"},
        "initializers": [
            {"when": "skip_if", "guard": {"kind": "file_exists", "path": "/tmp/done"}}
        ],
        "finalizers": [
            {"when": "ensure", "check": {"kind": "file_exists", "path": "/tmp/done"}}
        ]
    }]}

Validation happens up front; a plan either loads completely or raises
`PlanError`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from step_orchestrator.steps import atoms, finalizers, initializers
from step_orchestrator.steps.diagnostics import DiagnosticSink
from step_orchestrator.steps.step import Step

logger = logging.getLogger(__name__)


class PlanError(ValueError):
    pass


class _PlanModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class EchoAtomSpec(_PlanModel):
    kind: Literal["echo"]
    message: str


class EchoGuardSpec(_PlanModel):
    kind: Literal["echo"]
    value: bool


class FileExistsSpec(_PlanModel):
    kind: Literal["file_exists"]
    path: Path


class CommandFoundSpec(_PlanModel):
    kind: Literal["command_found"]
    command: str = Field(min_length=1)


class EnvVarSpec(_PlanModel):
    kind: Literal["env_var"]
    name: str = Field(min_length=1)
    value: str | None = None


InitializerSpec = Annotated[
    EchoGuardSpec | FileExistsSpec | CommandFoundSpec | EnvVarSpec,
    Field(discriminator="kind"),
]
FinalizerSpec = Annotated[EchoGuardSpec | FileExistsSpec, Field(discriminator="kind")]


class InitializerEntry(_PlanModel):
    when: Literal["skip_if", "skip_unless"]
    guard: InitializerSpec


class FinalizerEntry(_PlanModel):
    when: Literal["ensure"]
    check: FinalizerSpec


class StepSpec(_PlanModel):
    atom: EchoAtomSpec
    initializers: list[InitializerEntry] = Field(default_factory=list)
    finalizers: list[FinalizerEntry] = Field(default_factory=list)


class PlanSpec(_PlanModel):
    steps: list[StepSpec] = Field(default_factory=list)


def _build_initializer(spec: InitializerSpec) -> initializers.Initializer:
    if isinstance(spec, EchoGuardSpec):
        return initializers.Echo(spec.value)
    if isinstance(spec, FileExistsSpec):
        return initializers.FileExists(spec.path)
    if isinstance(spec, CommandFoundSpec):
        return initializers.CommandFound(spec.command)
    return initializers.EnvVarSet(spec.name, spec.value)


def _build_initializer_flow_control(entry: InitializerEntry) -> initializers.FlowControl:
    guard = _build_initializer(entry.guard)
    if entry.when == "skip_unless":
        return initializers.SkipUnless(guard)
    return initializers.SkipIf(guard)


def _build_finalizer(spec: FinalizerSpec) -> finalizers.Finalizer:
    if isinstance(spec, EchoGuardSpec):
        return finalizers.Echo(spec.value)
    return finalizers.FileExists(spec.path)


def build_step(spec: StepSpec, *, diagnostics: DiagnosticSink | None = None) -> Step:
    """Materialise one validated step spec."""

    atom = atoms.Echo(spec.atom.message)
    step_initializers = [_build_initializer_flow_control(e) for e in spec.initializers]
    step_finalizers = [finalizers.Ensure(_build_finalizer(e.check)) for e in spec.finalizers]
    if diagnostics is None:
        return Step(atom=atom, initializers=step_initializers, finalizers=step_finalizers)
    return Step(
        atom=atom,
        initializers=step_initializers,
        finalizers=step_finalizers,
        diagnostics=diagnostics,
    )


def parse_plan(data: object) -> PlanSpec:
    """Validate an already-decoded plan document."""

    try:
        return PlanSpec.model_validate(data)
    except ValidationError as e:
        raise PlanError(f"Invalid plan: {e}") from e


def load_plan(path: Path, *, diagnostics: DiagnosticSink | None = None) -> list[Step]:
    """Read a plan file and build its steps in declaration order."""

    try:
        raw = path.read_bytes()
    except OSError as e:
        raise PlanError(f"Cannot read plan file {path}: {e}") from e

    try:
        data = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise PlanError(f"Plan file is not valid UTF-8: {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise PlanError(f"Plan file is not valid JSON: {path}: {e}") from e

    plan = parse_plan(data)
    steps = [build_step(s, diagnostics=diagnostics) for s in plan.steps]
    logger.info("Plan loaded", extra={"path": str(path), "steps": len(steps)})
    return steps
