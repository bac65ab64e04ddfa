"""Post-execution checks run against a step's atom.

Finalizers are evaluated by `Step.finalizers_succeeded`, separately from the
run decision. When that happens relative to the atom is up to the scheduler.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .atoms import Atom
from .errors import GuardEvaluationError


class Finalizer(Protocol):
    def finalize(self, atom: Atom) -> bool: ...


@dataclass(frozen=True, slots=True)
class Ensure:
    """The finalizer must report true, otherwise the step is considered failed."""

    finalizer: Finalizer


FlowControl = Ensure


def finalizer_of(flow_control: FlowControl) -> Finalizer:
    if isinstance(flow_control, Ensure):
        return flow_control.finalizer
    raise TypeError(f"Unsupported finalizer flow control: {flow_control!r}")


def fails(flow_control: FlowControl, outcome: bool) -> bool:
    """Whether `outcome` from the wrapped finalizer marks the step as failed."""

    if isinstance(flow_control, Ensure):
        return not outcome
    raise TypeError(f"Unsupported finalizer flow control: {flow_control!r}")


@dataclass(frozen=True, slots=True)
class Echo:
    value: bool

    def finalize(self, _atom: Atom) -> bool:
        return self.value


@dataclass(frozen=True, slots=True)
class FileExists:
    """True when the atom left `path` behind."""

    path: Path

    def finalize(self, atom: Atom) -> bool:
        try:
            return Path(self.path).exists()
        except OSError as e:
            raise GuardEvaluationError(
                f"Cannot check whether {self.path} exists after {atom}: {e}", cause=e
            )
