"""Pre-execution guards and the flow controls that interpret them.

An initializer answers one yes/no question about the environment before a
step's atom runs. It returns a bool, or raises `GuardEvaluationError` when the
answer cannot be determined. The flow control wrapping it decides what the
answer means for the step.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .errors import GuardEvaluationError


class Initializer(Protocol):
    def initialize(self) -> bool: ...


@dataclass(frozen=True, slots=True)
class SkipIf:
    """Exclude the step when the initializer reports true."""

    initializer: Initializer


@dataclass(frozen=True, slots=True)
class SkipUnless:
    """Exclude the step when the initializer reports false."""

    initializer: Initializer


FlowControl = SkipIf | SkipUnless


def initializer_of(flow_control: FlowControl) -> Initializer:
    """The initializer wrapped by a known flow control."""

    if isinstance(flow_control, (SkipIf, SkipUnless)):
        return flow_control.initializer
    raise TypeError(f"Unsupported initializer flow control: {flow_control!r}")


def excludes(flow_control: FlowControl, outcome: bool) -> bool:
    """Whether `outcome` from the wrapped initializer votes to exclude the step."""

    if isinstance(flow_control, SkipIf):
        return outcome
    if isinstance(flow_control, SkipUnless):
        return not outcome
    raise TypeError(f"Unsupported initializer flow control: {flow_control!r}")


@dataclass(frozen=True, slots=True)
class Echo:
    """Report a fixed value. Useful for dry runs and for pinning a step on or off."""

    value: bool

    def initialize(self) -> bool:
        return self.value


@dataclass(frozen=True, slots=True)
class FileExists:
    path: Path

    def initialize(self) -> bool:
        try:
            return Path(self.path).exists()
        except OSError as e:
            raise GuardEvaluationError(f"Cannot check whether {self.path} exists: {e}", cause=e)


@dataclass(frozen=True, slots=True)
class CommandFound:
    """True when `command` resolves to an executable on PATH."""

    command: str

    def initialize(self) -> bool:
        if not self.command.strip():
            raise GuardEvaluationError("Command name is empty")
        return shutil.which(self.command) is not None


@dataclass(frozen=True, slots=True)
class EnvVarSet:
    """True when the environment variable is set.

    With `value`, the variable must also equal it exactly.
    """

    name: str
    value: str | None = None

    def initialize(self) -> bool:
        if not self.name or "=" in self.name:
            raise GuardEvaluationError(f"Invalid environment variable name: {self.name!r}")
        current = os.environ.get(self.name)
        if current is None:
            return False
        return self.value is None or current == self.value
