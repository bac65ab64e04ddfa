"""Test configuration and fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

import pytest

from step_orchestrator.steps.atoms import Echo
from step_orchestrator.steps.diagnostics import Stage
from step_orchestrator.steps.errors import GuardEvaluationError


@dataclass
class RecordingSink:
    """Diagnostic sink that keeps every report in memory."""

    reports: list[tuple[Stage, str, str]] = field(default_factory=list)

    def report(self, *, stage: Stage, step: str, error: GuardEvaluationError) -> None:
        self.reports.append((stage, step, str(error)))


@pytest.fixture
def sink() -> RecordingSink:
    """Provide an empty recording diagnostic sink."""
    return RecordingSink()


@pytest.fixture
def atom() -> Echo:
    """Provide the atom used by most step tests."""
    return Echo("hello-world")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove settings-related environment variables."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("ORCHESTRATOR_PLAN_PATH", raising=False)
    return monkeypatch


@pytest.fixture
def root_logging() -> Iterator[logging.Logger]:
    """Restore root logger handlers and level after `configure_logging` calls."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
