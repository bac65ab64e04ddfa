"""Unit tests for the built-in initializer guards."""

from __future__ import annotations

from pathlib import Path

import pytest

from step_orchestrator.steps import initializers
from step_orchestrator.steps.errors import GuardEvaluationError
from step_orchestrator.steps.initializers import (
    CommandFound,
    EnvVarSet,
    FileExists,
    SkipIf,
    SkipUnless,
    excludes,
)


def test_file_exists(tmp_path: Path) -> None:
    marker = tmp_path / "done"
    guard = FileExists(marker)
    assert guard.initialize() is False

    marker.write_text("", encoding="utf-8")
    assert guard.initialize() is True


def test_file_exists_reports_os_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _denied(self: Path, **_kwargs: object) -> bool:
        raise PermissionError("denied")

    monkeypatch.setattr(Path, "exists", _denied)

    with pytest.raises(GuardEvaluationError) as excinfo:
        FileExists(tmp_path / "secret").initialize()
    assert isinstance(excinfo.value.cause, PermissionError)


def test_command_found(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        initializers.shutil, "which", lambda cmd: "/usr/bin/git" if cmd == "git" else None
    )

    assert CommandFound("git").initialize() is True
    assert CommandFound("definitely-not-installed").initialize() is False


def test_command_found_rejects_empty_name() -> None:
    with pytest.raises(GuardEvaluationError):
        CommandFound("  ").initialize()


def test_env_var_set(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("STEP_ORCHESTRATOR_TEST_VAR", raising=False)
    assert EnvVarSet("STEP_ORCHESTRATOR_TEST_VAR").initialize() is False

    monkeypatch.setenv("STEP_ORCHESTRATOR_TEST_VAR", "yes")
    assert EnvVarSet("STEP_ORCHESTRATOR_TEST_VAR").initialize() is True
    assert EnvVarSet("STEP_ORCHESTRATOR_TEST_VAR", "yes").initialize() is True
    assert EnvVarSet("STEP_ORCHESTRATOR_TEST_VAR", "no").initialize() is False


@pytest.mark.parametrize("name", ["", "A=B"])
def test_env_var_set_rejects_invalid_names(name: str) -> None:
    with pytest.raises(GuardEvaluationError):
        EnvVarSet(name).initialize()


def test_flow_control_interpretation() -> None:
    guard = initializers.Echo(True)
    assert excludes(SkipIf(guard), True) is True
    assert excludes(SkipIf(guard), False) is False
    assert excludes(SkipUnless(guard), True) is False
    assert excludes(SkipUnless(guard), False) is True
